"""Pydantic model for ring buffer configuration."""

import numpy as np
from pydantic import BaseModel, Field, field_validator

from ringbuffer.const import (
    DEFAULT_DROP_LOG_INTERVAL,
    DEFAULT_RING_BUFFER_SIZE,
    MIN_RING_BUFFER_SIZE,
)


class RingBufferConfig(BaseModel):
    """Configuration options for a ring buffer instance.

    Attributes:
        size: total slot count; one slot stays free, so size - 1 elements fit.
        overwrite: when true, inserting into a full buffer drops the oldest
            element; when false, the insert is rejected.
        dtype: numpy dtype name for array-backed storage, or None for a plain
            list that can hold any object. "uint8" selects a ByteRingBuffer.
        drop_log_interval: log every Nth element dropped by overwrite.
    """

    size: int = Field(default=DEFAULT_RING_BUFFER_SIZE, ge=MIN_RING_BUFFER_SIZE)
    overwrite: bool = True
    dtype: str | None = None
    drop_log_interval: int = Field(default=DEFAULT_DROP_LOG_INTERVAL, ge=1)

    @field_validator("dtype")
    @classmethod
    def _check_dtype(cls, value: str | None) -> str | None:
        if value is None:
            return value
        try:
            np.dtype(value)
        except (TypeError, ValueError, SyntaxError) as exc:
            raise ValueError(f"Unknown dtype {value!r}") from exc
        return value
