"""Backing storage helpers for ring buffers.

A ring buffer never owns its storage: callers pass in any mutable sequence
with enough slots (``list``, ``bytearray``, ``numpy.ndarray``...) and keep
it alive for as long as the buffer is in use. ``allocate_storage`` is a
convenience for callers that do not already have one.

Indexing a structured numpy array returns a record that still points into
the array, so a record read from a ring buffer changes if its slot is later
overwritten. Copy the fields out before the producer can reuse the slot.
"""

from __future__ import annotations

import operator
from typing import Any

import numpy as np
from numpy.typing import DTypeLike

from ringbuffer.const import MIN_RING_BUFFER_SIZE
from ringbuffer.exceptions import InvalidStorageError


def check_size(size: int) -> None:
    """Raise InvalidStorageError if ``size`` is too small to hold any element."""
    if size < MIN_RING_BUFFER_SIZE:
        raise InvalidStorageError(
            f"Ring buffer size must be >= {MIN_RING_BUFFER_SIZE}, got {size}"
        )


def allocate_storage(size: int, dtype: DTypeLike | None = None) -> Any:
    """Allocate backing storage with ``size`` slots.

    Args:
        size: Number of slots to allocate.
        dtype: ``None`` for a plain Python list that can hold arbitrary
            objects, otherwise anything ``numpy.dtype`` accepts, including
            structured dtypes for record elements.

    Returns:
        A list of ``None`` or a zero-filled ``numpy.ndarray``.

    Raises:
        InvalidStorageError: If ``size`` is smaller than the minimum size.
    """
    check_size(size)
    if dtype is None:
        return [None] * size
    return np.zeros(size, dtype=np.dtype(dtype))


def validate_storage(storage: Any, size: int | None = None) -> int:
    """Check that ``storage`` can back a ring buffer of ``size`` slots.

    :param storage: caller-owned mutable sequence
    :param size: slot count to use, defaults to ``len(storage)``
    :return: the effective slot count
    :raises InvalidStorageError: if the storage or size is unusable
    """
    if storage is None:
        raise InvalidStorageError("Ring buffer storage must not be None")

    for attr in ("__len__", "__getitem__", "__setitem__"):
        if not hasattr(storage, attr):
            raise InvalidStorageError(
                f"Ring buffer storage of type {type(storage).__name__} "
                f"does not support {attr}"
            )

    if size is None:
        size = len(storage)
    else:
        try:
            size = operator.index(size)
        except TypeError as exc:
            raise InvalidStorageError(
                f"Ring buffer size must be an integer, got {size!r}"
            ) from exc

    check_size(size)
    if len(storage) < size:
        raise InvalidStorageError(
            f"Ring buffer storage has {len(storage)} slots, need {size}"
        )
    return size
