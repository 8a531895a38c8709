"""Resolve ring buffer configuration from file, environment, and overrides."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from ringbuffer.byte_ring_buffer import ByteRingBuffer
from ringbuffer.config_manager.helpers import parse_size
from ringbuffer.config_manager.ring_buffer_config import RingBufferConfig
from ringbuffer.const import (
    BYTE_DTYPE,
    CONFIG_ENCODING,
    ENV_DROP_LOG_INTERVAL,
    ENV_DTYPE,
    ENV_OVERWRITE,
    ENV_SIZE,
)
from ringbuffer.exceptions import ConfigLoadError
from ringbuffer.ring_buffer import RingBuffer
from ringbuffer.storage import allocate_storage

logger = logging.getLogger(__name__)

_ENV_MAP: dict[str, str] = {
    "size": ENV_SIZE,
    "overwrite": ENV_OVERWRITE,
    "dtype": ENV_DTYPE,
    "drop_log_interval": ENV_DROP_LOG_INTERVAL,
}

YES_CONFIRMATION = {"1", "true", "yes", "y"}


class ConfigManager:
    """Build effective ring buffer configuration from file, env, and overrides."""

    def __init__(self, config_path: Path | None = None) -> None:
        """Initialise ConfigManager.

        Args:
            config_path: Optional YAML file holding the base configuration.
        """
        self.config_path = config_path

    def _load_file_config(self) -> RingBufferConfig:
        """Load the base configuration from the YAML file, if any.

        Returns:
            Parsed configuration, or defaults when no file is configured.

        Raises:
            ConfigLoadError:
                If the file cannot be read or is not a YAML mapping.
        """
        if self.config_path is None:
            return RingBufferConfig()

        try:
            with self.config_path.open("r", encoding=CONFIG_ENCODING) as config_file:
                config_data = yaml.safe_load(config_file) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigLoadError(
                f"Could not load ring buffer config {str(self.config_path)!r}: {exc}"
            ) from exc

        if not isinstance(config_data, dict):
            raise ConfigLoadError(
                f"Ring buffer config {str(self.config_path)!r} must be a mapping"
            )

        raw_size = config_data.get("size")
        if raw_size is not None:
            try:
                config_data["size"] = parse_size(raw_size)
            except ValueError as exc:
                raise ConfigLoadError(str(exc)) from exc

        return RingBufferConfig(**config_data)

    def _read_env_overrides(self) -> dict[str, Any]:
        """Read ring buffer configuration overrides from environment variables.

        Returns:
            A dictionary of configuration field names to override values.
        """
        overrides: dict[str, Any] = {}

        for field_name, env_var_name in _ENV_MAP.items():
            env_value = os.getenv(env_var_name)
            if env_value is None:
                continue

            if field_name == "size":
                try:
                    overrides[field_name] = parse_size(env_value)
                except ValueError:
                    logger.warning("Ignoring invalid %s=%r", env_var_name, env_value)
                    continue
            elif field_name == "drop_log_interval":
                try:
                    overrides[field_name] = int(env_value)
                except ValueError:
                    logger.warning("Ignoring invalid %s=%r", env_var_name, env_value)
                    continue
            elif field_name == "overwrite":
                overrides[field_name] = env_value.lower() in YES_CONFIRMATION
            else:
                overrides[field_name] = env_value

        return overrides

    def resolve_effective_config(
        self, overrides: dict[str, Any] | None = None
    ) -> RingBufferConfig:
        """Resolve the effective ring buffer configuration.

        Later sources win: file, then environment, then ``overrides``.
        Override values of ``None`` are ignored.

        Args:
            overrides: Optional caller-provided configuration overrides.

        Returns:
            The resolved and validated ``RingBufferConfig``.
        """
        merged = self._load_file_config().model_dump()
        merged.update(self._read_env_overrides())

        if overrides is not None:
            merged.update(
                {name: value for name, value in overrides.items() if value is not None}
            )

        # Re-validate so env and override values get the same checks as the file.
        return RingBufferConfig(**merged)


def create_ring_buffer(config: RingBufferConfig | None = None) -> RingBuffer[Any]:
    """Create a ring buffer with freshly allocated storage from ``config``.

    Args:
        config: Configuration to use, defaults to ``RingBufferConfig()``.

    Returns:
        A ``ByteRingBuffer`` when ``config.dtype`` is "uint8", otherwise a
        ``RingBuffer`` over a list or numpy array.
    """
    config = config or RingBufferConfig()

    if config.dtype == BYTE_DTYPE:
        return ByteRingBuffer(
            size=config.size,
            overwrite=config.overwrite,
            drop_log_interval=config.drop_log_interval,
        )

    return RingBuffer(
        allocate_storage(config.size, config.dtype),
        config.size,
        overwrite=config.overwrite,
        drop_log_interval=config.drop_log_interval,
    )
