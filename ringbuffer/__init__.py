"""Fixed-capacity single-producer/single-consumer ring buffers."""

from .byte_ring_buffer import ByteRingBuffer
from .config_manager.config import ConfigManager, create_ring_buffer
from .config_manager.ring_buffer_config import RingBufferConfig
from .exceptions import ConfigLoadError, InvalidStorageError, RingBufferError
from .ring_buffer import RingBuffer
from .storage import allocate_storage

__version__ = "0.1.0"

__all__ = [
    "RingBuffer",
    "ByteRingBuffer",
    "RingBufferConfig",
    "ConfigManager",
    "create_ring_buffer",
    "allocate_storage",
    "RingBufferError",
    "InvalidStorageError",
    "ConfigLoadError",
]
