"""Exception classes for the ring buffer package."""


class RingBufferError(Exception):
    """Base error for the ring buffer package."""


class InvalidStorageError(RingBufferError):
    """Raised when a ring buffer is initialised with unusable storage or size."""


class ConfigLoadError(RingBufferError):
    """Raised when a ring buffer config file cannot be read or parsed."""
