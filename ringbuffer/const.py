"""Constants for the ring buffer package."""

# Total slot count used when no size is configured. One slot is always kept
# free to tell "full" apart from "empty", so 127 elements fit.
DEFAULT_RING_BUFFER_SIZE = 128
MIN_RING_BUFFER_SIZE = 2

DEFAULT_DROP_LOG_INTERVAL = 1000  # log every Nth overwritten element

# dtype that selects the bytearray-backed ByteRingBuffer
BYTE_DTYPE = "uint8"

# Environment overrides for RingBufferConfig
ENV_SIZE = "RINGBUFFER_SIZE"
ENV_OVERWRITE = "RINGBUFFER_OVERWRITE"
ENV_DTYPE = "RINGBUFFER_DTYPE"
ENV_DROP_LOG_INTERVAL = "RINGBUFFER_DROP_LOG_INTERVAL"

CONFIG_ENCODING = "utf-8"
