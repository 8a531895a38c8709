"""Byte-oriented ring buffer with contiguous bulk copies."""

from __future__ import annotations

from collections.abc import Iterable

from ringbuffer.const import DEFAULT_DROP_LOG_INTERVAL, DEFAULT_RING_BUFFER_SIZE
from ringbuffer.exceptions import InvalidStorageError
from ringbuffer.ring_buffer import RingBuffer
from ringbuffer.storage import check_size


class ByteRingBuffer(RingBuffer[int]):
    """Ring buffer of byte values backed by a ``bytearray``.

    Single-element operations behave exactly like ``RingBuffer``. Bulk
    operations take and return ``bytes`` and move data with at most two
    slice copies (one when the range does not cross the end of storage)
    instead of one Python call per byte.
    """

    def __init__(
        self,
        storage: bytearray | memoryview | None = None,
        size: int | None = None,
        *,
        overwrite: bool = True,
        drop_log_interval: int = DEFAULT_DROP_LOG_INTERVAL,
    ) -> None:
        """Initialize the byte ring buffer.

        A fresh ``bytearray`` of ``size`` (default ``DEFAULT_RING_BUFFER_SIZE``)
        slots is allocated when no storage is given.
        """
        if storage is None:
            if size is None:
                size = DEFAULT_RING_BUFFER_SIZE
            check_size(size)
            storage = bytearray(size)
        super().__init__(
            storage,
            size,
            overwrite=overwrite,
            drop_log_interval=drop_log_interval,
        )

    def init(self, storage: bytearray | memoryview, size: int | None = None) -> None:
        """Bind a writable byte buffer and empty the ring buffer.

        :raises InvalidStorageError: if storage is not a writable byte buffer
        """
        if not isinstance(storage, (bytearray, memoryview)):
            raise InvalidStorageError(
                f"ByteRingBuffer needs a bytearray or memoryview, "
                f"got {type(storage).__name__}"
            )
        if isinstance(storage, memoryview) and (
            storage.readonly or storage.format != "B"
        ):
            raise InvalidStorageError(
                "ByteRingBuffer needs a writable memoryview of unsigned bytes"
            )
        super().init(storage, size)

    def insert_bulk_overwrite(self, values: bytes | Iterable[int]) -> None:
        """Insert every byte of ``values`` in order with overwrite.

        Ends in the same state as inserting the bytes one at a time: only
        the newest ``capacity`` bytes can survive, and every byte pushed out
        is counted in ``dropped``.

        :raises TypeError: if ``values`` is a single int rather than an
            iterable of byte values
        """
        # bytes(n) would allocate n zero bytes instead of failing.
        if isinstance(values, int):
            raise TypeError(
                f"expected bytes or an iterable of ints, got {type(values).__name__}"
            )
        data = bytes(values)
        data_len = len(data)
        if data_len == 0:
            return

        capacity = self.size - 1
        new_head = (self.head + data_len) % self.size
        overflow = self.occupancy() + data_len - capacity

        if overflow > 0:
            self.tail = (new_head - capacity) % self.size
            self.dropped += overflow
            self._log_drop(self.size, count=overflow)

        keep = min(data_len, capacity)
        self._write_slots((new_head - keep) % self.size, data[data_len - keep :])
        self.head = new_head

    def remove_oldest_bulk(self, max_count: int) -> bytes:  # type: ignore[override]
        """Remove up to ``max_count`` bytes, oldest first.

        Returns ``b""`` if the buffer is empty.
        """
        count = min(max_count, self.occupancy())
        if count <= 0:
            return b""

        tail = self.tail
        data = self._read_slots(tail, count)
        self.tail = (tail + count) % self.size
        return data

    def peek_bulk(  # type: ignore[override]
        self, max_count: int, start_index: int = 0
    ) -> bytes:
        """Return up to ``max_count`` bytes starting at ``start_index``.

        Stops at the newest byte; never wraps back to the oldest.
        """
        if start_index < 0:
            return b""

        count = min(max_count, self.occupancy() - start_index)
        if count <= 0:
            return b""
        return self._read_slots((self.tail + start_index) % self.size, count)

    def discard_oldest_bulk(self, count: int) -> int:
        """Drop up to ``count`` of the oldest bytes.

        :return: the number of bytes actually dropped
        """
        count = min(count, self.occupancy())
        if count <= 0:
            return 0

        self.tail = (self.tail + count) % self.size
        return count

    def _write_slots(self, start: int, data: bytes) -> None:
        """Copy ``data`` into consecutive slots from ``start``, wrapping at size."""
        data_len = len(data)
        end_space = self.size - start
        if data_len <= end_space:
            self.storage[start : start + data_len] = data
        else:
            first_part = end_space
            self.storage[start : self.size] = data[:first_part]
            self.storage[: data_len - first_part] = data[first_part:]

    def _read_slots(self, start: int, length: int) -> bytes:
        """Copy ``length`` consecutive slots from ``start``, wrapping at size."""
        end_space = self.size - start
        if length <= end_space:
            return bytes(self.storage[start : start + length])

        # Wrap-around read
        first_part = end_space
        return bytes(self.storage[start : self.size]) + bytes(
            self.storage[: length - first_part]
        )
