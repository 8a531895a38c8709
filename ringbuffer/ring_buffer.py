"""Fixed-capacity ring buffer over caller-owned storage."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, Generic, TypeVar

from ringbuffer.const import DEFAULT_DROP_LOG_INTERVAL
from ringbuffer.sampled_logger import make_sampled_logger
from ringbuffer.storage import validate_storage

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RingBuffer(Generic[T]):
    """Fixed-capacity ring buffer with overwrite and reject insertion policies.

    - Single writer (insert_* methods) publishes ``head``.
    - Single reader (remove_*, peek*, discard_* methods) publishes ``tail``.

    One slot is always left free so that ``head == tail`` means empty, which
    makes the usable capacity ``size - 1``. The storage is borrowed: the
    buffer reads and writes its slots but never resizes or replaces it.

    Slots are written before ``head`` moves and read before ``tail`` moves,
    and each index is a single attribute store made by only one side, so one
    producer thread and one consumer thread can share a buffer without a
    lock. ``insert_overwrite`` on a full buffer also moves ``tail`` and must
    not race a consumer; use ``insert_reject`` for concurrent hand-off.

    The ordering above relies on the GIL: CPython then makes each attribute
    and slot store visible to other threads in program order. Free-threaded
    builds (PEP 703) give no such guarantee and are not supported.
    """

    def __init__(
        self,
        storage: Any,
        size: int | None = None,
        *,
        overwrite: bool = True,
        drop_log_interval: int = DEFAULT_DROP_LOG_INTERVAL,
    ) -> None:
        """Initialize the ring buffer.

        Args:
            storage: Mutable sequence with at least ``size`` slots.
            size: Total slot count, defaults to ``len(storage)``.
            overwrite: Policy used by ``insert``; True drops the oldest
                element when full, False rejects the new one.
            drop_log_interval: Log every Nth element dropped by overwrite.
        """
        self.overwrite = overwrite
        self.drop_log_interval = drop_log_interval
        self.init(storage, size)

    def init(self, storage: Any, size: int | None = None) -> None:
        """Bind ``storage`` and empty the buffer.

        Can be called again at any time to reset the buffer in place or to
        rebind it to different storage.

        :param storage: mutable sequence with at least ``size`` slots
        :param size: total slot count, defaults to ``len(storage)``
        :raises InvalidStorageError: if the storage or size is unusable;
            the buffer is left untouched in that case
        """
        size = validate_storage(storage, size)

        self.storage = storage
        self.size = size
        self.head = 0
        self.tail = 0
        self.dropped = 0
        self._log_drop = make_sampled_logger(
            "Ring buffer full, overwrote oldest element (%d dropped, size=%d)",
            log_interval=self.drop_log_interval,
            target_logger=logger,
            level=logging.WARNING,
        )
        logger.debug(
            "Initialised %s with size=%d (capacity=%d)",
            type(self).__name__,
            size,
            size - 1,
        )

    def reset(self) -> None:
        """Empty the buffer, keeping the current storage."""
        self.init(self.storage, self.size)

    @property
    def capacity(self) -> int:
        """Return the number of elements the buffer can hold at once."""
        return self.size - 1

    def is_empty(self) -> bool:
        """Return True if there is nothing to read."""
        return self.head == self.tail

    def is_full(self) -> bool:
        """Return True if the next insert would overwrite or be rejected."""
        return (self.head + 1) % self.size == self.tail

    def occupancy(self) -> int:
        """Return number of elements available to read."""
        return (self.head - self.tail) % self.size

    def available(self) -> int:
        """Return number of elements that can be inserted without dropping."""
        return (self.size - 1) - self.occupancy()

    def insert_overwrite(self, value: T) -> None:
        """Insert ``value``, dropping the oldest element if the buffer is full."""
        head = self.head
        next_head = (head + 1) % self.size
        # The slot at head is never live, so it can be written before dropping.
        self.storage[head] = value

        if next_head == self.tail:
            self.tail = (self.tail + 1) % self.size
            self.dropped += 1
            self._log_drop(self.size)

        self.head = next_head

    def insert_reject(self, value: T) -> bool:
        """Insert ``value`` only if there is room.

        :return: True if the value was inserted, False if the buffer was full
        """
        head = self.head
        next_head = (head + 1) % self.size
        if next_head == self.tail:
            return False

        self.storage[head] = value
        self.head = next_head
        return True

    def insert(self, value: T) -> bool:
        """Insert ``value`` using the buffer's configured policy.

        :return: False only when the reject policy refused the value
        """
        if self.overwrite:
            self.insert_overwrite(value)
            return True
        return self.insert_reject(value)

    def insert_bulk_overwrite(self, values: Iterable[T]) -> None:
        """Insert every element of ``values`` in order with overwrite."""
        for value in values:
            self.insert_overwrite(value)

    def remove_oldest(self) -> T | None:
        """Remove and return the oldest element.

        Returns None if the buffer is empty.
        """
        tail = self.tail
        if tail == self.head:
            return None

        value = self.storage[tail]
        self.tail = (tail + 1) % self.size
        return value

    def remove_oldest_bulk(self, max_count: int) -> list[T]:
        """Remove up to ``max_count`` elements, oldest first.

        Never waits for more data; returns an empty list if the buffer is
        empty.
        """
        removed: list[T] = []
        while len(removed) < max_count and not self.is_empty():
            removed.append(self.remove_oldest())  # type: ignore[arg-type]
        return removed

    def peek(self, index: int = 0) -> T | None:
        """Return the element ``index`` places after the oldest, without removing.

        Returns None if there is no element at ``index``.
        """
        if index < 0 or index >= self.occupancy():
            return None
        return self.storage[(self.tail + index) % self.size]

    def peek_bulk(self, max_count: int, start_index: int = 0) -> list[T]:
        """Return up to ``max_count`` elements starting at ``start_index``.

        Stops at the newest element; never wraps back to the oldest.
        """
        peeked: list[T] = []
        index = start_index
        while len(peeked) < max_count:
            if index < 0 or index >= self.occupancy():
                break
            peeked.append(self.storage[(self.tail + index) % self.size])
            index += 1
        return peeked

    def discard_oldest(self) -> bool:
        """Drop the oldest element without reading it.

        :return: False if the buffer was empty
        """
        tail = self.tail
        if tail == self.head:
            return False

        self.tail = (tail + 1) % self.size
        return True

    def discard_oldest_bulk(self, count: int) -> int:
        """Drop up to ``count`` of the oldest elements.

        :return: the number of elements actually dropped
        """
        discarded = 0
        while discarded < count and self.discard_oldest():
            discarded += 1
        return discarded

    def __len__(self) -> int:
        return self.occupancy()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(size={self.size}, head={self.head}, "
            f"tail={self.tail}, occupancy={self.occupancy()})"
        )
