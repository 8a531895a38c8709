"""Level 5: Storage Backend Tests.

The ring buffer borrows whatever mutable sequence it is given. These tests
cover the storage helpers and the common backends:
- Python lists
- numpy arrays of scalars
- numpy structured arrays used as record elements
"""

from __future__ import annotations

import numpy as np
import pytest

from ringbuffer import (
    InvalidStorageError,
    RingBuffer,
    RingBufferError,
    allocate_storage,
)
from ringbuffer.storage import validate_storage

FOO_DTYPE = np.dtype(
    [
        ("idx", np.uint64),
        ("bar", np.float64),
        ("foo", np.int64),
        ("array", np.uint64, (42,)),
    ]
)
FOO_RING_SIZE = 1024
FOO_ITEMS = 100


def _foo(idx: int) -> tuple[int, float, int, list[int]]:
    return idx, idx * 0.5, -idx, [idx] * 42


@pytest.fixture
def foo_ring() -> RingBuffer[np.void]:
    """A ring of Foo records holding idx 0..99."""
    ring: RingBuffer[np.void] = RingBuffer(allocate_storage(FOO_RING_SIZE, FOO_DTYPE))
    for idx in range(FOO_ITEMS):
        ring.insert_overwrite(_foo(idx))  # type: ignore[arg-type]
    return ring


# =============================================================================
# L5-001 to L5-006: Storage Helpers
# =============================================================================


def test_allocate_list_storage() -> None:
    storage = allocate_storage(8)

    assert storage == [None] * 8


def test_allocate_numpy_storage() -> None:
    storage = allocate_storage(16, "float32")

    assert isinstance(storage, np.ndarray)
    assert storage.dtype == np.float32
    assert storage.shape == (16,)
    assert not storage.any()


@pytest.mark.parametrize("size", [0, 1])
def test_allocate_rejects_small_sizes(size: int) -> None:
    with pytest.raises(InvalidStorageError):
        allocate_storage(size)


def test_validate_storage_returns_effective_size() -> None:
    assert validate_storage([None] * 8) == 8
    assert validate_storage([None] * 8, 5) == 5
    assert validate_storage(np.zeros(8), np.int64(6)) == 6


def test_read_only_numpy_array_fails_on_insert() -> None:
    """Read-only arrays pass the duck-type check but refuse the write."""
    storage = np.zeros(8)
    storage.setflags(write=False)
    ring = RingBuffer(storage)

    with pytest.raises(ValueError):
        ring.insert_overwrite(1.0)

    assert ring.is_empty()


def test_invalid_storage_error_is_ring_buffer_error() -> None:
    with pytest.raises(RingBufferError):
        RingBuffer([None], 1)


# =============================================================================
# L5-007 to L5-010: numpy Scalar Arrays
# =============================================================================


def test_numpy_overwrite_scenario() -> None:
    """The size-128 overwrite scenario holds for numpy-backed storage too."""
    storage = np.zeros(128, dtype=np.int64)
    ring = RingBuffer(storage)

    for value in range(1000):
        ring.insert_overwrite(value)

    assert ring.occupancy() == 127
    assert ring.is_full()
    assert [int(v) for v in ring.remove_oldest_bulk(200)] == list(range(873, 1000))


def test_numpy_values_are_copied_out() -> None:
    """Scalar elements read from an array do not change when the slot is reused."""
    ring = RingBuffer(np.zeros(3, dtype=np.float64))
    ring.insert_overwrite(1.5)
    value = ring.remove_oldest()

    ring.insert_bulk_overwrite([7.0, 8.0, 9.0])

    assert value == 1.5


def test_numpy_storage_is_written_in_place() -> None:
    storage = np.zeros(4, dtype=np.uint8)
    ring = RingBuffer(storage)
    ring.insert_bulk_overwrite([1, 2, 3])

    assert storage.tolist() == [1, 2, 3, 0]


def test_numpy_peek_bulk() -> None:
    ring = RingBuffer(np.zeros(10, dtype=np.int32))
    ring.insert_bulk_overwrite(range(12))

    assert [int(v) for v in ring.peek_bulk(4, 2)] == [5, 6, 7, 8]


# =============================================================================
# L5-011 to L5-017: Structured Records
# =============================================================================


def test_foo_insert_100_items(foo_ring: RingBuffer[np.void]) -> None:
    assert foo_ring.occupancy() == FOO_ITEMS


def test_foo_peek_third(foo_ring: RingBuffer[np.void]) -> None:
    item = foo_ring.peek(3)

    assert item is not None
    assert item["idx"] == 3
    assert item["bar"] == 1.5
    assert item["foo"] == -3
    assert (item["array"] == 3).all()
    assert foo_ring.occupancy() == FOO_ITEMS


def test_foo_peek_out_of_range(foo_ring: RingBuffer[np.void]) -> None:
    assert foo_ring.peek(FOO_ITEMS) is None
    assert foo_ring.occupancy() == FOO_ITEMS


def test_foo_peek_bulk(foo_ring: RingBuffer[np.void]) -> None:
    items = foo_ring.peek_bulk(FOO_ITEMS // 2, 3)

    assert [int(item["idx"]) for item in items] == list(range(3, 3 + FOO_ITEMS // 2))


def test_foo_dequeue_all_items(foo_ring: RingBuffer[np.void]) -> None:
    idx = 0
    while (item := foo_ring.remove_oldest()) is not None:
        assert item["idx"] == idx
        idx += 1
        assert foo_ring.occupancy() == FOO_ITEMS - idx

    assert idx == FOO_ITEMS
    assert foo_ring.is_empty()
    assert not foo_ring.is_full()


def test_foo_pop(foo_ring: RingBuffer[np.void]) -> None:
    assert foo_ring.discard_oldest() is True
    assert foo_ring.occupancy() == FOO_ITEMS - 1
    assert foo_ring.discard_oldest_bulk(42) == 42
    assert foo_ring.occupancy() == FOO_ITEMS - 43


def test_foo_overfill() -> None:
    ring: RingBuffer[np.void] = RingBuffer(allocate_storage(FOO_RING_SIZE, FOO_DTYPE))

    for idx in range(FOO_RING_SIZE * 3):
        ring.insert_overwrite(_foo(idx))  # type: ignore[arg-type]

    assert ring.occupancy() == FOO_RING_SIZE - 1
    assert ring.is_full()

    expected_idx = 2049
    while (item := ring.remove_oldest()) is not None:
        assert item["idx"] == expected_idx
        expected_idx += 1
    assert expected_idx == FOO_RING_SIZE * 3
