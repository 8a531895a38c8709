"""Ring buffer test suite.

This package contains tests for the ring buffer component:
- L1: RingBuffer internal unit tests (indices, queries, wrap-around)
- L2: Insertion policy tests (overwrite and reject)
- L3: Bulk operation tests (insert, remove, peek, discard)
- L4: ByteRingBuffer slice-copy tests
- L5: Storage backends (list, bytearray, numpy, structured records)
- L6: Concurrent single-producer/single-consumer tests
"""
