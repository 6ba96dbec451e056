"""
Scratch-buffer pool for the transform pipeline.

Buffers are lent per request through a context manager and handed back on
exit, even when the body raises. Capacities are rounded up to a power of two,
so a lent buffer may be longer than requested; ``lend`` returns a view of the
requested length.
"""

import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List

import numpy as np

from ..config import POOL_MAX_BUFFERS_PER_BUCKET, POOL_MAX_POOLED_LENGTH
from ..dsp_core.fft import next_pow2
from .logging import get_logger

logger = get_logger(__name__)


class ScratchPool:
    """
    Thread-safe pool of zero-initialized complex128 buffers.

    A buffer is owned by exactly one ``lend`` block at a time; it is cleared
    when lent, so nothing written by a previous request is visible. Buffers
    longer than ``max_pooled_length`` are never kept, so one long transform
    does not pin its scratch memory for the life of the process.
    """

    def __init__(
        self,
        max_per_bucket: int = POOL_MAX_BUFFERS_PER_BUCKET,
        max_pooled_length: int = POOL_MAX_POOLED_LENGTH
    ):
        if max_per_bucket < 0:
            raise ValueError(f"max_per_bucket must be >= 0, got {max_per_bucket}")
        if max_pooled_length < 0:
            raise ValueError(f"max_pooled_length must be >= 0, got {max_pooled_length}")
        self.max_per_bucket = max_per_bucket
        self.max_pooled_length = max_pooled_length
        self._buckets: Dict[int, List[np.ndarray]] = {}
        self._lock = threading.Lock()
        self._outstanding = 0

    @property
    def outstanding(self) -> int:
        """Number of buffers currently lent out."""
        with self._lock:
            return self._outstanding

    def available(self, length: int) -> int:
        """Number of idle buffers that could serve a request of ``length``."""
        with self._lock:
            return len(self._buckets.get(next_pow2(length), []))

    def rent(self, length: int) -> np.ndarray:
        if length < 0:
            raise ValueError(f"Buffer length must be >= 0, got {length}")
        capacity = next_pow2(length)

        with self._lock:
            bucket = self._buckets.get(capacity)
            array = bucket.pop() if bucket else None
            self._outstanding += 1

        if array is None:
            logger.debug(f"Allocating scratch buffer (capacity={capacity})")
            array = np.zeros(capacity, dtype=np.complex128)
        else:
            array.fill(0)
        return array

    def give_back(self, array: np.ndarray) -> None:
        capacity = len(array)
        with self._lock:
            self._outstanding -= 1
            if capacity > self.max_pooled_length:
                logger.debug(f"Releasing oversized scratch buffer (capacity={capacity})")
                return
            bucket = self._buckets.setdefault(capacity, [])
            if len(bucket) < self.max_per_bucket:
                bucket.append(array)

    @contextmanager
    def lend(self, length: int) -> Iterator[np.ndarray]:
        """
        Lend a zeroed buffer of ``length`` elements for the ``with`` block.

        The yielded array is a view into a pooled buffer; do not keep
        references to it past the block.
        """
        array = self.rent(length)
        try:
            yield array[:length]
        finally:
            self.give_back(array)

    def clear(self) -> None:
        """Drop all idle buffers."""
        with self._lock:
            self._buckets.clear()


_shared_pool = ScratchPool()


def shared_pool() -> ScratchPool:
    """Process-wide pool used when a caller does not supply one."""
    return _shared_pool
