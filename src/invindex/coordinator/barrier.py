"""
Single-use rendezvous between the map and reduce phases.
"""

import threading
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class PhaseBarrier:
    """Whole-pool barrier that releases once, after every party has arrived"""

    def __init__(self, parties: int, on_release: Optional[Callable[[], None]] = None):
        """
        Args:
            parties: Number of workers that must arrive (mappers + reducers)
            on_release: Called by exactly one party right before everyone is released
        """
        if parties < 1:
            raise ValueError(f"Barrier needs at least one party, got {parties}")
        self.parties = parties
        self._on_release = on_release
        self._arrivals = 0
        self._lock = threading.Lock()
        self._released = threading.Event()
        self._barrier = threading.Barrier(parties, action=self._release)

    def _release(self):
        self._released.set()
        logger.debug(f"Barrier released after {self.parties} arrivals")
        if self._on_release:
            self._on_release()

    def arrive_and_wait(self):
        """
        Block until every party has arrived

        Raises:
            RuntimeError: If more than `parties` arrivals are attempted
            threading.BrokenBarrierError: If the barrier was aborted
        """
        with self._lock:
            if self._arrivals >= self.parties:
                raise RuntimeError("PhaseBarrier is single-use and has already been passed")
            self._arrivals += 1
        self._barrier.wait()

    def abort(self):
        """Break the barrier so waiting and future parties fail instead of hanging."""
        self._barrier.abort()

    @property
    def released(self) -> bool:
        return self._released.is_set()

    @property
    def broken(self) -> bool:
        return self._barrier.broken

    @property
    def arrivals(self) -> int:
        with self._lock:
            return self._arrivals
