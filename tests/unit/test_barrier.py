"""
Unit tests for PhaseBarrier
"""

import threading
import time

import pytest

from invindex.coordinator.barrier import PhaseBarrier


def _run_parties(barrier, count, before=None):
    """Start `count` threads that arrive at the barrier; returns (threads, errors)"""
    errors = []

    def party(i):
        if before:
            before(i)
        try:
            barrier.arrive_and_wait()
        except Exception as e:
            errors.append(e)

    threads = [threading.Thread(target=party, args=(i,)) for i in range(count)]
    for t in threads:
        t.start()
    return threads, errors


class TestPhaseBarrier:
    """Tests for the single-use rendezvous"""

    def test_rejects_zero_parties(self):
        with pytest.raises(ValueError):
            PhaseBarrier(0)

    def test_releases_when_all_parties_arrive(self):
        barrier = PhaseBarrier(4)
        threads, errors = _run_parties(barrier, 4)
        for t in threads:
            t.join(timeout=5)

        assert not any(t.is_alive() for t in threads)
        assert errors == []
        assert barrier.released
        assert barrier.arrivals == 4

    def test_blocks_until_last_party(self):
        barrier = PhaseBarrier(3)
        threads, errors = _run_parties(barrier, 2)
        time.sleep(0.1)

        assert not barrier.released
        assert all(t.is_alive() for t in threads)

        barrier.arrive_and_wait()
        for t in threads:
            t.join(timeout=5)
        assert barrier.released
        assert errors == []

    def test_writes_before_arrival_visible_after_release(self):
        """Everything a party wrote before arriving is seen by every party after release"""
        num_parties = 6
        barrier = PhaseBarrier(num_parties)
        slots = [None] * num_parties
        seen = []

        def party(i):
            slots[i] = i * 10
            barrier.arrive_and_wait()
            seen.append(list(slots))

        threads = [threading.Thread(target=party, args=(i,)) for i in range(num_parties)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=5)

        assert len(seen) == num_parties
        assert all(snapshot == [i * 10 for i in range(num_parties)] for snapshot in seen)

    def test_on_release_called_once(self):
        calls = []
        barrier = PhaseBarrier(5, on_release=lambda: calls.append(time.time()))
        threads, errors = _run_parties(barrier, 5)
        for t in threads:
            t.join(timeout=5)

        assert len(calls) == 1
        assert errors == []

    def test_single_use(self):
        barrier = PhaseBarrier(1)
        barrier.arrive_and_wait()

        with pytest.raises(RuntimeError):
            barrier.arrive_and_wait()

    def test_abort_releases_waiting_parties(self):
        barrier = PhaseBarrier(3)
        threads, errors = _run_parties(barrier, 2)
        time.sleep(0.1)

        barrier.abort()
        for t in threads:
            t.join(timeout=5)

        assert barrier.broken
        assert not barrier.released
        assert len(errors) == 2
        assert all(isinstance(e, threading.BrokenBarrierError) for e in errors)
