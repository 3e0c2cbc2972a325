# flc:header:start
#
#   project      : Fast License Checker
#   file         : test_pool.py
#   file_relpath : tests/engine/test_pool.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""Tests for the bounded, cancellable worker pool."""

from __future__ import annotations

import threading
import time
from collections.abc import Iterator

import pytest

from fast_license_checker.engine.pool import BoundedPool


def test_all_results_are_yielded() -> None:
    """Every item is processed exactly once, in any order."""
    pool: BoundedPool[int, int] = BoundedPool(4, max_in_flight=3)
    results: list[int] = list(pool.map_unordered(lambda x: x * x, range(50)))
    assert sorted(results) == [x * x for x in range(50)]
    assert not pool.interrupted


def test_items_consumed_lazily() -> None:
    """No more than ``max_in_flight`` items are pulled ahead of completion."""
    pulled: list[int] = []
    release = threading.Event()

    def items() -> Iterator[int]:
        for i in range(100):
            pulled.append(i)
            yield i

    def work(x: int) -> int:
        release.wait(5)
        return x

    pool: BoundedPool[int, int] = BoundedPool(2, max_in_flight=2)
    gen: Iterator[int] = pool.map_unordered(work, items())
    thread = threading.Thread(target=lambda: (time.sleep(0.3), release.set()))
    thread.start()
    first: int = next(gen)
    assert first in (0, 1)
    assert len(pulled) <= 4
    assert len(list(gen)) == 99
    thread.join()


def test_cancel_event_stops_submission() -> None:
    """Setting the cancel event stops the run and marks it interrupted."""
    cancel = threading.Event()
    seen: list[int] = []

    def work(x: int) -> int:
        if x == 3:
            cancel.set()
        return x

    pool: BoundedPool[int, int] = BoundedPool(1, cancel=cancel, max_in_flight=1)
    for result in pool.map_unordered(work, range(1000)):
        seen.append(result)
    assert pool.interrupted
    assert len(seen) < 1000
    assert 3 in seen


def test_timeout_interrupts() -> None:
    """A run that outlives its deadline is cut short."""

    def slow(x: int) -> int:
        time.sleep(0.05)
        return x

    pool: BoundedPool[int, int] = BoundedPool(1, timeout=0.2, max_in_flight=1)
    results: list[int] = list(pool.map_unordered(slow, range(200)))
    assert pool.interrupted
    assert len(results) < 200


def test_worker_exceptions_propagate() -> None:
    """Errors raised by the work function surface to the caller."""

    def boom(x: int) -> int:
        raise RuntimeError(f"bad {x}")

    pool: BoundedPool[int, int] = BoundedPool(2)
    with pytest.raises(RuntimeError, match="bad"):
        list(pool.map_unordered(boom, range(3)))
