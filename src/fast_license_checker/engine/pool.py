# flc:header:start
#
#   project      : Fast License Checker
#   file         : pool.py
#   file_relpath : src/fast_license_checker/engine/pool.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""Bounded, cancellable fan-out of per-file work.

`BoundedPool.map_unordered` submits work items to a
`concurrent.futures.ThreadPoolExecutor` while keeping at most
``max_in_flight`` futures outstanding, so that a fast walker cannot queue
an unbounded number of files. Results are yielded to the calling thread in
completion order.

Stopping:
    Submission stops as soon as the cancel event is set or the deadline
    passes. Futures that have not started are cancelled; those already
    running are allowed to finish and their results are still yielded.
    `BoundedPool.interrupted` tells the caller whether the run was cut short.
"""

from __future__ import annotations

import time
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import TYPE_CHECKING, Final, Generic, TypeVar

from fast_license_checker.config.logging import get_logger

if TYPE_CHECKING:
    import threading
    from collections.abc import Callable, Iterable, Iterator

    from fast_license_checker.config.logging import FlcLogger

logger: FlcLogger = get_logger(__name__)

T = TypeVar("T")
R = TypeVar("R")

IN_FLIGHT_PER_JOB: Final[int] = 4
_POLL_SECONDS: Final[float] = 0.1


class BoundedPool(Generic[T, R]):
    """Thread pool with bounded submission, cancellation and a deadline.

    Args:
        jobs (int): Worker threads (at least 1).
        cancel (threading.Event | None): Set from any thread to stop the run.
        timeout (float | None): Seconds after which the run stops.
        max_in_flight (int | None): Outstanding futures; defaults to ``4 * jobs``.
    """

    def __init__(
        self,
        jobs: int,
        *,
        cancel: threading.Event | None = None,
        timeout: float | None = None,
        max_in_flight: int | None = None,
    ) -> None:
        self.jobs: int = max(1, jobs)
        self.cancel: threading.Event | None = cancel
        self.timeout: float | None = timeout
        self.max_in_flight: int = max(1, max_in_flight or IN_FLIGHT_PER_JOB * self.jobs)
        self.interrupted: bool = False
        self._deadline: float | None = None

    def _should_stop(self) -> bool:
        if self.cancel is not None and self.cancel.is_set():
            if not self.interrupted:
                logger.info("Run cancelled")
            self.interrupted = True
        elif self._deadline is not None and time.monotonic() >= self._deadline:
            if not self.interrupted:
                logger.warning("Run stopped: timeout of %.1fs reached", self.timeout)
            self.interrupted = True
        return self.interrupted

    def _wait_timeout(self) -> float:
        if self._deadline is None:
            return _POLL_SECONDS
        return max(0.0, min(_POLL_SECONDS, self._deadline - time.monotonic()))

    def map_unordered(self, fn: Callable[[T], R], items: Iterable[T]) -> Iterator[R]:
        """Apply ``fn`` to every item on the pool, yielding results as they complete.

        Exceptions raised by ``fn`` propagate to the caller when its result
        is collected; per-item failures should be turned into values by ``fn``.

        Args:
            fn (Callable[[T], R]): Work function, called on a worker thread.
            items (Iterable[T]): Work items, consumed lazily on the calling thread.

        Yields:
            R: One result per completed item.
        """
        self.interrupted = False
        self._deadline = time.monotonic() + self.timeout if self.timeout is not None else None
        pending: set[Future[R]] = set()
        executor = ThreadPoolExecutor(max_workers=self.jobs, thread_name_prefix="flc-file")
        try:
            for item in items:
                while len(pending) >= self.max_in_flight and not self._should_stop():
                    done, pending = wait(
                        pending, timeout=self._wait_timeout(), return_when=FIRST_COMPLETED
                    )
                    for future in done:
                        yield future.result()
                if self._should_stop():
                    break
                pending.add(executor.submit(fn, item))

            while pending and not self._should_stop():
                done, pending = wait(
                    pending, timeout=self._wait_timeout(), return_when=FIRST_COMPLETED
                )
                for future in done:
                    yield future.result()
        finally:
            executor.shutdown(wait=True, cancel_futures=True)

        # Items that were already running when the run stopped.
        for future in pending:
            if future.done() and not future.cancelled():
                yield future.result()
