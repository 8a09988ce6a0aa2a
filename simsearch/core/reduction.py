"""
Fork-join execution of independent reductions.

A ReductionGroup runs a fixed batch of zero-argument callables on a bounded
thread pool and joins them before returning. Every task must be a pure
reduction over read-only input: tasks share no mutable state and their
results do not depend on the order in which they run, so running the same
batch inline gives the same answer.
"""

import threading
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import Callable, Optional, Sequence, Tuple

from .config import get_max_workers


class ReductionGroup:
    """Bounded fork-join pool for independent, commutative reductions."""

    def __init__(self, max_workers: Optional[int] = None):
        workers = max_workers if max_workers is not None else get_max_workers()
        if workers < 1:
            raise ValueError(f"max_workers must be >= 1: {workers}")
        self.max_workers = workers
        self._executor: Optional[ThreadPoolExecutor] = None
        self._lock = threading.Lock()
        self._closed = False

    def _get_executor(self) -> ThreadPoolExecutor:
        if self._executor is None:
            with self._lock:
                if self._closed:
                    raise RuntimeError("ReductionGroup has been shut down")
                if self._executor is None:
                    self._executor = ThreadPoolExecutor(
                        max_workers=self.max_workers,
                        thread_name_prefix="simsearch-reduce",
                    )
        return self._executor

    def run(self, tasks: Sequence[Callable[[], float]]) -> Tuple:
        """
        Run every task and return their results in submission order.

        The call blocks until all tasks finish. If any task raises, the
        remaining pending tasks are cancelled and the first failure is
        re-raised unchanged; no partial result is returned.
        """
        if not tasks:
            return ()

        executor = self._get_executor()
        futures = [executor.submit(task) for task in tasks]

        done, pending = wait(futures, return_when=FIRST_EXCEPTION)
        for future in futures:
            if future in done and future.exception() is not None:
                for other in pending:
                    other.cancel()
                raise future.exception()

        return tuple(future.result() for future in futures)

    def shutdown(self, wait_for_tasks: bool = True) -> None:
        with self._lock:
            self._closed = True
            if self._executor is not None:
                self._executor.shutdown(wait=wait_for_tasks)
                self._executor = None

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.shutdown()


_default_group: Optional[ReductionGroup] = None
_default_lock = threading.Lock()


def get_default_group() -> ReductionGroup:
    """Process-wide reduction group, created on first use."""
    global _default_group
    if _default_group is None or _default_group.closed:
        with _default_lock:
            if _default_group is None or _default_group.closed:
                _default_group = ReductionGroup()
    return _default_group


def shutdown_default_group() -> None:
    """Release the worker threads of the process-wide group."""
    global _default_group
    with _default_lock:
        if _default_group is not None:
            _default_group.shutdown()
            _default_group = None
