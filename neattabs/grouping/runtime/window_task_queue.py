from collections import deque
from concurrent.futures import Future, ThreadPoolExecutor
from threading import Lock
from typing import Callable, Deque, Dict, Set, Tuple, TypeVar

T = TypeVar("T")


class WindowTaskQueue:
    """
    Serializes tasks per window.

    Tasks submitted for the same window run one at a time, in submission order.
    Tasks for different windows never wait on each other. The thread that finds
    a window idle runs its own task inline; anything queued behind it is handed
    to the queue's worker pool, so submit() never waits on other callers' tasks.
    A window's entry is removed as soon as its queue drains.
    """

    def __init__(self, max_workers: int = 4):
        self._lock = Lock()
        self._pending: Dict[int, Deque[Tuple[Callable[[], object], Future]]] = {}
        self._draining: Set[int] = set()
        self._closed = False
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="WindowQueue")

    def submit(self, window_id: int, task: Callable[[], T]) -> "Future[T]":
        future: Future = Future()
        with self._lock:
            if self._closed:
                raise RuntimeError("WindowTaskQueue is shut down")
            self._pending.setdefault(window_id, deque()).append((task, future))
            if window_id in self._draining:
                return future
            self._draining.add(window_id)
        try:
            self._run_next(window_id)
        finally:
            self._hand_off(window_id)
        return future

    def cancel_window(self, window_id: int) -> int:
        """Cancel tasks of a window that have not started. Returns how many were cancelled."""
        with self._lock:
            pending = self._pending.get(window_id)
            if not pending:
                return 0
            cancelled = 0
            while pending:
                _, future = pending.popleft()
                if future.cancel():
                    cancelled += 1
            if window_id not in self._draining:
                self._pending.pop(window_id, None)
            return cancelled

    def pending_windows(self) -> int:
        with self._lock:
            return len(self._pending)

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting tasks; tasks not yet handed to a worker are cancelled."""
        with self._lock:
            self._closed = True
            for window_id in list(self._pending):
                if window_id not in self._draining:
                    for _, future in self._pending.pop(window_id):
                        future.cancel()
        self._executor.shutdown(wait=wait)

    def _run_next(self, window_id: int) -> None:
        with self._lock:
            pending = self._pending.get(window_id)
            if not pending:
                return
            task, future = pending.popleft()
        if not future.set_running_or_notify_cancel():
            return
        try:
            result = task()
        except Exception as exc:
            future.set_exception(exc)
        else:
            future.set_result(result)

    def _hand_off(self, window_id: int) -> None:
        # The draining flag travels with the work, so order is kept across threads
        with self._lock:
            pending = self._pending.get(window_id)
            if not pending:
                self._pending.pop(window_id, None)
                self._draining.discard(window_id)
                return
            if self._closed:
                for _, future in self._pending.pop(window_id):
                    future.cancel()
                self._draining.discard(window_id)
                return
            self._executor.submit(self._drain, window_id)

    def _drain(self, window_id: int) -> None:
        try:
            self._run_next(window_id)
        finally:
            self._hand_off(window_id)
