"""
Background dispatch for log calls.

A bounded, thread-safe queue drained by one daemon worker thread. Callers
never wait on file I/O; they only block if the queue is full. Tasks run in
submission order. Whatever is still queued when the interpreter exits is
drained by an atexit hook before the worker is torn down.
"""

import atexit
import logging
import queue
import threading
import time
from typing import Callable

logger = logging.getLogger("daylogger")

_STOP = object()


class BackgroundDispatcher:
    """Single-consumer work queue with its own worker thread."""

    def __init__(self, maxsize: int = 1000, name: str = "daylogger-writer"):
        self._queue: queue.Queue = queue.Queue(maxsize=maxsize)
        self._name = name
        self._thread = None
        # Guards _closed, _thread and every put, so nothing lands behind _STOP
        self._lock = threading.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _ensure_worker(self) -> None:
        if self._thread is None:
            self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
            self._thread.start()
            atexit.register(self._drain_at_exit)

    def submit(self, fn: Callable, *args, **kwargs) -> bool:
        """Queue `fn(*args, **kwargs)` for the worker thread.

        Returns False, without queueing, once the dispatcher is closed.
        """
        with self._lock:
            if self._closed:
                return False
            self._ensure_worker()
            self._queue.put((fn, args, kwargs))
            return True

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            try:
                if item is _STOP:
                    return
                fn, args, kwargs = item
                try:
                    fn(*args, **kwargs)
                except Exception as e:
                    # A failing task must not take the worker down with it
                    logger.error(f"Background log task failed: {e!r}")
            finally:
                self._queue.task_done()

    def flush(self, timeout: float = None) -> bool:
        """Wait until every queued task has run. False on timeout."""
        if self._thread is None:
            return True
        if timeout is None:
            self._queue.join()
            return True

        deadline = time.monotonic() + timeout
        while self._queue.unfinished_tasks:
            if time.monotonic() >= deadline:
                return False
            time.sleep(0.01)
        return True

    def close(self, timeout: float = 5) -> None:
        """Run what is queued, then stop the worker."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            thread = self._thread
            if thread is not None:
                self._queue.put(_STOP)

        if thread is None:
            return
        atexit.unregister(self._drain_at_exit)
        thread.join(timeout=timeout)
        if thread.is_alive():
            logger.warning(f"{self._name} still busy after {timeout}s; "
                           f"{self._queue.unfinished_tasks} log calls pending")

    def _drain_at_exit(self) -> None:
        pending = self._queue.unfinished_tasks
        if pending:
            logger.debug(f"Draining {pending} queued log calls before exit")
        self.close(timeout=None)
