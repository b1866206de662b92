"""Single-consumer background worker with strict FIFO execution.

A ``SerialWorker`` owns one daemon thread draining a ``queue.SimpleQueue``.
``submit`` only enqueues, so it is safe to call from a UI/main thread.
Tasks run one at a time in submission order. A task that raises is
logged and the worker moves on to the next one.

The thread is a daemon so an unclosed worker never holds the process
open. An ``atexit`` hook drains every live worker on interpreter exit,
so queued work is not lost when the caller never waits for it.

Usage:
    worker = SerialWorker(name="stdout-sink")
    worker.submit(print, "first")
    worker.submit(print, "second")  # always printed after "first"
    worker.flush()
    worker.close()
"""

import atexit
import logging
import queue
import threading
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

EXIT_DRAIN_TIMEOUT_SECONDS = 5.0

_STOP = object()

_live_workers: "set[SerialWorker]" = set()
_live_workers_lock = threading.Lock()


class SerialWorker:
    """Serialized execution context backed by one thread.

    Args:
        name: Thread name, also used in log messages.
    """

    def __init__(self, name: str = "beacon-worker") -> None:
        self._name = name
        self._queue: queue.SimpleQueue = queue.SimpleQueue()
        self._lock = threading.Lock()
        self._closed = False
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)
        self._thread.start()
        with _live_workers_lock:
            _live_workers.add(self)

    @property
    def name(self) -> str:
        return self._name

    @property
    def closed(self) -> bool:
        return self._closed

    def submit(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> bool:
        """Enqueue ``fn(*args, **kwargs)``. Never blocks, never raises.

        Returns:
            False if the worker is closed and the task was dropped.
        """
        if self._enqueue((fn, args, kwargs)):
            return True
        logger.debug(f"[SerialWorker:{self._name}] closed, dropping {_describe(fn)}")
        return False

    def flush(self, timeout: Optional[float] = None) -> bool:
        """Block until every task submitted before this call has run.

        Must not be called from the worker's own thread; doing so returns
        False immediately instead of deadlocking.

        Returns:
            True if the queue drained within ``timeout``.
        """
        if threading.current_thread() is self._thread:
            return False
        done = threading.Event()
        if not self._enqueue((done.set, (), {})):
            self._thread.join(timeout)
            return not self._thread.is_alive()
        return done.wait(timeout)

    def close(self, timeout: Optional[float] = None) -> None:
        """Run the tasks already queued, then stop the thread.

        Tasks submitted after ``close`` are dropped. Idempotent.
        """
        with self._lock:
            if not self._closed:
                self._closed = True
                self._queue.put(_STOP)
        with _live_workers_lock:
            _live_workers.discard(self)
        if threading.current_thread() is not self._thread:
            self._thread.join(timeout)

    def _enqueue(self, item: Any) -> bool:
        # Holding the lock keeps every accepted task ahead of the stop marker.
        with self._lock:
            if self._closed:
                return False
            self._queue.put(item)
            return True

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            if item is _STOP:
                return
            fn, args, kwargs = item
            try:
                fn(*args, **kwargs)
            except Exception:
                logger.error(
                    f"[SerialWorker:{self._name}] task {_describe(fn)} failed",
                    exc_info=True,
                )


def _describe(fn: Callable[..., Any]) -> str:
    return getattr(fn, "__qualname__", None) or repr(fn)


@atexit.register
def _drain_live_workers() -> None:
    with _live_workers_lock:
        workers = list(_live_workers)
    for worker in workers:
        worker.close(timeout=EXIT_DRAIN_TIMEOUT_SECONDS)
