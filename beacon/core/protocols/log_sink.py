"""LogSink protocol for serialized, non-blocking log writes.

A sink owns exactly one serialized execution context. ``log`` only
enqueues; the actual write happens later, off the caller's thread, in
the order the calls were made.
"""

from typing import Optional, Protocol, runtime_checkable

from beacon.core.events import Severity


@runtime_checkable
class LogSink(Protocol):
    """Ordered, asynchronous destination for formatted log lines."""

    def log(self, severity: Severity, message: str) -> None:
        """Enqueue ``message`` for writing at ``severity``. Never blocks."""
        ...

    def flush(self, timeout: Optional[float] = None) -> bool:
        """Wait until every message enqueued so far has been written.

        Returns:
            False if the timeout elapsed first.
        """
        ...

    def close(self, timeout: Optional[float] = None) -> None:
        """Drain pending writes and stop the sink."""
        ...
