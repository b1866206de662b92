"""Fake backend and sink for testing."""

import threading
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from beacon.core.events import LoggableEvent, Parameters, Severity
from beacon.core.protocols import LogBackend, LogSink


@dataclass
class RecordedCall:
    """Single recorded backend call."""

    operation: str
    args: Tuple[Any, ...]


class FakeLogBackend(LogBackend):
    """In-memory test double for the LogBackend protocol.

    Records every call for assertions.

    Usage:
        backend = FakeLogBackend()
        dispatcher = LogDispatcher([backend])
        dispatcher.report_event("Signed In")
        dispatcher.flush()
        assert backend.last_event.event_name == "Signed In"

    Args:
        delay: Seconds to sleep inside every call, to simulate slow I/O.
        fail: If True every call raises ``RuntimeError`` after recording.
    """

    def __init__(self, delay: float = 0.0, fail: bool = False) -> None:
        self.calls: List[RecordedCall] = []
        self.events: List[LoggableEvent] = []
        self.screen_views: List[LoggableEvent] = []
        self.identified_users: List[Tuple[str, Optional[str], Optional[str]]] = []
        self.user_properties: List[Tuple[Dict[str, Any], bool]] = []
        self.deleted_profiles = 0
        self.closed = False
        self._delay = delay
        self._fail = fail
        self._lock = threading.Lock()

    def report_event(self, event: LoggableEvent) -> None:
        self._record("report_event", event)
        self.events.append(event)
        self._finish()

    def report_screen_view(self, event: LoggableEvent) -> None:
        self._record("report_screen_view", event)
        self.screen_views.append(event)
        self._finish()

    def identify_user(self, user_id: str, name: Optional[str], email: Optional[str]) -> None:
        self._record("identify_user", user_id, name, email)
        self.identified_users.append((user_id, name, email))
        self._finish()

    def set_user_properties(self, properties: Parameters, high_priority: bool) -> None:
        self._record("set_user_properties", properties, high_priority)
        self.user_properties.append((dict(properties), high_priority))
        self._finish()

    def delete_user_profile(self) -> None:
        self._record("delete_user_profile")
        self.deleted_profiles += 1
        self._finish()

    def close(self, timeout: Optional[float] = None) -> None:
        self.closed = True

    # Test helpers

    @property
    def last_event(self) -> Optional[LoggableEvent]:
        return self.events[-1] if self.events else None

    @property
    def last_screen_view(self) -> Optional[LoggableEvent]:
        return self.screen_views[-1] if self.screen_views else None

    @property
    def did_delete_user_profile(self) -> bool:
        return self.deleted_profiles > 0

    @property
    def operations(self) -> List[str]:
        return [call.operation for call in self.calls]

    def clear(self) -> None:
        """Reset all recorded calls."""
        self.calls.clear()
        self.events.clear()
        self.screen_views.clear()
        self.identified_users.clear()
        self.user_properties.clear()
        self.deleted_profiles = 0

    def _record(self, operation: str, *args: Any) -> None:
        with self._lock:
            self.calls.append(RecordedCall(operation=operation, args=args))

    def _finish(self) -> None:
        if self._delay:
            time.sleep(self._delay)
        if self._fail:
            raise RuntimeError("fake backend failure")


class FakeLogSink(LogSink):
    """Synchronous in-memory LogSink spy.

    Writes land immediately in ``lines`` as ``(severity, message)``.
    """

    def __init__(self) -> None:
        self.lines: List[Tuple[Severity, str]] = []
        self.flush_calls = 0
        self.closed = False

    def log(self, severity: Severity, message: str) -> None:
        self.lines.append((severity, message))

    def flush(self, timeout: Optional[float] = None) -> bool:
        self.flush_calls += 1
        return True

    def close(self, timeout: Optional[float] = None) -> None:
        self.closed = True

    @property
    def messages(self) -> List[str]:
        return [message for _, message in self.lines]
