"""Console/system-log backend.

Formats each call as human-readable text and hands it to a ``LogSink``.
Formatting is cheap and happens on the caller's thread; the write itself
happens on the sink's worker.
"""

import logging
from typing import Optional

from beacon.adapters.console.formatting import (
    format_delete_user_profile,
    format_event,
    format_identify_user,
    format_user_properties,
)
from beacon.adapters.sinks import create_log_sink
from beacon.adapters.sinks.system import DEFAULT_CATEGORY, DEFAULT_SUBSYSTEM
from beacon.core.config import LogSystemType, Settings
from beacon.core.events import LoggableEvent, Parameters, Severity
from beacon.core.protocols import LogBackend, LogSink

logger = logging.getLogger(__name__)


class ConsoleBackend(LogBackend):
    """Prints every call through a serialized log sink.

    Args:
        sink: Where lines are written. When omitted, the backend builds
            (and later closes) its own sink for ``log_system``.
        print_parameters: Print event parameters under the event line.
        print_user_details: Print name and email on identify. ``None``
            follows ``print_parameters``.
        print_user_properties: Print each user property. ``None`` follows
            ``print_parameters``.
        print_priority: Annotate property updates with the priority flag.
        log_system: Sink strategy used when ``sink`` is omitted.
        subsystem: System-log subsystem for a sink the backend builds.
        category: System-log category for a sink the backend builds.
    """

    def __init__(
        self,
        sink: Optional[LogSink] = None,
        *,
        print_parameters: bool = True,
        print_user_details: Optional[bool] = None,
        print_user_properties: Optional[bool] = None,
        print_priority: bool = True,
        log_system: LogSystemType = LogSystemType.SYSTEM,
        subsystem: str = DEFAULT_SUBSYSTEM,
        category: str = DEFAULT_CATEGORY,
    ) -> None:
        self._owns_sink = sink is None
        if sink is None:
            sink = create_log_sink(log_system, subsystem=subsystem, category=category)
        self._sink = sink
        self.print_parameters = print_parameters
        self.print_user_details = (
            print_parameters if print_user_details is None else print_user_details
        )
        self.print_user_properties = (
            print_parameters if print_user_properties is None else print_user_properties
        )
        self.print_priority = print_priority

    @classmethod
    def from_settings(cls, settings: Settings) -> "ConsoleBackend":
        """Build a console backend (and its sink) from settings."""
        return cls(
            print_parameters=settings.CONSOLE_PRINT_PARAMETERS,
            print_user_details=settings.CONSOLE_PRINT_USER_DETAILS,
            print_user_properties=settings.CONSOLE_PRINT_USER_PROPERTIES,
            log_system=settings.CONSOLE_LOG_SYSTEM,
            subsystem=settings.SYSTEM_LOG_SUBSYSTEM,
            category=settings.SYSTEM_LOG_CATEGORY,
        )

    @property
    def sink(self) -> LogSink:
        return self._sink

    # ------------------------------------------------------------------
    # LogBackend
    # ------------------------------------------------------------------

    def report_event(self, event: LoggableEvent) -> None:
        self._log(event.severity, format_event(event, self.print_parameters))

    def report_screen_view(self, event: LoggableEvent) -> None:
        self.report_event(event)

    def identify_user(self, user_id: str, name: Optional[str], email: Optional[str]) -> None:
        self._log(
            Severity.INFO,
            format_identify_user(user_id, name, email, self.print_user_details),
        )

    def set_user_properties(self, properties: Parameters, high_priority: bool) -> None:
        self._log(
            Severity.INFO,
            format_user_properties(
                properties,
                high_priority,
                print_properties=self.print_user_properties,
                print_priority=self.print_priority,
            ),
        )

    def delete_user_profile(self) -> None:
        self._log(Severity.INFO, format_delete_user_profile())

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def flush(self, timeout: Optional[float] = None) -> bool:
        return self._sink.flush(timeout)

    def close(self, timeout: Optional[float] = None) -> None:
        """Close the sink if this backend built it; otherwise just flush."""
        if self._owns_sink:
            self._sink.close(timeout)
        else:
            self._sink.flush(timeout)

    def _log(self, severity: Severity, message: str) -> None:
        try:
            self._sink.log(severity, message)
        except Exception as e:
            logger.error(f"[ConsoleBackend] sink rejected log line: {e}")
