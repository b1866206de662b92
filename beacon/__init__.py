"""beacon: one call site, many analytics and logging backends.

Usage:
    from beacon import ConsoleBackend, LogDispatcher, Severity

    dispatcher = LogDispatcher([ConsoleBackend()])
    dispatcher.report_event("Signed In", {"method": "email"})
    dispatcher.report_event("Cache Miss", severity=Severity.INFO)
"""

from beacon.adapters.console import ConsoleBackend
from beacon.adapters.posthog import PostHogBackend
from beacon.adapters.sinks import StdoutLogSink, SystemLogSink, create_log_sink
from beacon.core.config import LogSystemType, Settings
from beacon.core.dispatcher import LogDispatcher
from beacon.core.events import Event, LoggableEvent, NativeLogLevel, Severity
from beacon.core.factory import create_dispatcher
from beacon.core.protocols import LogBackend, LogSink

__all__ = [
    "ConsoleBackend",
    "Event",
    "LogBackend",
    "LogDispatcher",
    "LogSink",
    "LogSystemType",
    "LoggableEvent",
    "NativeLogLevel",
    "PostHogBackend",
    "Settings",
    "Severity",
    "StdoutLogSink",
    "SystemLogSink",
    "create_dispatcher",
    "create_log_sink",
]
