"""Sink that writes through the host's ``logging`` hierarchy.

Each severity is written at its native level:

    info     -> INFO
    analytic -> NOTICE (25)
    warning  -> CRITICAL ("fault")
    severe   -> ERROR

Handlers, formatting and routing (syslog, journald, files) are left to
the host application's logging configuration.
"""

import logging
from typing import Optional

from beacon.adapters.sinks.base import QueuedLogSink
from beacon.core.events import Severity

DEFAULT_SUBSYSTEM = "beacon"
DEFAULT_CATEGORY = "ConsoleLogger"


class SystemLogSink(QueuedLogSink):
    """Writes each message to a ``logging.Logger`` at the native level.

    Args:
        target: Logger to write to. Defaults to the logger named
            ``<subsystem>.<category>``.
        subsystem: Logger name prefix, usually the application name.
        category: Logger name suffix.
    """

    def __init__(
        self,
        target: Optional[logging.Logger] = None,
        subsystem: str = DEFAULT_SUBSYSTEM,
        category: str = DEFAULT_CATEGORY,
    ) -> None:
        super().__init__(name="beacon-system-sink")
        self._target = target or logging.getLogger(f"{subsystem}.{category}")

    @property
    def target(self) -> logging.Logger:
        return self._target

    def _write(self, severity: Severity, message: str) -> None:
        self._target.log(severity.native_level.logging_level, message)
