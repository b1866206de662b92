"""Log sink adapters.

Both strategies share the same ordering and non-blocking guarantees;
``create_log_sink`` picks one from a ``LogSystemType``.
"""

from typing import Optional, TextIO

from beacon.adapters.sinks.base import QueuedLogSink
from beacon.adapters.sinks.stdout import StdoutLogSink
from beacon.adapters.sinks.system import DEFAULT_CATEGORY, DEFAULT_SUBSYSTEM, SystemLogSink
from beacon.core.config.enums import LogSystemType

__all__ = [
    "QueuedLogSink",
    "StdoutLogSink",
    "SystemLogSink",
    "create_log_sink",
]


def create_log_sink(
    log_system: LogSystemType,
    *,
    stream: Optional[TextIO] = None,
    subsystem: str = DEFAULT_SUBSYSTEM,
    category: str = DEFAULT_CATEGORY,
) -> QueuedLogSink:
    """Build a fresh sink for ``log_system``.

    Args:
        log_system: Which strategy to use.
        stream: Output stream for ``STDOUT`` (ignored otherwise).
        subsystem: Logger name prefix for ``SYSTEM`` (ignored otherwise).
        category: Logger name suffix for ``SYSTEM`` (ignored otherwise).
    """
    if log_system == LogSystemType.STDOUT:
        return StdoutLogSink(stream=stream)
    return SystemLogSink(subsystem=subsystem, category=category)
