"""Severity vocabulary shared by every backend.

``Severity`` is the closed set of levels an event can carry. Each level
knows its console glyph and the native log level the system-log sink
writes it at. No component filters on ordering; backends decide.
"""

import logging
from enum import Enum, IntEnum

NOTICE = 25
logging.addLevelName(NOTICE, "NOTICE")


class NativeLogLevel(str, Enum):
    """Host log levels understood by the system-log sink."""

    INFO = "info"
    DEFAULT = "default"
    ERROR = "error"
    FAULT = "fault"

    @property
    def logging_level(self) -> int:
        """Stdlib ``logging`` level number for this native level."""
        return _LOGGING_LEVELS[self]


_LOGGING_LEVELS = {
    NativeLogLevel.INFO: logging.INFO,
    NativeLogLevel.DEFAULT: NOTICE,
    NativeLogLevel.ERROR: logging.ERROR,
    NativeLogLevel.FAULT: logging.CRITICAL,
}


class Severity(IntEnum):
    """How much an event should worry a developer.

    INFO: informative tasks, such as tracing a function. Not an issue.
    ANALYTIC: all analytic events.
    WARNING: issues that should not happen but do not hurt the user.
    SEVERE: issues that hurt the user experience. Production builds
        should have none.
    """

    INFO = 0
    ANALYTIC = 1
    WARNING = 2
    SEVERE = 3

    @property
    def glyph(self) -> str:
        return _GLYPHS[self]

    @property
    def label(self) -> str:
        return self.name.lower()

    @property
    def native_level(self) -> NativeLogLevel:
        return _NATIVE_LEVELS[self]


_GLYPHS = {
    Severity.INFO: "👋",
    Severity.ANALYTIC: "📈",
    Severity.WARNING: "⚠️",
    Severity.SEVERE: "🚨",
}

_NATIVE_LEVELS = {
    Severity.INFO: NativeLogLevel.INFO,
    Severity.ANALYTIC: NativeLogLevel.DEFAULT,
    Severity.WARNING: NativeLogLevel.FAULT,
    Severity.SEVERE: NativeLogLevel.ERROR,
}
