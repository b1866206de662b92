"""Event value types and the severity vocabulary."""

from beacon.core.events.base import (
    Event,
    LoggableEvent,
    Parameters,
    ParameterValue,
    normalize_parameters,
    normalize_value,
)
from beacon.core.events.enums import NOTICE, NativeLogLevel, Severity

__all__ = [
    "NOTICE",
    "Event",
    "LoggableEvent",
    "NativeLogLevel",
    "ParameterValue",
    "Parameters",
    "Severity",
    "normalize_parameters",
    "normalize_value",
]
