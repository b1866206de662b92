"""Core protocols for dependency injection.

Concrete implementations live under ``beacon.adapters``.
"""

from beacon.core.protocols.backend import LogBackend
from beacon.core.protocols.log_sink import LogSink

__all__ = [
    "LogBackend",
    "LogSink",
]
