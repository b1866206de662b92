"""Console/system-log backend adapter."""

from beacon.adapters.console.backend import ConsoleBackend

__all__ = ["ConsoleBackend"]
