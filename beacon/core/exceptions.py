"""Shared exceptions module.

Reporting paths never raise; these are for startup wiring only.
"""

from typing import Optional


class BeaconException(Exception):
    """Base exception for beacon."""

    pass


class ConfigurationError(BeaconException):
    """Exception raised when settings cannot be turned into a dispatcher."""

    def __init__(self, message: Optional[str] = "Invalid logging configuration"):
        """Create a new ConfigurationError instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)
