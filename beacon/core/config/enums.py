"""Configuration enums for type-safe settings.

These enums inherit from str so they load directly from env vars.
"""

from enum import Enum


class Environment(str, Enum):
    """Deployment environments.

    Controls whether third-party analytics backends are wired.
    """

    LOCAL = "local"
    TEST = "test"
    DEV = "dev"
    PRD = "prd"


class LogSystemType(str, Enum):
    """Where the console backend writes its lines.

    STDOUT prints to standard output; SYSTEM writes through the host's
    ``logging`` hierarchy at the severity's native level.
    """

    STDOUT = "stdout"
    SYSTEM = "system"
