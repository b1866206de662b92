"""Settings for wiring the default dispatcher.

Loaded from environment variables prefixed with ``BEACON_``:
    BEACON_CONSOLE_LOG_SYSTEM=stdout
    BEACON_CONSOLE_PRINT_PARAMETERS=false
    BEACON_ANALYTICS_ENABLED=true
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from beacon.core.config.enums import Environment, LogSystemType


class Settings(BaseSettings):
    """Settings for the console and PostHog backends."""

    model_config = SettingsConfigDict(env_prefix="BEACON_", extra="ignore")

    ENVIRONMENT: Environment = Field(Environment.LOCAL, description="Deployment environment")

    # Console backend
    CONSOLE_ENABLED: bool = Field(True, description="Wire the console backend")
    CONSOLE_LOG_SYSTEM: LogSystemType = Field(
        LogSystemType.SYSTEM, description="Sink the console backend writes through"
    )
    CONSOLE_PRINT_PARAMETERS: bool = Field(True, description="Print event parameters")
    CONSOLE_PRINT_USER_DETAILS: Optional[bool] = Field(
        None, description="Print name/email on identify (None follows CONSOLE_PRINT_PARAMETERS)"
    )
    CONSOLE_PRINT_USER_PROPERTIES: Optional[bool] = Field(
        None, description="Print user properties (None follows CONSOLE_PRINT_PARAMETERS)"
    )
    SYSTEM_LOG_SUBSYSTEM: str = Field("beacon", description="Logger name prefix")
    SYSTEM_LOG_CATEGORY: str = Field("ConsoleLogger", description="Logger name suffix")

    # PostHog backend
    ANALYTICS_ENABLED: bool = Field(False, description="Wire the PostHog backend")
    POSTHOG_API_KEY: Optional[str] = Field(None, description="PostHog project API key")
    POSTHOG_HOST: str = Field("https://app.posthog.com", description="PostHog ingestion host")

    @property
    def system_log_name(self) -> str:
        """Name of the ``logging.Logger`` the system sink writes to."""
        return f"{self.SYSTEM_LOG_SUBSYSTEM}.{self.SYSTEM_LOG_CATEGORY}"

    @property
    def posthog_enabled(self) -> bool:
        return self.ANALYTICS_ENABLED and self.ENVIRONMENT != Environment.LOCAL
