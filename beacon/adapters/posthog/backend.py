"""PostHog analytics backend."""

import logging
from typing import Any, Dict, Optional
from uuid import uuid4

from posthog import Posthog

from beacon.core.config import Settings
from beacon.core.events import LoggableEvent, Parameters
from beacon.core.exceptions import ConfigurationError
from beacon.core.protocols import LogBackend

logger = logging.getLogger(__name__)

SCREEN_EVENT = "$screen"


class PostHogBackend(LogBackend):
    """Wraps a PostHog client behind the LogBackend protocol.

    The backend keeps the distinct id of the current user as private
    state. It starts out anonymous, ``identify_user`` replaces it and
    ``delete_user_profile`` forgets it again. The PostHog SDK batches and
    sends from its own consumer thread, so none of these calls block on
    the network.

    Args:
        client: A configured ``posthog.Posthog`` instance, or None for a
            disabled backend.
        enabled: When False every call is a no-op.
        base_properties: Merged into every captured event.
    """

    def __init__(
        self,
        client: Optional[Posthog],
        *,
        enabled: bool = True,
        base_properties: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._client = client
        self._enabled = enabled and client is not None
        self._base_properties = dict(base_properties or {})
        self._distinct_id = self._anonymous_id()

    @classmethod
    def from_settings(cls, settings: Settings) -> "PostHogBackend":
        """Configure a PostHog client from application settings.

        Raises:
            ConfigurationError: If analytics is enabled without an API key.
        """
        enabled = settings.posthog_enabled
        if enabled and not settings.POSTHOG_API_KEY:
            raise ConfigurationError(
                "BEACON_ANALYTICS_ENABLED is set but BEACON_POSTHOG_API_KEY is missing"
            )

        client = None
        if enabled:
            client = Posthog(settings.POSTHOG_API_KEY, host=settings.POSTHOG_HOST)
            logger.info("PostHog backend initialized (env=%s)", settings.ENVIRONMENT.value)
        else:
            logger.info("PostHog backend disabled (env=%s)", settings.ENVIRONMENT.value)
        return cls(
            client,
            enabled=enabled,
            base_properties={"environment": settings.ENVIRONMENT.value},
        )

    @property
    def distinct_id(self) -> str:
        return self._distinct_id

    @property
    def enabled(self) -> bool:
        return self._enabled

    # ------------------------------------------------------------------
    # LogBackend
    # ------------------------------------------------------------------

    def report_event(self, event: LoggableEvent) -> None:
        self._call(
            "capture",
            distinct_id=self._distinct_id,
            event=event.event_name,
            properties=self._event_properties(event),
        )

    def report_screen_view(self, event: LoggableEvent) -> None:
        properties = self._event_properties(event)
        properties["$screen_name"] = event.event_name
        self._call(
            "capture",
            distinct_id=self._distinct_id,
            event=SCREEN_EVENT,
            properties=properties,
        )

    def identify_user(self, user_id: str, name: Optional[str], email: Optional[str]) -> None:
        if not self._enabled:
            return
        self._distinct_id = user_id
        person: Dict[str, Any] = {}
        if name is not None:
            person["$name"] = name
        if email is not None:
            person["$email"] = email
        self._call("set", distinct_id=user_id, properties=person)

    def set_user_properties(self, properties: Parameters, high_priority: bool) -> None:
        self._call(
            "set",
            distinct_id=self._distinct_id,
            properties=dict(properties),
        )
        if high_priority:
            self._call("flush")

    def delete_user_profile(self) -> None:
        if not self._enabled:
            return
        self._distinct_id = self._anonymous_id()

    def close(self, timeout: Optional[float] = None) -> None:
        """Send anything the SDK still has queued and stop its consumer.

        The SDK shutdown is not bounded, so ``timeout`` is ignored.
        """
        self._call("shutdown")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _event_properties(self, event: LoggableEvent) -> Dict[str, Any]:
        return {
            **self._base_properties,
            **(event.parameters or {}),
            "severity": event.severity.label,
        }

    def _call(self, method: str, **kwargs: Any) -> None:
        if not self._enabled:
            return
        try:
            getattr(self._client, method)(**kwargs)
        except Exception as e:
            logger.error("Failed to send PostHog %s: %s", method, e)

    @staticmethod
    def _anonymous_id() -> str:
        return str(uuid4())
