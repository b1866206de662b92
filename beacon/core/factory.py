"""Dispatcher factory.

All wiring decisions live here: settings in, dispatcher out. Broken
wiring raises ``ConfigurationError`` at startup rather than failing
silently on the first reported event.
"""

import logging
from typing import List, Optional

from beacon.adapters.console import ConsoleBackend
from beacon.adapters.posthog import PostHogBackend
from beacon.core.config import Settings
from beacon.core.config import settings as default_settings
from beacon.core.dispatcher import LogDispatcher
from beacon.core.protocols import LogBackend

logger = logging.getLogger(__name__)


def create_backends(settings: Settings) -> List[LogBackend]:
    """Build the backends enabled by ``settings``, console first."""
    backends: List[LogBackend] = []
    if settings.CONSOLE_ENABLED:
        backends.append(ConsoleBackend.from_settings(settings))
    if settings.posthog_enabled:
        backends.append(PostHogBackend.from_settings(settings))
    return backends


def create_dispatcher(settings: Optional[Settings] = None) -> LogDispatcher:
    """Build a dispatcher wired from ``settings`` (module settings by default).

    The dispatcher owns the backends built here. Closing it also closes
    the console sink and shuts the PostHog client down.

    Raises:
        ConfigurationError: If the settings describe an unusable backend.
    """
    settings = settings or default_settings
    backends = create_backends(settings)
    logger.info(
        "Log dispatcher wired with %s (env=%s)",
        [type(backend).__name__ for backend in backends] or "no backends",
        settings.ENVIRONMENT.value,
    )
    return LogDispatcher(backends, close_backends=True)
