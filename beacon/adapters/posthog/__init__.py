"""PostHog analytics backend adapter."""

from beacon.adapters.posthog.backend import PostHogBackend

__all__ = ["PostHogBackend"]
