"""LogBackend protocol: the capability every logging destination implements.

The dispatcher depends only on this protocol, never on concrete backends.
A console printer, the PostHog SDK, or any crash-reporting client is
adapted to this shape by a thin wrapper.

Usage:
    class MyBackend:
        def report_event(self, event: LoggableEvent) -> None: ...
        ...

    dispatcher = LogDispatcher([ConsoleBackend(), MyBackend()])
"""

from typing import Optional, Protocol, runtime_checkable

from beacon.core.events import LoggableEvent, Parameters


@runtime_checkable
class LogBackend(Protocol):
    """Destination for dispatched analytics and log calls.

    Implementations must not raise: errors are the backend's private
    concern (log them, swallow them). Calls may arrive on a worker
    thread owned by the dispatcher, one call at a time per backend.
    """

    def report_event(self, event: LoggableEvent) -> None:
        """Record a single event."""
        ...

    def report_screen_view(self, event: LoggableEvent) -> None:
        """Record a screen view.

        Kept apart from ``report_event`` so backends can treat navigation
        differently (e.g. reset a navigation trace).
        """
        ...

    def identify_user(self, user_id: str, name: Optional[str], email: Optional[str]) -> None:
        """Associate subsequent calls with a user."""
        ...

    def set_user_properties(self, properties: Parameters, high_priority: bool) -> None:
        """Attach properties to the current user.

        Args:
            properties: Key/value pairs to set.
            high_priority: Hint that the backend should deliver now
                rather than batch.
        """
        ...

    def delete_user_profile(self) -> None:
        """Forget everything about the current user."""
        ...
