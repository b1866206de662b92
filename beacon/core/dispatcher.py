"""LogDispatcher: the single entry point for analytics and log calls.

The dispatcher is a pure multiplexer over the ``LogBackend`` protocol.
Every public call is forwarded, unchanged, to every registered backend in
registration order. Each backend gets its own ``SerialWorker``, so a call
only enqueues one task per backend and returns immediately:

- a slow backend delays only its own queue,
- a raising backend is logged and skipped,
- each backend sees calls in the order they were made.

Usage:
    dispatcher = LogDispatcher([ConsoleBackend(), PostHogBackend.from_settings(settings)])
    dispatcher.report_event("Checkout Started", {"items": 3})
    dispatcher.identify_user("user-123", name="Ada", email=None)
"""

import logging
import time
from types import TracebackType
from typing import Any, Iterable, Mapping, Optional, Tuple, Type, Union, overload

from beacon.core.events import (
    Event,
    LoggableEvent,
    Parameters,
    Severity,
    normalize_parameters,
)
from beacon.core.protocols import LogBackend
from beacon.core.serial_worker import SerialWorker

logger = logging.getLogger(__name__)


class LogDispatcher:
    """Fans every reporting call out to a fixed, ordered set of backends.

    The backend set is fixed at construction. Dispatching to zero
    backends is a silent no-op. No public reporting method returns a
    value or raises.

    Args:
        backends: Backends to forward to, in forwarding order.
        close_backends: Also close every backend that exposes a ``close``
            method when the dispatcher closes. Use it when the dispatcher
            owns the backends, as the factory's dispatchers do.
    """

    def __init__(
        self, backends: Iterable[LogBackend] = (), *, close_backends: bool = False
    ) -> None:
        self._backends: Tuple[LogBackend, ...] = tuple(backends)
        self._close_backends = close_backends
        self._workers: Tuple[SerialWorker, ...] = tuple(
            SerialWorker(name=f"beacon-backend-{index}-{type(backend).__name__}")
            for index, backend in enumerate(self._backends)
        )
        self._closed = False
        logger.debug(
            f"[LogDispatcher] created with backends "
            f"{[type(backend).__name__ for backend in self._backends]}"
        )

    @property
    def backends(self) -> Tuple[LogBackend, ...]:
        return self._backends

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    @overload
    def report_event(self, event: LoggableEvent) -> None: ...

    @overload
    def report_event(
        self,
        event: str,
        parameters: Optional[Parameters] = None,
        severity: Severity = Severity.ANALYTIC,
    ) -> None: ...

    def report_event(
        self,
        event: Union[str, LoggableEvent],
        parameters: Optional[Parameters] = None,
        severity: Severity = Severity.ANALYTIC,
    ) -> None:
        """Report an event, given either a name or a pre-built event.

        Args:
            event: Event name, or any ``LoggableEvent`` (forwarded as-is).
            parameters: Payload, only used when ``event`` is a name.
            severity: Defaults to ``Severity.ANALYTIC``; only used when
                ``event`` is a name.
        """
        if isinstance(event, str):
            built = self._build_event(event, parameters, severity)
            if built is None:
                return
            event = built
        self._forward("report_event", event)

    def report_screen_view(self, event: LoggableEvent) -> None:
        """Report a screen view; backends may handle it apart from events."""
        self._forward("report_screen_view", event)

    def identify_user(
        self,
        user_id: str,
        name: Optional[str] = None,
        email: Optional[str] = None,
    ) -> None:
        self._forward("identify_user", user_id, name, email)

    def set_user_properties(self, properties: Parameters, high_priority: bool = False) -> None:
        """Attach properties to the current user on every backend.

        Args:
            properties: Key/value pairs. Deep-copied into the parameter
                union, so later mutation by the caller does not leak into
                queued deliveries.
            high_priority: Hint for backends to deliver immediately.
        """
        if not isinstance(properties, Mapping):
            logger.warning(
                f"[LogDispatcher] dropping user properties of type {type(properties).__name__}"
            )
            return
        try:
            snapshot = normalize_parameters(properties)
        except Exception as e:
            logger.warning(f"[LogDispatcher] dropping malformed user properties: {e}")
            return
        self._forward("set_user_properties", snapshot, high_priority)

    def delete_user_profile(self) -> None:
        self._forward("delete_user_profile")

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def flush(self, timeout: Optional[float] = None) -> bool:
        """Wait until every call made so far reached every backend.

        Args:
            timeout: Overall budget in seconds across all backends.

        Returns:
            False if the budget ran out before all queues drained.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        drained = True
        for worker in self._workers:
            remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
            if not worker.flush(remaining):
                logger.warning(f"[LogDispatcher] timed out flushing {worker.name}")
                drained = False
        return drained

    def close(self, timeout: Optional[float] = None) -> None:
        """Deliver pending calls, then stop the per-backend workers.

        With ``close_backends`` the backends are closed afterwards, in
        registration order. Calls made after ``close`` are dropped.
        Idempotent.
        """
        if self._closed:
            return
        self._closed = True
        for worker in self._workers:
            worker.close(timeout)
        if self._close_backends:
            for backend in self._backends:
                _close_backend(backend, timeout)

    def __enter__(self) -> "LogDispatcher":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _build_event(
        self, name: str, parameters: Optional[Parameters], severity: Severity
    ) -> Optional[Event]:
        try:
            return Event(event_name=name, parameters=parameters, severity=severity)
        except Exception as e:
            logger.warning(f"[LogDispatcher] dropping malformed event '{name}': {e}")
            return None

    def _forward(self, operation: str, *args: Any) -> None:
        for backend, worker in zip(self._backends, self._workers):
            worker.submit(_deliver, backend, operation, args)


def _deliver(backend: LogBackend, operation: str, args: Tuple[Any, ...]) -> None:
    try:
        getattr(backend, operation)(*args)
    except Exception:
        logger.error(
            f"[LogDispatcher] backend {type(backend).__name__} failed during {operation}",
            exc_info=True,
        )


def _close_backend(backend: LogBackend, timeout: Optional[float]) -> None:
    close = getattr(backend, "close", None)
    if not callable(close):
        return
    try:
        close(timeout)
    except Exception:
        logger.error(
            f"[LogDispatcher] backend {type(backend).__name__} failed to close",
            exc_info=True,
        )
