"""Unit tests for LogDispatcher — fan-out, ordering, isolation, lifecycle."""

import threading
import time
from collections.abc import Mapping

import pytest

from beacon.adapters.fake import FakeLogBackend
from beacon.core.dispatcher import LogDispatcher
from beacon.core.events import Event, Severity


class BlockingBackend(FakeLogBackend):
    """Backend whose calls wait until the test releases them."""

    def __init__(self) -> None:
        super().__init__()
        self.release = threading.Event()

    def report_event(self, event) -> None:
        self.release.wait(timeout=5)
        super().report_event(event)


class Opaque:
    pass


class BrokenMapping(Mapping):
    """Mapping whose iteration fails part way through."""

    def __getitem__(self, key):
        return "value"

    def __iter__(self):
        raise RuntimeError("iteration failed")

    def __len__(self):
        return 1


def _flushed(dispatcher: LogDispatcher) -> None:
    assert dispatcher.flush(timeout=5) is True


# ---------------------------------------------------------------------------
# Fan-out
# ---------------------------------------------------------------------------


class TestFanOut:
    def test_scenario_two_backends(self, dispatcher_factory):
        first, second = FakeLogBackend(), FakeLogBackend()
        dispatcher = dispatcher_factory([first, second])

        dispatcher.report_event("Test Event", {"key": "value"}, Severity.INFO)
        _flushed(dispatcher)

        for backend in (first, second):
            assert backend.last_event.event_name == "Test Event"
            assert backend.last_event.severity == Severity.INFO
            assert backend.last_event.parameters["key"] == "value"

        dispatcher.delete_user_profile()
        _flushed(dispatcher)

        for backend in (first, second):
            assert backend.did_delete_user_profile is True
            assert backend.operations == ["report_event", "delete_user_profile"]

    @pytest.mark.parametrize("count", [0, 1, 3])
    def test_every_backend_receives_exactly_one_call(self, dispatcher_factory, count):
        backends = [FakeLogBackend() for _ in range(count)]
        dispatcher = dispatcher_factory(backends)

        dispatcher.identify_user("user-123", name="Ada", email="ada@example.com")
        _flushed(dispatcher)

        for backend in backends:
            assert backend.identified_users == [("user-123", "Ada", "ada@example.com")]
            assert len(backend.calls) == 1

    def test_prebuilt_event_forwarded_unchanged(self, dispatcher_factory, fake_backend):
        dispatcher = dispatcher_factory([fake_backend])
        event = Event(event_name="Checkout", parameters={"items": 3}, severity=Severity.WARNING)

        dispatcher.report_event(event)
        _flushed(dispatcher)

        assert fake_backend.last_event is event

    def test_custom_loggable_event_forwarded(self, dispatcher_factory, fake_backend):
        class ScreenEvent:
            event_name = "Home"
            parameters = None
            severity = Severity.ANALYTIC

        dispatcher = dispatcher_factory([fake_backend])
        event = ScreenEvent()

        dispatcher.report_screen_view(event)
        _flushed(dispatcher)

        assert fake_backend.last_screen_view is event
        assert fake_backend.events == []

    def test_screen_view_uses_its_own_channel(self, dispatcher_factory, fake_backend):
        dispatcher = dispatcher_factory([fake_backend])

        dispatcher.report_screen_view(Event(event_name="Settings"))
        _flushed(dispatcher)

        assert fake_backend.operations == ["report_screen_view"]

    def test_user_properties_forwarded(self, dispatcher_factory, fake_backend):
        dispatcher = dispatcher_factory([fake_backend])

        dispatcher.set_user_properties({"plan": "pro", "seats": 4}, high_priority=True)
        _flushed(dispatcher)

        assert fake_backend.user_properties == [({"plan": "pro", "seats": 4}, True)]

    def test_user_properties_snapshot_taken_at_call_time(self, dispatcher_factory):
        backend = BlockingBackend()
        dispatcher = dispatcher_factory([backend])
        nested = {"tier": "free"}
        properties = {"plan": "free", "limits": nested, "owner": Opaque(), 7: "lucky"}

        dispatcher.report_event("hold")
        dispatcher.set_user_properties(properties)
        properties["plan"] = "pro"
        nested["tier"] = "pro"
        backend.release.set()
        _flushed(dispatcher)

        assert backend.user_properties == [
            (
                {
                    "plan": "free",
                    "limits": {"tier": "free"},
                    "owner": "<unsupported: Opaque>",
                    "7": "lucky",
                },
                False,
            )
        ]

    def test_backends_kept_in_registration_order(self):
        backends = [FakeLogBackend(), FakeLogBackend()]
        with LogDispatcher(backends) as dispatcher:
            assert dispatcher.backends == tuple(backends)


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------


class TestDefaults:
    def test_default_severity_is_analytic(self, dispatcher_factory, fake_backend):
        dispatcher = dispatcher_factory([fake_backend])

        dispatcher.report_event("Signed In")
        _flushed(dispatcher)

        assert fake_backend.last_event.severity == Severity.ANALYTIC
        assert fake_backend.last_event.parameters is None

    def test_identify_defaults_to_no_name_or_email(self, dispatcher_factory, fake_backend):
        dispatcher = dispatcher_factory([fake_backend])

        dispatcher.identify_user("user-1")
        _flushed(dispatcher)

        assert fake_backend.identified_users == [("user-1", None, None)]

    def test_user_properties_default_low_priority(self, dispatcher_factory, fake_backend):
        dispatcher = dispatcher_factory([fake_backend])

        dispatcher.set_user_properties({"a": 1})
        _flushed(dispatcher)

        assert fake_backend.user_properties == [({"a": 1}, False)]


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------


class TestOrdering:
    def test_calls_reach_backend_in_call_order(self, dispatcher_factory, fake_backend):
        dispatcher = dispatcher_factory([fake_backend])

        for index in range(50):
            dispatcher.report_event(f"event-{index}")
        _flushed(dispatcher)

        assert [e.event_name for e in fake_backend.events] == [f"event-{i}" for i in range(50)]

    def test_mixed_operations_keep_order(self, dispatcher_factory, fake_backend):
        dispatcher = dispatcher_factory([fake_backend])

        dispatcher.identify_user("u")
        dispatcher.report_event("a")
        dispatcher.set_user_properties({"k": "v"})
        dispatcher.report_screen_view(Event(event_name="s"))
        dispatcher.delete_user_profile()
        _flushed(dispatcher)

        assert fake_backend.operations == [
            "identify_user",
            "report_event",
            "set_user_properties",
            "report_screen_view",
            "delete_user_profile",
        ]


# ---------------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------------


class TestIsolation:
    def test_call_returns_before_slow_backend_finishes(self, dispatcher_factory):
        slow = FakeLogBackend(delay=0.5)
        dispatcher = dispatcher_factory([slow])

        started = time.monotonic()
        dispatcher.report_event("slow")
        elapsed = time.monotonic() - started

        assert elapsed < 0.25
        _flushed(dispatcher)
        assert slow.last_event.event_name == "slow"

    def test_stalled_backend_does_not_delay_others(self, dispatcher_factory):
        stalled = BlockingBackend()
        healthy = FakeLogBackend()
        dispatcher = dispatcher_factory([stalled, healthy])

        dispatcher.report_event("ping")

        deadline = time.monotonic() + 5
        while healthy.last_event is None and time.monotonic() < deadline:
            time.sleep(0.01)
        assert healthy.last_event.event_name == "ping"
        assert stalled.events == []

        stalled.release.set()
        _flushed(dispatcher)
        assert stalled.last_event.event_name == "ping"

    def test_failing_backend_does_not_affect_others(self, dispatcher_factory, caplog):
        failing = FakeLogBackend(fail=True)
        healthy = FakeLogBackend()
        dispatcher = dispatcher_factory([failing, healthy])

        dispatcher.report_event("first")
        dispatcher.report_event("second")
        _flushed(dispatcher)

        assert [e.event_name for e in healthy.events] == ["first", "second"]
        assert [e.event_name for e in failing.events] == ["first", "second"]
        assert "FakeLogBackend failed during report_event" in caplog.text

    def test_malformed_parameters_are_dropped_not_raised(self, dispatcher_factory, fake_backend):
        dispatcher = dispatcher_factory([fake_backend])

        dispatcher.report_event("bad", ["not", "a", "mapping"])
        _flushed(dispatcher)

        assert fake_backend.events == []

    def test_cyclic_parameters_become_placeholder(self, dispatcher_factory, fake_backend):
        dispatcher = dispatcher_factory([fake_backend])
        parameters = {"name": "loop"}
        parameters["self"] = parameters

        dispatcher.report_event("loop", parameters)
        _flushed(dispatcher)

        assert fake_backend.last_event.parameters == {
            "name": "loop",
            "self": "<recursive: dict>",
        }

    def test_failing_parameter_mapping_is_dropped_not_raised(
        self, dispatcher_factory, fake_backend, caplog
    ):
        dispatcher = dispatcher_factory([fake_backend])

        dispatcher.report_event("broken", BrokenMapping())
        dispatcher.set_user_properties(BrokenMapping())
        _flushed(dispatcher)

        assert fake_backend.calls == []
        assert "dropping malformed event 'broken'" in caplog.text
        assert "dropping malformed user properties" in caplog.text


# ---------------------------------------------------------------------------
# Empty dispatcher and lifecycle
# ---------------------------------------------------------------------------


class TestLifecycle:
    def test_empty_dispatcher_is_a_no_op(self):
        dispatcher = LogDispatcher()

        dispatcher.report_event("a", {"k": 1}, Severity.SEVERE)
        dispatcher.report_event(Event(event_name="b"))
        dispatcher.report_screen_view(Event(event_name="c"))
        dispatcher.identify_user("u", "n", "e")
        dispatcher.set_user_properties({"k": "v"}, True)
        dispatcher.delete_user_profile()

        assert dispatcher.backends == ()
        assert dispatcher.flush(timeout=1) is True
        dispatcher.close()

    def test_calls_after_close_are_dropped(self, fake_backend):
        dispatcher = LogDispatcher([fake_backend])
        dispatcher.report_event("before")
        dispatcher.close(timeout=5)

        dispatcher.report_event("after")

        assert [e.event_name for e in fake_backend.events] == ["before"]

    def test_close_is_idempotent(self, fake_backend):
        dispatcher = LogDispatcher([fake_backend])
        dispatcher.close(timeout=5)
        dispatcher.close(timeout=5)

    def test_flush_times_out_on_stalled_backend(self, dispatcher_factory):
        stalled = BlockingBackend()
        dispatcher = dispatcher_factory([stalled])

        dispatcher.report_event("stuck")

        assert dispatcher.flush(timeout=0.05) is False
        stalled.release.set()
        _flushed(dispatcher)

    def test_context_manager_delivers_before_exit(self, fake_backend):
        with LogDispatcher([fake_backend]) as dispatcher:
            dispatcher.report_event("inside")

        assert fake_backend.last_event.event_name == "inside"

    def test_backends_left_open_by_default(self, fake_backend):
        LogDispatcher([fake_backend]).close(timeout=5)

        assert fake_backend.closed is False

    def test_owned_backends_closed_after_delivery(self):
        backends = [FakeLogBackend(), FakeLogBackend()]
        dispatcher = LogDispatcher(backends, close_backends=True)
        dispatcher.report_event("last")

        dispatcher.close(timeout=5)

        for backend in backends:
            assert backend.closed is True
            assert backend.last_event.event_name == "last"


def test_malformed_user_properties_are_dropped(dispatcher_factory, fake_backend):
    dispatcher = dispatcher_factory([fake_backend])

    dispatcher.set_user_properties(None)
    _flushed(dispatcher)

    assert fake_backend.calls == []
