"""Tests for the observer broadcast bus."""

from unittest.mock import Mock

from structlog.testing import capture_logs

from pattern_telemetry.domain.analytics import AnalyticsEvent, AnalyticsEventType
from pattern_telemetry.domain.base.ports import AnalyticsObserver
from pattern_telemetry.infrastructure.events.publisher import ObserverBus


class RecordingObserver(AnalyticsObserver):
    def __init__(self, log=None, name="observer"):
        self.received = []
        self._log = log
        self._name = name

    def on_event(self, event):
        self.received.append(event)
        if self._log is not None:
            self._log.append(self._name)


class FailingObserver(AnalyticsObserver):
    def on_event(self, event):
        raise RuntimeError("observer exploded")


class MutatingObserver(AnalyticsObserver):
    def on_event(self, event):
        event.parameters["injected"] = "by_first"


def _event():
    return AnalyticsEvent(name="tap", event_type=AnalyticsEventType.USER_INTERACTION)


class TestObserverBus:
    """Test subscription and delivery."""

    def setup_method(self):
        self.bus = ObserverBus()

    def test_delivery_in_subscription_order(self):
        order = []
        self.bus.subscribe(RecordingObserver(order, "first"))
        self.bus.subscribe(RecordingObserver(order, "second"))
        self.bus.publish(_event())
        assert order == ["first", "second"]

    def test_duplicate_subscription_delivers_twice(self):
        observer = RecordingObserver()
        self.bus.subscribe(observer)
        self.bus.subscribe(observer)
        assert self.bus.publish(_event()) == 2
        assert len(observer.received) == 2

    def test_unsubscribe_removes_first_identical_entry(self):
        observer = RecordingObserver()
        self.bus.subscribe(observer)
        self.bus.subscribe(observer)
        self.bus.unsubscribe(observer)
        assert self.bus.observer_count == 1

    def test_unsubscribe_unknown_is_noop(self):
        self.bus.subscribe(RecordingObserver())
        self.bus.unsubscribe(RecordingObserver())
        assert self.bus.observer_count == 1

    def test_failing_observer_is_isolated(self):
        """Test that one failing observer does not stop delivery to the others."""
        first, last = RecordingObserver(), RecordingObserver()
        self.bus.subscribe(first)
        self.bus.subscribe(FailingObserver())
        self.bus.subscribe(last)

        with capture_logs() as logs:
            delivered = self.bus.publish(_event())

        assert delivered == 2
        assert len(first.received) == 1
        assert len(last.received) == 1
        assert any(
            entry["log_level"] == "error" and "observer exploded" in entry["event"] for entry in logs
        )

    def test_observer_cannot_change_event_for_later_observers(self):
        """Test that an observer writing to the parameters does not affect the next one."""
        recorder = RecordingObserver()
        self.bus.subscribe(MutatingObserver())
        self.bus.subscribe(recorder)

        event = AnalyticsEvent(
            name="tap", event_type=AnalyticsEventType.USER_INTERACTION, parameters={"a": 1}
        )
        with capture_logs():
            delivered = self.bus.publish(event)

        assert delivered == 1
        assert recorder.received[0].parameters == {"a": 1}

    def test_unsubscribe_during_publish_uses_snapshot(self):
        """Test that changing subscriptions inside on_event does not affect current delivery."""
        late = RecordingObserver()

        class Unsubscriber(AnalyticsObserver):
            def __init__(self, bus):
                self.bus = bus

            def on_event(self, event):
                self.bus.unsubscribe(late)

        self.bus.subscribe(Unsubscriber(self.bus))
        self.bus.subscribe(late)

        assert self.bus.publish(_event()) == 2
        assert len(late.received) == 1
        assert self.bus.observer_count == 1

    def test_observers_snapshot_and_clear(self):
        observer = Mock(spec=AnalyticsObserver)
        self.bus.subscribe(observer)
        assert self.bus.observers == (observer,)
        self.bus.clear()
        assert self.bus.observer_count == 0
        assert self.bus.publish(_event()) == 0
