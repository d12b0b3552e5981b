"""Observer Bus - ordered, isolated broadcast of processed analytics events."""
from typing import List, Tuple

from pattern_telemetry.domain.analytics.events import AnalyticsEvent
from pattern_telemetry.domain.base.ports.observer_port import AnalyticsObserver
from pattern_telemetry.infrastructure.logging.logger import get_logger


class ObserverBus:
    """
    Broadcasts every published event to all subscribed observers.

    Delivery is synchronous and follows subscription order. Each observer call
    is isolated: an observer that raises is logged and the remaining observers
    still receive the event. Publishing iterates a snapshot of the subscriber
    list, so observers may subscribe or unsubscribe from inside ``on_event``
    without affecting the delivery in progress.
    """

    def __init__(self):
        self._observers: List[AnalyticsObserver] = []
        self._logger = get_logger(__name__)

    def subscribe(self, observer: AnalyticsObserver) -> None:
        """Append an observer. Subscribing the same observer twice delivers twice."""
        self._observers.append(observer)
        self._logger.debug(f"Subscribed {type(observer).__name__}")

    def unsubscribe(self, observer: AnalyticsObserver) -> None:
        """Remove the first subscription of this exact observer, if any."""
        for index, subscribed in enumerate(self._observers):
            if subscribed is observer:
                del self._observers[index]
                self._logger.debug(f"Unsubscribed {type(observer).__name__}")
                return

    def publish(self, event: AnalyticsEvent) -> int:
        """
        Deliver an event to every subscribed observer.

        Returns:
            Number of observers that handled the event without raising
        """
        delivered = 0
        for observer in tuple(self._observers):
            try:
                observer.on_event(event)
                delivered += 1
            except Exception as e:
                self._logger.error(
                    f"Observer {type(observer).__name__} failed for event {event.name}: {e}"
                )
                # Continue with other observers
        return delivered

    @property
    def observers(self) -> Tuple[AnalyticsObserver, ...]:
        return tuple(self._observers)

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    def clear(self) -> None:
        self._observers.clear()
