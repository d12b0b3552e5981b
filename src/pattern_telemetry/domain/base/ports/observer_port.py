"""Observer port for analytics event broadcast."""

from abc import ABC, abstractmethod

from pattern_telemetry.domain.analytics.events import AnalyticsEvent


class AnalyticsObserver(ABC):
    """Receives every event published on the observer bus."""

    @abstractmethod
    def on_event(self, event: AnalyticsEvent) -> None:
        """Handle a published event. Observers filter by category themselves."""
