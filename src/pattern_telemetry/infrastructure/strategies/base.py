"""Base class for per-category event processing strategies."""
import math
from abc import ABC, abstractmethod
from typing import Any, Dict

from pattern_telemetry.domain.analytics.event_types import AnalyticsEventType
from pattern_telemetry.domain.analytics.events import AnalyticsEvent
from pattern_telemetry.domain.analytics.payloads import is_valid_payload
from pattern_telemetry.infrastructure.logging.logger import get_logger


def clamp(value: Any, lower: float, upper: float) -> Any:
    """Clamp a numeric value into [lower, upper]; non-numeric values and NaN become ``lower``."""
    if isinstance(value, bool) or not isinstance(value, (int, float)) or math.isnan(value):
        return lower
    return min(max(value, lower), upper)


class EventProcessingStrategy(ABC):
    """
    Validates, filters and enriches events of one category.

    Strategies are stateless and safe to share. ``process`` never raises for
    an event that fails validation and never drops it: the original event is
    returned unchanged and a warning is logged.
    """

    event_type: AnalyticsEventType
    enrichment: Dict[str, Any] = {}

    def __init__(self):
        self._logger = get_logger(__name__)

    @property
    def name(self) -> str:
        return type(self).__name__

    def validate(self, event: AnalyticsEvent) -> bool:
        """Check that the event belongs to this category and carries its payload."""
        if not event.name or event.event_type != self.event_type:
            return False
        return is_valid_payload(self.event_type, event.parameters)

    @abstractmethod
    def filter_parameters(self, parameters: Dict[str, Any]) -> Dict[str, Any]:
        """Return a filtered copy of the parameters. Must be idempotent."""

    def enrich(self, parameters: Dict[str, Any]) -> Dict[str, Any]:
        """Merge the static enrichment of this strategy over the parameters."""
        return {**parameters, **self.enrichment, "processed_by": self.name}

    def process(self, event: AnalyticsEvent) -> AnalyticsEvent:
        """Validate, filter and enrich an event, returning a new event."""
        if not self.validate(event):
            self._logger.warning(f"Invalid {self.event_type.value} event: {event.name}")
            return event

        filtered = self.filter_parameters(dict(event.parameters))
        return event.with_parameters(self.enrich(filtered))
