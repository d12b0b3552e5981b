"""Strategy Registry - maps analytics event categories to processing strategies.

Lookups are constant time. A category without a registered strategy is not an
error: events of that category pass through unmodified.
"""
from types import MappingProxyType
from typing import TYPE_CHECKING, Dict, List, Mapping, Optional

from pattern_telemetry.domain.analytics.event_types import AnalyticsEventType
from pattern_telemetry.domain.analytics.events import AnalyticsEvent
from pattern_telemetry.infrastructure.logging.logger import get_logger

if TYPE_CHECKING:
    from pattern_telemetry.infrastructure.strategies.base import EventProcessingStrategy


class StrategyRegistry:
    """
    Registry for event processing strategies.

    Registering a category twice replaces the earlier strategy. The registry
    is owned by the pipeline that builds it; there is no shared instance.
    """

    def __init__(self):
        """Initialize strategy registry."""
        self._strategies: Dict[AnalyticsEventType, "EventProcessingStrategy"] = {}
        self.logger = get_logger(__name__)

    def register(self, event_type: AnalyticsEventType, strategy: "EventProcessingStrategy") -> None:
        """
        Register a strategy for an event category.

        Args:
            event_type: Category handled by the strategy
            strategy: Strategy instance
        """
        if event_type in self._strategies:
            self.logger.debug(f"Replacing strategy for {event_type.value}")
        self._strategies[event_type] = strategy
        self.logger.debug(f"Registered {strategy.name} for {event_type.value}")

    def unregister(self, event_type: AnalyticsEventType) -> bool:
        """Remove the strategy of a category. Returns whether one was registered."""
        if self._strategies.pop(event_type, None) is None:
            return False
        self.logger.debug(f"Unregistered strategy for {event_type.value}")
        return True

    def resolve(self, event_type: AnalyticsEventType) -> Optional["EventProcessingStrategy"]:
        """Get the strategy of a category, or None when none is registered."""
        return self._strategies.get(event_type)

    def is_registered(self, event_type: AnalyticsEventType) -> bool:
        return event_type in self._strategies

    def get_registered_types(self) -> List[AnalyticsEventType]:
        return list(self._strategies.keys())

    def get_all_strategies(self) -> Mapping[AnalyticsEventType, "EventProcessingStrategy"]:
        """Read-only view of all registrations."""
        return MappingProxyType(self._strategies)

    def clear_registrations(self) -> None:
        """Clear all registrations (mainly for testing)."""
        self._strategies.clear()

    def process(self, event: AnalyticsEvent) -> AnalyticsEvent:
        """Process an event through its category strategy, or return it unchanged."""
        strategy = self.resolve(event.event_type)
        if strategy is None:
            return event
        return strategy.process(event)
