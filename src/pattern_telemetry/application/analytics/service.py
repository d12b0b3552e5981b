"""Analytics Service - processes, sends and broadcasts analytics events."""
from typing import Any, Dict, Optional

from pattern_telemetry.domain.analytics.events import AnalyticsEvent
from pattern_telemetry.domain.base.ports.observer_port import AnalyticsObserver
from pattern_telemetry.domain.base.ports.telemetry_port import TelemetryBackendPort
from pattern_telemetry.infrastructure.events.publisher import ObserverBus
from pattern_telemetry.infrastructure.exceptions import AuthorizationError
from pattern_telemetry.infrastructure.logging.logger import get_logger
from pattern_telemetry.infrastructure.registry.strategy_registry import StrategyRegistry


class AnalyticsService:
    """
    Service for publishing analytics events.

    Publishing an event runs it through the category strategy, sends the
    processed event to the telemetry backend and broadcasts it to observers.
    Observers receive the processed event whether or not the backend accepted
    it. None of the public methods raise on backend failure.
    """

    def __init__(
        self,
        registry: StrategyRegistry,
        bus: ObserverBus,
        backend: TelemetryBackendPort,
        default_parameters: Optional[Dict[str, Any]] = None,
        enabled: bool = True,
    ):
        """
        Initialize analytics service.

        Args:
            registry: Strategy registry used to process events
            bus: Observer bus receiving processed events
            backend: Telemetry backend events are sent to
            default_parameters: Parameters merged under every sent event
            enabled: Whether events are collected at all
        """
        self._registry = registry
        self._bus = bus
        self._backend = backend
        self._default_parameters = dict(default_parameters or {})
        self._enabled = enabled
        self._logger = get_logger(__name__)

    @property
    def is_enabled(self) -> bool:
        return self._enabled

    def set_enabled(self, enabled: bool) -> None:
        """Enable or disable analytics collection."""
        self._enabled = enabled
        self._logger.info(f"Analytics collection {'enabled' if enabled else 'disabled'}")

    def subscribe(self, observer: AnalyticsObserver) -> None:
        self._bus.subscribe(observer)

    def unsubscribe(self, observer: AnalyticsObserver) -> None:
        self._bus.unsubscribe(observer)

    async def publish(self, event: AnalyticsEvent) -> bool:
        """
        Process, send and broadcast an event.

        Args:
            event: Event to publish

        Returns:
            True if the telemetry backend accepted the event
        """
        if not self._enabled:
            self._logger.debug(f"Analytics disabled, skipping event {event.name}")
            return False

        processed = self._process(event)
        accepted = await self._send(processed)
        self._bus.publish(processed)
        return accepted

    def _process(self, event: AnalyticsEvent) -> AnalyticsEvent:
        try:
            return self._registry.process(event)
        except Exception as e:
            self._logger.error(f"Strategy failed for event {event.name}, sending it unprocessed: {e}")
            return event

    async def _send(self, event: AnalyticsEvent) -> bool:
        parameters = {**self._default_parameters, **event.flat_parameters()}
        try:
            accepted = await self._backend.log_event(event.name, parameters)
        except AuthorizationError as e:
            self._logger.info(f"Skipped sending event {event.name}: {e}")
            return False
        except Exception as e:
            self._logger.error(f"Failed to send event {event.name}: {e}")
            return False

        if not accepted:
            self._logger.warning(f"Telemetry backend did not accept event {event.name}")
        return bool(accepted)

    async def track_screen_view(
        self,
        screen_name: str,
        screen_class: Optional[str] = None,
        parameters: Optional[Dict[str, Any]] = None,
    ) -> bool:
        """Publish a screen view event."""
        return await self.publish(AnalyticsEvent.screen_view(screen_name, screen_class, parameters))

    async def set_user_id(self, user_id: str) -> None:
        try:
            await self._backend.set_user_id(user_id)
        except Exception as e:
            self._logger.error(f"Failed to set analytics user id: {e}")

    async def set_user_property(self, name: str, value: str) -> None:
        try:
            await self._backend.set_user_property(name, value)
        except Exception as e:
            self._logger.error(f"Failed to set user property {name}: {e}")

    async def reset_analytics_data(self) -> None:
        try:
            await self._backend.reset_analytics_data()
            self._logger.info("Analytics data reset")
        except Exception as e:
            self._logger.error(f"Failed to reset analytics data: {e}")
