"""Application bootstrap - builds the telemetry pipeline from configuration."""

from __future__ import annotations

import asyncio
from typing import Callable, Dict, List, Optional, Type, TypeVar

from pattern_telemetry.application.analytics.helpers import EducationalAnalytics
from pattern_telemetry.application.analytics.service import AnalyticsService
from pattern_telemetry.application.crash.service import CrashReportingService
from pattern_telemetry.config import AppConfig, ConfigurationManager, ObserversConfig
from pattern_telemetry.domain.analytics.events import AnalyticsEvent
from pattern_telemetry.domain.base.ports import (
    AnalyticsObserver,
    CrashReportingBackendPort,
    TelemetryBackendPort,
)
from pattern_telemetry.infrastructure.backends import (
    LoggingCrashReportingBackend,
    LoggingTelemetryBackend,
)
from pattern_telemetry.infrastructure.error.handler_chain import (
    ErrorHandlerChain,
    create_minimal_chain,
    create_standard_chain,
)
from pattern_telemetry.infrastructure.events.publisher import ObserverBus
from pattern_telemetry.infrastructure.logging.logger import get_logger, setup_logging
from pattern_telemetry.infrastructure.observers import (
    ErrorTrackingObserver,
    GamePerformanceObserver,
    LearningProgressObserver,
    UserEngagementObserver,
)
from pattern_telemetry.infrastructure.registry.strategy_registry import StrategyRegistry
from pattern_telemetry.infrastructure.strategies.registration import (
    create_default_strategy_registry,
)

TObserver = TypeVar("TObserver", bound=AnalyticsObserver)

_OBSERVER_FACTORIES: Dict[str, Callable[[ObserversConfig], AnalyticsObserver]] = {
    "learning_progress": lambda cfg: LearningProgressObserver(mastery_threshold=cfg.mastery_threshold),
    "game_performance": lambda cfg: GamePerformanceObserver(max_score_history=cfg.max_score_history),
    "user_engagement": lambda cfg: UserEngagementObserver(),
    "error_tracking": lambda cfg: ErrorTrackingObserver(max_error_history=cfg.max_error_history),
}

_CHAIN_FACTORIES: Dict[str, Callable[[CrashReportingBackendPort], ErrorHandlerChain]] = {
    "standard": create_standard_chain,
    "minimal": create_minimal_chain,
}


class TelemetryPipeline:
    """
    Composition root owning every telemetry component.

    Nothing here is global: two pipelines built from two configurations are
    fully independent.
    """

    def __init__(
        self,
        config: AppConfig,
        registry: StrategyRegistry,
        bus: ObserverBus,
        chain: ErrorHandlerChain,
        analytics: AnalyticsService,
        crash_reporting: CrashReportingService,
    ) -> None:
        self.config = config
        self.registry = registry
        self.bus = bus
        self.chain = chain
        self.analytics = analytics
        self.crash_reporting = crash_reporting
        self.educational = EducationalAnalytics(analytics)
        self._started = False
        self.logger = get_logger(__name__)

    @classmethod
    def from_config(
        cls,
        config: Optional[AppConfig] = None,
        telemetry_backend: Optional[TelemetryBackendPort] = None,
        crash_backend: Optional[CrashReportingBackendPort] = None,
        configure_logging: bool = True,
    ) -> "TelemetryPipeline":
        """
        Build a pipeline from typed configuration.

        Args:
            config: Application configuration. Defaults are used when None.
            telemetry_backend: Analytics collector. Logs events when None.
            crash_backend: Crash collector. Logs reports when None.
            configure_logging: Whether to set up logging from ``config.logging``

        Returns:
            A pipeline ready to ``start``
        """
        config = config or AppConfig()
        if configure_logging:
            setup_logging(config.logging)

        registry = create_default_strategy_registry(config.analytics.enabled_strategies)

        bus = ObserverBus()
        for name in config.observers.enabled:
            bus.subscribe(_OBSERVER_FACTORIES[name](config.observers))

        crash_backend = crash_backend or LoggingCrashReportingBackend()
        chain = _CHAIN_FACTORIES[config.crash_reporting.chain](crash_backend)

        analytics = AnalyticsService(
            registry,
            bus,
            telemetry_backend or LoggingTelemetryBackend(),
            default_parameters=config.analytics.default_parameters,
            enabled=config.analytics.enabled,
        )
        crash_reporting = CrashReportingService(
            chain, crash_backend, enabled=config.crash_reporting.enabled
        )
        return cls(config, registry, bus, chain, analytics, crash_reporting)

    @classmethod
    def from_file(cls, config_path: Optional[str] = None, **kwargs) -> "TelemetryPipeline":
        """Build a pipeline from a JSON/YAML file plus environment overrides."""
        return cls.from_config(ConfigurationManager(config_path).app_config, **kwargs)

    @property
    def is_started(self) -> bool:
        return self._started

    async def start(self) -> bool:
        """Install the loop exception handler and publish ``app_initialized``."""
        if self._started:
            self.logger.debug("Telemetry pipeline already started")
            return True

        if self.config.crash_reporting.install_loop_handler:
            self.crash_reporting.install_loop_exception_handler(asyncio.get_running_loop())

        await self.analytics.publish(AnalyticsEvent.app_initialized())
        self._started = True
        self.logger.info(
            f"Telemetry pipeline started ({self.config.environment}, "
            f"{self.bus.observer_count} observers, {self.chain.handler_count} handlers)"
        )
        return True

    def get_observer(self, observer_type: Type[TObserver]) -> Optional[TObserver]:
        """Get the first subscribed observer of a type."""
        for observer in self.bus.observers:
            if isinstance(observer, observer_type):
                return observer
        return None

    @property
    def observers(self) -> List[AnalyticsObserver]:
        return list(self.bus.observers)
