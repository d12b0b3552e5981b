"""Registration of the built-in event processing strategies."""
from typing import Iterable, Optional

from pattern_telemetry.domain.analytics.event_types import AnalyticsEventType
from pattern_telemetry.infrastructure.logging.logger import get_logger
from pattern_telemetry.infrastructure.registry.strategy_registry import StrategyRegistry
from pattern_telemetry.infrastructure.strategies.event_strategies import DEFAULT_STRATEGIES


def register_default_strategies(
    registry: Optional[StrategyRegistry] = None,
    enabled_types: Optional[Iterable[str]] = None,
) -> StrategyRegistry:
    """
    Register the built-in strategies with a registry.

    Args:
        registry: Registry to populate. A new one is created when None.
        enabled_types: Event category values to register. All when None.

    Returns:
        The populated registry
    """
    logger = get_logger(__name__)
    if registry is None:
        registry = StrategyRegistry()

    enabled = None if enabled_types is None else {AnalyticsEventType(t) for t in enabled_types}

    for strategy_class in DEFAULT_STRATEGIES:
        if enabled is not None and strategy_class.event_type not in enabled:
            logger.debug(f"Skipping disabled strategy {strategy_class.__name__}")
            continue
        registry.register(strategy_class.event_type, strategy_class())

    return registry


def create_default_strategy_registry(
    enabled_types: Optional[Iterable[str]] = None,
) -> StrategyRegistry:
    """Create a registry holding the built-in strategies."""
    return register_default_strategies(StrategyRegistry(), enabled_types)
