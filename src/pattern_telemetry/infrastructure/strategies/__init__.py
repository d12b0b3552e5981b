"""Event processing strategies."""

from .base import EventProcessingStrategy, clamp
from .event_strategies import (
    CustomEducationalStrategy,
    ErrorStrategy,
    GameProgressStrategy,
    PatternLearningStrategy,
    PerformanceStrategy,
    UserInteractionStrategy,
)
from .registration import create_default_strategy_registry, register_default_strategies

__all__ = [
    "EventProcessingStrategy",
    "clamp",
    "PatternLearningStrategy",
    "UserInteractionStrategy",
    "GameProgressStrategy",
    "PerformanceStrategy",
    "ErrorStrategy",
    "CustomEducationalStrategy",
    "register_default_strategies",
    "create_default_strategy_registry",
]
