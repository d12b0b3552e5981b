"""Infrastructure registry patterns."""

from .strategy_registry import StrategyRegistry

__all__ = ["StrategyRegistry"]
