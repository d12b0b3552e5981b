"""Analytics, crash reporting and observer configuration schemas."""

from typing import Any, Dict, List

from pydantic import BaseModel, Field, field_validator

from pattern_telemetry.domain.analytics.event_types import AnalyticsEventType

OBSERVER_NAMES = ["learning_progress", "game_performance", "user_engagement", "error_tracking"]


class AnalyticsConfig(BaseModel):
    """Analytics collection configuration."""

    enabled: bool = Field(True, description="Whether analytics events are collected")
    enabled_strategies: List[str] = Field(
        default_factory=lambda: [event_type.value for event_type in AnalyticsEventType],
        description="Event categories that get a processing strategy",
    )
    default_parameters: Dict[str, Any] = Field(
        default_factory=dict, description="Parameters merged under every sent event"
    )

    @field_validator("enabled_strategies")
    @classmethod
    def validate_enabled_strategies(cls, v: List[str]) -> List[str]:
        """Validate that every strategy names a known event category."""
        unknown = [name for name in v if not AnalyticsEventType.is_valid(name)]
        if unknown:
            raise ValueError(f"Unknown event categories: {unknown}")
        return v


class CrashReportingConfig(BaseModel):
    """Crash reporting configuration."""

    enabled: bool = Field(True, description="Whether crash reports are handled")
    chain: str = Field("standard", description="Handler chain: standard or minimal")
    install_loop_handler: bool = Field(
        True, description="Route unhandled asyncio errors through the chain"
    )

    @field_validator("chain")
    @classmethod
    def validate_chain(cls, v: str) -> str:
        """Validate chain name."""
        valid_chains = ["standard", "minimal"]
        if v not in valid_chains:
            raise ValueError(f"Chain must be one of {valid_chains}")
        return v


class ObserversConfig(BaseModel):
    """Statistics observer configuration."""

    enabled: List[str] = Field(
        default_factory=lambda: list(OBSERVER_NAMES),
        description="Observers subscribed at startup",
    )
    mastery_threshold: int = Field(3, description="Attempts needed to master a pattern")
    max_score_history: int = Field(10, description="Scores kept for trend analysis")
    max_error_history: int = Field(50, description="Errors kept for recent error stats")

    @field_validator("enabled")
    @classmethod
    def validate_enabled(cls, v: List[str]) -> List[str]:
        """Validate observer names."""
        unknown = [name for name in v if name not in OBSERVER_NAMES]
        if unknown:
            raise ValueError(f"Unknown observers: {unknown}. Must be among {OBSERVER_NAMES}")
        return v

    @field_validator("mastery_threshold", "max_score_history", "max_error_history")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Validate thresholds and history sizes."""
        if v < 1:
            raise ValueError("Value must be at least 1")
        return v
