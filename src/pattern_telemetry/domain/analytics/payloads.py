"""Typed payloads for analytics event categories.

Each event category carries a parameter map whose shape is described by one of
the payload models below. Payloads are used to validate parameter maps, both
when events are built through the factory constructors and when a processing
strategy checks an incoming event. Unknown keys are always allowed; only the
keys a category depends on are typed.
"""
from typing import Any, Dict, List, Literal, Mapping, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, model_validator

from pattern_telemetry.domain.analytics.event_types import AnalyticsEventType


class EventPayload(BaseModel):
    """Base class for all category payloads."""
    model_config = ConfigDict(extra="allow", strict=True)


class PatternLearningPayload(EventPayload):
    """Payload for pattern learning events."""
    pattern_name: str
    pattern_category: str
    completed: bool
    difficulty: Optional[str] = None
    time_spent_seconds: Optional[float] = None


class UserInteractionPayload(EventPayload):
    """Payload for UI interaction and navigation events."""
    screen_name: Optional[str] = None


class GameProgressPayload(EventPayload):
    """Payload for game mechanics and progress events."""
    level: Optional[Union[str, int]] = None
    score: Optional[float] = None
    game_mechanic: Optional[str] = None
    patterns_used: Optional[List[str]] = None

    @model_validator(mode="after")
    def require_progress_marker(self) -> "GameProgressPayload":
        """Game progress needs a level, a score or a game mechanic."""
        if self.level is None and self.score is None and self.game_mechanic is None:
            raise ValueError("One of level, score or game_mechanic is required")
        return self


class PerformancePayload(EventPayload):
    """Payload for performance measurement events."""
    operation: str
    duration_ms: float
    success: Optional[bool] = None


class ErrorPayload(EventPayload):
    """Payload for error tracking events."""
    error_type: str
    error_message: str
    context: Optional[str] = None


class CustomEducationalPayload(EventPayload):
    """Payload for custom educational events."""
    is_educational: Literal[True]


_PAYLOADS: Dict[AnalyticsEventType, Type[EventPayload]] = {
    AnalyticsEventType.PATTERN_LEARNING: PatternLearningPayload,
    AnalyticsEventType.USER_INTERACTION: UserInteractionPayload,
    AnalyticsEventType.GAME_PROGRESS: GameProgressPayload,
    AnalyticsEventType.PERFORMANCE: PerformancePayload,
    AnalyticsEventType.ERROR: ErrorPayload,
    AnalyticsEventType.CUSTOM_EDUCATIONAL: CustomEducationalPayload,
}


def payload_for(event_type: AnalyticsEventType) -> Type[EventPayload]:
    """Get the payload model describing an event category."""
    return _PAYLOADS[event_type]


def _plain(parameters: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        key: list(value) if isinstance(value, tuple) else value
        for key, value in parameters.items()
    }


def is_valid_payload(event_type: AnalyticsEventType, parameters: Mapping[str, Any]) -> bool:
    """Check whether a parameter map satisfies the payload of its category."""
    try:
        payload_for(event_type).model_validate(_plain(parameters))
    except ValueError:
        return False
    return True
