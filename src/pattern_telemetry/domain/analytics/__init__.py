"""Analytics domain - event model, categories and typed payloads."""

from .event_types import AnalyticsEventType
from .events import AnalyticsEvent
from .payloads import (
    CustomEducationalPayload,
    ErrorPayload,
    EventPayload,
    GameProgressPayload,
    PatternLearningPayload,
    PerformancePayload,
    UserInteractionPayload,
    is_valid_payload,
    payload_for,
)

__all__: list[str] = [
    "AnalyticsEvent",
    "AnalyticsEventType",
    "EventPayload",
    "PatternLearningPayload",
    "UserInteractionPayload",
    "GameProgressPayload",
    "PerformancePayload",
    "ErrorPayload",
    "CustomEducationalPayload",
    "payload_for",
    "is_valid_payload",
]
