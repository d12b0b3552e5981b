"""Concrete processing strategies, one per analytics event category."""
from typing import Any, Dict

from pattern_telemetry.domain.analytics.event_types import AnalyticsEventType
from pattern_telemetry.infrastructure.strategies.base import EventProcessingStrategy, clamp

MAX_TIME_SPENT_SECONDS = 3600
MAX_SCORE = 1_000_000
MAX_PATTERNS_USED = 10
MAX_DURATION_MS = 60000
MAX_ERROR_MESSAGE_LENGTH = 500
TRUNCATION_SUFFIX = "...[truncated]"
MAX_CUSTOM_PARAMETERS = 20


class PatternLearningStrategy(EventProcessingStrategy):
    """Pattern learning events: bounded learning time."""

    event_type = AnalyticsEventType.PATTERN_LEARNING
    enrichment = {
        "learning_context": "design_patterns",
        "educational_framework": "tower_defense",
        "learning_type": "interactive",
    }

    def filter_parameters(self, parameters: Dict[str, Any]) -> Dict[str, Any]:
        if "time_spent_seconds" in parameters:
            parameters["time_spent_seconds"] = clamp(
                parameters["time_spent_seconds"], 0, MAX_TIME_SPENT_SECONDS
            )
        return parameters


class UserInteractionStrategy(EventProcessingStrategy):
    """UI interaction events: screen content and user input never leave the app."""

    event_type = AnalyticsEventType.USER_INTERACTION
    enrichment = {
        "interaction_category": "user_engagement",
        "ui_framework": "flutter",
    }

    def filter_parameters(self, parameters: Dict[str, Any]) -> Dict[str, Any]:
        parameters.pop("screen_content", None)
        parameters.pop("user_input", None)
        return parameters


class GameProgressStrategy(EventProcessingStrategy):
    """Game progress events: bounded score and pattern list."""

    event_type = AnalyticsEventType.GAME_PROGRESS
    enrichment = {
        "game_type": "educational_tower_defense",
        "game_category": "strategy_learning",
        "difficulty_adaptive": True,
    }

    def filter_parameters(self, parameters: Dict[str, Any]) -> Dict[str, Any]:
        if "score" in parameters:
            parameters["score"] = clamp(parameters["score"], 0, MAX_SCORE)
        patterns_used = parameters.get("patterns_used")
        if isinstance(patterns_used, (list, tuple)):
            parameters["patterns_used"] = patterns_used[:MAX_PATTERNS_USED]
        return parameters


class PerformanceStrategy(EventProcessingStrategy):
    """Performance events: bounded duration."""

    event_type = AnalyticsEventType.PERFORMANCE
    enrichment = {
        "performance_tracking": True,
        "optimization_target": "user_experience",
    }

    def filter_parameters(self, parameters: Dict[str, Any]) -> Dict[str, Any]:
        if "duration_ms" in parameters:
            parameters["duration_ms"] = clamp(parameters["duration_ms"], 0, MAX_DURATION_MS)
        return parameters


class ErrorStrategy(EventProcessingStrategy):
    """Error events: capped message, stack traces stripped."""

    event_type = AnalyticsEventType.ERROR
    enrichment = {
        "error_tracking": True,
        "debug_info_included": True,
    }

    def filter_parameters(self, parameters: Dict[str, Any]) -> Dict[str, Any]:
        message = parameters.get("error_message")
        if isinstance(message, str) and len(message) > MAX_ERROR_MESSAGE_LENGTH:
            keep = MAX_ERROR_MESSAGE_LENGTH - len(TRUNCATION_SUFFIX)
            parameters["error_message"] = message[:keep] + TRUNCATION_SUFFIX
        parameters.pop("full_stack_trace", None)
        parameters.pop("stack_trace", None)
        return parameters


class CustomEducationalStrategy(EventProcessingStrategy):
    """Custom educational events: bounded parameter count."""

    event_type = AnalyticsEventType.CUSTOM_EDUCATIONAL
    enrichment = {
        "custom_educational_event": True,
        "learning_analytics": True,
        "educational_value": "custom",
    }

    def filter_parameters(self, parameters: Dict[str, Any]) -> Dict[str, Any]:
        if len(parameters) <= MAX_CUSTOM_PARAMETERS:
            return parameters
        return dict(list(parameters.items())[:MAX_CUSTOM_PARAMETERS])


DEFAULT_STRATEGIES = (
    PatternLearningStrategy,
    UserInteractionStrategy,
    GameProgressStrategy,
    PerformanceStrategy,
    ErrorStrategy,
    CustomEducationalStrategy,
)
