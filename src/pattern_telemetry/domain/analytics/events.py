"""Analytics event model - immutable record of a trackable occurrence."""
from datetime import datetime, timedelta, timezone
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic import ValidationError as PydanticValidationError

from pattern_telemetry.domain.analytics.event_types import AnalyticsEventType
from pattern_telemetry.domain.analytics.payloads import payload_for
from pattern_telemetry.domain.core.exceptions import ValidationError

_SCALAR_TYPES = (str, int, float, bool)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _empty_parameters() -> Mapping[str, Any]:
    return MappingProxyType({})


def _seconds(value: Union[timedelta, int, float]) -> int:
    if isinstance(value, timedelta):
        return int(value.total_seconds())
    return int(value)


def _validated(event_type: AnalyticsEventType, parameters: Dict[str, Any]) -> Dict[str, Any]:
    """Validate a parameter map against its category payload."""
    try:
        payload_for(event_type).model_validate(parameters)
    except PydanticValidationError as e:
        raise ValidationError(
            f"Invalid {event_type.value} parameters", details=e.errors()
        ) from e
    return parameters


class AnalyticsEvent(BaseModel):
    """
    Immutable analytics event.

    Processing never mutates an event: strategies derive a new event through
    ``with_parameters`` and the original stays as it was constructed. The
    parameter map is read-only and list values are stored as tuples, so every
    observer of a broadcast sees the event exactly as it was published.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    event_type: AnalyticsEventType
    parameters: Mapping[str, Any] = Field(default_factory=_empty_parameters)
    timestamp: Optional[datetime] = None

    @field_validator("parameters")
    @classmethod
    def validate_parameters(cls, v: Mapping[str, Any]) -> Mapping[str, Any]:
        """
        Validate parameter values.

        Args:
            v: Parameter map to validate

        Returns:
            A read-only copy of the parameter map, lists stored as tuples

        Raises:
            ValueError: If a value is not a scalar, None or a list of those
        """
        copied: Dict[str, Any] = {}
        for key, value in v.items():
            if isinstance(value, (list, tuple)):
                for item in value:
                    if item is not None and not isinstance(item, _SCALAR_TYPES):
                        raise ValueError(f"Parameter '{key}' contains a non-scalar item")
                copied[key] = tuple(value)
            elif value is None or isinstance(value, _SCALAR_TYPES):
                copied[key] = value
            else:
                raise ValueError(
                    f"Parameter '{key}' has unsupported type {type(value).__name__}"
                )
        return MappingProxyType(copied)

    @field_serializer("parameters")
    def serialize_parameters(self, parameters: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            key: list(value) if isinstance(value, tuple) else value
            for key, value in parameters.items()
        }

    def with_parameters(self, parameters: Mapping[str, Any]) -> "AnalyticsEvent":
        """Create a new event with the same identity and a different parameter map."""
        return AnalyticsEvent(
            name=self.name,
            event_type=self.event_type,
            parameters=parameters,
            timestamp=self.timestamp,
        )

    def flat_parameters(self) -> Dict[str, Union[str, int, float, bool]]:
        """Flatten parameters for telemetry backends (sequences joined, None dropped)."""
        flat: Dict[str, Union[str, int, float, bool]] = {}
        for key, value in self.parameters.items():
            if value is None:
                continue
            if isinstance(value, tuple):
                flat[key] = ",".join(str(item) for item in value if item is not None)
            else:
                flat[key] = value
        return flat

    # =========================================================================
    # FACTORIES
    # =========================================================================

    @classmethod
    def app_initialized(cls, platform: str = "python") -> "AnalyticsEvent":
        now = _utcnow()
        return cls(
            name="app_initialized",
            event_type=AnalyticsEventType.USER_INTERACTION,
            parameters={"platform": platform, "event_time": now.isoformat()},
            timestamp=now,
        )

    @classmethod
    def pattern_learned(
        cls,
        pattern_name: str,
        pattern_category: str,
        difficulty: str,
        time_spent: Union[timedelta, int],
        completed: bool,
    ) -> "AnalyticsEvent":
        """Create a pattern learning event."""
        parameters = _validated(AnalyticsEventType.PATTERN_LEARNING, {
            "pattern_name": pattern_name,
            "pattern_category": pattern_category,
            "difficulty": difficulty,
            "time_spent_seconds": _seconds(time_spent),
            "completed": completed,
            "educational_value": "high",
        })
        return cls(
            name="pattern_learned",
            event_type=AnalyticsEventType.PATTERN_LEARNING,
            parameters=parameters,
            timestamp=_utcnow(),
        )

    @classmethod
    def game_progress_made(
        cls,
        level: str,
        score: int,
        patterns_used: List[str],
        completed: bool,
    ) -> "AnalyticsEvent":
        """Create a game progress event."""
        parameters = _validated(AnalyticsEventType.GAME_PROGRESS, {
            "level": level,
            "score": score,
            "patterns_used": list(patterns_used),
            "patterns_count": len(patterns_used),
            "level_completed": completed,
            "game_type": "tower_defense",
        })
        return cls(
            name="game_progress",
            event_type=AnalyticsEventType.GAME_PROGRESS,
            parameters=parameters,
            timestamp=_utcnow(),
        )

    @classmethod
    def code_interaction(cls, pattern_name: str, language: str, action: str) -> "AnalyticsEvent":
        """Create a code example interaction event ('view', 'copy', 'expand')."""
        return cls(
            name="code_interaction",
            event_type=AnalyticsEventType.USER_INTERACTION,
            parameters={
                "pattern_name": pattern_name,
                "code_language": language,
                "action": action,
                "interaction_type": "educational",
            },
            timestamp=_utcnow(),
        )

    @classmethod
    def user_engagement(
        cls,
        screen_name: str,
        time_spent: Union[timedelta, int],
        interaction_count: int,
    ) -> "AnalyticsEvent":
        seconds = _seconds(time_spent)
        parameters = _validated(AnalyticsEventType.USER_INTERACTION, {
            "screen_name": screen_name,
            "time_spent_seconds": seconds,
            "interaction_count": interaction_count,
            "engagement_level": "high" if seconds // 60 > 2 else "low",
        })
        return cls(
            name="user_engagement",
            event_type=AnalyticsEventType.USER_INTERACTION,
            parameters=parameters,
            timestamp=_utcnow(),
        )

    @classmethod
    def screen_view(
        cls,
        screen_name: str,
        screen_class: Optional[str] = None,
        parameters: Optional[Dict[str, Any]] = None,
    ) -> "AnalyticsEvent":
        """Create a screen view event."""
        merged = _validated(AnalyticsEventType.USER_INTERACTION, {
            **(parameters or {}),
            "screen_name": screen_name,
            "screen_class": screen_class or "default",
        })
        return cls(
            name="screen_view",
            event_type=AnalyticsEventType.USER_INTERACTION,
            parameters=merged,
            timestamp=_utcnow(),
        )

    @classmethod
    def performance_measurement(
        cls,
        operation: str,
        duration: Union[timedelta, int, float],
        success: bool,
    ) -> "AnalyticsEvent":
        """Create a performance measurement event; int/float durations are milliseconds."""
        if isinstance(duration, timedelta):
            duration_ms = int(duration.total_seconds() * 1000)
        else:
            duration_ms = int(duration)
        parameters = _validated(AnalyticsEventType.PERFORMANCE, {
            "operation": operation,
            "duration_ms": duration_ms,
            "success": success,
            "performance_category": "app_performance",
        })
        return cls(
            name="performance_measurement",
            event_type=AnalyticsEventType.PERFORMANCE,
            parameters=parameters,
            timestamp=_utcnow(),
        )

    @classmethod
    def error_occurred(
        cls,
        error_type: str,
        error_message: str,
        stack_trace: Optional[str] = None,
        context: Optional[str] = None,
    ) -> "AnalyticsEvent":
        """Create an error tracking event. The stack trace itself is never sent."""
        parameters = _validated(AnalyticsEventType.ERROR, {
            "error_type": error_type,
            "error_message": error_message,
            "has_stack_trace": stack_trace is not None,
            "context": context or "unknown",
            "severity": "error",
        })
        return cls(
            name="error_occurred",
            event_type=AnalyticsEventType.ERROR,
            parameters=parameters,
            timestamp=_utcnow(),
        )

    @classmethod
    def custom_educational(cls, event_name: str, custom_parameters: Dict[str, Any]) -> "AnalyticsEvent":
        parameters = _validated(AnalyticsEventType.CUSTOM_EDUCATIONAL, {
            **custom_parameters,
            "is_educational": True,
            "custom_event": True,
        })
        return cls(
            name=event_name,
            event_type=AnalyticsEventType.CUSTOM_EDUCATIONAL,
            parameters=parameters,
            timestamp=_utcnow(),
        )

    @classmethod
    def tower_placed(
        cls,
        tower_type: str,
        pattern_implemented: str,
        position: Dict[str, int],
        cost: int,
    ) -> "AnalyticsEvent":
        """Create a tower placement event."""
        parameters = _validated(AnalyticsEventType.GAME_PROGRESS, {
            "tower_type": tower_type,
            "pattern_implemented": pattern_implemented,
            "position_x": position.get("x"),
            "position_y": position.get("y"),
            "cost": cost,
            "game_mechanic": "tower_placement",
        })
        return cls(
            name="tower_placed",
            event_type=AnalyticsEventType.GAME_PROGRESS,
            parameters=parameters,
            timestamp=_utcnow(),
        )

    @classmethod
    def enemy_defeated(
        cls,
        enemy_type: str,
        defeat_method: str,
        patterns_involved: List[str],
        points_earned: int,
    ) -> "AnalyticsEvent":
        """Create an enemy defeat event."""
        parameters = _validated(AnalyticsEventType.GAME_PROGRESS, {
            "enemy_type": enemy_type,
            "defeat_method": defeat_method,
            "patterns_involved": list(patterns_involved),
            "patterns_count": len(patterns_involved),
            "points_earned": points_earned,
            "game_mechanic": "combat",
        })
        return cls(
            name="enemy_defeated",
            event_type=AnalyticsEventType.GAME_PROGRESS,
            parameters=parameters,
            timestamp=_utcnow(),
        )

    def __str__(self) -> str:
        return f"AnalyticsEvent(name={self.name}, type={self.event_type.value}, timestamp={self.timestamp})"
