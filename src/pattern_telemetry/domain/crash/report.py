"""Crash report model - immutable description of a failure."""
import json
import traceback
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from pattern_telemetry.domain.crash.value_objects import CrashCategory, CrashSeverity

# Context flags that pin a category regardless of the exception
_CATEGORY_FLAGS: Tuple[Tuple[str, CrashCategory], ...] = (
    ("educational_error", CrashCategory.EDUCATIONAL),
    ("game_logic_error", CrashCategory.GAME_LOGIC),
    ("ui_error", CrashCategory.UI),
    ("network_error", CrashCategory.NETWORK),
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _freeze(value: Any) -> Any:
    """Read-only deep copy of mappings and lists; other values are kept as they are."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [_thaw(item) for item in value]
    return value


def _empty_map() -> Mapping[str, Any]:
    return MappingProxyType({})


def format_stack_trace(exception: Any) -> Optional[str]:
    """Render the traceback attached to an exception, if any."""
    tb = getattr(exception, "__traceback__", None)
    if tb is None:
        return None
    return "".join(traceback.format_exception(type(exception), exception, tb))


def severity_for_exception(exception: Any) -> CrashSeverity:
    """Determine severity from the exception type."""
    if isinstance(exception, (MemoryError, RecursionError, SystemError)):
        return CrashSeverity.CRITICAL
    if isinstance(exception, AssertionError):
        return CrashSeverity.HIGH
    if isinstance(exception, (json.JSONDecodeError, UnicodeError)):
        return CrashSeverity.LOW
    return CrashSeverity.MODERATE


def category_for_exception(exception: Any) -> CrashCategory:
    """Categorize an exception from its type and message."""
    if isinstance(exception, (ConnectionError, TimeoutError)):
        return CrashCategory.NETWORK

    text = str(exception).lower()
    if "render" in text or "widget" in text:
        return CrashCategory.UI
    if "http" in text or "socket" in text or "connection" in text:
        return CrashCategory.NETWORK
    if "database" in text or "storage" in text:
        return CrashCategory.STORAGE
    return CrashCategory.RUNTIME


def category_for_context(exception: Any, context: Dict[str, Any]) -> CrashCategory:
    """Categorize using explicit context flags first, then the exception."""
    for flag, category in _CATEGORY_FLAGS:
        if context.get(flag) is True:
            return category
    return category_for_exception(exception)


class CrashReport(BaseModel):
    """
    Crash report consumed by the error handler chain.

    A report is created at the point of failure, handed to the chain exactly
    once and then discarded. ``with_user_action`` and ``with_context`` return
    new reports; the original is never modified.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    exception: Any
    stack_trace: Optional[str] = None
    timestamp: datetime = Field(default_factory=_utcnow)
    severity: CrashSeverity = CrashSeverity.MODERATE
    category: CrashCategory = CrashCategory.GENERAL
    reason: Optional[str] = None
    context: Mapping[str, Any] = Field(default_factory=_empty_map)
    user_actions: Tuple[str, ...] = ()
    device_info: Mapping[str, Any] = Field(default_factory=_empty_map)
    app_state: Mapping[str, Any] = Field(default_factory=_empty_map)

    @field_validator("context", "device_info", "app_state")
    @classmethod
    def freeze_mapping(cls, v: Mapping[str, Any]) -> Mapping[str, Any]:
        return _freeze(v)

    @field_serializer("context", "device_info", "app_state")
    def serialize_mapping(self, value: Mapping[str, Any]) -> Dict[str, Any]:
        return _thaw(value)

    # =========================================================================
    # FACTORIES
    # =========================================================================

    @classmethod
    def from_exception(
        cls,
        exception: BaseException,
        stack_trace: Optional[str] = None,
        reason: Optional[str] = None,
        fatal: bool = False,
        context: Optional[Dict[str, Any]] = None,
    ) -> "CrashReport":
        """Create a report for an error caught by application code."""
        context = context or {}
        return cls(
            exception=exception,
            stack_trace=stack_trace or format_stack_trace(exception),
            severity=CrashSeverity.CRITICAL if fatal else severity_for_exception(exception),
            category=category_for_context(exception, context),
            reason=reason,
            context={"error_type": "custom_error", "fatal": fatal, **context},
        )

    @classmethod
    def from_unhandled(
        cls,
        exception: BaseException,
        stack_trace: Optional[str] = None,
        source: str = "event_loop",
    ) -> "CrashReport":
        """Create a report for an exception nobody caught."""
        return cls(
            exception=exception,
            stack_trace=stack_trace or format_stack_trace(exception),
            severity=CrashSeverity.CRITICAL,
            category=CrashCategory.RUNTIME,
            reason=f"Unhandled error in {source}",
            context={"error_type": "unhandled_error", "source": source, "platform_error": True},
        )

    @classmethod
    def pattern_learning_error(
        cls,
        pattern_name: str,
        exception: BaseException,
        stack_trace: Optional[str] = None,
        learning_phase: Optional[str] = None,
    ) -> "CrashReport":
        return cls(
            exception=exception,
            stack_trace=stack_trace or format_stack_trace(exception),
            severity=CrashSeverity.MODERATE,
            category=CrashCategory.EDUCATIONAL,
            reason=f"Error during pattern learning: {pattern_name}",
            context={
                "pattern_name": pattern_name,
                "learning_phase": learning_phase or "unknown",
                "educational_error": True,
                "error_type": "pattern_learning",
            },
        )

    @classmethod
    def game_logic_error(
        cls,
        operation: str,
        exception: BaseException,
        stack_trace: Optional[str] = None,
        game_state: Optional[Dict[str, Any]] = None,
    ) -> "CrashReport":
        return cls(
            exception=exception,
            stack_trace=stack_trace or format_stack_trace(exception),
            severity=CrashSeverity.HIGH,
            category=CrashCategory.GAME_LOGIC,
            reason=f"Game logic error: {operation}",
            context={
                "operation": operation,
                "game_logic_error": True,
                "error_type": "game_logic",
            },
            app_state=game_state or {},
        )

    @classmethod
    def ui_rendering_error(
        cls,
        widget: str,
        exception: BaseException,
        stack_trace: Optional[str] = None,
        user_action: Optional[str] = None,
    ) -> "CrashReport":
        return cls(
            exception=exception,
            stack_trace=stack_trace or format_stack_trace(exception),
            severity=CrashSeverity.MODERATE,
            category=CrashCategory.UI,
            reason=f"UI rendering error in: {widget}",
            context={
                "widget_name": widget,
                "user_action": user_action or "unknown",
                "ui_error": True,
                "error_type": "ui_rendering",
            },
            user_actions=(user_action,) if user_action is not None else (),
        )

    @classmethod
    def network_error(
        cls,
        endpoint: str,
        exception: BaseException,
        stack_trace: Optional[str] = None,
        status_code: Optional[int] = None,
        method: Optional[str] = None,
    ) -> "CrashReport":
        return cls(
            exception=exception,
            stack_trace=stack_trace or format_stack_trace(exception),
            severity=CrashSeverity.LOW,
            category=CrashCategory.NETWORK,
            reason=f"Network error: {endpoint}",
            context={
                "endpoint": endpoint,
                "status_code": status_code or 0,
                "method": method or "unknown",
                "network_error": True,
                "error_type": "network",
            },
        )

    # =========================================================================
    # DERIVED VIEWS
    # =========================================================================

    @property
    def exception_type(self) -> str:
        return type(self.exception).__name__

    @property
    def short_description(self) -> str:
        return f"{self.category.display_name}: {self.exception_type}"

    @property
    def detailed_description(self) -> str:
        lines = [
            f"Crash Report - {self.severity.display_name}",
            f"Category: {self.category.display_name}",
            f"Time: {self.timestamp.isoformat()}",
            f"Exception: {self.exception_type} - {self.exception}",
        ]
        if self.reason is not None:
            lines.append(f"Reason: {self.reason}")
        if self.context:
            lines.append(f"Context: {self.context}")
        if self.user_actions:
            lines.append(f"User Actions: {', '.join(self.user_actions)}")
        return "\n".join(lines) + "\n"

    @property
    def is_fatal(self) -> bool:
        return self.severity == CrashSeverity.CRITICAL

    @property
    def is_critical(self) -> bool:
        """Critical crashes need immediate attention."""
        return (
            self.severity == CrashSeverity.CRITICAL
            or (self.category == CrashCategory.GAME_LOGIC and self.severity == CrashSeverity.HIGH)
            or (self.category == CrashCategory.EDUCATIONAL and self.severity == CrashSeverity.HIGH)
        )

    @property
    def is_educational_error(self) -> bool:
        return (
            self.category == CrashCategory.EDUCATIONAL
            or "educational_error" in self.context
            or "pattern_name" in self.context
            or "learning_phase" in self.context
        )

    def to_backend_map(self) -> Dict[str, Any]:
        """Convert to the structured context sent to crash reporting backends."""
        return {
            "exception_type": self.exception_type,
            "exception_message": str(self.exception),
            "timestamp": self.timestamp.isoformat(),
            "severity": self.severity.value,
            "category": self.category.value,
            "reason": self.reason,
            "has_stack_trace": self.stack_trace is not None,
            "user_actions_count": len(self.user_actions),
            "context_keys": list(self.context.keys()),
            **_thaw(self.context),
        }

    def with_user_action(self, action: str) -> "CrashReport":
        return self.model_copy(update={"user_actions": (*self.user_actions, action)})

    def with_context(self, additional_context: Dict[str, Any]) -> "CrashReport":
        return self.model_copy(update={"context": _freeze({**self.context, **additional_context})})

    def __str__(self) -> str:
        return f"CrashReport({self.severity.value} {self.category.value}: {self.exception_type})"
