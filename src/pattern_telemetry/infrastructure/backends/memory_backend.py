"""In-memory backends that record every call, for development and tests."""
from typing import Any, Dict, List, Optional, Tuple

from pattern_telemetry.domain.base.ports.crash_reporting_port import CrashReportingBackendPort
from pattern_telemetry.domain.base.ports.telemetry_port import TelemetryBackendPort


class InMemoryTelemetryBackend(TelemetryBackendPort):
    """Records sent events. ``accept`` controls what ``log_event`` returns."""

    def __init__(self, accept: bool = True):
        self.accept = accept
        self.events: List[Tuple[str, Dict[str, Any]]] = []
        self.user_id: Optional[str] = None
        self.user_properties: Dict[str, str] = {}

    async def log_event(self, name: str, parameters: Dict[str, Any]) -> bool:
        if self.accept:
            self.events.append((name, dict(parameters)))
        return self.accept

    async def set_user_id(self, user_id: str) -> None:
        self.user_id = user_id

    async def set_user_property(self, name: str, value: str) -> None:
        self.user_properties[name] = value

    async def reset_analytics_data(self) -> None:
        self.events.clear()
        self.user_id = None
        self.user_properties.clear()

    def event_names(self) -> List[str]:
        return [name for name, _ in self.events]


class InMemoryCrashReportingBackend(CrashReportingBackendPort):
    """Records crash reports, breadcrumbs and custom keys."""

    def __init__(self, accept: bool = True):
        self.accept = accept
        self.errors: List[Dict[str, Any]] = []
        self.logs: List[str] = []
        self.custom_keys: Dict[str, Any] = {}
        self.user_identifier: Optional[str] = None
        self.flush_count = 0

    async def record_error(
        self,
        exception: Any,
        stack_trace: Optional[str],
        reason: Optional[str] = None,
        fatal: bool = False,
        context: Optional[Dict[str, Any]] = None,
    ) -> bool:
        if self.accept:
            self.errors.append({
                "exception": exception,
                "stack_trace": stack_trace,
                "reason": reason,
                "fatal": fatal,
                "context": dict(context or {}),
            })
        return self.accept

    async def log(self, message: str) -> None:
        self.logs.append(message)

    async def set_custom_key(self, key: str, value: Any) -> None:
        self.custom_keys[key] = value

    async def set_user_identifier(self, identifier: str) -> None:
        self.user_identifier = identifier

    async def send_unsent_reports(self) -> None:
        self.flush_count += 1
