"""Backends that write telemetry and crash reports through the structured logger."""
from typing import Any, Dict, Optional

from pattern_telemetry.domain.base.ports.crash_reporting_port import CrashReportingBackendPort
from pattern_telemetry.domain.base.ports.telemetry_port import TelemetryBackendPort
from pattern_telemetry.infrastructure.logging.logger import get_logger


class LoggingTelemetryBackend(TelemetryBackendPort):
    """Logs every analytics event as a structured log entry."""

    def __init__(self):
        self._logger = get_logger(__name__)
        self._user_id: Optional[str] = None

    async def log_event(self, name: str, parameters: Dict[str, Any]) -> bool:
        self._logger.info("analytics_event", event_name=name, user_id=self._user_id, parameters=parameters)
        return True

    async def set_user_id(self, user_id: str) -> None:
        self._user_id = user_id
        self._logger.debug(f"Analytics user set: {user_id}")

    async def set_user_property(self, name: str, value: str) -> None:
        self._logger.debug("analytics_user_property", property_name=name, property_value=value)

    async def reset_analytics_data(self) -> None:
        self._user_id = None
        self._logger.info("Analytics data reset")


class LoggingCrashReportingBackend(CrashReportingBackendPort):
    """Logs every crash report, breadcrumb and custom key."""

    def __init__(self):
        self._logger = get_logger(__name__)
        self._custom_keys: Dict[str, Any] = {}

    async def record_error(
        self,
        exception: Any,
        stack_trace: Optional[str],
        reason: Optional[str] = None,
        fatal: bool = False,
        context: Optional[Dict[str, Any]] = None,
    ) -> bool:
        log = self._logger.critical if fatal else self._logger.error
        log(
            "crash_report",
            exception_type=type(exception).__name__,
            exception_message=str(exception),
            reason=reason,
            fatal=fatal,
            custom_keys=dict(self._custom_keys),
            context=context or {},
            stack_trace=stack_trace,
        )
        return True

    async def log(self, message: str) -> None:
        self._logger.info(f"Crash breadcrumb: {message}")

    async def set_custom_key(self, key: str, value: Any) -> None:
        self._custom_keys[key] = value

    async def set_user_identifier(self, identifier: str) -> None:
        self._custom_keys["user_identifier"] = identifier

    async def send_unsent_reports(self) -> None:
        self._logger.debug("No unsent crash reports to send")
