"""Crash report handlers, one per kind of failure."""
from abc import ABC, abstractmethod
from typing import Any, Dict

from pattern_telemetry.domain.base.ports.crash_reporting_port import CrashReportingBackendPort
from pattern_telemetry.domain.crash.report import CrashReport
from pattern_telemetry.domain.crash.value_objects import CrashCategory, CrashSeverity
from pattern_telemetry.infrastructure.logging.logger import get_logger

MAX_APP_STATE_KEYS = 5


class ErrorHandler(ABC):
    """
    A predicate/action pair in the error handler chain.

    ``can_handle`` decides whether the handler takes a report; ``handle_error``
    reports it through the crash reporting backend. Handlers do not know about
    each other: ordering belongs to the chain.
    """

    def __init__(self, backend: CrashReportingBackendPort):
        self._backend = backend
        self._logger = get_logger(__name__)

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def can_handle(self, report: CrashReport) -> bool:
        """Check if this handler takes the report."""

    @abstractmethod
    async def handle_error(self, report: CrashReport) -> None:
        """Report the crash."""

    async def _record(
        self,
        report: CrashReport,
        label: str,
        fatal: bool,
        information: Dict[str, Any],
    ) -> bool:
        """Send the report to the backend with handler-specific information."""
        accepted = await self._backend.record_error(
            report.exception,
            report.stack_trace,
            reason=f"{label}: {report.reason or report.short_description}",
            fatal=fatal,
            context={**report.to_backend_map(), "handler": self.name, **information},
        )
        if not accepted:
            self._logger.warning(f"{self.name}: crash backend did not accept {report.short_description}")
        return accepted


class CriticalErrorHandler(ErrorHandler):
    """Critical errors: reported as fatal and flushed immediately."""

    def can_handle(self, report: CrashReport) -> bool:
        return report.severity == CrashSeverity.CRITICAL

    async def handle_error(self, report: CrashReport) -> None:
        self._logger.error(f"CRITICAL ERROR: {report.short_description}")

        await self._backend.set_custom_key("error_severity", "critical")
        await self._backend.set_custom_key("immediate_attention", True)
        await self._backend.set_custom_key("error_timestamp", report.timestamp.isoformat())
        await self._backend.log(f"CRITICAL ERROR DETAILS: {report.detailed_description}")

        await self._record(report, "CRITICAL", fatal=True, information={"urgency": "immediate"})
        await self._backend.send_unsent_reports()

        self._logger.error("Critical error reported and sent immediately")


class GameLogicErrorHandler(ErrorHandler):
    """Game mechanics errors, reported with a sample of the game state."""

    def can_handle(self, report: CrashReport) -> bool:
        return report.category == CrashCategory.GAME_LOGIC

    async def handle_error(self, report: CrashReport) -> None:
        self._logger.warning(f"GAME LOGIC ERROR: {report.short_description}")

        operation = report.context.get("operation", "unknown")
        await self._backend.set_custom_key("error_category", "game_logic")
        await self._backend.set_custom_key("game_operation", operation)
        await self._backend.set_custom_key("affects_gameplay", True)

        if report.app_state:
            await self._backend.set_custom_key("game_state_available", True)
            for key, value in list(report.app_state.items())[:MAX_APP_STATE_KEYS]:
                await self._backend.set_custom_key(f"game_{key}", str(value))

        await self._backend.log(f"GAME LOGIC ERROR: Operation={operation}, State={dict(report.app_state)}")
        await self._record(
            report,
            "GAME LOGIC",
            fatal=report.is_fatal,
            information={"category": "game_mechanics", "debug_priority": "high"},
        )


class EducationalContentErrorHandler(ErrorHandler):
    """Errors in pattern lessons and other learning content. Never fatal."""

    def can_handle(self, report: CrashReport) -> bool:
        return report.category == CrashCategory.EDUCATIONAL or report.is_educational_error

    async def handle_error(self, report: CrashReport) -> None:
        self._logger.warning(f"EDUCATIONAL CONTENT ERROR: {report.short_description}")

        pattern_name = report.context.get("pattern_name", "unknown")
        learning_phase = report.context.get("learning_phase", "unknown")
        await self._backend.set_custom_key("error_category", "educational")
        await self._backend.set_custom_key("pattern_name", pattern_name)
        await self._backend.set_custom_key("learning_phase", learning_phase)
        await self._backend.set_custom_key("affects_learning", True)
        if "pattern_category" in report.context:
            await self._backend.set_custom_key("pattern_category", report.context["pattern_category"])

        await self._backend.log(f"EDUCATIONAL ERROR: Pattern={pattern_name}, Phase={learning_phase}")
        await self._record(
            report,
            "EDUCATIONAL",
            fatal=False,
            information={"category": "learning_experience", "educational_impact": "high"},
        )


class UIErrorHandler(ErrorHandler):
    """UI rendering and interaction errors. Never fatal."""

    def can_handle(self, report: CrashReport) -> bool:
        return report.category == CrashCategory.UI

    async def handle_error(self, report: CrashReport) -> None:
        self._logger.warning(f"UI ERROR: {report.short_description}")

        widget_name = report.context.get("widget_name", "unknown")
        user_action = report.context.get("user_action", "none")
        await self._backend.set_custom_key("error_category", "ui_rendering")
        await self._backend.set_custom_key("widget_name", widget_name)
        await self._backend.set_custom_key("user_action", user_action)
        if report.user_actions:
            await self._backend.set_custom_key("user_actions_count", len(report.user_actions))
            await self._backend.set_custom_key("last_user_action", report.user_actions[-1])

        await self._backend.log(f"UI ERROR: Widget={widget_name}, Action={user_action}")
        await self._record(
            report,
            "UI ERROR",
            fatal=False,
            information={"category": "ui_interaction", "affects_user_experience": True},
        )


class NetworkErrorHandler(ErrorHandler):
    """Network errors. Status 0 or 5xx marks a connectivity issue worth retrying."""

    def can_handle(self, report: CrashReport) -> bool:
        return report.category == CrashCategory.NETWORK

    async def handle_error(self, report: CrashReport) -> None:
        self._logger.warning(f"NETWORK ERROR: {report.short_description}")

        endpoint = report.context.get("endpoint", "unknown")
        status_code = report.context.get("status_code")
        if not isinstance(status_code, int) or isinstance(status_code, bool):
            status_code = 0
        connectivity_issue = status_code == 0 or status_code >= 500

        await self._backend.set_custom_key("error_category", "network")
        await self._backend.set_custom_key("endpoint", endpoint)
        await self._backend.set_custom_key("status_code", status_code)
        await self._backend.set_custom_key("method", report.context.get("method", "unknown"))
        await self._backend.set_custom_key("connectivity_issue", connectivity_issue)

        await self._backend.log(f"NETWORK ERROR: {endpoint} [{status_code}]")
        await self._record(
            report,
            "NETWORK",
            fatal=False,
            information={"category": "connectivity", "retry_recommended": connectivity_issue},
        )


class GeneralErrorHandler(ErrorHandler):
    """Catch-all handler; takes every report that reaches it."""

    def can_handle(self, report: CrashReport) -> bool:
        return True

    async def handle_error(self, report: CrashReport) -> None:
        self._logger.info(f"GENERAL ERROR: {report.short_description}")

        await self._backend.set_custom_key("error_category", "general")
        await self._backend.set_custom_key("handler_type", "fallback")
        await self._backend.set_custom_key("needs_categorization", True)

        await self._backend.log(f"GENERAL ERROR: {report.reason} [{report.category.display_name}]")
        await self._record(
            report,
            "GENERAL",
            fatal=report.is_fatal,
            information={"category": "uncategorized", "needs_review": True},
        )
