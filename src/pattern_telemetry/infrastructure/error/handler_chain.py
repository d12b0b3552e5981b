"""Error Handler Chain - routes each crash report to exactly one handler."""
from typing import List, Tuple

from pattern_telemetry.domain.base.ports.crash_reporting_port import CrashReportingBackendPort
from pattern_telemetry.domain.crash.report import CrashReport
from pattern_telemetry.infrastructure.error.handlers import (
    CriticalErrorHandler,
    EducationalContentErrorHandler,
    ErrorHandler,
    GameLogicErrorHandler,
    GeneralErrorHandler,
    NetworkErrorHandler,
    UIErrorHandler,
)
from pattern_telemetry.infrastructure.logging.logger import get_logger

DEFAULT_HANDLER_NAME = "default"


class ErrorHandlerChain:
    """
    Ordered list of error handlers.

    ``handle`` gives the report to the first handler whose predicate accepts
    it and stops there. When no handler accepts it, a built-in default logs a
    warning and forwards the report to the backend. ``handle`` never raises:
    predicate, handler and backend failures are logged.
    """

    def __init__(self, backend: CrashReportingBackendPort):
        self._backend = backend
        self._handlers: List[ErrorHandler] = []
        self._logger = get_logger(__name__)

    def add_handler(self, handler: ErrorHandler) -> "ErrorHandlerChain":
        """Append a handler at the lowest priority so far."""
        self._handlers.append(handler)
        return self

    @property
    def handlers(self) -> Tuple[ErrorHandler, ...]:
        return tuple(self._handlers)

    @property
    def handler_count(self) -> int:
        return len(self._handlers)

    def clear(self) -> None:
        self._handlers.clear()

    async def handle(self, report: CrashReport) -> str:
        """
        Route a report through the chain.

        Args:
            report: Crash report to handle

        Returns:
            Name of the handler that took the report, ``"default"`` when none did
        """
        for handler in self._handlers:
            try:
                matches = handler.can_handle(report)
            except Exception as e:
                self._logger.error(f"Predicate of {handler.name} failed: {e}")
                continue
            if not matches:
                continue

            try:
                await handler.handle_error(report)
            except Exception as e:
                self._logger.error(f"{handler.name} failed to handle {report.short_description}: {e}")
            return handler.name

        await self._handle_unknown(report)
        return DEFAULT_HANDLER_NAME

    async def _handle_unknown(self, report: CrashReport) -> None:
        """Default handler for reports no handler accepted."""
        self._logger.warning(f"Unknown error type, using default handler: {report.short_description}")
        try:
            accepted = await self._backend.record_error(
                report.exception,
                report.stack_trace,
                reason=report.reason,
                fatal=report.is_fatal,
                context=report.to_backend_map(),
            )
        except Exception as e:
            self._logger.error(f"Failed to report to crash backend: {e}")
            return
        if not accepted:
            self._logger.warning(f"Crash backend did not accept {report.short_description}")


def create_standard_chain(backend: CrashReportingBackendPort) -> ErrorHandlerChain:
    """Create the complete chain, most specific handlers first."""
    return (
        ErrorHandlerChain(backend)
        .add_handler(CriticalErrorHandler(backend))
        .add_handler(GameLogicErrorHandler(backend))
        .add_handler(EducationalContentErrorHandler(backend))
        .add_handler(UIErrorHandler(backend))
        .add_handler(NetworkErrorHandler(backend))
        .add_handler(GeneralErrorHandler(backend))
    )


def create_minimal_chain(backend: CrashReportingBackendPort) -> ErrorHandlerChain:
    """Create a chain that only separates critical errors from the rest."""
    return (
        ErrorHandlerChain(backend)
        .add_handler(CriticalErrorHandler(backend))
        .add_handler(GeneralErrorHandler(backend))
    )
