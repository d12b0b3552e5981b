"""Crash Reporting Service - routes crash reports through the handler chain."""
import asyncio
from typing import Any, Dict, Optional, Set

from pattern_telemetry.domain.base.ports.crash_reporting_port import CrashReportingBackendPort
from pattern_telemetry.domain.crash.report import CrashReport
from pattern_telemetry.infrastructure.error.handler_chain import ErrorHandlerChain
from pattern_telemetry.infrastructure.logging.logger import get_logger


class CrashReportingService:
    """
    Service for reporting crashes.

    Every report goes through the error handler chain exactly once. The
    service never raises on reporting failure; problems are logged.
    """

    def __init__(
        self,
        chain: ErrorHandlerChain,
        backend: CrashReportingBackendPort,
        enabled: bool = True,
    ):
        self._chain = chain
        self._backend = backend
        self._enabled = enabled
        self._pending_tasks: Set["asyncio.Task[Any]"] = set()
        self._logger = get_logger(__name__)

    @property
    def is_enabled(self) -> bool:
        return self._enabled

    def set_enabled(self, enabled: bool) -> None:
        """Enable or disable crash reporting."""
        self._enabled = enabled
        self._logger.info(f"Crash reporting {'enabled' if enabled else 'disabled'}")

    async def handle(self, report: CrashReport) -> Optional[str]:
        """
        Dispatch a report to the handler chain.

        Returns:
            Name of the handler that took the report, or None when disabled
        """
        if not self._enabled:
            self._logger.debug(f"Crash reporting disabled, skipping {report.short_description}")
            return None
        try:
            return await self._chain.handle(report)
        except Exception as e:
            self._logger.error(f"Error handler chain failed for {report.short_description}: {e}")
            return None

    async def record_error(
        self,
        exception: BaseException,
        reason: Optional[str] = None,
        fatal: bool = False,
        context: Optional[Dict[str, Any]] = None,
    ) -> Optional[str]:
        """Build a report for a caught exception and handle it."""
        report = CrashReport.from_exception(exception, reason=reason, fatal=fatal, context=context)
        return await self.handle(report)

    async def log(self, message: str) -> None:
        """Leave a breadcrumb for subsequent crash reports."""
        if not self._enabled:
            return
        try:
            await self._backend.log(message)
        except Exception as e:
            self._logger.error(f"Failed to log crash breadcrumb: {e}")

    async def set_user_identifier(self, identifier: str) -> None:
        try:
            await self._backend.set_user_identifier(identifier)
        except Exception as e:
            self._logger.error(f"Failed to set crash user identifier: {e}")

    def install_loop_exception_handler(self, loop: asyncio.AbstractEventLoop) -> None:
        """Route exceptions the event loop could not deliver through the chain."""

        def handle_loop_exception(loop: asyncio.AbstractEventLoop, context: Dict[str, Any]) -> None:
            exception = context.get("exception")
            if exception is None:
                exception = RuntimeError(context.get("message", "Unhandled error in event loop"))
            report = CrashReport.from_unhandled(exception, source="event_loop")
            task = loop.create_task(self.handle(report))
            self._pending_tasks.add(task)
            task.add_done_callback(self._pending_tasks.discard)

        loop.set_exception_handler(handle_loop_exception)
        self._logger.debug("Installed event loop exception handler")

    async def wait_pending(self) -> None:
        """Wait for reports scheduled by the event loop exception handler."""
        if self._pending_tasks:
            await asyncio.gather(*tuple(self._pending_tasks))
