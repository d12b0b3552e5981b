"""Crash reporting backend port."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class CrashReportingBackendPort(ABC):
    """Port for the crash collector used by error handlers."""

    @abstractmethod
    async def record_error(
        self,
        exception: Any,
        stack_trace: Optional[str],
        reason: Optional[str] = None,
        fatal: bool = False,
        context: Optional[Dict[str, Any]] = None,
    ) -> bool:
        """Record an error; returns whether the collector accepted it."""

    @abstractmethod
    async def log(self, message: str) -> None:
        """Leave a breadcrumb message."""

    @abstractmethod
    async def set_custom_key(self, key: str, value: Any) -> None:
        """Attach a custom key to subsequent reports."""

    @abstractmethod
    async def set_user_identifier(self, identifier: str) -> None:
        """Associate subsequent reports with a user."""

    @abstractmethod
    async def send_unsent_reports(self) -> None:
        """Flush reports that have not been delivered yet."""
