"""Telemetry backend port for analytics events."""

from abc import ABC, abstractmethod
from typing import Any, Dict


class TelemetryBackendPort(ABC):
    """
    Port for the analytics collector that receives processed events.

    Implementations return False (or raise ``BackendError``) when a send did
    not go through, and raise ``AuthorizationError`` when sending is not
    permitted at all, for example before consent was given.
    """

    @abstractmethod
    async def log_event(self, name: str, parameters: Dict[str, Any]) -> bool:
        """Send one event with its flat parameter map."""

    @abstractmethod
    async def set_user_id(self, user_id: str) -> None:
        """Associate subsequent events with a user."""

    @abstractmethod
    async def set_user_property(self, name: str, value: str) -> None:
        """Set a user property."""

    @abstractmethod
    async def reset_analytics_data(self) -> None:
        """Drop all collected data for the current user."""
