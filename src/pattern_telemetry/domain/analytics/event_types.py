"""
Analytics Event Types

Defines the event categories used to select a processing strategy.
"""

from enum import Enum


class AnalyticsEventType(str, Enum):
    """Analytics event categories."""

    # Educational events
    PATTERN_LEARNING = "pattern_learning"
    CUSTOM_EDUCATIONAL = "custom_educational"

    # Gameplay and UI events
    USER_INTERACTION = "user_interaction"
    GAME_PROGRESS = "game_progress"

    # Diagnostics
    PERFORMANCE = "performance"
    ERROR = "error"

    @classmethod
    def is_valid(cls, event_type: str) -> bool:
        """Check if an event type string is valid."""
        try:
            cls(event_type)
            return True
        except ValueError:
            return False
