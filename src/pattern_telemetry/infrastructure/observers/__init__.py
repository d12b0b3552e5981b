"""Statistics observers fed by the observer bus."""

from .error_tracking import ErrorTrackingObserver
from .game_performance import GamePerformanceObserver
from .learning_progress import LearningProgressObserver
from .user_engagement import UserEngagementObserver

__all__ = [
    "LearningProgressObserver",
    "GamePerformanceObserver",
    "UserEngagementObserver",
    "ErrorTrackingObserver",
]
