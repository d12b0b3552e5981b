"""User engagement observer."""
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from pattern_telemetry.domain.analytics.event_types import AnalyticsEventType
from pattern_telemetry.domain.analytics.events import AnalyticsEvent
from pattern_telemetry.domain.base.ports.observer_port import AnalyticsObserver

_TRACKED_TYPES = (
    AnalyticsEventType.USER_INTERACTION,
    AnalyticsEventType.PATTERN_LEARNING,
    AnalyticsEventType.GAME_PROGRESS,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserEngagementObserver(AnalyticsObserver):
    """
    Tracks session length, per-screen interactions and time per activity.

    The session starts with the first tracked event. ``clock`` is injectable
    so session durations can be tested deterministically.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or _utcnow
        self._session_start: Optional[datetime] = None
        self._screen_interactions: Dict[str, int] = {}
        self._activity_time_seconds: Dict[str, float] = {}

    def on_event(self, event: AnalyticsEvent) -> None:
        if event.event_type not in _TRACKED_TYPES:
            return

        if self._session_start is None:
            self._session_start = self._clock()

        screen_name = event.parameters.get("screen_name")
        if isinstance(screen_name, str):
            self._screen_interactions[screen_name] = self._screen_interactions.get(screen_name, 0) + 1

        time_spent = event.parameters.get("time_spent_seconds")
        if isinstance(time_spent, (int, float)) and not isinstance(time_spent, bool):
            self._activity_time_seconds[event.name] = (
                self._activity_time_seconds.get(event.name, 0) + time_spent
            )

    @property
    def session_duration_minutes(self) -> int:
        if self._session_start is None:
            return 0
        return int((self._clock() - self._session_start).total_seconds() // 60)

    @property
    def total_interactions(self) -> int:
        return sum(self._screen_interactions.values())

    @property
    def engagement_level(self) -> str:
        minutes = self.session_duration_minutes
        interactions = self.total_interactions
        if minutes > 15 and interactions > 20:
            return "high"
        if minutes > 5 and interactions > 10:
            return "medium"
        return "low"

    def _most_engaged_screens(self) -> List[str]:
        return [
            name for name, _ in sorted(
                self._screen_interactions.items(), key=lambda item: item[1], reverse=True
            )
        ]

    def get_engagement_stats(self) -> Dict[str, Any]:
        return {
            "session_duration_minutes": self.session_duration_minutes,
            "total_interactions": self.total_interactions,
            "most_engaged_screens": self._most_engaged_screens(),
            "activity_time_distribution": dict(self._activity_time_seconds),
            "engagement_level": self.engagement_level,
        }
