"""Learning progress observer."""
from typing import Any, Dict, List

from pattern_telemetry.domain.analytics.event_types import AnalyticsEventType
from pattern_telemetry.domain.analytics.events import AnalyticsEvent
from pattern_telemetry.domain.base.ports.observer_port import AnalyticsObserver
from pattern_telemetry.infrastructure.logging.logger import get_logger


class LearningProgressObserver(AnalyticsObserver):
    """
    Tracks per-pattern learning attempts and time spent.

    A pattern counts as mastered once it has been attempted
    ``mastery_threshold`` times. Every completed attempt at or past that
    threshold is logged as a learning milestone.
    """

    def __init__(self, mastery_threshold: int = 3):
        self.mastery_threshold = mastery_threshold
        self._pattern_attempts: Dict[str, int] = {}
        self._pattern_time_seconds: Dict[str, float] = {}
        self._logger = get_logger(__name__)

    def on_event(self, event: AnalyticsEvent) -> None:
        if event.event_type != AnalyticsEventType.PATTERN_LEARNING:
            return

        pattern_name = event.parameters.get("pattern_name")
        if not isinstance(pattern_name, str):
            return

        attempts = self._pattern_attempts.get(pattern_name, 0) + 1
        self._pattern_attempts[pattern_name] = attempts

        time_spent = event.parameters.get("time_spent_seconds")
        if isinstance(time_spent, (int, float)) and not isinstance(time_spent, bool):
            self._pattern_time_seconds[pattern_name] = (
                self._pattern_time_seconds.get(pattern_name, 0) + time_spent
            )

        if event.parameters.get("completed") is True and attempts >= self.mastery_threshold:
            self._logger.info(
                f"Learning milestone: {pattern_name} mastered after {attempts} attempts"
            )

    @property
    def mastered_patterns(self) -> List[str]:
        return [
            name for name, attempts in self._pattern_attempts.items()
            if attempts >= self.mastery_threshold
        ]

    def get_learning_stats(self) -> Dict[str, Any]:
        total_seconds = sum(self._pattern_time_seconds.values())
        return {
            "patterns_attempted": len(self._pattern_attempts),
            "total_attempts": sum(self._pattern_attempts.values()),
            "total_learning_time": int(total_seconds // 60),
            "pattern_progress": dict(self._pattern_attempts),
            "mastered_patterns": self.mastered_patterns,
        }
