"""Game performance observer."""
from collections import deque
from typing import Any, Deque, Dict, List

from pattern_telemetry.domain.analytics.event_types import AnalyticsEventType
from pattern_telemetry.domain.analytics.events import AnalyticsEvent
from pattern_telemetry.domain.base.ports.observer_port import AnalyticsObserver

MIN_SCORES_FOR_TREND = 4
RECENT_WINDOW = 3
IMPROVING_RATIO = 1.1
DECLINING_RATIO = 0.9


class GamePerformanceObserver(AnalyticsObserver):
    """Tracks recent scores and pattern usage from game progress events."""

    def __init__(self, max_score_history: int = 10):
        self.max_score_history = max_score_history
        self._scores: Deque[float] = deque(maxlen=max_score_history)
        self._pattern_usage: Dict[str, int] = {}

    def on_event(self, event: AnalyticsEvent) -> None:
        if event.event_type != AnalyticsEventType.GAME_PROGRESS:
            return

        score = event.parameters.get("score")
        if isinstance(score, (int, float)) and not isinstance(score, bool):
            self._scores.append(score)

        patterns_used = event.parameters.get("patterns_used")
        if isinstance(patterns_used, (list, tuple)):
            for pattern in patterns_used:
                if isinstance(pattern, str):
                    self._pattern_usage[pattern] = self._pattern_usage.get(pattern, 0) + 1

    @property
    def performance_trend(self) -> str:
        """
        Compare the average of the last three scores with the earlier ones.

        Returns ``insufficient_data`` below four scores, otherwise
        ``improving`` (> 10% better), ``declining`` (> 10% worse) or ``stable``.
        """
        if len(self._scores) < MIN_SCORES_FOR_TREND:
            return "insufficient_data"

        scores = list(self._scores)
        recent = scores[-RECENT_WINDOW:]
        earlier = scores[:-RECENT_WINDOW]
        recent_avg = sum(recent) / len(recent)
        earlier_avg = sum(earlier) / len(earlier)

        if recent_avg > earlier_avg * IMPROVING_RATIO:
            return "improving"
        if recent_avg < earlier_avg * DECLINING_RATIO:
            return "declining"
        return "stable"

    def _most_used_patterns(self) -> List[str]:
        return [
            name for name, _ in sorted(
                self._pattern_usage.items(), key=lambda item: item[1], reverse=True
            )
        ]

    def get_performance_stats(self) -> Dict[str, Any]:
        scores = list(self._scores)
        return {
            "average_score": sum(scores) / len(scores) if scores else 0,
            "recent_scores": scores,
            "most_used_patterns": self._most_used_patterns(),
            "pattern_usage": dict(self._pattern_usage),
            "performance_trend": self.performance_trend,
        }
