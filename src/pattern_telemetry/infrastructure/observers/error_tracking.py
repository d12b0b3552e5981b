"""Error tracking observer."""
from collections import deque
from typing import Any, Deque, Dict, List, Optional

from pattern_telemetry.domain.analytics.event_types import AnalyticsEventType
from pattern_telemetry.domain.analytics.events import AnalyticsEvent
from pattern_telemetry.domain.base.ports.observer_port import AnalyticsObserver

RECENT_ERRORS_REPORTED = 10


class ErrorTrackingObserver(AnalyticsObserver):
    """Counts errors by type and keeps the most recent ones."""

    def __init__(self, max_error_history: int = 50):
        self.max_error_history = max_error_history
        self._error_counts: Dict[str, int] = {}
        self._recent_errors: Deque[Dict[str, Any]] = deque(maxlen=max_error_history)

    def on_event(self, event: AnalyticsEvent) -> None:
        if event.event_type != AnalyticsEventType.ERROR:
            return

        error_type = event.parameters.get("error_type")
        if not isinstance(error_type, str):
            error_type = "unknown"

        self._error_counts[error_type] = self._error_counts.get(error_type, 0) + 1
        self._recent_errors.append({
            "type": error_type,
            "message": event.parameters.get("error_message"),
            "context": event.parameters.get("context"),
            "timestamp": event.timestamp.isoformat() if event.timestamp else None,
        })

    @property
    def most_common_error(self) -> Optional[str]:
        if not self._error_counts:
            return None
        return max(self._error_counts.items(), key=lambda item: item[1])[0]

    def get_error_stats(self) -> Dict[str, Any]:
        recent: List[Dict[str, Any]] = list(self._recent_errors)[:RECENT_ERRORS_REPORTED]
        return {
            "total_errors": sum(self._error_counts.values()),
            "error_types": dict(self._error_counts),
            "recent_errors": recent,
            "most_common_error": self.most_common_error,
        }
