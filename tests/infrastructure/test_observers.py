"""Tests for the statistics observers."""

from datetime import datetime, timedelta, timezone

import pytest
from structlog.testing import capture_logs

from pattern_telemetry.domain.analytics import AnalyticsEvent, AnalyticsEventType
from pattern_telemetry.infrastructure.observers import (
    ErrorTrackingObserver,
    GamePerformanceObserver,
    LearningProgressObserver,
    UserEngagementObserver,
)


def _learning(pattern_name, seconds=60, completed=True):
    return AnalyticsEvent(
        name="pattern_learned",
        event_type=AnalyticsEventType.PATTERN_LEARNING,
        parameters={
            "pattern_name": pattern_name,
            "pattern_category": "behavioral",
            "completed": completed,
            "time_spent_seconds": seconds,
        },
    )


def _score(score, patterns=None):
    parameters = {"score": score}
    if patterns is not None:
        parameters["patterns_used"] = patterns
    return AnalyticsEvent(
        name="game_progress", event_type=AnalyticsEventType.GAME_PROGRESS, parameters=parameters
    )


class FakeClock:
    def __init__(self):
        self.now = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, minutes):
        self.now += timedelta(minutes=minutes)


class TestLearningProgressObserver:
    """Test learning progress statistics."""

    def test_ignores_other_categories(self):
        observer = LearningProgressObserver()
        observer.on_event(_score(10))
        assert observer.get_learning_stats()["total_attempts"] == 0

    def test_mastery_after_threshold(self):
        observer = LearningProgressObserver(mastery_threshold=3)
        for _ in range(3):
            observer.on_event(_learning("Observer", seconds=40))
        observer.on_event(_learning("Factory", seconds=30))

        stats = observer.get_learning_stats()
        assert stats["patterns_attempted"] == 2
        assert stats["total_attempts"] == 4
        assert stats["total_learning_time"] == 2
        assert stats["pattern_progress"] == {"Observer": 3, "Factory": 1}
        assert stats["mastered_patterns"] == ["Observer"]

    def test_milestone_logged_for_completed_attempts_past_threshold(self):
        observer = LearningProgressObserver(mastery_threshold=2)
        with capture_logs() as logs:
            observer.on_event(_learning("Observer"))
            observer.on_event(_learning("Observer"))
            observer.on_event(_learning("Observer", completed=False))
            observer.on_event(_learning("Observer"))

        milestones = [entry for entry in logs if "Learning milestone" in entry["event"]]
        assert len(milestones) == 2
        assert "after 4 attempts" in milestones[-1]["event"]


class TestGamePerformanceObserver:
    """Test game performance statistics."""

    def test_insufficient_data(self):
        observer = GamePerformanceObserver()
        for score in (10, 20, 30):
            observer.on_event(_score(score))
        assert observer.get_performance_stats()["performance_trend"] == "insufficient_data"

    @pytest.mark.parametrize(
        "scores, expected",
        [
            ([100, 100, 150, 150, 150], "improving"),
            ([100, 100, 50, 50, 50], "declining"),
            ([100, 100, 105, 95, 100], "stable"),
        ],
    )
    def test_trend(self, scores, expected):
        observer = GamePerformanceObserver()
        for score in scores:
            observer.on_event(_score(score))
        assert observer.get_performance_stats()["performance_trend"] == expected

    def test_rolling_window(self):
        observer = GamePerformanceObserver(max_score_history=10)
        for score in range(15):
            observer.on_event(_score(score))
        stats = observer.get_performance_stats()
        assert stats["recent_scores"] == list(range(5, 15))
        assert stats["average_score"] == sum(range(5, 15)) / 10

    def test_most_used_patterns_descending(self):
        observer = GamePerformanceObserver()
        observer.on_event(_score(1, ["Observer", "Factory"]))
        observer.on_event(_score(2, ["Factory"]))
        observer.on_event(_score(3, ["Factory", "Strategy", "Strategy"]))
        assert observer.get_performance_stats()["most_used_patterns"] == [
            "Factory", "Strategy", "Observer"
        ]


class TestUserEngagementObserver:
    """Test engagement statistics with an injected clock."""

    def _interaction(self, screen):
        return AnalyticsEvent(
            name="tap",
            event_type=AnalyticsEventType.USER_INTERACTION,
            parameters={"screen_name": screen},
        )

    def test_no_session_before_first_event(self):
        observer = UserEngagementObserver(clock=FakeClock())
        stats = observer.get_engagement_stats()
        assert stats["session_duration_minutes"] == 0
        assert stats["engagement_level"] == "low"

    def test_high_engagement(self):
        clock = FakeClock()
        observer = UserEngagementObserver(clock=clock)
        for _ in range(21):
            observer.on_event(self._interaction("lesson"))
        clock.advance(16)

        stats = observer.get_engagement_stats()
        assert stats["session_duration_minutes"] == 16
        assert stats["total_interactions"] == 21
        assert stats["engagement_level"] == "high"

    def test_medium_engagement(self):
        clock = FakeClock()
        observer = UserEngagementObserver(clock=clock)
        for _ in range(11):
            observer.on_event(self._interaction("menu"))
        clock.advance(6)
        assert observer.engagement_level == "medium"

    def test_activity_time_and_screens(self):
        observer = UserEngagementObserver(clock=FakeClock())
        observer.on_event(self._interaction("menu"))
        observer.on_event(self._interaction("lesson"))
        observer.on_event(self._interaction("lesson"))
        observer.on_event(_learning("Observer", seconds=30))
        observer.on_event(_learning("Observer", seconds=45))

        stats = observer.get_engagement_stats()
        assert stats["most_engaged_screens"] == ["lesson", "menu"]
        assert stats["activity_time_distribution"] == {"pattern_learned": 75}


class TestErrorTrackingObserver:
    """Test error statistics."""

    def _error(self, error_type, message="boom"):
        return AnalyticsEvent.error_occurred(error_type, message)

    def test_counts_and_most_common(self):
        observer = ErrorTrackingObserver()
        observer.on_event(self._error("ValueError"))
        observer.on_event(self._error("KeyError"))
        observer.on_event(self._error("ValueError"))

        stats = observer.get_error_stats()
        assert stats["total_errors"] == 3
        assert stats["error_types"] == {"ValueError": 2, "KeyError": 1}
        assert stats["most_common_error"] == "ValueError"

    def test_recent_errors_window(self):
        observer = ErrorTrackingObserver(max_error_history=50)
        for i in range(60):
            observer.on_event(self._error("ValueError", message=f"m{i}"))

        stats = observer.get_error_stats()
        assert stats["total_errors"] == 60
        assert len(stats["recent_errors"]) == 10
        assert stats["recent_errors"][0]["message"] == "m10"

    def test_empty(self):
        assert ErrorTrackingObserver().get_error_stats()["most_common_error"] is None
