"""Educational analytics helpers built on the event factories."""
from datetime import timedelta
from typing import Dict, List, Union

from pattern_telemetry.application.analytics.service import AnalyticsService
from pattern_telemetry.domain.analytics.events import AnalyticsEvent


class EducationalAnalytics:
    """Convenience methods for the events the learning game tracks most."""

    def __init__(self, service: AnalyticsService):
        self._service = service

    async def track_pattern_learned(
        self,
        pattern_name: str,
        pattern_category: str,
        difficulty: str,
        time_spent: Union[timedelta, int],
        completed: bool,
    ) -> bool:
        return await self._service.publish(
            AnalyticsEvent.pattern_learned(
                pattern_name=pattern_name,
                pattern_category=pattern_category,
                difficulty=difficulty,
                time_spent=time_spent,
                completed=completed,
            )
        )

    async def track_game_progress(
        self,
        level: str,
        score: int,
        patterns_used: List[str],
        completed: bool,
    ) -> bool:
        return await self._service.publish(
            AnalyticsEvent.game_progress_made(
                level=level, score=score, patterns_used=patterns_used, completed=completed
            )
        )

    async def track_code_interaction(self, pattern_name: str, language: str, action: str) -> bool:
        """Track a code example interaction ('view', 'copy', 'expand')."""
        return await self._service.publish(
            AnalyticsEvent.code_interaction(pattern_name, language, action)
        )

    async def track_tower_placed(
        self,
        tower_type: str,
        pattern_implemented: str,
        position: Dict[str, int],
        cost: int,
    ) -> bool:
        return await self._service.publish(
            AnalyticsEvent.tower_placed(tower_type, pattern_implemented, position, cost)
        )

    async def track_enemy_defeated(
        self,
        enemy_type: str,
        defeat_method: str,
        patterns_involved: List[str],
        points_earned: int,
    ) -> bool:
        return await self._service.publish(
            AnalyticsEvent.enemy_defeated(enemy_type, defeat_method, patterns_involved, points_earned)
        )
