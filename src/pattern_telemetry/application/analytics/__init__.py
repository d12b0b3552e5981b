"""Analytics application services."""

from .decorators import track_performance
from .helpers import EducationalAnalytics
from .service import AnalyticsService

__all__ = ["AnalyticsService", "EducationalAnalytics", "track_performance"]
