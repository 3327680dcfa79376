"""Engine modules for the homework progress engine.

Contains pure computation engines:
- status_resolver: Lifecycle status of one assignment at an instant
- streak_analyzer: Current / longest / historical on-time streaks
- aggregation_engine: Overall, per-subject, weekly and monthly statistics
- badge_engine: Rule-based badge awards and badge progress
- insight_generator: Insight and encouragement messages
"""

from .aggregation_engine import AggregationEngine
from .badge_engine import BadgeEngine
from .insight_generator import InsightGenerator
from .status_resolver import StatusResolver
from .streak_analyzer import StreakAnalyzer

__all__ = [
    "AggregationEngine",
    "BadgeEngine",
    "InsightGenerator",
    "StatusResolver",
    "StreakAnalyzer",
]
