"""
Data models module.

Defines data structures for posts, analysis results, and the karma ledger.
"""

from medpulse.models.post import CONTENT_TYPES, Post, SearchResult
from medpulse.models.analysis import (
    TextAnalysisResult,
    MedicalInsight,
    TrendingTopic,
    ContentReport,
    SummaryRecord,
    AnalysisRecord,
)
from medpulse.models.karma import (
    KarmaActivityType,
    KarmaActivity,
    RankProgress,
    KarmaBreakdown,
    UserKarmaStats,
    LeaderboardEntry,
)

__all__ = [
    "CONTENT_TYPES",
    "Post",
    "SearchResult",
    "TextAnalysisResult",
    "MedicalInsight",
    "TrendingTopic",
    "ContentReport",
    "SummaryRecord",
    "AnalysisRecord",
    "KarmaActivityType",
    "KarmaActivity",
    "RankProgress",
    "KarmaBreakdown",
    "UserKarmaStats",
    "LeaderboardEntry",
]
