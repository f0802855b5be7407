"""
Services module.

Content intelligence and karma services on top of the storage layer.
"""

from medpulse.services.ai_service import (
    AIService,
    SummaryResult,
    AnalysisResult,
    FetchOutcome,
    demo_trending_topics,
    demo_search_results,
    get_ai_service,
)
from medpulse.services.karma_service import AwardResult, KarmaService, get_karma_service

__all__ = [
    "AIService",
    "SummaryResult",
    "AnalysisResult",
    "FetchOutcome",
    "demo_trending_topics",
    "demo_search_results",
    "get_ai_service",
    "AwardResult",
    "KarmaService",
    "get_karma_service",
]
