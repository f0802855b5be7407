"""
Content intelligence module.

Heuristic text analysis: readability, medical terms, sentiment, summaries,
trending topics and search re-ranking.
"""

from medpulse.analysis.keywords import (
    MEDICAL_KEYWORDS,
    POSITIVE_WORDS,
    NEGATIVE_WORDS,
    NEUTRAL_WORDS,
    SPECIALTIES,
    QUERY_SYNONYMS,
)

from medpulse.analysis.text_metrics import (
    count_syllables,
    calculate_readability,
    readability_level,
    extract_medical_terms,
    count_words,
    count_sentences,
)
from medpulse.analysis.sentiment import analyze_sentiment
from medpulse.analysis.summary import create_medical_summary
from medpulse.analysis.topics import (
    extract_topics_from_post,
    analyze_trending_topics,
    calculate_vote_sentiment,
    calculate_growth_rate,
)
from medpulse.analysis.search import expand_query, rank_results
from medpulse.analysis.insights import generate_medical_insights
from medpulse.analysis.content import build_content_report

__all__ = [
    # Keyword tables
    "MEDICAL_KEYWORDS",
    "POSITIVE_WORDS",
    "NEGATIVE_WORDS",
    "NEUTRAL_WORDS",
    "SPECIALTIES",
    "QUERY_SYNONYMS",
    # Text metrics
    "count_syllables",
    "calculate_readability",
    "readability_level",
    "extract_medical_terms",
    "count_words",
    "count_sentences",
    # Classifiers and rankers
    "analyze_sentiment",
    "create_medical_summary",
    "extract_topics_from_post",
    "analyze_trending_topics",
    "calculate_vote_sentiment",
    "calculate_growth_rate",
    "expand_query",
    "rank_results",
    "generate_medical_insights",
    "build_content_report",
]
