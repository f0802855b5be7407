"""
Search query expansion and result re-ranking.

Retrieval itself happens in the data store; this module only rewrites the
query before the call and re-scores the candidates after it.
"""

import dataclasses
from typing import List, Optional

from medpulse.analysis.keywords import QUERY_SYNONYMS
from medpulse.models.post import SearchResult


MEDICAL_MATCH_BOOST: float = 0.2
MAX_RELEVANCE: float = 1.0


def expand_query(query: str) -> str:
    """
    Append synonyms for every synonym-table key found in the query.

    Keys are matched as substrings of the lowercased query, in table order,
    and each match appends its synonyms space-joined.

    Example:
        >>> expand_query("heart pain")
        'heart pain cardiac cardiovascular coronary discomfort ache soreness'
    """
    expanded = query
    lowered = query.lower()

    for term, synonyms in QUERY_SYNONYMS.items():
        if term in lowered:
            expanded += " " + " ".join(synonyms)

    return expanded


def compute_ai_relevance(result: SearchResult, medical_terms: List[str]) -> float:
    """
    Baseline relevance plus 0.2 per medical term found in the result.

    Terms are matched as substrings of the lowercased title + content.
    The score is capped at 1.0.
    """
    score = result.relevance_score or 0.0

    if medical_terms:
        haystack = f"{result.title} {result.content}".lower()
        matches = sum(1 for term in medical_terms if term in haystack)
        score += matches * MEDICAL_MATCH_BOOST

    return min(MAX_RELEVANCE, score)


def rank_results(
    results: List[SearchResult],
    query: str,
    medical_terms: Optional[List[str]] = None,
) -> List[SearchResult]:
    """
    Re-rank externally fetched search candidates.

    Each result gets an ``ai_relevance_score`` (see compute_ai_relevance)
    and the list is sorted by it, highest first. Results with equal scores
    keep their incoming order.

    This is a pure function - inputs are copied, not modified.

    Args:
        results: Candidates with a baseline relevance_score.
        query: The user's query (kept for callers that log it).
        medical_terms: Terms extracted from the query.

    Returns:
        New list of SearchResult copies, best first.
    """
    medical_terms = medical_terms or []

    scored = [
        dataclasses.replace(result, ai_relevance_score=compute_ai_relevance(result, medical_terms))
        for result in results
    ]
    scored.sort(key=lambda r: r.ai_relevance_score, reverse=True)
    return scored
