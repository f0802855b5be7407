"""
Content intelligence service.

Glues the pure analysis functions to the data store: fetches the data a
heuristic needs, runs it, and writes audit copies where the product keeps
them. Trending topics and search fall back to a small fixed demo dataset
when the upstream fetch fails, so the UI always has something to show.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Optional

from medpulse.analysis import (
    analyze_sentiment,
    analyze_trending_topics,
    build_content_report,
    create_medical_summary,
    expand_query,
    extract_medical_terms,
    generate_medical_insights,
    rank_results,
)
from medpulse.config import (
    DEBUG,
    SUMMARY_MODEL_NAME,
    TRENDING_POST_LIMIT,
    TRENDING_WINDOW_DAYS,
)
from medpulse.models.analysis import (
    AnalysisRecord,
    ContentReport,
    MedicalInsight,
    SummaryRecord,
    TextAnalysisResult,
    TrendingTopic,
)
from medpulse.models.post import SearchResult
from medpulse.storage import Storage, StorageError, create_storage


# Only the first N characters of analysed text are stored
ANALYSIS_TEXT_LIMIT: int = 500


# =============================================================================
# Result Data Structures
# =============================================================================

@dataclass
class SummaryResult:
    """
    Result of a summary request.

    The summary is always computed; success reports whether it was stored.
    """
    success: bool
    summary: str
    error: Optional[str] = None
    model: Optional[str] = None
    record_id: Optional[str] = None


@dataclass
class AnalysisResult:
    """Result of a content analysis; success reports whether it was stored."""
    success: bool
    analysis: TextAnalysisResult
    error: Optional[str] = None
    record_id: Optional[str] = None


@dataclass
class FetchOutcome:
    """
    Items from an upstream fetch, or demo items when that fetch failed.

    Attributes:
        items: Analysed or demo items.
        used_fallback: True when items are the fixed demo dataset.
        error: Upstream error message, if any.
    """
    items: List[Any] = field(default_factory=list)
    used_fallback: bool = False
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None


# =============================================================================
# Demo Data
# =============================================================================

def demo_trending_topics() -> List[TrendingTopic]:
    """Fixed topics shown when posts cannot be fetched."""
    return [
        TrendingTopic(
            topic="cardiology",
            mentions=45,
            sentiment="positive",
            growth_rate=23.0,
            related_posts=["demo-1", "demo-2"],
        ),
        TrendingTopic(
            topic="covid-19",
            mentions=38,
            sentiment="neutral",
            growth_rate=15.0,
            related_posts=["demo-3"],
        ),
    ]


def demo_search_results() -> List[SearchResult]:
    """Fixed results shown when the search call fails."""
    return [
        SearchResult(
            id="demo-1",
            result_type="post",
            title="Managing Hypertension in Elderly Patients",
            content="Comprehensive guide to managing hypertension in elderly patients...",
            author_name="Dr. Sarah Chen",
            created_at=datetime.now(),
            relevance_score=0.95,
            ai_relevance_score=0.95,
        ),
    ]


# =============================================================================
# Service
# =============================================================================

class AIService:
    """
    Heuristic "AI" features backed by the data store.

    Usage:
        service = AIService(storage=MockSupabaseStorage())
        outcome = service.get_trending_topics()
        for topic in outcome.items:
            print(topic.topic, topic.mentions)
    """

    def __init__(self, storage: Optional[Storage] = None, verbose: Optional[bool] = None):
        """
        Args:
            storage: Backend to use. Defaults to the configured one.
            verbose: Print fallback warnings. Defaults to config.DEBUG.
        """
        self.storage = storage or create_storage()
        self.verbose = DEBUG if verbose is None else verbose
        self.model = SUMMARY_MODEL_NAME

    def _warn(self, message: str) -> None:
        if self.verbose:
            print(f"[ai] {message}")

    # -------------------------------------------------------------------------
    # Summaries
    # -------------------------------------------------------------------------

    def generate_summary(self, post_id: str, content: str) -> SummaryResult:
        """
        Summarize a post body and store the summary.

        Args:
            post_id: Post the summary belongs to.
            content: Post body.

        Returns:
            SummaryResult with the summary and storage outcome.
        """
        summary = create_medical_summary(content)
        if not summary:
            return SummaryResult(success=False, summary="", error="Content is empty")

        try:
            record = self.storage.save_summary(
                SummaryRecord(post_id=post_id, summary_content=summary, model_used=self.model)
            )
        except StorageError as e:
            self._warn(f"Could not store summary for {post_id}: {e}")
            return SummaryResult(success=False, summary=summary, error=str(e), model=self.model)

        return SummaryResult(
            success=True,
            summary=record.summary_content,
            model=record.model_used,
            record_id=record.id,
        )

    def get_summary(self, post_id: str) -> Optional[SummaryRecord]:
        """Latest stored summary for a post, or None if missing or unreadable."""
        try:
            return self.storage.get_latest_summary(post_id)
        except StorageError as e:
            self._warn(f"Could not read summary for {post_id}: {e}")
            return None

    # -------------------------------------------------------------------------
    # Analysis
    # -------------------------------------------------------------------------

    def analyze_content(self, text: str) -> AnalysisResult:
        """Classify sentiment and store a truncated copy of the analysis."""
        analysis = analyze_sentiment(text)

        try:
            record = self.storage.save_analysis(
                AnalysisRecord(
                    text=text[:ANALYSIS_TEXT_LIMIT],
                    label=analysis.label,
                    score=analysis.score,
                )
            )
        except StorageError as e:
            self._warn(f"Could not store analysis: {e}")
            return AnalysisResult(success=False, analysis=analysis, error=str(e))

        return AnalysisResult(success=True, analysis=analysis, record_id=record.id)

    def content_report(self, text: str) -> ContentReport:
        """Readability, term count and sentiment for a draft. Nothing is stored."""
        return build_content_report(text)

    def get_medical_insights(self, query: str) -> List[MedicalInsight]:
        """Knowledge-base entries triggered by the query."""
        return generate_medical_insights(query)

    # -------------------------------------------------------------------------
    # Trending and search (with demo fallback)
    # -------------------------------------------------------------------------

    def get_trending_topics(self) -> FetchOutcome:
        """
        Rank topics over the recent post window.

        Fetches posts from the last TRENDING_WINDOW_DAYS days (at most
        TRENDING_POST_LIMIT), then ranks them. If the fetch fails, returns
        the demo topics with used_fallback set.
        """
        try:
            posts = self.storage.fetch_recent_posts(
                days=TRENDING_WINDOW_DAYS,
                limit=TRENDING_POST_LIMIT,
            )
        except StorageError as e:
            self._warn(f"Posts not available, returning demo topics: {e}")
            return FetchOutcome(items=demo_trending_topics(), used_fallback=True, error=str(e))

        return FetchOutcome(items=analyze_trending_topics(posts))

    def intelligent_search(self, query: str, content_type: str = "all") -> FetchOutcome:
        """
        Search with synonym expansion and medical-term re-ranking.

        Steps:
        1. Extract medical terms from the query
        2. Expand the query with synonyms
        3. Run the store's full-text search on the expanded query
        4. Re-rank the candidates by medical-term matches

        If the search call fails, returns the demo results with
        used_fallback set. A blank query returns no results.
        """
        if not query or not query.strip():
            return FetchOutcome(items=[])

        medical_terms = extract_medical_terms(query)
        expanded = expand_query(query)

        try:
            candidates = self.storage.search_content(expanded, content_type)
        except StorageError as e:
            self._warn(f"Search not available, returning demo results: {e}")
            return FetchOutcome(items=demo_search_results(), used_fallback=True, error=str(e))

        return FetchOutcome(items=rank_results(candidates, query, medical_terms))


# Singleton instance
_service: Optional[AIService] = None


def get_ai_service() -> AIService:
    """Get the singleton AI service instance."""
    global _service
    if _service is None:
        _service = AIService()
    return _service
