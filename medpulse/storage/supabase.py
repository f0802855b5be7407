"""
Supabase storage backend for MedPulse.

Implements the Storage interface over the data store's PostgREST API.
All calls are plain HTTP via requests.

PostgREST documentation: https://postgrest.org/en/stable/references/api.html

=============================================================================
TABLES USED
=============================================================================

| Table / RPC        | Columns read or written                               |
|--------------------|-------------------------------------------------------|
| posts              | id, title, content, created_at, upvotes, downvotes    |
| post_tags          | tag (embedded under posts)                            |
| karma_activities   | id, user_id, activity_type, points, description,      |
|                    | created_at                                            |
| ai_summaries       | id, post_id, summary_content, model_used, created_at  |
| analyses           | id, text, label, score, created_at                    |
| rpc/search_content | search_term, content_type -> result rows              |

=============================================================================
"""

from datetime import datetime, timedelta, timezone
from typing import List, Optional, Dict, Any
import requests

from medpulse.config import (
    SUPABASE_URL,
    SUPABASE_KEY,
    REQUEST_TIMEOUT,
    is_store_configured,
)
from medpulse.models.analysis import AnalysisRecord, SummaryRecord
from medpulse.models.karma import KarmaActivity
from medpulse.models.post import Post, SearchResult
from medpulse.storage.base import Storage, StorageError


POST_COLUMNS = "id,title,content,created_at,upvotes,downvotes,post_tags(tag)"


class SupabaseStorage(Storage):
    """
    Supabase-backed storage implementation.

    Configuration is pulled from environment variables via medpulse.config:
    - SUPABASE_URL: Project URL (e.g. https://xyz.supabase.co)
    - SUPABASE_KEY: API key
    """

    def __init__(self, url: str = None, api_key: str = None, timeout: int = None):
        """
        Initialize SupabaseStorage.

        Args:
            url: Project URL. Defaults to config.SUPABASE_URL.
            api_key: API key. Defaults to config.SUPABASE_KEY.
            timeout: Request timeout in seconds. Defaults to config.REQUEST_TIMEOUT.
        """
        # Fall back to config only if None (not empty string)
        self.url = (url if url is not None else SUPABASE_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else SUPABASE_KEY
        self.timeout = timeout if timeout is not None else REQUEST_TIMEOUT

    @property
    def name(self) -> str:
        return "supabase"

    @property
    def _rest_url(self) -> str:
        return f"{self.url}/rest/v1"

    @property
    def _headers(self) -> Dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "Prefer": "return=representation",
        }

    def _validate_config(self) -> None:
        if not self.url:
            raise StorageError("SUPABASE_URL is not configured")
        if not self.api_key:
            raise StorageError("SUPABASE_KEY is not configured")

    # =========================================================================
    # HTTP helpers
    # =========================================================================

    def _get(self, path: str, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        """GET rows from a table. Raises StorageError on any failure."""
        self._validate_config()
        try:
            response = requests.get(
                f"{self._rest_url}/{path}",
                headers=self._headers,
                params=params,
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response.json() or []
        except (requests.RequestException, ValueError) as e:
            raise StorageError(f"GET {path} failed: {e}") from e

    def _post(self, path: str, payload: Dict[str, Any]) -> Any:
        """POST a row (or RPC call). Raises StorageError on any failure."""
        self._validate_config()
        try:
            response = requests.post(
                f"{self._rest_url}/{path}",
                headers=self._headers,
                json=payload,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if not response.content:
                return None
            return response.json()
        except (requests.RequestException, ValueError) as e:
            raise StorageError(f"POST {path} failed: {e}") from e

    @staticmethod
    def _first_row(data: Any) -> Optional[Dict[str, Any]]:
        """PostgREST returns inserted rows as a list."""
        if isinstance(data, list):
            return data[0] if data else None
        return data if isinstance(data, dict) else None

    # =========================================================================
    # Storage Interface Implementation
    # =========================================================================

    def fetch_recent_posts(self, days: int = 7, limit: int = 100) -> List[Post]:
        cutoff = datetime.now(timezone.utc) - timedelta(days=days)
        rows = self._get("posts", {
            "select": POST_COLUMNS,
            "created_at": f"gte.{cutoff.isoformat()}",
            "order": "created_at.desc",
            "limit": limit,
        })

        posts = []
        for row in rows:
            try:
                posts.append(Post.from_dict(row))
            except (KeyError, TypeError, ValueError):
                # Skip rows that don't normalize
                continue
        return posts

    def search_content(self, search_term: str, content_type: str = "all") -> List[SearchResult]:
        rows = self._post("rpc/search_content", {
            "search_term": search_term,
            "content_type": content_type,
        }) or []

        results = []
        for row in rows:
            try:
                results.append(SearchResult.from_dict(row))
            except (TypeError, ValueError):
                continue
        return results

    def insert_karma_activity(self, activity: KarmaActivity) -> KarmaActivity:
        row = self._first_row(self._post("karma_activities", {
            "user_id": activity.user_id,
            "activity_type": activity.type_name,
            "points": activity.points,
            "description": activity.description,
        }))
        return KarmaActivity.from_dict(row) if row else activity

    def get_karma_activities(
        self,
        user_id: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[KarmaActivity]:
        params: Dict[str, Any] = {"select": "*", "order": "created_at.desc"}
        if user_id is not None:
            params["user_id"] = f"eq.{user_id}"
        if limit is not None:
            params["limit"] = limit

        activities = []
        for row in self._get("karma_activities", params):
            try:
                activities.append(KarmaActivity.from_dict(row))
            except (KeyError, TypeError, ValueError):
                continue
        return activities

    def save_summary(self, record: SummaryRecord) -> SummaryRecord:
        row = self._first_row(self._post("ai_summaries", {
            "post_id": record.post_id,
            "summary_content": record.summary_content,
            "model_used": record.model_used,
        }))
        return SummaryRecord.from_dict(row) if row else record

    def get_latest_summary(self, post_id: str) -> Optional[SummaryRecord]:
        rows = self._get("ai_summaries", {
            "select": "*",
            "post_id": f"eq.{post_id}",
            "order": "created_at.desc",
            "limit": 1,
        })
        return SummaryRecord.from_dict(rows[0]) if rows else None

    def save_analysis(self, record: AnalysisRecord) -> AnalysisRecord:
        row = self._first_row(self._post("analyses", {
            "text": record.text,
            "label": record.label,
            "score": record.score,
        }))
        return AnalysisRecord.from_dict(row) if row else record


def _is_within(created_at: datetime, days: int) -> bool:
    """Compare naive and aware datetimes against the right 'now'."""
    now = datetime.now(created_at.tzinfo) if created_at.tzinfo else datetime.now()
    return created_at >= now - timedelta(days=days)


class MockSupabaseStorage(Storage):
    """
    In-memory mock storage for testing and development.

    Use this when the data store is not configured or for testing.
    Data is stored in memory and lost when the process ends. Set
    ``fail_with`` to a message to make every call raise StorageError.
    """

    def __init__(self, posts: Optional[List[Post]] = None):
        self._posts: Dict[str, Post] = {}
        self._activities: List[KarmaActivity] = []
        self._summaries: List[SummaryRecord] = []
        self._analyses: List[AnalysisRecord] = []
        self.fail_with: Optional[str] = None
        self.add_posts(posts or [])

    @property
    def name(self) -> str:
        return "mock"

    def _check(self) -> None:
        if self.fail_with:
            raise StorageError(self.fail_with)

    def add_posts(self, posts: List[Post]) -> None:
        """Seed posts (for development and tests)."""
        for post in posts:
            self._posts[post.id] = post

    def fetch_recent_posts(self, days: int = 7, limit: int = 100) -> List[Post]:
        self._check()
        posts = [p for p in self._posts.values() if _is_within(p.created_at, days)]
        posts.sort(key=lambda p: p.created_at, reverse=True)
        return posts[:limit]

    def search_content(self, search_term: str, content_type: str = "all") -> List[SearchResult]:
        """Naive search: posts containing any query word, scored by coverage."""
        self._check()
        if content_type not in ("all", "posts"):
            return []

        words = [w for w in search_term.lower().split() if w]
        if not words:
            return []

        results = []
        for post in self._posts.values():
            haystack = f"{post.title} {post.content}".lower()
            matched = sum(1 for w in words if w in haystack)
            if matched:
                results.append(SearchResult(
                    id=post.id,
                    title=post.title,
                    content=post.content,
                    result_type="post",
                    created_at=post.created_at,
                    relevance_score=matched / len(words),
                ))
        results.sort(key=lambda r: r.relevance_score, reverse=True)
        return results

    def insert_karma_activity(self, activity: KarmaActivity) -> KarmaActivity:
        self._check()
        self._activities.append(activity)
        return activity

    def get_karma_activities(
        self,
        user_id: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[KarmaActivity]:
        self._check()
        rows = [a for a in self._activities if user_id is None or a.user_id == user_id]
        # Reverse first so same-timestamp entries still come back newest first
        rows = sorted(reversed(rows), key=lambda a: a.created_at, reverse=True)
        return rows[:limit] if limit is not None else rows

    def save_summary(self, record: SummaryRecord) -> SummaryRecord:
        self._check()
        self._summaries.append(record)
        return record

    def get_latest_summary(self, post_id: str) -> Optional[SummaryRecord]:
        self._check()
        for record in reversed(self._summaries):
            if record.post_id == post_id:
                return record
        return None

    def save_analysis(self, record: AnalysisRecord) -> AnalysisRecord:
        self._check()
        self._analyses.append(record)
        return record

    def clear(self) -> None:
        """Clear all records (for testing)."""
        self._posts.clear()
        self._activities.clear()
        self._summaries.clear()
        self._analyses.clear()

    def count(self) -> int:
        """Return number of stored ledger entries (for testing)."""
        return len(self._activities)


def create_storage() -> Storage:
    """Real backend when the data store is configured, in-memory mock otherwise."""
    if is_store_configured():
        return SupabaseStorage()
    return MockSupabaseStorage()
