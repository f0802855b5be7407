"""
Base storage abstraction for MedPulse.

Defines the abstract interface that all data store backends must implement.
The analysis code never talks to storage directly: services fetch plain
data through this interface and hand it to the pure functions.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from medpulse.models.analysis import AnalysisRecord, SummaryRecord
from medpulse.models.karma import KarmaActivity
from medpulse.models.post import Post, SearchResult


class StorageError(Exception):
    """Raised when a backend cannot complete a read or write."""


class Storage(ABC):
    """
    Abstract base class for all storage backends.

    Implementations must provide methods for:
    - Reading the recent post window used for trending topics
    - Running the store's full-text search
    - Appending to and reading the karma ledger
    - Writing audit copies of summaries and analyses

    Failures are reported by raising StorageError; callers decide whether
    to fall back or surface the error.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Return the name of this storage backend.

        Used in status output and error messages.
        """
        pass

    @abstractmethod
    def fetch_recent_posts(self, days: int = 7, limit: int = 100) -> List[Post]:
        """
        Retrieve posts created in the last N days.

        Args:
            days: Number of days to look back (default 7).
            limit: Maximum number of posts (default 100).

        Returns:
            List of Post instances, newest first.
        """
        pass

    @abstractmethod
    def search_content(self, search_term: str, content_type: str = "all") -> List[SearchResult]:
        """
        Run the store's full-text search.

        Args:
            search_term: Query string (possibly synonym-expanded).
            content_type: "all", "posts", "communities" or "users".

        Returns:
            Candidates carrying a baseline relevance_score.
        """
        pass

    @abstractmethod
    def insert_karma_activity(self, activity: KarmaActivity) -> KarmaActivity:
        """
        Append one entry to the karma ledger.

        Existing entries are never updated or deleted.

        Returns:
            The stored entry.
        """
        pass

    @abstractmethod
    def get_karma_activities(
        self,
        user_id: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[KarmaActivity]:
        """
        Read ledger entries, newest first.

        Args:
            user_id: Only this user's entries; None for every user.
            limit: Maximum entries; None for all.
        """
        pass

    @abstractmethod
    def save_summary(self, record: SummaryRecord) -> SummaryRecord:
        """Store a generated summary."""
        pass

    @abstractmethod
    def get_latest_summary(self, post_id: str) -> Optional[SummaryRecord]:
        """Most recent stored summary for a post, or None."""
        pass

    @abstractmethod
    def save_analysis(self, record: AnalysisRecord) -> AnalysisRecord:
        """Store a content analysis."""
        pass

    def __str__(self) -> str:
        return f"Storage({self.name})"

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
