"""
Karma service: appends ledger entries and derives stats on read.

Rank is never written back. A promotion is simply the rank recomputed the
next time stats are read.
"""

from dataclasses import dataclass
from typing import List, Optional

from medpulse.config import DEBUG, KARMA_RECENT_LIMIT, LEADERBOARD_LIMIT
from medpulse.karma import build_leaderboard, compute_user_stats, create_activity
from medpulse.models.karma import KarmaActivity, LeaderboardEntry, UserKarmaStats
from medpulse.storage import Storage, StorageError, create_storage


@dataclass
class AwardResult:
    """Result of appending a karma activity."""
    success: bool
    activity: Optional[KarmaActivity] = None
    error: Optional[str] = None


class KarmaService:
    """Records karma activities and reads derived karma statistics."""

    def __init__(
        self,
        storage: Optional[Storage] = None,
        recent_limit: int = KARMA_RECENT_LIMIT,
        leaderboard_limit: int = LEADERBOARD_LIMIT,
        verbose: Optional[bool] = None,
    ):
        self.storage = storage or create_storage()
        self.recent_limit = recent_limit
        self.leaderboard_limit = leaderboard_limit
        self.verbose = DEBUG if verbose is None else verbose

    def award(self, user_id: str, activity_type: str, description: Optional[str] = None) -> AwardResult:
        """
        Append one activity with its fixed point value.

        Raises:
            ValueError: If user_id is empty or activity_type is unknown.
        """
        activity = create_activity(user_id, activity_type, description)

        try:
            stored = self.storage.insert_karma_activity(activity)
        except StorageError as e:
            if self.verbose:
                print(f"[karma] Error awarding karma to {user_id}: {e}")
            return AwardResult(success=False, error=str(e))

        return AwardResult(success=True, activity=stored)

    def get_stats(self, user_id: str) -> UserKarmaStats:
        """
        Karma stats for a user, computed over their whole ledger.

        Raises:
            StorageError: If the ledger cannot be read.
        """
        activities = self.storage.get_karma_activities(user_id=user_id)
        return compute_user_stats(activities, recent_limit=self.recent_limit)

    def get_leaderboard(self, limit: Optional[int] = None) -> List[LeaderboardEntry]:
        """
        Top users by total karma. A missing or zero limit uses the default.

        Raises:
            ValueError: If limit is negative.
            StorageError: If the ledger cannot be read.
        """
        activities = self.storage.get_karma_activities()
        return build_leaderboard(activities, limit=limit or self.leaderboard_limit)


# Singleton instance
_service: Optional[KarmaService] = None


def get_karma_service() -> KarmaService:
    """Get the singleton karma service instance."""
    global _service
    if _service is None:
        _service = KarmaService()
    return _service
