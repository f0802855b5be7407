"""
Karma ledger and derived statistics models.

KarmaActivity rows form an append-only ledger owned by the acting (or
affected) user. Everything else here is recomputed from that ledger on read.
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from enum import Enum
from typing import List, Optional, Union
import uuid

from medpulse.models.post import _parse_datetime


class KarmaActivityType(str, Enum):
    """Actions that earn or cost karma."""
    CREATE_POST = "CREATE_POST"
    CREATE_COMMENT = "CREATE_COMMENT"
    GIVE_UPVOTE = "GIVE_UPVOTE"
    JOIN_COMMUNITY = "JOIN_COMMUNITY"
    CREATE_COMMUNITY = "CREATE_COMMUNITY"
    RECEIVE_UPVOTE = "RECEIVE_UPVOTE"
    RECEIVE_DOWNVOTE = "RECEIVE_DOWNVOTE"
    MODERATION_PENALTY = "MODERATION_PENALTY"


def _parse_activity_type(value) -> Union[KarmaActivityType, str]:
    raw = str(value or "")
    try:
        return KarmaActivityType(raw)
    except ValueError:
        return raw


@dataclass(frozen=True)
class KarmaActivity:
    """
    One ledger entry.

    Attributes:
        user_id: Owner of the entry.
        activity_type: What happened. Rows written under a type this
            version does not know keep the raw string.
        points: Signed point value, fixed per activity type at creation.
        description: Optional human-readable note.
        id: Entry identifier.
        created_at: When the entry was appended.
    """
    user_id: str
    activity_type: Union[KarmaActivityType, str]
    points: int
    description: Optional[str] = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def type_name(self) -> str:
        """Activity type as stored in the ledger."""
        if isinstance(self.activity_type, KarmaActivityType):
            return self.activity_type.value
        return self.activity_type

    def to_dict(self) -> dict:
        data = asdict(self)
        data["activity_type"] = self.type_name
        data["created_at"] = self.created_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "KarmaActivity":
        """
        Build an entry from a ledger row.

        The stored ``points`` value is kept as-is: rows are never rewritten
        even if the point table changes later, and a row whose type is not
        in KarmaActivityType still counts toward the total.
        """
        kwargs = {
            "user_id": str(data.get("user_id") or ""),
            "activity_type": _parse_activity_type(data.get("activity_type")),
            "points": int(data.get("points") or 0),
            "description": data.get("description"),
            "created_at": _parse_datetime(data.get("created_at")) or datetime.now(),
        }
        if data.get("id") is not None:
            kwargs["id"] = str(data["id"])
        return cls(**kwargs)


@dataclass(frozen=True)
class RankProgress:
    """Where a karma total sits between the current and next rank."""
    current: int
    next: int
    progress: float
    next_rank: str
    points_needed: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class KarmaBreakdown:
    """Karma split by the kind of contribution that earned it."""
    post_karma: int = 0
    comment_karma: int = 0
    vote_karma: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class UserKarmaStats:
    """Karma statistics for one user, derived from their ledger."""
    total_karma: int
    rank: str
    rank_progress: RankProgress
    recent_activities: List[KarmaActivity] = field(default_factory=list)
    breakdown: KarmaBreakdown = field(default_factory=KarmaBreakdown)

    def to_dict(self) -> dict:
        return {
            "total_karma": self.total_karma,
            "rank": self.rank,
            "rank_progress": self.rank_progress.to_dict(),
            "recent_activities": [a.to_dict() for a in self.recent_activities],
            "breakdown": self.breakdown.to_dict(),
        }


@dataclass(frozen=True)
class LeaderboardEntry:
    """A user's position on the karma leaderboard (1-based)."""
    position: int
    user_id: str
    total_karma: int
    rank: str

    def to_dict(self) -> dict:
        return asdict(self)
