"""
Karma and rank engine.

Folds an append-only activity ledger into a karma total, a rank label and
progress toward the next rank. All functions are deterministic and do not
mutate their inputs; rank is recomputed on every read rather than stored.
"""

from types import MappingProxyType
from typing import Dict, Iterable, List, Optional, Tuple, Union

from medpulse.models.karma import (
    KarmaActivity,
    KarmaActivityType,
    KarmaBreakdown,
    LeaderboardEntry,
    RankProgress,
    UserKarmaStats,
)


# =============================================================================
# Point and Rank Tables
# =============================================================================

KARMA_POINTS = MappingProxyType({
    KarmaActivityType.CREATE_POST: 10,
    KarmaActivityType.CREATE_COMMENT: 3,
    KarmaActivityType.GIVE_UPVOTE: 1,
    KarmaActivityType.JOIN_COMMUNITY: 5,
    KarmaActivityType.CREATE_COMMUNITY: 15,
    KarmaActivityType.RECEIVE_UPVOTE: 5,
    KarmaActivityType.RECEIVE_DOWNVOTE: -2,
    KarmaActivityType.MODERATION_PENALTY: -20,
})

# (minimum karma, rank), ascending
RANK_THRESHOLDS: Tuple[Tuple[int, str], ...] = (
    (0, "Rookie"),
    (10, "Private"),
    (50, "Corporal"),
    (100, "Sergeant"),
    (500, "Lieutenant"),
    (1000, "Captain"),
    (2500, "Major"),
    (5000, "Colonel"),
    (10000, "General"),
)

MAX_LEVEL = "Max Level"


# =============================================================================
# Ledger
# =============================================================================

def points_for(activity_type: Union[KarmaActivityType, str]) -> int:
    """
    Fixed point value of an activity type.

    Raises:
        ValueError: If the activity type is unknown.
    """
    return KARMA_POINTS[KarmaActivityType(activity_type)]


def create_activity(
    user_id: str,
    activity_type: Union[KarmaActivityType, str],
    description: Optional[str] = None,
) -> KarmaActivity:
    """
    Build a new ledger entry carrying the type's fixed point value.

    The entry is only constructed here; appending it is the storage
    layer's job.

    Raises:
        ValueError: If user_id is empty or the activity type is unknown.
    """
    if not user_id or not str(user_id).strip():
        raise ValueError("user_id is required and cannot be empty")

    activity_type = KarmaActivityType(activity_type)
    return KarmaActivity(
        user_id=str(user_id),
        activity_type=activity_type,
        points=KARMA_POINTS[activity_type],
        description=description,
    )


def total_karma(activities: Iterable[KarmaActivity]) -> int:
    """Sum of points across ledger entries."""
    return sum(activity.points for activity in activities)


def karma_breakdown(activities: Iterable[KarmaActivity]) -> KarmaBreakdown:
    """
    Split karma by contribution kind.

    Post karma comes from CREATE_POST, comment karma from CREATE_COMMENT,
    vote karma from every activity type with VOTE in its name. Entries of
    an unrecognised type count toward the total but toward no bucket.
    """
    post = comment = vote = 0
    for activity in activities:
        if not isinstance(activity.activity_type, KarmaActivityType):
            continue
        if activity.activity_type == KarmaActivityType.CREATE_POST:
            post += activity.points
        elif activity.activity_type == KarmaActivityType.CREATE_COMMENT:
            comment += activity.points
        elif "VOTE" in activity.activity_type.value:
            vote += activity.points
    return KarmaBreakdown(post_karma=post, comment_karma=comment, vote_karma=vote)


# =============================================================================
# Ranks
# =============================================================================

def derive_rank(karma: int) -> str:
    """
    Rank label for a karma total: the highest threshold not above it.

    Negative totals get the lowest rank.
    """
    rank = RANK_THRESHOLDS[0][1]
    for minimum, label in RANK_THRESHOLDS:
        if karma >= minimum:
            rank = label
        else:
            break
    return rank


def _rank_index(rank: str) -> Optional[int]:
    for index, (_, label) in enumerate(RANK_THRESHOLDS):
        if label == rank:
            return index
    return None


def rank_progress(karma: int, current_rank: Optional[str] = None) -> RankProgress:
    """
    Progress from the current rank's threshold toward the next one.

    Formula:
        progress = 100 * (karma - current_min) / (next_min - current_min)

    clamped to [0, 100]. At the top rank, progress is 100 and next_rank is
    "Max Level". An unknown or missing current_rank falls back to the rank
    derived from karma.

    Example:
        >>> rank_progress(75, "Corporal").progress
        50.0
    """
    index = _rank_index(current_rank) if current_rank else None
    if index is None:
        index = _rank_index(derive_rank(karma))

    if index + 1 >= len(RANK_THRESHOLDS):
        return RankProgress(
            current=karma,
            next=karma,
            progress=100.0,
            next_rank=MAX_LEVEL,
            points_needed=0,
        )

    current_min = RANK_THRESHOLDS[index][0]
    next_min, next_rank = RANK_THRESHOLDS[index + 1]

    progress = 100.0 * (karma - current_min) / (next_min - current_min)

    return RankProgress(
        current=current_min,
        next=next_min,
        progress=max(0.0, min(100.0, progress)),
        next_rank=next_rank,
        points_needed=max(0, next_min - karma),
    )


# =============================================================================
# Aggregates
# =============================================================================

def compute_user_stats(
    activities: Iterable[KarmaActivity],
    recent_limit: int = 20,
) -> UserKarmaStats:
    """
    Derive a user's karma stats from their full ledger.

    The total is taken over every entry supplied, not just the recent ones
    returned for display.

    Args:
        activities: All ledger entries for one user.
        recent_limit: How many newest entries to include.

    Returns:
        UserKarmaStats with total, rank, progress, breakdown and recent entries.
    """
    activities = list(activities)
    total = total_karma(activities)
    rank = derive_rank(total)

    newest_first = sorted(activities, key=lambda a: a.created_at, reverse=True)

    return UserKarmaStats(
        total_karma=total,
        rank=rank,
        rank_progress=rank_progress(total, rank),
        recent_activities=newest_first[:recent_limit],
        breakdown=karma_breakdown(activities),
    )


def build_leaderboard(
    activities: Iterable[KarmaActivity],
    limit: int = 5,
) -> List[LeaderboardEntry]:
    """
    Rank users by total karma across a multi-user ledger.

    Ties are ordered by user id so the board is reproducible.

    Raises:
        ValueError: If limit is below 1.
    """
    if limit < 1:
        raise ValueError(f"limit must be at least 1, got {limit}")

    totals: Dict[str, int] = {}
    for activity in activities:
        totals[activity.user_id] = totals.get(activity.user_id, 0) + activity.points

    ordered = sorted(totals.items(), key=lambda kv: (-kv[1], kv[0]))

    return [
        LeaderboardEntry(
            position=position,
            user_id=user_id,
            total_karma=karma,
            rank=derive_rank(karma),
        )
        for position, (user_id, karma) in enumerate(ordered[:limit], start=1)
    ]
