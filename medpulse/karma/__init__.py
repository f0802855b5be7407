"""
Karma module.

Point table, rank thresholds, and derived karma statistics.
"""

from medpulse.karma.engine import (
    KARMA_POINTS,
    RANK_THRESHOLDS,
    MAX_LEVEL,
    points_for,
    create_activity,
    total_karma,
    karma_breakdown,
    derive_rank,
    rank_progress,
    compute_user_stats,
    build_leaderboard,
)

__all__ = [
    "KARMA_POINTS",
    "RANK_THRESHOLDS",
    "MAX_LEVEL",
    "points_for",
    "create_activity",
    "total_karma",
    "karma_breakdown",
    "derive_rank",
    "rank_progress",
    "compute_user_stats",
    "build_leaderboard",
]
