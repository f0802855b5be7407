"""
Configuration module.

Handles environment variables, data store credentials, and analysis limits.
"""

from medpulse.config.config import (
    APP_ENV,
    DEBUG,
    SUPABASE_URL,
    SUPABASE_KEY,
    REQUEST_TIMEOUT,
    TRENDING_WINDOW_DAYS,
    TRENDING_POST_LIMIT,
    SUMMARY_MODEL_NAME,
    KARMA_RECENT_LIMIT,
    LEADERBOARD_LIMIT,
    is_production,
    is_development,
    is_store_configured,
    validate_config,
    print_config_summary,
)

__all__ = [
    "APP_ENV",
    "DEBUG",
    "SUPABASE_URL",
    "SUPABASE_KEY",
    "REQUEST_TIMEOUT",
    "TRENDING_WINDOW_DAYS",
    "TRENDING_POST_LIMIT",
    "SUMMARY_MODEL_NAME",
    "KARMA_RECENT_LIMIT",
    "LEADERBOARD_LIMIT",
    "is_production",
    "is_development",
    "is_store_configured",
    "validate_config",
    "print_config_summary",
]
