"""
Configuration module for MedPulse.

Loads environment variables from .env file and exposes them as typed configuration values.
Uses python-dotenv for loading and provides safe defaults where appropriate.
"""

import os
from pathlib import Path
from typing import List
from dotenv import load_dotenv

# The .env file lives in the project root (parent of medpulse/)
_project_root = Path(__file__).parent.parent.parent
_env_path = _project_root / ".env"
load_dotenv(_env_path)


# =============================================================================
# Application Environment
# =============================================================================

# Application environment: "development", "staging", or "production"
APP_ENV: str = os.getenv("APP_ENV", "development")

# Print fallback warnings and request details
DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"


# =============================================================================
# Data Store Configuration
# =============================================================================

# Base URL of the hosted data store (e.g. https://xyz.supabase.co)
# Empty in development: the in-memory backend is used instead
SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")

# API key sent as both "apikey" and bearer token
SUPABASE_KEY: str = os.getenv("SUPABASE_KEY", "")

# HTTP request timeout in seconds
REQUEST_TIMEOUT: int = int(os.getenv("REQUEST_TIMEOUT", "30"))


# =============================================================================
# Content Intelligence
# =============================================================================

# Trending topics look at posts created in the last N days...
TRENDING_WINDOW_DAYS: int = int(os.getenv("TRENDING_WINDOW_DAYS", "7"))

# ...capped at the N most recent
TRENDING_POST_LIMIT: int = int(os.getenv("TRENDING_POST_LIMIT", "100"))

# Model label stored alongside generated summaries
SUMMARY_MODEL_NAME: str = os.getenv("SUMMARY_MODEL_NAME", "medical-gpt-v1")


# =============================================================================
# Karma
# =============================================================================

# Number of recent ledger entries returned with a user's karma stats
KARMA_RECENT_LIMIT: int = int(os.getenv("KARMA_RECENT_LIMIT", "20"))

# Number of users shown on the leaderboard
LEADERBOARD_LIMIT: int = int(os.getenv("LEADERBOARD_LIMIT", "5"))


# =============================================================================
# Helper Functions
# =============================================================================

def is_production() -> bool:
    """Check if running in production environment."""
    return APP_ENV == "production"


def is_development() -> bool:
    """Check if running in development environment."""
    return APP_ENV == "development"


def is_store_configured() -> bool:
    """True when both data store URL and key are set."""
    return bool(SUPABASE_URL and SUPABASE_KEY)


def validate_config() -> List[str]:
    """
    Validate that required configuration is present for production.

    Returns:
        List of missing or invalid configuration keys (empty if all valid).
    """
    errors = []

    if is_production():
        if not SUPABASE_URL:
            errors.append("SUPABASE_URL is required in production")
        if not SUPABASE_KEY:
            errors.append("SUPABASE_KEY is required in production")

    if SUPABASE_URL and not SUPABASE_URL.startswith(("http://", "https://")):
        errors.append("SUPABASE_URL must start with http:// or https://")

    if REQUEST_TIMEOUT < 1:
        errors.append("REQUEST_TIMEOUT must be at least 1 second")

    if TRENDING_WINDOW_DAYS < 1:
        errors.append("TRENDING_WINDOW_DAYS must be at least 1")

    if TRENDING_POST_LIMIT < 1:
        errors.append("TRENDING_POST_LIMIT must be at least 1")

    if KARMA_RECENT_LIMIT < 0:
        errors.append("KARMA_RECENT_LIMIT cannot be negative")

    if LEADERBOARD_LIMIT < 1:
        errors.append("LEADERBOARD_LIMIT must be at least 1")

    return errors


def print_config_summary() -> None:
    """Print a summary of current configuration (safe for logs, no secrets)."""
    print(f"  APP_ENV: {APP_ENV}")
    print(f"  DEBUG: {DEBUG}")
    print(f"  SUPABASE_URL: {SUPABASE_URL or '(not set)'}")
    print(f"  SUPABASE_KEY: {'***' if SUPABASE_KEY else '(not set)'}")
    print(f"  REQUEST_TIMEOUT: {REQUEST_TIMEOUT}s")
    print(f"  TRENDING_WINDOW_DAYS: {TRENDING_WINDOW_DAYS}")
    print(f"  TRENDING_POST_LIMIT: {TRENDING_POST_LIMIT}")
    print(f"  SUMMARY_MODEL_NAME: {SUMMARY_MODEL_NAME}")
    print(f"  KARMA_RECENT_LIMIT: {KARMA_RECENT_LIMIT}")
    print(f"  LEADERBOARD_LIMIT: {LEADERBOARD_LIMIT}")
