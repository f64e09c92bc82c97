"""Environment and runtime settings."""

from __future__ import annotations

import os
from datetime import timedelta
from pathlib import Path

from dotenv import load_dotenv

from .config import ScoringConfig, default_scoring_config_path, load_scoring_config
from .feature_flags import get_feature_flag


def load_environment() -> None:
    load_dotenv(override=False)


def get_database_path() -> Path:
    raw = os.getenv("SAFEJOURNEY_DB_PATH", "").strip()
    if raw:
        return Path(raw).expanduser()
    return Path.home() / ".safejourney" / "incidents.db"


def get_scoring_config_path() -> Path:
    raw = os.getenv("SAFEJOURNEY_SCORING_CONFIG", "").strip()
    return Path(raw).expanduser() if raw else default_scoring_config_path()


def get_scoring_config() -> ScoringConfig:
    return load_scoring_config(get_scoring_config_path())


def get_news_cache_window() -> timedelta:
    return timedelta(minutes=max(1, int(get_feature_flag("news_cache_minutes", 10))))


def get_news_max_age() -> timedelta:
    return timedelta(hours=max(1, int(get_feature_flag("news_max_age_hours", 24))))


def get_feed_timeout_seconds() -> int:
    return max(1, int(get_feature_flag("feed_timeout_seconds", 10)))


def get_fetch_max_workers() -> int:
    return max(1, int(get_feature_flag("fetch_max_workers", 6)))


def get_default_window_days() -> int:
    return max(1, int(get_feature_flag("default_window_days", 7)))
