"""Centralized feature-flag loader for ingestion and dashboard behavior."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

_log = logging.getLogger(__name__)

DEFAULT_FEATURE_FLAGS: dict[str, Any] = {
    "news_cache_minutes": 10,
    "news_max_age_hours": 24,
    "feed_timeout_seconds": 10,
    "fetch_max_workers": 6,
    "default_window_days": 7,
}


def default_feature_flags_path() -> Path:
    return Path.cwd() / "config" / "feature_flags.json"


def _coerce_flag_value(key: str, value: Any) -> Any:
    default = DEFAULT_FEATURE_FLAGS.get(key)
    if isinstance(default, bool):
        if isinstance(value, bool):
            return value
        raw = str(value).strip().lower()
        return raw in {"1", "true", "yes", "on"}
    if isinstance(default, int):
        try:
            return int(value)
        except (TypeError, ValueError):
            return default
    return value


def load_feature_flags(path: Path | None = None) -> dict[str, Any]:
    flags = dict(DEFAULT_FEATURE_FLAGS)
    candidate = path or default_feature_flags_path()
    if candidate.exists():
        try:
            payload = json.loads(candidate.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            _log.warning("Ignoring unreadable feature flag file %s: %s", candidate, exc)
            payload = {}
        if isinstance(payload, dict):
            for key in DEFAULT_FEATURE_FLAGS:
                if key in payload:
                    flags[key] = _coerce_flag_value(key, payload[key])

    # Env override: SJ_FLAG_<FLAG_NAME_UPPER>
    for key in DEFAULT_FEATURE_FLAGS:
        raw = os.getenv(f"SJ_FLAG_{key.upper()}", "").strip()
        if raw:
            flags[key] = _coerce_flag_value(key, raw)

    return flags


def get_feature_flag(name: str, default: Any = None) -> Any:
    flags = load_feature_flags()
    if name in flags:
        return flags[name]
    return default
