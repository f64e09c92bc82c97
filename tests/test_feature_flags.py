import json
from pathlib import Path

from safejourney.feature_flags import DEFAULT_FEATURE_FLAGS, load_feature_flags


def test_load_feature_flags_from_file(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.delenv("SJ_FLAG_NEWS_CACHE_MINUTES", raising=False)
    path = tmp_path / "feature_flags.json"
    path.write_text(
        json.dumps(
            {
                "news_cache_minutes": 5,
                "fetch_max_workers": "3",
                "unknown_flag": True,
            }
        ),
        encoding="utf-8",
    )
    flags = load_feature_flags(path)
    assert flags["news_cache_minutes"] == 5
    assert flags["fetch_max_workers"] == 3
    assert flags["news_max_age_hours"] == 24
    assert "unknown_flag" not in flags


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    assert load_feature_flags(tmp_path / "missing.json") == DEFAULT_FEATURE_FLAGS


def test_env_override_wins(tmp_path: Path, monkeypatch) -> None:
    path = tmp_path / "feature_flags.json"
    path.write_text(json.dumps({"news_cache_minutes": 5}), encoding="utf-8")
    monkeypatch.setenv("SJ_FLAG_NEWS_CACHE_MINUTES", "15")
    monkeypatch.setenv("SJ_FLAG_DEFAULT_WINDOW_DAYS", "not-a-number")
    flags = load_feature_flags(path)
    assert flags["news_cache_minutes"] == 15
    assert flags["default_window_days"] == 7


def test_unreadable_file_is_ignored(tmp_path: Path) -> None:
    path = tmp_path / "feature_flags.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_feature_flags(path)["feed_timeout_seconds"] == 10
