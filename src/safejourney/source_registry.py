"""News source registry with optional JSON overrides."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .connectors.feed_base import FeedSource

DEFAULT_NEWS_SOURCES: tuple[FeedSource, ...] = (
    FeedSource("Punch", "https://punchng.com/feed/"),
    FeedSource("Vanguard", "https://www.vanguardngr.com/feed/"),
    FeedSource("Premium Times", "https://www.premiumtimesng.com/feed"),
    FeedSource("The Guardian", "https://guardian.ng/feed/"),
    FeedSource("Daily Trust", "https://dailytrust.com/feed/"),
    FeedSource("Sahara Reporters", "https://saharareporters.com/rss.xml"),
)


def default_registry_path() -> Path:
    return Path.cwd() / "config" / "news_sources.json"


def _parse_feeds(block: list[dict[str, Any]] | None) -> list[FeedSource]:
    feeds: list[FeedSource] = []
    for item in block or []:
        name = str(item.get("name", "")).strip()
        url = str(item.get("url", "")).strip()
        if name and url:
            feeds.append(FeedSource(name=name, url=url))
    return feeds


def _merge_unique(base: list[FeedSource], extra: list[FeedSource]) -> list[FeedSource]:
    seen = {(f.name.casefold(), f.url.casefold()) for f in base}
    merged = list(base)
    for feed in extra:
        key = (feed.name.casefold(), feed.url.casefold())
        if key not in seen:
            merged.append(feed)
            seen.add(key)
    return merged


def load_registry(path: Path | None = None) -> list[FeedSource]:
    """Default feeds, plus ``news_sources`` from the registry file.

    Setting ``"replace_defaults": true`` in the file drops the built-in feeds.
    """
    registry_path = path or default_registry_path()
    feeds = list(DEFAULT_NEWS_SOURCES)
    if not registry_path.exists():
        return feeds

    payload = json.loads(registry_path.read_text(encoding="utf-8"))
    if payload.get("replace_defaults"):
        feeds = []
    return _merge_unique(feeds, _parse_feeds(payload.get("news_sources")))
