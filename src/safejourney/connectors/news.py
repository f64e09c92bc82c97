"""Nigerian national news connector (RSS/Atom based)."""

from __future__ import annotations

from dataclasses import dataclass, field

from .feed_base import FeedConnector, FeedSource


@dataclass
class NigerianNewsConnector(FeedConnector):
    feeds: list[FeedSource] = field(default_factory=list)


def build_news_connector(feeds: list[FeedSource], timeout_seconds: int = 10) -> NigerianNewsConnector:
    return NigerianNewsConnector(feeds=list(feeds), timeout_seconds=timeout_seconds)
