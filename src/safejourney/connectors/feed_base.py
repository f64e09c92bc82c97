"""RSS/Atom transport returning raw article tuples from news feeds."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

import feedparser
import httpx
import trafilatura
from bs4 import BeautifulSoup

from ..models import RawArticle

_log = logging.getLogger(__name__)

USER_AGENT = "SafeJourney/1.0"


class FeedFetchError(RuntimeError):
    """Raised when a feed cannot be downloaded or parsed at all."""


@dataclass(frozen=True)
class FeedSource:
    name: str
    url: str


@dataclass
class FeedConnector:
    timeout_seconds: int = 10
    limit: int = 50

    def fetch_articles(self, feed: FeedSource) -> List[RawArticle]:
        content = self._download(feed)
        parsed = feedparser.parse(content)
        if getattr(parsed, "bozo", False):
            bozo_exc = getattr(parsed, "bozo_exception", "feed parse error")
            _log.info("Feed %s is malformed (%s); retrying with lenient decoding", feed.name, bozo_exc)
            entries = self._recover_bozo_entries(feed, content)
        else:
            entries = list(parsed.entries[: max(1, self.limit)])

        articles: List[RawArticle] = []
        for entry in entries:
            article = self._entry_to_article(entry, feed.name)
            if article is not None:
                articles.append(article)
        _log.debug("Feed %s returned %d articles", feed.name, len(articles))
        return articles

    def _download(self, feed: FeedSource) -> bytes:
        # feedparser's own fetcher has no timeout, so the bytes come from httpx.
        try:
            with httpx.Client(
                timeout=self.timeout_seconds,
                headers={"User-Agent": USER_AGENT},
                follow_redirects=True,
            ) as client:
                response = client.get(feed.url)
                response.raise_for_status()
        except httpx.HTTPError as exc:
            raise FeedFetchError(f"{feed.name}: {exc}") from exc
        return response.content

    def _recover_bozo_entries(self, feed: FeedSource, content: bytes) -> list:
        sanitized_text = content.decode("utf-8", errors="ignore")
        reparsed = feedparser.parse(sanitized_text.encode("utf-8", errors="ignore"))
        if not getattr(reparsed, "bozo", False):
            return list(reparsed.entries[: max(1, self.limit)])

        bozo_exc = getattr(reparsed, "bozo_exception", "feed parse error")
        raise FeedFetchError(f"{feed.name}: {bozo_exc}")

    def _entry_to_article(self, entry: object, source_name: str) -> RawArticle | None:
        title = (getattr(entry, "title", "") or "").strip()
        link = (getattr(entry, "link", "") or "").strip()
        if not title or not link:
            return None

        summary = getattr(entry, "summary", "") or getattr(entry, "description", "") or ""
        published = getattr(entry, "published", None) or getattr(entry, "updated", None)
        return RawArticle(
            title=title,
            summary=self._extract_text(summary),
            published_at=published,
            link=link,
            source_name=source_name,
        )

    def _extract_text(self, html_or_text: str) -> str:
        if not html_or_text:
            return ""
        extracted = trafilatura.extract(html_or_text)
        if extracted:
            return extracted.strip()
        return BeautifulSoup(html_or_text, "html.parser").get_text(" ", strip=True)
