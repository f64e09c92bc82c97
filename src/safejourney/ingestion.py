"""Fetch, classify, and combine live news into incident batches."""

from __future__ import annotations

import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime, timedelta
from typing import Callable, Iterable, List, Sequence

from .connectors.feed_base import FeedSource
from .models import BatchStats, IncidentBatch, IncidentRecord, RawArticle, SourceReport
from .taxonomy import classify
from .time_utils import parse_published_datetime

_log = logging.getLogger(__name__)

DEFAULT_MAX_AGE = timedelta(hours=24)
SUMMARY_CHARS = 200

FetchArticles = Callable[[FeedSource], List[RawArticle]]


def classify_articles(
    articles: Iterable[RawArticle],
    *,
    max_age: timedelta | None = DEFAULT_MAX_AGE,
    now: datetime | None = None,
) -> List[IncidentRecord]:
    """Classify recent articles; irrelevant, undated, or stale ones are dropped."""
    current = now or datetime.now(UTC)
    records: List[IncidentRecord] = []
    for article in articles:
        published = parse_published_datetime(article.published_at)
        if published is None:
            _log.debug("Skipping undated article: %s", article.title)
            continue
        if max_age is not None and published < current - max_age:
            continue

        draft = classify(article.summary, article.title)
        if draft is None:
            continue
        records.append(
            draft.to_record(
                occurred_at=published,
                source_name=article.source_name,
                source_url=article.link,
                description=article.summary[:SUMMARY_CHARS],
            )
        )
    return records


def batch_stats(records: Sequence[IncidentRecord]) -> BatchStats:
    by_category = Counter(r.category for r in records)
    by_region = Counter(r.region for r in records if r.region)
    return BatchStats(
        total=len(records),
        by_category=dict(by_category),
        by_region=dict(by_region),
        total_killed=sum(r.killed for r in records),
        total_kidnapped=sum(r.kidnapped for r in records),
    )


def _fetch_one(
    feed: FeedSource,
    fetch_articles: FetchArticles,
    max_age: timedelta | None,
    now: datetime,
) -> tuple[List[IncidentRecord], SourceReport]:
    articles = fetch_articles(feed)
    records = classify_articles(articles, max_age=max_age, now=now)
    report = SourceReport(
        source_name=feed.name,
        source_url=feed.url,
        status="ok",
        fetched_count=len(articles),
        incident_count=len(records),
    )
    return records, report


def refresh_batch(
    feeds: Sequence[FeedSource],
    fetch_articles: FetchArticles,
    *,
    max_age: timedelta | None = DEFAULT_MAX_AGE,
    max_workers: int = 6,
    now: datetime | None = None,
) -> IncidentBatch:
    """Fetch every feed concurrently and merge whatever succeeded.

    A failing feed is reported with status ``failed`` and contributes no
    incidents; it never fails the batch.
    """
    current = now or datetime.now(UTC)
    incidents: List[IncidentRecord] = []
    reports: List[SourceReport] = []

    if feeds:
        with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(feeds)))) as pool:
            futures = [
                (feed, pool.submit(_fetch_one, feed, fetch_articles, max_age, current))
                for feed in feeds
            ]
            for feed, future in futures:
                try:
                    records, report = future.result()
                except Exception as exc:
                    _log.warning("Source %s failed: %s", feed.name, exc)
                    reports.append(
                        SourceReport(
                            source_name=feed.name,
                            source_url=feed.url,
                            status="failed",
                            error=str(exc),
                        )
                    )
                    continue
                incidents.extend(records)
                reports.append(report)

    incidents.sort(key=lambda r: r.occurred_at, reverse=True)
    failed = sum(1 for r in reports if r.status == "failed")
    _log.info(
        "Batch refreshed: sources=%d failed=%d incidents=%d",
        len(reports),
        failed,
        len(incidents),
    )
    return IncidentBatch(
        incidents=incidents,
        sources=reports,
        stats=batch_stats(incidents),
        generated_at=current,
    )
