"""Incident timelines grouped by day, week, or month."""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Dict, List, Sequence

from .config import DEFAULT_SCORING, ScoringConfig
from .models import IncidentRecord
from .scoring import compute_trend
from .time_utils import ensure_utc

GROUPINGS = ("day", "week", "month")
MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


@dataclass
class TrendBucket:
    key: str
    label: str
    incidents: int = 0
    killed: int = 0
    kidnapped: int = 0


@dataclass
class TrendReport:
    group_by: str
    timeline: List[TrendBucket]
    by_category: Dict[str, int]
    top_regions: List[tuple[str, int]]
    total_incidents: int
    total_killed: int
    total_kidnapped: int
    trend: str
    trend_percent: int
    start: datetime | None = None
    end: datetime | None = None


def _week_start(day: date) -> date:
    # Weeks start on Sunday.
    return day - timedelta(days=(day.weekday() + 1) % 7)


def week_number(day: date) -> int:
    jan1 = date(day.year, 1, 1)
    past_days = (day - jan1).days
    return math.ceil((past_days + (jan1.weekday() + 1) % 7 + 1) / 7)


def _bucket_key(day: date, group_by: str) -> str:
    if group_by == "week":
        return _week_start(day).isoformat()
    if group_by == "month":
        return f"{day.year}-{day.month:02d}"
    return day.isoformat()


def _bucket_label(key: str, group_by: str) -> str:
    if group_by == "month":
        year, month = key.split("-")
        return f"{MONTH_NAMES[int(month) - 1]} {year[2:]}"
    day = date.fromisoformat(key)
    if group_by == "week":
        return f"W{week_number(day)}"
    return f"{day.month}/{day.day}"


def _next_key(key: str, group_by: str) -> str:
    if group_by == "month":
        year, month = (int(p) for p in key.split("-"))
        year, month = (year + 1, 1) if month == 12 else (year, month + 1)
        return f"{year}-{month:02d}"
    step = 7 if group_by == "week" else 1
    return (date.fromisoformat(key) + timedelta(days=step)).isoformat()


def build_timeline(
    incidents: Sequence[IncidentRecord],
    *,
    group_by: str = "day",
    start: datetime | None = None,
    end: datetime | None = None,
    config: ScoringConfig = DEFAULT_SCORING,
) -> TrendReport:
    """Bucket incidents over time, filling gaps between the first and last bucket."""
    if group_by not in GROUPINGS:
        raise ValueError(f"group_by must be one of {', '.join(GROUPINGS)}, got {group_by!r}")

    ordered = sorted(incidents, key=lambda i: i.occurred_at)
    buckets: Dict[str, TrendBucket] = {}
    for incident in ordered:
        key = _bucket_key(ensure_utc(incident.occurred_at).date(), group_by)
        bucket = buckets.setdefault(key, TrendBucket(key=key, label=_bucket_label(key, group_by)))
        bucket.incidents += 1
        bucket.killed += incident.killed
        bucket.kidnapped += incident.kidnapped

    timeline: List[TrendBucket] = []
    if buckets:
        keys = sorted(buckets)
        key = keys[0]
        while key <= keys[-1]:
            timeline.append(buckets.get(key) or TrendBucket(key=key, label=_bucket_label(key, group_by)))
            key = _next_key(key, group_by)

    by_region = Counter(i.region for i in ordered if i.region)
    top_regions = sorted(by_region.items(), key=lambda item: -item[1])[:10]

    first_half = second_half = 0
    if ordered:
        window_start = ensure_utc(start) if start else ensure_utc(ordered[0].occurred_at)
        window_end = ensure_utc(end) if end else ensure_utc(ordered[-1].occurred_at)
        midpoint = window_start + (window_end - window_start) / 2
        first_half = sum(1 for i in ordered if ensure_utc(i.occurred_at) < midpoint)
        second_half = len(ordered) - first_half
    trend, trend_percent = compute_trend(second_half, first_half, config)

    return TrendReport(
        group_by=group_by,
        timeline=timeline,
        by_category=dict(Counter(i.category for i in ordered)),
        top_regions=top_regions,
        total_incidents=len(ordered),
        total_killed=sum(i.killed for i in ordered),
        total_kidnapped=sum(i.kidnapped for i in ordered),
        trend=trend,
        trend_percent=trend_percent,
        start=start,
        end=end,
    )
