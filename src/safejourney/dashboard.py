"""Dashboard services joining persisted incidents with the scoring engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Dict, List

from .config import DEFAULT_SCORING, ScoringConfig
from .database import count_by_region, count_incidents, query_incidents
from .models import IncidentRecord, NationalIndex, RegionScore, RouteEdge, RouteScore
from .regions import get_region, region_names
from .route_graph import find_route, get_route_states, list_routes, route_endpoints
from .scoring import rank_hotspots, score_national, score_region, score_route, top_movers


@dataclass
class RegionReport:
    score: RegionScore
    recent_incidents: List[IncidentRecord]
    days: int


@dataclass
class SafetyOverview:
    national_index: NationalIndex
    regions: List[RegionScore]
    hotspots: List[RegionScore]
    improving: List[RegionScore]
    worsening: List[RegionScore]
    days: int
    generated_at: datetime


@dataclass
class RouteCheck:
    route: RouteEdge
    safety: RouteScore
    recent_incidents: List[IncidentRecord]
    days: int
    checked_at: datetime


@dataclass
class RouteNotFound:
    origin: str
    destination: str
    message: str = "No known route between these locations"
    known_endpoints: List[str] = field(default_factory=route_endpoints)
    known_routes: List[RouteEdge] = field(default_factory=list_routes)


def _windows(days: int, now: datetime | None) -> tuple[datetime, datetime, datetime]:
    if days <= 0:
        raise ValueError(f"days must be positive, got {days}")
    current = now or datetime.now(UTC)
    start = current - timedelta(days=days)
    previous_start = start - timedelta(days=days)
    return current, start, previous_start


def region_report(
    region: str,
    *,
    days: int = 7,
    now: datetime | None = None,
    path: Path | None = None,
    config: ScoringConfig = DEFAULT_SCORING,
) -> RegionReport:
    known = get_region(region)
    if known is None:
        raise ValueError(f"Unknown region: {region}")
    current, start, previous_start = _windows(days, now)

    incidents = query_incidents(regions=[known.name], since=start, until=current, path=path)
    previous = count_incidents(known.name, since=previous_start, until=start, path=path)
    return RegionReport(
        score=score_region(known.name, incidents, days, previous, config),
        recent_incidents=incidents[:10],
        days=days,
    )


def safety_overview(
    *,
    days: int = 7,
    now: datetime | None = None,
    path: Path | None = None,
    config: ScoringConfig = DEFAULT_SCORING,
) -> SafetyOverview:
    current, start, previous_start = _windows(days, now)

    by_region: Dict[str, List[IncidentRecord]] = {name: [] for name in region_names()}
    for incident in query_incidents(since=start, until=current, path=path):
        if incident.region in by_region:
            by_region[incident.region].append(incident)
    previous_counts = count_by_region(since=previous_start, until=start, path=path)

    scores = [
        score_region(name, by_region[name], days, previous_counts.get(name, 0), config)
        for name in region_names()
    ]
    return SafetyOverview(
        national_index=score_national(scores, config),
        regions=scores,
        hotspots=rank_hotspots(scores, limit=10),
        improving=top_movers(scores, "improving", limit=5),
        worsening=top_movers(scores, "worsening", limit=5),
        days=days,
        generated_at=current,
    )


def check_route(
    origin: str,
    destination: str,
    *,
    days: int = 7,
    now: datetime | None = None,
    path: Path | None = None,
    config: ScoringConfig = DEFAULT_SCORING,
) -> RouteCheck | RouteNotFound:
    current, start, _ = _windows(days, now)
    edge = find_route(origin, destination)
    if edge is None:
        return RouteNotFound(origin=origin, destination=destination)

    regions = get_route_states(edge)
    incidents = query_incidents(regions=regions, since=start, until=current, path=path)
    by_region: Dict[str, List[IncidentRecord]] = {name: [] for name in regions}
    for incident in incidents:
        if incident.region in by_region:
            by_region[incident.region].append(incident)

    return RouteCheck(
        route=edge,
        safety=score_route(edge.origin, edge.destination, regions, by_region, days, config),
        recent_incidents=incidents[:5],
        days=days,
        checked_at=current,
    )
