"""Safety scoring: turn weighted incident counts into bounded 1-10 ratings.

Every function here is pure. Inputs are incident-shaped objects exposing
``category``, ``killed`` and ``kidnapped`` (``IncidentRecord`` or anything
with the same attributes) plus the length of the window they were drawn
from, in days. Windows of any length are normalized to a weekly rate so
scores stay comparable.
"""

from __future__ import annotations

import math
from typing import Dict, Iterable, List, Mapping, Sequence

from .config import DEFAULT_SCORING, ScoringConfig
from .models import NationalIndex, RegionScore, RouteScore
from .regions import registry_index

TIER_COLORS = {
    "low": "#22C55E",
    "moderate": "#F59E0B",
    "high": "#EF4444",
    "severe": "#7F1D1D",
}

TIER_LABELS = {
    "low": "Low Risk",
    "moderate": "Moderate Risk",
    "high": "High Risk",
    "severe": "Severe Risk",
}

TIER_DESCRIPTIONS = {
    "low": "Generally safe. Exercise normal caution.",
    "moderate": "Some incidents reported. Stay alert and avoid night travel.",
    "high": "Frequent incidents. Travel only if necessary, use secure transport.",
    "severe": "Active danger zone. Avoid all non-essential travel.",
}

ROUTE_RECOMMENDATIONS = {
    "low": ["Route is generally safe", "Normal precautions advised"],
    "moderate": [
        "Travel during daylight hours (6 AM - 6 PM)",
        "Avoid stopping in isolated areas",
    ],
    "high": [
        "Consider postponing non-essential travel",
        "Use reputable transport services only",
        "Share your itinerary with family",
        "Avoid night travel completely",
    ],
    "severe": [
        "Avoid this route if possible",
        "Seek alternative transportation (air travel)",
        "If travel is essential, use security escort",
    ],
}

SAFEST_TRAVEL_TIME = {
    "low": "Daytime (6 AM - 6 PM)",
    "moderate": "Daytime (6 AM - 6 PM)",
    "high": "Early morning only (6-9 AM)",
    "severe": "Not recommended",
}


def _round_half_up(value: float, digits: int = 0) -> float:
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def _check_window(days: float) -> None:
    if not math.isfinite(days) or days <= 0:
        raise ValueError(f"Window length must be a positive number of days, got {days!r}")


def incident_mass(incidents: Iterable[object], config: ScoringConfig = DEFAULT_SCORING) -> float:
    """Category weights plus casualty penalties, summed over ``incidents``."""
    mass = 0.0
    killed = 0
    kidnapped = 0
    for incident in incidents:
        mass += config.weight_for(str(getattr(incident, "category", "")))
        killed += int(getattr(incident, "killed", 0) or 0)
        kidnapped += int(getattr(incident, "kidnapped", 0) or 0)
    return mass + killed * config.killed_weight + kidnapped * config.kidnapped_weight


def weekly_rate(mass: float, days: float) -> float:
    _check_window(days)
    return mass * 7 / days


def tier_for_rate(rate: float, config: ScoringConfig = DEFAULT_SCORING) -> str:
    thresholds = config.thresholds
    if rate <= thresholds.low:
        return "low"
    if rate <= thresholds.moderate:
        return "moderate"
    if rate <= thresholds.high:
        return "high"
    return "severe"


def score_for_rate(rate: float, config: ScoringConfig = DEFAULT_SCORING) -> float:
    raw = 10 - math.log2(max(0.0, rate) + 1) * config.score_scale
    return min(10.0, max(1.0, _round_half_up(max(1.0, raw), 1)))


def tier_for_score(score: float, config: ScoringConfig = DEFAULT_SCORING) -> str:
    bands = config.national_bands
    if score >= bands.low:
        return "low"
    if score >= bands.moderate:
        return "moderate"
    if score >= bands.high:
        return "high"
    return "severe"


def compute_trend(
    current: int,
    previous: int | None,
    config: ScoringConfig = DEFAULT_SCORING,
) -> tuple[str, int]:
    """Compare a window's incident count with the preceding window of equal length."""
    if previous is None:
        return "stable", 0
    if previous > 0:
        change = (current - previous) * 100 / previous
    else:
        change = 100.0 if current > 0 else 0.0

    deadband = config.trend_deadband_percent
    if change < -deadband:
        trend = "improving"
    elif change > deadband:
        trend = "worsening"
    else:
        trend = "stable"
    return trend, int(_round_half_up(change))


def _tier_fields(tier: str) -> dict:
    return {
        "tier": tier,
        "color": TIER_COLORS[tier],
        "label": TIER_LABELS[tier],
        "description": TIER_DESCRIPTIONS[tier],
    }


def score_region(
    region: str,
    incidents: Sequence[object],
    days: float = 7,
    previous_count: int | None = None,
    config: ScoringConfig = DEFAULT_SCORING,
) -> RegionScore:
    rate = weekly_rate(incident_mass(incidents, config), days)
    trend, trend_percent = compute_trend(len(incidents), previous_count, config)
    return RegionScore(
        region=region,
        score=score_for_rate(rate, config),
        incidents=len(incidents),
        killed=sum(int(getattr(i, "killed", 0) or 0) for i in incidents),
        kidnapped=sum(int(getattr(i, "kidnapped", 0) or 0) for i in incidents),
        trend=trend,
        trend_percent=trend_percent,
        **_tier_fields(tier_for_rate(rate, config)),
    )


def _route_recommendations(tier: str, hotspots: List[str]) -> List[str]:
    recommendations = list(ROUTE_RECOMMENDATIONS[tier])
    if tier == "moderate" and hotspots:
        recommendations.append(f"Exercise extra caution in {hotspots[0]}")
    return recommendations


def score_route(
    origin: str,
    destination: str,
    regions: Sequence[str],
    incidents_by_region: Mapping[str, Sequence[object]],
    days: float = 7,
    config: ScoringConfig = DEFAULT_SCORING,
) -> RouteScore:
    """Score a route over the union of incidents in every region it crosses.

    Mass is divided by ``max(1, len(regions) / route_segment_size)`` so that
    long routes are not penalized for length alone.
    """
    all_incidents: list[object] = []
    counts: Dict[str, int] = {}
    for region in regions:
        region_incidents = list(incidents_by_region.get(region, ()))
        all_incidents.extend(region_incidents)
        counts[region] = len(region_incidents)

    length_factor = max(1.0, len(regions) / config.route_segment_size)
    rate = weekly_rate(incident_mass(all_incidents, config) / length_factor, days)
    tier = tier_for_rate(rate, config)

    position = {region: idx for idx, region in enumerate(regions)}
    hotspots = sorted(
        (r for r in counts if counts[r] > 0),
        key=lambda r: (-counts[r], registry_index(r), position[r]),
    )

    return RouteScore(
        origin=origin,
        destination=destination,
        regions=list(regions),
        score=score_for_rate(rate, config),
        incidents_by_region=counts,
        hotspots=hotspots,
        recommendations=_route_recommendations(tier, hotspots),
        safest_travel_time=SAFEST_TRAVEL_TIME[tier],
        **_tier_fields(tier),
    )


def score_national(
    region_scores: Sequence[RegionScore],
    config: ScoringConfig = DEFAULT_SCORING,
) -> NationalIndex:
    """Incidence-weighted mean of region scores; each region weighs ``max(1, incidents)``."""
    if not region_scores:
        return NationalIndex(
            score=config.national_default_score,
            tier="moderate",
            color=TIER_COLORS["moderate"],
            label="No Data",
            description="Insufficient data for analysis",
            regions_affected=0,
            total_incidents=0,
        )

    weighted_sum = 0.0
    total_weight = 0
    for region_score in region_scores:
        weight = max(1, region_score.incidents)
        weighted_sum += region_score.score * weight
        total_weight += weight

    score = min(10.0, max(1.0, _round_half_up(weighted_sum / total_weight, 1)))
    return NationalIndex(
        score=score,
        regions_affected=sum(1 for s in region_scores if s.incidents > 0),
        total_incidents=sum(s.incidents for s in region_scores),
        **_tier_fields(tier_for_score(weighted_sum / total_weight, config)),
    )


def rank_hotspots(region_scores: Sequence[RegionScore], limit: int = 10) -> List[RegionScore]:
    affected = [s for s in region_scores if s.incidents > 0]
    affected.sort(key=lambda s: (-s.incidents, registry_index(s.region)))
    return affected[:limit]


def top_movers(region_scores: Sequence[RegionScore], direction: str, limit: int = 5) -> List[RegionScore]:
    if direction not in {"improving", "worsening"}:
        raise ValueError(f"direction must be 'improving' or 'worsening', got {direction!r}")
    movers = [s for s in region_scores if s.trend == direction]
    if direction == "improving":
        movers.sort(key=lambda s: s.trend_percent)
    else:
        movers.sort(key=lambda s: -s.trend_percent)
    return movers[:limit]
