from datetime import UTC, datetime

import pytest

from safejourney.config import ScoringConfig
from safejourney.models import IncidentRecord
from safejourney.route_graph import find_route, get_route_states
from safejourney.scoring import (
    compute_trend,
    incident_mass,
    rank_hotspots,
    score_national,
    score_region,
    score_route,
    top_movers,
)


def _incident(category: str, region: str = "Kaduna", killed: int = 0, kidnapped: int = 0) -> IncidentRecord:
    return IncidentRecord(
        category=category,
        region=region,
        occurred_at=datetime(2026, 3, 1, tzinfo=UTC),
        title=f"{category} in {region}",
        killed=killed,
        kidnapped=kidnapped,
    )


def test_quiet_region_scores_ten() -> None:
    score = score_region("Lagos", [])
    assert score.score == 10.0
    assert score.tier == "low"
    assert score.label == "Low Risk"
    assert score.trend == "stable"
    assert score.trend_percent == 0


def test_weighted_mass_matches_category_and_casualty_weights() -> None:
    incidents = [
        _incident("kidnapping", kidnapped=10),
        _incident("banditry", killed=7),
    ]
    assert incident_mass(incidents) == pytest.approx(1.5 + 2.0 + 1.3 + 2.1)


def test_severe_region_end_to_end() -> None:
    incidents = [
        _incident("terrorism", killed=5),
        _incident("banditry"),
        _incident("kidnapping", kidnapped=3),
    ]
    score = score_region("Kaduna", incidents, days=7, previous_count=1)
    # mass 6.9 per week is above the high threshold
    assert score.tier == "severe"
    assert score.score == 4.0
    assert score.color == "#7F1D1D"
    assert score.incidents == 3
    assert score.killed == 5
    assert score.kidnapped == 3
    assert score.trend == "worsening"
    assert score.trend_percent == 200
    assert score.score < score_region("Kaduna", [_incident("banditry")], days=7).score


def test_single_banditry_incident_is_moderate() -> None:
    score = score_region("Kaduna", [_incident("banditry")])
    assert score.tier == "moderate"
    assert score.score == 7.6


def test_longer_window_normalizes_to_weekly_rate() -> None:
    incidents = [_incident("terrorism") for _ in range(4)]
    weekly = score_region("Borno", incidents, days=7)
    monthly = score_region("Borno", incidents, days=28)
    assert monthly.score > weekly.score
    assert monthly.score == score_region("Borno", incidents[:1], days=7).score


def test_more_incidents_never_raise_the_score() -> None:
    incidents: list[IncidentRecord] = []
    previous = score_region("Zamfara", incidents).score
    for category in ["other", "banditry", "kidnapping", "terrorism", "armed_robbery"] * 3:
        incidents.append(_incident(category, region="Zamfara", killed=1))
        current = score_region("Zamfara", incidents).score
        assert current <= previous
        previous = current


def test_score_is_bounded() -> None:
    incidents = [_incident("terrorism", killed=50) for _ in range(200)]
    score = score_region("Borno", incidents)
    assert score.score == 1.0
    assert score.tier == "severe"


@pytest.mark.parametrize("days", [0, -3])
def test_non_positive_window_is_rejected(days: int) -> None:
    with pytest.raises(ValueError, match="positive"):
        score_region("Lagos", [], days=days)


def test_compute_trend_cases() -> None:
    assert compute_trend(5, None) == ("stable", 0)
    assert compute_trend(0, 0) == ("stable", 0)
    assert compute_trend(3, 0) == ("worsening", 100)
    assert compute_trend(8, 10) == ("improving", -20)
    assert compute_trend(11, 10) == ("stable", 10)
    assert compute_trend(3, 1) == ("worsening", 200)
    assert compute_trend(7, 10) == ("improving", -30)
    assert compute_trend(13, 10) == ("worsening", 30)
    assert compute_trend(10, 10) == ("stable", 0)


def test_custom_weights_change_the_score() -> None:
    heavy = ScoringConfig(category_weights={"banditry": 5.0})
    assert score_region("Kaduna", [_incident("banditry")], config=heavy).tier == "high"


def test_route_score_with_hotspots() -> None:
    edge = find_route("Lagos", "Abuja")
    assert edge is not None
    regions = get_route_states(edge)
    by_region = {
        "Niger": [_incident("banditry", region="Niger"), _incident("banditry", region="Niger")],
        "Kwara": [_incident("kidnapping", region="Kwara")],
    }
    route = score_route(edge.origin, edge.destination, regions, by_region)
    # 4.1 mass over six regions counts as two segments
    assert route.tier == "moderate"
    assert route.score == 6.8
    assert route.hotspots == ["Niger", "Kwara"]
    assert route.incidents_by_region["Lagos"] == 0
    assert route.incidents_by_region["Niger"] == 2
    assert route.recommendations[-1] == "Exercise extra caution in Niger"
    assert route.safest_travel_time == "Daytime (6 AM - 6 PM)"


def test_route_hotspot_ties_follow_registry_order() -> None:
    regions = ["Lagos", "Ogun", "Oyo", "Kwara", "Niger", "Federal Capital Territory"]
    by_region = {
        "Niger": [_incident("other", region="Niger")],
        "Kwara": [_incident("other", region="Kwara")],
    }
    route = score_route("Lagos", "Federal Capital Territory", regions, by_region)
    assert route.hotspots == ["Kwara", "Niger"]


def test_quiet_route_is_low_risk() -> None:
    route = score_route("Enugu", "Anambra", ["Enugu", "Anambra"], {})
    assert route.tier == "low"
    assert route.score == 10.0
    assert route.hotspots == []
    assert route.recommendations == ["Route is generally safe", "Normal precautions advised"]


def test_national_index_defaults_without_data() -> None:
    national = score_national([])
    assert national.score == 7.5
    assert national.tier == "moderate"
    assert national.label == "No Data"
    assert national.total_incidents == 0


def test_national_index_weights_by_incidents() -> None:
    busy = score_region("Kaduna", [_incident("kidnapping", kidnapped=10), _incident("banditry", killed=7)])
    quiet = score_region("Lagos", [])
    national = score_national([busy, quiet])
    # (4.0 * 2 + 10.0 * 1) / 3
    assert national.score == 6.0
    assert national.tier == "moderate"
    assert national.regions_affected == 1
    assert national.total_incidents == 2


def test_hotspots_and_movers() -> None:
    kaduna = score_region("Kaduna", [_incident("banditry")] * 3, previous_count=1)
    borno = score_region("Borno", [_incident("terrorism", region="Borno")] * 3, previous_count=6)
    kano = score_region("Kano", [_incident("other", region="Kano")], previous_count=1)
    lagos = score_region("Lagos", [])

    hotspots = rank_hotspots([kano, kaduna, lagos, borno])
    assert [s.region for s in hotspots] == ["Borno", "Kaduna", "Kano"]

    assert [s.region for s in top_movers([kaduna, borno, kano], "worsening")] == ["Kaduna"]
    assert [s.region for s in top_movers([kaduna, borno, kano], "improving")] == ["Borno"]
    with pytest.raises(ValueError):
        top_movers([kaduna], "sideways")
