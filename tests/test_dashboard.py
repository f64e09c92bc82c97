from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from safejourney.dashboard import RouteCheck, RouteNotFound, check_route, region_report, safety_overview
from safejourney.database import persist_incidents
from safejourney.models import IncidentRecord

NOW = datetime(2026, 3, 10, 12, tzinfo=UTC)


def _record(title: str, region: str, days_ago: float, category: str = "banditry", **kwargs) -> IncidentRecord:
    return IncidentRecord(
        category=category,
        region=region,
        occurred_at=NOW - timedelta(days=days_ago),
        title=title,
        **kwargs,
    )


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    path = tmp_path / "incidents.db"
    persist_incidents(
        [
            _record("Kaduna attack 1", "Kaduna", 1),
            _record("Kaduna attack 2", "Kaduna", 2, category="kidnapping", kidnapped=6),
            _record("Kaduna attack 3", "Kaduna", 3),
            _record("Kaduna last week", "Kaduna", 9),
            _record("Niger ambush", "Niger", 2),
            _record("Borno attack", "Borno", 4, category="terrorism", killed=3),
            _record("Borno earlier 1", "Borno", 8, category="terrorism"),
            _record("Borno earlier 2", "Borno", 10, category="terrorism"),
            _record("Borno earlier 3", "Borno", 12, category="terrorism"),
            _record("Abuja robbery", "Federal Capital Territory", 1, category="armed_robbery"),
        ],
        path=path,
    )
    return path


def test_region_report_scores_window(db_path: Path) -> None:
    report = region_report("kaduna", days=7, now=NOW, path=db_path)
    assert report.score.region == "Kaduna"
    assert report.score.incidents == 3
    assert report.score.kidnapped == 6
    assert report.score.trend == "worsening"
    assert report.score.trend_percent == 200
    assert [i.title for i in report.recent_incidents] == ["Kaduna attack 1", "Kaduna attack 2", "Kaduna attack 3"]


def test_region_report_accepts_alias(db_path: Path) -> None:
    report = region_report("Abuja", days=7, now=NOW, path=db_path)
    assert report.score.region == "Federal Capital Territory"
    assert report.score.incidents == 1


def test_region_report_unknown_region(db_path: Path) -> None:
    with pytest.raises(ValueError, match="Unknown region"):
        region_report("Atlantis", now=NOW, path=db_path)


def test_safety_overview(db_path: Path) -> None:
    overview = safety_overview(days=7, now=NOW, path=db_path)
    assert len(overview.regions) == 37
    assert [s.region for s in overview.hotspots] == ["Kaduna", "Borno", "Federal Capital Territory", "Niger"]
    assert [s.region for s in overview.improving] == ["Borno"]
    assert [s.region for s in overview.worsening] == ["Kaduna", "Federal Capital Territory", "Niger"]
    assert overview.national_index.total_incidents == 6
    assert overview.national_index.regions_affected == 4
    assert overview.generated_at == NOW


def test_check_route_reverse_direction(db_path: Path) -> None:
    result = check_route("Abuja", "Lagos", days=7, now=NOW, path=db_path)
    assert isinstance(result, RouteCheck)
    assert result.route.origin == "Federal Capital Territory"
    assert result.safety.regions[0] == "Federal Capital Territory"
    assert result.safety.regions[-1] == "Lagos"
    assert result.safety.incidents_by_region["Niger"] == 1
    assert result.safety.incidents_by_region["Federal Capital Territory"] == 1
    assert result.safety.hotspots == ["Federal Capital Territory", "Niger"]
    assert [i.title for i in result.recent_incidents] == ["Abuja robbery", "Niger ambush"]


def test_check_route_not_found(db_path: Path) -> None:
    result = check_route("Lagos", "Atlantis", now=NOW, path=db_path)
    assert isinstance(result, RouteNotFound)
    assert "Lagos" in result.known_endpoints
    assert len(result.known_routes) == 22


def test_non_positive_days_rejected(db_path: Path) -> None:
    with pytest.raises(ValueError):
        safety_overview(days=0, now=NOW, path=db_path)


def test_incidents_after_now_are_outside_the_window(db_path: Path) -> None:
    persist_incidents([_record("Kaduna future report", "Kaduna", -20)], path=db_path)

    report = region_report("Kaduna", days=7, now=NOW, path=db_path)
    assert report.score.incidents == 3
    assert "Kaduna future report" not in [i.title for i in report.recent_incidents]

    overview = safety_overview(days=7, now=NOW, path=db_path)
    assert overview.national_index.total_incidents == 6

    persist_incidents([_record("Niger future ambush", "Niger", -5)], path=db_path)
    route = check_route("Lagos", "Abuja", days=7, now=NOW, path=db_path)
    assert isinstance(route, RouteCheck)
    assert route.safety.incidents_by_region["Niger"] == 1
    assert "Niger future ambush" not in [i.title for i in route.recent_incidents]
