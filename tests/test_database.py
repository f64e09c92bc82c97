from datetime import UTC, datetime, timedelta, timezone
from pathlib import Path

from sqlmodel import Session, select

from safejourney.database import (
    IncidentRow,
    build_engine,
    count_by_region,
    count_by_region_and_category,
    count_incidents,
    init_db,
    persist_incidents,
    query_incidents,
    summarize_incidents,
)
from safejourney.models import IncidentRecord

NOW = datetime(2026, 3, 10, 12, tzinfo=UTC)


def _record(
    title: str,
    region: str | None,
    days_ago: float,
    category: str = "banditry",
    killed: int = 0,
    kidnapped: int = 0,
) -> IncidentRecord:
    return IncidentRecord(
        category=category,
        region=region,
        occurred_at=NOW - timedelta(days=days_ago),
        title=title,
        killed=killed,
        kidnapped=kidnapped,
        source_name="Punch",
        source_url="https://example.org/" + title.replace(" ", "-"),
    )


def test_persist_skips_regionless_and_duplicate_titles(tmp_path: Path) -> None:
    db_path = tmp_path / "incidents.db"
    init_db(db_path)

    saved = persist_incidents(
        [
            _record("Gunmen attack Kaduna village", "Kaduna", 1, killed=2),
            _record("Attack reported somewhere", None, 1),
            _record("Gunmen attack Kaduna village", "Kaduna", 1, killed=2),
        ],
        path=db_path,
    )
    assert saved == 1

    again = persist_incidents([_record("Gunmen attack Kaduna village", "Kaduna", 0.5)], path=db_path)
    assert again == 0

    with Session(build_engine(db_path)) as session:
        rows = session.exec(select(IncidentRow)).all()
    assert len(rows) == 1
    assert rows[0].region == "Kaduna"
    assert rows[0].killed == 2


def test_query_filters_and_ordering(tmp_path: Path) -> None:
    db_path = tmp_path / "incidents.db"
    persist_incidents(
        [
            _record("Old Kano attack", "Kano", 20),
            _record("Kano kidnapping", "Kano", 2, category="kidnapping", kidnapped=4),
            _record("Borno bombing", "Borno", 1, category="terrorism", killed=9),
            _record("Kaduna raid", "Kaduna", 3),
        ],
        path=db_path,
    )

    recent = query_incidents(since=NOW - timedelta(days=7), path=db_path)
    assert [r.title for r in recent] == ["Borno bombing", "Kano kidnapping", "Kaduna raid"]
    assert recent[0].occurred_at == NOW - timedelta(days=1)
    assert recent[0].occurred_at.tzinfo is not None

    kano = query_incidents(regions=["Kano"], path=db_path)
    assert [r.title for r in kano] == ["Kano kidnapping", "Old Kano attack"]

    terror = query_incidents(category="terrorism", path=db_path)
    assert [r.title for r in terror] == ["Borno bombing"]

    assert len(query_incidents(limit=2, path=db_path)) == 2


def test_counts_use_half_open_windows(tmp_path: Path) -> None:
    db_path = tmp_path / "incidents.db"
    persist_incidents(
        [
            _record("Kano one", "Kano", 7),
            _record("Kano two", "Kano", 3, category="kidnapping", kidnapped=2),
            _record("Kano three", "Kano", 10),
            _record("Lagos one", "Lagos", 2, category="armed_robbery", killed=1),
        ],
        path=db_path,
    )
    boundary = NOW - timedelta(days=7)

    assert count_incidents("Kano", since=boundary, path=db_path) == 2
    assert count_incidents("Kano", since=NOW - timedelta(days=14), until=boundary, path=db_path) == 1
    assert count_by_region(since=boundary, path=db_path) == {"Kano": 2, "Lagos": 1}
    assert count_by_region_and_category(since=boundary, path=db_path) == {
        "Kano": {"banditry": 1, "kidnapping": 1},
        "Lagos": {"armed_robbery": 1},
    }

    summary = summarize_incidents(path=db_path)
    assert summary == {"count": 4, "killed": 1, "kidnapped": 2, "injured": 0, "rescued": 0}


def test_summary_of_empty_database(tmp_path: Path) -> None:
    summary = summarize_incidents(path=tmp_path / "empty.db")
    assert summary["count"] == 0
    assert summary["killed"] == 0


def test_offset_datetimes_are_stored_and_compared_in_utc(tmp_path: Path) -> None:
    db_path = tmp_path / "incidents.db"
    lagos_time = timezone(timedelta(hours=1))
    occurred = datetime(2026, 3, 9, 13, 30, tzinfo=lagos_time)
    persist_incidents(
        [
            IncidentRecord(
                category="armed_robbery",
                region="Lagos",
                occurred_at=occurred,
                title="Robbers attack bank in Ikeja",
            )
        ],
        path=db_path,
    )

    found = query_incidents(
        since=datetime(2026, 3, 9, 12, 30, tzinfo=UTC),
        until=datetime(2026, 3, 9, 12, 31, tzinfo=UTC),
        path=db_path,
    )
    assert [r.title for r in found] == ["Robbers attack bank in Ikeja"]
    assert found[0].occurred_at == occurred
    assert found[0].occurred_at.utcoffset() == timedelta(0)

    before = query_incidents(until=datetime(2026, 3, 9, 12, 30, tzinfo=UTC), path=db_path)
    assert before == []
