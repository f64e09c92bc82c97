"""SQLite incident repository using SQLModel."""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import UTC, datetime
from pathlib import Path
from typing import Dict, Iterable, List, Sequence

from sqlalchemy import func
from sqlmodel import Field, Session, SQLModel, create_engine, select

from .models import IncidentRecord
from .settings import get_database_path
from .time_utils import ensure_utc

_log = logging.getLogger(__name__)


class IncidentRow(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    category: str = Field(index=True)
    region: str = Field(index=True)
    sub_region: str | None = None
    location: str | None = None
    occurred_at: datetime = Field(index=True)
    title: str = Field(index=True)
    description: str = ""
    killed: int = 0
    kidnapped: int = 0
    injured: int = 0
    rescued: int = 0
    source_name: str | None = None
    source_url: str | None = None
    created_at: datetime


def default_db_path() -> Path:
    return get_database_path()


def build_engine(path: Path | None = None):
    db_path = path or default_db_path()
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return create_engine(f"sqlite:///{db_path}")


def init_db(path: Path | None = None) -> None:
    SQLModel.metadata.create_all(build_engine(path))


def _ready_engine(path: Path | None):
    engine = build_engine(path)
    SQLModel.metadata.create_all(engine)
    return engine


def _to_record(row: IncidentRow) -> IncidentRecord:
    return IncidentRecord(
        category=row.category,
        region=row.region,
        sub_region=row.sub_region,
        location=row.location,
        occurred_at=ensure_utc(row.occurred_at),
        title=row.title,
        description=row.description,
        killed=row.killed,
        kidnapped=row.kidnapped,
        injured=row.injured,
        rescued=row.rescued,
        source_name=row.source_name,
        source_url=row.source_url,
    )


def persist_incidents(records: Iterable[IncidentRecord], path: Path | None = None) -> int:
    """Store new incidents; region-less records and repeated titles are skipped."""
    engine = _ready_engine(path)
    now = datetime.now(UTC)
    saved = 0
    with Session(engine) as session:
        seen_titles: set[str] = set()
        for record in records:
            if not record.region:
                _log.debug("Not persisting region-less incident: %s", record.title)
                continue
            if record.title in seen_titles:
                continue
            existing = session.exec(select(IncidentRow.id).where(IncidentRow.title == record.title)).first()
            if existing is not None:
                _log.debug("Skipping duplicate incident: %s", record.title[:50])
                continue
            seen_titles.add(record.title)
            session.add(
                IncidentRow(
                    category=record.category,
                    region=record.region,
                    sub_region=record.sub_region,
                    location=record.location,
                    occurred_at=ensure_utc(record.occurred_at),
                    title=record.title,
                    description=record.description,
                    killed=record.killed,
                    kidnapped=record.kidnapped,
                    injured=record.injured,
                    rescued=record.rescued,
                    source_name=record.source_name,
                    source_url=record.source_url,
                    created_at=now,
                )
            )
            saved += 1
        session.commit()
    _log.info("Persisted %d incident(s)", saved)
    return saved


def _window_filters(
    since: datetime | None,
    until: datetime | None,
    regions: Sequence[str] | None = None,
    category: str | None = None,
) -> list:
    filters = []
    if since is not None:
        filters.append(IncidentRow.occurred_at >= ensure_utc(since))
    if until is not None:
        filters.append(IncidentRow.occurred_at < ensure_utc(until))
    if regions is not None:
        filters.append(IncidentRow.region.in_(list(regions)))
    if category is not None:
        filters.append(IncidentRow.category == category)
    return filters


def query_incidents(
    *,
    regions: Sequence[str] | None = None,
    since: datetime | None = None,
    until: datetime | None = None,
    category: str | None = None,
    limit: int | None = None,
    path: Path | None = None,
) -> List[IncidentRecord]:
    """Incidents matching the filters, newest first. ``until`` is exclusive."""
    engine = _ready_engine(path)
    statement = (
        select(IncidentRow)
        .where(*_window_filters(since, until, regions, category))
        .order_by(IncidentRow.occurred_at.desc(), IncidentRow.id.desc())
    )
    if limit is not None:
        statement = statement.limit(limit)
    with Session(engine) as session:
        return [_to_record(row) for row in session.exec(statement)]


def count_incidents(
    region: str,
    *,
    since: datetime | None = None,
    until: datetime | None = None,
    path: Path | None = None,
) -> int:
    engine = _ready_engine(path)
    statement = select(func.count()).select_from(IncidentRow).where(*_window_filters(since, until, [region]))
    with Session(engine) as session:
        return int(session.exec(statement).one())


def count_by_region(
    *,
    since: datetime | None = None,
    until: datetime | None = None,
    path: Path | None = None,
) -> Dict[str, int]:
    engine = _ready_engine(path)
    statement = (
        select(IncidentRow.region, func.count())
        .where(*_window_filters(since, until))
        .group_by(IncidentRow.region)
    )
    with Session(engine) as session:
        return {region: int(count) for region, count in session.exec(statement)}


def count_by_region_and_category(
    *,
    since: datetime | None = None,
    until: datetime | None = None,
    path: Path | None = None,
) -> Dict[str, Dict[str, int]]:
    engine = _ready_engine(path)
    statement = (
        select(IncidentRow.region, IncidentRow.category, func.count())
        .where(*_window_filters(since, until))
        .group_by(IncidentRow.region, IncidentRow.category)
    )
    grouped: Dict[str, Dict[str, int]] = defaultdict(dict)
    with Session(engine) as session:
        for region, category, count in session.exec(statement):
            grouped[region][category] = int(count)
    return dict(grouped)


def summarize_incidents(
    *,
    since: datetime | None = None,
    until: datetime | None = None,
    path: Path | None = None,
) -> dict:
    engine = _ready_engine(path)
    statement = select(
        func.count(),
        func.coalesce(func.sum(IncidentRow.killed), 0),
        func.coalesce(func.sum(IncidentRow.kidnapped), 0),
        func.coalesce(func.sum(IncidentRow.injured), 0),
        func.coalesce(func.sum(IncidentRow.rescued), 0),
    ).where(*_window_filters(since, until))
    with Session(engine) as session:
        count, killed, kidnapped, injured, rescued = session.exec(statement).one()
    return {
        "count": int(count),
        "killed": int(killed),
        "kidnapped": int(kidnapped),
        "injured": int(injured),
        "rescued": int(rescued),
    }
