"""CLI entrypoint for news ingestion, scraping, and safety scoring."""

from __future__ import annotations

import argparse
import dataclasses
import json
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import List

from .cache import IngestionCache
from .connectors import build_news_connector
from .dashboard import RouteNotFound, check_route, region_report, safety_overview
from .database import init_db, persist_incidents, query_incidents
from .ingestion import refresh_batch
from .models import CachedBatch
from .regions import normalize_region_name
from .route_graph import get_all_route_states, list_routes, route_endpoints
from .scheduler import SchedulerOptions, start_scheduler
from .settings import (
    get_database_path,
    get_default_window_days,
    get_feed_timeout_seconds,
    get_fetch_max_workers,
    get_news_cache_window,
    get_news_max_age,
    get_scoring_config,
    load_environment,
)
from .source_registry import load_registry
from .trends import build_timeline


def _print(payload: dict) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False, default=str))


def _db_path(args: argparse.Namespace) -> Path:
    return Path(args.db).expanduser() if getattr(args, "db", None) else get_database_path()


def _days(args: argparse.Namespace) -> int:
    return args.days if args.days is not None else get_default_window_days()


def _load_batch(cache: IngestionCache, sources_path: str | None) -> CachedBatch:
    feeds = load_registry(Path(sources_path) if sources_path else None)
    connector = build_news_connector(feeds, timeout_seconds=get_feed_timeout_seconds())
    return cache.get_or_refresh(
        lambda: refresh_batch(
            connector.feeds,
            connector.fetch_articles,
            max_age=get_news_max_age(),
            max_workers=get_fetch_max_workers(),
        )
    )


def cmd_news(args: argparse.Namespace) -> int:
    load_environment()
    cache = IngestionCache(freshness_window=get_news_cache_window())
    result = _load_batch(cache, args.sources)
    _print(
        {
            "articles": [i.model_dump(mode="json") for i in result.batch.incidents],
            "stats": result.batch.stats.model_dump(mode="json"),
            "sources": [s.model_dump(mode="json") for s in result.batch.sources],
            "cached": result.cached,
            "last_updated": result.as_of.isoformat(),
        }
    )
    return 0


def cmd_scrape(args: argparse.Namespace) -> int:
    load_environment()
    db_path = _db_path(args)
    init_db(db_path)
    cache = IngestionCache(freshness_window=get_news_cache_window())

    def run_once() -> None:
        result = _load_batch(cache, args.sources)
        saved = persist_incidents(result.batch.incidents, path=db_path)
        failed = [s.source_name for s in result.batch.sources if s.status == "failed"]
        _print(
            {
                "classified": len(result.batch.incidents),
                "saved": saved,
                "cached": result.cached,
                "failed_sources": failed,
                "as_of": result.as_of.isoformat(),
            }
        )

    if args.interval_minutes:
        start_scheduler(
            run_once,
            SchedulerOptions(interval_minutes=args.interval_minutes, max_runs=args.max_runs),
        )
    else:
        run_once()
    return 0


def cmd_safety(args: argparse.Namespace) -> int:
    load_environment()
    config = get_scoring_config()
    days = _days(args)
    try:
        if args.region:
            report = region_report(args.region, days=days, path=_db_path(args), config=config)
        else:
            overview = safety_overview(days=days, path=_db_path(args), config=config)
    except ValueError as exc:
        _print({"error": str(exc)})
        return 1

    if args.region:
        _print(
            {
                "state": report.score.model_dump(mode="json"),
                "recent_incidents": [i.model_dump(mode="json") for i in report.recent_incidents],
                "period": f"{days} days",
            }
        )
        return 0

    _print(
        {
            "national_index": overview.national_index.model_dump(mode="json"),
            "states": [s.model_dump(mode="json") for s in overview.regions],
            "hotspots": [s.model_dump(mode="json") for s in overview.hotspots],
            "improving": [s.model_dump(mode="json") for s in overview.improving],
            "worsening": [s.model_dump(mode="json") for s in overview.worsening],
            "period": f"{days} days",
            "generated_at": overview.generated_at.isoformat(),
        }
    )
    return 0


def cmd_route(args: argparse.Namespace) -> int:
    load_environment()
    days = _days(args)
    try:
        result = check_route(
            args.origin,
            args.destination,
            days=days,
            path=_db_path(args),
            config=get_scoring_config(),
        )
    except ValueError as exc:
        _print({"error": str(exc)})
        return 1
    if isinstance(result, RouteNotFound):
        _print(
            {
                "error": result.message,
                "known_endpoints": result.known_endpoints,
                "available_routes": [{"from": r.origin, "to": r.destination} for r in result.known_routes],
            }
        )
        return 2

    _print(
        {
            "route": result.route.model_dump(mode="json"),
            "safety": result.safety.model_dump(mode="json"),
            "recent_incidents": [i.model_dump(mode="json") for i in result.recent_incidents],
            "checked_at": result.checked_at.isoformat(),
            "period": f"{days} days",
        }
    )
    return 0


def cmd_routes(_: argparse.Namespace) -> int:
    _print(
        {
            "routes": [
                {
                    "id": r.id,
                    "from": r.origin,
                    "to": r.destination,
                    "distance_km": r.distance_km,
                    "estimated_hours": r.estimated_hours,
                }
                for r in list_routes()
            ],
            "destinations": route_endpoints(),
            "states": get_all_route_states(),
        }
    )
    return 0


def cmd_trends(args: argparse.Namespace) -> int:
    load_environment()
    days = args.days
    end = datetime.now(UTC)
    start = end - timedelta(days=days)
    regions = [normalize_region_name(args.region)] if args.region else None
    incidents = query_incidents(regions=regions, since=start, until=end, path=_db_path(args))
    report = build_timeline(incidents, group_by=args.group_by, start=start, end=end, config=get_scoring_config())
    _print(dataclasses.asdict(report))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="safejourney", description="Nigeria security incident safety scoring")
    subparsers = parser.add_subparsers(dest="command", required=True)

    news_parser = subparsers.add_parser("news", help="Fetch and classify live security news")
    news_parser.add_argument("--sources", help="Path to news_sources.json override")
    news_parser.set_defaults(func=cmd_news)

    scrape_parser = subparsers.add_parser("scrape", help="Classify live news and persist new incidents")
    scrape_parser.add_argument("--sources", help="Path to news_sources.json override")
    scrape_parser.add_argument("--db", help="SQLite database path")
    scrape_parser.add_argument("--interval-minutes", type=int, help="Repeat every N minutes")
    scrape_parser.add_argument("--max-runs", type=int, help="Stop after N runs when repeating")
    scrape_parser.set_defaults(func=cmd_scrape)

    safety_parser = subparsers.add_parser("safety", help="Safety scores for all states or one state")
    safety_parser.add_argument("--region", help="State name (aliases such as Abuja accepted)")
    safety_parser.add_argument("--days", type=int, help="Window length in days")
    safety_parser.add_argument("--db", help="SQLite database path")
    safety_parser.set_defaults(func=cmd_safety)

    route_parser = subparsers.add_parser("route", help="Safety score for a travel route")
    route_parser.add_argument("--from", dest="origin", required=True)
    route_parser.add_argument("--to", dest="destination", required=True)
    route_parser.add_argument("--days", type=int, help="Window length in days")
    route_parser.add_argument("--db", help="SQLite database path")
    route_parser.set_defaults(func=cmd_route)

    routes_parser = subparsers.add_parser("routes", help="List known routes and destinations")
    routes_parser.set_defaults(func=cmd_routes)

    trends_parser = subparsers.add_parser("trends", help="Incident timeline for charts")
    trends_parser.add_argument("--region", help="Optional state filter")
    trends_parser.add_argument("--days", type=int, default=30)
    trends_parser.add_argument("--group-by", choices=["day", "week", "month"], default="day")
    trends_parser.add_argument("--db", help="SQLite database path")
    trends_parser.set_defaults(func=cmd_trends)

    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
