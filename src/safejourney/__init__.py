from .cache import IngestionCache, get_or_refresh_batch
from .config import ScoringConfig
from .models import (
    CachedBatch,
    IncidentBatch,
    IncidentDraft,
    IncidentRecord,
    NationalIndex,
    RawArticle,
    RegionScore,
    RouteEdge,
    RouteScore,
)
from .route_graph import find_route, get_all_route_states, get_route_states
from .scoring import score_national, score_region, score_route
from .taxonomy import classify

__all__ = [
    "IngestionCache",
    "get_or_refresh_batch",
    "ScoringConfig",
    "CachedBatch",
    "IncidentBatch",
    "IncidentDraft",
    "IncidentRecord",
    "NationalIndex",
    "RawArticle",
    "RegionScore",
    "RouteEdge",
    "RouteScore",
    "find_route",
    "get_all_route_states",
    "get_route_states",
    "score_national",
    "score_region",
    "score_route",
    "classify",
]
