"""Pydantic models for regions, incidents, routes, scores, and batches."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Literal, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

IncidentCategory = Literal["kidnapping", "banditry", "terrorism", "armed_robbery", "other"]
RiskTier = Literal["low", "moderate", "high", "severe"]
Trend = Literal["improving", "stable", "worsening"]

INCIDENT_CATEGORIES: Tuple[str, ...] = ("kidnapping", "banditry", "terrorism", "armed_robbery", "other")


class Region(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    zone: str


class RawArticle(BaseModel):
    """One feed entry as handed over by the transport."""

    model_config = ConfigDict(extra="ignore")

    title: str
    summary: str = ""
    published_at: str | None = None
    link: str
    source_name: str


class Casualties(BaseModel):
    model_config = ConfigDict(frozen=True)

    killed: int = Field(default=0, ge=0)
    kidnapped: int = Field(default=0, ge=0)
    injured: int = Field(default=0, ge=0)


class IncidentRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: IncidentCategory
    region: str | None = None
    sub_region: str | None = None
    location: str | None = None
    occurred_at: datetime
    title: str
    description: str = ""
    killed: int = Field(default=0, ge=0)
    kidnapped: int = Field(default=0, ge=0)
    injured: int = Field(default=0, ge=0)
    rescued: int = Field(default=0, ge=0)
    source_name: str | None = None
    source_url: str | None = None


class IncidentDraft(BaseModel):
    """Classifier output before provenance and time are known."""

    model_config = ConfigDict(frozen=True)

    category: IncidentCategory
    region: str | None = None
    title: str = ""
    killed: int = Field(default=0, ge=0)
    kidnapped: int = Field(default=0, ge=0)
    injured: int = Field(default=0, ge=0)

    def to_record(
        self,
        *,
        occurred_at: datetime,
        source_name: str | None = None,
        source_url: str | None = None,
        description: str = "",
    ) -> IncidentRecord:
        return IncidentRecord(
            category=self.category,
            region=self.region,
            occurred_at=occurred_at,
            title=self.title,
            description=description,
            killed=self.killed,
            kidnapped=self.kidnapped,
            injured=self.injured,
            source_name=source_name,
            source_url=source_url,
        )


class RouteEdge(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    origin: str
    destination: str
    waypoints: Tuple[str, ...] = ()
    distance_km: float
    estimated_hours: float
    description: str = ""

    @model_validator(mode="after")
    def validate_endpoints(self) -> "RouteEdge":
        if self.origin.casefold() == self.destination.casefold():
            raise ValueError(f"Route {self.id} starts and ends at {self.origin}.")
        endpoints = {self.origin.casefold(), self.destination.casefold()}
        repeated = [w for w in self.waypoints if w.casefold() in endpoints]
        if repeated:
            raise ValueError(f"Route {self.id} lists endpoint(s) as waypoints: {', '.join(repeated)}")
        return self

    def reversed(self) -> "RouteEdge":
        return self.model_copy(
            update={
                "origin": self.destination,
                "destination": self.origin,
                "waypoints": tuple(reversed(self.waypoints)),
            }
        )


class ScoreResult(BaseModel):
    score: float = Field(ge=1.0, le=10.0)
    tier: RiskTier
    color: str
    label: str
    description: str


class RegionScore(ScoreResult):
    region: str
    incidents: int = Field(ge=0)
    killed: int = Field(ge=0)
    kidnapped: int = Field(ge=0)
    trend: Trend = "stable"
    trend_percent: int = 0


class RouteScore(ScoreResult):
    origin: str
    destination: str
    regions: List[str]
    incidents_by_region: Dict[str, int]
    hotspots: List[str]
    recommendations: List[str]
    safest_travel_time: str


class NationalIndex(ScoreResult):
    regions_affected: int = 0
    total_incidents: int = 0


class SourceReport(BaseModel):
    source_name: str
    source_url: str
    status: Literal["ok", "failed"]
    error: str = ""
    fetched_count: int = 0
    incident_count: int = 0


class BatchStats(BaseModel):
    total: int = 0
    by_category: Dict[str, int] = Field(default_factory=dict)
    by_region: Dict[str, int] = Field(default_factory=dict)
    total_killed: int = 0
    total_kidnapped: int = 0


class IncidentBatch(BaseModel):
    incidents: List[IncidentRecord] = Field(default_factory=list)
    sources: List[SourceReport] = Field(default_factory=list)
    stats: BatchStats = Field(default_factory=BatchStats)
    generated_at: datetime


class CachedBatch(BaseModel):
    batch: IncidentBatch
    cached: bool
    as_of: datetime
