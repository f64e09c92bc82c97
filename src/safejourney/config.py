"""Scoring configuration schema and validation using pydantic."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .models import INCIDENT_CATEGORIES

DEFAULT_CATEGORY_WEIGHTS: Dict[str, float] = {
    "kidnapping": 1.5,
    "terrorism": 2.0,
    "banditry": 1.3,
    "armed_robbery": 1.0,
    "other": 0.8,
}


class TierThresholds(BaseModel):
    """Upper bounds of weekly weighted incident rate per tier; above ``high`` is severe."""

    model_config = ConfigDict(frozen=True)

    low: float = Field(default=1.0, ge=0)
    moderate: float = Field(default=3.0, ge=0)
    high: float = Field(default=6.0, ge=0)

    @model_validator(mode="after")
    def validate_ascending(self) -> "TierThresholds":
        if not (self.low < self.moderate < self.high):
            raise ValueError("Tier thresholds must be strictly ascending (low < moderate < high).")
        return self


class ScoreBands(BaseModel):
    """Lower bounds of the 1-10 score for each tier, used by the national index."""

    model_config = ConfigDict(frozen=True)

    low: float = Field(default=7.0, ge=1, le=10)
    moderate: float = Field(default=5.0, ge=1, le=10)
    high: float = Field(default=3.0, ge=1, le=10)

    @model_validator(mode="after")
    def validate_descending(self) -> "ScoreBands":
        if not (self.low > self.moderate > self.high):
            raise ValueError("Score bands must be strictly descending (low > moderate > high).")
        return self


class ScoringConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    category_weights: Dict[str, float] = Field(default_factory=lambda: dict(DEFAULT_CATEGORY_WEIGHTS))
    unknown_category_weight: float = Field(default=1.0, ge=0)
    killed_weight: float = Field(default=0.3, ge=0)
    kidnapped_weight: float = Field(default=0.2, ge=0)
    thresholds: TierThresholds = Field(default_factory=TierThresholds)
    score_scale: float = Field(default=2.0, gt=0)
    trend_deadband_percent: float = Field(default=10.0, ge=0)
    route_segment_size: float = Field(default=3.0, gt=0)
    national_bands: ScoreBands = Field(default_factory=ScoreBands)
    national_default_score: float = Field(default=7.5, ge=1, le=10)

    @field_validator("category_weights")
    @classmethod
    def validate_category_weights(cls, value: Dict[str, float]) -> Dict[str, float]:
        cleaned = dict(DEFAULT_CATEGORY_WEIGHTS)
        unknown: list[str] = []
        for key, weight in value.items():
            category = key.strip().lower().replace(" ", "_").replace("-", "_")
            if category not in INCIDENT_CATEGORIES:
                unknown.append(key)
                continue
            if weight < 0:
                raise ValueError(f"Category weight for {key} must be non-negative.")
            cleaned[category] = float(weight)
        if unknown:
            raise ValueError(f"Unknown incident category weight(s): {', '.join(sorted(unknown))}")
        return cleaned

    def weight_for(self, category: str) -> float:
        return self.category_weights.get(category, self.unknown_category_weight)


DEFAULT_SCORING = ScoringConfig()


def default_scoring_config_path() -> Path:
    return Path.cwd() / "config" / "scoring.json"


def load_scoring_config(path: Path | None = None) -> ScoringConfig:
    config_path = path or default_scoring_config_path()
    if not config_path.exists():
        return DEFAULT_SCORING
    payload = json.loads(config_path.read_text(encoding="utf-8"))
    return ScoringConfig.model_validate(payload)
