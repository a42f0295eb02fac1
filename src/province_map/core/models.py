"""Pydantic models shared by the load pipeline and render passes."""

import math
from typing import Literal

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from province_map.models import FeatureProperties


class MapConfig(BaseModel):
    """Construction-time settings for a MapEngine."""
    model_config = ConfigDict(validate_assignment=True)

    width: int = Field(default=1280, gt=0)
    height: int = Field(default=720, gt=0)
    min_admin_level: int = Field(default=4, ge=0)
    duplicate_ids: Literal["warn", "reject"] = "warn"


class GeoBounds(BaseModel):
    """Geographic extent of all candidate features.

    Starts at the +inf/-inf sentinels so that the first coordinate seen
    always widens it. Stays empty (min > max) when no feature was accepted.
    """

    min_lat: float = math.inf
    max_lat: float = -math.inf
    min_lon: float = math.inf
    max_lon: float = -math.inf

    @property
    def is_empty(self) -> bool:
        return self.min_lat > self.max_lat or self.min_lon > self.max_lon

    @property
    def lat_range(self) -> float:
        return self.max_lat - self.min_lat

    @property
    def lon_range(self) -> float:
        return self.max_lon - self.min_lon

    @property
    def center_lat(self) -> float:
        return (self.max_lat + self.min_lat) / 2

    def as_dict(self) -> dict | None:
        if self.is_empty:
            return None
        return {
            "min_lat": self.min_lat,
            "max_lat": self.max_lat,
            "min_lon": self.min_lon,
            "max_lon": self.max_lon,
        }


class CandidateFeature(BaseModel):
    """An accepted feature: parsed properties plus raw [lon, lat] rings."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    properties: FeatureProperties
    rings: list[np.ndarray] = []


class RenderStats(BaseModel):
    """Counters reported by one render call."""

    visible_rings: int = 0
    culled_rings: int = 0
    triangles: int = 0
    skipped_triangles: int = 0
    segments: int = 0
