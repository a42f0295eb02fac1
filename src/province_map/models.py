"""Pydantic domain models for region features and provinces."""

import re
from typing import Optional, Union

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Color(BaseModel):
    """RGBA color, each channel 0-255."""
    model_config = ConfigDict(frozen=True)

    r: int = Field(ge=0, le=255)
    g: int = Field(ge=0, le=255)
    b: int = Field(ge=0, le=255)
    a: int = Field(default=255, ge=0, le=255)

    @classmethod
    def parse(cls, value: Union["Color", dict, str, tuple, list]) -> "Color":
        """Build a Color from a Color, dict, '#RRGGBB'/'#RRGGBBAA' string, or 3/4-tuple."""
        if isinstance(value, Color):
            return value
        if isinstance(value, dict):
            return cls(**value)
        if isinstance(value, str):
            v = value.strip()
            if not re.match(r'^#([0-9A-Fa-f]{6}|[0-9A-Fa-f]{8})$', v):
                raise ValueError(f"Invalid hex color '{v}'. Must be #RRGGBB or #RRGGBBAA format.")
            h = v[1:]
            channels = [int(h[i:i + 2], 16) for i in range(0, len(h), 2)]
            return cls(**dict(zip("rgba", channels)))
        if isinstance(value, (tuple, list)):
            if len(value) not in (3, 4):
                raise ValueError(f"Color tuple must have 3 or 4 channels, got {len(value)}")
            return cls(**dict(zip("rgba", value)))
        raise ValueError(f"Cannot interpret {value!r} as a color")

    @classmethod
    def pastel_for(cls, key: str) -> "Color":
        """Stable pastel fill derived from the character codes of ``key``."""
        h = sum(ord(c) for c in key)
        return cls(
            r=200 + (h % 55),
            g=200 + ((h * 17) % 55),
            b=200 + ((h * 31) % 55),
            a=200,
        )

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)

    def as_hex(self) -> str:
        return "#{:02X}{:02X}{:02X}{:02X}".format(*self.as_tuple())


DARK_GRAY = Color(r=80, g=80, b=80, a=255)
RED = Color(r=230, g=41, b=55, a=255)


class Rect(BaseModel):
    """Axis-aligned rectangle in projected (screen-space) units."""
    model_config = ConfigDict(frozen=True)

    x_min: float
    y_min: float
    x_max: float
    y_max: float

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    def overlaps(self, other: "Rect") -> bool:
        """Inclusive AABB intersection: touching edges count as overlap."""
        return (
            self.x_min <= other.x_max and other.x_min <= self.x_max
            and self.y_min <= other.y_max and other.y_min <= self.y_max
        )

    def contains_point(self, x: float, y: float) -> bool:
        return self.x_min <= x <= self.x_max and self.y_min <= y <= self.y_max


class FeatureProperties(BaseModel):
    """The properties block of one feature in a region feature collection.

    Missing keys and JSON nulls fall back to the defaults below.
    """

    region_id: str = ""
    region_name: str = ""
    region_name_en: str = ""
    region_name_local: str = ""
    country_code: str = ""
    admin_level: int = 0
    nuts_level: str = ""
    mount_type: float = 0.0
    urban_type: float = 0.0
    coast_type: float = 0.0

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data):
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    @field_validator("nuts_level", "region_id", mode="before")
    @classmethod
    def coerce_numeric_tag(cls, v):
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


def _freeze(array: np.ndarray) -> np.ndarray:
    array.flags.writeable = False
    return array


class ProvinceGeometry(BaseModel):
    """Projected rings of one province with their triangulation and bounds.

    ``polygons``, ``polygon_indices`` and ``polygon_bounds`` are parallel:
    entry ``i`` of each describes ring ``i``. Bounds are filled in by the
    indexing pass after load and may be shorter until then.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    polygons: tuple[np.ndarray, ...] = ()
    polygon_indices: tuple[np.ndarray, ...] = ()
    polygon_bounds: tuple[Rect, ...] = ()

    @field_validator("polygons", mode="before")
    @classmethod
    def rings_must_be_2d(cls, v) -> tuple:
        rings = []
        for i, ring in enumerate(v):
            arr = np.array(ring, dtype=np.float64)
            if arr.size == 0:
                arr = np.empty((0, 2), dtype=np.float64)
            if arr.ndim != 2 or arr.shape[1] != 2:
                raise ValueError(f"Ring {i} must be an (N, 2) array, got shape {arr.shape}")
            rings.append(_freeze(arr))
        return tuple(rings)

    @field_validator("polygon_indices", mode="before")
    @classmethod
    def indices_must_be_flat(cls, v) -> tuple:
        return tuple(_freeze(np.array(idx, dtype=np.uint32).reshape(-1)) for idx in v)

    @model_validator(mode="after")
    def indices_parallel_to_rings(self) -> "ProvinceGeometry":
        if len(self.polygons) != len(self.polygon_indices):
            raise ValueError(
                f"{len(self.polygons)} rings but {len(self.polygon_indices)} index sets"
            )
        if len(self.polygon_bounds) > len(self.polygons):
            raise ValueError(
                f"{len(self.polygon_bounds)} bounds entries for {len(self.polygons)} rings"
            )
        return self


class Province(BaseModel):
    """One administrative region: metadata, immutable geometry, mutable color.

    ``color`` is the only field that accepts assignment; every other field
    raises a ValidationError when reassigned.
    """
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(frozen=True)
    name: str = Field(default="", frozen=True)
    name_en: str = Field(default="", frozen=True)
    name_local: str = Field(default="", frozen=True)
    color: Color
    admin_level: int = Field(default=0, frozen=True)
    nuts_level: str = Field(default="", frozen=True)
    country_code: str = Field(default="", frozen=True)
    mountain_type: float = Field(default=0.0, frozen=True)
    urban_type: float = Field(default=0.0, frozen=True)
    coast_type: float = Field(default=0.0, frozen=True)
    geometry: ProvinceGeometry = Field(default_factory=ProvinceGeometry, frozen=True)

    @field_validator("color", mode="before")
    @classmethod
    def parse_color(cls, v):
        return Color.parse(v)

    @property
    def polygons(self) -> tuple[np.ndarray, ...]:
        return self.geometry.polygons

    @property
    def polygon_indices(self) -> tuple[np.ndarray, ...]:
        return self.geometry.polygon_indices

    @property
    def polygon_bounds(self) -> tuple[Rect, ...]:
        return self.geometry.polygon_bounds

    @property
    def ring_count(self) -> int:
        return len(self.geometry.polygons)

    def ring_bounds(self, ring_index: int) -> Optional[Rect]:
        """Cached bounds of a ring, or None when the indexing pass has not covered it."""
        if 0 <= ring_index < len(self.geometry.polygon_bounds):
            return self.geometry.polygon_bounds[ring_index]
        return None

    def summary(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "name_en": self.name_en,
            "name_local": self.name_local,
            "country_code": self.country_code,
            "admin_level": self.admin_level,
            "nuts_level": self.nuts_level,
            "mountain_type": self.mountain_type,
            "urban_type": self.urban_type,
            "coast_type": self.coast_type,
            "color": self.color.as_hex(),
            "rings": self.ring_count,
            "triangles": sum(len(idx) // 3 for idx in self.geometry.polygon_indices),
        }
