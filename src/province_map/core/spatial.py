"""Per-ring bounding boxes, the 2D camera, and visibility culling."""

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from province_map.models import Province, ProvinceGeometry, Rect


class Camera2D(BaseModel):
    """Affine view transform: pan target, zoom, and a screen-space anchor.

    A world point at ``target`` is drawn at screen position ``offset``;
    distances around it are multiplied by ``zoom``.
    """
    model_config = ConfigDict(validate_assignment=True)

    target_x: float = 0.0
    target_y: float = 0.0
    offset_x: float = 0.0
    offset_y: float = 0.0
    zoom: float = Field(default=1.0, gt=0)

    @classmethod
    def centered(cls, width: float, height: float, zoom: float = 1.0) -> "Camera2D":
        """Camera showing world space 1:1 over a width x height viewport."""
        return cls(
            target_x=width / 2, target_y=height / 2,
            offset_x=width / 2, offset_y=height / 2,
            zoom=zoom,
        )

    def world_to_screen(self, x: float, y: float) -> tuple[float, float]:
        return (
            (x - self.target_x) * self.zoom + self.offset_x,
            (y - self.target_y) * self.zoom + self.offset_y,
        )

    def screen_to_world(self, x: float, y: float) -> tuple[float, float]:
        return (
            (x - self.offset_x) / self.zoom + self.target_x,
            (y - self.offset_y) / self.zoom + self.target_y,
        )

    def view_rect(self, width: float, height: float) -> Rect:
        """World-space rectangle visible through a width x height viewport."""
        corners = [
            self.screen_to_world(0.0, 0.0),
            self.screen_to_world(width, 0.0),
            self.screen_to_world(0.0, height),
            self.screen_to_world(width, height),
        ]
        xs = [c[0] for c in corners]
        ys = [c[1] for c in corners]
        return Rect(x_min=min(xs), y_min=min(ys), x_max=max(xs), y_max=max(ys))


def ring_bounds(points: np.ndarray) -> Rect:
    """Axis-aligned bounding rectangle of a projected ring."""
    mins = points.min(axis=0)
    maxs = points.max(axis=0)
    return Rect(
        x_min=float(mins[0]), y_min=float(mins[1]),
        x_max=float(maxs[0]), y_max=float(maxs[1]),
    )


def index_geometry(geometry: ProvinceGeometry) -> ProvinceGeometry:
    """Copy of ``geometry`` with one bounding rectangle per ring."""
    return ProvinceGeometry(
        polygons=geometry.polygons,
        polygon_indices=geometry.polygon_indices,
        polygon_bounds=tuple(ring_bounds(ring) for ring in geometry.polygons),
    )


def index_bounds(provinces: list[Province]) -> list[Province]:
    """Return the provinces rebuilt with one bounding rectangle per ring.

    Runs once after all provinces are loaded. Province geometry is frozen,
    so each province is copied with indexed geometry rather than updated.
    """
    return [
        province.model_copy(update={"geometry": index_geometry(province.geometry)})
        for province in provinces
    ]


def is_ring_visible(province: Province, ring_index: int, view: Rect) -> bool:
    """A ring is drawn only if it has cached bounds overlapping the view."""
    bounds = province.ring_bounds(ring_index)
    if bounds is None:
        return False
    return bounds.overlaps(view)
