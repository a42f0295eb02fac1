"""Fill and outline draw passes over the visible rings."""

import logging
from typing import Protocol, Sequence

from province_map.models import Color, DARK_GRAY
from .engine import MapEngine
from .models import RenderStats
from .spatial import Camera2D
from .triangulate import iter_triangles

logger = logging.getLogger(__name__)

Point = Sequence[float]


class MapRenderer(Protocol):
    """Drawing backend. Receives world-space points."""

    def draw_triangle(self, a: Point, b: Point, c: Point, color: Color) -> None: ...

    def draw_line(self, start: Point, end: Point, color: Color) -> None: ...


def render_fill_pass(
    engine: MapEngine, renderer: MapRenderer, camera: Camera2D,
    width: float, height: float, stats: RenderStats | None = None,
) -> RenderStats:
    """Submit every valid triangle of every visible ring."""
    if stats is None:
        stats = RenderStats()
    for province, ring_index in engine.visible_rings(camera, width, height):
        ring = province.polygons[ring_index]
        indices = province.polygon_indices[ring_index]
        color = province.color
        drawn = 0
        for a, b, c in iter_triangles(indices, len(ring)):
            renderer.draw_triangle(ring[a], ring[b], ring[c], color)
            drawn += 1
        skipped = len(indices) // 3 - drawn
        if skipped:
            logger.debug(
                "Skipped %d out-of-range triangles in %s ring %d", skipped, province.id, ring_index
            )
        stats.triangles += drawn
        stats.skipped_triangles += skipped
    return stats


def render_outline_pass(
    engine: MapEngine, renderer: MapRenderer, camera: Camera2D,
    width: float, height: float, stats: RenderStats | None = None,
    edge_color: Color = DARK_GRAY,
) -> RenderStats:
    """Submit the closed edge loop of every visible ring."""
    if stats is None:
        stats = RenderStats()
    for province, ring_index in engine.visible_rings(camera, width, height):
        ring = province.polygons[ring_index]
        n = len(ring)
        if n < 2:
            continue
        for k in range(n):
            renderer.draw_line(ring[k], ring[(k + 1) % n], edge_color)
        stats.segments += n
    return stats


def render_map(
    engine: MapEngine, renderer: MapRenderer, camera: Camera2D,
    width: float, height: float, edge_color: Color = DARK_GRAY,
) -> RenderStats:
    """Draw the fill pass, then the outline pass, and report counters."""
    total_rings = sum(p.ring_count for p in engine)
    visible = sum(1 for _ in engine.visible_rings(camera, width, height))
    stats = RenderStats(visible_rings=visible, culled_rings=total_rings - visible)

    render_fill_pass(engine, renderer, camera, width, height, stats)
    render_outline_pass(engine, renderer, camera, width, height, stats, edge_color=edge_color)
    return stats
