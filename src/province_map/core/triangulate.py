"""Ring cleanup and ear-clipping triangulation for solid fills."""

import logging
from typing import Iterator

import mapbox_earcut as earcut
import numpy as np

logger = logging.getLogger(__name__)

CLOSURE_TOLERANCE = 1e-6


def normalize_ring(points: np.ndarray) -> np.ndarray:
    """Drop the explicit closing point of a ring.

    GeoJSON repeats the first position at the end of a ring; internally
    rings are implicitly closed. The last point is dropped when it matches
    the first within CLOSURE_TOLERANCE on both axes.
    """
    if len(points) > 1:
        first = points[0]
        last = points[-1]
        if abs(first[0] - last[0]) < CLOSURE_TOLERANCE and abs(first[1] - last[1]) < CLOSURE_TOLERANCE:
            return points[:-1]
    return points


def triangulate_ring(points: np.ndarray) -> np.ndarray:
    """Triangulate a single ring using ear-clipping.

    Each ring is triangulated on its own; an inner ring of a polygon with
    holes becomes its own solid polygon.

    Args:
        points: (N, 2) array of projected ring vertices, implicitly closed.

    Returns:
        Flat uint32 array of vertex-index triples into ``points``.
    """
    n = len(points)
    if n < 3:
        return np.empty(0, dtype=np.uint32)

    vertices = np.ascontiguousarray(points, dtype=np.float64).reshape(-1, 2)
    ring_ends = np.array([n], dtype=np.uint32)
    try:
        indices = earcut.triangulate_float64(vertices, ring_ends)
    except (ValueError, RuntimeError) as exc:
        logger.warning("Triangulation failed for %d-point ring: %s", n, exc)
        return np.empty(0, dtype=np.uint32)

    indices = np.asarray(indices, dtype=np.uint32).reshape(-1)
    if len(indices) == 0:
        logger.debug("Degenerate %d-point ring produced no triangles", n)
    return indices


def iter_triangles(indices: np.ndarray, point_count: int) -> Iterator[tuple[int, int, int]]:
    """Yield index triples that reference vertices within the ring.

    Degenerate rings may produce malformed index sets; any triple with an
    out-of-range index is skipped, as is a trailing partial triple.
    """
    for i in range(0, len(indices) - 2, 3):
        a, b, c = int(indices[i]), int(indices[i + 1]), int(indices[i + 2])
        if a >= point_count or b >= point_count or c >= point_count:
            continue
        yield a, b, c
