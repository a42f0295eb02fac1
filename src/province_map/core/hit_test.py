"""Point containment against raw ring vertices."""

import numpy as np


def point_in_ring(points: np.ndarray, x: float, y: float) -> bool:
    """Even-odd ray cast of (x, y) against an implicitly closed ring.

    Holes are not considered: the test only looks at this ring's edges.
    """
    if len(points) < 3:
        return False

    xi = points[:, 0]
    yi = points[:, 1]
    # Edge i runs from vertex i-1 (j) to vertex i
    xj = np.roll(xi, 1)
    yj = np.roll(yi, 1)

    crosses = (yi > y) != (yj > y)
    with np.errstate(divide="ignore", invalid="ignore"):
        x_cross = (xj - xi) * (y - yi) / (yj - yi) + xi
    hits = crosses & (x < x_cross)
    return bool(np.count_nonzero(hits) % 2)
