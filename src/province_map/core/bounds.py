"""First load pass: global geographic extent of the candidate features."""

import logging

from .models import CandidateFeature, GeoBounds

logger = logging.getLogger(__name__)


def compute_geo_bounds(candidates: list[CandidateFeature]) -> GeoBounds:
    """Min/max latitude and longitude over every coordinate of every ring.

    Must run to completion before any coordinate is projected: the
    projection for the whole load is derived from this extent.
    """
    bounds = GeoBounds()
    min_lat, max_lat = bounds.min_lat, bounds.max_lat
    min_lon, max_lon = bounds.min_lon, bounds.max_lon

    for candidate in candidates:
        for ring in candidate.rings:
            if len(ring) == 0:
                continue
            # Rings are stored GeoJSON-style as [lon, lat]
            lons = ring[:, 0]
            lats = ring[:, 1]
            min_lon = min(min_lon, float(lons.min()))
            max_lon = max(max_lon, float(lons.max()))
            min_lat = min(min_lat, float(lats.min()))
            max_lat = max(max_lat, float(lats.max()))

    bounds = GeoBounds(min_lat=min_lat, max_lat=max_lat, min_lon=min_lon, max_lon=max_lon)
    if bounds.is_empty:
        logger.warning("No candidate coordinates found; geographic bounds are empty")
    else:
        logger.debug(
            "Geographic bounds: lat %.6f..%.6f, lon %.6f..%.6f",
            min_lat, max_lat, min_lon, max_lon,
        )
    return bounds
