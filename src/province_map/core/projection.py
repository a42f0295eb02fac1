"""Geographic to screen coordinate transform."""

import math

import numpy as np

from .models import GeoBounds


class GeoProjection:
    """Aspect-preserving equirectangular projection onto a viewport.

    Screen coordinate system:
    - X: east-west (longitude), growing east
    - Y: north-south (latitude), north at Y=0, growing down

    Longitude is shrunk by cos(center latitude) so shapes keep roughly their
    ground proportions. The result is letterboxed or pillarboxed to fit the
    viewport. This is not a true Mercator projection.
    """

    def __init__(self, bounds: GeoBounds, width: float, height: float):
        self.bounds = bounds
        self.width = float(width)
        self.height = float(height)

        if bounds.is_empty:
            self.lon_scale = 1.0
            self.scale_factor = 1.0
            self.offset_x = 0.0
            self.offset_y = 0.0
            return

        self.lon_scale = math.cos(math.radians(bounds.center_lat))

        geo_w = bounds.lon_range * self.lon_scale
        geo_h = bounds.lat_range

        if geo_w > 0 and geo_h > 0:
            if geo_w / geo_h > self.width / self.height:
                # Geography is wider than the viewport: fit width
                self.scale_factor = self.width / geo_w
            else:
                self.scale_factor = self.height / geo_h
        elif geo_w > 0:
            self.scale_factor = self.width / geo_w
        elif geo_h > 0:
            self.scale_factor = self.height / geo_h
        else:
            self.scale_factor = 1.0

        self.offset_x = (self.width - geo_w * self.scale_factor) / 2
        self.offset_y = (self.height - geo_h * self.scale_factor) / 2

    def geo_to_screen(self, lat: float, lon: float) -> tuple[float, float]:
        """Convert lat/lon to screen X, Y."""
        if self.bounds.is_empty:
            return float(lon), float(lat)
        x = self.offset_x + (lon - self.bounds.min_lon) * self.lon_scale * self.scale_factor
        y = self.offset_y + (self.bounds.max_lat - lat) * self.scale_factor
        return x, y

    def geo_to_screen_array(
        self, lats: np.ndarray, lons: np.ndarray
    ) -> tuple[np.ndarray, np.ndarray]:
        """Convert arrays of lat/lon to screen X, Y."""
        if self.bounds.is_empty:
            return np.asarray(lons, dtype=np.float64), np.asarray(lats, dtype=np.float64)
        x = self.offset_x + (lons - self.bounds.min_lon) * self.lon_scale * self.scale_factor
        y = self.offset_y + (self.bounds.max_lat - lats) * self.scale_factor
        return x, y

    def project_ring(self, ring: np.ndarray) -> np.ndarray:
        """Project an (N, 2) ring of [lon, lat] pairs into an (N, 2) screen ring."""
        if len(ring) == 0:
            return np.empty((0, 2), dtype=np.float64)
        x, y = self.geo_to_screen_array(ring[:, 1], ring[:, 0])
        return np.column_stack((x, y))
