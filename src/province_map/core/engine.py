"""Province store: load pipeline, lookups, and the single color mutator."""

import logging
import threading
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from province_map.models import Color, Province, ProvinceGeometry
from .bounds import compute_geo_bounds
from .errors import MapLoadError, ParseError
from .hit_test import point_in_ring
from .loader import collect_candidates, read_feature_collection
from .models import CandidateFeature, GeoBounds, MapConfig
from .projection import GeoProjection
from .spatial import Camera2D, index_bounds, is_ring_visible
from .triangulate import normalize_ring, triangulate_ring

logger = logging.getLogger(__name__)


class MapEngine:
    """In-memory store of projected, triangulated provinces.

    An engine is single-use: ``load_map`` (or ``load_document``) may be
    called once. A failed load leaves the engine empty; build a new engine
    to try again.
    """

    def __init__(self, config: MapConfig | None = None, **overrides):
        if config is None:
            config = MapConfig(**overrides)
        elif overrides:
            config = MapConfig(**{**config.model_dump(), **overrides})
        self.config = config
        self.geo_bounds = GeoBounds()
        self.projection: Optional[GeoProjection] = None
        self._provinces: list[Province] = []
        self._by_id: dict[str, Province] = {}
        self._color_lock = threading.Lock()
        self._load_attempted = False
        self.is_loaded = False

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    # --- Loading ---

    def load_map(self, path: Union[str, Path]) -> bool:
        """Load provinces from a feature collection file.

        Returns False (and logs the reason) if the file cannot be read or
        an accepted feature is malformed.
        """
        logger.info("Loading map definition from %s", path)
        try:
            self._begin_load()
            document = read_feature_collection(path)
            self._load(document)
        except MapLoadError as exc:
            logger.error("Failed to load map %s: %s", path, exc)
            self._discard()
            return False
        return True

    def load_document(self, document: dict) -> None:
        """Load provinces from an already-parsed feature collection.

        Raises MapLoadError subclasses on failure.
        """
        self._begin_load()
        try:
            self._load(document)
        except MapLoadError:
            self._discard()
            raise

    @classmethod
    def from_provinces(
        cls, provinces: list[Province], config: MapConfig | None = None, **overrides
    ) -> "MapEngine":
        """Build a loaded engine from already-projected provinces.

        Provinces without rings are dropped; the bounds pass runs as in a
        file load.
        """
        engine = cls(config, **overrides)
        engine._begin_load()
        try:
            engine._store(p for p in provinces if p.ring_count)
        except MapLoadError:
            engine._discard()
            raise
        engine.is_loaded = True
        return engine

    def _begin_load(self) -> None:
        if self._load_attempted:
            raise RuntimeError("MapEngine has already been loaded; create a new engine to reload")
        self._load_attempted = True

    def _discard(self) -> None:
        self._provinces = []
        self._by_id = {}
        self.is_loaded = False

    def _load(self, document: dict) -> None:
        candidates = collect_candidates(document, self.config.min_admin_level)
        logger.info("Found %d candidate features", len(candidates))

        # Pass 1: the global extent fixes the projection for every feature
        self.geo_bounds = compute_geo_bounds(candidates)
        self.projection = GeoProjection(self.geo_bounds, self.config.width, self.config.height)

        # Pass 2: project and triangulate
        built = []
        for candidate in candidates:
            province = self._build_province(candidate)
            if province.ring_count == 0:
                logger.debug("Skipping region %s with no geometry", province.id)
                continue
            built.append(province)
            logger.debug("Built province %s with %d polygons", province.id, province.ring_count)

        self._store(built)
        self.is_loaded = True
        logger.info("Successfully loaded %d provinces", len(self._provinces))

    def _build_province(self, candidate: CandidateFeature) -> Province:
        props = candidate.properties
        polygons = []
        indices = []
        for raw_ring in candidate.rings:
            points = normalize_ring(self.projection.project_ring(raw_ring))
            if len(points) == 0:
                continue
            polygons.append(points)
            indices.append(triangulate_ring(points))

        return Province(
            id=props.region_id,
            name=props.region_name,
            name_en=props.region_name_en,
            name_local=props.region_name_local,
            color=Color.pastel_for(props.region_id),
            admin_level=props.admin_level,
            nuts_level=props.nuts_level,
            country_code=props.country_code,
            mountain_type=props.mount_type,
            urban_type=props.urban_type,
            coast_type=props.coast_type,
            geometry=ProvinceGeometry(polygons=polygons, polygon_indices=indices),
        )

    def _store(self, provinces: Iterable[Province]) -> None:
        # Bounds are indexed once, before anything is reachable through the store
        for province in index_bounds(list(provinces)):
            self._add(province)

    def _add(self, province: Province) -> None:
        if province.id in self._by_id:
            if self.config.duplicate_ids == "reject":
                raise ParseError(f"Duplicate region id {province.id!r}")
            logger.warning(
                "Duplicate region id %r; lookups by id will return the first one", province.id
            )
        else:
            self._by_id[province.id] = province
        self._provinces.append(province)

    # --- Queries ---

    @property
    def provinces(self) -> tuple[Province, ...]:
        """All provinces in load order."""
        return tuple(self._provinces)

    def list(self) -> tuple[Province, ...]:
        return self.provinces

    def __len__(self) -> int:
        return len(self._provinces)

    def __iter__(self) -> Iterator[Province]:
        return iter(tuple(self._provinces))

    def get_by_id(self, province_id: str) -> Optional[Province]:
        """First province loaded with this id, or None."""
        return self._by_id.get(province_id)

    def province_at(self, x: float, y: float) -> Optional[Province]:
        """First province (in load order) with a ring containing the world point."""
        for province in self._provinces:
            for ring_index, ring in enumerate(province.polygons):
                bounds = province.ring_bounds(ring_index)
                if bounds is not None and not bounds.contains_point(x, y):
                    continue
                if point_in_ring(ring, x, y):
                    return province
        return None

    def visible_rings(
        self, camera: Camera2D, width: float, height: float
    ) -> Iterator[tuple[Province, int]]:
        """Yield (province, ring_index) for every ring overlapping the camera view."""
        view = camera.view_rect(width, height)
        for province in self._provinces:
            for ring_index in range(province.ring_count):
                if is_ring_visible(province, ring_index, view):
                    yield province, ring_index

    # --- Mutation ---

    def set_color(self, province_id: str, color: Color) -> bool:
        """Recolor the first province with this id. Missing ids are a no-op."""
        province = self._by_id.get(province_id)
        if province is None:
            return False
        with self._color_lock:
            province.color = Color.parse(color)
        return True
