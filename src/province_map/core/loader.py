"""Feature collection reading and administrative-level filtering."""

import json
import logging
from pathlib import Path

import numpy as np
from pydantic import ValidationError

from province_map.models import FeatureProperties
from .errors import MapIOError, ParseError
from .models import CandidateFeature

logger = logging.getLogger(__name__)


def _features_of(document, source: str = "document") -> list:
    if not isinstance(document, dict):
        raise ParseError(f"Map {source} is not a feature collection")
    features = document.get("features")
    if features is None:
        return []
    if not isinstance(features, list):
        raise ParseError(f"Map {source} is not a feature collection")
    return features


def read_feature_collection(path: str | Path) -> dict:
    """Read a GeoJSON feature collection from disk."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            document = json.load(f)
    except OSError as exc:
        raise MapIOError(f"Failed to open map definition {path}: {exc}") from exc
    except ValueError as exc:
        # JSONDecodeError and UnicodeDecodeError both land here
        raise ParseError(f"Map definition {path} is not valid JSON: {exc}") from exc

    _features_of(document, f"definition {path}")
    return document


def is_candidate(properties: FeatureProperties, min_admin_level: int = 4) -> bool:
    """Whether a feature is at the administrative granularity we render.

    The NUTS fallback can never be true (a tag cannot equal both "3" and
    "0"), so only the admin level check accepts features in practice. It is
    kept as written until real data confirms whether "or" was meant.
    """
    if properties.admin_level >= min_admin_level:
        return True
    return properties.nuts_level == "3" and properties.nuts_level == "0"


def parse_properties(raw: dict) -> FeatureProperties:
    try:
        return FeatureProperties.model_validate(raw)
    except ValidationError as exc:
        raise ParseError(f"Invalid properties data: {exc}") from exc


def _as_list(value) -> list:
    if not isinstance(value, list):
        raise ParseError(f"Expected a coordinate array, got {type(value).__name__}")
    return value


def _ring_to_array(ring) -> np.ndarray:
    """Convert a list of [lon, lat, ...] positions into an (N, 2) array."""
    if not _as_list(ring):
        return np.empty((0, 2), dtype=np.float64)
    try:
        arr = np.array([(float(c[0]), float(c[1])) for c in ring], dtype=np.float64)
    except (TypeError, ValueError, IndexError, KeyError) as exc:
        raise ParseError(f"Invalid coordinate in ring: {exc}") from exc
    return arr


def extract_rings(geometry) -> list[np.ndarray]:
    """Flatten a Polygon or MultiPolygon geometry into its rings.

    Returns rings of [lon, lat] pairs. Other geometry types yield no rings.
    """
    if not isinstance(geometry, dict):
        raise ParseError("Invalid geometry data in JSON.")

    coordinates = geometry.get("coordinates")
    geom_type = geometry.get("type") or ""
    if coordinates is None or geom_type == "":
        raise ParseError("Invalid geometry data in JSON.")

    if geom_type == "Polygon":
        return [_ring_to_array(ring) for ring in _as_list(coordinates)]
    if geom_type == "MultiPolygon":
        return [
            _ring_to_array(ring)
            for polygon in _as_list(coordinates)
            for ring in _as_list(polygon)
        ]

    logger.debug("Ignoring unsupported geometry type %r", geom_type)
    return []


def collect_candidates(document: dict, min_admin_level: int = 4) -> list[CandidateFeature]:
    """Select the features at the granularity of interest, in document order."""
    candidates = []
    for feature in _features_of(document):
        if not isinstance(feature, dict):
            continue
        raw_properties = feature.get("properties")
        if raw_properties is None:
            continue

        properties = parse_properties(raw_properties)
        if not is_candidate(properties, min_admin_level):
            continue

        logger.debug("Collecting geometry for region %s", properties.region_id)
        rings = extract_rings(feature.get("geometry"))
        candidates.append(CandidateFeature(properties=properties, rings=rings))

    return candidates
