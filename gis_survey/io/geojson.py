"""
GeoJSON helpers for coordinates.

Conventions:
- Positions are [lng, lat] or [lng, lat, elevation] (RFC 7946 order)
- Geometries are always written in WGS84; coordinates in other projections
  are re-projected first
- Output objects are ``geojson`` Features/Geometries (dict subclasses)
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from geojson import Feature, FeatureCollection, LineString, Point, Polygon

from ..core.models.coordinate import (
    Coordinate,
    DEFAULT_PROJECTION,
    GEOJSON_COORDINATE_PRECISION,
    HeightReference,
)
from ..core.models.coordinate_utils import to_coordinate


logger = logging.getLogger(__name__)


def _position(coordinate: Coordinate) -> List[float]:
    wgs84 = coordinate if coordinate.projection == DEFAULT_PROJECTION else coordinate.to_projection(DEFAULT_PROJECTION)
    return [wgs84.lng, wgs84.lat, wgs84.elevation]


def _positions(coordinates: Sequence[Any]) -> List[List[float]]:
    positions = []
    for item in coordinates:
        coordinate = to_coordinate(item)
        if coordinate is None:
            raise ValueError(f"Invalid coordinate for GeoJSON geometry: {item!r}")
        positions.append(_position(coordinate))
    return positions


def _closed(positions: List[List[float]]) -> List[List[float]]:
    if positions and positions[0][:2] != positions[-1][:2]:
        positions.append(list(positions[0]))
    return positions


def point_geometry(coordinate: Coordinate) -> Point:
    """Point geometry of a coordinate (same as ``Coordinate.to_geojson``)."""
    return coordinate.to_geojson()


def coordinate_to_feature(coordinate: Coordinate, properties: Optional[Dict[str, Any]] = None) -> Feature:
    """Wrap a coordinate in a GeoJSON Feature with a Point geometry."""
    return Feature(geometry=point_geometry(coordinate), properties=dict(properties or {}))


def coordinates_to_feature_collection(
    coordinates: Sequence[Coordinate],
    properties: Optional[Dict[str, Any]] = None,
) -> FeatureCollection:
    """
    FeatureCollection with one Point feature per coordinate.

    Each feature gets ``id`` = its index, merged with ``properties``.
    """
    shared = dict(properties or {})
    features = [
        coordinate_to_feature(coordinate, {"id": index, **shared})
        for index, coordinate in enumerate(coordinates)
    ]
    logger.debug("Built feature collection with %d points", len(features))
    return FeatureCollection(features, properties=shared)


def line_string_geometry(coordinates: Sequence[Any]) -> LineString:
    """LineString geometry through the given coordinates."""
    return LineString(_positions(coordinates), precision=GEOJSON_COORDINATE_PRECISION)


def polygon_geometry(
    exterior_ring: Sequence[Any],
    holes: Optional[Sequence[Sequence[Any]]] = None,
) -> Polygon:
    """Polygon geometry; every ring is closed."""
    rings = [_closed(_positions(exterior_ring))]
    rings.extend(_closed(_positions(hole)) for hole in holes or [])
    return Polygon(rings, precision=GEOJSON_COORDINATE_PRECISION)


def coordinate_from_position(
    position: Sequence[float],
    height_reference: str = HeightReference.ELLIPSOIDAL.value,
    projection: str = DEFAULT_PROJECTION,
) -> Coordinate:
    """
    Build a coordinate from a GeoJSON position.

    Raises:
        ValueError: If the position has fewer than 2 values
    """
    if position is None or len(position) < 2:
        raise ValueError(f"GeoJSON position needs at least [lng, lat]: {position!r}")

    elevation = position[2] if len(position) > 2 else 0.0
    return Coordinate(position[1], position[0], elevation, height_reference, projection)


def coordinates_from_positions(
    positions: Sequence[Sequence[float]],
    height_reference: str = HeightReference.ELLIPSOIDAL.value,
    projection: str = DEFAULT_PROJECTION,
) -> List[Coordinate]:
    """Build coordinates from a list of GeoJSON positions."""
    return [coordinate_from_position(p, height_reference, projection) for p in positions]
