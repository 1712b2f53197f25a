"""gis_survey.core.geometry.polygon

Polygon area, centroid, volume and topology tests.

Conventions:
  - Rings are closed automatically (first vertex appended when first != last)
  - 2D area: spherical excess of a triangle fan on the mean-radius sphere
  - 3D area: ECEF vertices projected onto the plane of the first
    non-degenerate triangle, shoelace-style fan on that plane
  - Segment intersection tests work in (lng, lat) degrees

Implementation detail:
  - Triangle fans use signed areas so concave rings are measured correctly;
    only the final sum is made absolute.
  - Self-intersecting rings have no well-defined signed area; they fall back
    to the sum of unsigned fan triangles and a warning is logged.
"""

from __future__ import annotations

import logging
import math
from typing import Any, List, Optional, Sequence, Tuple

import numpy as np

from ..models.coordinate import Coordinate, EARTH_RADIUS_M, haversine_distance
from ..models.coordinate_utils import to_coordinate
from ..transform.ecef import geodetic_to_ecef
from .measure import coerce_coordinates, is_closed_ring


logger = logging.getLogger(__name__)

DEGENERATE_NORMAL_M2 = 1e-6  # smallest cross product treated as a real triangle

Point2D = Tuple[float, float]


def close_ring(coordinates: Sequence[Coordinate]) -> List[Coordinate]:
    """Return the ring with the first vertex appended if it is not closed."""
    ring = list(coordinates)
    if ring and not is_closed_ring(ring):
        ring.append(ring[0])
    return ring


def _open_ring(coordinates: Sequence[Coordinate]) -> List[Coordinate]:
    """Drop the closing duplicate vertex, if any."""
    ring = list(coordinates)
    if len(ring) > 3 and is_closed_ring(ring):
        ring.pop()
    return ring


# ---------------------------------------------------------------------------
# Segment intersection
# ---------------------------------------------------------------------------

def _direction(a: Point2D, b: Point2D, c: Point2D) -> float:
    """Orientation of c relative to the directed line a -> b (cross product)."""
    return (c[0] - a[0]) * (b[1] - a[1]) - (b[0] - a[0]) * (c[1] - a[1])


def _on_segment(a: Point2D, b: Point2D, c: Point2D) -> bool:
    """True if c lies in the bounding box of segment a-b."""
    return (min(a[0], b[0]) <= c[0] <= max(a[0], b[0])
            and min(a[1], b[1]) <= c[1] <= max(a[1], b[1]))


def segments_intersect(p1: Coordinate, p2: Coordinate, p3: Coordinate, p4: Coordinate) -> bool:
    """True if segment p1-p2 intersects segment p3-p4, touching included."""
    a = (p1.lng, p1.lat)
    b = (p2.lng, p2.lat)
    c = (p3.lng, p3.lat)
    d = (p4.lng, p4.lat)

    d1 = _direction(c, d, a)
    d2 = _direction(c, d, b)
    d3 = _direction(a, b, c)
    d4 = _direction(a, b, d)

    if ((d1 > 0 > d2) or (d1 < 0 < d2)) and ((d3 > 0 > d4) or (d3 < 0 < d4)):
        return True

    return ((d1 == 0 and _on_segment(c, d, a))
            or (d2 == 0 and _on_segment(c, d, b))
            or (d3 == 0 and _on_segment(a, b, c))
            or (d4 == 0 and _on_segment(a, b, d)))


def _is_self_intersecting(ring: Sequence[Coordinate]) -> bool:
    """Check every pair of non-adjacent segments of a path or closed ring."""
    last_segment = len(ring) - 2
    closed = is_closed_ring(ring)
    for i in range(len(ring) - 1):
        for j in range(i + 2, len(ring) - 1):
            # first and last segments of a closed ring share the closing vertex
            if closed and i == 0 and j == last_segment:
                continue
            if segments_intersect(ring[i], ring[i + 1], ring[j], ring[j + 1]):
                return True
    return False


def has_self_intersections(coordinates: Sequence[Any]) -> bool:
    """
    Check whether a path or ring crosses itself.

    Paths with fewer than 4 vertices cannot self-intersect.
    """
    if coordinates is None or len(coordinates) < 4:
        return False
    coords = coerce_coordinates(coordinates, "self-intersection check")
    if coords is None:
        return False
    return _is_self_intersecting(coords)


# ---------------------------------------------------------------------------
# Area
# ---------------------------------------------------------------------------

def _unit_vector(coordinate: Coordinate) -> np.ndarray:
    phi = math.radians(coordinate.lat)
    lam = math.radians(coordinate.lng)
    return np.array([math.cos(phi) * math.cos(lam), math.cos(phi) * math.sin(lam), math.sin(phi)])


def _spherical_excess(a: Coordinate, b: Coordinate, c: Coordinate) -> float:
    """Spherical excess (steradians) of triangle abc, by L'Huilier's theorem."""
    side_a = haversine_distance(b.lat, b.lng, c.lat, c.lng) / EARTH_RADIUS_M
    side_b = haversine_distance(a.lat, a.lng, c.lat, c.lng) / EARTH_RADIUS_M
    side_c = haversine_distance(a.lat, a.lng, b.lat, b.lng) / EARTH_RADIUS_M
    s = (side_a + side_b + side_c) / 2.0

    product = (math.tan(s / 2.0)
               * math.tan((s - side_a) / 2.0)
               * math.tan((s - side_b) / 2.0)
               * math.tan((s - side_c) / 2.0))
    return 4.0 * math.atan(math.sqrt(max(0.0, product)))


def _signed_spherical_excess(a: Coordinate, b: Coordinate, c: Coordinate) -> float:
    """Spherical excess signed by the winding of abc seen from outside the sphere."""
    excess = _spherical_excess(a, b, c)
    orientation = float(np.dot(_unit_vector(a), np.cross(_unit_vector(b), _unit_vector(c))))
    return -excess if orientation < 0 else excess


def _spherical_area(ring: Sequence[Coordinate]) -> float:
    """2D area of a closed ring on the sphere (m²)."""
    total = 0.0
    for i in range(1, len(ring) - 1):
        total += _signed_spherical_excess(ring[0], ring[i], ring[i + 1])
    return abs(total) * EARTH_RADIUS_M ** 2


def _unsigned_fan_area(ring: Sequence[Coordinate]) -> float:
    """Sum of unsigned fan triangle areas; approximation for self-intersecting rings."""
    total = 0.0
    for i in range(1, len(ring) - 1):
        total += _spherical_excess(ring[0], ring[i], ring[i + 1])
    return total * EARTH_RADIUS_M ** 2


def _plane_area(ring: Sequence[Coordinate]) -> float:
    """3D area of a closed ring, projected onto its first non-degenerate triangle plane (m²)."""
    points = np.array([geodetic_to_ecef(c.lat, c.lng, c.elevation) for c in ring])
    relative = points - points[0]

    normal = None
    for k in range(2, len(relative)):
        candidate = np.cross(relative[k - 1], relative[k])
        norm = np.linalg.norm(candidate)
        if norm > DEGENERATE_NORMAL_M2:
            normal = candidate / norm
            break
    if normal is None:
        return 0.0

    projected = relative - np.outer(relative @ normal, normal)
    fan = np.cross(projected[1:-1], projected[2:])
    return 0.5 * abs(float(fan.sum(axis=0) @ normal))


def calculate_area(coordinates: Sequence[Any], include_elevation: bool = True) -> float:
    """
    Calculate the area of a polygon ring.

    Args:
        coordinates: Ring vertices, closed automatically
        include_elevation: Measure on the plane through the 3D vertices
            instead of on the sphere

    Returns:
        Area in square meters, 0.0 for fewer than 3 vertices or malformed input
    """
    coords = coerce_coordinates(coordinates, "area calculation")
    if coords is None or len(coords) < 3:
        return 0.0

    ring = close_ring(coords)
    if len(ring) < 4:
        return 0.0

    if _is_self_intersecting(ring):
        logger.warning("Self-intersecting polygon detected. Area calculation may be inaccurate.")
        return _unsigned_fan_area(ring)

    if include_elevation:
        return _plane_area(ring)
    return _spherical_area(ring)


# ---------------------------------------------------------------------------
# Centroid and volume
# ---------------------------------------------------------------------------

def calculate_centroid(coordinates: Sequence[Any]) -> Optional[Coordinate]:
    """
    Vertex-mean centroid of a polygon (closing duplicate ignored).

    Raises:
        ValueError: If fewer than 3 coordinates are given
    """
    if coordinates is None or len(coordinates) < 3:
        raise ValueError("Cannot calculate centroid: need at least 3 coordinates")

    coords = coerce_coordinates(coordinates, "centroid calculation")
    if coords is None:
        return None

    vertices = _open_ring(coords)
    count = len(vertices)
    return Coordinate(
        sum(c.lat for c in vertices) / count,
        sum(c.lng for c in vertices) / count,
        sum(c.elevation for c in vertices) / count,
        vertices[0].height_reference,
        vertices[0].projection,
        transformer=vertices[0].transformer,
    )


def calculate_polygon_centroid(
    exterior_ring: Sequence[Any],
    holes: Optional[Sequence[Sequence[Any]]] = None,
) -> Optional[Coordinate]:
    """
    Area-weighted centroid of a polygon with holes.

    Each ring contributes its vertex-mean centroid weighted by its area;
    holes subtract.

    Returns:
        Centroid, a copy of the first vertex for exterior rings shorter than
        3, or None for an empty/malformed exterior
    """
    if not exterior_ring or len(exterior_ring) < 3:
        logger.warning("Cannot calculate polygon centroid: need at least 3 coordinates for exterior ring")
        if exterior_ring:
            first = to_coordinate(exterior_ring[0])
            return first.clone() if first is not None else None
        return None

    exterior_centroid = calculate_centroid(exterior_ring)
    if exterior_centroid is None:
        return None

    valid_holes = [hole for hole in (holes or []) if hole and len(hole) >= 3]
    if not valid_holes:
        return exterior_centroid

    exterior_area = calculate_area(exterior_ring)
    if exterior_area == 0:
        return exterior_centroid

    total_area = exterior_area
    weighted_lat = exterior_centroid.lat * exterior_area
    weighted_lng = exterior_centroid.lng * exterior_area
    weighted_elev = exterior_centroid.elevation * exterior_area

    for hole in valid_holes:
        hole_centroid = calculate_centroid(hole)
        if hole_centroid is None:
            continue
        hole_area = calculate_area(hole)

        total_area -= hole_area
        weighted_lat -= hole_centroid.lat * hole_area
        weighted_lng -= hole_centroid.lng * hole_area
        weighted_elev -= hole_centroid.elevation * hole_area

    if total_area <= 0:
        return exterior_centroid

    return Coordinate(
        weighted_lat / total_area,
        weighted_lng / total_area,
        weighted_elev / total_area,
        exterior_centroid.height_reference,
        exterior_centroid.projection,
        transformer=exterior_centroid.transformer,
    )


def calculate_volume(
    coordinates: Sequence[Any],
    base_elevation: Optional[float] = None,
    include_elevation: bool = False,
) -> float:
    """
    Prism approximation of the volume above a base elevation.

    volume = mean(vertex elevation - base) * area

    Args:
        coordinates: Ring vertices
        base_elevation: Base level in meters, defaults to the lowest vertex
        include_elevation: Use the 3D area instead of the 2D area

    Returns:
        Volume in cubic meters (negative when the base lies above the mean elevation)
    """
    coords = coerce_coordinates(coordinates, "volume calculation")
    if coords is None or len(coords) < 3:
        return 0.0

    vertices = _open_ring(coords)
    if base_elevation is None:
        base_elevation = min(c.elevation for c in vertices)

    mean_height = sum(c.elevation - base_elevation for c in vertices) / len(vertices)
    return mean_height * calculate_area(coords, include_elevation=include_elevation)


def calculate_polygon_volume(
    exterior_ring: Sequence[Any],
    holes: Optional[Sequence[Sequence[Any]]] = None,
    base_elevation: Optional[float] = None,
) -> float:
    """
    Volume of a polygon with holes above a common base elevation.

    The base defaults to the lowest exterior vertex; hole volumes are subtracted.
    """
    exterior = coerce_coordinates(exterior_ring, "polygon volume calculation")
    if exterior is None or len(exterior) < 3:
        return 0.0

    if base_elevation is None:
        base_elevation = min(c.elevation for c in exterior)

    volume = calculate_volume(exterior, base_elevation)
    for hole in holes or []:
        if hole and len(hole) >= 3:
            volume -= calculate_volume(hole, base_elevation)
    return volume


# ---------------------------------------------------------------------------
# Point in polygon
# ---------------------------------------------------------------------------

def is_point_in_polygon(point: Any, polygon: Sequence[Any]) -> bool:
    """
    Ray-casting point-in-polygon test in (lng, lat).

    Ring vertices in another projection are re-projected to the point's
    projection first.
    """
    target = to_coordinate(point)
    ring = coerce_coordinates(polygon, "point-in-polygon test")
    if target is None or ring is None or len(ring) < 3:
        if target is None:
            logger.error("Invalid point for point-in-polygon test: %r", point)
        return False

    ring = [
        c if c.projection == target.projection else c.to_projection(target.projection)
        for c in close_ring(ring)
    ]

    inside = False
    j = len(ring) - 1
    for i in range(len(ring)):
        xi, yi = ring[i].lng, ring[i].lat
        xj, yj = ring[j].lng, ring[j].lat
        if (yi > target.lat) != (yj > target.lat):
            crossing = (xj - xi) * (target.lat - yi) / (yj - yi) + xi
            if target.lng < crossing:
                inside = not inside
        j = i
    return inside


def point_in_polygon(point: Any, polygon: Sequence[Any]) -> bool:
    """Alias of :func:`is_point_in_polygon`."""
    return is_point_in_polygon(point, polygon)
