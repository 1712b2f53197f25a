"""gis_survey.core.geometry.path

Nearest-point queries, interpolation and simplification along paths.

Conventions:
  - Segment projection is parametric in (lng, lat) degrees, clamped to [0, 1]
  - Distances along a path are 3D segment lengths (as calculate_path_length)
  - Positions between vertices are placed with the destination formula;
    elevation is interpolated linearly
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from ..models.coordinate import Coordinate
from ..models.coordinate_utils import to_coordinate
from .measure import (
    calculate_destination_point,
    calculate_distance,
    calculate_path_length,
    coerce_coordinates,
    is_closed_ring,
)
from .polygon import segments_intersect


logger = logging.getLogger(__name__)


@dataclass
class SegmentProjection:
    """
    Nearest point on a segment.

    Attributes:
        point: Closest point on the segment
        distance: 3D distance from the query point to ``point`` (m)
        fraction: Parametric position along the segment, in [0, 1]
    """

    point: Coordinate
    distance: float
    fraction: float

    @property
    def segment_position(self) -> float:
        """Alias of ``fraction``."""
        return self.fraction


@dataclass
class PathProjection:
    """
    Nearest point on a path.

    Attributes:
        point: Closest point on the path
        distance: Distance from the query point to ``point`` (m)
        segment_index: Index of the segment start vertex
        fraction: Parametric position along that segment
        distance_along: Path length from the first vertex to ``point`` (m)
    """

    point: Coordinate
    distance: float
    segment_index: int
    fraction: float
    distance_along: float


def nearest_point_on_segment(start: Any, end: Any, point: Any) -> Optional[SegmentProjection]:
    """
    Find the point on segment start-end closest to ``point``.

    Args:
        start: Segment start (coordinate-like)
        end: Segment end (coordinate-like)
        point: Query point (coordinate-like)

    Returns:
        SegmentProjection, None for malformed input
    """
    a = to_coordinate(start)
    b = to_coordinate(end)
    p = to_coordinate(point)
    if a is None or b is None or p is None:
        logger.error("Invalid coordinates for nearest point on segment: %r, %r, %r", start, end, point)
        return None

    dx = b.lng - a.lng
    dy = b.lat - a.lat
    length_sq = dx * dx + dy * dy

    t = 0.0
    if length_sq > 0:
        t = ((p.lng - a.lng) * dx + (p.lat - a.lat) * dy) / length_sq
        t = max(0.0, min(1.0, t))

    closest = Coordinate(
        a.lat + t * dy,
        a.lng + t * dx,
        a.elevation + t * (b.elevation - a.elevation),
        a.height_reference,
        a.projection,
        transformer=a.transformer,
    )
    return SegmentProjection(point=closest, distance=p.distance_to(closest), fraction=t)


def _segments(coords: List[Coordinate], closed: bool) -> List[Tuple[Coordinate, Coordinate]]:
    pairs = list(zip(coords, coords[1:]))
    if closed and len(coords) >= 3 and not is_closed_ring(coords):
        pairs.append((coords[-1], coords[0]))
    return pairs


def _interpolate(start: Coordinate, end: Coordinate, fraction: float) -> Coordinate:
    """Point at ``fraction`` of the way from start to end along the great circle."""
    horizontal = calculate_distance(start, end, include_elevation=False)
    point = calculate_destination_point(start, horizontal * fraction, start.bearing_to(end))
    point.elevation = start.elevation + (end.elevation - start.elevation) * fraction
    return point


def calculate_nearest_point_on_path(
    coordinates: Sequence[Any],
    point: Any,
    closed: bool = False,
) -> Optional[PathProjection]:
    """Find the closest point on any segment of a path."""
    coords = coerce_coordinates(coordinates, "nearest point on path")
    if coords is None or len(coords) < 2:
        return None

    best: Optional[PathProjection] = None
    travelled = 0.0
    for index, (start, end) in enumerate(_segments(coords, closed)):
        projection = nearest_point_on_segment(start, end, point)
        if projection is None:
            return None

        segment_length = calculate_distance(start, end)
        if best is None or projection.distance < best.distance:
            best = PathProjection(
                point=projection.point,
                distance=projection.distance,
                segment_index=index,
                fraction=projection.fraction,
                distance_along=travelled + projection.fraction * segment_length,
            )
        travelled += segment_length

    return best


def get_point_at_distance(
    coordinates: Sequence[Any],
    distance: float,
    closed: bool = False,
) -> Optional[Coordinate]:
    """
    Point at a given distance along a path.

    Distances before the start or past the end return a copy of the first
    or last vertex.
    """
    coords = coerce_coordinates(coordinates, "point at distance")
    if coords is None or not coords:
        return None
    if len(coords) == 1 or distance <= 0:
        return coords[0].clone()

    travelled = 0.0
    segments = _segments(coords, closed)
    for start, end in segments:
        segment_length = calculate_distance(start, end)
        if segment_length > 0 and travelled + segment_length >= distance:
            return _interpolate(start, end, (distance - travelled) / segment_length)
        travelled += segment_length

    return segments[-1][1].clone()


def calculate_path_center(coordinates: Sequence[Any]) -> Optional[Coordinate]:
    """
    Center of a path.

    One vertex: a copy of it. Two vertices: their geodesic midpoint.
    More: the point at half the total path length.

    Raises:
        ValueError: If no coordinates are given
    """
    if not coordinates:
        raise ValueError("Cannot calculate path center: no coordinates provided")

    coords = coerce_coordinates(coordinates, "path center")
    if coords is None:
        return None

    if len(coords) == 1:
        return coords[0].clone()
    if len(coords) == 2:
        return coords[0].midpoint_to(coords[1])

    return get_point_at_distance(coords, calculate_path_length(coords) / 2.0)


def create_regular_points_along_path(
    coordinates: Sequence[Any],
    interval: float,
    closed: bool = False,
) -> List[Coordinate]:
    """
    Points spaced every ``interval`` meters along a path.

    The first vertex is always included; the last vertex is appended when
    the final interval falls short of it.
    """
    if interval <= 0:
        return []
    coords = coerce_coordinates(coordinates, "regular points")
    if coords is None or len(coords) < 2:
        return []

    total = calculate_path_length(coords, closed=closed)
    points = []
    step = 0
    while step * interval <= total:
        points.append(get_point_at_distance(coords, step * interval, closed=closed))
        step += 1

    end = coords[0] if closed and not is_closed_ring(coords) else coords[-1]
    if points[-1].distance_to(end) > 1e-6:
        points.append(end.clone())
    return points


def _douglas_peucker(coords: List[Coordinate], first: int, last: int, tolerance: float, keep: List[bool]) -> None:
    max_distance = 0.0
    index = first
    for i in range(first + 1, last):
        projection = nearest_point_on_segment(coords[first], coords[last], coords[i])
        if projection.distance > max_distance:
            max_distance = projection.distance
            index = i

    if max_distance > tolerance:
        keep[index] = True
        _douglas_peucker(coords, first, index, tolerance, keep)
        _douglas_peucker(coords, index, last, tolerance, keep)


def simplify_path(coordinates: Sequence[Any], tolerance: float) -> List[Coordinate]:
    """
    Simplify a path with the Douglas-Peucker algorithm.

    Args:
        coordinates: Path vertices
        tolerance: Maximum deviation in meters

    Returns:
        Retained vertices, endpoints always kept
    """
    coords = coerce_coordinates(coordinates, "path simplification")
    if coords is None:
        return []
    if len(coords) < 3 or tolerance <= 0:
        return list(coords)

    keep = [False] * len(coords)
    keep[0] = keep[-1] = True
    _douglas_peucker(coords, 0, len(coords) - 1, tolerance, keep)
    return [c for c, kept in zip(coords, keep) if kept]


def do_paths_intersect(path_a: Sequence[Any], path_b: Sequence[Any]) -> bool:
    """True if any segment of path_a intersects any segment of path_b."""
    first = coerce_coordinates(path_a, "path intersection")
    second = coerce_coordinates(path_b, "path intersection")
    if first is None or second is None:
        return False

    for a1, a2 in zip(first, first[1:]):
        for b1, b2 in zip(second, second[1:]):
            if segments_intersect(a1, a2, b1, b2):
                return True
    return False
