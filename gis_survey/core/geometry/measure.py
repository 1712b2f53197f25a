"""gis_survey.core.geometry.measure

Distances, bearings and elevation statistics along paths.

Conventions:
  - Spherical Earth with mean radius R = 6,371,000 m for horizontal math
  - Bearing: North = 0, clockwise positive, degrees in [0, 360)
  - Elevation differences are composed with horizontal distance by Pythagoras
  - Inputs are coordinate-like (Coordinate, mapping or attribute object)

Malformed inputs are logged at ERROR and produce 0.0 / None / [] instead of
raising.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from ..models.coordinate import (
    Coordinate,
    EARTH_RADIUS_M,
    haversine_distance,
    normalize_longitude,
)
from ..models.coordinate_utils import to_coordinate


logger = logging.getLogger(__name__)


def coerce_coordinates(coordinates: Optional[Sequence[Any]], operation: str) -> Optional[List[Coordinate]]:
    """
    Convert a sequence of coordinate-like objects to Coordinates.

    Returns:
        List of Coordinates, None (after logging) if the sequence or any
        element is malformed
    """
    if coordinates is None:
        logger.error("No coordinates provided for %s", operation)
        return None

    result = []
    for index, item in enumerate(coordinates):
        coordinate = to_coordinate(item)
        if coordinate is None:
            logger.error("Invalid coordinate at index %d for %s: %r", index, operation, item)
            return None
        result.append(coordinate)
    return result


def is_closed_ring(coordinates: Sequence[Coordinate]) -> bool:
    """True if the first and last vertices share lat/lng."""
    if len(coordinates) < 2:
        return False
    first, last = coordinates[0], coordinates[-1]
    return first.lat == last.lat and first.lng == last.lng


def calculate_distance(coord1: Any, coord2: Any, include_elevation: bool = True) -> float:
    """
    Calculate the distance between two coordinates.

    Args:
        coord1: First coordinate-like object
        coord2: Second coordinate-like object
        include_elevation: Compose the elevation difference with the
            horizontal distance

    The second coordinate is brought into the first one's projection
    before measuring, in both modes.

    Returns:
        Distance in meters, 0.0 for malformed input
    """
    first = to_coordinate(coord1)
    second = to_coordinate(coord2)
    if first is None or second is None:
        logger.error("Invalid coordinate format for distance calculation: %r, %r", coord1, coord2)
        return 0.0

    if include_elevation:
        return first.distance_to(second)

    second = first._reconcile(second, height=False)
    return haversine_distance(first.lat, first.lng, second.lat, second.lng)


def calculate_bearing(start: Any, end: Any) -> Optional[float]:
    """Initial bearing from start to end in degrees [0, 360), None for malformed input."""
    first = to_coordinate(start)
    second = to_coordinate(end)
    if first is None or second is None:
        logger.error("Invalid coordinate format for bearing calculation: %r, %r", start, end)
        return None
    return first.bearing_to(second)


def calculate_destination_point(start: Any, distance: float, bearing: float) -> Optional[Coordinate]:
    """
    Destination reached from ``start`` after ``distance`` meters along ``bearing``.

    Spherical direct formula. Elevation, height reference, projection and
    transformer are carried over from the start point; longitude is
    normalized to (-180, 180].

    Args:
        start: Starting coordinate-like object
        distance: Distance in meters (negative goes the opposite way)
        bearing: Bearing in degrees

    Returns:
        Destination Coordinate, None for malformed input
    """
    origin = to_coordinate(start)
    if origin is None:
        logger.error("Invalid starting coordinate for destination calculation: %r", start)
        return None

    theta = math.radians(bearing)
    phi1 = math.radians(origin.lat)
    lambda1 = math.radians(origin.lng)
    delta = distance / EARTH_RADIUS_M

    sin_phi2 = (math.sin(phi1) * math.cos(delta)
                + math.cos(phi1) * math.sin(delta) * math.cos(theta))
    phi2 = math.asin(max(-1.0, min(1.0, sin_phi2)))

    y = math.sin(theta) * math.sin(delta) * math.cos(phi1)
    x = math.cos(delta) - math.sin(phi1) * sin_phi2
    lambda2 = lambda1 + math.atan2(y, x)

    return Coordinate(
        math.degrees(phi2),
        normalize_longitude(math.degrees(lambda2)),
        origin.elevation,
        origin.height_reference,
        origin.projection,
        transformer=origin.transformer,
    )


def destination_coordinate(start: Any, distance: float, bearing: float) -> Optional[Coordinate]:
    """Public name of :func:`calculate_destination_point`."""
    return calculate_destination_point(start, distance, bearing)


def calculate_path_length(
    coordinates: Sequence[Any],
    include_elevation: bool = True,
    closed: bool = False,
) -> float:
    """
    Length of a path.

    Args:
        coordinates: Path vertices
        include_elevation: Use 3D segment lengths
        closed: Add the segment from the last vertex back to the first
            (only for 3+ vertices that are not already closed)

    Returns:
        Length in meters
    """
    coords = coerce_coordinates(coordinates, "path length")
    if coords is None or len(coords) < 2:
        return 0.0

    length = 0.0
    for i in range(len(coords) - 1):
        length += calculate_distance(coords[i], coords[i + 1], include_elevation)

    if closed and len(coords) >= 3 and not is_closed_ring(coords):
        length += calculate_distance(coords[-1], coords[0], include_elevation)

    return length


def calculate_perimeter(coordinates: Sequence[Any], include_elevation: bool = True) -> float:
    """Perimeter of a ring; rings of 3+ vertices are closed automatically."""
    return calculate_path_length(coordinates, include_elevation=include_elevation, closed=True)


def calculate_elevation_gain(coordinates: Sequence[Any]) -> float:
    """Sum of the positive elevation changes along a path, in meters."""
    coords = coerce_coordinates(coordinates, "elevation gain")
    if coords is None:
        return 0.0
    return sum(max(0.0, b.elevation - a.elevation) for a, b in zip(coords, coords[1:]))


def calculate_elevation_loss(coordinates: Sequence[Any]) -> float:
    """Sum of the negative elevation changes along a path, as a positive number."""
    coords = coerce_coordinates(coordinates, "elevation loss")
    if coords is None:
        return 0.0
    return sum(max(0.0, a.elevation - b.elevation) for a, b in zip(coords, coords[1:]))


@dataclass
class ElevationProfilePoint:
    """
    Sample of an elevation profile.

    Attributes:
        distance: Cumulative horizontal distance from the path start (m)
        elevation: Elevation of the vertex (m)
        coordinate: The path vertex
    """

    distance: float
    elevation: float
    coordinate: Coordinate

    def to_dict(self):
        return {"distance": self.distance, "elevation": self.elevation}


def create_elevation_profile(coordinates: Sequence[Any]) -> List[ElevationProfilePoint]:
    """
    Elevation profile of a path: one sample per vertex.

    Distances are horizontal so the profile can be plotted against map length.
    """
    coords = coerce_coordinates(coordinates, "elevation profile")
    if coords is None or len(coords) < 2:
        return []

    profile = [ElevationProfilePoint(0.0, coords[0].elevation, coords[0])]
    travelled = 0.0
    for previous, current in zip(coords, coords[1:]):
        travelled += calculate_distance(previous, current, include_elevation=False)
        profile.append(ElevationProfilePoint(travelled, current.elevation, current))
    return profile
