"""gis_survey.core.geometry.shapes

Offset lines and generated shapes (arcs, circles, rectangles).

Conventions:
  - Offsets: positive distance is to the right of the direction of travel
    (segment bearing + 90 degrees), negative to the left
  - Angles and rotations in degrees, clockwise from North
  - Generated points keep the center's elevation, height reference and projection
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, List, Sequence

from ..models.coordinate import Coordinate
from ..models.coordinate_utils import to_coordinate
from .measure import calculate_destination_point, coerce_coordinates


logger = logging.getLogger(__name__)


def _perpendicular(bearing: float) -> float:
    return (bearing + 90.0) % 360.0


def create_offset_line(
    coordinates: Sequence[Any],
    offset_meters: float,
    closed: bool = False,
) -> List[Coordinate]:
    """
    Create a line parallel to an existing one.

    Every segment start is moved perpendicular to its own segment; the final
    vertex is moved perpendicular to the last segment.

    Args:
        coordinates: Line vertices
        offset_meters: Offset distance (positive = right, negative = left)
        closed: Repeat the first offset point at the end

    Returns:
        Offset vertices

    Raises:
        ValueError: If fewer than 2 coordinates are given
    """
    if coordinates is None or len(coordinates) < 2:
        raise ValueError("Cannot create offset: need at least 2 coordinates")

    coords = coerce_coordinates(coordinates, "offset line")
    if coords is None:
        return []

    result = []
    last_index = len(coords) - 2
    for i in range(len(coords) - 1):
        start, end = coords[i], coords[i + 1]
        perpendicular = _perpendicular(start.bearing_to(end))

        result.append(calculate_destination_point(start, offset_meters, perpendicular))
        if i == last_index:
            result.append(calculate_destination_point(end, offset_meters, perpendicular))

    if closed and len(result) > 2:
        result.append(result[0].clone())

    return result


@dataclass
class PerpendicularOffset:
    """
    Point offset perpendicular to a line segment.

    Attributes:
        nearest_point: Point on the segment at ``segment_position``
        offset_point: ``nearest_point`` moved perpendicular to the segment
        point_index: Index of the segment start vertex
        segment_position: Clamped position along the segment, in [0, 1]
        segment_bearing: Bearing of the segment (degrees)
        perpendicular_bearing: Bearing used for the offset (degrees)
    """

    nearest_point: Coordinate
    offset_point: Coordinate
    point_index: int
    segment_position: float
    segment_bearing: float
    perpendicular_bearing: float


def calculate_perpendicular_offset(
    coordinates: Sequence[Any],
    point_index: int,
    segment_position: float,
    distance: float,
    enable_3d: bool = True,
) -> PerpendicularOffset:
    """
    Offset a point on a segment perpendicular to that segment.

    Args:
        coordinates: Line vertices
        point_index: Index of the segment start vertex
        segment_position: Position along the segment (clamped to [0, 1])
        distance: Offset distance in meters (positive = right)
        enable_3d: Interpolate elevation along the segment; otherwise the
            points get elevation 0

    Raises:
        ValueError: If the coordinates or the point index are invalid
    """
    coords = coerce_coordinates(coordinates, "perpendicular offset")
    if coords is None or len(coords) < 2 or not 0 <= point_index < len(coords) - 1:
        raise ValueError("Invalid coordinates or point index for perpendicular offset")

    start = coords[point_index]
    end = coords[point_index + 1]
    fraction = max(0.0, min(1.0, segment_position))

    elevation = start.elevation + fraction * (end.elevation - start.elevation) if enable_3d else 0.0
    nearest = Coordinate(
        start.lat + fraction * (end.lat - start.lat),
        start.lng + fraction * (end.lng - start.lng),
        elevation,
        start.height_reference,
        start.projection,
        transformer=start.transformer,
    )

    segment_bearing = start.bearing_to(end)
    perpendicular_bearing = _perpendicular(segment_bearing)

    return PerpendicularOffset(
        nearest_point=nearest,
        offset_point=calculate_destination_point(nearest, distance, perpendicular_bearing),
        point_index=point_index,
        segment_position=fraction,
        segment_bearing=segment_bearing,
        perpendicular_bearing=perpendicular_bearing,
    )


def create_arc(
    center: Any,
    radius_meters: float,
    start_angle: float = 0.0,
    end_angle: float = 360.0,
    segments: int = 32,
) -> List[Coordinate]:
    """
    Sample an arc around a center point.

    Returns:
        ``segments + 1`` points from start_angle to end_angle inclusive,
        empty for malformed input
    """
    origin = to_coordinate(center)
    if origin is None or segments < 1:
        logger.error("Invalid arc parameters: center=%r, segments=%r", center, segments)
        return []

    increment = (end_angle - start_angle) / segments
    return [
        calculate_destination_point(origin, radius_meters, start_angle + i * increment)
        for i in range(segments + 1)
    ]


def create_circle(center: Any, radius_meters: float, segments: int = 32) -> List[Coordinate]:
    """Sample a full circle; the last point repeats the first bearing."""
    return create_arc(center, radius_meters, 0.0, 360.0, segments)


def create_rectangle(
    center: Any,
    width_meters: float,
    height_meters: float,
    rotation_degrees: float = 0.0,
) -> List[Coordinate]:
    """
    Rectangle centered on a point, as a closed ring.

    Corners are visited SW, SE, NE, NW (before rotation); rotation turns
    the rectangle clockwise.
    """
    origin = to_coordinate(center)
    if origin is None:
        logger.error("Invalid rectangle center: %r", center)
        return []

    half_width = width_meters / 2.0
    half_height = height_meters / 2.0
    corner_distance = math.hypot(half_width, half_height)

    corners = []
    for dx, dy in ((-half_width, -half_height), (half_width, -half_height),
                   (half_width, half_height), (-half_width, half_height)):
        bearing = (math.degrees(math.atan2(dx, dy)) + rotation_degrees) % 360.0
        corners.append(calculate_destination_point(origin, corner_distance, bearing))

    corners.append(corners[0].clone())
    return corners
