"""
Geodesic geometry on coordinates.

- measure: distance, bearing, destination point, path length, elevation statistics
- polygon: area, centroid, volume, self-intersection, point-in-polygon
- path: nearest point, interpolation, simplification, path intersection
- shapes: offset lines, arcs, circles, rectangles
- GeometryEngine: all of the above as static methods
"""

from .measure import (
    calculate_distance,
    calculate_bearing,
    calculate_destination_point,
    destination_coordinate,
    calculate_perimeter,
    calculate_path_length,
    calculate_elevation_gain,
    calculate_elevation_loss,
    create_elevation_profile,
    ElevationProfilePoint,
)
from .polygon import (
    calculate_area,
    calculate_centroid,
    calculate_polygon_centroid,
    calculate_volume,
    calculate_polygon_volume,
    has_self_intersections,
    is_point_in_polygon,
    point_in_polygon,
)
from .path import (
    nearest_point_on_segment,
    calculate_nearest_point_on_path,
    calculate_path_center,
    get_point_at_distance,
    create_regular_points_along_path,
    simplify_path,
    do_paths_intersect,
    SegmentProjection,
    PathProjection,
)
from .shapes import (
    create_offset_line,
    calculate_perpendicular_offset,
    create_arc,
    create_circle,
    create_rectangle,
    PerpendicularOffset,
)
from .engine import GeometryEngine

__all__ = [
    "GeometryEngine",

    # Measurement
    "calculate_distance",
    "calculate_bearing",
    "calculate_destination_point",
    "destination_coordinate",
    "calculate_perimeter",
    "calculate_path_length",
    "calculate_elevation_gain",
    "calculate_elevation_loss",
    "create_elevation_profile",
    "ElevationProfilePoint",

    # Polygons
    "calculate_area",
    "calculate_centroid",
    "calculate_polygon_centroid",
    "calculate_volume",
    "calculate_polygon_volume",
    "has_self_intersections",
    "is_point_in_polygon",
    "point_in_polygon",

    # Paths
    "nearest_point_on_segment",
    "calculate_nearest_point_on_path",
    "calculate_path_center",
    "get_point_at_distance",
    "create_regular_points_along_path",
    "simplify_path",
    "do_paths_intersect",
    "SegmentProjection",
    "PathProjection",

    # Shapes
    "create_offset_line",
    "calculate_perpendicular_offset",
    "create_arc",
    "create_circle",
    "create_rectangle",
    "PerpendicularOffset",
]
