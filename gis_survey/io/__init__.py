"""
Input/output helpers for interchange formats.
"""

from .geojson import (
    point_geometry,
    coordinate_to_feature,
    coordinates_to_feature_collection,
    line_string_geometry,
    polygon_geometry,
    coordinate_from_position,
    coordinates_from_positions,
)

__all__ = [
    "point_geometry",
    "coordinate_to_feature",
    "coordinates_to_feature_collection",
    "line_string_geometry",
    "polygon_geometry",
    "coordinate_from_position",
    "coordinates_from_positions",
]
