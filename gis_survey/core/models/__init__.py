"""
Data models for the coordinate core.

This module provides the core data structures:
- Coordinate: 3D geographic coordinate with height reference and projection
- CoordinateUtils: coercion of coordinate-like objects
- CoreOptions: configuration for transformers and caches
- Unit conversion and measurement formatting helpers
"""

from .coordinate import (
    Coordinate,
    CoordinateValidation,
    HeightReference,
    EARTH_RADIUS_M,
    haversine_distance,
    initial_bearing,
    normalize_longitude,
)
from .coordinate_utils import (
    CoordinateUtils,
    standardize_coordinate,
    to_coordinate,
    extract_standard_values,
    clone_with_standard_properties,
)
from .options import CoreOptions
from .units import (
    convert_distance,
    convert_area,
    convert_volume,
    format_measurement,
)

__all__ = [
    # Coordinate
    "Coordinate",
    "CoordinateValidation",
    "HeightReference",
    "EARTH_RADIUS_M",
    "haversine_distance",
    "initial_bearing",
    "normalize_longitude",

    # Coercion
    "CoordinateUtils",
    "standardize_coordinate",
    "to_coordinate",
    "extract_standard_values",
    "clone_with_standard_properties",

    # Options
    "CoreOptions",

    # Units
    "convert_distance",
    "convert_area",
    "convert_volume",
    "format_measurement",
]
