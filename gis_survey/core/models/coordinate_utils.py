"""
Coercion of coordinate-like objects.

Geometry functions accept Coordinate instances, mappings and plain objects
that carry lat/lng under any of the common property names. These helpers
normalize such inputs.
"""

import logging
import numbers
from typing import Any, Dict, Optional

from .coordinate import (
    Coordinate,
    ELEVATION_ALIASES,
    HEIGHT_REFERENCE_ALIASES,
    LAT_ALIASES,
    LNG_ALIASES,
    PROJECTION_ALIASES,
    lookup_field,
)


logger = logging.getLogger(__name__)


def standardize_coordinate(obj: Any) -> Optional[Dict[str, Any]]:
    """
    Standardize a coordinate-like object to a dictionary.

    The result carries lat/lng/elevation together with the latitude/longitude
    and x/y/z aliases, plus height_reference and projection when the input
    has them.

    Args:
        obj: Coordinate, mapping or attribute object

    Returns:
        Standardized dictionary, None if lat/lng cannot be found
    """
    if obj is None or isinstance(obj, (str, bytes, numbers.Number)):
        logger.warning("Invalid coordinate object provided to standardize_coordinate: %r", obj)
        return None

    lat = lookup_field(obj, LAT_ALIASES)
    lng = lookup_field(obj, LNG_ALIASES)
    if lat is None or lng is None:
        logger.warning("Cannot standardize coordinate without lat/lng or x/y properties: %r", obj)
        return None

    elevation = lookup_field(obj, ELEVATION_ALIASES)
    if elevation is None:
        elevation = 0.0

    standardized = {
        "lat": lat,
        "lng": lng,
        "elevation": elevation,
        "latitude": lat,
        "longitude": lng,
        "x": lng,
        "y": lat,
        "z": elevation,
    }

    height_reference = lookup_field(obj, HEIGHT_REFERENCE_ALIASES)
    if height_reference is not None:
        standardized["height_reference"] = height_reference
    projection = lookup_field(obj, PROJECTION_ALIASES)
    if projection is not None:
        standardized["projection"] = projection

    return standardized


def to_coordinate(obj: Any) -> Optional[Coordinate]:
    """
    Convert a coordinate-like object to a Coordinate.

    Coordinate instances are returned unchanged.

    Returns:
        Coordinate, or None when the input is malformed
    """
    if isinstance(obj, Coordinate):
        return obj

    standardized = standardize_coordinate(obj)
    if standardized is None:
        return None
    return Coordinate.from_object(standardized)


def extract_standard_values(obj: Any) -> Optional[Dict[str, Any]]:
    """Return only lat/lng/elevation of a coordinate-like object."""
    standardized = standardize_coordinate(obj)
    if standardized is None:
        return None
    return {
        "lat": standardized["lat"],
        "lng": standardized["lng"],
        "elevation": standardized["elevation"],
    }


def clone_with_standard_properties(obj: Any) -> Optional[Dict[str, Any]]:
    """Independent copy of a coordinate-like object holding only the standard properties."""
    values = extract_standard_values(obj)
    return dict(values) if values is not None else None


class CoordinateUtils:
    """Namespace grouping the coercion helpers."""

    standardize_coordinate = staticmethod(standardize_coordinate)
    to_coordinate = staticmethod(to_coordinate)
    extract_standard_values = staticmethod(extract_standard_values)
    clone_with_standard_properties = staticmethod(clone_with_standard_properties)
