"""
GIS Survey - 3D coordinate and geodesic geometry core

Coordinates, datum and height-reference transformation, and geodesic
geometry for survey tools.

Conventions:
- Angles: Decimal degrees at the API boundary, radians internally
- Bearing: North = 0, clockwise positive
- Coordinates: lat/lng in WGS84 unless tagged with another projection
- Distance, area, volume: meters, square meters, cubic meters
- Elevation: meters, ellipsoidal (GNSS) or orthometric (mean sea level)
"""

__version__ = "1.0.0"
__author__ = "GIS Survey"

from .core.models import Coordinate, CoordinateValidation, HeightReference, CoordinateUtils, CoreOptions
from .core.transform import (
    CoordinateTransformer,
    SimpleWGS84Transformer,
    GeoidModel,
    TransformerFactory,
    initialize_core,
)
from .core.geometry import GeometryEngine
from .core.errors import GisSurveyError

__all__ = [
    # Version
    "__version__",

    # Models
    "Coordinate",
    "CoordinateValidation",
    "HeightReference",
    "CoordinateUtils",
    "CoreOptions",

    # Transformation
    "CoordinateTransformer",
    "SimpleWGS84Transformer",
    "GeoidModel",
    "TransformerFactory",
    "initialize_core",

    # Geometry
    "GeometryEngine",

    # Errors
    "GisSurveyError",
]
