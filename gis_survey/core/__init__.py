"""
Core module for the GIS survey toolkit.

This module contains the 3D coordinate model, coordinate transformation and
geodesic geometry. It has no map-provider or UI dependencies and can be used
standalone.
"""

from .errors import (
    GisSurveyError,
    UnsupportedProjectionError,
    UnsupportedDatumTransformationError,
    UnsupportedConversionError,
    ProjectionNotImplementedError,
    InvalidCoordinateError,
    InvalidElevationError,
    TransformationFailedError,
)

from .models import (
    Coordinate,
    CoordinateValidation,
    HeightReference,
    CoordinateUtils,
    CoreOptions,
)

from .transform import (
    CoordinateTransformer,
    SimpleWGS84Transformer,
    GeoidModel,
    TransformerFactory,
    get_default_factory,
    set_default_factory,
    initialize_core,
)

from .geometry import GeometryEngine

from .providers import ElevationService, populate_elevations

__all__ = [
    # Errors
    "GisSurveyError",
    "UnsupportedProjectionError",
    "UnsupportedDatumTransformationError",
    "UnsupportedConversionError",
    "ProjectionNotImplementedError",
    "InvalidCoordinateError",
    "InvalidElevationError",
    "TransformationFailedError",

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
    "get_default_factory",
    "set_default_factory",
    "initialize_core",

    # Geometry
    "GeometryEngine",

    # Providers
    "ElevationService",
    "populate_elevations",
]
