"""
Coordinate transformation between projections, datums and height references.
"""

from .base import CoordinateTransformer
from .simple_wgs84 import SimpleWGS84Transformer, ProjectionDefinition, ProjectionType
from .geoid import GeoidModel
from .helmert import HelmertParameters, helmert_transform
from .ecef import geodetic_to_ecef, ecef_to_geodetic
from .factory import (
    TransformerFactory,
    get_default_factory,
    set_default_factory,
    initialize_core,
)

__all__ = [
    "CoordinateTransformer",
    "SimpleWGS84Transformer",
    "ProjectionDefinition",
    "ProjectionType",
    "GeoidModel",
    "HelmertParameters",
    "helmert_transform",
    "geodetic_to_ecef",
    "ecef_to_geodetic",
    "TransformerFactory",
    "get_default_factory",
    "set_default_factory",
    "initialize_core",
]
