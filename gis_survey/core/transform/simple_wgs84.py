"""
Built-in transformer for WGS84 and the North American datums.

Supports geographic WGS84, NAD83 and NAD27 with Helmert datum shifts, and
ellipsoidal/orthometric height conversion through a geoid model. UTM and
State Plane projections are registered so they validate, but converting
to or from them raises ProjectionNotImplementedError.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from ..errors import (
    ProjectionNotImplementedError,
    TransformationFailedError,
    UnsupportedDatumTransformationError,
    UnsupportedProjectionError,
)
from ..models.coordinate import Coordinate, HeightReference
from ..models.options import CoreOptions
from .base import CoordinateTransformer, RawPosition
from .geoid import GeoidModel
from .helmert import HelmertParameters, NAD83_TO_NAD27, WGS84_TO_NAD83, shift_geodetic


logger = logging.getLogger(__name__)


class ProjectionType(Enum):
    """Kind of coordinate system behind a projection identifier."""
    GEOGRAPHIC = "geographic"
    UTM = "utm"
    STATE_PLANE = "stateplane"


@dataclass(frozen=True)
class ProjectionDefinition:
    """
    Registered projection.

    Attributes:
        datum: Datum name ("WGS84", "NAD83", "NAD27")
        type: Projection type
        epsg: EPSG code, when the projection has a single one
        params: Projection-specific parameters (e.g. UTM hemisphere)
    """

    datum: str
    type: ProjectionType
    epsg: Optional[str] = None
    params: Dict[str, Any] = field(default_factory=dict)


DEFAULT_PROJECTIONS: Dict[str, ProjectionDefinition] = {
    "WGS84": ProjectionDefinition("WGS84", ProjectionType.GEOGRAPHIC, "4326"),
    "NAD83": ProjectionDefinition("NAD83", ProjectionType.GEOGRAPHIC, "4269"),
    "NAD27": ProjectionDefinition("NAD27", ProjectionType.GEOGRAPHIC, "4267"),
    "UTM_NAD83_N": ProjectionDefinition("NAD83", ProjectionType.UTM, params={"north": True}),
    "UTM_NAD83_S": ProjectionDefinition("NAD83", ProjectionType.UTM, params={"north": False}),
    "StatePlane_NAD83": ProjectionDefinition("NAD83", ProjectionType.STATE_PLANE),
}

# Direct shifts; the reverse direction uses the inverted parameters
DEFAULT_DATUM_SHIFTS: Dict[Tuple[str, str], HelmertParameters] = {
    ("WGS84", "NAD83"): WGS84_TO_NAD83,
    ("NAD83", "NAD27"): NAD83_TO_NAD27,
}

PIVOT_DATUM = "NAD83"


class SimpleWGS84Transformer(CoordinateTransformer):
    """
    Transformer for WGS84/NAD83/NAD27 geographic coordinates.

    Args:
        options: Core options (cache precisions)
        geoid_model: Object with ``get_height(lat, lng)``, defaults to GeoidModel
    """

    def __init__(self, options: Optional[CoreOptions] = None, geoid_model=None):
        super().__init__(options)
        self.geoid_model = geoid_model if geoid_model is not None else GeoidModel()
        self.projections: Dict[str, ProjectionDefinition] = dict(DEFAULT_PROJECTIONS)
        self.datum_shifts: Dict[Tuple[str, str], HelmertParameters] = dict(DEFAULT_DATUM_SHIFTS)

    def get_supported_projections(self) -> List[str]:
        return list(self.projections)

    def transform(
        self,
        coordinate: Coordinate,
        from_projection: str,
        to_projection: str,
        dateline_adjusted: bool = False,
    ) -> Coordinate:
        """
        Transform a coordinate between two registered projections.

        Raises:
            UnsupportedProjectionError: If either projection is not registered
            TransformationFailedError: If the conversion itself fails; the
                underlying error is chained as ``__cause__``
        """
        self._validate_projection(from_projection)
        self._validate_projection(to_projection)

        if from_projection == to_projection:
            return coordinate.clone()

        key = self._cache_key(
            coordinate.lat, coordinate.lng, coordinate.elevation, from_projection, to_projection
        )
        position = self._transform_cache.get(key)

        if position is not None:
            logger.debug("Transform cache hit for %s -> %s", from_projection, to_projection)
        else:
            try:
                position = self._transform_position(
                    coordinate.lat,
                    coordinate.lng,
                    coordinate.elevation,
                    from_projection,
                    to_projection,
                    dateline_adjusted,
                )
            except Exception as exc:
                self._log_transformation_error(exc, coordinate, from_projection, to_projection)
                raise TransformationFailedError(from_projection, to_projection, str(exc)) from exc
            self._transform_cache[key] = position

        lat, lng, elevation = position
        return Coordinate(
            lat,
            lng,
            elevation,
            coordinate.height_reference,
            to_projection,
            transformer=coordinate.transformer if coordinate.transformer is not None else self,
        )

    def _transform_position(
        self,
        lat: float,
        lng: float,
        elevation: float,
        from_projection: str,
        to_projection: str,
        dateline_adjusted: bool = False,
    ) -> RawPosition:
        """Run the projection pipeline on raw values."""
        if not dateline_adjusted and self._crosses_dateline(lng):
            lat, shifted_lng, elevation = self._transform_position(
                lat, self._dateline_shift(lng), elevation,
                from_projection, to_projection,
                dateline_adjusted=True,
            )
            return lat, self._wrap_longitude(shifted_lng), elevation

        source = self.projections[from_projection]
        target = self.projections[to_projection]

        position = self._to_geographic((lat, lng, elevation), source)
        if source.datum != target.datum:
            position = self._transform_datum(position, source.datum, target.datum)
        return self._from_geographic(position, target)

    def _to_geographic(self, position: RawPosition, definition: ProjectionDefinition) -> RawPosition:
        if definition.type == ProjectionType.GEOGRAPHIC:
            return position
        if definition.type == ProjectionType.UTM:
            raise ProjectionNotImplementedError("UTM to geographic conversion is not implemented")
        if definition.type == ProjectionType.STATE_PLANE:
            raise ProjectionNotImplementedError("State Plane to geographic conversion is not implemented")
        raise ProjectionNotImplementedError(f"Unsupported projection type: {definition.type}")

    def _from_geographic(self, position: RawPosition, definition: ProjectionDefinition) -> RawPosition:
        if definition.type == ProjectionType.GEOGRAPHIC:
            return position
        if definition.type == ProjectionType.UTM:
            raise ProjectionNotImplementedError("Geographic to UTM conversion is not implemented")
        if definition.type == ProjectionType.STATE_PLANE:
            raise ProjectionNotImplementedError("Geographic to State Plane conversion is not implemented")
        raise ProjectionNotImplementedError(f"Unsupported projection type: {definition.type}")

    def _transform_datum(self, position: RawPosition, from_datum: str, to_datum: str) -> RawPosition:
        """
        Shift a geographic position between datums.

        Pairs without direct parameters are composed through NAD83.

        Raises:
            UnsupportedDatumTransformationError: If no path between the datums exists
        """
        if from_datum == to_datum:
            return position

        params = self._datum_shift(from_datum, to_datum)
        if params is not None:
            return shift_geodetic(*position, params)

        if (self._datum_shift(from_datum, PIVOT_DATUM) is not None
                and self._datum_shift(PIVOT_DATUM, to_datum) is not None):
            intermediate = self._transform_datum(position, from_datum, PIVOT_DATUM)
            return self._transform_datum(intermediate, PIVOT_DATUM, to_datum)

        raise UnsupportedDatumTransformationError(from_datum, to_datum)

    def _datum_shift(self, from_datum: str, to_datum: str) -> Optional[HelmertParameters]:
        if (from_datum, to_datum) in self.datum_shifts:
            return self.datum_shifts[(from_datum, to_datum)]
        if (to_datum, from_datum) in self.datum_shifts:
            return self.datum_shifts[(to_datum, from_datum)].inverted()
        return None

    def convert_ellipsoidal_to_orthometric(self, coordinate: Coordinate) -> Coordinate:
        geoid_height = self._get_geoid_height(coordinate.lat, coordinate.lng)
        return Coordinate(
            coordinate.lat,
            coordinate.lng,
            coordinate.elevation - geoid_height,
            HeightReference.ORTHOMETRIC.value,
            coordinate.projection,
            transformer=coordinate.transformer,
        )

    def convert_orthometric_to_ellipsoidal(self, coordinate: Coordinate) -> Coordinate:
        geoid_height = self._get_geoid_height(coordinate.lat, coordinate.lng)
        return Coordinate(
            coordinate.lat,
            coordinate.lng,
            coordinate.elevation + geoid_height,
            HeightReference.ELLIPSOIDAL.value,
            coordinate.projection,
            transformer=coordinate.transformer,
        )

    def _get_geoid_height(self, lat: float, lng: float) -> float:
        precision = self.options.geoid_cache_precision
        key = (round(lat, precision), round(lng, precision))

        height = self._geoid_cache.get(key)
        if height is None:
            height = self.geoid_model.get_height(lat, lng)
            self._geoid_cache[key] = height
        return height

    def _validate_projection(self, projection: str) -> None:
        if projection not in self.projections:
            raise UnsupportedProjectionError(projection, self.get_supported_projections())

    def __repr__(self) -> str:
        return f"SimpleWGS84Transformer(projections={len(self.projections)}, geoid={self.geoid_model!r})"
