"""
Coordinate transformer interface.

A transformer converts coordinates between registered projections and
between ellipsoidal and orthometric heights. Concrete transformers are
injected into coordinates (or obtained from a TransformerFactory).

Conventions:
- Transform results are cached as raw (lat, lng, elevation) tuples; every
  call returns a fresh Coordinate
- Geoid heights are cached per rounded (lat, lng)
- Coordinates near the antimeridian (|lng| > 170) are shifted by 360 degrees
  before transforming and re-normalized afterwards
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple, TYPE_CHECKING

from ..models.options import CoreOptions

if TYPE_CHECKING:
    from ..models.coordinate import Coordinate


logger = logging.getLogger(__name__)

DATELINE_THRESHOLD = 170.0

CacheKey = Tuple[float, float, float, str, str]
RawPosition = Tuple[float, float, float]


class CoordinateTransformer(ABC):
    """
    Abstract base class for coordinate transformers.

    Attributes:
        options: Core options (cache key precisions)
    """

    def __init__(self, options: Optional[CoreOptions] = None):
        self.options = options or CoreOptions.default()
        self._transform_cache: Dict[CacheKey, RawPosition] = {}
        self._geoid_cache: Dict[Tuple[float, float], float] = {}

    @abstractmethod
    def get_supported_projections(self) -> List[str]:
        """Return the identifiers of every projection this transformer knows."""

    @abstractmethod
    def transform(
        self,
        coordinate: 'Coordinate',
        from_projection: str,
        to_projection: str,
        dateline_adjusted: bool = False,
    ) -> 'Coordinate':
        """
        Transform a coordinate from one projection to another.

        Args:
            coordinate: Coordinate to transform
            from_projection: Source projection identifier
            to_projection: Target projection identifier
            dateline_adjusted: True when the antimeridian shift was already applied

        Returns:
            New coordinate in the target projection
        """

    @abstractmethod
    def convert_ellipsoidal_to_orthometric(self, coordinate: 'Coordinate') -> 'Coordinate':
        """Return a copy with the elevation converted to an orthometric height."""

    @abstractmethod
    def convert_orthometric_to_ellipsoidal(self, coordinate: 'Coordinate') -> 'Coordinate':
        """Return a copy with the elevation converted to an ellipsoidal height."""

    def clear_cache(self) -> None:
        """Empty the transform and geoid caches."""
        logger.debug(
            "Clearing %d cached transforms and %d geoid heights",
            len(self._transform_cache), len(self._geoid_cache),
        )
        self._transform_cache.clear()
        self._geoid_cache.clear()

    def _cache_key(
        self,
        lat: float,
        lng: float,
        elevation: float,
        from_projection: str,
        to_projection: str,
    ) -> CacheKey:
        precision = self.options.transform_cache_precision
        return (
            round(lat, precision),
            round(lng, precision),
            round(elevation, self.options.elevation_cache_precision),
            from_projection,
            to_projection,
        )

    @staticmethod
    def _crosses_dateline(lng: float) -> bool:
        return abs(lng) > DATELINE_THRESHOLD

    @staticmethod
    def _dateline_shift(lng: float) -> float:
        """Move a longitude next to the antimeridian to its equivalent on the other side."""
        return lng - 360.0 if lng > 0 else lng + 360.0

    @staticmethod
    def _wrap_longitude(lng: float) -> float:
        """Bring a longitude back into [-180, 180]."""
        while lng < -180.0:
            lng += 360.0
        while lng > 180.0:
            lng -= 360.0
        return lng

    def _log_transformation_error(
        self,
        error: Exception,
        coordinate: 'Coordinate',
        from_projection: str,
        to_projection: str,
    ) -> None:
        logger.error(
            "Transformation error: %s (source: %s lat=%s lng=%s elev=%s, target: %s)",
            error,
            from_projection,
            coordinate.lat,
            coordinate.lng,
            coordinate.elevation,
            to_projection,
            exc_info=error,
        )
