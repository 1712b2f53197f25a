"""
Coordinate class for the geodesic geometry core.

Conventions:
- Angles: decimal degrees at the API boundary, radians internally
- Bearing: North = 0, clockwise positive, normalized to [0, 360)
- Latitude: [-90, 90], longitude: [-180, 180] (out-of-range input is clamped)
- Elevation: meters above the coordinate's height reference surface
- Height reference: "ellipsoidal" (GNSS) or "orthometric" (mean sea level)
- Projection: string tag registered with the active transformer ("WGS84", "NAD83", ...)
"""

from __future__ import annotations

import logging
import math
import numbers
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple, TYPE_CHECKING

from geojson import Point

from ..errors import InvalidElevationError, UnsupportedConversionError

if TYPE_CHECKING:
    from ..transform.base import CoordinateTransformer


logger = logging.getLogger(__name__)

EARTH_RADIUS_M = 6371000.0  # mean radius
DEFAULT_PROJECTION = "WGS84"
GEOJSON_COORDINATE_PRECISION = 9  # decimal places in GeoJSON positions

LAT_ALIASES = ("lat", "latitude", "y")
LNG_ALIASES = ("lng", "longitude", "x")
ELEVATION_ALIASES = ("elevation", "altitude", "alt", "z")
HEIGHT_REFERENCE_ALIASES = ("height_reference", "heightReference")
PROJECTION_ALIASES = ("projection",)


class HeightReference(Enum):
    """Vertical reference surface of an elevation value."""
    ELLIPSOIDAL = "ellipsoidal"  # height above the WGS84 ellipsoid (GNSS)
    ORTHOMETRIC = "orthometric"  # height above the geoid (mean sea level)


def normalize_height_reference(value: Any) -> Optional[str]:
    """Return the string value of a height reference, or None if it is not valid."""
    if isinstance(value, HeightReference):
        return value.value
    if isinstance(value, str):
        lowered = value.strip().lower()
        for member in HeightReference:
            if member.value == lowered:
                return lowered
    return None


def normalize_longitude(lng: float) -> float:
    """Normalize longitude to (-180, 180]."""
    result = (lng + 180.0) % 360.0 - 180.0
    if result == -180.0:
        result = 180.0
    return result


def haversine_distance(
    lat1: float,
    lng1: float,
    lat2: float,
    lng2: float,
    radius: float = EARTH_RADIUS_M,
) -> float:
    """Great-circle distance in meters on a sphere of the given radius."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)

    a = (math.sin(d_phi / 2) ** 2
         + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2)
    a = min(1.0, max(0.0, a))
    return radius * 2.0 * math.atan2(math.sqrt(a), math.sqrt(1.0 - a))


def initial_bearing(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Initial great-circle bearing in degrees, in [0, 360)."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_lambda = math.radians(lng2 - lng1)

    y = math.sin(d_lambda) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(d_lambda)

    bearing = math.degrees(math.atan2(y, x)) % 360.0
    # -0.0 % 360 and tiny negatives can round up to exactly 360
    return 0.0 if bearing >= 360.0 else bearing


def lookup_field(obj: Any, names: Sequence[str]) -> Any:
    """
    Return the first non-None value found under any of ``names``.

    Works for mappings (key lookup) and plain objects (attribute lookup).
    Callable values are treated as accessors and invoked, which covers
    map-provider LatLng objects exposing ``lat()``/``lng()``.
    """
    for name in names:
        if isinstance(obj, Mapping):
            value = obj.get(name)
        else:
            value = getattr(obj, name, None)

        if callable(value):
            try:
                value = value()
            except TypeError:
                logger.warning("Could not call accessor '%s' on %r", name, obj)
                continue

        if value is not None:
            return value
    return None


def _parse_number(value: Any) -> float:
    """Parse a value to float, returning NaN when it is missing or not numeric."""
    if value is None or isinstance(value, bool):
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def _repair_values(
    lat: Any,
    lng: Any,
    elevation: Any,
    height_reference: Any,
    projection: Any,
) -> Tuple[Tuple[float, float, float, str, str], List[str]]:
    """Repair raw coordinate values, returning the clean values and the repairs made."""
    repairs: List[str] = []

    lat_value = _parse_number(lat)
    if math.isnan(lat_value):
        repairs.append(f"Invalid latitude {lat!r}, defaulting to 0")
        lat_value = 0.0
    elif not -90.0 <= lat_value <= 90.0:
        repairs.append(f"Latitude {lat_value} out of bounds, clamping to valid range")
        lat_value = max(-90.0, min(90.0, lat_value))

    lng_value = _parse_number(lng)
    if math.isnan(lng_value):
        repairs.append(f"Invalid longitude {lng!r}, defaulting to 0")
        lng_value = 0.0
    elif not -180.0 <= lng_value <= 180.0:
        repairs.append(f"Longitude {lng_value} out of bounds, clamping to valid range")
        lng_value = max(-180.0, min(180.0, lng_value))

    elevation_value = _parse_number(elevation)
    if not math.isfinite(elevation_value):
        if elevation is not None:
            repairs.append(f"Invalid elevation {elevation!r}, defaulting to 0")
        elevation_value = 0.0

    reference = normalize_height_reference(height_reference)
    if reference is None:
        repairs.append(f"Invalid height reference: {height_reference!r}, using default 'ellipsoidal'")
        reference = HeightReference.ELLIPSOIDAL.value

    projection_value = str(projection) if projection else DEFAULT_PROJECTION

    return (lat_value, lng_value, elevation_value, reference, projection_value), repairs


@dataclass
class Coordinate:
    """
    A geographic 3D coordinate.

    Construction never fails: malformed values are repaired (defaulted or
    clamped) and each repair is logged as a warning. Use ``validate`` to get
    the repairs back as data.

    Attributes:
        lat: Latitude in decimal degrees
        lng: Longitude in decimal degrees
        elevation: Elevation in meters
        height_reference: "ellipsoidal" or "orthometric"
        projection: Projection/datum tag (default "WGS84")
        transformer: Transformer used for projection and height conversions;
            resolved from the default factory on first use when None
    """

    lat: float
    lng: float
    elevation: float = 0.0
    height_reference: str = HeightReference.ELLIPSOIDAL.value
    projection: str = DEFAULT_PROJECTION
    transformer: Optional["CoordinateTransformer"] = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        """Repair coordinate values after initialization."""
        values, repairs = _repair_values(
            self.lat, self.lng, self.elevation, self.height_reference, self.projection
        )
        for message in repairs:
            logger.warning(message)

        (self.lat, self.lng, self.elevation,
         self.height_reference, self.projection) = values

    @classmethod
    def validate(
        cls,
        lat: Any,
        lng: Any,
        elevation: Any = 0.0,
        height_reference: Any = HeightReference.ELLIPSOIDAL.value,
        projection: Any = DEFAULT_PROJECTION,
        transformer: Optional["CoordinateTransformer"] = None,
    ) -> 'CoordinateValidation':
        """
        Build a coordinate and report every repair applied to the input.

        Returns:
            CoordinateValidation holding the usable coordinate and the warnings
        """
        values, repairs = _repair_values(lat, lng, elevation, height_reference, projection)
        return CoordinateValidation(
            coordinate=cls(*values, transformer=transformer),
            warnings=repairs,
        )

    @classmethod
    def from_object(cls, obj: Any) -> 'Coordinate':
        """
        Create a Coordinate from any object carrying coordinate properties.

        Recognized names: lat/latitude/y, lng/longitude/x,
        elevation/altitude/alt/z, height_reference/heightReference and
        projection. Mappings and attribute objects are both supported;
        callable accessors are invoked.

        Args:
            obj: Mapping or object with coordinate properties

        Returns:
            New Coordinate, the origin if ``obj`` is not an object
        """
        if isinstance(obj, Coordinate):
            return obj.clone()

        if obj is None or isinstance(obj, (str, bytes, numbers.Number)):
            logger.warning("Invalid object passed to Coordinate.from_object: %r", obj)
            return cls(0.0, 0.0, 0.0)

        lat = lookup_field(obj, LAT_ALIASES)
        lng = lookup_field(obj, LNG_ALIASES)
        elevation = lookup_field(obj, ELEVATION_ALIASES)

        return cls(
            lat if lat is not None else 0.0,
            lng if lng is not None else 0.0,
            elevation if elevation is not None else 0.0,
            lookup_field(obj, HEIGHT_REFERENCE_ALIASES) or HeightReference.ELLIPSOIDAL.value,
            lookup_field(obj, PROJECTION_ALIASES) or DEFAULT_PROJECTION,
        )

    def get_transformer(self) -> "CoordinateTransformer":
        """Return the bound transformer, resolving the default one on first use."""
        if self.transformer is None:
            from ..transform.factory import get_default_factory
            self.transformer = get_default_factory().get_transformer()
        return self.transformer

    def to_projection(self, target_projection: str) -> 'Coordinate':
        """
        Convert this coordinate to a different projection.

        Args:
            target_projection: Target projection identifier

        Returns:
            New coordinate in the target projection
        """
        if self.projection == target_projection:
            return self.clone()
        return self.get_transformer().transform(self, self.projection, target_projection)

    def to_height_reference(self, reference: Any) -> 'Coordinate':
        """
        Convert to a different height reference system.

        Args:
            reference: Target height reference (string or HeightReference)

        Returns:
            New coordinate with the converted elevation

        Raises:
            UnsupportedConversionError: If the conversion is not defined
        """
        target = normalize_height_reference(reference)
        if target == self.height_reference:
            return self.clone()

        ellipsoidal = HeightReference.ELLIPSOIDAL.value
        orthometric = HeightReference.ORTHOMETRIC.value

        if target == orthometric and self.height_reference == ellipsoidal:
            return self.get_transformer().convert_ellipsoidal_to_orthometric(self)
        if target == ellipsoidal and self.height_reference == orthometric:
            return self.get_transformer().convert_orthometric_to_ellipsoidal(self)

        raise UnsupportedConversionError(self.height_reference, str(reference))

    def _reconcile(self, other: Any, height: bool = True) -> 'Coordinate':
        """Bring ``other`` into this coordinate's projection (and height reference)."""
        if not isinstance(other, Coordinate):
            other = Coordinate.from_object(other)
        if other.projection != self.projection:
            other = other.to_projection(self.projection)
        if height and other.height_reference != self.height_reference:
            other = other.to_height_reference(self.height_reference)
        return other

    def distance_to(self, other: Any) -> float:
        """
        Calculate the 3D distance to another coordinate.

        Horizontal distance uses the haversine formula on the mean-radius
        sphere; the elevation difference is composed with Pythagoras.

        Returns:
            Distance in meters
        """
        other = self._reconcile(other)
        horizontal = haversine_distance(self.lat, self.lng, other.lat, other.lng)
        return math.hypot(horizontal, other.elevation - self.elevation)

    def bearing_to(self, other: Any) -> float:
        """Initial bearing to another coordinate in degrees [0, 360)."""
        other = self._reconcile(other, height=False)
        return initial_bearing(self.lat, self.lng, other.lat, other.lng)

    def midpoint_to(self, other: Any) -> 'Coordinate':
        """Geodesic midpoint between this coordinate and another, with mean elevation."""
        other = self._reconcile(other)

        phi1 = math.radians(self.lat)
        lambda1 = math.radians(self.lng)
        phi2 = math.radians(other.lat)
        lambda2 = math.radians(other.lng)

        bx = math.cos(phi2) * math.cos(lambda2 - lambda1)
        by = math.cos(phi2) * math.sin(lambda2 - lambda1)

        phi3 = math.atan2(
            math.sin(phi1) + math.sin(phi2),
            math.sqrt((math.cos(phi1) + bx) ** 2 + by ** 2),
        )
        lambda3 = lambda1 + math.atan2(by, math.cos(phi1) + bx)

        return Coordinate(
            math.degrees(phi3),
            normalize_longitude(math.degrees(lambda3)),
            (self.elevation + other.elevation) / 2.0,
            self.height_reference,
            self.projection,
            transformer=self.transformer,
        )

    def clone(self) -> 'Coordinate':
        """Create a copy of this coordinate sharing the same transformer."""
        return Coordinate(
            self.lat,
            self.lng,
            self.elevation,
            self.height_reference,
            self.projection,
            transformer=self.transformer,
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize coordinate to dictionary.

        Returns:
            Dictionary representation suitable for JSON serialization
        """
        return {
            "lat": self.lat,
            "lng": self.lng,
            "elevation": self.elevation,
            "height_reference": self.height_reference,
            "projection": self.projection,
        }

    def to_geojson(self) -> Point:
        """
        Convert the coordinate to a GeoJSON Point geometry.

        The coordinate is re-projected to WGS84 first, as GeoJSON requires.
        Positions are rounded to ``GEOJSON_COORDINATE_PRECISION`` decimals.
        """
        wgs84 = self if self.projection == DEFAULT_PROJECTION else self.to_projection(DEFAULT_PROJECTION)
        return Point(
            [wgs84.lng, wgs84.lat, wgs84.elevation],
            precision=GEOJSON_COORDINATE_PRECISION,
        )

    def to_compact_string(self) -> str:
        """Compact representation with latitude and longitude only."""
        return f"{self.lat:.5f},{self.lng:.5f}"

    def set_z(self, elevation: Any) -> 'Coordinate':
        """
        Set the elevation in place.

        Args:
            elevation: New elevation in meters, None means 0

        Returns:
            This coordinate, for chaining

        Raises:
            InvalidElevationError: If elevation is not a finite number
        """
        value = 0.0 if elevation is None else elevation
        if (isinstance(value, bool) or not isinstance(value, numbers.Real)
                or not math.isfinite(value)):
            raise InvalidElevationError(elevation)

        self.elevation = float(value)
        return self

    def __str__(self) -> str:
        return (
            f"{self.lat:.7f},{self.lng:.7f},{self.elevation:.2f} "
            f"({self.projection}, {self.height_reference})"
        )

    def __repr__(self) -> str:
        return (
            f"Coordinate(lat={self.lat:.7f}, lng={self.lng:.7f}, "
            f"elev={self.elevation:.3f}, {self.height_reference}, {self.projection})"
        )


@dataclass
class CoordinateValidation:
    """
    Result of building a coordinate from raw input.

    Attributes:
        coordinate: The usable (repaired) coordinate
        warnings: Human-readable description of each repair applied
    """

    coordinate: Coordinate
    warnings: List[str] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        """True when the input needed no repair."""
        return not self.warnings
