"""
Geoid height approximation.

The geoid height N is the separation between the WGS84 ellipsoid and the
geoid (mean sea level), so that:

    orthometric height = ellipsoidal height - N

The model here is a coarse approximation, not a gridded geoid such as
GEOID18 or EGM2008. It is good enough to exercise height-reference
conversions and stays in a realistic -40 m .. -8 m range over North America.
"""

import logging
import math

from ..errors import InvalidCoordinateError


logger = logging.getLogger(__name__)

DEFAULT_MODEL = "default"

# Continental US bounding box
US_LAT_MIN, US_LAT_MAX = 24.0, 50.0
US_LNG_MIN, US_LNG_MAX = -125.0, -66.0

# Corner heights of the US approximation (meters)
US_SW_HEIGHT = -32.5
US_SE_HEIGHT = -29.5
US_NW_HEIGHT = -22.5
US_NE_HEIGHT = -34.0


class GeoidModel:
    """
    Approximate geoid height model.

    Any object exposing ``get_height(lat, lng)`` can replace this class in
    a transformer.
    """

    def __init__(self, name: str = DEFAULT_MODEL):
        self.name = name

    def get_height(self, lat: float, lng: float) -> float:
        """
        Geoid height at a location.

        Args:
            lat: Latitude in decimal degrees
            lng: Longitude in decimal degrees

        Returns:
            Geoid height in meters (positive when the geoid is above the ellipsoid)

        Raises:
            InvalidCoordinateError: If lat/lng are outside the valid range
        """
        if not (-90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0):
            raise InvalidCoordinateError(lat, lng)

        if US_LAT_MIN <= lat <= US_LAT_MAX and US_LNG_MIN <= lng <= US_LNG_MAX:
            return self._us_height(lat, lng)

        # Latitude trend, symmetric across the equator
        height = -30.0 + abs(lat) / 90.0 * 15.0
        height += 5.0 * math.sin(math.radians(lng + 100.0))
        return height

    @staticmethod
    def _us_height(lat: float, lng: float) -> float:
        """Bilinear interpolation between the corner heights plus a local ripple."""
        t = (lat - US_LAT_MIN) / (US_LAT_MAX - US_LAT_MIN)
        s = (lng - US_LNG_MIN) / (US_LNG_MAX - US_LNG_MIN)

        south = US_SW_HEIGHT * (1.0 - s) + US_SE_HEIGHT * s
        north = US_NW_HEIGHT * (1.0 - s) + US_NE_HEIGHT * s
        height = south * (1.0 - t) + north * t

        # degree values fed straight to sin() as radians
        ripple = math.sin(lat * 8.0) * math.sin(lng * 6.0) * 2.5
        return height + ripple

    def load_model(self, model_name: str) -> bool:
        """
        Load a gridded geoid model.

        Only the built-in approximation is available. Any other model name
        logs a warning and leaves the approximation active.

        Returns:
            True if the requested model is active
        """
        if model_name == DEFAULT_MODEL:
            self.name = DEFAULT_MODEL
            return True

        logger.warning("Geoid model '%s' is not available, using the built-in approximation", model_name)
        return False

    def __repr__(self) -> str:
        return f"GeoidModel({self.name})"
