"""gis_survey.core.transform.ecef

Geodetic <-> Earth-Centered Earth-Fixed (ECEF) conversion on the WGS84 ellipsoid.

Conventions:
  - Geodetic input/output: latitude and longitude in decimal degrees, height in meters
  - ECEF: meters, X toward (0, 0), Z toward the north pole
  - The same ellipsoid is used for every datum; datum differences are
    modelled by the Helmert shift alone

Implementation detail:
  - ECEF -> geodetic uses Bowring's closed-form approximation (sub-millimeter
    at terrestrial heights, no iteration).
"""

from __future__ import annotations

import math
from typing import Tuple

import numpy as np


WGS84_A = 6378137.0  # semi-major axis (m)
WGS84_E2 = 0.00669437999014  # first eccentricity squared
WGS84_B = WGS84_A * math.sqrt(1.0 - WGS84_E2)  # semi-minor axis (m)
WGS84_EP2 = (WGS84_A ** 2 - WGS84_B ** 2) / WGS84_B ** 2  # second eccentricity squared


def prime_vertical_radius(lat_rad: float) -> float:
    """Radius of curvature in the prime vertical, N(φ)."""
    return WGS84_A / math.sqrt(1.0 - WGS84_E2 * math.sin(lat_rad) ** 2)


def geodetic_to_ecef(lat: float, lng: float, height: float = 0.0) -> np.ndarray:
    """Convert geodetic coordinates to an ECEF vector [X, Y, Z] in meters."""
    phi = math.radians(lat)
    lam = math.radians(lng)
    n = prime_vertical_radius(phi)

    cos_phi = math.cos(phi)
    return np.array([
        (n + height) * cos_phi * math.cos(lam),
        (n + height) * cos_phi * math.sin(lam),
        (n * (1.0 - WGS84_E2) + height) * math.sin(phi),
    ])


def ecef_to_geodetic(xyz) -> Tuple[float, float, float]:
    """Convert an ECEF vector to (lat, lng, height) with Bowring's formula."""
    x, y, z = (float(v) for v in xyz)

    p = math.hypot(x, y)
    theta = math.atan2(z * WGS84_A, p * WGS84_B)
    sin_t = math.sin(theta)
    cos_t = math.cos(theta)

    phi = math.atan2(
        z + WGS84_EP2 * WGS84_B * sin_t ** 3,
        p - WGS84_E2 * WGS84_A * cos_t ** 3,
    )
    lam = math.atan2(y, x)

    # Valid at the poles, unlike p / cos(phi) - N
    sin_phi = math.sin(phi)
    height = (p * math.cos(phi) + z * sin_phi
              - WGS84_A * math.sqrt(1.0 - WGS84_E2 * sin_phi ** 2))

    return math.degrees(phi), math.degrees(lam), height
