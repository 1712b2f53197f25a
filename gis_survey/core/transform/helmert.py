"""gis_survey.core.transform.helmert

Seven-parameter Helmert (similarity) transformation between datums.

    X' = (1 + ds * 1e-6) * R @ X + T

    R = [[  1,  rz, -ry],
         [-rz,   1,  rx],
         [ ry, -rx,   1]]

with translations in meters, rotations in arcseconds and scale in ppm.
The inverse transformation is approximated by negating every parameter,
which is accurate to well below a millimeter for these small rotations.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Tuple

import numpy as np

from .ecef import ecef_to_geodetic, geodetic_to_ecef


ARCSEC_TO_RAD = math.pi / (180.0 * 3600.0)


@dataclass(frozen=True)
class HelmertParameters:
    """
    Datum shift parameters.

    Attributes:
        dx, dy, dz: Translations in meters
        rx, ry, rz: Rotations in arcseconds
        ds: Scale difference in ppm
    """

    dx: float = 0.0
    dy: float = 0.0
    dz: float = 0.0
    rx: float = 0.0
    ry: float = 0.0
    rz: float = 0.0
    ds: float = 0.0

    def inverted(self) -> 'HelmertParameters':
        """Parameters of the reverse shift (every parameter negated)."""
        return HelmertParameters(
            dx=-self.dx, dy=-self.dy, dz=-self.dz,
            rx=-self.rx, ry=-self.ry, rz=-self.rz,
            ds=-self.ds,
        )

    def rotation_matrix(self) -> np.ndarray:
        """Small-angle rotation matrix in radians."""
        rx = self.rx * ARCSEC_TO_RAD
        ry = self.ry * ARCSEC_TO_RAD
        rz = self.rz * ARCSEC_TO_RAD
        return np.array([
            [1.0, rz, -ry],
            [-rz, 1.0, rx],
            [ry, -rx, 1.0],
        ])

    def translation(self) -> np.ndarray:
        return np.array([self.dx, self.dy, self.dz])

    def scale(self) -> float:
        return 1.0 + self.ds * 1e-6

    def to_dict(self) -> Dict[str, float]:
        return {
            "dx": self.dx, "dy": self.dy, "dz": self.dz,
            "rx": self.rx, "ry": self.ry, "rz": self.rz,
            "ds": self.ds,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'HelmertParameters':
        return cls(**{name: float(data.get(name, 0.0))
                      for name in ("dx", "dy", "dz", "rx", "ry", "rz", "ds")})


WGS84_TO_NAD83 = HelmertParameters(
    dx=0.99343, dy=-1.90331, dz=-0.52655,
    rx=0.025915, ry=0.009426, rz=0.011599,
    ds=-0.00062,
)

NAD83_TO_NAD27 = HelmertParameters(dx=-8.0, dy=160.0, dz=176.0)


def helmert_transform(xyz, params: HelmertParameters) -> np.ndarray:
    """Apply a Helmert transformation to an ECEF vector."""
    vector = np.asarray(xyz, dtype=float)
    return params.scale() * (params.rotation_matrix() @ vector) + params.translation()


def shift_geodetic(
    lat: float,
    lng: float,
    height: float,
    params: HelmertParameters,
) -> Tuple[float, float, float]:
    """Shift a geodetic position through ECEF with the given parameters."""
    shifted = helmert_transform(geodetic_to_ecef(lat, lng, height), params)
    return ecef_to_geodetic(shifted)
