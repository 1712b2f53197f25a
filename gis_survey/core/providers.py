"""
Elevation provider interface.

Elevation services (map provider APIs, DEM tiles, GNSS receivers) live
outside this package. They implement ElevationService; the helpers here
apply their results to coordinates.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, List, Sequence

from .models.coordinate import Coordinate
from .models.coordinate_utils import to_coordinate


logger = logging.getLogger(__name__)


class ElevationService(ABC):
    """Asynchronous source of terrain elevations (meters)."""

    @abstractmethod
    async def get_elevation(self, coordinate: Coordinate) -> float:
        """Elevation at a single coordinate."""

    async def get_elevations_for_path(self, coordinates: Sequence[Coordinate]) -> List[float]:
        """
        Elevations for every vertex of a path.

        The default implementation queries vertices one at a time; services
        with a batch endpoint should override it.
        """
        return [await self.get_elevation(coordinate) for coordinate in coordinates]


async def populate_elevations(coordinates: Sequence[Any], service: ElevationService) -> List[Coordinate]:
    """
    Return copies of the coordinates with elevations fetched from a service.

    Args:
        coordinates: Coordinate-like objects
        service: Elevation service to query

    Returns:
        New Coordinates carrying the fetched elevations

    Raises:
        ValueError: If the service returns a different number of elevations
    """
    coords = []
    for item in coordinates:
        coordinate = to_coordinate(item)
        if coordinate is None:
            logger.error("Skipping invalid coordinate while populating elevations: %r", item)
            continue
        coords.append(coordinate)

    if not coords:
        return []

    elevations = await service.get_elevations_for_path(coords)
    if len(elevations) != len(coords):
        raise ValueError(
            f"Elevation service returned {len(elevations)} values for {len(coords)} coordinates"
        )

    result = []
    for coordinate, elevation in zip(coords, elevations):
        updated = coordinate.clone()
        updated.set_z(elevation)
        result.append(updated)

    logger.debug("Populated %d elevations", len(result))
    return result
