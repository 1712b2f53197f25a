"""
Shared fixtures for the gis_survey test suite.
"""

import os
import sys

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from gis_survey.core.models.coordinate import Coordinate
from gis_survey.core.transform.factory import TransformerFactory, set_default_factory
from gis_survey.core.transform.simple_wgs84 import SimpleWGS84Transformer


@pytest.fixture(autouse=True)
def default_factory():
    """Install a fresh default transformer factory for every test."""
    factory = TransformerFactory()
    set_default_factory(factory)
    yield factory
    factory.clear_cache()
    set_default_factory(None)


@pytest.fixture
def transformer():
    """A standalone transformer with default options."""
    return SimpleWGS84Transformer()


@pytest.fixture
def san_francisco():
    return Coordinate(37.7749, -122.4194, 10.0)


@pytest.fixture
def los_angeles():
    return Coordinate(34.0522, -118.2437, 70.0)


def square(size=0.01, lat0=0.0, lng0=0.0, elevation=0.0):
    """Counter-clockwise square ring (open) with the given side in degrees."""
    return [
        Coordinate(lat0, lng0, elevation),
        Coordinate(lat0, lng0 + size, elevation),
        Coordinate(lat0 + size, lng0 + size, elevation),
        Coordinate(lat0 + size, lng0, elevation),
    ]


@pytest.fixture
def unit_square():
    """0.01 degree square at the equator/prime meridian."""
    return square()
