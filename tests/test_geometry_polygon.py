"""
Tests for polygon area, centroid, volume and topology.
"""

import logging
import math

import pytest

from gis_survey.core.geometry.polygon import (
    calculate_area,
    calculate_centroid,
    calculate_polygon_centroid,
    calculate_polygon_volume,
    calculate_volume,
    has_self_intersections,
    is_point_in_polygon,
    point_in_polygon,
    segments_intersect,
)
from gis_survey.core.models.coordinate import Coordinate, EARTH_RADIUS_M

from conftest import square


# Exact spherical area of the 0.01 degree square at the equator
SQUARE_AREA_M2 = EARTH_RADIUS_M ** 2 * math.radians(0.01) * math.sin(math.radians(0.01))


def l_shape():
    """Concave ring made of three 0.01 degree squares."""
    return [
        Coordinate(0.0, 0.0),
        Coordinate(0.0, 0.02),
        Coordinate(0.01, 0.02),
        Coordinate(0.01, 0.01),
        Coordinate(0.02, 0.01),
        Coordinate(0.02, 0.0),
    ]


def bowtie():
    return [
        Coordinate(0.0, 0.0),
        Coordinate(0.01, 0.01),
        Coordinate(0.0, 0.01),
        Coordinate(0.01, 0.0),
    ]


class TestArea:
    """Tests for calculate_area."""

    def test_square_2d(self, unit_square):
        """Test the spherical area of a small square."""
        area = calculate_area(unit_square, include_elevation=False)
        assert area == pytest.approx(SQUARE_AREA_M2, rel=1e-4)

    def test_square_3d(self, unit_square):
        """Test that the 3D area is close to the spherical area."""
        area = calculate_area(unit_square, include_elevation=True)
        assert area == pytest.approx(SQUARE_AREA_M2, rel=0.01)

    def test_closed_and_open_rings_agree(self, unit_square):
        """Test that closing the ring explicitly changes nothing."""
        closed = unit_square + [unit_square[0]]

        assert calculate_area(closed, False) == pytest.approx(calculate_area(unit_square, False))
        assert calculate_area(closed) == pytest.approx(calculate_area(unit_square))

    def test_orientation_independent(self, unit_square):
        """Test that clockwise and counter-clockwise rings agree."""
        reversed_ring = list(reversed(unit_square))

        assert calculate_area(reversed_ring, False) == pytest.approx(calculate_area(unit_square, False))
        assert calculate_area(reversed_ring) == pytest.approx(calculate_area(unit_square))

    @pytest.mark.parametrize("start", range(6))
    @pytest.mark.parametrize("include_elevation", [False, True])
    def test_concave_ring(self, start, include_elevation):
        """Test a concave L-shape from every starting vertex."""
        ring = l_shape()
        ring = ring[start:] + ring[:start]

        expected = 3 * calculate_area(square(), include_elevation)
        assert calculate_area(ring, include_elevation) == pytest.approx(expected, rel=1e-3)

    def test_raised_ring_3d(self):
        """Test a ring lifted by 1000 m."""
        flat = calculate_area(square(), include_elevation=True)
        raised = calculate_area(square(elevation=1000.0), include_elevation=True)

        assert raised > flat
        assert raised == pytest.approx(flat, rel=1e-3)

    def test_self_intersecting_ring_warns(self, caplog):
        """Test the fallback for a bowtie."""
        with caplog.at_level(logging.WARNING):
            area = calculate_area(bowtie())

        assert area > 0
        assert "Self-intersecting polygon" in caplog.text

    def test_degenerate_inputs(self, unit_square):
        """Test rings that have no area."""
        assert calculate_area(unit_square[:2]) == 0.0
        assert calculate_area([]) == 0.0
        assert calculate_area(unit_square[:3] + ["bad"]) == 0.0

    def test_mapping_vertices(self):
        """Test rings given as mappings."""
        ring = [{"lat": c.lat, "lng": c.lng} for c in square()]
        assert calculate_area(ring, False) == pytest.approx(SQUARE_AREA_M2, rel=1e-4)


class TestSelfIntersection:
    """Tests for segment and ring intersection."""

    def test_crossing_segments(self):
        """Test two crossing diagonals."""
        assert segments_intersect(
            Coordinate(0.0, 0.0), Coordinate(1.0, 1.0),
            Coordinate(0.0, 1.0), Coordinate(1.0, 0.0),
        )

    def test_touching_segments(self):
        """Test that a T-junction counts as intersecting."""
        assert segments_intersect(
            Coordinate(0.0, 0.0), Coordinate(0.0, 2.0),
            Coordinate(0.0, 1.0), Coordinate(1.0, 1.0),
        )

    def test_parallel_segments(self):
        """Test disjoint parallel segments."""
        assert not segments_intersect(
            Coordinate(0.0, 0.0), Coordinate(0.0, 1.0),
            Coordinate(1.0, 0.0), Coordinate(1.0, 1.0),
        )

    def test_rings(self, unit_square):
        """Test simple and crossing rings."""
        assert has_self_intersections(bowtie())
        assert not has_self_intersections(unit_square)
        assert not has_self_intersections(unit_square + [unit_square[0]])
        assert not has_self_intersections(l_shape())

    def test_open_and_closed_bowtie(self):
        """Test that the first and last segments of an open ring are compared."""
        ring = bowtie()

        assert has_self_intersections(ring)
        assert has_self_intersections(ring + [ring[0]])

    def test_open_z_path(self):
        """Test a Z-shaped path whose first and last segments cross."""
        path = [Coordinate(0.0, 0.0), Coordinate(2.0, 2.0), Coordinate(0.0, 2.0), Coordinate(2.0, 0.0)]
        assert has_self_intersections(path)

    def test_short_paths(self, unit_square):
        """Test that fewer than 4 vertices never self-intersect."""
        assert not has_self_intersections(unit_square[:3])
        assert not has_self_intersections(None)


class TestCentroid:
    """Tests for calculate_centroid and calculate_polygon_centroid."""

    def test_square(self, unit_square):
        """Test the centroid of a square."""
        centroid = calculate_centroid(unit_square)

        assert centroid.lat == pytest.approx(0.005)
        assert centroid.lng == pytest.approx(0.005)

    def test_closing_vertex_ignored(self, unit_square):
        """Test that the closing duplicate does not bias the centroid."""
        assert calculate_centroid(unit_square + [unit_square[0]]) == calculate_centroid(unit_square)

    def test_mean_elevation(self):
        """Test that elevation is averaged."""
        ring = square()
        for coord, elevation in zip(ring, (0.0, 10.0, 20.0, 30.0)):
            coord.set_z(elevation)

        assert calculate_centroid(ring).elevation == pytest.approx(15.0)

    def test_too_few_points(self, unit_square):
        """Test that fewer than 3 points raise."""
        with pytest.raises(ValueError, match="at least 3 coordinates"):
            calculate_centroid(unit_square[:2])

    def test_polygon_without_holes(self, unit_square):
        """Test that no holes gives the vertex centroid."""
        assert calculate_polygon_centroid(unit_square) == calculate_centroid(unit_square)

    def test_hole_shifts_centroid(self):
        """Test that a hole pulls the centroid away from itself."""
        exterior = square(size=0.02)
        hole = square(size=0.005, lat0=0.0125, lng0=0.0125)

        centroid = calculate_polygon_centroid(exterior, [hole])

        # (4 * 0.01 - 0.25 * 0.015) / 3.75
        assert centroid.lat == pytest.approx(0.0096667, abs=1e-6)
        assert centroid.lng == pytest.approx(0.0096667, abs=1e-6)

    def test_short_holes_ignored(self, unit_square):
        """Test that holes with fewer than 3 vertices are skipped."""
        hole = [Coordinate(0.002, 0.002), Coordinate(0.003, 0.003)]
        assert calculate_polygon_centroid(unit_square, [hole]) == calculate_centroid(unit_square)

    def test_short_exterior(self):
        """Test degenerate exterior rings."""
        first = Coordinate(1.0, 2.0)

        assert calculate_polygon_centroid([first, Coordinate(1.0, 3.0)]) == first
        assert calculate_polygon_centroid([]) is None


class TestVolume:
    """Tests for calculate_volume and calculate_polygon_volume."""

    def test_flat_ring_above_base(self):
        """Test a prism of constant height."""
        ring = square(elevation=10.0)
        expected = 10.0 * calculate_area(ring, include_elevation=False)

        assert calculate_volume(ring, base_elevation=0.0) == pytest.approx(expected)

    def test_default_base_is_lowest_vertex(self):
        """Test that the base defaults to the lowest vertex."""
        ring = square()
        ring[2].set_z(10.0)
        ring[3].set_z(10.0)

        assert calculate_volume(ring) == pytest.approx(5.0 * calculate_area(ring, False))
        assert calculate_volume(square(elevation=10.0)) == 0.0

    def test_base_above_mean_is_negative(self):
        """Test a base above the mean elevation."""
        assert calculate_volume(square(elevation=10.0), base_elevation=20.0) < 0

    def test_polygon_volume_subtracts_holes(self):
        """Test that hole volume is subtracted."""
        exterior = square(size=0.02, elevation=10.0)
        hole = square(size=0.01, lat0=0.005, lng0=0.005, elevation=10.0)

        expected = 10.0 * (calculate_area(exterior, False) - calculate_area(hole, False))
        assert calculate_polygon_volume(exterior, [hole], base_elevation=0.0) == pytest.approx(expected)

    def test_too_few_points(self):
        """Test that fewer than 3 points have no volume."""
        assert calculate_volume([Coordinate(0.0, 0.0, 5.0)]) == 0.0


class TestPointInPolygon:
    """Tests for point-in-polygon."""

    def test_inside_and_outside(self, unit_square):
        """Test points inside and outside a square."""
        assert is_point_in_polygon(Coordinate(0.005, 0.005), unit_square)
        assert not is_point_in_polygon(Coordinate(0.02, 0.005), unit_square)

    def test_concave(self):
        """Test the notch of the L-shape."""
        assert is_point_in_polygon(Coordinate(0.005, 0.015), l_shape())
        assert not is_point_in_polygon(Coordinate(0.015, 0.015), l_shape())

    def test_mappings_and_alias(self, unit_square):
        """Test mapping inputs and the alias."""
        assert point_in_polygon({"lat": 0.005, "lng": 0.005}, unit_square)

    def test_invalid_point(self, unit_square):
        """Test that malformed points are outside."""
        assert not is_point_in_polygon("bad", unit_square)

    def test_ring_in_other_projection(self):
        """Test that ring vertices are re-projected to the point's projection."""
        ring = [Coordinate(c.lat, c.lng, 0.0, "ellipsoidal", "NAD83") for c in square(lat0=40.0, lng0=-100.0)]
        assert is_point_in_polygon(Coordinate(40.005, -99.995), ring)
