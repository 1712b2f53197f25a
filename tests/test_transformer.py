"""
Tests for SimpleWGS84Transformer, Helmert shifts and ECEF conversion.
"""

import logging

import numpy as np
import pytest

from gis_survey.core.errors import (
    ProjectionNotImplementedError,
    TransformationFailedError,
    UnsupportedDatumTransformationError,
    UnsupportedProjectionError,
)
from gis_survey.core.models.coordinate import Coordinate, haversine_distance
from gis_survey.core.models.options import CoreOptions
from gis_survey.core.transform.base import CoordinateTransformer
from gis_survey.core.transform.ecef import ecef_to_geodetic, geodetic_to_ecef, WGS84_A
from gis_survey.core.transform.helmert import HelmertParameters, WGS84_TO_NAD83, helmert_transform
from gis_survey.core.transform.simple_wgs84 import (
    ProjectionDefinition,
    ProjectionType,
    SimpleWGS84Transformer,
)


class TestEcef:
    """Tests for geodetic <-> ECEF conversion."""

    def test_equator_prime_meridian(self):
        """Test that (0, 0, 0) maps to the semi-major axis on X."""
        xyz = geodetic_to_ecef(0.0, 0.0, 0.0)
        assert xyz.tolist() == pytest.approx([WGS84_A, 0.0, 0.0])

    @pytest.mark.parametrize("lat,lng,h", [
        (37.7749, -122.4194, 10.0),
        (-33.8688, 151.2093, 58.0),
        (89.9, 45.0, 1200.0),
        (0.0, 180.0, -50.0),
    ])
    def test_round_trip(self, lat, lng, h):
        """Test geodetic -> ECEF -> geodetic."""
        result_lat, result_lng, result_h = ecef_to_geodetic(geodetic_to_ecef(lat, lng, h))

        assert result_lat == pytest.approx(lat, abs=1e-8)
        assert abs(((result_lng - lng) + 180.0) % 360.0 - 180.0) < 1e-8
        assert result_h == pytest.approx(h, abs=1e-3)


class TestHelmert:
    """Tests for the 7-parameter transformation."""

    def test_identity_parameters(self):
        """Test that zero parameters leave the vector unchanged."""
        xyz = np.array([4_000_000.0, 1_000_000.0, 4_800_000.0])
        assert helmert_transform(xyz, HelmertParameters()).tolist() == pytest.approx(xyz.tolist())

    def test_translation_only(self):
        """Test a pure translation."""
        params = HelmertParameters(dx=-8.0, dy=160.0, dz=176.0)
        result = helmert_transform([1.0, 2.0, 3.0], params)
        assert result.tolist() == pytest.approx([-7.0, 162.0, 179.0])

    def test_inverse_negates_parameters(self):
        """Test inverted parameters."""
        inverse = WGS84_TO_NAD83.inverted()

        assert inverse.dx == -WGS84_TO_NAD83.dx
        assert inverse.rz == -WGS84_TO_NAD83.rz
        assert inverse.ds == -WGS84_TO_NAD83.ds
        assert inverse.inverted() == WGS84_TO_NAD83

    def test_dict_round_trip(self):
        """Test to_dict/from_dict."""
        assert HelmertParameters.from_dict(WGS84_TO_NAD83.to_dict()) == WGS84_TO_NAD83


class TestSimpleWGS84Transformer:
    """Tests for projection validation and datum transformation."""

    def test_is_a_coordinate_transformer(self, transformer):
        """Test the transformer implements the interface."""
        assert isinstance(transformer, CoordinateTransformer)

    def test_supported_projections(self, transformer):
        """Test the registered projections."""
        assert transformer.get_supported_projections() == [
            "WGS84", "NAD83", "NAD27", "UTM_NAD83_N", "UTM_NAD83_S", "StatePlane_NAD83",
        ]
        assert transformer.projections["NAD27"].epsg == "4267"

    def test_identity_transform(self, transformer, san_francisco):
        """Test that transforming to the same projection is a clone."""
        result = transformer.transform(san_francisco, "WGS84", "WGS84")

        assert result == san_francisco
        assert result is not san_francisco

    def test_unknown_projection_raises(self, transformer, san_francisco):
        """Test that unknown projections raise unwrapped."""
        with pytest.raises(UnsupportedProjectionError, match="Unsupported projection: FOO"):
            transformer.transform(san_francisco, "WGS84", "FOO")

    def test_wgs84_to_nad83_is_small_shift(self, transformer, san_francisco):
        """Test that the WGS84/NAD83 shift is a couple of meters."""
        result = transformer.transform(san_francisco, "WGS84", "NAD83")
        shift = haversine_distance(san_francisco.lat, san_francisco.lng, result.lat, result.lng)

        assert result.projection == "NAD83"
        assert 0.5 < shift < 5.0

    def test_nad27_shift_is_large(self, transformer, san_francisco):
        """Test that NAD27 differs by hundreds of meters."""
        result = transformer.transform(san_francisco, "WGS84", "NAD27")
        shift = haversine_distance(san_francisco.lat, san_francisco.lng, result.lat, result.lng)

        assert 100.0 < shift < 400.0

    @pytest.mark.parametrize("target", ["NAD83", "NAD27"])
    def test_datum_round_trip(self, transformer, san_francisco, target):
        """Test WGS84 -> datum -> WGS84."""
        there = transformer.transform(san_francisco, "WGS84", target)
        back = transformer.transform(there, target, "WGS84")

        assert back.lat == pytest.approx(san_francisco.lat, abs=1e-7)
        assert back.lng == pytest.approx(san_francisco.lng, abs=1e-7)
        assert back.elevation == pytest.approx(san_francisco.elevation, abs=0.01)

    def test_wgs84_to_nad27_composes_through_nad83(self, transformer, san_francisco):
        """Test that the direct path equals the two-step path."""
        direct = transformer.transform(san_francisco, "WGS84", "NAD27")
        via = transformer.transform(transformer.transform(san_francisco, "WGS84", "NAD83"), "NAD83", "NAD27")

        assert direct.lat == pytest.approx(via.lat, abs=1e-9)
        assert direct.lng == pytest.approx(via.lng, abs=1e-9)
        assert direct.elevation == pytest.approx(via.elevation, abs=1e-4)

    def test_result_keeps_height_reference(self, transformer):
        """Test that the input height reference is preserved."""
        coord = Coordinate(40.0, -100.0, 200.0, "orthometric")
        assert transformer.transform(coord, "WGS84", "NAD83").height_reference == "orthometric"

    def test_cached_results_are_independent(self, transformer, san_francisco):
        """Test that cache hits return fresh coordinates."""
        first = transformer.transform(san_francisco, "WGS84", "NAD83")
        second = transformer.transform(san_francisco, "WGS84", "NAD83")

        assert first == second
        assert first is not second

        first.set_z(999.0)
        assert transformer.transform(san_francisco, "WGS84", "NAD83").elevation == second.elevation

    def test_clear_cache(self, transformer, san_francisco):
        """Test that clear_cache empties both caches."""
        transformer.transform(san_francisco, "WGS84", "NAD83")
        transformer.convert_ellipsoidal_to_orthometric(san_francisco)

        transformer.clear_cache()

        assert transformer._transform_cache == {}
        assert transformer._geoid_cache == {}

    @pytest.mark.parametrize("lng", [179.9, -179.95])
    def test_antimeridian(self, transformer, lng):
        """Test coordinates next to the antimeridian stay in range."""
        coord = Coordinate(10.0, lng, 0.0)
        result = transformer.transform(coord, "WGS84", "NAD83")

        assert -180.0 <= result.lng <= 180.0
        assert result.lng == pytest.approx(lng, abs=1e-4)

    def test_utm_is_not_implemented(self, transformer, san_francisco):
        """Test that UTM conversion is wrapped with its cause."""
        with pytest.raises(TransformationFailedError, match="WGS84 to UTM_NAD83_N") as info:
            transformer.transform(san_francisco, "WGS84", "UTM_NAD83_N")

        assert isinstance(info.value.__cause__, ProjectionNotImplementedError)
        assert info.value.from_projection == "WGS84"
        assert info.value.to_projection == "UTM_NAD83_N"

    def test_unsupported_datum_pair(self, transformer, san_francisco, caplog):
        """Test that datums without parameters fail and are logged."""
        transformer.projections["ED50"] = ProjectionDefinition("ED50", ProjectionType.GEOGRAPHIC, "4230")

        with caplog.at_level(logging.ERROR):
            with pytest.raises(TransformationFailedError) as info:
                transformer.transform(san_francisco, "WGS84", "ED50")

        assert isinstance(info.value.__cause__, UnsupportedDatumTransformationError)
        assert "Transformation error" in caplog.text

    def test_cache_precision_from_options(self):
        """Test that cache keys use the configured precision."""
        transformer = SimpleWGS84Transformer(CoreOptions(transform_cache_precision=2))

        transformer.transform(Coordinate(10.001, 20.001), "WGS84", "NAD83")
        transformer.transform(Coordinate(10.002, 20.002), "WGS84", "NAD83")

        assert len(transformer._transform_cache) == 1


class TestHeightConversion:
    """Tests for ellipsoidal/orthometric conversion."""

    def test_round_trip(self, transformer, san_francisco):
        """Test that both conversions are inverse."""
        orthometric = transformer.convert_ellipsoidal_to_orthometric(san_francisco)
        back = transformer.convert_orthometric_to_ellipsoidal(orthometric)

        assert orthometric.height_reference == "orthometric"
        assert back.elevation == pytest.approx(san_francisco.elevation)

    def test_geoid_is_injectable(self, san_francisco):
        """Test a custom geoid model."""

        class ConstantGeoid:
            def get_height(self, lat, lng):
                return -25.0

        transformer = SimpleWGS84Transformer(geoid_model=ConstantGeoid())
        result = transformer.convert_ellipsoidal_to_orthometric(san_francisco)

        assert result.elevation == pytest.approx(35.0)

    def test_default_geoid_ignores_requested_name(self):
        """Test that the built-in geoid keeps its own name until a model is loaded."""
        transformer = SimpleWGS84Transformer(CoreOptions(geoid_model="EGM2008"))

        assert transformer.geoid_model.name == "default"
        assert "GeoidModel(default)" in repr(transformer)
