"""
Tests for TransformerFactory and the default factory.
"""

import pytest

from gis_survey.core.errors import ProjectionNotImplementedError
from gis_survey.core.models.coordinate import Coordinate
from gis_survey.core.models.options import CoreOptions
from gis_survey.core.transform.factory import (
    TransformerFactory,
    get_default_factory,
    initialize_core,
    set_default_factory,
)
from gis_survey.core.transform.simple_wgs84 import SimpleWGS84Transformer


class TestTransformerFactory:
    """Tests for transformer creation and caching."""

    def test_default_transformer(self):
        """Test that the default type is the simple transformer."""
        factory = TransformerFactory()
        transformer = factory.get_transformer()

        assert isinstance(transformer, SimpleWGS84Transformer)
        assert factory.get_transformer("simple") is transformer

    def test_invalid_default_type(self):
        """Test that only known types can be the default."""
        with pytest.raises(ValueError, match="Invalid transformer type"):
            TransformerFactory().set_default_type("pyproj")

    def test_proj4js_not_implemented(self):
        """Test that the proj4js type is declared but not available."""
        factory = TransformerFactory()
        factory.set_default_type("proj4js")

        with pytest.raises(ProjectionNotImplementedError, match="not yet implemented"):
            factory.get_transformer()

    def test_unknown_type(self):
        """Test that unknown types raise ValueError."""
        with pytest.raises(ValueError, match="Unknown transformer type: magic"):
            TransformerFactory().get_transformer("magic")

    def test_clear_cache_recreates_instances(self):
        """Test that clear_cache forgets instances."""
        factory = TransformerFactory()
        first = factory.get_transformer()
        first.transform(Coordinate(10.0, 10.0), "WGS84", "NAD83")

        factory.clear_cache()

        assert first._transform_cache == {}
        assert factory.get_transformer() is not first

    def test_is_available(self):
        """Test availability checks."""
        factory = TransformerFactory()

        assert factory.is_available("simple") is True
        assert factory.is_available("proj4js") is False
        assert factory.is_available("magic") is False

    def test_all_supported_projections(self):
        """Test the projection listing per transformer type."""
        projections = TransformerFactory().get_all_supported_projections()

        assert list(projections) == ["simple"]
        assert "NAD27" in projections["simple"]

    def test_options_are_passed_to_transformers(self):
        """Test that factory options reach the transformer."""
        options = CoreOptions(geoid_cache_precision=2)
        transformer = TransformerFactory(options).get_transformer()

        assert transformer.options.geoid_cache_precision == 2


class TestDefaultFactory:
    """Tests for the module-level default factory."""

    def test_coordinates_use_default_factory(self, default_factory):
        """Test that coordinates resolve the default factory's transformer."""
        coord = Coordinate(1.0, 2.0)
        assert coord.get_transformer() is default_factory.get_transformer()

    def test_set_default_factory(self):
        """Test replacing the default factory."""
        factory = TransformerFactory()
        set_default_factory(factory)

        assert get_default_factory() is factory
        assert Coordinate(1.0, 2.0).get_transformer() is factory.get_transformer()

    def test_reset_default_factory(self):
        """Test that None resets to a fresh factory."""
        factory = TransformerFactory()
        set_default_factory(factory)
        set_default_factory(None)

        assert get_default_factory() is not factory


class TestInitializeCore:
    """Tests for initialize_core."""

    def test_initialize_with_defaults(self):
        """Test default initialization."""
        previous = get_default_factory()

        assert initialize_core() is True
        assert get_default_factory() is not previous
        assert get_default_factory().default_type == "simple"

    def test_initialize_with_proj4js_fails(self, caplog):
        """Test that an unavailable transformer type reports failure."""
        previous = get_default_factory()

        assert initialize_core(CoreOptions(transformer_type="proj4js")) is False
        assert get_default_factory() is previous
        assert "Failed to initialize core" in caplog.text

    def test_initialize_with_unknown_geoid(self):
        """Test that an unavailable geoid model keeps the approximation."""
        assert initialize_core(CoreOptions(geoid_model="EGM2008")) is True

    def test_unknown_geoid_reports_approximation(self):
        """Test that the default transformer names the approximation it uses."""
        initialize_core(CoreOptions(geoid_model="EGM2008"))

        assert get_default_factory().get_transformer().geoid_model.name == "default"
