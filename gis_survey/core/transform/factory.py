"""
Transformer factory.

A TransformerFactory hands out one transformer instance per transformer
type, creating it on first use. Coordinates created without an explicit
transformer use the module-level default factory, which can be replaced
(``set_default_factory``) or configured (``initialize_core``).
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from ..errors import ProjectionNotImplementedError
from ..models.options import CoreOptions, TRANSFORMER_TYPES
from .base import CoordinateTransformer
from .simple_wgs84 import SimpleWGS84Transformer


logger = logging.getLogger(__name__)


class TransformerFactory:
    """
    Cache of transformer instances keyed by transformer type.

    Args:
        options: Options passed to every transformer this factory creates
    """

    def __init__(self, options: Optional[CoreOptions] = None):
        self.options = options or CoreOptions.default()
        self.default_type = self.options.transformer_type
        self._instances: Dict[str, CoordinateTransformer] = {}

    def set_default_type(self, transformer_type: str) -> None:
        """
        Select the transformer type returned by ``get_transformer()``.

        Raises:
            ValueError: If the type is not "simple" or "proj4js"
        """
        if transformer_type not in TRANSFORMER_TYPES:
            raise ValueError(
                f"Invalid transformer type: {transformer_type}. Must be 'simple' or 'proj4js'"
            )
        self.default_type = transformer_type

    def get_transformer(self, transformer_type: Optional[str] = None) -> CoordinateTransformer:
        """
        Get the transformer for a type, creating it on first use.

        Args:
            transformer_type: Transformer type, None for the default type

        Returns:
            Shared transformer instance

        Raises:
            ProjectionNotImplementedError: For "proj4js"
            ValueError: For unknown types
        """
        transformer_type = transformer_type or self.default_type

        transformer = self._instances.get(transformer_type)
        if transformer is not None:
            return transformer

        if transformer_type == "simple":
            transformer = SimpleWGS84Transformer(self.options)
        elif transformer_type == "proj4js":
            raise ProjectionNotImplementedError(
                'Proj4js transformer not yet implemented. Use "simple" for now.'
            )
        else:
            raise ValueError(f"Unknown transformer type: {transformer_type}")

        logger.debug("Created %s transformer", transformer_type)
        self._instances[transformer_type] = transformer
        return transformer

    def clear_cache(self) -> None:
        """Clear the caches of every transformer and forget the instances."""
        for transformer in self._instances.values():
            transformer.clear_cache()
        self._instances.clear()

    def is_available(self, transformer_type: str) -> bool:
        """True if ``get_transformer`` can build the given type."""
        return transformer_type == "simple"

    def get_all_supported_projections(self) -> Dict[str, List[str]]:
        """Supported projections of every available transformer type."""
        return {
            "simple": SimpleWGS84Transformer(self.options).get_supported_projections(),
        }

    def __repr__(self) -> str:
        return f"TransformerFactory(default={self.default_type}, instances={sorted(self._instances)})"


_default_factory: Optional[TransformerFactory] = None


def get_default_factory() -> TransformerFactory:
    """Return the module-level factory, creating it on first use."""
    global _default_factory
    if _default_factory is None:
        _default_factory = TransformerFactory()
    return _default_factory


def set_default_factory(factory: Optional[TransformerFactory]) -> None:
    """Replace the module-level factory; None resets it to a fresh default."""
    global _default_factory
    _default_factory = factory


def initialize_core(options: Optional[CoreOptions] = None) -> bool:
    """
    Configure the default factory from options and load the geoid model.

    Args:
        options: Core options, defaults if None

    Returns:
        True on success, False if the configuration could not be applied
    """
    options = options or CoreOptions.default()
    try:
        factory = TransformerFactory(options)
        factory.set_default_type(options.transformer_type)
        transformer = factory.get_transformer()
    except (ValueError, ProjectionNotImplementedError) as exc:
        logger.error("Failed to initialize core: %s", exc, exc_info=True)
        return False

    # An unavailable geoid model leaves the approximation active
    geoid_model = getattr(transformer, "geoid_model", None)
    if geoid_model is not None and hasattr(geoid_model, "load_model"):
        geoid_model.load_model(options.geoid_model)

    set_default_factory(factory)
    logger.info("Core initialized with %r", options)
    return True
