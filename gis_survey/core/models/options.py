"""
Core options for the coordinate and geometry library.

This module defines configuration for transformer selection, geoid model
selection and the rounding used to key the transformer caches.
"""

from dataclasses import dataclass
from typing import Dict, Any


TRANSFORMER_TYPES = ("simple", "proj4js")


@dataclass
class CoreOptions:
    """
    Configuration options for the coordinate core.

    Attributes:
        transformer_type: Transformer implementation to use ("simple" or "proj4js")
        geoid_model: Geoid model name, "default" uses the built-in approximation
        transform_cache_precision: Decimal places of lat/lng in transform cache keys (default: 9)
        elevation_cache_precision: Decimal places of elevation in transform cache keys (default: 3)
        geoid_cache_precision: Decimal places of lat/lng in geoid cache keys (default: 4)
    """

    transformer_type: str = "simple"
    geoid_model: str = "default"
    transform_cache_precision: int = 9
    elevation_cache_precision: int = 3
    geoid_cache_precision: int = 4

    def __post_init__(self):
        """Validate options after initialization."""
        if isinstance(self.transformer_type, str):
            self.transformer_type = self.transformer_type.lower()
        if self.transformer_type not in TRANSFORMER_TYPES:
            raise ValueError(
                f"Invalid transformer type: {self.transformer_type}. "
                f"Must be 'simple' or 'proj4js'"
            )

        if not self.geoid_model:
            raise ValueError("geoid_model cannot be empty")

        for name in ("transform_cache_precision", "elevation_cache_precision", "geoid_cache_precision"):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 0:
                raise ValueError(f"{name} must be a non-negative integer")

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize options to dictionary.

        Returns:
            Dictionary representation suitable for JSON serialization
        """
        return {
            "transformer_type": self.transformer_type,
            "geoid_model": self.geoid_model,
            "transform_cache_precision": self.transform_cache_precision,
            "elevation_cache_precision": self.elevation_cache_precision,
            "geoid_cache_precision": self.geoid_cache_precision,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CoreOptions':
        """
        Create CoreOptions from a dictionary.

        Accepts the camelCase keys used by browser configuration objects
        (``transformerType``, ``geoidModel``) as well as snake_case.

        Args:
            data: Dictionary with option values

        Returns:
            New CoreOptions instance
        """
        return cls(
            transformer_type=data.get("transformer_type", data.get("transformerType", "simple")),
            geoid_model=data.get("geoid_model", data.get("geoidModel", "default")),
            transform_cache_precision=int(data.get("transform_cache_precision", 9)),
            elevation_cache_precision=int(data.get("elevation_cache_precision", 3)),
            geoid_cache_precision=int(data.get("geoid_cache_precision", 4)),
        )

    @classmethod
    def default(cls) -> 'CoreOptions':
        """
        Create options with default values.

        Returns:
            CoreOptions with default settings
        """
        return cls()

    def __repr__(self) -> str:
        return (
            f"CoreOptions("
            f"transformer={self.transformer_type}, "
            f"geoid={self.geoid_model})"
        )
