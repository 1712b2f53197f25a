"""
Exception types for the coordinate and geometry core.

Conventions:
- Construction of coordinates never raises; repairs are logged instead
- Transformation errors are strict and propagate to the caller
- Every error derives from GisSurveyError and from the closest builtin
  (ValueError, NotImplementedError, RuntimeError) so generic handlers still work
"""

from typing import Optional


class GisSurveyError(Exception):
    """Base class for all errors raised by the survey core."""


class UnsupportedProjectionError(GisSurveyError, ValueError):
    """Projection identifier is not registered with the transformer."""

    def __init__(self, projection: str, supported=None):
        self.projection = projection
        self.supported = list(supported or [])
        message = f"Unsupported projection: {projection}"
        if self.supported:
            message += f". Supported projections are: {', '.join(self.supported)}"
        super().__init__(message)


class UnsupportedDatumTransformationError(GisSurveyError, ValueError):
    """No datum shift parameters exist between two datums."""

    def __init__(self, from_datum: str, to_datum: str):
        self.from_datum = from_datum
        self.to_datum = to_datum
        super().__init__(f"Unsupported datum transformation: {from_datum} to {to_datum}")


class UnsupportedConversionError(GisSurveyError, ValueError):
    """Height reference conversion between the given systems is not defined."""

    def __init__(self, from_reference: str, to_reference: str):
        self.from_reference = from_reference
        self.to_reference = to_reference
        super().__init__(
            f"Unsupported height reference conversion: {from_reference} to {to_reference}"
        )


class ProjectionNotImplementedError(GisSurveyError, NotImplementedError):
    """Declared projection or transformer type without an implementation."""


class InvalidCoordinateError(GisSurveyError, ValueError):
    """Latitude or longitude outside the valid range."""

    def __init__(self, lat: float, lng: float):
        self.lat = lat
        self.lng = lng
        super().__init__(f"Invalid coordinates: {lat}, {lng}")


class InvalidElevationError(GisSurveyError, ValueError):
    """Elevation is not a finite number."""

    def __init__(self, elevation):
        self.elevation = elevation
        super().__init__(f"Invalid elevation: {elevation!r}. Must be a finite number.")


class TransformationFailedError(GisSurveyError, RuntimeError):
    """
    A transformation failed after validation.

    The original exception is available as ``__cause__``.
    """

    def __init__(self, from_projection: str, to_projection: str, reason: Optional[str] = None):
        self.from_projection = from_projection
        self.to_projection = to_projection
        self.reason = reason
        message = f"Transformation failed from {from_projection} to {to_projection}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
