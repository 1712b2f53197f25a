"""
Measurement unit conversion and display formatting.

Conventions:
- All geometry functions return meters, square meters and cubic meters
- Conversion happens only at the presentation boundary
- Unit names are lowercase and hyphenated ("square-feet", "cubic-meters")
"""

from typing import Dict


DISTANCE_UNITS: Dict[str, float] = {
    "meters": 1.0,
    "feet": 0.3048,
    "kilometers": 1000.0,
    "miles": 1609.344,
}

AREA_UNITS: Dict[str, float] = {
    "square-meters": 1.0,
    "square-feet": 0.092903,
    "hectares": 10000.0,
    "acres": 4046.856,
}

VOLUME_UNITS: Dict[str, float] = {
    "cubic-meters": 1.0,
    "cubic-feet": 0.0283168,
}

_UNIT_SYMBOLS = {
    "meters": "m",
    "feet": "ft",
    "kilometers": "km",
    "miles": "mi",
    "square-meters": "m²",
    "square-feet": "ft²",
    "hectares": "ha",
    "acres": "ac",
    "cubic-meters": "m³",
    "cubic-feet": "ft³",
}

# Units shown with a fixed number of decimals regardless of magnitude.
_FIXED_DECIMALS = {
    "kilometers": 3,
    "miles": 3,
    "hectares": 4,
    "acres": 4,
}


def _convert(value: float, from_unit: str, to_unit: str, table: Dict[str, float], kind: str) -> float:
    if from_unit not in table:
        raise ValueError(f"Unknown {kind} unit: {from_unit}")
    if to_unit not in table:
        raise ValueError(f"Unknown {kind} unit: {to_unit}")
    if from_unit == to_unit:
        return value
    return value * table[from_unit] / table[to_unit]


def convert_distance(distance: float, from_unit: str = "meters", to_unit: str = "meters") -> float:
    """Convert a distance between meters, feet, kilometers and miles."""
    return _convert(distance, from_unit, to_unit, DISTANCE_UNITS, "distance")


def convert_area(area: float, from_unit: str = "square-meters", to_unit: str = "square-meters") -> float:
    """Convert an area between square meters, square feet, hectares and acres."""
    return _convert(area, from_unit, to_unit, AREA_UNITS, "area")


def convert_volume(volume: float, from_unit: str = "cubic-meters", to_unit: str = "cubic-meters") -> float:
    """Convert a volume between cubic meters and cubic feet."""
    return _convert(volume, from_unit, to_unit, VOLUME_UNITS, "volume")


def format_measurement(value: float, unit: str) -> str:
    """
    Format a measurement value for display.

    Small values (< 10) keep two decimals, larger ones are rounded to an
    integer. Kilometers/miles use three decimals, hectares/acres four.
    Unknown units are printed verbatim.

    Args:
        value: Measurement value already expressed in ``unit``
        unit: Unit name

    Returns:
        Display string such as ``"1234 m"`` or ``"0.5000 ha"``
    """
    if unit not in _UNIT_SYMBOLS:
        return f"{value} {unit}"

    if unit in _FIXED_DECIMALS:
        text = f"{value:.{_FIXED_DECIMALS[unit]}f}"
    elif value < 10:
        text = f"{value:.2f}"
    else:
        text = str(int(round(value)))

    return f"{text} {_UNIT_SYMBOLS[unit]}"
