"""Location obfuscation for public listing coordinates.

This module provides:
- Offset / Coordinate: value types for offsets and points
- LocationObfuscator: configured service deriving public coordinates
- compute_offset: the pure offset function
- InvalidArgument: raised for malformed obfuscation inputs
"""

from .exceptions import InvalidArgument
from .models import Coordinate, Offset
from .obfuscator import (
    LocationObfuscator,
    build_location_key,
    compute_offset,
    obfuscate_coordinate,
)

__all__ = [
    "LocationObfuscator",
    "Offset",
    "Coordinate",
    "InvalidArgument",
    "compute_offset",
    "build_location_key",
    "obfuscate_coordinate",
]
