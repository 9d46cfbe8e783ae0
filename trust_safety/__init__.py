"""Trust and safety core for meal listings.

- LocationObfuscator: stable offsets that hide a listing's exact address
- ContentSafetyFilter: prohibited-content checks for titles and descriptions
"""

from .bootstrap import SafetyCore, bootstrap, build_safety_core
from .location import Coordinate, InvalidArgument, LocationObfuscator, Offset, compute_offset
from .moderation import ContentSafetyFilter, ValidationOutcome, ViolationResult, normalize_text

__version__ = "1.0.0"

__all__ = [
    "SafetyCore",
    "bootstrap",
    "build_safety_core",
    "LocationObfuscator",
    "Offset",
    "Coordinate",
    "InvalidArgument",
    "compute_offset",
    "ContentSafetyFilter",
    "ValidationOutcome",
    "ViolationResult",
    "normalize_text",
]
