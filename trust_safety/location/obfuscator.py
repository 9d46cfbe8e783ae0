"""Deterministic location obfuscation for public listing coordinates.

A listing's public pin is its true coordinate plus an offset derived from a
location key (address plus owner id). Because the offset depends only on the
key, every observation of the same listing shows the same pin, so repeated
observations cannot be averaged back to the true point.

Algorithm:
1. ``hash = djb2(location_key)`` (absolute value, 32-bit JavaScript semantics)
2. Per axis: ``mixed = int32(hash) ^ int32(seed * 2654435761)`` using seed 1
   for latitude and 2 for longitude
3. ``fraction = ((mixed mod 10000) / 10000) * 2 - 1``, in ``[-1, 1)``
4. ``offset = fraction * max_offset_degrees``

The modulo is floored so negative ``mixed`` values still land in
``[0, 10000)`` and the offset never leaves ``[-R, R]``. Clients that used a
truncating remainder placed latitude offsets in ``(-3R, -R]``; offsets from
this module are those values plus 2R.

The key hash is not keyed. Anyone who can guess an address and owner id can
recompute the offset and recover the exact point; this only defeats
triangulation from repeated observation.
"""

import logging
import math
from numbers import Real
from typing import Optional

from trust_safety.config.models import DEFAULT_MAX_OFFSET_DEGREES, ObfuscationConfig
from trust_safety.logging import get_logger
from trust_safety.utils.hashing import djb2_hash, to_int32

from .exceptions import InvalidArgument
from .models import Coordinate, Offset

logger = get_logger(__name__, component="location")

# Knuth's multiplicative hashing constant, 2**32 / golden ratio.
GOLDEN_RATIO_MULTIPLIER = 2654435761
LATITUDE_SEED = 1
LONGITUDE_SEED = 2
OFFSET_BUCKETS = 10000

LATITUDE_MULTIPLIER = to_int32(LATITUDE_SEED * GOLDEN_RATIO_MULTIPLIER)
LONGITUDE_MULTIPLIER = to_int32(LONGITUDE_SEED * GOLDEN_RATIO_MULTIPLIER)


def _validate_key(location_key: str) -> None:
    if not isinstance(location_key, str):
        raise InvalidArgument("location_key", f"expected str, got {type(location_key).__name__}")
    if not location_key:
        raise InvalidArgument("location_key", "must not be empty")


def _validate_radius(max_offset_degrees: float) -> float:
    """Return the radius as a float, or raise InvalidArgument."""
    if isinstance(max_offset_degrees, bool) or not isinstance(max_offset_degrees, Real):
        raise InvalidArgument(
            "max_offset_degrees",
            f"expected a number, got {type(max_offset_degrees).__name__}",
            max_offset_degrees,
        )
    try:
        radius = float(max_offset_degrees)
    except OverflowError:
        raise InvalidArgument(
            "max_offset_degrees", "too large to represent as a float", max_offset_degrees
        ) from None
    if not math.isfinite(radius) or radius <= 0:
        raise InvalidArgument(
            "max_offset_degrees",
            f"must be a positive finite number, got {radius}",
            max_offset_degrees,
        )
    return radius


def _axis_fraction(key_hash: int, multiplier: int) -> float:
    """Map a key hash to ``[-1, 1)`` for one axis."""
    mixed = to_int32(key_hash) ^ multiplier
    return ((mixed % OFFSET_BUCKETS) / OFFSET_BUCKETS) * 2 - 1


def compute_offset(
    location_key: str, max_offset_degrees: float = DEFAULT_MAX_OFFSET_DEGREES
) -> Offset:
    """Derive the deterministic offset for a location key.

    Args:
        location_key: Non-empty opaque key, e.g. from build_location_key()
        max_offset_degrees: Maximum magnitude of each axis offset

    Returns:
        Offset with both components in ``[-max_offset_degrees, max_offset_degrees]``

    Raises:
        InvalidArgument: If the key is empty or the radius is not positive and finite
    """
    _validate_key(location_key)
    radius = _validate_radius(max_offset_degrees)

    key_hash = djb2_hash(location_key)
    return Offset(
        lat_offset=_axis_fraction(key_hash, LATITUDE_MULTIPLIER) * radius,
        lng_offset=_axis_fraction(key_hash, LONGITUDE_MULTIPLIER) * radius,
    )


def build_location_key(address: str, owner_id: str) -> str:
    """Build an owner-scoped location key.

    Scoping by owner keeps two owners at the same or similar addresses from
    sharing correlated offsets. The parts are concatenated without separator,
    matching keys already derived by other clients.

    Raises:
        InvalidArgument: If either part is empty
    """
    if not address or not address.strip():
        raise InvalidArgument("address", "must not be empty")
    if not owner_id or not str(owner_id).strip():
        raise InvalidArgument("owner_id", "must not be empty")
    return f"{address}{owner_id}"


class LocationObfuscator:
    """Computes public coordinates for listings.

    Responsibilities:
    - Validate obfuscation inputs and fail fast on malformed ones
    - Derive deterministic per-key offsets within the configured radius
    - Apply offsets to true coordinates without ever logging them
    """

    def __init__(
        self,
        config: Optional[ObfuscationConfig] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize LocationObfuscator.

        Args:
            config: Obfuscation settings (defaults to a 0.003 degree radius)
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.config = config or ObfuscationConfig()
        self.logger = logger_instance or logger

    @property
    def max_offset_degrees(self) -> float:
        return self.config.max_offset_degrees

    def offset(self, location_key: str, max_offset_degrees: Optional[float] = None) -> Offset:
        """Return the offset for location_key.

        Args:
            location_key: Non-empty opaque key
            max_offset_degrees: Radius override; the configured radius when None

        Raises:
            InvalidArgument: If the key or radius is malformed
        """
        radius = self.max_offset_degrees if max_offset_degrees is None else max_offset_degrees
        try:
            return compute_offset(location_key, radius)
        except InvalidArgument as e:
            self.logger.warning(
                "Rejected obfuscation input",
                extra={
                    "event": "location.offset.invalid_argument",
                    "argument": e.argument,
                    "reason": e.reason,
                },
            )
            raise

    def obfuscate(
        self,
        coordinate: Coordinate,
        location_key: str,
        max_offset_degrees: Optional[float] = None,
    ) -> Coordinate:
        """Return the public coordinate for a true coordinate.

        Raises:
            InvalidArgument: If the coordinate is not a valid WGS84 point or
                the key or radius is malformed
        """
        if not (math.isfinite(coordinate.latitude) and -90.0 <= coordinate.latitude <= 90.0):
            raise InvalidArgument("latitude", "must be a finite value in [-90, 90]")
        if not (math.isfinite(coordinate.longitude) and -180.0 <= coordinate.longitude <= 180.0):
            raise InvalidArgument("longitude", "must be a finite value in [-180, 180]")

        return coordinate.shifted(self.offset(location_key, max_offset_degrees))


def obfuscate_coordinate(
    latitude: float,
    longitude: float,
    location_key: str,
    max_offset_degrees: float = DEFAULT_MAX_OFFSET_DEGREES,
) -> Coordinate:
    """Shortcut for LocationObfuscator().obfuscate() with an explicit radius."""
    return LocationObfuscator().obfuscate(
        Coordinate(latitude, longitude), location_key, max_offset_degrees
    )
