"""Data models for location obfuscation."""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Offset:
    """Signed offset in degrees, each axis within ``[-R, R]``.

    Attributes:
        lat_offset: Offset added to the latitude
        lng_offset: Offset added to the longitude
    """

    lat_offset: float
    lng_offset: float

    def as_tuple(self) -> Tuple[float, float]:
        return (self.lat_offset, self.lng_offset)


@dataclass(frozen=True)
class Coordinate:
    """A WGS84 point in decimal degrees."""

    latitude: float
    longitude: float

    def shifted(self, offset: Offset) -> "Coordinate":
        """Return this coordinate moved by offset."""
        return Coordinate(
            latitude=self.latitude + offset.lat_offset,
            longitude=self.longitude + offset.lng_offset,
        )
