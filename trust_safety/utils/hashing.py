"""Hashing utilities for deriving stable identifiers from address strings.

This module provides:
- djb2_hash: 32-bit djb2 hash used to derive location offsets
- compute_address_id: short hex id for grouping listings at the same address

These are NOT security primitives. djb2 disperses small input changes well
but anyone who can guess an address can recompute its hash. Values must stay
bit-compatible with offsets and address ids already derived by other
clients, so the mixing here follows JavaScript integer semantics exactly:
each step wraps to a signed 32-bit integer and keys are hashed per UTF-16
code unit.
"""

import struct
from typing import Iterator

DJB2_SEED = 5381

_UINT32_MASK = 0xFFFFFFFF
_INT32_SIGN_BIT = 0x80000000


def to_int32(value: int) -> int:
    """Wrap an integer to the signed 32-bit range, as JavaScript's ``x | 0`` does.

    Example:
        >>> to_int32(2654435761)
        -1640531535
    """
    value &= _UINT32_MASK
    if value & _INT32_SIGN_BIT:
        return value - (_UINT32_MASK + 1)
    return value


def utf16_code_units(text: str) -> Iterator[int]:
    """Yield the UTF-16 code units of text.

    Characters outside the Basic Multilingual Plane yield two surrogate units,
    which is what ``String.prototype.charCodeAt`` sees.
    """
    encoded = text.encode("utf-16-le", "surrogatepass")
    for (unit,) in struct.iter_unpack("<H", encoded):
        yield unit


def djb2_hash(value: str) -> int:
    """Compute the absolute djb2 hash of a string.

    ``hash = hash * 33 + code_unit`` starting from 5381, truncated to a
    signed 32-bit integer after every step. The result is the absolute value,
    so it lies in ``[0, 2**31]``; ``2**31`` occurs when the final hash is
    ``-2**31``.

    Args:
        value: String to hash (may be empty)

    Returns:
        Non-negative hash value

    Example:
        >>> djb2_hash("a")
        177670
    """
    hash_value = DJB2_SEED
    for code_unit in utf16_code_units(value):
        hash_value = to_int32(hash_value * 33 + code_unit)
    return abs(hash_value)


def compute_address_id(street: str, city: str, postal_code: str) -> str:
    """Compute a deterministic id for listings sharing a street address.

    Street and city are trimmed and lowercased, the postal code is only
    trimmed, and the three parts are joined with ``-`` before hashing.

    Args:
        street: Street and house number
        city: City name
        postal_code: Postal code

    Returns:
        Lowercase hexadecimal djb2 hash without prefix

    Example:
        >>> compute_address_id("Hauptstraße 1", "Berlin", "10115") == compute_address_id(
        ...     " HAUPTSTRAẞE 1", "berlin ", "10115"
        ... )
        True
    """
    normalized = f"{street.strip().lower()}-{city.strip().lower()}-{postal_code.strip()}"
    return format(djb2_hash(normalized), "x")
