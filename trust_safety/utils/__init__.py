"""Utility functions for hashing."""

from .hashing import DJB2_SEED, compute_address_id, djb2_hash, to_int32, utf16_code_units

__all__ = [
    "DJB2_SEED",
    "compute_address_id",
    "djb2_hash",
    "to_int32",
    "utf16_code_units",
]
