"""Additional validation utilities for configuration."""

import re
import warnings
from typing import Any, Dict, List

from .models import SUPPORTED_LETTERS, canonicalize_term

# Below this radius the offset is too small to hide a single building.
MIN_RECOMMENDED_OFFSET_DEGREES = 0.0005
# Above this the public pin may land in a different neighbourhood.
MAX_RECOMMENDED_OFFSET_DEGREES = 0.01

_TRIPLE_RUN = re.compile(r"(.)\1{2,}")


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for potential issues and return warnings.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    obfuscation = config_dict.get("obfuscation", {})
    if isinstance(obfuscation, dict):
        radius = obfuscation.get("max_offset_degrees")
        if isinstance(radius, (int, float)) and not isinstance(radius, bool) and radius > 0:
            if radius < MIN_RECOMMENDED_OFFSET_DEGREES:
                warning_messages.append(
                    f"Small max_offset_degrees ({radius}) may not hide the exact address"
                )
            elif radius > MAX_RECOMMENDED_OFFSET_DEGREES:
                warning_messages.append(
                    f"Large max_offset_degrees ({radius}) may place listings far from their area"
                )

    moderation = config_dict.get("moderation", {})
    if isinstance(moderation, dict):
        terms = moderation.get("prohibited_terms", [])
        if isinstance(terms, list):
            normalized = [canonicalize_term(term) for term in terms if isinstance(term, str)]
            duplicates = sorted({term for term in normalized if term and normalized.count(term) > 1})
            if duplicates:
                warning_messages.append(
                    f"Duplicate terms in prohibited_terms will be deduplicated: {', '.join(duplicates)}"
                )

            for term in normalized:
                if not term:
                    continue
                unsupported = sorted(
                    {char for char in term if char != " " and char not in SUPPORTED_LETTERS}
                )
                if unsupported:
                    warning_messages.append(
                        f"Term '{term}' contains characters removed by normalization "
                        f"({''.join(unsupported)}) and can never match"
                    )
                elif _TRIPLE_RUN.search(term):
                    warning_messages.append(
                        f"Term '{term}' repeats a character three or more times and can never "
                        "match normalized text"
                    )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """
    Emit warning messages using Python's warnings module.

    Args:
        warning_messages: List of warning messages to emit
    """
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
