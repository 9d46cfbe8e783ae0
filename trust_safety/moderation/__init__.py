"""Content safety filtering for listing titles and descriptions.

This module provides:
- TextNormalizer / normalize_text: canonicalization before matching
- ContentSafetyFilter: prohibited-term checks and listing validation
- ViolationResult, ValidationOutcome, TermSnapshot: result and state models
"""

from .engine import ContentSafetyFilter
from .models import TermSnapshot, ValidationOutcome, ViolationResult
from .normalizer import TextNormalizer, normalize_text

__all__ = [
    "ContentSafetyFilter",
    "TextNormalizer",
    "normalize_text",
    "ViolationResult",
    "ValidationOutcome",
    "TermSnapshot",
]
