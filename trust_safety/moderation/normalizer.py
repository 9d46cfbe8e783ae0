"""Text normalization applied before prohibited-term matching.

Steps, in this order:
1. Lowercase with ``str.lower`` (locale-independent; ß and umlauts keep
   their identity, unlike ``casefold`` which turns ß into ss)
2. Replace leetspeak characters, one mapping entry at a time in order.
   This must precede step 3 because ``@`` and ``$`` are punctuation
3. Drop every character that is not a-z, ä, ö, ü, ß or whitespace
4. Collapse runs of 3+ identical characters to exactly 2
5. Collapse whitespace runs to one space and trim

Step 4 turns "fuuuck" into "fuuck", which no longer contains "fuck". Runs of
exactly two are untouched, so "fuuck" is not caught either. This gap is kept
as is: changing it would change which existing texts are rejected.
"""

import re
from typing import Mapping, Optional, Tuple

from trust_safety.config.models import DEFAULT_LEETSPEAK_MAP

_UNSUPPORTED_CHARS = re.compile(r"[^a-zäöüß\s]")
_REPEATED_CHARS = re.compile(r"(.)\1{2,}")
_WHITESPACE = re.compile(r"\s+")


class TextNormalizer:
    """Canonicalizes free text for substring matching."""

    def __init__(self, leetspeak_map: Optional[Mapping[str, str]] = None):
        """Initialize TextNormalizer.

        Args:
            leetspeak_map: Ordered substitutions; defaults to DEFAULT_LEETSPEAK_MAP
        """
        mapping = DEFAULT_LEETSPEAK_MAP if leetspeak_map is None else leetspeak_map
        self.substitutions: Tuple[Tuple[str, str], ...] = tuple(mapping.items())

    def normalize(self, text: Optional[str]) -> str:
        """Return the normalized form of text. Empty or None input gives ""."""
        if not text:
            return ""

        normalized = text.lower()

        for leet, letter in self.substitutions:
            normalized = normalized.replace(leet, letter)

        normalized = _UNSUPPORTED_CHARS.sub("", normalized)
        normalized = _REPEATED_CHARS.sub(r"\1\1", normalized)
        return _WHITESPACE.sub(" ", normalized).strip()


_default_normalizer = TextNormalizer()


def normalize_text(text: Optional[str]) -> str:
    """Normalize text with the default leetspeak mapping."""
    return _default_normalizer.normalize(text)
