"""Data models for the content safety filter."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class ViolationResult:
    """Outcome of scanning one text: clean, or the first prohibited term found.

    Attributes:
        matched_term: The prohibited term found, None when the text is clean
    """

    matched_term: Optional[str] = None

    @classmethod
    def clean(cls) -> "ViolationResult":
        return cls()

    @classmethod
    def violation(cls, term: str) -> "ViolationResult":
        return cls(matched_term=term)

    @property
    def is_clean(self) -> bool:
        return self.matched_term is None

    @property
    def is_violation(self) -> bool:
        return self.matched_term is not None

    def __bool__(self) -> bool:
        """True when a violation was found."""
        return self.is_violation


@dataclass(frozen=True)
class TermSnapshot:
    """Immutable view of the prohibited-term set at one point in time.

    Attributes:
        terms: Canonical terms in configuration order
        version: Incremented on every reload
    """

    terms: Tuple[str, ...]
    version: int = 1


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of validating a listing's title and description.

    ``violating_term`` is for moderation tooling. Submitters should only see
    one of ``messages``, which never repeat the offending text.

    Attributes:
        is_valid: False when prohibited content was found
        violating_term: The matched prohibited term, if any
        messages: Rejection message per language code, empty when valid
    """

    is_valid: bool
    violating_term: Optional[str] = None
    messages: Dict[str, str] = field(default_factory=dict)

    def message(self, language: str = "de") -> Optional[str]:
        """Return the rejection message for language, falling back to English.

        Returns None for valid content.
        """
        if self.is_valid:
            return None
        return self.messages.get(language) or self.messages.get("en")

    @property
    def error(self) -> Optional[str]:
        return self.message("de")

    @property
    def error_en(self) -> Optional[str]:
        return self.message("en")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for API responses; omits the term unless present."""
        payload: Dict[str, Any] = {"is_valid": self.is_valid}
        if self.violating_term is not None:
            payload["violating_term"] = self.violating_term
        if not self.is_valid:
            payload["error"] = self.error
            payload["error_en"] = self.error_en
        return payload
