"""Content safety filter for user-written listing text.

This module implements the check that:
1. Normalizes text (see normalizer.py)
2. Scans it for prohibited terms in configuration order
3. Reports the first match, or all matches for moderation tooling

Matching is substring-based, not whole-word: "arschloch" is caught inside
"duarschloch", but innocent words that contain a prohibited term are
rejected too (e.g. "Essex video" contains "sex video"). Switching to word
boundaries would let compound words through and changes which listings are
rejected.
"""

import logging
import threading
from typing import Iterable, List, Optional

from trust_safety.config.models import ModerationConfig
from trust_safety.logging import get_logger

from .models import TermSnapshot, ValidationOutcome, ViolationResult
from .normalizer import TextNormalizer

logger = get_logger(__name__, component="moderation")


class ContentSafetyFilter:
    """Scans titles and descriptions for prohibited content.

    Responsibilities:
    - Normalize text against leetspeak, punctuation and repetition tricks
    - Find prohibited terms as substrings, first match in configuration order
    - Build submission outcomes with localized rejection messages
    - Swap in a new term set atomically on reload

    The filter never raises for string input; a match is a normal result.
    Every check reads the term snapshot once, so a concurrent reload_terms()
    is seen either entirely or not at all.
    """

    def __init__(
        self,
        config: Optional[ModerationConfig] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize ContentSafetyFilter.

        Args:
            config: Term dictionary and normalization settings (defaults built in)
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.config = config or ModerationConfig()
        self.normalizer = TextNormalizer(self.config.leetspeak_map)
        self.logger = logger_instance or logger
        self._snapshot = TermSnapshot(terms=self.config.prohibited_terms)
        self._reload_lock = threading.Lock()

    @property
    def snapshot(self) -> TermSnapshot:
        return self._snapshot

    @property
    def terms(self):
        return self._snapshot.terms

    def normalize(self, text: Optional[str]) -> str:
        return self.normalizer.normalize(text)

    def check_violation(self, text: Optional[str]) -> ViolationResult:
        """Return the first prohibited term contained in the normalized text.

        Args:
            text: Raw user text; empty or None is always clean

        Returns:
            ViolationResult.violation(term) for the first match in configuration
            order, ViolationResult.clean() otherwise
        """
        snapshot = self._snapshot
        normalized = self.normalize(text)

        for index, term in enumerate(snapshot.terms):
            if term in normalized:
                self.logger.warning(
                    "Prohibited content detected",
                    extra={
                        "event": "moderation.text.violation",
                        "term_index": index,
                        "term_length": len(term),
                        "normalized_length": len(normalized),
                        "terms_version": snapshot.version,
                    },
                )
                return ViolationResult.violation(term)

        self.logger.debug(
            "Text passed content check",
            extra={
                "event": "moderation.text.clean",
                "normalized_length": len(normalized),
                "terms_version": snapshot.version,
            },
        )
        return ViolationResult.clean()

    def find_violations(self, text: Optional[str]) -> List[str]:
        """Return every prohibited term contained in the normalized text.

        Terms are listed in configuration order, so the first entry equals
        check_violation(text).matched_term.
        """
        snapshot = self._snapshot
        normalized = self.normalize(text)
        return [term for term in snapshot.terms if term in normalized]

    def validate(self, title: Optional[str], description: Optional[str]) -> ValidationOutcome:
        """Validate a listing's title and description together.

        The two fields are joined with a single space before checking, so a
        term split across them ("... fu" + "ck ...") is not detected.

        Returns:
            ValidationOutcome with is_valid and, on rejection, the matched term
            and the configured rejection messages
        """
        combined = f"{title or ''} {description or ''}"
        result = self.check_violation(combined)

        if result.is_clean:
            return ValidationOutcome(is_valid=True)

        return ValidationOutcome(
            is_valid=False,
            violating_term=result.matched_term,
            messages=dict(self.config.rejection_messages),
        )

    def reload_terms(self, terms: Iterable[str]) -> TermSnapshot:
        """Replace the prohibited-term set.

        Terms go through the same validation as configuration files. The new
        set becomes visible to checks in one reference swap.

        Args:
            terms: New terms in the order they should be checked

        Returns:
            The snapshot now in effect

        Raises:
            pydantic.ValidationError: If the new terms are invalid (e.g. all empty)
        """
        config = ModerationConfig.model_validate(
            {**self.config.model_dump(), "prohibited_terms": list(terms)}
        )

        with self._reload_lock:
            snapshot = TermSnapshot(
                terms=config.prohibited_terms, version=self._snapshot.version + 1
            )
            self.config = config
            self._snapshot = snapshot

        self.logger.info(
            "Prohibited terms reloaded",
            extra={
                "event": "moderation.terms.reloaded",
                "term_count": len(snapshot.terms),
                "terms_version": snapshot.version,
            },
        )
        return snapshot
