"""Configuration schema models using Pydantic.

All models are frozen: a loaded configuration is shared by the location
obfuscator and the content filter and must not change underneath them.
Mapping fields are stored as read-only MappingProxyType views.
"""

import string
from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Tuple

from pydantic import BaseModel, Field, field_serializer, field_validator

# Roughly 300 m of latitude; longitude shrinks toward the poles.
DEFAULT_MAX_OFFSET_DEGREES = 0.003

# Letters kept by text normalization. Everything else except whitespace is stripped.
SUPPORTED_LETTERS = frozenset(string.ascii_lowercase + "äöüß")

DEFAULT_PROHIBITED_TERMS: Tuple[str, ...] = (
    # English profanity
    "fuck", "shit", "bitch", "cunt", "nigger", "faggot", "retard",
    # German profanity
    "fotze", "wichser", "hurensohn", "schlampe", "schwuchtel", "spast",
    "arschloch", "missgeburt", "behindert",
    # Hate speech
    "nazi", "heil hitler", "sieg heil",
    # Sexual content
    "porno", "porn", "sex video", "nackt",
)

# Applied in this order; values are letters so no substitution feeds another.
DEFAULT_LEETSPEAK_MAP: Dict[str, str] = {
    "0": "o",
    "1": "i",
    "3": "e",
    "4": "a",
    "5": "s",
    "7": "t",
    "8": "b",
    "@": "a",
    "$": "s",
}

DEFAULT_REJECTION_MESSAGES: Dict[str, str] = {
    "de": "Bitte respektvolle Sprache verwenden. Beleidigende Inhalte sind nicht erlaubt.",
    "en": "Please use respectful language. Offensive content is not allowed.",
}


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


def canonicalize_term(term: str) -> str:
    """Lowercase a term and collapse its inner whitespace to single spaces."""
    return " ".join(term.lower().split())


class ObfuscationConfig(BaseModel):
    """Settings for public-coordinate obfuscation."""

    max_offset_degrees: float = Field(
        DEFAULT_MAX_OFFSET_DEGREES,
        gt=0,
        allow_inf_nan=False,
        description="Maximum offset applied to each axis, in degrees",
    )

    model_config = {"frozen": True, "extra": "forbid"}


class ModerationConfig(BaseModel):
    """Prohibited-term dictionary and normalization settings."""

    prohibited_terms: Tuple[str, ...] = Field(
        DEFAULT_PROHIBITED_TERMS,
        description="Terms rejected as substrings of normalized text, checked in order",
    )
    leetspeak_map: Mapping[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_LEETSPEAK_MAP),
        validate_default=True,
        description="Ordered character substitutions applied before stripping punctuation",
    )
    rejection_messages: Mapping[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_REJECTION_MESSAGES),
        validate_default=True,
        description="User-facing rejection message per language code",
    )

    model_config = {"frozen": True, "extra": "forbid"}

    @field_validator("prohibited_terms")
    @classmethod
    def normalize_terms(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        """Lowercase terms, drop empty ones and deduplicate keeping first occurrence."""
        normalized = []
        seen = set()
        for term in v:
            canonical = canonicalize_term(term)
            if canonical and canonical not in seen:
                seen.add(canonical)
                normalized.append(canonical)
        if not normalized:
            raise ValueError("prohibited_terms must contain at least one non-empty term")
        return tuple(normalized)

    @field_validator("leetspeak_map", mode="before")
    @classmethod
    def stringify_leetspeak_keys(cls, v: Any) -> Any:
        """Accept YAML keys such as ``0`` that load as integers."""
        if isinstance(v, Mapping):
            return {str(key): str(value) for key, value in v.items()}
        return v

    @field_validator("leetspeak_map")
    @classmethod
    def validate_leetspeak_map(cls, v: Mapping[str, str]) -> Mapping[str, str]:
        """Each entry maps one non-letter character to one supported letter."""
        validated = {}
        for source, target in v.items():
            target = target.lower()
            if len(source) != 1 or source.isspace():
                raise ValueError(
                    f"leetspeak source {source!r} must be a single non-whitespace character"
                )
            if source.lower() in SUPPORTED_LETTERS:
                raise ValueError(f"leetspeak source {source!r} must not be a supported letter")
            if len(target) != 1 or target not in SUPPORTED_LETTERS:
                raise ValueError(
                    f"leetspeak target {target!r} for {source!r} must be a single supported letter"
                )
            validated[source] = target
        return MappingProxyType(validated)

    @field_validator("rejection_messages")
    @classmethod
    def validate_rejection_messages(cls, v: Mapping[str, str]) -> Mapping[str, str]:
        """Strip messages and require at least one language."""
        messages = {}
        for language, message in v.items():
            stripped = message.strip()
            if not stripped:
                raise ValueError(f"rejection message for '{language}' cannot be empty")
            messages[language.strip().lower()] = stripped
        if not messages:
            raise ValueError("rejection_messages must define at least one language")
        return MappingProxyType(messages)

    @field_serializer("leetspeak_map", "rejection_messages")
    def dump_mapping(self, v: Mapping[str, str]) -> Dict[str, str]:
        return dict(v)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True, "frozen": True, "extra": "forbid"}


class AppConfig(BaseModel):
    """Root configuration object for the trust and safety core."""

    obfuscation: ObfuscationConfig = Field(
        default_factory=ObfuscationConfig, description="Location obfuscation settings"
    )
    moderation: ModerationConfig = Field(
        default_factory=ModerationConfig, description="Content safety filter settings"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    model_config = {"frozen": True, "extra": "forbid"}
