"""Custom exceptions for configuration management."""

from typing import List, Optional

from pydantic import ValidationError


class ConfigurationError(Exception):
    """
    Exception raised when configuration validation fails.

    Stores every validation problem found so operators can fix a config
    file in one pass instead of one error at a time.
    """

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize ConfigurationError.

        Args:
            message: Primary error message
            errors: List of specific validation errors
            suggestions: List of helpful suggestions to fix the errors
        """
        self.message = message
        self.errors = errors or []
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    @classmethod
    def from_validation_error(
        cls,
        message: str,
        error: ValidationError,
        suggestions: Optional[List[str]] = None,
    ) -> "ConfigurationError":
        """Build a ConfigurationError from a Pydantic ValidationError.

        Each Pydantic error becomes one line prefixed with its field path,
        e.g. ``moderation -> prohibited_terms: ...``.
        """
        errors = []
        for detail in error.errors():
            field_path = " -> ".join(str(loc) for loc in detail["loc"])
            error_type = detail["type"]

            if error_type == "missing":
                errors.append(f"Missing required field: {field_path}")
            elif error_type in ("string_type", "float_type", "float_parsing", "dict_type"):
                expected_type = error_type.split("_")[0]
                errors.append(
                    f"Invalid type for '{field_path}': expected {expected_type}, "
                    f"got {detail.get('input')!r}"
                )
            elif error_type == "extra_forbidden":
                errors.append(f"Unknown field: {field_path}")
            else:
                errors.append(f"{field_path}: {detail['msg']}" if field_path else detail["msg"])

        return cls(message, errors=errors, suggestions=suggestions)

    def _format_message(self) -> str:
        """Format the error message with all errors and suggestions."""
        parts = [self.message]

        if self.errors:
            parts.append("\nValidation Errors:")
            for i, error in enumerate(self.errors, 1):
                parts.append(f"  {i}. {error}")

        if self.suggestions:
            parts.append("\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"  - {suggestion}")

        return "\n".join(parts)
