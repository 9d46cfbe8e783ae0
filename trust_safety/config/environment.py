"""Environment variable loading and validation."""

import math
import os
from pathlib import Path
from typing import Optional

from .exceptions import ConfigurationError

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class EnvironmentConfig:
    """Environment variable configuration holder."""

    def __init__(
        self,
        log_level: Optional[str] = None,
        environment: Optional[str] = None,
        max_offset_degrees: Optional[float] = None,
        config_path: Optional[Path] = None,
    ):
        """Initialize environment configuration."""
        self.log_level = log_level
        self.environment = environment or "local"
        self.max_offset_degrees = max_offset_degrees
        self.config_path = config_path


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate environment variables.

    All variables are optional:
    - LOG_LEVEL: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - ENVIRONMENT: Environment label attached to log records (default: local)
    - SAFETY_MAX_OFFSET_DEGREES: Override obfuscation radius from the config file
    - SAFETY_CONFIG_PATH: Location of the YAML configuration file

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If a variable is set to an invalid value
    """
    errors = []

    log_level = os.getenv("LOG_LEVEL")
    environment = os.getenv("ENVIRONMENT")
    max_offset_str = os.getenv("SAFETY_MAX_OFFSET_DEGREES")
    config_path_str = os.getenv("SAFETY_CONFIG_PATH")

    if log_level:
        if log_level.upper() not in VALID_LOG_LEVELS:
            errors.append(
                f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )
        else:
            log_level = log_level.upper()

    max_offset_degrees = None
    if max_offset_str:
        try:
            max_offset_degrees = float(max_offset_str)
        except ValueError:
            errors.append(
                f"Invalid SAFETY_MAX_OFFSET_DEGREES: '{max_offset_str}'. Must be a number."
            )
        else:
            if not math.isfinite(max_offset_degrees) or max_offset_degrees <= 0:
                errors.append(
                    f"Invalid SAFETY_MAX_OFFSET_DEGREES: {max_offset_str}. "
                    "Must be a positive finite number."
                )

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Check your .env file or exported variables",
                "SAFETY_MAX_OFFSET_DEGREES is in degrees, e.g. 0.003 for roughly 300 m",
            ],
        )

    return EnvironmentConfig(
        log_level=log_level,
        environment=environment,
        max_offset_degrees=max_offset_degrees,
        config_path=Path(config_path_str) if config_path_str else None,
    )
