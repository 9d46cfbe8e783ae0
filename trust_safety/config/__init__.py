"""Configuration management module for the trust and safety core."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config, validate_config_file
from .models import (
    DEFAULT_LEETSPEAK_MAP,
    DEFAULT_MAX_OFFSET_DEGREES,
    DEFAULT_PROHIBITED_TERMS,
    AppConfig,
    LogFormat,
    LogLevel,
    LoggingConfig,
    ModerationConfig,
    ObfuscationConfig,
)

__all__ = [
    # Main loader functions
    "load_config",
    "validate_config_file",
    "load_environment_config",
    # Configuration models
    "AppConfig",
    "ObfuscationConfig",
    "ModerationConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    # Enums
    "LogLevel",
    "LogFormat",
    # Defaults
    "DEFAULT_MAX_OFFSET_DEGREES",
    "DEFAULT_PROHIBITED_TERMS",
    "DEFAULT_LEETSPEAK_MAP",
    # Exceptions
    "ConfigurationError",
]
