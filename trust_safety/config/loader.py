"""Configuration loader for the trust and safety core."""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from trust_safety.logging import get_logger

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .models import AppConfig
from .validators import check_for_warnings, emit_warnings

logger = get_logger(__name__, component="config")

DEFAULT_CONFIG_CANDIDATES = (
    Path("trust_safety.yaml"),
    Path("config") / "trust_safety.yaml",
)


def load_config(config_path: Optional[Path] = None) -> tuple[AppConfig, EnvironmentConfig]:
    """
    Load and validate configuration from YAML file and environment variables.

    Config file resolution:
    1. Use provided config_path if given
    2. Use SAFETY_CONFIG_PATH from the environment if set
    3. Try trust_safety.yaml in current directory
    4. Try ./config/trust_safety.yaml
    5. Fall back to built-in defaults

    An explicitly requested file (steps 1 and 2) must exist. The environment
    variable SAFETY_MAX_OFFSET_DEGREES overrides the file's radius.

    Args:
        config_path: Optional path to configuration file

    Returns:
        Tuple of (AppConfig, EnvironmentConfig) with validated configuration

    Raises:
        ConfigurationError: If configuration is invalid or an explicit file is missing
    """
    env_config = load_environment_config()

    config_file = _find_config_file(config_path or env_config.config_path)
    config_dict = read_config_file(config_file) if config_file else {}

    if env_config.max_offset_degrees is not None:
        config_dict = _apply_radius_override(config_dict, env_config.max_offset_degrees)

    warnings = check_for_warnings(config_dict)
    if warnings:
        emit_warnings(warnings)

    try:
        app_config = AppConfig.model_validate(config_dict)
    except ValidationError as e:
        raise ConfigurationError.from_validation_error(
            "Configuration validation failed",
            e,
            suggestions=[
                "Review trust_safety.example.yaml for correct format",
                "Verify field types match the expected schema",
            ],
        ) from e

    logger.info(
        "Configuration loaded",
        extra={
            "event": "config.loaded",
            "config_path": str(config_file) if config_file else None,
            "prohibited_term_count": len(app_config.moderation.prohibited_terms),
            "max_offset_degrees": app_config.obfuscation.max_offset_degrees,
            "radius_from_environment": env_config.max_offset_degrees is not None,
        },
    )

    return app_config, env_config


def _apply_radius_override(config_dict: Dict[str, Any], max_offset_degrees: float) -> Dict[str, Any]:
    """Merge SAFETY_MAX_OFFSET_DEGREES into the obfuscation section.

    A malformed section (e.g. ``obfuscation: fast``) is left as is so schema
    validation reports it.
    """
    section = config_dict.get("obfuscation")
    if section is None:
        section = {}
    if not isinstance(section, dict):
        return config_dict
    return {**config_dict, "obfuscation": {**section, "max_offset_degrees": max_offset_degrees}}


def read_config_file(config_file: Path) -> Dict[str, Any]:
    """
    Read a YAML configuration file into a dictionary.

    Raises:
        ConfigurationError: If the file cannot be read, parsed, or is empty
    """
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config_dict = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse YAML configuration: {e}",
            suggestions=[
                "Check YAML syntax in your config file",
                "Ensure proper indentation (use spaces, not tabs)",
                "Quote leetspeak keys such as '$' and '@'",
            ],
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read configuration file: {e}",
            suggestions=[
                f"Ensure {config_file} is readable",
                "Check file permissions",
            ],
        ) from e

    if not config_dict:
        raise ConfigurationError(
            f"Configuration file is empty: {config_file}",
            suggestions=[
                "Copy trust_safety.example.yaml to trust_safety.yaml",
                "Remove the file to use the built-in defaults",
            ],
        )

    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            f"Configuration file must contain a mapping at the top level: {config_file}",
        )

    return config_dict


def _find_config_file(config_path: Optional[Path] = None) -> Optional[Path]:
    """
    Find configuration file using fallback logic.

    Args:
        config_path: Optional explicit path to config file

    Returns:
        Path to configuration file, or None when the built-in defaults apply

    Raises:
        ConfigurationError: If an explicit config file does not exist
    """
    if config_path:
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigurationError(
                f"Specified configuration file not found: {config_path}",
                suggestions=[
                    f"Ensure {config_path} exists",
                    "Unset SAFETY_CONFIG_PATH to use the built-in defaults",
                ],
            )
        return config_path

    for candidate in DEFAULT_CONFIG_CANDIDATES:
        if candidate.exists():
            return candidate

    logger.debug(
        "No configuration file found, using built-in defaults",
        extra={
            "event": "config.defaults_used",
            "tried": [str(candidate) for candidate in DEFAULT_CONFIG_CANDIDATES],
        },
    )
    return None


def validate_config_file(config_path: Path) -> bool:
    """
    Validate a configuration file without reading environment variables.

    Useful for pre-deployment validation of a new term dictionary.

    Args:
        config_path: Path to configuration file

    Returns:
        True if valid, False otherwise (errors printed to stdout)
    """
    try:
        config_dict = read_config_file(Path(config_path))
        AppConfig.model_validate(config_dict)
        print(f"✓ Configuration file {config_path} is valid")
        return True

    except ConfigurationError as e:
        print(f"✗ Configuration validation failed:\n{e}")
        return False
    except ValidationError as e:
        error = ConfigurationError.from_validation_error("Invalid configuration", e)
        print(f"✗ Configuration validation failed:\n{error}")
        return False
