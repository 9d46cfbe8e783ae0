"""Process-start wiring for the trust and safety core.

Listing workflows call bootstrap() once at startup and share the returned
SafetyCore. Both components receive the same immutable AppConfig.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from trust_safety.config.environment import EnvironmentConfig
from trust_safety.config.loader import load_config
from trust_safety.config.models import AppConfig
from trust_safety.location import LocationObfuscator
from trust_safety.logging import get_logger
from trust_safety.logging.config import configure_logging
from trust_safety.moderation import ContentSafetyFilter

logger = get_logger(__name__, component="bootstrap")


@dataclass(frozen=True)
class SafetyCore:
    """The two trust and safety components built from one configuration."""

    config: AppConfig
    obfuscator: LocationObfuscator
    content_filter: ContentSafetyFilter


def build_safety_core(config: Optional[AppConfig] = None) -> SafetyCore:
    """Construct both components from config (built-in defaults when None)."""
    config = config or AppConfig()
    return SafetyCore(
        config=config,
        obfuscator=LocationObfuscator(config.obfuscation),
        content_filter=ContentSafetyFilter(config.moderation),
    )


def resolve_log_level(
    app_config: AppConfig, env_config: EnvironmentConfig, override: Optional[str] = None
) -> str:
    """Pick the log level. Priority: explicit override > LOG_LEVEL > config file."""
    if override:
        return override.upper()
    if env_config.log_level:
        return env_config.log_level
    return app_config.logging.level


def bootstrap(
    config_path: Optional[Path] = None,
    log_level: Optional[str] = None,
    configure_logs: bool = True,
) -> SafetyCore:
    """Load .env, configuration and logging, then build the core.

    Args:
        config_path: Optional YAML config path (see load_config for fallbacks)
        log_level: Optional log level taking precedence over env and file
        configure_logs: Install the root log handler; disable when the host
            application owns logging

    Returns:
        SafetyCore ready to share across request handlers

    Raises:
        ConfigurationError: If configuration or environment is invalid
    """
    load_dotenv()

    app_config, env_config = load_config(config_path)

    if configure_logs:
        configure_logging(
            level=resolve_log_level(app_config, env_config, log_level),
            format_type=app_config.logging.format,
            environment=env_config.environment,
        )

    core = build_safety_core(app_config)

    logger.info(
        "Trust and safety core ready",
        extra={
            "event": "core.ready",
            "prohibited_term_count": len(core.content_filter.terms),
            "max_offset_degrees": core.obfuscator.max_offset_degrees,
        },
    )
    return core
