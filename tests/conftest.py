"""Shared fixtures for trust and safety core tests."""

import logging
from pathlib import Path

import pytest

from trust_safety.config.models import ModerationConfig, ObfuscationConfig
from trust_safety.location import LocationObfuscator
from trust_safety.logging.context import clear_log_context
from trust_safety.moderation import ContentSafetyFilter

FIXTURES_DIR = Path(__file__).parent / "fixtures"

ENV_VARS = ("LOG_LEVEL", "ENVIRONMENT", "SAFETY_MAX_OFFSET_DEGREES", "SAFETY_CONFIG_PATH")


@pytest.fixture
def fixtures_dir():
    """Directory holding YAML configuration fixtures."""
    return FIXTURES_DIR


@pytest.fixture
def mock_env_vars(monkeypatch, tmp_path):
    """Isolate tests from the caller's environment and working directory.

    Clears every variable the core reads and switches into an empty directory
    so no trust_safety.yaml is picked up by the fallback search.
    """
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


@pytest.fixture
def content_filter():
    """ContentSafetyFilter with the built-in term dictionary."""
    return ContentSafetyFilter(ModerationConfig())


@pytest.fixture
def obfuscator():
    """LocationObfuscator with the default 0.003 degree radius."""
    return LocationObfuscator(ObfuscationConfig())


@pytest.fixture(autouse=True)
def clean_log_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def restore_root_logger():
    """Restore root logger handlers and level changed by configure_logging()."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
