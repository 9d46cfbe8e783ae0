#!/usr/bin/env python3
"""Validate a trust and safety configuration file before deploying it.

Usage:
    python verify_config.py                       # checks trust_safety.example.yaml
    python verify_config.py config/trust_safety.yaml
"""

import sys
from pathlib import Path

from trust_safety.config import AppConfig, validate_config_file
from trust_safety.config.loader import read_config_file
from trust_safety.config.validators import check_for_warnings
from trust_safety.moderation import ContentSafetyFilter


def verify_config(config_file: Path) -> bool:
    """Validate config_file and print a short summary of what it configures."""
    if not config_file.exists():
        print(f"✗ {config_file} not found")
        return False

    if not validate_config_file(config_file):
        return False

    config_dict = read_config_file(config_file)
    for message in check_for_warnings(config_dict):
        print(f"  ! {message}")

    config = AppConfig.model_validate(config_dict)
    content_filter = ContentSafetyFilter(config.moderation)
    print(f"  - {len(content_filter.terms)} prohibited terms")
    print(f"  - {len(config.moderation.leetspeak_map)} leetspeak substitutions")
    print(f"  - Rejection messages: {', '.join(sorted(config.moderation.rejection_messages))}")
    print(f"  - Max offset: {config.obfuscation.max_offset_degrees} degrees")
    return True


if __name__ == "__main__":
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("trust_safety.example.yaml")
    success = verify_config(path)
    sys.exit(0 if success else 1)
