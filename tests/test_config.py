"""Tests for configuration loading and validation."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from trust_safety.config import (
    DEFAULT_LEETSPEAK_MAP,
    DEFAULT_PROHIBITED_TERMS,
    AppConfig,
    ConfigurationError,
    ModerationConfig,
    ObfuscationConfig,
    load_config,
    load_environment_config,
    validate_config_file,
)
from trust_safety.config.validators import check_for_warnings

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class TestConfigurationLoading:
    """Test configuration loading from YAML files."""

    def test_load_valid_config(self, mock_env_vars):
        """Test loading a valid configuration file."""
        app_config, env_config = load_config(FIXTURES_DIR / "valid_config.yaml")

        assert app_config.obfuscation.max_offset_degrees == 0.002
        assert app_config.moderation.prohibited_terms == ("heil hitler", "nazi", "porn")
        assert app_config.moderation.leetspeak_map == DEFAULT_LEETSPEAK_MAP
        assert list(app_config.moderation.leetspeak_map) == list(DEFAULT_LEETSPEAK_MAP)
        assert app_config.moderation.rejection_messages["en"] == "Please use respectful language."
        assert app_config.logging.level == "DEBUG"
        assert app_config.logging.format == "json"
        assert env_config.environment == "local"

    def test_load_minimal_config(self, mock_env_vars):
        """Test that omitted sections fall back to defaults."""
        app_config, _ = load_config(FIXTURES_DIR / "minimal_config.yaml")

        assert app_config.obfuscation.max_offset_degrees == 0.004
        assert app_config.moderation.prohibited_terms == DEFAULT_PROHIBITED_TERMS
        assert app_config.logging.level == "INFO"
        assert app_config.logging.format == "key-value"

    def test_no_config_file_uses_defaults(self, mock_env_vars):
        """Test that built-in defaults apply when no file is found."""
        app_config, _ = load_config()

        assert app_config == AppConfig()
        assert app_config.obfuscation.max_offset_degrees == 0.003

    def test_default_location_is_found(self, mock_env_vars, tmp_path):
        """Test that trust_safety.yaml in the working directory is used."""
        (tmp_path / "trust_safety.yaml").write_text(
            "obfuscation:\n  max_offset_degrees: 0.0025\n", encoding="utf-8"
        )

        app_config, _ = load_config()

        assert app_config.obfuscation.max_offset_degrees == 0.0025

    def test_config_path_from_environment(self, mock_env_vars):
        """Test that SAFETY_CONFIG_PATH selects the file."""
        mock_env_vars.setenv("SAFETY_CONFIG_PATH", str(FIXTURES_DIR / "minimal_config.yaml"))

        app_config, env_config = load_config()

        assert app_config.obfuscation.max_offset_degrees == 0.004
        assert env_config.config_path == FIXTURES_DIR / "minimal_config.yaml"

    def test_radius_override_from_environment(self, mock_env_vars):
        """Test that SAFETY_MAX_OFFSET_DEGREES overrides the file."""
        mock_env_vars.setenv("SAFETY_MAX_OFFSET_DEGREES", "0.005")

        app_config, env_config = load_config(FIXTURES_DIR / "valid_config.yaml")

        assert app_config.obfuscation.max_offset_degrees == 0.005
        assert env_config.max_offset_degrees == 0.005
        # Other sections are untouched
        assert app_config.moderation.prohibited_terms == ("heil hitler", "nazi", "porn")

    @pytest.mark.parametrize("section", ["fast", "[0.002]", "0.002"])
    def test_radius_override_with_malformed_section(self, mock_env_vars, tmp_path, section):
        """Test that a non-mapping obfuscation section still reports a ConfigurationError."""
        mock_env_vars.setenv("SAFETY_MAX_OFFSET_DEGREES", "0.002")
        config_file = tmp_path / "scalar_section.yaml"
        config_file.write_text(f"obfuscation: {section}\n", encoding="utf-8")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(config_file)

        assert any("obfuscation" in e for e in exc_info.value.errors)

    def test_radius_override_with_empty_section(self, mock_env_vars, tmp_path):
        """Test that an empty obfuscation section takes the override."""
        mock_env_vars.setenv("SAFETY_MAX_OFFSET_DEGREES", "0.002")
        config_file = tmp_path / "empty_section.yaml"
        config_file.write_text("obfuscation:\n", encoding="utf-8")

        app_config, _ = load_config(config_file)

        assert app_config.obfuscation.max_offset_degrees == 0.002

    def test_unquoted_leetspeak_keys(self, mock_env_vars):
        """Test that YAML integer keys are accepted as characters."""
        app_config, _ = load_config(FIXTURES_DIR / "unquoted_leetspeak_config.yaml")

        assert app_config.moderation.leetspeak_map == {"1": "i", "5": "s"}

    def test_config_file_not_found(self, mock_env_vars):
        """Test error when an explicit config file doesn't exist."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(Path("nonexistent.yaml"))

        assert "not found" in str(exc_info.value)

    def test_config_path_from_environment_not_found(self, mock_env_vars):
        """Test that a missing SAFETY_CONFIG_PATH file is an error, not a fallback."""
        mock_env_vars.setenv("SAFETY_CONFIG_PATH", "missing/trust_safety.yaml")

        with pytest.raises(ConfigurationError):
            load_config()

    def test_invalid_config(self, mock_env_vars):
        """Test that all validation errors are reported with field paths."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(FIXTURES_DIR / "invalid_config.yaml")

        error = exc_info.value
        assert error.message == "Configuration validation failed"
        assert any(e.startswith("obfuscation -> max_offset_degrees") for e in error.errors)
        assert any(e.startswith("moderation -> leetspeak_map") for e in error.errors)
        assert "Validation Errors:" in str(error)
        assert "Suggestions:" in str(error)

    def test_unknown_field(self, mock_env_vars):
        """Test that unknown keys are rejected."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(FIXTURES_DIR / "unknown_field_config.yaml")

        assert "Unknown field: obfuscation -> jitter" in exc_info.value.errors

    def test_empty_config_file(self, mock_env_vars, tmp_path):
        """Test that an explicit empty file is an error."""
        empty_file = tmp_path / "empty.yaml"
        empty_file.write_text("", encoding="utf-8")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(empty_file)

        assert "empty" in str(exc_info.value)

    def test_malformed_yaml(self, mock_env_vars, tmp_path):
        """Test that YAML syntax errors become ConfigurationError."""
        broken_file = tmp_path / "broken.yaml"
        broken_file.write_text("moderation: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(broken_file)

        assert "Failed to parse YAML" in str(exc_info.value)

    def test_non_mapping_yaml(self, mock_env_vars, tmp_path):
        """Test that a top-level list is rejected."""
        list_file = tmp_path / "list.yaml"
        list_file.write_text("- fuck\n- shit\n", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            load_config(list_file)

    def test_duplicate_terms_warn(self, mock_env_vars):
        """Test that duplicate terms emit a warning and are deduplicated."""
        with pytest.warns(UserWarning, match="Duplicate terms"):
            app_config, _ = load_config(FIXTURES_DIR / "duplicate_terms_config.yaml")

        assert app_config.moderation.prohibited_terms == ("porn", "nackt")

    def test_config_is_frozen(self, mock_env_vars):
        """Test that loaded configuration cannot be mutated."""
        app_config, _ = load_config(FIXTURES_DIR / "valid_config.yaml")

        with pytest.raises(ValidationError):
            app_config.obfuscation.max_offset_degrees = 1.0


class TestEnvironmentConfig:
    """Tests for environment variable loading."""

    def test_defaults(self, mock_env_vars):
        """Test that all variables are optional."""
        env_config = load_environment_config()

        assert env_config.log_level is None
        assert env_config.environment == "local"
        assert env_config.max_offset_degrees is None
        assert env_config.config_path is None

    def test_log_level_is_uppercased(self, mock_env_vars):
        """Test that LOG_LEVEL is normalized to uppercase."""
        mock_env_vars.setenv("LOG_LEVEL", "debug")
        mock_env_vars.setenv("ENVIRONMENT", "staging")

        env_config = load_environment_config()

        assert env_config.log_level == "DEBUG"
        assert env_config.environment == "staging"

    @pytest.mark.parametrize("value", ["abc", "0", "-0.003", "inf", "nan"])
    def test_invalid_radius(self, mock_env_vars, value):
        """Test that a malformed SAFETY_MAX_OFFSET_DEGREES is rejected."""
        mock_env_vars.setenv("SAFETY_MAX_OFFSET_DEGREES", value)

        with pytest.raises(ConfigurationError) as exc_info:
            load_environment_config()

        assert "SAFETY_MAX_OFFSET_DEGREES" in exc_info.value.errors[0]

    def test_multiple_errors_reported_together(self, mock_env_vars):
        """Test that every invalid variable is listed."""
        mock_env_vars.setenv("LOG_LEVEL", "LOUD")
        mock_env_vars.setenv("SAFETY_MAX_OFFSET_DEGREES", "far")

        with pytest.raises(ConfigurationError) as exc_info:
            load_environment_config()

        assert len(exc_info.value.errors) == 2


class TestModels:
    """Tests for configuration model validation."""

    @pytest.mark.parametrize("radius", [0, -0.001, float("inf"), float("nan")])
    def test_invalid_radius(self, radius):
        """Test that the radius must be positive and finite."""
        with pytest.raises(ValidationError):
            ObfuscationConfig(max_offset_degrees=radius)

    def test_terms_are_canonicalized(self):
        """Test that terms are stripped, lowercased, deduplicated in order."""
        config = ModerationConfig(prohibited_terms=["  Sieg   Heil", "NAZI", "nazi", "", "porn"])

        assert config.prohibited_terms == ("sieg heil", "nazi", "porn")

    def test_terms_cannot_be_empty(self):
        """Test that an empty dictionary is rejected."""
        with pytest.raises(ValidationError):
            ModerationConfig(prohibited_terms=[])

    @pytest.mark.parametrize(
        "mapping",
        [
            {"0": "oo"},
            {"00": "o"},
            {"a": "o"},
            {" ": "o"},
            {"0": "5"},
            {"0": "é"},
        ],
    )
    def test_invalid_leetspeak_map(self, mapping):
        """Test that substitutions must map one non-letter to one supported letter."""
        with pytest.raises(ValidationError):
            ModerationConfig(leetspeak_map=mapping)

    def test_leetspeak_target_lowercased(self):
        """Test that uppercase targets are lowercased."""
        assert ModerationConfig(leetspeak_map={"0": "O"}).leetspeak_map == {"0": "o"}

    def test_rejection_messages_need_content(self):
        """Test that blank or missing rejection messages are rejected."""
        with pytest.raises(ValidationError):
            ModerationConfig(rejection_messages={"de": "   "})
        with pytest.raises(ValidationError):
            ModerationConfig(rejection_messages={})

    def test_defaults_are_independent_copies(self):
        """Test that default mappings are not shared between instances."""
        first = ModerationConfig()
        second = ModerationConfig()

        assert first.leetspeak_map is not second.leetspeak_map
        assert first.leetspeak_map is not DEFAULT_LEETSPEAK_MAP

    @pytest.mark.parametrize("field", ["leetspeak_map", "rejection_messages"])
    def test_mappings_are_read_only(self, field):
        """Test that a shared config's mappings cannot be changed in place."""
        config = ModerationConfig(leetspeak_map={"0": "o"}, rejection_messages={"en": "No."})
        mapping = getattr(config, field)

        with pytest.raises(TypeError):
            mapping["9"] = "g"

        assert "9" not in getattr(config, field)

    def test_mappings_dump_as_dicts(self):
        """Test that model_dump still yields plain dicts for revalidation."""
        dumped = ModerationConfig().model_dump()

        assert dumped["leetspeak_map"] == DEFAULT_LEETSPEAK_MAP
        assert type(dumped["leetspeak_map"]) is dict
        assert type(dumped["rejection_messages"]) is dict
        assert ModerationConfig.model_validate(dumped) == ModerationConfig()


class TestWarnings:
    """Tests for check_for_warnings."""

    def test_no_warnings_for_defaults(self):
        """Test that an empty config produces no warnings."""
        assert check_for_warnings({}) == []

    def test_small_radius(self):
        """Test warning for a radius that barely moves the point."""
        warnings = check_for_warnings({"obfuscation": {"max_offset_degrees": 0.0001}})
        assert any("Small max_offset_degrees" in w for w in warnings)

    def test_large_radius(self):
        """Test warning for a radius that moves the point too far."""
        warnings = check_for_warnings({"obfuscation": {"max_offset_degrees": 0.05}})
        assert any("Large max_offset_degrees" in w for w in warnings)

    def test_unmatchable_term(self):
        """Test warning for terms containing characters normalization removes."""
        warnings = check_for_warnings({"moderation": {"prohibited_terms": ["a$$hole", "f*ck"]}})

        assert len(warnings) == 2
        assert all("can never match" in w for w in warnings)

    def test_tripled_letter_term(self):
        """Test warning for terms that contain a run normalization collapses."""
        warnings = check_for_warnings({"moderation": {"prohibited_terms": ["fuuuck"]}})

        assert warnings == [
            "Term 'fuuuck' repeats a character three or more times and can never "
            "match normalized text"
        ]

    def test_ignores_malformed_sections(self):
        """Test that malformed sections are left to model validation."""
        assert check_for_warnings({"obfuscation": "wide", "moderation": ["porn"]}) == []


class TestValidateConfigFile:
    """Tests for validate_config_file."""

    def test_valid_file(self, capsys):
        """Test that a valid file passes."""
        assert validate_config_file(FIXTURES_DIR / "valid_config.yaml") is True
        assert "is valid" in capsys.readouterr().out

    def test_invalid_file(self, capsys):
        """Test that an invalid file fails with details."""
        assert validate_config_file(FIXTURES_DIR / "invalid_config.yaml") is False
        assert "max_offset_degrees" in capsys.readouterr().out

    def test_missing_file(self, tmp_path, capsys):
        """Test that a missing file fails."""
        assert validate_config_file(tmp_path / "missing.yaml") is False
        assert "Failed to read" in capsys.readouterr().out
