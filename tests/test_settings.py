"""Tests for settings loading and validation."""

from __future__ import annotations

import pytest

from vendfa.app.errors import InvalidConfigError, MissingConfigError
from vendfa.app.settings import DisplayConfig, Settings, load_settings, validate_settings


@pytest.fixture
def config_dir(tmp_path):
    """Config directory with a base.yaml."""
    (tmp_path / "base.yaml").write_text(
        "app:\n"
        "  name: vendfa-test\n"
        "logging:\n"
        "  level: INFO\n"
        "  json: false\n"
        "display:\n"
        "  currency_symbol: \"₹\"\n"
        "  max_log_entries: 10\n",
        encoding="utf-8",
    )
    return tmp_path


@pytest.fixture
def no_dotenv(tmp_path):
    return tmp_path / "missing.env"


class TestLoadSettings:
    """YAML, .env and environment precedence."""

    def test_defaults_without_files(self, tmp_path, clean_env, no_dotenv):
        settings = load_settings(config_dir=tmp_path, dotenv_path=no_dotenv)

        assert settings == Settings()

    def test_base_yaml(self, config_dir, clean_env, no_dotenv):
        settings = load_settings(config_dir=config_dir, dotenv_path=no_dotenv)

        assert settings.name == "vendfa-test"
        assert settings.log_level == "INFO"
        assert settings.display.max_log_entries == 10
        assert settings.display.newest_first is True

    def test_env_yaml_overrides_base(self, config_dir, clean_env, no_dotenv):
        (config_dir / "prod.yaml").write_text(
            "logging:\n  level: WARNING\n  json: true\n"
            "display:\n  max_log_entries: 3\n",
            encoding="utf-8",
        )

        settings = load_settings(config_dir=config_dir, env="prod", dotenv_path=no_dotenv)

        assert settings.log_level == "WARNING"
        assert settings.json_logs is True
        assert settings.display.max_log_entries == 3
        assert settings.display.currency_symbol == "₹"

    def test_environment_overrides_yaml(self, config_dir, clean_env, no_dotenv):
        clean_env.setenv("VENDFA_LOG_LEVEL", "DEBUG")
        clean_env.setenv("VENDFA_JSON_LOGS", "yes")
        clean_env.setenv("VENDFA_CURRENCY", "$")
        clean_env.setenv("VENDFA_LOG_FILE", "logs/test.jsonl")

        settings = load_settings(config_dir=config_dir, dotenv_path=no_dotenv)

        assert settings.log_level == "DEBUG"
        assert settings.json_logs is True
        assert settings.display.currency_symbol == "$"
        assert settings.log_file == "logs/test.jsonl"

    def test_dotenv_file(self, config_dir, clean_env, tmp_path):
        dotenv = tmp_path / ".env"
        dotenv.write_text("VENDFA_LOG_LEVEL=ERROR\n", encoding="utf-8")

        settings = load_settings(config_dir=config_dir, dotenv_path=dotenv)

        assert settings.log_level == "ERROR"

    def test_unknown_display_key(self, config_dir, clean_env, no_dotenv):
        (config_dir / "dev.yaml").write_text(
            "display:\n  colour: blue\n", encoding="utf-8",
        )

        with pytest.raises(InvalidConfigError) as exc_info:
            load_settings(config_dir=config_dir, dotenv_path=no_dotenv)

        assert exc_info.value.key == "display.colour"

    def test_missing_config_dir(self, tmp_path, clean_env, no_dotenv):
        with pytest.raises(MissingConfigError):
            load_settings(config_dir=tmp_path / "nope", dotenv_path=no_dotenv)

    def test_env_variable_selects_environment(self, config_dir, clean_env, no_dotenv):
        (config_dir / "prod.yaml").write_text(
            "logging:\n  json: true\ndisplay:\n  max_log_entries: 20\n",
            encoding="utf-8",
        )
        clean_env.setenv("VENDFA_ENV", "prod")

        settings = load_settings(config_dir=config_dir, dotenv_path=no_dotenv)

        assert settings.json_logs is True
        assert settings.display.max_log_entries == 20

    def test_explicit_env_beats_variable(self, config_dir, clean_env, no_dotenv):
        (config_dir / "prod.yaml").write_text("display:\n  max_log_entries: 20\n", encoding="utf-8")
        clean_env.setenv("VENDFA_ENV", "prod")

        settings = load_settings(config_dir=config_dir, env="dev", dotenv_path=no_dotenv)

        assert settings.display.max_log_entries == 10


class TestYamlTypes:
    """Mistyped YAML values are configuration errors."""

    @pytest.mark.parametrize("yaml_text,key", [
        ("display:\n  max_log_entries: \"20\"\n", "display.max_log_entries"),
        ("display:\n  max_log_entries: true\n", "display.max_log_entries"),
        ("display:\n  newest_first: \"no\"\n", "display.newest_first"),
        ("display:\n  currency_symbol: 5\n", "display.currency_symbol"),
        ("logging:\n  json: \"no\"\n", "logging.json"),
        ("logging:\n  level: 10\n", "logging.level"),
    ])
    def test_wrong_type(self, config_dir, clean_env, no_dotenv, yaml_text, key):
        (config_dir / "dev.yaml").write_text(yaml_text, encoding="utf-8")

        with pytest.raises(InvalidConfigError) as exc_info:
            load_settings(config_dir=config_dir, dotenv_path=no_dotenv)

        assert exc_info.value.key == key


class TestValidateSettings:
    def test_defaults_are_valid(self):
        assert validate_settings(Settings()) == []

    def test_unknown_log_level(self):
        issues = validate_settings(Settings(log_level="LOUD"))

        assert len(issues) == 1
        assert issues[0].startswith("ERROR")

    def test_empty_currency_warns(self):
        issues = validate_settings(Settings(display=DisplayConfig(currency_symbol="")))

        assert issues == ["WARNING: Empty currency symbol, amounts will render as bare numbers"]

    def test_negative_max_entries(self):
        issues = validate_settings(Settings(display=DisplayConfig(max_log_entries=-1)))

        assert any(issue.startswith("ERROR") for issue in issues)

    def test_non_integer_max_entries(self):
        issues = validate_settings(Settings(display=DisplayConfig(max_log_entries="20")))

        assert issues == ["ERROR: display.max_log_entries must be an integer, got '20'"]

    def test_non_string_log_level(self):
        issues = validate_settings(Settings(log_level=10))

        assert issues[0].startswith("ERROR: Unknown log level")
