"""Tests for app configuration (F1).

Tests defaults, YAML loading and environment overrides.
"""

import pytest
from structlog.testing import capture_logs

from newgen.config.app_config import (
    AppConfig,
    EmailConfig,
    LLMProviderConfig,
    load_app_config,
)

ENV_VARS = [
    "DB_PATH",
    "BIND_HOST",
    "PORT",
    "LLM_BASE_URL",
    "LLM_MODEL",
    "SMTP_HOST",
    "SMTP_PORT",
    "SMTP_USER",
    "SMTP_PASSWORD",
    "SMTP_FROM",
    "SMTP_FROM_NAME",
    "OPENAI_API_KEY",
]


@pytest.fixture
def clean_env(tmp_path, monkeypatch):
    """No config file and no overriding environment variables."""
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("NEWGEN_CONFIG", str(tmp_path / "missing.yaml"))
    return monkeypatch


class TestDefaults:
    """Tests for built-in defaults."""

    def test_defaults_without_file(self, clean_env):
        config = load_app_config()

        assert isinstance(config, AppConfig)
        assert config.database.path == "db/newgen.db"
        assert config.server.port == 5000
        assert config.llm.base_url == "https://openrouter.ai/api/v1"
        assert config.llm.model == "openai/gpt-4o"
        assert config.llm.max_tokens == 500
        assert config.email.sender_name == "Newgen Helpdesk"
        assert config.security.password_scheme == "pbkdf2_sha256"

    def test_default_system_prompt(self, clean_env):
        config = load_app_config()
        assert config.llm.system_prompt == "You are a helpful career advisor for students."

    def test_config_is_cached(self, clean_env):
        assert load_app_config() is load_app_config()

    def test_force_reload(self, clean_env):
        first = load_app_config()
        clean_env.setenv("PORT", "8080")
        assert load_app_config().server.port == 5000
        assert load_app_config(force_reload=True).server.port == 8080
        assert first.server.port == 5000


class TestYamlLoading:
    """Tests for loading the YAML file."""

    def test_yaml_overrides_defaults(self, clean_env, tmp_path):
        config_file = tmp_path / "app_config.yaml"
        config_file.write_text(
            """
database:
  path: /var/lib/newgen/prod.db
llm:
  model: openai/gpt-4o-mini
  timeout: 10
email:
  enabled: false
"""
        )
        clean_env.setenv("NEWGEN_CONFIG", str(config_file))

        config = load_app_config()

        assert config.database.path == "/var/lib/newgen/prod.db"
        assert config.llm.model == "openai/gpt-4o-mini"
        assert config.llm.timeout == 10
        # Untouched keys keep defaults
        assert config.llm.max_tokens == 500
        assert config.email.enabled is False

    def test_empty_yaml_gives_defaults(self, clean_env, tmp_path):
        config_file = tmp_path / "app_config.yaml"
        config_file.write_text("")
        clean_env.setenv("NEWGEN_CONFIG", str(config_file))

        assert load_app_config().server.port == 5000

    def test_non_mapping_root_gives_defaults(self, clean_env, tmp_path):
        config_file = tmp_path / "app_config.yaml"
        config_file.write_text("- just\n- a list\n")
        clean_env.setenv("NEWGEN_CONFIG", str(config_file))

        assert load_app_config().server.port == 5000

    def test_unknown_key_in_known_section_ignored(self, clean_env, tmp_path):
        config_file = tmp_path / "app_config.yaml"
        config_file.write_text("server:\n  port: 7000\n  workers: 4\n")
        clean_env.setenv("NEWGEN_CONFIG", str(config_file))

        with capture_logs() as logs:
            config = load_app_config()

        assert config.server.port == 7000
        entry = next(e for e in logs if e["event"] == "unknown_config_key")
        assert entry["section"] == "server"
        assert entry["key"] == "workers"

    def test_unknown_section_ignored(self, clean_env, tmp_path):
        config_file = tmp_path / "app_config.yaml"
        config_file.write_text("cache:\n  ttl: 60\n")
        clean_env.setenv("NEWGEN_CONFIG", str(config_file))

        assert load_app_config().database.path == "db/newgen.db"


class TestEnvOverrides:
    """Tests for environment variable overrides."""

    def test_env_beats_yaml(self, clean_env, tmp_path):
        config_file = tmp_path / "app_config.yaml"
        config_file.write_text("server:\n  port: 7000\n")
        clean_env.setenv("NEWGEN_CONFIG", str(config_file))
        clean_env.setenv("PORT", "9000")

        assert load_app_config().server.port == 9000

    def test_smtp_settings_from_env(self, clean_env):
        clean_env.setenv("SMTP_USER", "helpdesk@example.com")
        clean_env.setenv("SMTP_PASSWORD", "app-password")
        clean_env.setenv("SMTP_FROM_NAME", "Helpdesk")

        email = load_app_config().email

        assert email.username == "helpdesk@example.com"
        assert email.password == "app-password"
        assert email.sender_name == "Helpdesk"
        assert email.is_configured is True

    def test_invalid_int_override_ignored(self, clean_env):
        clean_env.setenv("PORT", "not-a-number")
        assert load_app_config().server.port == 5000

    def test_api_key_read_from_named_env(self, clean_env):
        clean_env.setenv("OPENAI_API_KEY", "sk-test")
        assert load_app_config().llm.get_api_key() == "sk-test"


class TestEmailConfig:
    """Tests for EmailConfig helpers."""

    def test_not_configured_without_credentials(self):
        assert EmailConfig().is_configured is False

    def test_from_address_falls_back_to_username(self):
        email = EmailConfig(username="me@example.com", password="x")
        assert email.from_address == "me@example.com"
        assert email.is_configured is True

    def test_explicit_sender_address(self):
        email = EmailConfig(username="login", password="x", sender_address="noreply@example.com")
        assert email.from_address == "noreply@example.com"


class TestLLMProviderConfig:
    """Tests for LLMProviderConfig."""

    def test_no_env_name_means_no_key(self):
        assert LLMProviderConfig(api_key_env=None).get_api_key() is None
