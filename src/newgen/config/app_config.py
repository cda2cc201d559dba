"""Application configuration loader.

Loads centralized configuration from config/app_config.yaml (path
overridable with NEWGEN_CONFIG), then applies environment overrides.
Secrets (SMTP password, provider API key) are only ever read from the
environment or the YAML file, never embedded in code.

Usage:
    from newgen.config.app_config import load_app_config

    config = load_app_config()
    print(config.database.path)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger(__name__)

# Config file path (relative to project root)
CONFIG_FILE = Path("config/app_config.yaml")
CONFIG_ENV_VAR = "NEWGEN_CONFIG"

DEFAULT_SYSTEM_PROMPT = "You are a helpful career advisor for students."


@dataclass
class DatabaseConfig:
    """SQLite store settings."""

    path: str = "db/newgen.db"
    timeout: float = 5.0


@dataclass
class ServerConfig:
    """HTTP listener settings."""

    host: str = "0.0.0.0"
    port: int = 5000


@dataclass
class LLMProviderConfig:
    """Chat-completion provider used by the /chat proxy."""

    base_url: str = "https://openrouter.ai/api/v1"
    model: str = "openai/gpt-4o"
    api_key_env: str | None = "OPENAI_API_KEY"
    max_tokens: int = 500
    timeout: int = 30
    system_prompt: str = DEFAULT_SYSTEM_PROMPT

    def get_api_key(self) -> str | None:
        """Get API key from environment variable."""
        if self.api_key_env:
            return os.environ.get(self.api_key_env)
        return None


@dataclass
class EmailConfig:
    """Outbound SMTP account for the welcome email."""

    host: str = "smtp.gmail.com"
    port: int = 587
    username: str | None = None
    password: str | None = None
    sender_address: str | None = None
    sender_name: str = "Newgen Helpdesk"
    use_tls: bool = True
    enabled: bool = True

    @property
    def is_configured(self) -> bool:
        """True when credentials and a sender identity are known."""
        return bool(self.username and self.password and self.from_address)

    @property
    def from_address(self) -> str | None:
        return self.sender_address or self.username


@dataclass
class SecurityConfig:
    """Password storage settings."""

    password_scheme: str = "pbkdf2_sha256"


@dataclass
class AppConfig:
    """Application-wide configuration."""

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    llm: LLMProviderConfig = field(default_factory=LLMProviderConfig)
    email: EmailConfig = field(default_factory=EmailConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)


# Module-level cache
_cached_config: AppConfig | None = None

# (section, key, env var, converter)
ENV_OVERRIDES: list[tuple[str, str, str, type]] = [
    ("database", "path", "DB_PATH", str),
    ("server", "host", "BIND_HOST", str),
    ("server", "port", "PORT", int),
    ("llm", "base_url", "LLM_BASE_URL", str),
    ("llm", "model", "LLM_MODEL", str),
    ("email", "host", "SMTP_HOST", str),
    ("email", "port", "SMTP_PORT", int),
    ("email", "username", "SMTP_USER", str),
    ("email", "password", "SMTP_PASSWORD", str),
    ("email", "sender_address", "SMTP_FROM", str),
    ("email", "sender_name", "SMTP_FROM_NAME", str),
]


def _get_defaults() -> dict[str, Any]:
    """Get default configuration values."""
    return {
        "database": {"path": "db/newgen.db", "timeout": 5.0},
        "server": {"host": "0.0.0.0", "port": 5000},
        "llm": {
            "base_url": "https://openrouter.ai/api/v1",
            "model": "openai/gpt-4o",
            "api_key_env": "OPENAI_API_KEY",
            "max_tokens": 500,
            "timeout": 30,
            "system_prompt": DEFAULT_SYSTEM_PROMPT,
        },
        "email": {
            "host": "smtp.gmail.com",
            "port": 587,
            "username": None,
            "password": None,
            "sender_address": None,
            "sender_name": "Newgen Helpdesk",
            "use_tls": True,
            "enabled": True,
        },
        "security": {"password_scheme": "pbkdf2_sha256"},
    }


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge YAML sections over the defaults, one level deep."""
    result = {section: dict(values) for section, values in base.items()}
    if not isinstance(override, dict):
        logger.warning("invalid_config_root", found=type(override).__name__)
        return result

    for section, values in override.items():
        if not (isinstance(values, dict) and section in result):
            logger.warning("unknown_config_section", section=section)
            continue
        for key, value in values.items():
            # Defaults name every accepted key
            if key in result[section]:
                result[section][key] = value
            else:
                logger.warning("unknown_config_key", section=section, key=key)
    return result


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variables on top of file/default values."""
    for section, key, env_var, convert in ENV_OVERRIDES:
        raw = os.environ.get(env_var)
        if raw is None or raw == "":
            continue
        try:
            data[section][key] = convert(raw)
        except ValueError:
            logger.warning("invalid_env_override", env_var=env_var)
    return data


def _parse_config(data: dict[str, Any]) -> AppConfig:
    """Parse configuration dictionary into AppConfig object."""
    return AppConfig(
        database=DatabaseConfig(**data["database"]),
        server=ServerConfig(**data["server"]),
        llm=LLMProviderConfig(**data["llm"]),
        email=EmailConfig(**data["email"]),
        security=SecurityConfig(**data["security"]),
    )


def get_config_path() -> Path:
    """Resolve the YAML config location."""
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override) if override else CONFIG_FILE


def load_app_config(force_reload: bool = False) -> AppConfig:
    """Load application config: defaults, then YAML, then environment.

    Args:
        force_reload: If True, ignore cached config and reload from file.

    Returns:
        AppConfig object with all settings.
    """
    global _cached_config

    if _cached_config is not None and not force_reload:
        return _cached_config

    data = _get_defaults()
    config_path = get_config_path()

    if config_path.exists():
        logger.debug("loading_app_config", source=str(config_path))
        file_data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
        data = _merge(data, file_data)
    else:
        logger.debug("using_default_config", missing=str(config_path))

    _cached_config = _parse_config(_apply_env_overrides(data))
    return _cached_config


def clear_config_cache() -> None:
    """Clear the configuration cache.

    Useful for testing or when config is modified at runtime.
    """
    global _cached_config
    _cached_config = None
