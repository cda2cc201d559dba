"""Configuration package for the Newgen backend."""

from newgen.config.app_config import (
    AppConfig,
    DatabaseConfig,
    EmailConfig,
    LLMProviderConfig,
    SecurityConfig,
    ServerConfig,
    clear_config_cache,
    load_app_config,
)

__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "EmailConfig",
    "LLMProviderConfig",
    "SecurityConfig",
    "ServerConfig",
    "clear_config_cache",
    "load_app_config",
]
