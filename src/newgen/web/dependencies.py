"""Shared collaborators for route handlers.

Each getter builds its object lazily from the application config and keeps
it for the life of the process. Tests replace them through
app.dependency_overrides or the reset_* helpers.
"""

from __future__ import annotations

from newgen.config.app_config import AppConfig, load_app_config
from newgen.core.notifier import Mailer, SmtpMailer
from newgen.core.passwords import PasswordHasher, get_hasher
from newgen.llm.client import LLMClient, LLMConfig

# Config the app was created with (None means load_app_config())
_app_config: AppConfig | None = None

_llm_client: LLMClient | None = None
_password_hasher: PasswordHasher | None = None


def set_app_config(config: AppConfig | None) -> None:
    """Pin the config used by every getter and drop built collaborators."""
    global _app_config
    _app_config = config
    reset_collaborators()


def get_app_config() -> AppConfig:
    """Get the active application config."""
    return _app_config or load_app_config()


def get_llm_client() -> LLMClient:
    """Get the shared LLM client instance."""
    global _llm_client
    if _llm_client is None:
        _llm_client = LLMClient(LLMConfig.from_provider(get_app_config().llm))
    return _llm_client


def get_password_hasher() -> PasswordHasher:
    """Get the configured password hasher."""
    global _password_hasher
    if _password_hasher is None:
        _password_hasher = get_hasher(get_app_config().security.password_scheme)
    return _password_hasher


def get_mailer() -> Mailer | None:
    """Get a mailer, or None when email is disabled."""
    email = get_app_config().email
    if not email.enabled:
        return None
    return SmtpMailer(email)


def reset_collaborators() -> None:
    """Drop cached collaborators (for testing)."""
    global _llm_client, _password_hasher
    _llm_client = None
    _password_hasher = None
