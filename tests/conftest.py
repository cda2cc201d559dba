"""Pytest configuration for phased testing.

Tests are organized by phase:
- f1: store adapter and configuration
- f2: accounts (signup, login, password hashing, welcome email)
- f3: profile aggregation and saved careers
- f4: AI career advisor proxy
Future phase tests are automatically skipped.
"""

import pytest
from fastapi.testclient import TestClient

from newgen.config.app_config import AppConfig, DatabaseConfig, EmailConfig, clear_config_cache
from newgen.db.database import init_db
from newgen.web.dependencies import reset_collaborators

# Current implementation phase
CURRENT_PHASE = 4


def pytest_collection_modifyitems(config, items):
    """Skip tests from phases that haven't been implemented yet."""
    for item in items:
        # Extract phase from path (tests/f2/... -> 2)
        parts = item.fspath.strpath.split("/")
        for part in parts:
            if part.startswith("f") and part[1:].isdigit():
                test_phase = int(part[1:])
                if test_phase > CURRENT_PHASE:
                    item.add_marker(
                        pytest.mark.skip(
                            reason=f"Phase F{test_phase} not yet implemented (current: F{CURRENT_PHASE})"
                        )
                    )
                break


@pytest.fixture(autouse=True)
def _fresh_config():
    """Never leak cached config or collaborators between tests."""
    clear_config_cache()
    reset_collaborators()
    yield
    clear_config_cache()
    reset_collaborators()


@pytest.fixture
def db_path(tmp_path):
    """Initialize an empty database in a temp directory."""
    path = tmp_path / "db" / "newgen.db"
    init_db(path)
    return path


@pytest.fixture
def app_config(tmp_path) -> AppConfig:
    """Config pointing at a temp database with email disabled."""
    return AppConfig(
        database=DatabaseConfig(path=str(tmp_path / "db" / "newgen.db")),
        email=EmailConfig(enabled=False),
    )


@pytest.fixture
def app(app_config):
    """Application built from the isolated config."""
    from newgen.web.api import create_app

    return create_app(app_config)


@pytest.fixture
def client(app):
    """Test client; entering it runs the lifespan (schema creation)."""
    with TestClient(app) as test_client:
        yield test_client
