"""
Integration test fixtures for Momentum.

Provides fixtures specific to integration testing:
- FastAPI test clients
- Database isolation for voids and sessions
- Auth switched off (X-User-Id) or on (real sessions)
"""

from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest


try:
    from fastapi.testclient import TestClient  # noqa: F401

    HAS_FASTAPI = True
except ImportError:
    HAS_FASTAPI = False


requires_fastapi = pytest.mark.skipif(not HAS_FASTAPI, reason="FastAPI not installed")


# ─────────────────────────────────────────────────────────────────────────────
# Path Constants
# ─────────────────────────────────────────────────────────────────────────────

PROJECT_ROOT = Path(__file__).parent.parent.parent

# Matches LOGIN_KEY in test_api.py
TEST_LOGIN_KEY = "test-login-key"


# ─────────────────────────────────────────────────────────────────────────────
# API Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def momentum_app(tmp_path, no_retry_sleep, monkeypatch) -> Generator:
    """The FastAPI app with isolated databases and auth required."""
    monkeypatch.setenv("MOMENTUM_LOGIN_KEY", TEST_LOGIN_KEY)

    with (
        patch("momentum.voids.service.DB_PATH", tmp_path / "momentum.db"),
        patch("momentum.security.session.DB_PATH", tmp_path / "sessions.db"),
    ):
        from momentum.dashboard.backend import auth
        from momentum.dashboard.backend.main import app

        original_config = auth.security_config
        auth.security_config = {**original_config, "require_auth": True}

        yield app

        auth.security_config = original_config


@pytest.fixture
def open_app(momentum_app) -> Generator:
    """Same app with auth disabled; X-User-Id names the caller."""
    from momentum.dashboard.backend import auth

    auth.security_config = {**auth.security_config, "require_auth": False}
    yield momentum_app


@pytest.fixture
def test_client(open_app, mock_user_id):
    """Client acting as mock_user_id without signing in."""
    from fastapi.testclient import TestClient

    with TestClient(open_app, headers={"X-User-Id": mock_user_id}) as client:
        yield client


@pytest.fixture
def lenient_client(open_app, mock_user_id):
    """Like test_client, but server errors come back as 500 responses."""
    from fastapi.testclient import TestClient

    with TestClient(
        open_app, headers={"X-User-Id": mock_user_id}, raise_server_exceptions=False
    ) as client:
        yield client


@pytest.fixture
def auth_client(momentum_app):
    """Client against the app with sign-in required."""
    from fastapi.testclient import TestClient

    with TestClient(momentum_app) as client:
        yield client
