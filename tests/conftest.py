"""Shared test fixtures for Momentum tests.

This module provides common fixtures used across all test modules:
- Database isolation with temporary files
- Standard test user/void data
- A fake hosted-model client

Usage:
    def test_something(void_service):
        # void_service writes to a temp database that's removed afterwards
        ...
"""

import os
import tempfile
from collections.abc import Generator
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest


# ─────────────────────────────────────────────────────────────────────────────
# Path Constants
# ─────────────────────────────────────────────────────────────────────────────

PROJECT_ROOT = Path(__file__).parent.parent


# ─────────────────────────────────────────────────────────────────────────────
# Database Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def temp_db() -> Generator[Path, None, None]:
    """Create a temporary database file for testing.

    The database file is automatically deleted after the test completes.

    Yields:
        Path to the temporary database file
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    yield db_path

    if db_path.exists():
        os.unlink(db_path)


@pytest.fixture(autouse=True)
def fresh_config():
    """Each test reads config files from disk."""
    from momentum.config import clear_config_cache

    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def no_retry_sleep():
    """Make retry backoff instant."""
    with patch("momentum.voids.retry.time.sleep") as sleep:
        yield sleep


@pytest.fixture
def void_service(temp_db, no_retry_sleep):
    """Void service bound to a temporary database."""
    with patch("momentum.voids.service.DB_PATH", temp_db):
        from momentum.voids import service

        conn = service.get_connection()
        conn.close()

        yield service


@pytest.fixture
def session_store(tmp_path):
    """Session manager bound to a temporary database."""
    with patch("momentum.security.session.DB_PATH", tmp_path / "sessions.db"):
        from momentum.security import session

        yield session


# ─────────────────────────────────────────────────────────────────────────────
# User Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def mock_user_id() -> str:
    """Standard test user ID."""
    return "test_user_123"


@pytest.fixture
def other_user_id() -> str:
    return "someone_else_456"


# ─────────────────────────────────────────────────────────────────────────────
# Void Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def sample_void() -> dict:
    """Sample void data for testing.

    Returns:
        dict with the fields the "I'm stuck" flow collects
    """
    return {
        "title": "Quarterly report",
        "description": "Too many numbers, no idea where to start",
        "next_action": {
            "description": "Open the doc titled Q3 Report",
            "estimated_minutes": 5,
        },
    }


# ─────────────────────────────────────────────────────────────────────────────
# AI Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def fake_model_client():
    """Build a client whose messages.create returns the given text."""

    def _make(text: str | None):
        client = MagicMock()
        blocks = [] if text is None else [SimpleNamespace(text=text)]
        client.messages.create.return_value = SimpleNamespace(content=blocks)
        return client

    return _make
