"""Momentum Test Suite

Test organization:
- unit/: Unit tests for individual modules
  - voids/: Void service, retry, daily board, focus timer
  - ai/: Suggestion proxy and prompt building
  - security/: Sign-in sessions
- integration/: API tests through FastAPI's TestClient

Running tests:
    # All tests
    pytest

    # Specific module
    pytest tests/unit/voids/
"""
