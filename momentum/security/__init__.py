"""Security - sign-in sessions for the Momentum API

Components:
    session.py: Hashed session tokens with expiry
"""

from .. import DATA_DIR

DB_PATH = DATA_DIR / "sessions.db"

__all__ = ["DB_PATH"]
