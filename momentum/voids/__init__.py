"""Voids - the things you're avoiding, and the next actions that unstick them

Philosophy:
    "Write the report" is a void: big, vague, easy to avoid.
    "Open the doc titled Q3 Report" is a next action: small, physical, doable now.

Components:
    service.py: Void entry and next action storage (retry-wrapped)
    retry.py: Bounded retry with backoff for transient store failures
    board.py: Today's next actions with optimistic toggling
    focus_timer.py: Countdown timer for working on one action

Usage:
    from momentum.voids.service import create_void_entry
    from momentum.voids.board import DailyBoard

    create_void_entry(
        user_id="alice",
        title="Quarterly report",
        next_action={"description": "Open the doc titled Q3 Report"},
    )

    board = DailyBoard("alice")
    board.refresh()
    board.toggle(board.actions[0]["id"])
"""

import os
from pathlib import Path

from .. import DATA_DIR
from ..config import get_section, resolve_path


def _default_db_path() -> Path:
    """MOMENTUM_DB_PATH wins, then momentum.database.path, then data/momentum.db."""
    override = os.environ.get("MOMENTUM_DB_PATH")
    if override:
        return Path(override)
    configured = get_section("database").get("path")
    if configured:
        return resolve_path(configured)
    return DATA_DIR / "momentum.db"


# Path constants
DB_PATH = _default_db_path()

# Table names (one per document collection)
VOIDS_TABLE = "voids"
NEXT_ACTIONS_TABLE = "next_actions"

# Retry defaults (overridden by momentum.database.retry in config)
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_RETRY_DELAY = 0.1

# Focus timer default when neither the action nor config says otherwise
DEFAULT_FOCUS_MINUTES = 10

__all__ = [
    "DB_PATH",
    "VOIDS_TABLE",
    "NEXT_ACTIONS_TABLE",
    "DEFAULT_MAX_ATTEMPTS",
    "DEFAULT_RETRY_DELAY",
    "DEFAULT_FOCUS_MINUTES",
]
