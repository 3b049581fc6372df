"""Momentum - get unstuck one small action at a time

Philosophy:
    Feeling stuck is usually a task that is too big or too vague to start.
    Name the thing you are avoiding (the "void"), then commit to ONE small,
    physical next action you can finish in 5-15 minutes.

Components:
    voids/: Void entries, next actions, today's board, focus timer
    ai/: Hosted-model suggestions for next actions
    security/: Session tokens for sign-in
    dashboard/backend/: FastAPI REST API
    cli.py: The `momentum` command
"""

from pathlib import Path

__version__ = "0.1.0"

PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = PROJECT_ROOT / "data"

__all__ = ["DATA_DIR", "PROJECT_ROOT", "__version__"]
