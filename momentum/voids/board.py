"""
Tool: Daily Board
Purpose: Hold today's next actions and keep them in step with the store

The board is what the user looks at: today's list, what's done, what
isn't. Toggling an action updates the board immediately and then writes
through to the store. If the write fails, the board snaps back to what it
showed before the toggle and records the error.

Usage:
    from momentum.voids.board import DailyBoard

    board = DailyBoard("alice")
    board.refresh()
    result = board.toggle("abc123")   # {"completed": True}
    board.save_next_action("Reply to Sam's email")
    print(board.summary())            # {"total": 3, "completed": 1, "pending": 2}
"""

import copy
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from . import service

logger = logging.getLogger(__name__)


class DailyBoard:
    """Today's next actions for one user, with optimistic toggling.

    Args:
        user_id: Owner of the board. A blank user makes every operation a no-op.
        now: Fixed reference time for the day boundary (defaults to the
            current time at each refresh).
    """

    def __init__(self, user_id: str, now: Optional[datetime] = None):
        self.user_id = user_id
        self.now = now
        self.actions: List[Dict[str, Any]] = []
        self.loading = False
        self.error: Optional[Exception] = None

    def refresh(self) -> List[Dict[str, Any]]:
        """Reload today's actions from the store."""
        if not self.user_id:
            return self.actions

        self.loading = True
        self.error = None
        try:
            result = service.get_todays_next_actions(self.user_id, now=self.now)
            if result["success"]:
                self.actions = result["data"]["actions"]
            else:
                self.error = RuntimeError(result.get("error", "Failed to load next actions"))
        except Exception as e:
            logger.error(f"Error fetching next actions for {self.user_id}: {e}")
            self.error = e
        finally:
            self.loading = False

        return self.actions

    def find(self, action_id: str) -> Optional[Dict[str, Any]]:
        for action in self.actions:
            if action["id"] == action_id:
                return action
        return None

    def toggle(self, action_id: str) -> Dict[str, bool]:
        """
        Flip an action between done and not done.

        The board changes first; the store write follows. On failure the
        board is restored from the snapshot taken before the flip.

        Args:
            action_id: Action to toggle

        Returns:
            {"completed": bool} - the action's state after the call
        """
        action = self.find(action_id)
        if action is None:
            return {"completed": False}

        was_completed = bool(action["completed"])
        snapshot = copy.deepcopy(self.actions)

        self.actions = [
            {
                **a,
                "completed": not was_completed,
                "completed_at": None if was_completed else datetime.now().isoformat(),
            }
            if a["id"] == action_id
            else a
            for a in self.actions
        ]

        try:
            if was_completed:
                result = service.uncomplete_next_action(action_id, self.user_id)
            else:
                result = service.complete_next_action(action_id, self.user_id)

            if not result["success"]:
                raise RuntimeError(result.get("error", "Failed to update next action"))
        except Exception as e:
            logger.error(f"Error toggling action {action_id}: {e}")
            self.error = e
            self.actions = snapshot
            return {"completed": was_completed}

        # Keep the store's timestamps so completed_at matches what was saved
        stored = result["data"]
        self.actions = [stored if a["id"] == action_id else a for a in self.actions]
        return {"completed": not was_completed}

    def save_next_action(self, description: str, estimated_minutes: Optional[int] = None) -> Optional[Dict[str, Any]]:
        """
        Add a standalone next action and reload the board.

        Returns:
            The created action, or None if nothing was saved
        """
        if not self.user_id:
            return None

        try:
            result = service.create_next_action(self.user_id, description, estimated_minutes)
        except Exception as e:
            logger.error(f"Error creating next action: {e}")
            self.error = e
            return None

        if not result["success"]:
            self.error = ValueError(result["error"])
            return None

        self.refresh()
        return result["data"]

    @property
    def completed_count(self) -> int:
        return sum(1 for a in self.actions if a["completed"])

    @property
    def pending(self) -> List[Dict[str, Any]]:
        return [a for a in self.actions if not a["completed"]]

    def summary(self) -> Dict[str, int]:
        total = len(self.actions)
        completed = self.completed_count
        return {"total": total, "completed": completed, "pending": total - completed}
