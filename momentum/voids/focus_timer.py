"""
Tool: Focus Timer
Purpose: Countdown for working on exactly one next action

Start, pause, reset, and mark the action done when you're finished. The
timer reads a monotonic clock rather than counting ticks, so a slow or
skipped render never drifts the countdown.

Usage:
    from momentum.voids.focus_timer import FocusTimer

    timer = FocusTimer(action)        # action["estimated_minutes"] or 10 min
    timer.toggle()                    # start
    print(timer.display)              # "09:58"
    timer.complete()                  # marks the action done
"""

import logging
import math
import time
from typing import Any, Callable, Dict, Optional

from . import DEFAULT_FOCUS_MINUTES, service
from ..config import get_section

logger = logging.getLogger(__name__)

TIMES_UP_MESSAGE = "Time's up! Great work!"


def default_focus_minutes() -> int:
    return int(get_section("focus").get("default_minutes", DEFAULT_FOCUS_MINUTES))


def format_time(seconds: int) -> str:
    """Format seconds as MM:SS."""
    seconds = max(0, int(seconds))
    mins, secs = divmod(seconds, 60)
    return f"{mins:02d}:{secs:02d}"


class FocusTimer:
    """Countdown timer bound to a single next action.

    Args:
        action: The next action dict being worked on
        minutes: Duration; defaults to the action's estimate, then config
        clock: Time source in seconds (defaults to time.monotonic)
        on_complete: Called after the action is marked done
    """

    def __init__(
        self,
        action: Dict[str, Any],
        minutes: Optional[int] = None,
        clock: Optional[Callable[[], float]] = None,
        on_complete: Optional[Callable[[], None]] = None,
    ):
        self.action = action
        minutes = minutes or action.get("estimated_minutes") or default_focus_minutes()
        self.duration = int(minutes * 60)
        self.clock = clock or time.monotonic
        self.on_complete = on_complete
        self.is_complete = False
        self._remaining = float(self.duration)
        self._started_at: Optional[float] = None

    def _current_remaining(self) -> float:
        if self._started_at is None:
            return self._remaining
        remaining = self._remaining - (self.clock() - self._started_at)
        if remaining <= 0:
            # Ran out while running: stop where we are
            self._remaining = 0.0
            self._started_at = None
            return 0.0
        return remaining

    @property
    def time_left(self) -> int:
        """Whole seconds remaining, rounded up so 10:00 shows until a full second passes."""
        return int(math.ceil(self._current_remaining()))

    @property
    def is_running(self) -> bool:
        self._current_remaining()
        return self._started_at is not None

    @property
    def times_up(self) -> bool:
        return self.time_left == 0

    @property
    def display(self) -> str:
        return format_time(self.time_left)

    def toggle(self) -> bool:
        """Start or pause. Returns whether the timer is now running."""
        if self.is_complete:
            return False

        if self.is_running:
            self._remaining = self._current_remaining()
            self._started_at = None
        elif self._remaining > 0:
            self._started_at = self.clock()

        return self._started_at is not None

    def reset(self) -> None:
        """Back to the full duration, paused."""
        if self.is_complete:
            return
        self._remaining = float(self.duration)
        self._started_at = None

    def complete(self) -> Dict[str, Any]:
        """
        Mark the action done in the store.

        A failed write leaves the timer exactly as it was so the user can
        try again.

        Returns:
            dict with success status
        """
        if self.is_complete:
            return {"success": True, "message": "Already complete"}

        try:
            result = service.complete_next_action(self.action["id"], self.action.get("user_id"))
        except Exception as e:
            logger.error(f"Error completing action {self.action.get('id')}: {e}")
            return {"success": False, "error": str(e)}

        if not result["success"]:
            logger.error(f"Error completing action {self.action.get('id')}: {result.get('error')}")
            return result

        self._remaining = float(self.time_left)
        self._started_at = None
        self.is_complete = True
        self.action = result["data"]

        if self.on_complete:
            self.on_complete()

        return result

    def status(self) -> Dict[str, Any]:
        return {
            "action_id": self.action.get("id"),
            "description": self.action.get("description"),
            "time_left": self.time_left,
            "display": self.display,
            "is_running": self.is_running,
            "is_complete": self.is_complete,
            "times_up": self.times_up,
        }
