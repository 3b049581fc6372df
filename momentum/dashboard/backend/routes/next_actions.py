"""
Next Actions Route - Today's list

Provides endpoints for the daily operating list:
- Today's actions (unfinished, plus anything finished today)
- Add a standalone action
- Complete, reopen, or toggle an action
"""

import logging

from fastapi import APIRouter, Depends, status

from ....voids import service
from ....voids.board import DailyBoard
from ..auth import get_current_user
from ..errors import raise_for_result
from ..models import NextAction, NextActionCreate, TodayResponse, ToggleResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=TodayResponse)
def get_today(user: dict = Depends(get_current_user)):
    """Today's next actions, unfinished first."""
    board = DailyBoard(user["user_id"])
    board.refresh()
    if board.error is not None:
        raise board.error

    return TodayResponse(
        actions=board.actions,
        summary=board.summary(),
        day_start=service.start_of_day().isoformat(),
    )


@router.post("", response_model=NextAction, status_code=status.HTTP_201_CREATED)
def create_action(body: NextActionCreate, user: dict = Depends(get_current_user)):
    """Add a next action that isn't tied to a new void."""
    result = service.create_next_action(
        user["user_id"],
        body.description,
        estimated_minutes=body.estimated_minutes,
        void_id=body.void_id,
    )
    return raise_for_result(result)


@router.post("/{action_id}/complete", response_model=NextAction)
def complete_action(action_id: str, user: dict = Depends(get_current_user)):
    return raise_for_result(service.complete_next_action(action_id, user_id=user["user_id"]))


@router.post("/{action_id}/uncomplete", response_model=NextAction)
def uncomplete_action(action_id: str, user: dict = Depends(get_current_user)):
    return raise_for_result(service.uncomplete_next_action(action_id, user_id=user["user_id"]))


@router.post("/{action_id}/toggle", response_model=ToggleResponse)
def toggle_action(action_id: str, user: dict = Depends(get_current_user)):
    """Flip done/not done; the response carries the stored state."""
    board = DailyBoard(user["user_id"])
    board.refresh()

    if board.find(action_id) is None:
        # Finished on an earlier day, so it isn't on today's board
        board.actions = [raise_for_result(service.get_next_action(action_id, user_id=user["user_id"]))]

    previous = board.find(action_id)["completed"]
    result = board.toggle(action_id)

    if result["completed"] == previous and board.error is not None:
        logger.error(f"Toggle failed for {action_id}: {board.error}")
        raise board.error

    return ToggleResponse(completed=result["completed"], action=board.find(action_id))
