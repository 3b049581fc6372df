"""
AI Route - Next-action suggestions from a hosted model

These handlers are plain functions so the blocking model call runs in
FastAPI's threadpool. SuggestionError is turned into an ErrorResponse by
the handler registered in main.py.
"""

from fastapi import APIRouter, Depends

from ....ai.suggestions import get_ai_suggestions, suggest_next_actions
from ..auth import get_current_user
from ..models import NextActionSuggestionRequest, SuggestionRequest, SuggestionResponse

router = APIRouter()


@router.post("/suggestions", response_model=SuggestionResponse)
def suggestions(body: SuggestionRequest, user: dict = Depends(get_current_user)):
    """Forward a raw prompt and return the JSON array the model answers with."""
    return get_ai_suggestions(body.prompt)


@router.post("/next-action-suggestions", response_model=SuggestionResponse)
def next_action_suggestions(body: NextActionSuggestionRequest, user: dict = Depends(get_current_user)):
    """Suggest small physical next actions for a void."""
    return SuggestionResponse(suggestions=suggest_next_actions(body.title, body.description))
