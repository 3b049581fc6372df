"""
Voids Route - Record what you're stuck on

Provides endpoints for the "I'm stuck" flow:
- Create a void with its first next action
- List and view past voids
- Delete a void (its actions stay on the list)
"""

from fastapi import APIRouter, Depends, Query, status

from ....voids import service
from ..auth import get_current_user
from ..errors import raise_for_result
from ..models import VoidCreate, VoidCreated, VoidEntry, VoidListResponse

router = APIRouter()


@router.post("", response_model=VoidCreated, status_code=status.HTTP_201_CREATED)
def create_void(body: VoidCreate, user: dict = Depends(get_current_user)):
    """Name the void and, optionally, the smallest next action."""
    result = service.create_void_entry(
        user_id=user["user_id"],
        title=body.title,
        description=body.description,
        next_action=body.next_action.model_dump() if body.next_action else None,
    )
    return raise_for_result(result)


@router.get("", response_model=VoidListResponse)
def list_voids(
    limit: int = Query(50, ge=1, le=200, description="Maximum results"),
    offset: int = Query(0, ge=0, description="Pagination offset"),
    user: dict = Depends(get_current_user),
):
    """List the user's voids, newest first."""
    return raise_for_result(service.list_void_entries(user["user_id"], limit=limit, offset=offset))


@router.get("/{void_id}", response_model=VoidEntry)
def get_void(void_id: str, user: dict = Depends(get_current_user)):
    """A single void with the actions that came from it."""
    return raise_for_result(service.get_void_entry(void_id, user_id=user["user_id"]))


@router.delete("/{void_id}")
def delete_void(void_id: str, user: dict = Depends(get_current_user)):
    result = service.delete_void_entry(void_id, user_id=user["user_id"])
    raise_for_result(result)
    return {"success": True, "message": result["message"]}
