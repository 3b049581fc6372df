"""
Mapping from tool result dicts to HTTP errors.

Tools report problems as {"success": False, "error": "..."}; routes turn
those into 404 for missing records and 400 for everything else.
"""

from fastapi import HTTPException, status


def raise_for_result(result: dict) -> dict:
    """Return ``result["data"]`` or raise the matching HTTPException."""
    if result.get("success"):
        return result.get("data")

    error = result.get("error", "Request failed")
    if "not found" in error.lower():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error)
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error)
