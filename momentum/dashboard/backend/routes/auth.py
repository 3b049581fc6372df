"""
Auth Route - Sign in, sign out, who am I

The front end runs the identity provider's sign-in flow and posts the
resulting identity here together with the login key (MOMENTUM_LOGIN_KEY)
it shares with this server. We answer with a session token, set as an
HTTP-only cookie and also returned in the body for non-browser clients.

- POST /api/auth/login  - Start a session (login key required)
- POST /api/auth/logout - End the current session
- GET  /api/auth/me     - The signed-in user
"""

import logging

from fastapi import APIRouter, Depends, Request, Response

from ....config import get_section
from ....security.session import DEFAULT_TTL_HOURS, create_session, greeting_name, revoke_session
from .. import auth
from ..errors import raise_for_result
from ..models import CurrentUser, LoginRequest, LoginResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
def login(body: LoginRequest, response: Response):
    """
    Start a session for the signed-in user.

    Returns 503 when no login key is configured and 401 when the request
    doesn't carry it.
    """
    auth.verify_login_key(body.login_key)

    ttl_hours = int(
        (get_section("dashboard").get("security", {}) or {}).get("session_ttl_hours", DEFAULT_TTL_HOURS)
    )
    result = create_session(
        body.user_id,
        display_name=body.display_name,
        photo_url=body.photo_url,
        ttl_hours=ttl_hours,
    )
    if not result["success"]:
        raise_for_result(result)

    response.set_cookie(
        key=auth.cookie_name(),
        value=result["token"],
        max_age=ttl_hours * 3600,
        httponly=True,
        samesite="lax",
    )

    return LoginResponse(
        token=result["token"],
        user_id=body.user_id,
        display_name=body.display_name,
        greeting_name=greeting_name(body.display_name),
        expires_at=result["expires_at"],
    )


@router.post("/logout")
def logout(request: Request, response: Response):
    """End the current session. Signing out twice is not an error."""
    token = auth.extract_token(request)
    if token:
        result = revoke_session(token)
        if not result["success"]:
            logger.info("Logout for unknown session")

    response.delete_cookie(auth.cookie_name())
    return {"success": True, "message": "Signed out"}


@router.get("/me", response_model=CurrentUser)
def me(user: dict = Depends(auth.get_current_user)):
    """The signed-in user, with the first name used in greetings."""
    return CurrentUser(
        user_id=user["user_id"],
        display_name=user.get("display_name"),
        photo_url=user.get("photo_url"),
        greeting_name=user.get("greeting_name", "there"),
    )
