"""
Authentication dependency for Momentum API routes.

A request is signed in when it carries a valid session token, either in
the session cookie or as ``Authorization: Bearer <token>``. With
``require_auth: false`` (local development) the ``X-User-Id`` header
names the user instead.

Sessions are only issued to callers that present the login key from the
MOMENTUM_LOGIN_KEY environment variable.
"""

import logging
import os
import secrets

from fastapi import HTTPException, Request, status

from ...config import get_section
from ...security.session import greeting_name, validate_session

logger = logging.getLogger(__name__)

DEFAULT_COOKIE_NAME = "momentum_session"
LOGIN_KEY_ENV = "MOMENTUM_LOGIN_KEY"

security_config: dict = get_section("dashboard").get("security", {}) or {}


def cookie_name() -> str:
    return security_config.get("session_cookie_name", DEFAULT_COOKIE_NAME)


def extract_token(request: Request) -> str | None:
    """Session token from the cookie, falling back to the Authorization header."""
    token = request.cookies.get(cookie_name())
    if not token:
        auth_header = request.headers.get("Authorization", "")
        if auth_header.startswith("Bearer "):
            token = auth_header[7:]
    return token or None


def verify_login_key(provided: str | None) -> None:
    """
    Check the login key sent with a sign-in request.

    Raises:
        HTTPException: 503 when no key is configured, 401 when it doesn't match
    """
    login_key = os.environ.get(LOGIN_KEY_ENV, "")

    if not login_key:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Authentication not configured. Set {LOGIN_KEY_ENV}.",
        )

    if not provided or not secrets.compare_digest(provided.encode(), login_key.encode()):
        logger.warning("Rejected login: bad or missing login key")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )


def get_current_user(request: Request) -> dict:
    """
    Validate the session and return the current user.

    Raises:
        HTTPException: 401 when there is no valid session
    """
    if not security_config.get("require_auth", True):
        user_id = request.headers.get("X-User-Id") or "anonymous"
        return {"user_id": user_id, "display_name": None, "photo_url": None, "greeting_name": "there"}

    token = extract_token(request)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required"
        )

    result = validate_session(token, update_activity=True)
    if not result.get("valid"):
        reason = result.get("reason", "invalid_session")
        logger.info(f"Rejected session: {reason}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=f"Session invalid: {reason}"
        )

    return {
        "user_id": result["user_id"],
        "display_name": result.get("display_name"),
        "photo_url": result.get("photo_url"),
        "greeting_name": greeting_name(result.get("display_name")),
        "token": token,
    }
