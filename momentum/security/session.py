"""
Tool: Session Manager
Purpose: Sign users in and out of the Momentum API

Features:
- 256-bit random session tokens
- Configurable TTL (default 24h, max 7d)
- Profile fields (display name, photo) carried on the session
- Concurrent session cap per user

Usage:
    python -m momentum.security.session --action create --user alice --name "Alice Smith"
    python -m momentum.security.session --action validate --token "abc123..."
    python -m momentum.security.session --action revoke --token "abc123..."
    python -m momentum.security.session --action revoke-all --user alice
    python -m momentum.security.session --action cleanup

Dependencies:
    - secrets (stdlib)
    - hashlib (stdlib)
    - sqlite3 (stdlib)

Security Notes:
    - Only token hash is stored, never raw token
    - Raw token returned only on creation
"""

import argparse
import hashlib
import json
import logging
import secrets
import sqlite3
import sys
from datetime import datetime, timedelta
from typing import Any

from . import DB_PATH

logger = logging.getLogger(__name__)

DEFAULT_TTL_HOURS = 24
MAX_TTL_HOURS = 168  # 7 days
MAX_CONCURRENT_SESSIONS = 5
TOKEN_BYTES = 32  # 256 bits


def get_connection() -> sqlite3.Connection:
    """Get database connection, creating tables if needed."""
    DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(DB_PATH))
    conn.row_factory = sqlite3.Row

    cursor = conn.cursor()
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS sessions (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            token_hash TEXT UNIQUE NOT NULL,
            user_id TEXT NOT NULL,
            display_name TEXT,
            photo_url TEXT,
            created_at DATETIME NOT NULL,
            expires_at DATETIME NOT NULL,
            last_activity DATETIME,
            is_active INTEGER DEFAULT 1
        )
    """)
    cursor.execute("CREATE INDEX IF NOT EXISTS idx_sessions_user ON sessions(user_id)")
    cursor.execute("CREATE INDEX IF NOT EXISTS idx_sessions_token ON sessions(token_hash)")

    conn.commit()
    return conn


def generate_token() -> str:
    """Generate a secure random session token."""
    return secrets.token_urlsafe(TOKEN_BYTES)


def hash_token(token: str) -> str:
    """Hash a token for secure storage."""
    return hashlib.sha256(token.encode()).hexdigest()


def greeting_name(display_name: str | None) -> str:
    """First word of the display name, for "Hello, Alice!" - or "there"."""
    if display_name:
        parts = display_name.split()
        if parts:
            return parts[0]
    return "there"


def create_session(
    user_id: str,
    display_name: str | None = None,
    photo_url: str | None = None,
    ttl_hours: int = DEFAULT_TTL_HOURS,
) -> dict[str, Any]:
    """
    Create a new session.

    Args:
        user_id: User identifier
        display_name: Name shown in the app header
        photo_url: Avatar URL
        ttl_hours: Session lifetime in hours (capped at 7 days)

    Returns:
        dict with session info and RAW TOKEN (only time it's returned)
    """
    if not user_id:
        return {"success": False, "error": "user_id is required"}

    ttl_hours = max(1, min(ttl_hours, MAX_TTL_HOURS))
    token = generate_token()
    now = datetime.now()
    expires_at = now + timedelta(hours=ttl_hours)

    conn = get_connection()
    try:
        cursor = conn.cursor()

        cursor.execute(
            "SELECT COUNT(*) as count FROM sessions WHERE user_id = ? AND is_active = 1", (user_id,)
        )
        if cursor.fetchone()["count"] >= MAX_CONCURRENT_SESSIONS:
            # Drop the oldest to make room
            cursor.execute(
                """
                UPDATE sessions SET is_active = 0
                WHERE id = (
                    SELECT id FROM sessions
                    WHERE user_id = ? AND is_active = 1
                    ORDER BY created_at ASC, id ASC
                    LIMIT 1
                )
            """,
                (user_id,),
            )

        cursor.execute(
            """
            INSERT INTO sessions
            (token_hash, user_id, display_name, photo_url, created_at, expires_at, last_activity)
            VALUES (?, ?, ?, ?, ?, ?, ?)
        """,
            (hash_token(token), user_id, display_name, photo_url, now.isoformat(), expires_at.isoformat(), now.isoformat()),
        )
        session_id = cursor.lastrowid
        conn.commit()
    finally:
        conn.close()

    logger.info(f"Session {session_id} created for {user_id}")

    return {
        "success": True,
        "token": token,  # Only time raw token is returned!
        "session_id": session_id,
        "user_id": user_id,
        "display_name": display_name,
        "expires_at": expires_at.isoformat(),
        "message": "Signed in",
    }


def validate_session(token: str, update_activity: bool = True) -> dict[str, Any]:
    """
    Validate a session token.

    Args:
        token: Session token to validate
        update_activity: Update last activity timestamp

    Returns:
        dict with validation result and the signed-in user's profile
    """
    if not token:
        return {"success": True, "valid": False, "reason": "token_missing"}

    conn = get_connection()
    try:
        cursor = conn.cursor()
        cursor.execute("SELECT * FROM sessions WHERE token_hash = ?", (hash_token(token),))
        row = cursor.fetchone()

        if not row:
            return {"success": True, "valid": False, "reason": "token_not_found"}

        if not row["is_active"]:
            return {"success": True, "valid": False, "reason": "session_revoked"}

        if datetime.now() > datetime.fromisoformat(row["expires_at"]):
            cursor.execute("UPDATE sessions SET is_active = 0 WHERE id = ?", (row["id"],))
            conn.commit()
            return {"success": True, "valid": False, "reason": "session_expired"}

        if update_activity:
            cursor.execute(
                "UPDATE sessions SET last_activity = ? WHERE id = ?",
                (datetime.now().isoformat(), row["id"]),
            )
            conn.commit()
    finally:
        conn.close()

    return {
        "success": True,
        "valid": True,
        "session_id": row["id"],
        "user_id": row["user_id"],
        "display_name": row["display_name"],
        "photo_url": row["photo_url"],
        "expires_at": row["expires_at"],
    }


def revoke_session(token: str) -> dict[str, Any]:
    """Revoke a single session (sign out)."""
    token_hash = hash_token(token)

    conn = get_connection()
    try:
        cursor = conn.cursor()
        cursor.execute("SELECT id, user_id FROM sessions WHERE token_hash = ?", (token_hash,))
        row = cursor.fetchone()

        if not row:
            return {"success": False, "error": "Session not found"}

        cursor.execute("UPDATE sessions SET is_active = 0 WHERE token_hash = ?", (token_hash,))
        conn.commit()
    finally:
        conn.close()

    logger.info(f"Session {row['id']} revoked for {row['user_id']}")

    return {"success": True, "session_id": row["id"], "message": "Signed out"}


def revoke_all_sessions(user_id: str) -> dict[str, Any]:
    """Revoke all sessions for a user."""
    conn = get_connection()
    try:
        cursor = conn.cursor()
        cursor.execute(
            "UPDATE sessions SET is_active = 0 WHERE user_id = ? AND is_active = 1", (user_id,)
        )
        count = cursor.rowcount
        conn.commit()
    finally:
        conn.close()

    return {
        "success": True,
        "user_id": user_id,
        "revoked_count": count,
        "message": f"Revoked {count} sessions",
    }


def cleanup_expired_sessions() -> dict[str, Any]:
    """Delete sessions that are expired or already revoked."""
    conn = get_connection()
    try:
        cursor = conn.cursor()
        cursor.execute(
            "DELETE FROM sessions WHERE is_active = 0 OR expires_at < ?",
            (datetime.now().isoformat(),),
        )
        deleted = cursor.rowcount
        conn.commit()
    finally:
        conn.close()

    return {"success": True, "deleted_count": deleted, "message": f"Removed {deleted} sessions"}


def main():
    parser = argparse.ArgumentParser(description="Session Manager")
    parser.add_argument(
        "--action",
        required=True,
        choices=["create", "validate", "revoke", "revoke-all", "cleanup"],
        help="Action to perform",
    )
    parser.add_argument("--user", help="User ID")
    parser.add_argument("--name", help="Display name")
    parser.add_argument("--token", help="Session token")
    parser.add_argument("--ttl", type=int, default=DEFAULT_TTL_HOURS, help="Session TTL in hours")

    args = parser.parse_args()
    result = None

    if args.action == "create":
        if not args.user:
            print(json.dumps({"success": False, "error": "--user required for create"}))
            sys.exit(1)
        result = create_session(args.user, display_name=args.name, ttl_hours=args.ttl)

    elif args.action in ("validate", "revoke"):
        if not args.token:
            print(json.dumps({"success": False, "error": f"--token required for {args.action}"}))
            sys.exit(1)
        if args.action == "validate":
            result = validate_session(args.token, update_activity=False)
        else:
            result = revoke_session(args.token)

    elif args.action == "revoke-all":
        if not args.user:
            print(json.dumps({"success": False, "error": "--user required for revoke-all"}))
            sys.exit(1)
        result = revoke_all_sessions(args.user)

    elif args.action == "cleanup":
        result = cleanup_expired_sessions()

    if result:
        print(json.dumps(result, indent=2, default=str))
        if not result.get("success"):
            sys.exit(1)


if __name__ == "__main__":
    main()
