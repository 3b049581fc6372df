"""
Tool: Void Service
Purpose: Storage for void entries and their next actions

A void entry records the thing the user is avoiding. A next action is the
single small step that gets them moving again. Actions may hang off a void
or stand alone (added straight from today's list).

Every operation runs through the retry policy in retry.py, so a briefly
locked database doesn't surface as an error.

Usage:
    python -m momentum.voids.service --action create-void --user alice --title "Quarterly report" --next "Open the Q3 doc"
    python -m momentum.voids.service --action today --user alice
    python -m momentum.voids.service --action complete --action-id abc123
    python -m momentum.voids.service --action uncomplete --action-id abc123

Dependencies:
    - sqlite3 (stdlib)
    - uuid (stdlib)

Output:
    JSON result with success status and data
"""

import argparse
import json
import sqlite3
import sys
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from . import DB_PATH, NEXT_ACTIONS_TABLE, VOIDS_TABLE
from .retry import with_retry


def get_connection() -> sqlite3.Connection:
    """Get database connection, creating tables if needed."""
    DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(DB_PATH))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")

    cursor = conn.cursor()

    cursor.execute(f"""
        CREATE TABLE IF NOT EXISTS {VOIDS_TABLE} (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            title TEXT NOT NULL,
            description TEXT,
            created_at DATETIME NOT NULL
        )
    """)

    cursor.execute(f"""
        CREATE TABLE IF NOT EXISTS {NEXT_ACTIONS_TABLE} (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            void_id TEXT,
            void_title TEXT,
            description TEXT NOT NULL,
            estimated_minutes INTEGER,
            completed INTEGER NOT NULL DEFAULT 0,
            created_at DATETIME NOT NULL,
            completed_at DATETIME,
            FOREIGN KEY(void_id) REFERENCES {VOIDS_TABLE}(id) ON DELETE SET NULL
        )
    """)

    cursor.execute(f"CREATE INDEX IF NOT EXISTS idx_voids_user ON {VOIDS_TABLE}(user_id)")
    cursor.execute(f"CREATE INDEX IF NOT EXISTS idx_actions_user ON {NEXT_ACTIONS_TABLE}(user_id)")
    cursor.execute(f"CREATE INDEX IF NOT EXISTS idx_actions_completed ON {NEXT_ACTIONS_TABLE}(completed)")
    cursor.execute(f"CREATE INDEX IF NOT EXISTS idx_actions_void ON {NEXT_ACTIONS_TABLE}(void_id)")

    conn.commit()
    return conn


def row_to_dict(row: Optional[sqlite3.Row]) -> Optional[Dict[str, Any]]:
    """Convert sqlite3.Row to dictionary."""
    if row is None:
        return None
    return dict(row)


def action_from_row(row: Optional[sqlite3.Row]) -> Optional[Dict[str, Any]]:
    """Convert a next_actions row, turning the completed flag into a bool."""
    action = row_to_dict(row)
    if action is not None:
        action["completed"] = bool(action["completed"])
    return action


def generate_id() -> str:
    """Generate a short unique ID."""
    return uuid.uuid4().hex[:12]


def _now() -> datetime:
    return datetime.now()


def start_of_day(now: Optional[datetime] = None) -> datetime:
    """Local midnight for the day containing ``now``."""
    now = now or _now()
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def sort_actions(actions: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Incomplete actions first, then oldest first within each group."""
    return sorted(actions, key=lambda a: (bool(a.get("completed")), str(a.get("created_at") or "")))


def _validate_minutes(estimated_minutes: Optional[int]) -> Optional[str]:
    if estimated_minutes is None:
        return None
    if not isinstance(estimated_minutes, int) or isinstance(estimated_minutes, bool) or estimated_minutes <= 0:
        return "estimated_minutes must be a positive whole number"
    return None


def _owned(record: Optional[Dict[str, Any]], user_id: Optional[str]) -> bool:
    return record is not None and (user_id is None or record["user_id"] == user_id)


# =============================================================================
# Void entries
# =============================================================================


@with_retry()
def create_void_entry(
    user_id: str,
    title: str,
    description: Optional[str] = None,
    next_action: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Record a void and, optionally, its first next action.

    Both rows are written in one transaction so a retry never leaves a
    void without the action the user typed.

    Args:
        user_id: User who is stuck
        title: What they're avoiding (e.g., "Quarterly report")
        description: Why it's hard (optional)
        next_action: {"description": ..., "estimated_minutes": ...} (optional)

    Returns:
        dict with void_id, the void, and the created next action (or None)
    """
    if not user_id:
        return {"success": False, "error": "user_id is required"}

    title = (title or "").strip()
    if not title:
        return {"success": False, "error": "Title is required - name the thing you're avoiding"}

    action_description = ""
    estimated_minutes = None
    if next_action:
        action_description = (next_action.get("description") or "").strip()
        estimated_minutes = next_action.get("estimated_minutes")
        minutes_error = _validate_minutes(estimated_minutes)
        if minutes_error:
            return {"success": False, "error": minutes_error}

    void_id = generate_id()
    created_at = _now().isoformat()

    conn = get_connection()
    try:
        cursor = conn.cursor()
        cursor.execute(f"""
            INSERT INTO {VOIDS_TABLE} (id, user_id, title, description, created_at)
            VALUES (?, ?, ?, ?, ?)
        """, (void_id, user_id, title, (description or "").strip() or None, created_at))

        action = None
        if action_description:
            action_id = generate_id()
            cursor.execute(f"""
                INSERT INTO {NEXT_ACTIONS_TABLE}
                    (id, user_id, void_id, void_title, description, estimated_minutes, completed, created_at)
                VALUES (?, ?, ?, ?, ?, ?, 0, ?)
            """, (action_id, user_id, void_id, title, action_description, estimated_minutes, created_at))

        # Read back before committing: a retry after a commit would insert twice
        cursor.execute(f"SELECT * FROM {VOIDS_TABLE} WHERE id = ?", (void_id,))
        void = row_to_dict(cursor.fetchone())

        if action_description:
            cursor.execute(f"SELECT * FROM {NEXT_ACTIONS_TABLE} WHERE id = ?", (action_id,))
            action = action_from_row(cursor.fetchone())

        conn.commit()
    finally:
        conn.close()

    return {
        "success": True,
        "data": {"void_id": void_id, "void": void, "next_action": action},
        "message": "Void recorded" + (" with a next action" if action else ""),
    }


@with_retry()
def get_void_entry(void_id: str, user_id: Optional[str] = None) -> Dict[str, Any]:
    """
    Get a void entry with the actions linked to it.

    Args:
        void_id: Void to fetch
        user_id: If given, the void must belong to this user

    Returns:
        dict with void data and its next_actions
    """
    conn = get_connection()
    try:
        cursor = conn.cursor()
        cursor.execute(f"SELECT * FROM {VOIDS_TABLE} WHERE id = ?", (void_id,))
        void = row_to_dict(cursor.fetchone())

        if not _owned(void, user_id):
            return {"success": False, "error": f"Void not found: {void_id}"}

        cursor.execute(f"""
            SELECT * FROM {NEXT_ACTIONS_TABLE}
            WHERE void_id = ?
            ORDER BY created_at
        """, (void_id,))
        void["next_actions"] = [action_from_row(row) for row in cursor.fetchall()]
    finally:
        conn.close()

    return {"success": True, "data": void}


@with_retry()
def list_void_entries(user_id: str, limit: int = 50, offset: int = 0) -> Dict[str, Any]:
    """
    List a user's voids, newest first.

    Args:
        user_id: User whose voids to list
        limit: Maximum results
        offset: Pagination offset

    Returns:
        dict with voids list and total count
    """
    conn = get_connection()
    try:
        cursor = conn.cursor()
        cursor.execute(f"""
            SELECT * FROM {VOIDS_TABLE}
            WHERE user_id = ?
            ORDER BY created_at DESC
            LIMIT ? OFFSET ?
        """, (user_id, limit, offset))
        voids = [row_to_dict(row) for row in cursor.fetchall()]

        cursor.execute(f"SELECT COUNT(*) as count FROM {VOIDS_TABLE} WHERE user_id = ?", (user_id,))
        total = cursor.fetchone()["count"]
    finally:
        conn.close()

    return {
        "success": True,
        "data": {"voids": voids, "total": total, "limit": limit, "offset": offset},
    }


@with_retry()
def delete_void_entry(void_id: str, user_id: Optional[str] = None) -> Dict[str, Any]:
    """
    Delete a void. Its next actions stay on the list, unlinked.

    Args:
        void_id: Void to delete
        user_id: If given, the void must belong to this user

    Returns:
        dict with success status
    """
    conn = get_connection()
    try:
        cursor = conn.cursor()
        cursor.execute(f"SELECT * FROM {VOIDS_TABLE} WHERE id = ?", (void_id,))
        if not _owned(row_to_dict(cursor.fetchone()), user_id):
            return {"success": False, "error": f"Void not found: {void_id}"}

        cursor.execute(f"DELETE FROM {VOIDS_TABLE} WHERE id = ?", (void_id,))
        conn.commit()
    finally:
        conn.close()

    return {"success": True, "message": f"Void {void_id} deleted"}


# =============================================================================
# Next actions
# =============================================================================


@with_retry()
def create_next_action(
    user_id: str,
    description: str,
    estimated_minutes: Optional[int] = None,
    void_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Add a next action to today's list.

    Args:
        user_id: User who owns the action
        description: The small physical step (trimmed, must not be blank)
        estimated_minutes: Time estimate, used as the focus timer length
        void_id: Void this action came from (optional)

    Returns:
        dict with the created action
    """
    if not user_id:
        return {"success": False, "error": "user_id is required"}

    description = (description or "").strip()
    if not description:
        return {"success": False, "error": "Description is required"}

    minutes_error = _validate_minutes(estimated_minutes)
    if minutes_error:
        return {"success": False, "error": minutes_error}

    action_id = generate_id()

    conn = get_connection()
    try:
        cursor = conn.cursor()

        void_title = None
        if void_id:
            cursor.execute(f"SELECT * FROM {VOIDS_TABLE} WHERE id = ?", (void_id,))
            void = row_to_dict(cursor.fetchone())
            if not _owned(void, user_id):
                return {"success": False, "error": f"Void not found: {void_id}"}
            void_title = void["title"]

        cursor.execute(f"""
            INSERT INTO {NEXT_ACTIONS_TABLE}
                (id, user_id, void_id, void_title, description, estimated_minutes, completed, created_at)
            VALUES (?, ?, ?, ?, ?, ?, 0, ?)
        """, (action_id, user_id, void_id, void_title, description, estimated_minutes, _now().isoformat()))

        cursor.execute(f"SELECT * FROM {NEXT_ACTIONS_TABLE} WHERE id = ?", (action_id,))
        action = action_from_row(cursor.fetchone())
        conn.commit()
    finally:
        conn.close()

    return {"success": True, "data": action, "message": "Next action added"}


@with_retry()
def get_next_action(action_id: str, user_id: Optional[str] = None) -> Dict[str, Any]:
    """Get a single next action by ID."""
    conn = get_connection()
    try:
        cursor = conn.cursor()
        cursor.execute(f"SELECT * FROM {NEXT_ACTIONS_TABLE} WHERE id = ?", (action_id,))
        action = action_from_row(cursor.fetchone())
    finally:
        conn.close()

    if not _owned(action, user_id):
        return {"success": False, "error": f"Next action not found: {action_id}"}

    return {"success": True, "data": action}


@with_retry()
def get_todays_next_actions(user_id: str, now: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Get the actions that belong on today's list.

    Unfinished actions carry over from earlier days. Finished ones only
    show up on the day they were finished, so yesterday's wins don't
    clutter this morning.

    Args:
        user_id: User whose list to build
        now: Reference time for the day boundary (defaults to now)

    Returns:
        dict with actions (incomplete first, then by creation time)
    """
    day_start = start_of_day(now)

    conn = get_connection()
    try:
        cursor = conn.cursor()
        cursor.execute(f"""
            SELECT * FROM {NEXT_ACTIONS_TABLE}
            WHERE user_id = ?
            AND (completed = 0 OR completed_at >= ?)
            ORDER BY completed ASC, created_at ASC
        """, (user_id, day_start.isoformat()))
        actions = sort_actions([action_from_row(row) for row in cursor.fetchall()])
    finally:
        conn.close()

    return {
        "success": True,
        "data": {
            "actions": actions,
            "total": len(actions),
            "day_start": day_start.isoformat(),
        },
    }


def _set_completed(action_id: str, completed: bool, user_id: Optional[str]) -> Dict[str, Any]:
    conn = get_connection()
    try:
        cursor = conn.cursor()
        cursor.execute(f"SELECT * FROM {NEXT_ACTIONS_TABLE} WHERE id = ?", (action_id,))
        if not _owned(row_to_dict(cursor.fetchone()), user_id):
            return {"success": False, "error": f"Next action not found: {action_id}"}

        completed_at = _now().isoformat() if completed else None
        cursor.execute(f"""
            UPDATE {NEXT_ACTIONS_TABLE}
            SET completed = ?, completed_at = ?
            WHERE id = ?
        """, (int(completed), completed_at, action_id))

        cursor.execute(f"SELECT * FROM {NEXT_ACTIONS_TABLE} WHERE id = ?", (action_id,))
        action = action_from_row(cursor.fetchone())
        conn.commit()
    finally:
        conn.close()

    return {
        "success": True,
        "data": action,
        "message": "Done - nice work" if completed else "Back on the list",
    }


@with_retry()
def complete_next_action(action_id: str, user_id: Optional[str] = None) -> Dict[str, Any]:
    """
    Mark a next action as done.

    Args:
        action_id: Action to complete
        user_id: If given, the action must belong to this user

    Returns:
        dict with the updated action
    """
    return _set_completed(action_id, True, user_id)


@with_retry()
def uncomplete_next_action(action_id: str, user_id: Optional[str] = None) -> Dict[str, Any]:
    """
    Put a completed action back on the list.

    Args:
        action_id: Action to reopen
        user_id: If given, the action must belong to this user

    Returns:
        dict with the updated action
    """
    return _set_completed(action_id, False, user_id)


def main():
    parser = argparse.ArgumentParser(description="Void Service - voids and next actions")
    parser.add_argument(
        "--action",
        required=True,
        choices=["create-void", "get-void", "list-voids", "add", "today", "complete", "uncomplete"],
        help="Action to perform",
    )
    parser.add_argument("--user", help="User ID")
    parser.add_argument("--void-id", help="Void ID")
    parser.add_argument("--action-id", help="Next action ID")
    parser.add_argument("--title", help="What you're avoiding")
    parser.add_argument("--description", help="Extra context")
    parser.add_argument("--next", help="Next action description")
    parser.add_argument("--minutes", type=int, help="Estimated minutes")

    args = parser.parse_args()
    result = None

    if args.action == "create-void":
        if not args.user or not args.title:
            print(json.dumps({"success": False, "error": "--user and --title required for create-void"}))
            sys.exit(1)
        next_action = {"description": args.next, "estimated_minutes": args.minutes} if args.next else None
        result = create_void_entry(args.user, args.title, args.description, next_action)

    elif args.action == "get-void":
        if not args.void_id:
            print(json.dumps({"success": False, "error": "--void-id required for get-void"}))
            sys.exit(1)
        result = get_void_entry(args.void_id, args.user)

    elif args.action == "list-voids":
        if not args.user:
            print(json.dumps({"success": False, "error": "--user required for list-voids"}))
            sys.exit(1)
        result = list_void_entries(args.user)

    elif args.action == "add":
        if not args.user or not args.description:
            print(json.dumps({"success": False, "error": "--user and --description required for add"}))
            sys.exit(1)
        result = create_next_action(args.user, args.description, args.minutes, args.void_id)

    elif args.action == "today":
        if not args.user:
            print(json.dumps({"success": False, "error": "--user required for today"}))
            sys.exit(1)
        result = get_todays_next_actions(args.user)

    elif args.action in ("complete", "uncomplete"):
        if not args.action_id:
            print(json.dumps({"success": False, "error": f"--action-id required for {args.action}"}))
            sys.exit(1)
        if args.action == "complete":
            result = complete_next_action(args.action_id, args.user)
        else:
            result = uncomplete_next_action(args.action_id, args.user)

    if result:
        print(json.dumps(result, indent=2, default=str))
        if not result.get("success"):
            sys.exit(1)


if __name__ == "__main__":
    main()
