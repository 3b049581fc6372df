#!/usr/bin/env python3
"""
Momentum Command Line Interface

Main entry point for the `momentum` command.

Usage:
    momentum stuck "Quarterly report" --next "Open the Q3 doc"   # Record a void
    momentum today                                                # Today's next actions
    momentum add "Reply to Sam"                                   # Add a next action
    momentum toggle abc123                                        # Done / not done
    momentum focus abc123 --minutes 10 --complete                 # Focus timer
    momentum suggest "Quarterly report"                           # AI suggestions
    momentum serve                                                # Start the API server
    momentum --version

The user comes from --user or the MOMENTUM_USER environment variable.
"""

import argparse
import json
import os
import sys
import time

from . import __version__


def _print(result) -> None:
    print(json.dumps(result, indent=2, default=str))


def _require_user(args) -> str:
    user = args.user or os.environ.get("MOMENTUM_USER")
    if not user:
        _print({"success": False, "error": "--user or MOMENTUM_USER required"})
        sys.exit(1)
    return user


def cmd_version(args):
    print(f"momentum {__version__}")


def cmd_serve(args):
    """Start the API server."""
    import uvicorn

    from .config import get_section

    dashboard_config = get_section("dashboard")
    uvicorn.run(
        "momentum.dashboard.backend.main:app",
        host=args.host or dashboard_config.get("host", "127.0.0.1"),
        port=args.port or dashboard_config.get("api_port", 8080),
        reload=args.reload,
        log_level="info",
    )


def cmd_stuck(args):
    """Record a void, with its first next action if given."""
    from .voids.service import create_void_entry

    next_action = None
    if args.next:
        next_action = {"description": args.next, "estimated_minutes": args.minutes}

    result = create_void_entry(_require_user(args), args.title, args.description, next_action)
    _print(result)
    return 0 if result["success"] else 1


def cmd_today(args):
    """Show today's next actions."""
    from .voids.board import DailyBoard

    board = DailyBoard(_require_user(args))
    board.refresh()
    if board.error is not None:
        _print({"success": False, "error": str(board.error)})
        return 1

    if args.json:
        _print({"success": True, "data": {"actions": board.actions, "summary": board.summary()}})
        return 0

    if not board.actions:
        print('No actions planned for today. Run "momentum stuck" to get started!')
        return 0

    print("Today's Next Actions")
    for action in board.actions:
        mark = "x" if action["completed"] else " "
        line = f"  [{mark}] {action['description']}  ({action['id']})"
        if action.get("void_title"):
            line += f'\n        From: "{action["void_title"]}"'
        print(line)
    summary = board.summary()
    print(f"\n{summary['completed']}/{summary['total']} done")
    return 0


def cmd_add(args):
    """Add a next action to today's list."""
    from .voids.board import DailyBoard

    board = DailyBoard(_require_user(args))
    action = board.save_next_action(args.description, args.minutes)
    if action is None:
        _print({"success": False, "error": str(board.error) if board.error else "Nothing saved"})
        return 1

    _print({"success": True, "data": action})
    return 0


def cmd_toggle(args):
    """Flip an action between done and not done."""
    from .voids.board import DailyBoard
    from .voids.service import get_next_action

    user = _require_user(args)
    board = DailyBoard(user)
    board.refresh()
    if board.find(args.action_id) is None:
        # Finished on an earlier day, so it isn't on today's board
        found = get_next_action(args.action_id, user_id=user)
        if not found["success"]:
            _print(found)
            return 1
        board.actions = [found["data"]]

    result = board.toggle(args.action_id)
    if board.error is not None:
        _print({"success": False, "error": str(board.error), "data": result})
        return 1

    _print({"success": True, "data": result})
    return 0


def cmd_focus(args):
    """Run a focus countdown on one action."""
    from .voids.focus_timer import TIMES_UP_MESSAGE, FocusTimer
    from .voids.service import get_next_action

    user = _require_user(args)
    found = get_next_action(args.action_id, user_id=user)
    if not found["success"]:
        _print(found)
        return 1

    action = found["data"]
    if action["completed"]:
        print("That one's already done.")
        return 0

    timer = FocusTimer(action, minutes=args.minutes)
    print(f"Current Focus: {action['description']}")
    timer.toggle()

    try:
        while timer.is_running:
            print(f"\r  {timer.display}", end="", flush=True)
            time.sleep(1)
    except KeyboardInterrupt:
        timer.toggle()
        print(f"\r  {timer.display}  (paused)")
        if not args.complete:
            return 0

    if timer.times_up:
        print(f"\r  {timer.display}\n{TIMES_UP_MESSAGE}")

    if args.complete:
        result = timer.complete()
        _print(result)
        return 0 if result["success"] else 1
    return 0


def cmd_suggest(args):
    """Ask the model for next-action ideas."""
    from .ai.suggestions import SuggestionError, suggest_next_actions

    try:
        suggestions = suggest_next_actions(args.title, args.description)
    except SuggestionError as e:
        _print({"success": False, "error": e.message, "code": e.code})
        return 1

    _print({"success": True, "data": {"suggestions": suggestions}})
    return 0


def main():
    parser = argparse.ArgumentParser(
        prog="momentum",
        description="Momentum - get unstuck one small action at a time",
    )
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.add_argument("--user", help="User ID (defaults to $MOMENTUM_USER)")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # serve
    serve_parser = subparsers.add_parser("serve", help="Start the API server")
    serve_parser.add_argument("--host", help="Bind host")
    serve_parser.add_argument("--port", type=int, help="Bind port")
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    serve_parser.set_defaults(func=cmd_serve)

    # stuck
    stuck_parser = subparsers.add_parser("stuck", help="Record what you're avoiding")
    stuck_parser.add_argument("title", help="What are you avoiding?")
    stuck_parser.add_argument("--description", help="What makes it hard?")
    stuck_parser.add_argument("--next", help="Smallest next physical action")
    stuck_parser.add_argument("--minutes", type=int, help="Estimated minutes for the next action")
    stuck_parser.set_defaults(func=cmd_stuck)

    # today
    today_parser = subparsers.add_parser("today", help="Show today's next actions")
    today_parser.add_argument("--json", action="store_true", help="Print JSON")
    today_parser.set_defaults(func=cmd_today)

    # add
    add_parser = subparsers.add_parser("add", help="Add a next action")
    add_parser.add_argument("description", help="Next action description")
    add_parser.add_argument("--minutes", type=int, help="Estimated minutes")
    add_parser.set_defaults(func=cmd_add)

    # toggle
    toggle_parser = subparsers.add_parser("toggle", help="Mark an action done or not done")
    toggle_parser.add_argument("action_id", help="Next action ID")
    toggle_parser.set_defaults(func=cmd_toggle)

    # focus
    focus_parser = subparsers.add_parser("focus", help="Run a focus timer on one action")
    focus_parser.add_argument("action_id", help="Next action ID")
    focus_parser.add_argument("--minutes", type=int, help="Timer length (default: action estimate or 10)")
    focus_parser.add_argument("--complete", action="store_true", help="Mark the action done when the timer ends")
    focus_parser.set_defaults(func=cmd_focus)

    # suggest
    suggest_parser = subparsers.add_parser("suggest", help="AI suggestions for next actions")
    suggest_parser.add_argument("title", help="What are you avoiding?")
    suggest_parser.add_argument("--description", help="What makes it hard?")
    suggest_parser.set_defaults(func=cmd_suggest)

    args = parser.parse_args()

    if args.version:
        cmd_version(args)
        return

    if not args.command:
        parser.print_help()
        return

    from .logging_config import setup_logging
    setup_logging(level=os.environ.get("MOMENTUM_LOG_LEVEL", "WARNING"))

    result = args.func(args)

    if isinstance(result, int) and result != 0:
        sys.exit(result)


if __name__ == "__main__":
    main()
