"""
Tool: AI Suggestions
Purpose: Ask a hosted model for next-action ideas and return them as a list

The model is asked for a JSON array, but it often wraps the array in a
markdown fence or adds a sentence before it. We take everything from the
first "[" to the last "]" and parse that.

Usage:
    python -m momentum.ai.suggestions --prompt 'Return a JSON array of three tiny first steps for "write the report"'
    python -m momentum.ai.suggestions --title "Quarterly report" --description "Don't know where to start"

Dependencies:
    - anthropic (hosted model client)
    - ANTHROPIC_API_KEY environment variable

Output:
    JSON result with suggestions list
"""

import argparse
import json
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from . import ERROR_CODES
from ..config import get_section

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-3-haiku-20240307"

# Short, varied answers: a handful of one-line actions
DEFAULT_GENERATION_CONFIG = {
    "max_tokens": 256,
    "temperature": 0.8,
    "top_p": 0.95,
}


class SuggestionError(Exception):
    """Failure surfaced to callers with a stable code and a user-safe message."""

    def __init__(self, code: str, message: str):
        if code not in ERROR_CODES:
            raise ValueError(f"Unknown suggestion error code: {code}")
        super().__init__(message)
        self.code = code
        self.message = message


def load_ai_config() -> Dict[str, Any]:
    """Model name and generation settings, config over defaults."""
    ai_config = get_section("ai")
    return {
        "model": ai_config.get("model", DEFAULT_MODEL),
        **{key: ai_config.get(key, value) for key, value in DEFAULT_GENERATION_CONFIG.items()},
    }


def get_client():
    """Create the hosted-model client from the environment."""
    try:
        import anthropic
    except ImportError:
        raise SuggestionError("internal", "anthropic package not installed. Run: pip install anthropic")

    api_key = os.environ.get("ANTHROPIC_API_KEY")
    if not api_key:
        raise SuggestionError("internal", "ANTHROPIC_API_KEY not set")

    return anthropic.Anthropic(api_key=api_key)


def extract_json_array(content: str) -> Optional[str]:
    """Return the text from the first '[' to the last ']' or None if there isn't one."""
    start = content.find("[")
    end = content.rfind("]")
    if start == -1 or end == -1 or end < start:
        return None
    return content[start:end + 1]


def _response_text(message: Any) -> str:
    blocks = getattr(message, "content", None) or []
    if not blocks:
        return ""
    return getattr(blocks[0], "text", "") or ""


def get_ai_suggestions(prompt: Optional[str], client: Any = None) -> Dict[str, List[Any]]:
    """
    Send a prompt to the hosted model and return the JSON array it answers with.

    Args:
        prompt: Full prompt text; it should ask for a JSON array
        client: Model client (defaults to one built from the environment)

    Returns:
        {"suggestions": [...]}

    Raises:
        SuggestionError: "invalid-argument" for a missing prompt, "internal"
            for anything that goes wrong talking to or parsing the model
    """
    logger.info(f"get_ai_suggestions called with new prompt: {prompt!r}")

    if not prompt or not str(prompt).strip():
        raise SuggestionError(
            "invalid-argument",
            'The function must be called with a "prompt" argument.',
        )

    try:
        if client is None:
            client = get_client()

        config = load_ai_config()
        message = client.messages.create(
            model=config["model"],
            max_tokens=config["max_tokens"],
            temperature=config["temperature"],
            top_p=config["top_p"],
            messages=[{"role": "user", "content": prompt}],
        )
        content = _response_text(message)

        if not content:
            logger.error("No content returned from model")
            raise SuggestionError("internal", "Failed to get suggestions.")

        logger.info(f"Raw response from model: {content!r}")

        json_string = extract_json_array(content)
        if json_string is None:
            logger.error(f"Could not find JSON array in the model response: {content!r}")
            raise SuggestionError("internal", "Failed to parse suggestions from AI response.")

        logger.info(f"Attempting to parse cleaned JSON string: {json_string!r}")
        suggestions = json.loads(json_string)

        if not isinstance(suggestions, list):
            raise ValueError("Response is not a JSON array.")

        return {"suggestions": suggestions}

    except SuggestionError:
        raise
    except Exception as e:
        logger.error(f"Error calling model: {e}")
        raise SuggestionError("internal", "An unexpected error occurred.") from e


def build_next_action_prompt(title: str, description: Optional[str] = None, count: Optional[int] = None) -> str:
    """
    Build the prompt that asks for small physical next actions for a void.

    Args:
        title: What the user is avoiding
        description: What makes it hard (optional)
        count: How many suggestions (config default 3)

    Returns:
        Prompt text asking for a JSON array of strings
    """
    if count is None:
        count = int(get_section("ai").get("suggestion_count", 3))

    context = f"\nWhat makes it hard: {description.strip()}" if description and description.strip() else ""

    return (
        "Someone is feeling stuck and avoiding a task.\n"
        f"Task: {title.strip()}{context}\n\n"
        f"Suggest {count} different next actions they could start right now.\n"
        "RULES:\n"
        "1. Each action is a single physical step that takes 5-15 minutes\n"
        "2. Start each action with a verb (open, write, find, send, list)\n"
        "3. Be specific: name the document, person, or place where you can\n"
        "4. Keep each action under 15 words\n\n"
        "Respond with a JSON array of strings only."
    )


def suggest_next_actions(title: str, description: Optional[str] = None, client: Any = None) -> List[str]:
    """Suggestions for a void, as plain strings."""
    if not title or not title.strip():
        raise SuggestionError("invalid-argument", "A title is required to suggest next actions.")

    result = get_ai_suggestions(build_next_action_prompt(title, description), client=client)
    return [str(s).strip() for s in result["suggestions"] if str(s).strip()]


def main():
    parser = argparse.ArgumentParser(description="AI Suggestions - next-action ideas from a hosted model")
    parser.add_argument("--prompt", help="Raw prompt to forward")
    parser.add_argument("--title", help="What you're avoiding (builds the prompt for you)")
    parser.add_argument("--description", help="What makes it hard")

    args = parser.parse_args()

    try:
        if args.title:
            result = {"success": True, "data": {"suggestions": suggest_next_actions(args.title, args.description)}}
        else:
            result = {"success": True, "data": get_ai_suggestions(args.prompt)}
    except SuggestionError as e:
        result = {"success": False, "error": e.message, "code": e.code}

    print(json.dumps(result, indent=2, default=str))
    if not result.get("success"):
        sys.exit(1)


if __name__ == "__main__":
    main()
