"""Tests for momentum/ai/suggestions.py

The suggestion proxy forwards a prompt to a hosted model and pulls a JSON
array out of whatever text comes back. Failures surface as SuggestionError
with a stable code.
"""

from unittest.mock import patch

import pytest

from momentum.ai.suggestions import (
    SuggestionError,
    build_next_action_prompt,
    extract_json_array,
    get_ai_suggestions,
    get_client,
    suggest_next_actions,
)


# ─────────────────────────────────────────────────────────────────────────────
# JSON Extraction Tests
# ─────────────────────────────────────────────────────────────────────────────


class TestExtractJsonArray:
    def test_plain_array(self):
        assert extract_json_array('["a", "b"]') == '["a", "b"]'

    def test_fenced_array(self):
        content = '```json\n["Open the doc", "List three numbers"]\n```'

        assert extract_json_array(content) == '["Open the doc", "List three numbers"]'

    def test_takes_first_open_to_last_close(self):
        content = 'Sure! [["a"], ["b"]] hope that helps'

        assert extract_json_array(content) == '[["a"], ["b"]]'

    def test_no_brackets(self):
        assert extract_json_array("I can't help with that") is None

    def test_close_before_open(self):
        assert extract_json_array("] then [") is None


# ─────────────────────────────────────────────────────────────────────────────
# Proxy Tests
# ─────────────────────────────────────────────────────────────────────────────


class TestGetAiSuggestions:
    """Tests for the prompt proxy."""

    def test_returns_parsed_array(self, fake_model_client):
        client = fake_model_client('Here you go:\n```json\n["Open the doc", "Write one line"]\n```')

        result = get_ai_suggestions("Give me two steps as a JSON array", client=client)

        assert result == {"suggestions": ["Open the doc", "Write one line"]}

    def test_sends_generation_settings(self, fake_model_client):
        client = fake_model_client('["x"]')

        get_ai_suggestions("prompt", client=client)

        kwargs = client.messages.create.call_args.kwargs
        assert kwargs["max_tokens"] == 256
        assert kwargs["temperature"] == 0.8
        assert kwargs["top_p"] == 0.95
        assert kwargs["messages"] == [{"role": "user", "content": "prompt"}]

    def test_keeps_non_string_items(self, fake_model_client):
        client = fake_model_client('[{"step": "Open the doc", "minutes": 5}]')

        result = get_ai_suggestions("prompt", client=client)

        assert result["suggestions"][0]["minutes"] == 5

    @pytest.mark.parametrize("prompt", [None, "", "   "])
    def test_missing_prompt_is_invalid_argument(self, prompt, fake_model_client):
        client = fake_model_client('["x"]')

        with pytest.raises(SuggestionError) as exc_info:
            get_ai_suggestions(prompt, client=client)

        assert exc_info.value.code == "invalid-argument"
        assert exc_info.value.message == 'The function must be called with a "prompt" argument.'
        client.messages.create.assert_not_called()

    def test_empty_response(self, fake_model_client):
        with pytest.raises(SuggestionError) as exc_info:
            get_ai_suggestions("prompt", client=fake_model_client(None))

        assert exc_info.value.code == "internal"
        assert exc_info.value.message == "Failed to get suggestions."

    def test_response_without_array(self, fake_model_client):
        with pytest.raises(SuggestionError) as exc_info:
            get_ai_suggestions("prompt", client=fake_model_client("No list today."))

        assert exc_info.value.code == "internal"
        assert exc_info.value.message == "Failed to parse suggestions from AI response."

    def test_malformed_json(self, fake_model_client):
        with pytest.raises(SuggestionError) as exc_info:
            get_ai_suggestions("prompt", client=fake_model_client('["unterminated]'))

        assert exc_info.value.code == "internal"
        assert exc_info.value.message == "An unexpected error occurred."

    def test_client_failure(self, fake_model_client):
        client = fake_model_client('["x"]')
        client.messages.create.side_effect = ConnectionError("network down")

        with pytest.raises(SuggestionError) as exc_info:
            get_ai_suggestions("prompt", client=client)

        assert exc_info.value.code == "internal"
        assert exc_info.value.message == "An unexpected error occurred."

    def test_missing_api_key(self, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)

        with pytest.raises(SuggestionError) as exc_info:
            get_ai_suggestions("prompt")

        assert exc_info.value.code == "internal"


class TestSuggestionError:
    def test_rejects_unknown_code(self):
        with pytest.raises(ValueError):
            SuggestionError("not-a-code", "oops")


class TestGetClient:
    def test_requires_api_key(self, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)

        with pytest.raises(SuggestionError, match="ANTHROPIC_API_KEY"):
            get_client()


# ─────────────────────────────────────────────────────────────────────────────
# Next Action Suggestion Tests
# ─────────────────────────────────────────────────────────────────────────────


class TestSuggestNextActions:
    def test_prompt_mentions_task_and_context(self):
        prompt = build_next_action_prompt("Quarterly report", "Too many numbers", count=4)

        assert "Task: Quarterly report" in prompt
        assert "What makes it hard: Too many numbers" in prompt
        assert "Suggest 4 different next actions" in prompt
        assert "JSON array" in prompt

    def test_prompt_without_description(self):
        prompt = build_next_action_prompt("Taxes")

        assert "What makes it hard" not in prompt
        assert "Suggest 3 different next actions" in prompt

    def test_returns_clean_strings(self, fake_model_client):
        client = fake_model_client('["  Open the doc  ", "", "Find the receipts folder"]')

        suggestions = suggest_next_actions("Taxes", client=client)

        assert suggestions == ["Open the doc", "Find the receipts folder"]

    def test_blank_title(self, fake_model_client):
        client = fake_model_client('["x"]')

        with pytest.raises(SuggestionError) as exc_info:
            suggest_next_actions("  ", client=client)

        assert exc_info.value.code == "invalid-argument"
        client.messages.create.assert_not_called()

    def test_uses_configured_count(self, fake_model_client):
        client = fake_model_client('["x"]')

        with patch("momentum.ai.suggestions.get_section", return_value={"suggestion_count": 5}):
            suggest_next_actions("Taxes", client=client)

        prompt = client.messages.create.call_args.kwargs["messages"][0]["content"]
        assert "Suggest 5 different next actions" in prompt
