"""Tests for momentum/voids/retry.py"""

import sqlite3
from unittest.mock import MagicMock, patch

import pytest

from momentum.voids.retry import get_retry_settings, is_transient, with_retry


class TestIsTransient:
    """Which store errors are worth another try."""

    @pytest.mark.parametrize(
        "message",
        ["database is locked", "database table is locked", "Database is busy"],
    )
    def test_lock_errors_are_transient(self, message):
        assert is_transient(sqlite3.OperationalError(message)) is True

    def test_other_operational_errors_are_not(self):
        assert is_transient(sqlite3.OperationalError("no such table: voids")) is False

    def test_integrity_errors_are_not(self):
        assert is_transient(sqlite3.IntegrityError("UNIQUE constraint failed")) is False

    def test_plain_exceptions_are_not(self):
        assert is_transient(ValueError("database is locked")) is False


class TestWithRetry:
    """Tests for the retry decorator."""

    def test_returns_first_success(self, no_retry_sleep):
        func = MagicMock(return_value="ok")
        wrapped = with_retry(max_attempts=3, retry_delay=0.1)(func)

        assert wrapped() == "ok"
        assert func.call_count == 1
        no_retry_sleep.assert_not_called()

    def test_retries_transient_then_succeeds(self, no_retry_sleep):
        func = MagicMock(
            side_effect=[sqlite3.OperationalError("database is locked"), "ok"],
            __name__="flaky",
        )
        wrapped = with_retry(max_attempts=3, retry_delay=0.1)(func)

        assert wrapped() == "ok"
        assert func.call_count == 2

    def test_backoff_doubles(self, no_retry_sleep):
        func = MagicMock(
            side_effect=sqlite3.OperationalError("database is locked"),
            __name__="always_locked",
        )
        wrapped = with_retry(max_attempts=3, retry_delay=0.1)(func)

        with pytest.raises(sqlite3.OperationalError):
            wrapped()

        assert func.call_count == 3
        delays = [c.args[0] for c in no_retry_sleep.call_args_list]
        assert delays == pytest.approx([0.1, 0.2])

    def test_non_transient_error_raised_immediately(self, no_retry_sleep):
        func = MagicMock(side_effect=sqlite3.IntegrityError("NOT NULL constraint failed"))
        wrapped = with_retry(max_attempts=3, retry_delay=0.1)(func)

        with pytest.raises(sqlite3.IntegrityError):
            wrapped()

        assert func.call_count == 1
        no_retry_sleep.assert_not_called()

    def test_single_attempt_never_sleeps(self, no_retry_sleep):
        func = MagicMock(side_effect=sqlite3.OperationalError("database is locked"))
        wrapped = with_retry(max_attempts=1)(func)

        with pytest.raises(sqlite3.OperationalError):
            wrapped()

        no_retry_sleep.assert_not_called()

    def test_custom_predicate(self, no_retry_sleep):
        func = MagicMock(side_effect=[TimeoutError("slow"), "ok"], __name__="slow_call")
        wrapped = with_retry(max_attempts=2, retry_delay=0, retry_on=lambda e: isinstance(e, TimeoutError))(func)

        assert wrapped() == "ok"

    def test_preserves_function_name(self):
        @with_retry()
        def complete_next_action():
            return None

        assert complete_next_action.__name__ == "complete_next_action"


class TestRetrySettings:
    def test_reads_config(self):
        with patch(
            "momentum.voids.retry.get_section",
            return_value={"retry": {"max_attempts": 5, "retry_delay_seconds": 0.25}},
        ):
            assert get_retry_settings() == (5, 0.25)

    def test_falls_back_to_defaults(self):
        with patch("momentum.voids.retry.get_section", return_value={}):
            assert get_retry_settings() == (3, 0.1)

    def test_clamps_attempts_to_one(self):
        with patch("momentum.voids.retry.get_section", return_value={"retry": {"max_attempts": 0}}):
            attempts, _ = get_retry_settings()

        assert attempts == 1
