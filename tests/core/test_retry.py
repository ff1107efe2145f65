import pytest

from rag_workshop.core.retry import poll_until


class TestPollUntil:
    """Tests for the bounded polling helper."""

    def test_returns_on_first_success(self, no_sleep):
        ok, value, attempts = poll_until(lambda: 42, lambda v: v == 42, sleep=no_sleep.append)
        assert ok is True
        assert value == 42
        assert attempts == 1
        assert no_sleep == []

    def test_retries_until_predicate_holds(self, no_sleep):
        values = iter([None, None, "ready"])
        ok, value, attempts = poll_until(
            lambda: next(values), lambda v: v == "ready",
            max_attempts=5, interval=2, sleep=no_sleep.append,
        )
        assert ok is True
        assert value == "ready"
        assert attempts == 3
        assert no_sleep == [2, 2]

    def test_exhausts_attempts_without_trailing_sleep(self, no_sleep):
        ok, value, attempts = poll_until(
            lambda: False, max_attempts=30, interval=2, sleep=no_sleep.append,
        )
        assert ok is False
        assert value is False
        assert attempts == 30
        assert len(no_sleep) == 29

    def test_rejects_zero_attempts(self):
        with pytest.raises(ValueError):
            poll_until(lambda: True, max_attempts=0)
