"""
Unit tests for the Result type and its HTTP mapping.

Tests cover:
- Success and failure construction
- match / if_succ / if_fail
- to_ok status codes and bodies
"""

import json

import pytest

from api.src.exceptions import MovieNotAddedError, ValidationException, ValidationFailure
from api.src.responses import INTERNAL_ERROR_MESSAGE, to_ok
from api.src.result import Result


class TestResult:
    """Tests for Result."""

    def test_success(self):
        """Test a success exposes its value."""
        result = Result.success(42)

        assert result.is_success
        assert not result.is_faulted
        assert result.value == 42
        assert result.error is None

    def test_success_can_hold_false(self):
        """Test a falsy value is still a success."""
        assert Result.success(False).is_success

    def test_failure(self):
        """Test a failure exposes its exception."""
        error = RuntimeError("boom")
        result = Result.failure(error)

        assert result.is_faulted
        assert result.error is error

    def test_failure_requires_exception(self):
        """Test a failure cannot be built without an exception."""
        with pytest.raises(ValueError):
            Result.failure(None)

    def test_match(self):
        """Test match dispatches on the outcome."""
        assert Result.success(2).match(lambda v: v * 2, lambda e: -1) == 4
        assert Result.failure(RuntimeError()).match(lambda v: v, lambda e: -1) == -1

    def test_if_succ_and_if_fail(self):
        """Test side-effect helpers only run for the matching outcome."""
        seen = []

        Result.success("ok").if_succ(seen.append)
        Result.success("ok").if_fail(seen.append)
        error = RuntimeError("bad")
        Result.failure(error).if_fail(seen.append)
        Result.failure(error).if_succ(seen.append)

        assert seen == ["ok", error]


class TestToOk:
    """Tests for to_ok."""

    def test_success_maps_value(self):
        """Test success answers 200 with the mapped body."""
        response = to_ok(Result.success(True), lambda added: added)

        assert response.status_code == 200
        assert json.loads(response.body) is True

    def test_validation_failure_is_bad_request(self):
        """Test a ValidationException failure answers 400 problem details."""
        error = ValidationException([ValidationFailure("title", "'Title' must not be empty.")])

        response = to_ok(Result.failure(error), lambda value: value)

        assert response.status_code == 400
        body = json.loads(response.body)
        assert body["errors"] == {"title": ["'Title' must not be empty."]}

    def test_other_failure_is_server_error(self):
        """Test any other failure answers 500 plain text."""
        response = to_ok(Result.failure(MovieNotAddedError("nope")), lambda value: value)

        assert response.status_code == 500
        assert response.body.decode() == INTERNAL_ERROR_MESSAGE
        assert response.media_type == "text/plain"
