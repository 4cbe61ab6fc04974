"""Tests for NullRetryHandler."""

import pytest

from legacy_api.domain.request import RequestSpec
from legacy_api.domain.response import ApiResponse, Ok
from legacy_api.retry import NullRetryHandler


@pytest.fixture
def null_retry_handler():
    """Provide a NullRetryHandler instance for testing."""
    return NullRetryHandler()


@pytest.fixture
def spec():
    return RequestSpec(method="post", resource="/users")


class TestNullRetryHandler:
    """Test NullRetryHandler null object implementation."""

    @pytest.mark.asyncio
    async def test_sends_once(self, null_retry_handler, spec):
        call_count = 0

        async def operation(attempt):
            nonlocal call_count
            call_count += 1
            return ApiResponse(status=200)

        outcome = await null_retry_handler.execute_with_retry(operation, spec, "url")

        assert isinstance(outcome, Ok)
        assert outcome.attempts == 1
        assert call_count == 1

    @pytest.mark.asyncio
    async def test_error_status_returned_as_is(self, null_retry_handler, spec):
        """Without a policy there is nothing to reject, so a 500 is the result."""

        async def operation(attempt):
            return ApiResponse(status=500, body=b"oops")

        outcome = await null_retry_handler.execute_with_retry(operation, spec, "url")

        assert outcome.response.status == 500
        assert outcome.response.synthetic is False

    @pytest.mark.asyncio
    async def test_propagates_exceptions(self, null_retry_handler, spec):
        call_count = 0

        async def operation(attempt):
            nonlocal call_count
            call_count += 1
            raise ConnectionError("refused")

        with pytest.raises(ConnectionError, match="refused"):
            await null_retry_handler.execute_with_retry(operation, spec, "url")

        assert call_count == 1
