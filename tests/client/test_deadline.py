"""Tests for deadlines and cancellation around a request."""

import asyncio

import pytest

from legacy_api.domain.exceptions import RequestDeadlineExceededError
from legacy_api.domain.predicates import accept_success
from legacy_api.domain.retry import RetryUntil
from tests.fakes import BASE_URL, response

SPEC = {"method": "get", "resource": "/reports/42"}


def slow_down(fake_transport, delay):
    """Make every send take ``delay`` seconds."""
    original = fake_transport.send

    async def send(request):
        await asyncio.sleep(delay)
        return await original(request)

    fake_transport.send = send


class TestDeadline:
    @pytest.mark.asyncio
    async def test_deadline_expires_during_retry_sleep(self, client, fake_transport):
        policy = RetryUntil(accept_success, max_attempts=3, delay_ms=5_000)
        fake_transport.queue(response(503))

        with pytest.raises(RequestDeadlineExceededError) as exc_info:
            await client.send(SPEC, policy, deadline=0.05)

        assert exc_info.value.url == f"{BASE_URL}/api/v1/reports/42"
        assert exc_info.value.deadline == 0.05
        assert len(fake_transport.requests) == 1

    @pytest.mark.asyncio
    async def test_deadline_covers_in_flight_attempt(self, client, fake_transport):
        slow_down(fake_transport, 5)

        with pytest.raises(RequestDeadlineExceededError):
            await client.execute(SPEC, deadline=0.05)

    @pytest.mark.asyncio
    async def test_deadline_error_chained_to_timeout(self, client, fake_transport):
        slow_down(fake_transport, 5)

        with pytest.raises(RequestDeadlineExceededError) as exc_info:
            await client.execute(SPEC, deadline=0.01)

        assert isinstance(exc_info.value.__cause__, TimeoutError)

    @pytest.mark.asyncio
    async def test_generous_deadline_does_not_interfere(self, client, fake_transport):
        fake_transport.queue(response(503), response(200))
        policy = RetryUntil(accept_success, max_attempts=2, delay_ms=0)

        outcome = await client.send(SPEC, policy, deadline=5)

        assert outcome.response.status == 200

    @pytest.mark.asyncio
    async def test_transport_timeout_not_reported_as_deadline(
        self, client, fake_transport
    ):
        fake_transport.queue(asyncio.TimeoutError())

        with pytest.raises(TimeoutError) as exc_info:
            await client.execute(SPEC, deadline=5)

        assert not isinstance(exc_info.value, RequestDeadlineExceededError)


class TestCancellation:
    @pytest.mark.asyncio
    async def test_cancel_during_retry_sleep(self, client, fake_transport):
        fake_transport.queue(response(503))
        policy = RetryUntil(accept_success, max_attempts=3, delay_ms=10_000)

        task = asyncio.create_task(client.send(SPEC, policy))
        while not fake_transport.requests:
            await asyncio.sleep(0)
        await asyncio.sleep(0.01)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert len(fake_transport.requests) == 1
