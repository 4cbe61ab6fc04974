"""Tests for LegacyApiClient.execute: validation, retry and sentinel behaviour."""

import aiohttp
import pytest

from legacy_api.client import LegacyApiClient
from legacy_api.config.settings import Settings
from legacy_api.domain.exceptions import ValidationError
from legacy_api.domain.predicates import accept_success
from legacy_api.domain.request import FileAttachment, RequestSpec
from legacy_api.events import RequestSentEvent
from legacy_api.validation import SchemaValidator
from tests.fakes import BASE_URL, FakeTransport, response


def always_reject(result, spec):
    return False


def retry_spec(**fields):
    spec = {
        "method": "get",
        "resource": "/users",
        "shouldRetry": True,
        "maxRetries": 3,
        "retryDelayMilliseconds": 0,
    }
    spec.update(fields)
    return spec


class TestValidation:
    @pytest.mark.asyncio
    async def test_missing_resource_sends_nothing(self, client, fake_transport):
        with pytest.raises(ValidationError) as exc_info:
            await client.execute({"method": "get"})

        assert "resource" in exc_info.value.errors
        assert fake_transport.requests == []

    @pytest.mark.asyncio
    async def test_unsupported_method_sends_nothing(self, client, fake_transport):
        with pytest.raises(ValidationError) as exc_info:
            await client.execute({"method": "PATCH", "resource": "/users"})

        assert "method" in exc_info.value.errors
        assert fake_transport.requests == []

    @pytest.mark.asyncio
    async def test_invalid_retry_settings_send_nothing(self, client, fake_transport):
        with pytest.raises(ValidationError):
            await client.execute(retry_spec(maxRetries=0), accept_success)

        assert fake_transport.requests == []

    @pytest.mark.asyncio
    async def test_validated_once_across_retries(
        self, fake_transport, token_provider, test_settings, mocker
    ):
        validator = SchemaValidator()
        spy = mocker.spy(validator, "validate")
        client = LegacyApiClient(
            fake_transport, token_provider, test_settings, validator=validator
        )
        fake_transport.queue(response(503), response(503), response(503))

        await client.execute(retry_spec(), accept_success)

        assert spy.call_count == 1
        assert len(fake_transport.requests) == 3


class TestSingleShot:
    @pytest.mark.asyncio
    async def test_returns_upstream_response(self, client, fake_transport):
        fake_transport.queue(response(201, b'{"id": 7}'))

        result = await client.execute({"method": "post", "resource": "/users"})

        assert result.status == 201
        assert result.json() == {"id": 7}
        assert len(fake_transport.requests) == 1

    @pytest.mark.asyncio
    async def test_should_retry_false_ignores_predicate(self, client, fake_transport):
        fake_transport.queue(response(500))

        result = await client.execute(retry_spec(shouldRetry=False), always_reject)

        assert result.status == 500
        assert result.synthetic is False
        assert len(fake_transport.requests) == 1

    @pytest.mark.asyncio
    async def test_should_retry_without_predicate_sends_once_with_warning(
        self, client, fake_transport, mock_logger
    ):
        fake_transport.queue(response(503))

        result = await client.execute(retry_spec())

        assert result.status == 503
        assert len(fake_transport.requests) == 1
        mock_logger.warning.assert_called_once()
        assert "without a retry predicate" in mock_logger.warning.call_args[0][0]

    @pytest.mark.asyncio
    async def test_accepts_request_spec_instance(self, client, fake_transport):
        await client.execute(RequestSpec(method="delete", resource="/users/1"))

        assert fake_transport.requests[0].method.value == "DELETE"
        assert fake_transport.requests[0].url == f"{BASE_URL}/api/v1/users/1"


class TestRetryBehaviour:
    @pytest.mark.asyncio
    async def test_always_rejected_returns_sentinel_after_max_retries(
        self, client, fake_transport
    ):
        result = await client.execute(
            retry_spec(maxRetries=3, retryDelayMilliseconds=10), always_reject
        )

        assert result.status == 500
        assert result.text == "All retries failed"
        assert result.synthetic is True
        assert len(fake_transport.requests) == 3

    @pytest.mark.asyncio
    async def test_attempts_spaced_by_delay(self, client, fake_transport):
        await client.execute(
            retry_spec(maxRetries=3, retryDelayMilliseconds=10), always_reject
        )

        sent_at = fake_transport.sent_at
        gaps = [later - earlier for earlier, later in zip(sent_at, sent_at[1:])]
        assert len(gaps) == 2
        assert all(gap >= 0.0095 for gap in gaps)

    @pytest.mark.asyncio
    async def test_accepted_on_second_attempt(self, client, fake_transport):
        fake_transport.queue(response(503), response(200, b'{"ok": true}'))

        result = await client.execute(retry_spec(maxRetries=3), accept_success)

        assert result.status == 200
        assert result.json() == {"ok": True}
        assert len(fake_transport.requests) == 2

    @pytest.mark.asyncio
    async def test_predicate_may_accept_error_status(self, client, fake_transport):
        fake_transport.queue(response(404))

        result = await client.execute(
            retry_spec(), lambda result, spec: result.status == 404
        )

        assert result.status == 404
        assert len(fake_transport.requests) == 1

    @pytest.mark.asyncio
    async def test_predicate_sees_validated_spec(self, client):
        seen = []

        def predicate(result, spec):
            seen.append(spec)
            return True

        await client.execute(retry_spec(resource="orders"), predicate)

        assert seen[0].resource == "/orders"
        assert seen[0].should_retry is True

    @pytest.mark.asyncio
    async def test_settings_supply_retry_defaults(self, fake_transport, token_provider):
        settings = Settings(
            base_url=BASE_URL,
            should_retry=True,
            max_retries=2,
            retry_delay_milliseconds=0,
        )
        client = LegacyApiClient(fake_transport, token_provider, settings)

        result = await client.execute(
            {"method": "get", "resource": "/users"}, always_reject
        )

        assert result.synthetic is True
        assert len(fake_transport.requests) == 2

    @pytest.mark.asyncio
    async def test_spec_overrides_settings_retry_flag(
        self, fake_transport, token_provider
    ):
        settings = Settings(base_url=BASE_URL, should_retry=True)
        client = LegacyApiClient(fake_transport, token_provider, settings)

        await client.execute(
            {"method": "get", "resource": "/users", "shouldRetry": False},
            always_reject,
        )

        assert len(fake_transport.requests) == 1

    @pytest.mark.asyncio
    async def test_every_attempt_sends_same_request(self, client, fake_transport):
        await client.execute(
            retry_spec(params={"q": "x"}, headers={"X-Trace": "1"}), always_reject
        )

        first, second, third = fake_transport.requests
        assert first == second == third
        assert first.params == {"q": "x"}


class TestFilesOnRetry:
    @pytest.mark.asyncio
    async def test_files_resent_on_every_attempt(self, client, fake_transport):
        attachment = FileAttachment(field_name="doc", content=b"data")

        await client.execute(
            retry_spec(method="post", maxRetries=2), always_reject, [attachment]
        )

        assert [len(request.files) for request in fake_transport.requests] == [1, 1]

    @pytest.mark.asyncio
    async def test_explicit_files_take_precedence(self, client, fake_transport):
        spec = retry_spec(
            method="post",
            shouldRetry=False,
            files=[{"fieldName": "from_spec", "content": b"a"}],
        )

        await client.execute(
            spec, files=[FileAttachment(field_name="explicit", content=b"b")]
        )

        assert [p.field_name for p in fake_transport.requests[0].files] == [
            "explicit"
        ]

    @pytest.mark.asyncio
    async def test_spec_files_used_without_explicit_files(
        self, client, fake_transport
    ):
        spec = retry_spec(
            method="post",
            shouldRetry=False,
            files=[{"fieldName": "from_spec", "content": b"a"}],
        )

        await client.execute(spec)

        assert [p.field_name for p in fake_transport.requests[0].files] == [
            "from_spec"
        ]


class TestTransportErrors:
    @pytest.mark.asyncio
    async def test_transport_error_propagates_without_retry(
        self, client, fake_transport
    ):
        fake_transport.queue(aiohttp.ClientConnectionError("refused"))

        with pytest.raises(aiohttp.ClientConnectionError, match="refused"):
            await client.execute(retry_spec(), accept_success)

        assert len(fake_transport.requests) == 1


class TestEvents:
    @pytest.mark.asyncio
    async def test_sent_event_per_attempt(self, client, fake_transport, mock_emitter):
        fake_transport.queue(response(503), response(200))

        await client.execute(retry_spec(), accept_success)

        sent = [
            call.args[1]
            for call in mock_emitter.emit.await_args_list
            if call.args[0] == "request.sent"
        ]
        assert [event.attempt for event in sent] == [1, 2]
        assert [event.status for event in sent] == [503, 200]
        assert all(isinstance(event, RequestSentEvent) for event in sent)
        assert sent[0].url == f"{BASE_URL}/api/v1/users"

    @pytest.mark.asyncio
    async def test_real_emitter_subscribers_notified(
        self, fake_transport, token_provider, test_settings, real_emitter
    ):
        client = LegacyApiClient(
            fake_transport, token_provider, test_settings, emitter=real_emitter
        )
        retrying = []
        real_emitter.on("request.retrying", retrying.append)

        await client.execute(retry_spec(maxRetries=2), always_reject)

        assert len(retrying) == 1
        assert retrying[0].status == 200


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_context_manager_opens_and_closes_transport(
        self, token_provider, test_settings
    ):
        transport = FakeTransport()

        async with LegacyApiClient(transport, token_provider, test_settings) as client:
            assert transport.opened is True
            await client.execute({"method": "get", "resource": "/users"})

        assert transport.closed is True
