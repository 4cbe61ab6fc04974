"""Client for the legacy API with predicate-driven retry.

The client turns a declarative RequestSpec into a PreparedRequest (URL,
headers, body, file parts), hands it to a transport, and lets a retry
handler decide whether to send it again.
"""

import asyncio
import time
import typing as t

from multidict import CIMultiDict

from ..auth import BaseTokenProvider, StaticTokenProvider
from ..config.settings import Settings
from ..domain.constants import (
    DEFAULT_CONTENT_TYPE,
    HEADER_AUTHORIZATION,
    HEADER_CONTENT_TYPE,
    HEADER_DEVICE_ID,
)
from ..domain.exceptions import RequestDeadlineExceededError
from ..domain.request import (
    FileAttachment,
    FilePart,
    PreparedRequest,
    RequestSpec,
)
from ..domain.response import ApiResponse, RequestOutcome
from ..domain.retry import NO_RETRY, RetryPolicy, RetryPredicate, RetryUntil
from ..events import BaseEmitter, NullEmitter, RequestSentEvent
from ..infrastructure.http import BaseTransport
from ..infrastructure.logging import get_logger
from ..retry import Attempt, create_retry_handler
from ..services import BaseService
from ..validation import BaseValidator

if t.TYPE_CHECKING:
    import loguru

SpecInput = RequestSpec | t.Mapping[str, t.Any]


class LegacyApiClient(BaseService):
    """Sends requests to the legacy API and retries them on demand.

    Instance defaults (base URL, API version, retry settings) come from
    Settings and are read-only after construction, so one client can be
    shared by concurrent callers. Each call works on its own RequestSpec.

    Usage:
        async with LegacyApiClient(AiohttpTransport(), token_provider) as client:
            response = await client.execute(
                {"method": "get", "resource": "/users", "shouldRetry": True},
                retry_predicate=accept_success,
            )
    """

    def __init__(
        self,
        transport: BaseTransport,
        token_provider: BaseTokenProvider | None = None,
        settings: Settings | None = None,
        validator: BaseValidator | None = None,
        logger: "loguru.Logger" = get_logger(__name__),
        emitter: BaseEmitter | None = None,
    ) -> None:
        """Initialise the client.

        Args:
            transport: Performs the HTTP calls
            token_provider: Supplies the access token for the Authorization
                header. If None, the token from settings is used.
            settings: Instance defaults. If None, loaded from the environment.
            validator: Schema validator for incoming specs. If None, a
                pydantic SchemaValidator is used.
            logger: Logger for request and retry messages
            emitter: Event emitter for request events. If None, events are dropped.
        """
        super().__init__(validator)
        self.transport = transport
        self.settings = settings if settings is not None else Settings()
        self.token_provider = (
            token_provider
            if token_provider is not None
            else StaticTokenProvider(self._settings_token())
        )
        self.logger = logger
        self.emitter = emitter if emitter is not None else NullEmitter()

    def _settings_token(self) -> str | None:
        token = self.settings.access_token
        return token.get_secret_value() if token is not None else None

    @property
    def schema(self) -> type[RequestSpec]:
        return RequestSpec

    def validate(self, data: SpecInput) -> RequestSpec:
        return t.cast(RequestSpec, super().validate(data))

    async def __aenter__(self) -> "LegacyApiClient":
        await self.transport.open()
        return self

    async def __aexit__(self, *args: t.Any) -> None:
        await self.transport.close()

    # ========== Public API ==========

    async def execute(
        self,
        spec: SpecInput,
        retry_predicate: RetryPredicate | None = None,
        files: t.Sequence[FileAttachment] | None = None,
        *,
        deadline: float | None = None,
    ) -> ApiResponse:
        """Validate and send a request, retrying while the predicate rejects.

        Retries happen only when the request (or the settings) enables
        ``should_retry`` and a predicate is supplied. When every attempt is
        rejected the legacy sentinel (HTTP 500, "All retries failed",
        ``synthetic=True``) is returned; use ``send`` to get the last real
        response instead.

        Args:
            spec: RequestSpec or a mapping in its shape
            retry_predicate: Returns True to accept a response, False to retry
            files: Attachments; take precedence over ``spec.files``
            deadline: Overall time limit in seconds, retries included

        Returns:
            The accepted (or only) response, or the exhaustion sentinel.

        Raises:
            ValidationError: If ``spec`` is invalid. No request is sent.
            RequestDeadlineExceededError: If ``deadline`` expires.
            aiohttp.ClientError: Transport failures, unmodified.
        """
        validated = self.validate(spec)
        policy = self.resolve_retry_policy(validated, retry_predicate)
        outcome = await self._send_validated(validated, policy, files, deadline)
        return outcome.response

    async def send(
        self,
        spec: SpecInput,
        retry: RetryPolicy = NO_RETRY,
        files: t.Sequence[FileAttachment] | None = None,
        *,
        deadline: float | None = None,
    ) -> RequestOutcome:
        """Validate and send a request under an explicit retry policy.

        Unlike ``execute``, the request's retry fields are ignored; ``retry``
        alone decides. The result tells an accepted response apart from
        exhaustion, and exhaustion keeps the last real response.

        Raises:
            ValidationError: If ``spec`` is invalid. No request is sent.
            RequestDeadlineExceededError: If ``deadline`` expires.
            aiohttp.ClientError: Transport failures, unmodified.
        """
        validated = self.validate(spec)
        return await self._send_validated(validated, retry, files, deadline)

    def resolve_retry_policy(
        self, spec: RequestSpec, predicate: RetryPredicate | None
    ) -> RetryPolicy:
        """Map the request's retry fields and an optional predicate onto a policy."""
        should_retry = self._resolve(spec.should_retry, self.settings.should_retry)
        if not should_retry:
            return NO_RETRY
        if predicate is None:
            self.logger.warning(
                f"Retry requested without a retry predicate, sending once: "
                f"{spec.method.value} {spec.resource}"
            )
            return NO_RETRY
        return RetryUntil(
            predicate=predicate,
            max_attempts=self._resolve(spec.max_retries, self.settings.max_retries),
            delay_ms=self._resolve(
                spec.retry_delay_milliseconds, self.settings.retry_delay_milliseconds
            ),
        )

    # ========== Request building ==========

    async def prepare_request(
        self,
        spec: RequestSpec,
        files: t.Sequence[FileAttachment] = (),
    ) -> PreparedRequest:
        """Resolve URL, headers and file parts for one outbound request."""
        headers = await self.build_headers(spec)
        parts = tuple(
            [
                FilePart(
                    field_name=attachment.field_name,
                    file_name=attachment.resolved_file_name,
                    content=await attachment.read_content(),
                )
                for attachment in files
            ]
        )
        if parts:
            # The transport sets multipart/form-data with its own boundary
            headers.popall(HEADER_CONTENT_TYPE, None)

        return PreparedRequest(
            method=spec.method,
            url=self.build_url(spec),
            headers=headers,
            params=dict(spec.params),
            files=parts,
            debug=spec.debug,
        )

    def build_url(self, spec: RequestSpec) -> str:
        if spec.api_url:
            return spec.api_url
        base_url = self._resolve(spec.base_url, self.settings.base_url).rstrip("/")
        api_version = self._resolve(spec.api_version, self.settings.api_version)
        return f"{base_url}/api/{api_version}{spec.resource}"

    async def build_headers(self, spec: RequestSpec) -> CIMultiDict[str]:
        """Default headers overlaid with ``spec.headers`` (caller wins)."""
        headers = await self.default_headers()
        for name, value in spec.headers.items():
            headers[name] = value
        return headers

    async def default_headers(self) -> CIMultiDict[str]:
        token = await self.token_provider.get_token()
        return CIMultiDict(
            {
                HEADER_AUTHORIZATION: f"{self.settings.auth_scheme} {token}",
                HEADER_CONTENT_TYPE: DEFAULT_CONTENT_TYPE,
                HEADER_DEVICE_ID: self.settings.device_id,
            }
        )

    # ========== Sending ==========

    async def _send_validated(
        self,
        spec: RequestSpec,
        policy: RetryPolicy,
        files: t.Sequence[FileAttachment] | None,
        deadline: float | None,
    ) -> RequestOutcome:
        url = self.build_url(spec)
        handler = create_retry_handler(policy, logger=self.logger, emitter=self.emitter)

        try:
            async with asyncio.timeout(deadline) as scope:
                attempt = await self._build_attempt(spec, policy, files)
                return await handler.execute_with_retry(attempt, spec, url)
        except TimeoutError as e:
            # Transport timeouts are TimeoutErrors too; only ours is converted
            if scope.expired():
                self.logger.error(
                    f"Deadline of {deadline}s exceeded: {spec.method.value} {url}"
                )
                raise RequestDeadlineExceededError(url, t.cast(float, deadline)) from e
            raise

    async def _build_attempt(
        self,
        spec: RequestSpec,
        policy: RetryPolicy,
        files: t.Sequence[FileAttachment] | None,
    ) -> Attempt:
        """Prepare the outbound requests once and return the attempt callable."""
        attachments = list(files) if files is not None else spec.files
        first_request = await self.prepare_request(spec, attachments)

        if isinstance(policy, RetryUntil) and attachments and not policy.resend_files:
            retry_request = await self.prepare_request(spec)
        else:
            retry_request = first_request

        async def attempt(number: int) -> ApiResponse:
            request = first_request if number == 1 else retry_request
            return await self._dispatch(request, number)

        return attempt

    async def _dispatch(self, request: PreparedRequest, attempt: int) -> ApiResponse:
        started = time.monotonic()
        response = await self.transport.send(request)
        elapsed_ms = (time.monotonic() - started) * 1000

        self.logger.debug(
            f"{request.method.value} {request.url} -> {response.status} "
            f"({elapsed_ms:.0f}ms, attempt {attempt})"
        )
        await self.emitter.emit(
            "request.sent",
            RequestSentEvent(
                method=request.method.value,
                url=request.url,
                attempt=attempt,
                status=response.status,
                elapsed_ms=elapsed_ms,
            ),
        )
        return response

    @staticmethod
    def _resolve(value: t.Any, default: t.Any) -> t.Any:
        return value if value is not None else default
