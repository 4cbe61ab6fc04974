#!/usr/bin/env python3
"""
02_retry_handling.py - Predicate-driven retry

Demonstrates:
- Retrying until a caller-supplied predicate accepts the response
- Subscribing to retry events for observability
- The exhaustion sentinel from execute() versus the last real response
  kept by send()

Note: Uses httpbin.org/status/503, which always fails.
Requires internet connection to run.
"""

import asyncio
from datetime import datetime

from legacy_api import (
    AiohttpTransport,
    LegacyApiClient,
    RetriesExhausted,
    RetryUntil,
    StaticTokenProvider,
    accept_unless_transient,
)
from legacy_api.events import EventEmitter, RequestRetryingEvent

SPEC = {
    "method": "get",
    "resource": "/status/503",
    "apiUrl": "https://httpbin.org/status/503",
    "shouldRetry": True,
    "maxRetries": 3,
    "retryDelayMilliseconds": 500,
}


def on_retry(event: RequestRetryingEvent) -> None:
    ts = datetime.now().strftime("%H:%M:%S.%f")[:-3]
    print(
        f"  [{ts}] Attempt {event.attempt}/{event.max_attempts} got HTTP "
        f"{event.status}, retrying in {event.delay_ms}ms"
    )


async def main() -> None:
    emitter = EventEmitter()
    emitter.on("request.retrying", on_retry)

    async with LegacyApiClient(
        AiohttpTransport(), StaticTokenProvider("example-token"), emitter=emitter
    ) as client:
        print("execute(): legacy behaviour")
        response = await client.execute(SPEC, accept_unless_transient)
        print(f"  -> HTTP {response.status} {response.text!r}\n")

        print("send(): explicit policy, last response kept")
        policy = RetryUntil(accept_unless_transient, max_attempts=3, delay_ms=500)
        outcome = await client.send(SPEC, policy)
        if isinstance(outcome, RetriesExhausted):
            print(
                f"  -> gave up after {outcome.attempts} attempts, "
                f"server said HTTP {outcome.last_response.status}"
            )


if __name__ == "__main__":
    asyncio.run(main())
