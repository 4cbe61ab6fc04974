#!/usr/bin/env python3
"""
01_basic_request.py - Simplest possible call

Demonstrates: Sending one GET request with LegacyApiClient and reading the
JSON body. Uses ``apiUrl`` to point at httpbin instead of a legacy API.

Note: Requires internet connection to run
"""

import asyncio

from legacy_api import AiohttpTransport, LegacyApiClient, StaticTokenProvider


async def main() -> None:
    """Send a GET with query params and print what the server saw."""
    async with LegacyApiClient(
        AiohttpTransport(), StaticTokenProvider("example-token")
    ) as client:
        response = await client.execute(
            {
                "method": "get",
                "resource": "/get",
                "apiUrl": "https://httpbin.org/get",
                "params": {"page": 2, "active": True},
                "headers": {"X-Device-Id": "example"},
            }
        )

    print(f"HTTP {response.status}")
    body = response.json()
    print(f"Query seen by server: {body['args']}")
    print(f"Device header: {body['headers'].get('X-Device-Id')}")


if __name__ == "__main__":
    asyncio.run(main())
