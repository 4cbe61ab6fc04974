"""Call command implementation."""

import asyncio
from pathlib import Path
from typing import Any, List, Optional

import aiohttp
import typer

from ...client import LegacyApiClient
from ...domain.exceptions import LegacyApiError, ValidationError
from ...domain.predicates import accept_success, accept_unless_status
from ...domain.request import FileAttachment
from ...domain.response import ApiResponse
from ...domain.retry import RetryPredicate
from ...infrastructure.logging import enable_request_traces
from ..output import display_error, display_response, display_validation_error
from ..state import CLIState


def parse_pairs(
    values: list[str] | None, separator: str, option: str
) -> dict[str, str]:
    """Parse repeated KEY<sep>VALUE options into a dict.

    Raises:
        typer.Exit: If an item has no separator or an empty key
    """
    pairs: dict[str, str] = {}
    for item in values or []:
        key, found, value = item.partition(separator)
        if not found or not key.strip():
            display_error(f"Invalid {option} '{item}': expected KEY{separator}VALUE")
            raise typer.Exit(code=2)
        pairs[key.strip()] = value.strip()
    return pairs


def parse_files(values: list[str] | None) -> list[FileAttachment]:
    """Parse repeated FIELD=PATH options into attachments."""
    return [
        FileAttachment(field_name=field_name, path=Path(path))
        for field_name, path in parse_pairs(values, "=", "--file").items()
    ]


def build_predicate(retry_on: str | None) -> RetryPredicate:
    """Retry on the listed statuses, or on anything that is not 2xx.

    Raises:
        typer.Exit: If the status list is not comma-separated integers
    """
    if not retry_on:
        return accept_success
    try:
        codes = [int(code) for code in retry_on.split(",") if code.strip()]
    except ValueError:
        display_error(f"Invalid --retry-on '{retry_on}': expected e.g. 500,503")
        raise typer.Exit(code=2)
    return accept_unless_status(codes)


async def call_api(
    client: LegacyApiClient,
    spec: dict[str, Any],
    predicate: RetryPredicate,
    files: list[FileAttachment],
    deadline: float | None,
) -> ApiResponse:
    """Core call logic with the client injected."""
    async with client:
        return await client.execute(spec, predicate, files or None, deadline=deadline)


def call(
    ctx: typer.Context,
    method: str = typer.Argument(..., help="HTTP method: get, post, put or delete"),
    resource: str = typer.Argument(..., help="Resource path, e.g. /users"),
    param: Optional[List[str]] = typer.Option(
        None, "--param", "-p", help="Request parameter KEY=VALUE (repeatable)"
    ),
    header: Optional[List[str]] = typer.Option(
        None, "--header", "-H", help="Extra header 'Name: value' (repeatable)"
    ),
    file: Optional[List[str]] = typer.Option(
        None, "--file", "-f", help="File to upload FIELD=PATH (repeatable)"
    ),
    retry: bool = typer.Option(
        False, "--retry", help="Retry until the response is accepted"
    ),
    max_retries: Optional[int] = typer.Option(
        None, "--max-retries", min=1, help="Total attempts when retrying"
    ),
    retry_delay: Optional[int] = typer.Option(
        None, "--retry-delay", min=0, help="Delay between attempts in milliseconds"
    ),
    retry_on: Optional[str] = typer.Option(
        None,
        "--retry-on",
        help="Comma-separated statuses to retry on (default: any non-2xx)",
    ),
    deadline: Optional[float] = typer.Option(
        None, "--deadline", min=0, help="Overall time limit in seconds"
    ),
    debug: bool = typer.Option(False, "--debug", help="Log request/response traces"),
) -> None:
    """Call a legacy API resource and print the response.

    Examples:
        legacy-api call get /users -p page=2
        legacy-api call post /users -p name=Ada -H "X-Device-Id: mobile"
        legacy-api call post /avatars -f avatar=./me.png
        legacy-api call get /reports/42 --retry --max-retries 5 --retry-on 404,503
    """
    state: CLIState = ctx.obj

    spec: dict[str, Any] = {
        "method": method,
        "resource": resource,
        "params": parse_pairs(param, "=", "--param"),
        "headers": parse_pairs(header, ":", "--header"),
        "debug": debug,
    }
    if retry:
        spec["shouldRetry"] = True
    if max_retries is not None:
        spec["maxRetries"] = max_retries
    if retry_delay is not None:
        spec["retryDelayMilliseconds"] = retry_delay

    if debug:
        enable_request_traces(state.settings)

    predicate = build_predicate(retry_on)
    files = parse_files(file)
    client = state.create_client()

    try:
        response = asyncio.run(call_api(client, spec, predicate, files, deadline))
    except ValidationError as e:
        display_validation_error(e)
        raise typer.Exit(code=1)
    except (LegacyApiError, aiohttp.ClientError, OSError) as e:
        display_error(f"Request failed: {e}")
        raise typer.Exit(code=1)

    display_response(response)
    if not response.ok:
        raise typer.Exit(code=1)
