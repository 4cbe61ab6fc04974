"""CLI application factory."""

from typing import Optional

import typer

from ..app import create_app
from ..config.settings import LogLevel, Settings, build_settings
from .commands import call
from .state import CLIState


def create_cli_app(
    settings: Settings | None = None, state: CLIState | None = None
) -> typer.Typer:
    """Create CLI application with optional settings or state override.

    Args:
        settings: Optional Settings override for testing
        state: Optional fully-built CLIState (e.g. with a mocked client factory)

    Returns:
        Configured Typer application with commands registered
    """
    app = typer.Typer(
        name="legacy-api",
        help="Legacy API client - call resources with predicate-driven retry",
        no_args_is_help=True,
    )

    @app.callback()
    def setup(
        ctx: typer.Context,
        base_url: Optional[str] = typer.Option(
            None, "--base-url", "-u", help="Legacy API root URL"
        ),
        api_version: Optional[str] = typer.Option(
            None, "--api-version", help="API version segment, e.g. v2"
        ),
        token: Optional[str] = typer.Option(
            None, "--token", "-t", help="Access token for the Authorization header"
        ),
        verbose: bool = typer.Option(
            False, "--verbose", "-v", help="Enable verbose output (DEBUG logging)"
        ),
    ) -> None:
        """Global options available to all commands."""
        if state is not None:
            ctx.obj = state
            return

        if settings is not None:
            resolved_settings = settings
        else:
            resolved_settings = build_settings(
                base_url=base_url,
                api_version=api_version,
                access_token=token,
                log_level=LogLevel.DEBUG if verbose else None,
            )

        create_app(resolved_settings)
        ctx.obj = CLIState(resolved_settings)

    app.command("call")(call)
    return app
