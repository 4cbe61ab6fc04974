"""Response and error display functions for CLI."""

import typer

from ...domain.exceptions import ValidationError
from ...domain.response import ApiResponse


def display_response(response: ApiResponse) -> None:
    """Display status line and body."""
    colour = typer.colors.GREEN if response.ok else typer.colors.RED
    label = "✓" if response.ok else "✗"
    typer.secho(f"{label} HTTP {response.status}", fg=colour, err=True)
    if response.synthetic:
        typer.secho(
            "  (no attempt was accepted by the retry policy)",
            fg=typer.colors.YELLOW,
            err=True,
        )
    if response.body:
        typer.echo(response.text)


def display_validation_error(error: ValidationError) -> None:
    """Display one line per invalid field."""
    typer.secho("✗ Invalid request:", fg=typer.colors.RED, err=True)
    for field, messages in error.errors.items():
        for message in messages:
            typer.secho(f"  {field}: {message}", fg=typer.colors.RED, err=True)


def display_error(message: str) -> None:
    typer.secho(f"✗ {message}", fg=typer.colors.RED, err=True)
