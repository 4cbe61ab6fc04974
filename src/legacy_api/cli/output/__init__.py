"""CLI output helpers."""

from .display import display_error, display_response, display_validation_error

__all__ = ["display_error", "display_response", "display_validation_error"]
