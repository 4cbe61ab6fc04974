"""CLI commands."""

from .call import call

__all__ = ["call"]
