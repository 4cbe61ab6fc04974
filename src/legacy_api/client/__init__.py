"""Legacy API client."""

from .client import LegacyApiClient

__all__ = ["LegacyApiClient"]
