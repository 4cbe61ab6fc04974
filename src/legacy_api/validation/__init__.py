"""Input validation against pydantic schemas."""

from .base import BaseValidator
from .validator import SchemaValidator, collect_errors

__all__ = ["BaseValidator", "SchemaValidator", "collect_errors"]
