"""Pydantic-backed schema validator."""

import typing as t
from collections import defaultdict

import pydantic

from ..domain.exceptions import ValidationError
from .base import BaseValidator, ModelT

_ROOT_FIELD = "__root__"


def _field_path(location: tuple[int | str, ...]) -> str:
    return ".".join(str(part) for part in location) or _ROOT_FIELD


def collect_errors(error: pydantic.ValidationError) -> dict[str, list[str]]:
    """Group pydantic error messages by dotted field path."""
    errors: dict[str, list[str]] = defaultdict(list)
    for detail in error.errors(include_url=False):
        errors[_field_path(detail["loc"])].append(detail["msg"])
    return dict(errors)


class SchemaValidator(BaseValidator):
    """Validates mappings (or model instances) against pydantic models.

    Pydantic's own exception is translated into the domain ValidationError
    so callers only ever need to handle one validation error type.
    """

    def validate(self, data: t.Any, schema: type[ModelT]) -> ModelT:
        try:
            return schema.model_validate(data)
        except pydantic.ValidationError as e:
            raise ValidationError(collect_errors(e)) from e
