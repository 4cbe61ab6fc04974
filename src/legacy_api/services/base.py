"""Base class for service objects.

Provides schema validation through an injected validator plus a handful of
helpers for pulling optional values out of loosely-shaped input mappings.
"""

import typing as t
from abc import ABC, abstractmethod
from datetime import datetime

from pydantic import BaseModel, TypeAdapter

from ..validation import BaseValidator, SchemaValidator

_MISSING = object()
_datetime_adapter = TypeAdapter(datetime)


def _lookup(data: t.Mapping[str, t.Any], key: str) -> t.Any:
    """Fetch ``key`` from ``data``, following dots into nested mappings.

    An exact key match wins over a dotted path, so keys that genuinely
    contain dots still resolve.
    """
    if key in data:
        return data[key]

    current: t.Any = data
    for part in key.split("."):
        if not isinstance(current, t.Mapping) or part not in current:
            return _MISSING
        current = current[part]
    return current


class BaseService(ABC):
    """Base structure for services that validate their input."""

    def __init__(self, validator: BaseValidator | None = None) -> None:
        self.validator = validator if validator is not None else SchemaValidator()

    @property
    @abstractmethod
    def schema(self) -> type[BaseModel]:
        """Pydantic model describing the input this service accepts."""
        pass

    def validate(self, data: t.Any) -> BaseModel:
        """Validate all data required to execute the service.

        Raises:
            ValidationError: If the data does not satisfy ``schema``.
        """
        return self.validator.validate(data, self.schema)

    @staticmethod
    def null_or_value(data: t.Mapping[str, t.Any], key: str) -> t.Any:
        """Return the value under ``key``, or None if missing or empty."""
        value = _lookup(data, key)
        if value is _MISSING or not value:
            return None
        return value

    @staticmethod
    def null_or_date(data: t.Mapping[str, t.Any], key: str) -> datetime | None:
        """Parse the value under ``key`` as a datetime, or None if missing or empty.

        Accepts ISO 8601 strings, dates, datetimes and unix timestamps.

        Raises:
            pydantic.ValidationError: If a present value cannot be parsed.
        """
        value = _lookup(data, key)
        if value is _MISSING or not value:
            return None
        return _datetime_adapter.validate_python(value)

    @staticmethod
    def value_or_false(data: t.Mapping[str, t.Any], key: str) -> t.Any:
        """Return the value under ``key``, or False if missing or None."""
        value = _lookup(data, key)
        return False if value is _MISSING or value is None else value

    @staticmethod
    def value_or_true(data: t.Mapping[str, t.Any], key: str) -> t.Any:
        """Return the value under ``key``, or True if missing or None."""
        value = _lookup(data, key)
        return True if value is _MISSING or value is None else value
