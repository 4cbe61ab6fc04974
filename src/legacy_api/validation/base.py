"""Base interface for input validators."""

import typing as t
from abc import ABC, abstractmethod

from pydantic import BaseModel

ModelT = t.TypeVar("ModelT", bound=BaseModel)


class BaseValidator(ABC):
    """Abstract base class for schema validators."""

    @abstractmethod
    def validate(self, data: t.Any, schema: type[ModelT]) -> ModelT:
        """Validate ``data`` against ``schema``.

        Returns:
            The validated model instance.

        Raises:
            ValidationError: If the data violates the schema.
        """
