"""Result envelope returned by application services."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class OperationResult(Generic[T]):
    """Outcome of a use case; failures are raised, so success is the normal case"""

    success: bool
    data: T | None = None
    message: str | None = None

    @classmethod
    def ok(cls, data: T | None = None, message: str | None = None) -> "OperationResult[T]":
        return cls(success=True, data=data, message=message)
