"""Result type for store operations that degrade instead of raising."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(slots=True)
class StoreResult(Generic[T]):
    """Value returned by a store operation, plus the error that degraded it.

    When ``error`` is set, ``value`` holds the soft-fail default (an empty list,
    ``None`` or a sentinel record) rather than real data.
    """

    value: T
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "StoreResult[T]":
        return cls(value=value)

    @classmethod
    def degraded(cls, value: T, error: BaseException | str) -> "StoreResult[T]":
        message = error if isinstance(error, str) else (str(error) or error.__class__.__name__)
        return cls(value=value, error=message)


__all__ = ["StoreResult"]
