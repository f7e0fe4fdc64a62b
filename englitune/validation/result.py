"""
Tagged result type for the query-parameter validators.

Validators return ``Ok(value)`` or ``Err(kind, message)`` instead of raising,
so callers branch on the outcome explicitly::

    result = parse_limit(raw)
    if isinstance(result, Err):
        return result
    limit = result.value
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from englitune.domain.errors import ValidationErrorKind

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    kind: ValidationErrorKind
    message: str

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]

__all__ = ["Ok", "Err", "Result"]
