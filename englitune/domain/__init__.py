"""
Domain package for englitune.

Exports the data definitions shared by the validators, the query builder
and the HTTP layer. Keep this package free of I/O.
"""

from englitune.domain.errors import StoreError, ValidationErrorKind
from englitune.domain.models import (
    EMPTY_EXCLUSION_SET,
    MAX_LIMIT,
    MIN_LIMIT,
    BoundQuery,
    ExclusionSet,
    OutputRecord,
    ValidatedParams,
)

__all__ = [
    "BoundQuery",
    "EMPTY_EXCLUSION_SET",
    "ExclusionSet",
    "MAX_LIMIT",
    "MIN_LIMIT",
    "OutputRecord",
    "StoreError",
    "ValidatedParams",
    "ValidationErrorKind",
]
