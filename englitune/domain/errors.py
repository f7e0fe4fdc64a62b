"""
Error taxonomy for englitune.

Client-input failures are values (see ``englitune.validation.result``) tagged
with a ``ValidationErrorKind``. Row-store failures are exceptions.
"""

from __future__ import annotations

import enum


class ValidationErrorKind(str, enum.Enum):
    """Kinds of client-input errors reported as HTTP 400."""

    NOT_A_NUMBER = "NotANumber"
    BELOW_MINIMUM = "BelowMinimum"
    ABOVE_MAXIMUM = "AboveMaximum"
    MALFORMED_ENTRY = "MalformedEntry"
    EMPTY_SEQUENCE_LIST = "EmptySequenceList"


class StoreError(Exception):
    """
    Raised when the row store cannot answer a query.

    The driver error is chained as ``__cause__``; the message is deliberately
    generic so it can never leak connection details to a client.
    """


__all__ = ["ValidationErrorKind", "StoreError"]
