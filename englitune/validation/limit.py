"""
Limit validator: parses and bounds-checks the ``limit`` query parameter.
"""

from __future__ import annotations

import re
from typing import Optional

from englitune.domain.errors import ValidationErrorKind
from englitune.domain.models import MAX_LIMIT, MIN_LIMIT
from englitune.validation.result import Err, Ok, Result

# Leading integer: trailing text such as ".5" or "abc" is ignored. ASCII digits only.
_LEADING_INT = re.compile(r"\s*([+-]?)([0-9]+)")

# Digit runs longer than this are out of range whatever their value.
_MAX_DIGITS = len(str(MAX_LIMIT))


def parse_leading_int(value: str) -> Optional[int]:
    """
    Return the integer a string starts with, or None if it starts with none.

    Magnitudes wider than ``MAX_LIMIT`` are clamped to the next digit width,
    keeping their sign, so bounds checks still classify them.
    """
    match = _LEADING_INT.match(value)
    if match is None:
        return None
    sign, digits = match.groups()
    digits = digits.lstrip("0") or "0"
    if len(digits) > _MAX_DIGITS:
        # Saturate instead of converting arbitrarily long input.
        digits = "9" * (_MAX_DIGITS + 1)
    return int(sign + digits)


def parse_limit(raw: Optional[str]) -> Result[int]:
    """
    Validate the raw ``limit`` value.

    Absent or empty values default to ``MIN_LIMIT``. Error messages are part of
    the public contract and must not change.
    """
    if not raw:
        return Ok(MIN_LIMIT)
    limit = parse_leading_int(raw)
    if limit is None:
        return Err(ValidationErrorKind.NOT_A_NUMBER, f"'limit' must be a number: {raw}")
    if limit < MIN_LIMIT:
        return Err(
            ValidationErrorKind.BELOW_MINIMUM,
            f"'limit' must be greater or equal to {MIN_LIMIT}",
        )
    if limit > MAX_LIMIT:
        return Err(
            ValidationErrorKind.ABOVE_MAXIMUM,
            f"'limit' must be less or equal to {MAX_LIMIT}",
        )
    return Ok(limit)


__all__ = ["parse_leading_int", "parse_limit"]
