"""
Validation pipeline: runs the limit validator, then the exclusion parser.

The first failure wins. An invalid ``limit`` is reported without looking at
``excluded`` at all.
"""

from __future__ import annotations

from typing import Optional

from englitune.domain.models import ValidatedParams
from englitune.validation.excluded import parse_excluded
from englitune.validation.limit import parse_limit
from englitune.validation.result import Err, Ok, Result


def validate(raw_limit: Optional[str], raw_excluded: Optional[str]) -> Result[ValidatedParams]:
    """Validate both query parameters, returning ``Ok(ValidatedParams)`` or the first ``Err``."""
    limit_result = parse_limit(raw_limit)
    if isinstance(limit_result, Err):
        return limit_result
    excluded_result = parse_excluded(raw_excluded)
    if isinstance(excluded_result, Err):
        return excluded_result
    return Ok(ValidatedParams(limit=limit_result.value, excluded=excluded_result.value))


__all__ = ["validate"]
