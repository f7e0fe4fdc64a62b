"""
Validation package for englitune.

Turns the raw ``limit`` and ``excluded`` query parameters into typed values
or a client-facing error message. Nothing here raises for bad input.
"""

from englitune.validation.excluded import parse_excluded
from englitune.validation.limit import parse_limit
from englitune.validation.pipeline import validate
from englitune.validation.result import Err, Ok, Result

__all__ = [
    "Err",
    "Ok",
    "Result",
    "parse_excluded",
    "parse_limit",
    "validate",
]
