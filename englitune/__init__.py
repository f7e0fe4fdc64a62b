"""
englitune - random transcripts from a speaker-annotated speech corpus.

Serves random rows from a ``transcripts`` table joined with ``speakers``,
with a caller-supplied exclusion filter:

- ``limit``: how many rows to return (1-100, default 1)
- ``excluded``: speaker/sequence pairs to omit, e.g. ``p225=001,002;p226=003``

The package is split into validation (query-parameter parsing), queries
(parameterized SQL building and row mapping), infrastructure (psycopg pool
and row store) and api (FastAPI app).
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from englitune.config import Settings, get_settings
from englitune.domain.errors import StoreError, ValidationErrorKind
from englitune.domain.models import BoundQuery, ExclusionSet, OutputRecord, ValidatedParams
from englitune.queries.builder import build_query
from englitune.queries.executor import RowStore, execute, get_random_transcripts_with_speaker
from englitune.utils.logging import configure_logging, get_logger
from englitune.validation import Err, Ok, parse_excluded, parse_limit, validate

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "BoundQuery",
    "ExclusionSet",
    "OutputRecord",
    "ValidatedParams",
    "StoreError",
    "ValidationErrorKind",
    # Validation
    "Ok",
    "Err",
    "parse_limit",
    "parse_excluded",
    "validate",
    # Queries
    "RowStore",
    "build_query",
    "execute",
    "get_random_transcripts_with_speaker",
    # Logging
    "configure_logging",
    "get_logger",
]
