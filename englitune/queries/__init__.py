"""
Query package for englitune.

Builds the parameterized random-sample query and maps result rows into
output records.
"""

from englitune.queries.builder import build_query, row_to_record
from englitune.queries.executor import (
    RowStore,
    execute,
    get_random_transcripts_with_speaker,
)

__all__ = [
    "RowStore",
    "build_query",
    "execute",
    "get_random_transcripts_with_speaker",
    "row_to_record",
]
