"""
Row store contract and the sampling entry point used by the HTTP layer and CLI.

Any object with an async ``fetch_all(query, params)`` method can serve as the
row store; the psycopg implementation lives in
``englitune.infrastructure.db_factory``.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Protocol, Sequence, runtime_checkable

from englitune.domain.models import ExclusionSet, OutputRecord
from englitune.queries.builder import build_query, row_to_record


@runtime_checkable
class RowStore(Protocol):
    """
    Relational source joining transcript and speaker records.
    """

    async def fetch_all(self, query: str, params: Sequence[Any]) -> List[Mapping[str, Any]]:
        """
        Run a parameterized query and return every row as a mapping.

        Parameters
        ----------
        query : str
            SQL text with positional ``%s`` placeholders.
        params : Sequence[Any]
            Bind values in placeholder order.
        """
        ...


async def get_random_transcripts_with_speaker(
    row_store: RowStore,
    limit: int,
    excluded: ExclusionSet,
) -> List[OutputRecord]:
    """
    Fetch up to ``limit`` random transcripts, skipping excluded speaker/sequence pairs.

    Row store errors propagate unchanged. There is no retry and no partial result.
    """
    query = build_query(limit, excluded)
    rows = await row_store.fetch_all(query.text, query.params)
    return [row_to_record(row) for row in rows]


execute = get_random_transcripts_with_speaker

__all__ = ["RowStore", "execute", "get_random_transcripts_with_speaker"]
