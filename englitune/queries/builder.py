"""
Query builder for random transcript sampling.

Produces a parameterized SELECT over ``transcripts`` joined with ``speakers``.
Exclusions become a negated disjunction of per-speaker clauses::

    WHERE NOT ((t.speaker_id = %s AND t.sequence IN (%s, %s))
               OR (t.speaker_id = %s AND t.sequence IN (%s)))

Bind values follow placeholder order: each speaker id followed by its
sequences, then the limit. Rows are picked with ``ORDER BY RANDOM()``, a full
scan that samples uniformly over the filtered set.
"""

from __future__ import annotations

from typing import Any, List, Mapping

from englitune.domain.models import BoundQuery, ExclusionSet, OutputRecord

PLACEHOLDER = "%s"

_SELECT = """
    SELECT
      t.transcript,
      t.sequence,
      t.speaker_id AS speaker,
      s.age,
      s.gender,
      s.accent,
      s.region
    FROM transcripts AS t
    INNER JOIN speakers AS s ON t.speaker_id = s.id
    {where}
    ORDER BY RANDOM()
    LIMIT %s;
"""


def _exclusion_clause(sequence_count: int) -> str:
    placeholders = ", ".join([PLACEHOLDER] * sequence_count)
    return f"(t.speaker_id = {PLACEHOLDER} AND t.sequence IN ({placeholders}))"


def build_where_clause(excluded: ExclusionSet) -> str:
    """Return the ``WHERE NOT (...)`` clause for an exclusion set, or ``""``."""
    conditions = [
        _exclusion_clause(len(sequences)) for sequences in excluded.values() if sequences
    ]
    if not conditions:
        return ""
    return f"WHERE NOT ({' OR '.join(conditions)})"


def build_bind_values(limit: int, excluded: ExclusionSet) -> List[Any]:
    """Flatten the exclusion set into bind values, with ``limit`` last."""
    values: List[Any] = []
    for speaker_id, sequences in excluded.items():
        if not sequences:
            continue
        values.append(speaker_id)
        values.extend(sequences)
    values.append(limit)
    return values


def build_query(limit: int, excluded: ExclusionSet) -> BoundQuery:
    """
    Build the random-sample query for a validated limit and exclusion set.

    Parameters
    ----------
    limit : int
        Maximum number of rows to return (already bounds-checked).
    excluded : ExclusionSet
        Speaker id to sequence ids that must not be returned.

    Returns
    -------
    BoundQuery
        SQL text with ``%s`` placeholders and the matching bind values.
    """
    return BoundQuery(
        text=_SELECT.format(where=build_where_clause(excluded)),
        params=tuple(build_bind_values(limit, excluded)),
    )


def row_to_record(row: Mapping[str, Any]) -> OutputRecord:
    """Map a result row to an ``OutputRecord``; a NULL region stays ``None``."""
    return OutputRecord(
        transcript=row["transcript"],
        sequence=row["sequence"],
        speaker=row["speaker"],
        age=row["age"],
        gender=row["gender"],
        accent=row["accent"],
        region=row.get("region"),
    )


__all__ = [
    "PLACEHOLDER",
    "build_bind_values",
    "build_query",
    "build_where_clause",
    "row_to_record",
]
