"""
Exclusion grammar parser for the ``excluded`` query parameter.

Grammar::

    exclusion_string := entry (";" entry)*
    entry            := id "=" sequence_list
    sequence_list    := seq ("," seq)*

Example: ``p225=001,002;p226=003`` excludes sequences 001 and 002 of speaker
p225 and sequence 003 of speaker p226.

Blank entries (``"p225=001;"``) and blank sequence tokens (``"001,,002"``)
are skipped. Only the first two ``=``-separated segments of an entry are
read, so ``id=a=b`` is parsed as ``id=a``.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from englitune.domain.errors import ValidationErrorKind
from englitune.domain.models import EMPTY_EXCLUSION_SET, ExclusionSet
from englitune.validation.result import Err, Ok, Result

ENTRY_SEPARATOR = ";"
ID_SEPARATOR = "="
SEQUENCE_SEPARATOR = ","


def _malformed(raw_entry: str) -> Err:
    return Err(
        ValidationErrorKind.MALFORMED_ENTRY,
        "'excluded' must be in format id=sequence1,sequence2;id2=sequence3,sequence4: "
        f"{raw_entry}",
    )


def _empty_sequences(speaker_id: str, raw_entry: str) -> Err:
    return Err(
        ValidationErrorKind.EMPTY_SEQUENCE_LIST,
        f"'excluded' must have at least one sequence for id {speaker_id}: {raw_entry}",
    )


def parse_sequences(text: str) -> Tuple[str, ...]:
    """Split a comma list, dropping blank tokens and duplicates (first one wins)."""
    tokens = (token.strip() for token in text.split(SEQUENCE_SEPARATOR))
    return tuple(dict.fromkeys(token for token in tokens if token))


def parse_excluded(raw: Optional[str]) -> Result[ExclusionSet]:
    """
    Parse the raw ``excluded`` value into an exclusion set.

    Error messages quote the offending entry as the client sent it (before
    trimming), never the whole parameter.
    """
    if not raw:
        return Ok(EMPTY_EXCLUSION_SET)

    excluded: Dict[str, Tuple[str, ...]] = {}
    for raw_entry in raw.split(ENTRY_SEPARATOR):
        entry = raw_entry.strip()
        if not entry:
            continue
        parts = entry.split(ID_SEPARATOR)
        if len(parts) < 2 or not parts[0] or not parts[1]:
            return _malformed(raw_entry)
        speaker_id, sequence_text = parts[0], parts[1]
        sequences = parse_sequences(sequence_text)
        if not sequences:
            return _empty_sequences(speaker_id, raw_entry)
        # A repeated id replaces the earlier entry outright; sequences are not merged.
        excluded[speaker_id] = sequences
    return Ok(excluded)


__all__ = ["parse_excluded", "parse_sequences"]
