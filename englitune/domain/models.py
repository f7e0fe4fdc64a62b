"""
Domain models for englitune.

Defines the output record schema aligned with `db/init.sql`, the parsed
exclusion set, and the immutable query/bind pair handed to the row store.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple

from pydantic import BaseModel, Field

MIN_LIMIT = 1
MAX_LIMIT = 100

# speaker id -> sequence ids, both in insertion order
ExclusionSet = Mapping[str, Tuple[str, ...]]

EMPTY_EXCLUSION_SET: ExclusionSet = MappingProxyType({})


class OutputRecord(BaseModel):
    """
    A transcript row joined with its speaker's metadata.
    """

    transcript: str = Field(..., description="Transcript text.")
    sequence: str = Field(..., description="Sequence identifier within the speaker's recordings.")
    speaker: str = Field(..., description="Speaker identifier (transcripts.speaker_id).")
    age: int = Field(..., description="Speaker age.")
    gender: str = Field(..., description="Speaker gender.")
    accent: str = Field(..., description="Speaker accent.")
    region: Optional[str] = Field(None, description="Speaker region; NULL in the corpus for some speakers.")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "arbitrary_types_allowed": False,
    }


class BoundQuery(BaseModel):
    """
    SQL text plus its positional bind values, in placeholder order.
    """

    text: str
    params: Tuple[Any, ...] = ()

    model_config = {"frozen": True}


@dataclass(frozen=True)
class ValidatedParams:
    """Successful output of the validation pipeline."""

    limit: int = MIN_LIMIT
    excluded: ExclusionSet = field(default_factory=lambda: EMPTY_EXCLUSION_SET)


__all__ = [
    "MIN_LIMIT",
    "MAX_LIMIT",
    "ExclusionSet",
    "EMPTY_EXCLUSION_SET",
    "OutputRecord",
    "BoundQuery",
    "ValidatedParams",
]
