from __future__ import annotations

from collections.abc import Iterable
from typing import Any, FrozenSet, List

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError, conint, field_validator

from .cards import Card, Rank, Suit


class CardRecord(BaseModel):
    """One serialized card: {"rank": 2..10 | "Jack".."Ace", "suit": "Clubs".."Spades"}."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    rank: Rank
    suit: Suit

    @field_validator("rank", mode="before")
    @classmethod
    def decode_rank(cls, value: Any) -> Rank:
        return Rank.from_token(value)

    @field_validator("suit", mode="before")
    @classmethod
    def decode_suit(cls, value: Any) -> Suit:
        return Suit.from_token(value)

    def to_card(self) -> Card:
        return Card(self.rank, self.suit)


DeckRecords = TypeAdapter(List[CardRecord])


class DeckConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    number_decks: conint(ge=0, strict=True) = 1
    exclude_rank: FrozenSet[Rank] = frozenset()

    @field_validator("exclude_rank", mode="before")
    @classmethod
    def parse_excluded_ranks(cls, value: Any) -> FrozenSet[Rank]:
        if value is None:
            return frozenset()
        if isinstance(value, (bytes, bytearray)):
            raise ValueError("exclude_rank must be a collection of ranks, not bytes")
        if isinstance(value, (Rank, int, str)):
            value = [value]
        if not isinstance(value, Iterable):
            raise ValueError("exclude_rank must be a collection of ranks")
        return frozenset(Rank.parse(item) for item in value)

    @property
    def ranks(self) -> List[Rank]:
        """Ranks that survive the exclusion, in composition order."""
        return [rank for rank in Rank if rank not in self.exclude_rank]


def format_validation_error(error: ValidationError) -> List[str]:
    details = []
    for entry in error.errors():
        location = ".".join(str(part) for part in entry.get("loc", []))
        message = entry.get("msg", "Invalid value")
        if location:
            details.append(f"{location}: {message}")
        else:
            details.append(message)
    return details
