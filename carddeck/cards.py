from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Union

from .errors import InvalidCardError


RankToken = Union[int, str]


class Rank(Enum):
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = "Jack"
    QUEEN = "Queen"
    KING = "King"
    ACE = "Ace"

    @property
    def token(self) -> RankToken:
        return self.value

    @property
    def short(self) -> str:
        if isinstance(self.value, int):
            return str(self.value)
        return self.value[0]

    @classmethod
    def from_token(cls, token: Any) -> "Rank":
        """Strict wire decoding: ints 2-10 or the exact face names."""
        if isinstance(token, bool) or not isinstance(token, (int, str)):
            raise ValueError(f"Invalid rank token: {token!r}")
        if isinstance(token, str) and token not in _FACE_TOKENS:
            raise ValueError(f"Invalid rank token: {token!r}")
        try:
            return cls(token)
        except ValueError as exc:
            raise ValueError(f"Invalid rank token: {token!r}") from exc

    @classmethod
    def parse(cls, value: Any) -> "Rank":
        """Lenient lookup for user input like 2, "10", "jack" or "J"."""
        if isinstance(value, Rank):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Invalid rank: {value!r}")
        if isinstance(value, int):
            return cls.from_token(value)
        if isinstance(value, str):
            rank = _RANK_LOOKUP.get(value.strip().lower())
            if rank is not None:
                return rank
        raise ValueError(f"Invalid rank: {value!r}")


class Suit(Enum):
    CLUBS = "Clubs"
    DIAMONDS = "Diamonds"
    HEARTS = "Hearts"
    SPADES = "Spades"

    @property
    def token(self) -> str:
        return self.value

    @property
    def symbol(self) -> str:
        return _SUIT_SYMBOLS[self]

    @classmethod
    def from_token(cls, token: Any) -> "Suit":
        if not isinstance(token, str):
            raise ValueError(f"Invalid suit token: {token!r}")
        try:
            return cls(token)
        except ValueError as exc:
            raise ValueError(f"Invalid suit token: {token!r}") from exc


_FACE_TOKENS = frozenset(rank.value for rank in Rank if isinstance(rank.value, str))

_RANK_LOOKUP: Dict[str, Rank] = {}
for _rank in Rank:
    _RANK_LOOKUP[str(_rank.value).lower()] = _rank
    _RANK_LOOKUP[_rank.short.lower()] = _rank

_SUIT_SYMBOLS: Dict[Suit, str] = {
    Suit.CLUBS: "♣",
    Suit.DIAMONDS: "♦",
    Suit.HEARTS: "♥",
    Suit.SPADES: "♠",
}


@dataclass(frozen=True)
class Card:
    rank: Rank
    suit: Suit

    def __post_init__(self) -> None:
        if not isinstance(self.rank, Rank):
            raise InvalidCardError(f"Invalid rank: {self.rank!r}")
        if not isinstance(self.suit, Suit):
            raise InvalidCardError(f"Invalid suit: {self.suit!r}")

    def short(self) -> str:
        """Compact form such as 'A♠' or '10♥'."""
        return f"{self.rank.short}{self.suit.symbol}"

    def to_record(self) -> Dict[str, RankToken]:
        return {"rank": self.rank.token, "suit": self.suit.token}

    def __str__(self) -> str:
        return f"{self.rank.value} of {self.suit.value}"
