from __future__ import annotations

import json
import logging
import random
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional, Union, overload

from pydantic import ValidationError

from .cards import Card, Suit
from .errors import CutIndexError, EmptyDeckError, InvalidConfiguration, MalformedDeckError
from .schemas import DeckConfig, DeckRecords, format_validation_error


logger = logging.getLogger(__name__)

DISPLAY_EDGE = 3


def resolve_config(configuration: Union[DeckConfig, Mapping, None] = None, **options: Any) -> DeckConfig:
    if configuration is None:
        data = dict(options)
    elif isinstance(configuration, DeckConfig):
        data = {**configuration.model_dump(), **options}
    elif isinstance(configuration, Mapping):
        data = {**configuration, **options}
    else:
        raise InvalidConfiguration(
            f"configuration must be a DeckConfig or mapping, got {type(configuration).__name__}"
        )
    try:
        return DeckConfig.model_validate(data)
    except ValidationError as exc:
        details = format_validation_error(exc)
        logger.warning("Rejected deck configuration: %s", "; ".join(details))
        raise InvalidConfiguration("Invalid deck configuration", details) from exc


def build_cards(config: DeckConfig) -> List[Card]:
    ranks = config.ranks
    return [
        Card(rank, suit)
        for _ in range(config.number_decks)
        for rank in ranks
        for suit in Suit
    ]


def _format_cards(cards: List[Card]) -> str:
    if not cards:
        return "[ ]"
    return "[ " + ", ".join(card.short() for card in cards) + " ]"


@dataclass(repr=False)
class Deck:
    """Ordered multiset of cards; index 0 is the top of the deck."""

    cards: List[Card] = field(default_factory=list)

    @classmethod
    def build(cls, configuration: Union[DeckConfig, Mapping, None] = None, **options: Any) -> "Deck":
        """Compose ``number_decks`` standard decks, rank-major and suit-minor.

        Ranks listed in ``exclude_rank`` are left out of every sub-deck.
        ``number_decks=0`` gives an empty deck.
        """
        config = resolve_config(configuration, **options)
        deck = cls(build_cards(config))
        logger.debug(
            "Built deck number_decks=%s excluded=%s size=%s",
            config.number_decks,
            sorted(str(rank.value) for rank in config.exclude_rank),
            len(deck),
        )
        return deck

    @property
    def is_empty(self) -> bool:
        return not self.cards

    def shuffle(self, rng: Optional[random.Random] = None) -> "Deck":
        if rng is None:
            rng = random.Random()
        rng.shuffle(self.cards)
        logger.debug("Shuffled deck size=%s", len(self.cards))
        return self

    def cut(self, index: int) -> "Deck":
        """Move the first ``index + 1`` cards, in order, to the bottom.

        Raises CutIndexError unless ``0 <= index < len(deck)``.
        """
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError(f"cut index must be an int, got {type(index).__name__}")
        if not 0 <= index < len(self.cards):
            raise CutIndexError(f"cut index {index} out of range for a deck of {len(self.cards)} cards")
        split = index + 1
        self.cards[:] = self.cards[split:] + self.cards[:split]
        logger.debug("Cut deck index=%s size=%s", index, len(self.cards))
        return self

    def draw(self) -> Card:
        if not self.cards:
            raise EmptyDeckError("cannot draw from an empty deck")
        return self.cards.pop(0)

    def deal(self, count: int) -> List[Card]:
        if isinstance(count, bool) or not isinstance(count, int):
            raise TypeError(f"deal count must be an int, got {type(count).__name__}")
        if count < 0:
            raise ValueError("count must be non-negative")
        if count > len(self.cards):
            raise EmptyDeckError(f"cannot deal {count} cards from a deck of {len(self.cards)}")
        dealt = self.cards[:count]
        del self.cards[:count]
        return dealt

    def dumps(self, **json_kwargs: Any) -> str:
        """JSON list of {"rank", "suit"} records, top card first."""
        return json.dumps([card.to_record() for card in self.cards], **json_kwargs)

    @classmethod
    def loads(cls, text: Union[str, bytes]) -> "Deck":
        """Rebuild a deck from the output of :meth:`dumps`.

        Raises MalformedDeckError when the text is not JSON or any record falls
        outside the rank and suit domains.
        """
        try:
            records = DeckRecords.validate_json(text)
        except ValidationError as exc:
            details = format_validation_error(exc)
            logger.warning("Rejected serialized deck: %s", "; ".join(details))
            raise MalformedDeckError("Malformed deck text", details) from exc
        deck = cls([record.to_card() for record in records])
        logger.debug("Loaded deck size=%s", len(deck))
        return deck

    def save(self, path: str) -> None:
        with open(path, "w", encoding="utf-8") as handle:
            handle.write(self.dumps())
            handle.write("\n")

    @classmethod
    def load(cls, path: str) -> "Deck":
        with open(path, "r", encoding="utf-8") as handle:
            return cls.loads(handle.read())

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    @overload
    def __getitem__(self, index: int) -> Card: ...

    @overload
    def __getitem__(self, index: slice) -> List[Card]: ...

    def __getitem__(self, index):
        return self.cards[index]

    def __contains__(self, card: object) -> bool:
        return card in self.cards

    def __str__(self) -> str:
        return _format_cards(self.cards)

    def __repr__(self) -> str:
        size = len(self.cards)
        noun = "card" if size == 1 else "cards"
        if size <= DISPLAY_EDGE * 2:
            body = _format_cards(self.cards)
        else:
            head = ", ".join(card.short() for card in self.cards[:DISPLAY_EDGE])
            tail = ", ".join(card.short() for card in self.cards[-DISPLAY_EDGE:])
            body = f"[ {head}, ..., {tail} ]"
        return f"<Deck {size} {noun}: {body}>"
