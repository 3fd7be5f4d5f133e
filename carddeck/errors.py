from __future__ import annotations

from typing import List, Optional


class DeckError(Exception):
    """Base class for every error raised by the deck package."""


class InvalidCardError(DeckError, ValueError):
    """Raised when a card is built from a rank or suit outside the fixed domains."""


class InvalidConfiguration(DeckError, ValueError):
    """Raised when a deck build configuration is rejected."""

    def __init__(self, message: str, details: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.details = list(details or [])


class EmptyDeckError(DeckError, IndexError):
    """Raised when drawing from a deck that has no cards left."""


class CutIndexError(DeckError, IndexError):
    """Raised when a cut index does not address a card in the deck."""


class MalformedDeckError(DeckError, ValueError):
    """Raised when serialized deck text cannot be loaded."""

    def __init__(self, message: str, details: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.details = list(details or [])
