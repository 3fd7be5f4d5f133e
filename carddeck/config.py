from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Tuple

from .deck import resolve_config
from .env_loader import load_env_file
from .schemas import DeckConfig


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_list(name: str) -> Tuple[str, ...]:
    raw = os.getenv(name, "")
    return tuple(part.strip() for part in raw.split(",") if part.strip())


@dataclass
class AppConfig:
    log_level: str = "WARNING"
    number_decks: int = 1
    exclude_rank: Tuple[str, ...] = ()
    seed: Optional[int] = None

    @classmethod
    def from_env(cls) -> "AppConfig":
        load_env_file()
        log_level = os.getenv("CARDDECK_LOG_LEVEL", "WARNING").strip().upper() or "WARNING"
        number_decks = max(0, _env_int("CARDDECK_NUMBER_DECKS", 1))
        return cls(
            log_level=log_level,
            number_decks=number_decks,
            exclude_rank=_env_list("CARDDECK_EXCLUDE_RANK"),
            seed=_env_int("CARDDECK_SEED", None),
        )

    def deck_config(self) -> DeckConfig:
        return resolve_config(number_decks=self.number_decks, exclude_rank=self.exclude_rank)
