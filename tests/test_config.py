import os
from pathlib import Path

import pytest

from carddeck import env_loader
from carddeck.cards import Rank
from carddeck.config import AppConfig
from carddeck.env_loader import load_env_file, parse_env_line
from carddeck.errors import InvalidConfiguration


ENV_KEYS = (
    "CARDDECK_ENV_FILE",
    "CARDDECK_LOG_LEVEL",
    "CARDDECK_NUMBER_DECKS",
    "CARDDECK_EXCLUDE_RANK",
    "CARDDECK_SEED",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> pytest.MonkeyPatch:
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(env_loader, "_LOADED", None)
    return monkeypatch


def test_defaults(clean_env: pytest.MonkeyPatch) -> None:
    config = AppConfig.from_env()
    assert config == AppConfig()
    deck_config = config.deck_config()
    assert deck_config.number_decks == 1
    assert deck_config.exclude_rank == frozenset()


def test_values_from_environment(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("CARDDECK_LOG_LEVEL", "debug")
    clean_env.setenv("CARDDECK_NUMBER_DECKS", "6")
    clean_env.setenv("CARDDECK_EXCLUDE_RANK", "2, Jack,")
    clean_env.setenv("CARDDECK_SEED", "99")

    config = AppConfig.from_env()
    assert config.log_level == "DEBUG"
    assert config.number_decks == 6
    assert config.exclude_rank == ("2", "Jack")
    assert config.seed == 99
    assert config.deck_config().exclude_rank == {Rank.TWO, Rank.JACK}


def test_bad_numbers_fall_back(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("CARDDECK_NUMBER_DECKS", "many")
    clean_env.setenv("CARDDECK_SEED", "abc")
    config = AppConfig.from_env()
    assert config.number_decks == 1
    assert config.seed is None

    clean_env.setenv("CARDDECK_NUMBER_DECKS", "-3")
    assert AppConfig.from_env().number_decks == 0


def test_unknown_excluded_rank_is_rejected(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("CARDDECK_EXCLUDE_RANK", "Joker")
    with pytest.raises(InvalidConfiguration):
        AppConfig.from_env().deck_config()


def test_parse_env_line() -> None:
    assert parse_env_line("KEY=value") == ("KEY", "value")
    assert parse_env_line("export KEY = 'quoted value'") == ("KEY", "quoted value")
    assert parse_env_line('KEY="a=b"') == ("KEY", "a=b")
    assert parse_env_line("# comment") is None
    assert parse_env_line("   ") is None
    assert parse_env_line("NOEQUALS") is None
    assert parse_env_line("=value") is None


def test_load_env_file_does_not_override(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    path = tmp_path / "deck.env"
    path.write_text("CARDDECK_NUMBER_DECKS=4\nCARDDECK_SEED=5\n", encoding="utf-8")
    environ = {"CARDDECK_ENV_FILE": str(path), "CARDDECK_SEED": "1"}
    monkeypatch.setattr(os, "environ", environ)
    monkeypatch.setattr(env_loader, "_LOADED", None)

    assert load_env_file() == path
    assert environ["CARDDECK_NUMBER_DECKS"] == "4"
    assert environ["CARDDECK_SEED"] == "1"


def test_load_env_file_missing(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    clean_env.setenv("CARDDECK_ENV_FILE", str(tmp_path / "missing.env"))
    assert load_env_file() is None
