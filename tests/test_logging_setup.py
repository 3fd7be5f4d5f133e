import logging
from typing import Any, Dict

import pytest

from carddeck import logging_setup
from carddeck.logging_setup import configure_logging, resolve_level


def test_resolve_known_levels() -> None:
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level(" Error ") == logging.ERROR


@pytest.mark.parametrize("name", ["basic_format", "BASIC_FORMAT", "root", "loud", ""])
def test_resolve_unknown_levels_fall_back_to_warning(name: str) -> None:
    assert resolve_level(name) == logging.WARNING


def test_configure_logging_passes_a_numeric_level(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: Dict[str, Any] = {}
    monkeypatch.setattr(logging_setup.logging, "basicConfig", lambda **kwargs: seen.update(kwargs))

    configure_logging("basic_format")

    assert seen["level"] == logging.WARNING
    assert seen["format"] == logging_setup.LOG_FORMAT
