from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Optional, Tuple


ENV_FILE_VARIABLE = "CARDDECK_ENV_FILE"

_LOADED: Optional[Path] = None


def _candidate_paths() -> Iterable[Path]:
    explicit = os.getenv(ENV_FILE_VARIABLE)
    if explicit:
        yield Path(explicit)
    yield Path.cwd() / ".env"


def parse_env_line(line: str) -> Optional[Tuple[str, str]]:
    """Parse ``KEY=value`` (optionally ``export``-prefixed or quoted)."""
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None

    if stripped.startswith("export "):
        stripped = stripped[len("export ") :].strip()

    key, sep, value = stripped.partition("=")
    key = key.strip()
    value = value.strip()
    if not sep or not key:
        return None

    if len(value) >= 2 and value[0] == value[-1] and value[0] in {'"', "'"}:
        value = value[1:-1]

    return key, value


def load_env_file(force: bool = False) -> Optional[Path]:
    """Copy the first readable .env file into os.environ without overriding.

    Returns the path that was loaded, if any.
    """
    global _LOADED
    if _LOADED is not None and not force:
        return _LOADED

    for path in _candidate_paths():
        try:
            if not path.is_file():
                continue
            lines = path.read_text(encoding="utf-8").splitlines()
        except OSError:
            continue
        for raw_line in lines:
            parsed = parse_env_line(raw_line)
            if parsed:
                os.environ.setdefault(*parsed)
        _LOADED = path
        return path
    return None
