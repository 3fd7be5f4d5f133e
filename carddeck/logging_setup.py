from __future__ import annotations

import logging


LOG_FORMAT = "%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


def resolve_level(name: str) -> int:
    """Map a level name like 'debug' to its number; unknown names give WARNING."""
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(level: str = "WARNING") -> None:
    """Call once at program start; the library itself never configures logging."""
    logging.basicConfig(
        level=resolve_level(level),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
    )
