"""Logging helpers for elm_compiler."""

from __future__ import annotations

import logging
from typing import Literal

Verbosity = Literal["quiet", "normal", "verbose"]

_LEVEL_BY_VERBOSITY: dict[Verbosity, int] = {
    "quiet": logging.WARNING,
    "normal": logging.INFO,
    "verbose": logging.DEBUG,
}


def configure_logging(verbosity: Verbosity = "normal") -> int:
    """Configure root logging for a CLI session and return the chosen level."""

    level = _LEVEL_BY_VERBOSITY.get(verbosity, logging.INFO)
    logging.basicConfig(
        level=level,
        format="[%(levelname).1s] %(message)s",
    )
    logging.getLogger("elm_compiler").setLevel(level)
    logging.debug("Logging configured with level %s", logging.getLevelName(level))
    return level
