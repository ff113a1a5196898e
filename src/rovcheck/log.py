# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for rovcheck."""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(filename)s:%(lineno)d: %(message)s"
LOG_OFF = logging.CRITICAL + 10
NOISY_LOGGERS = ("httpx", "httpcore")

# Ordered from quietest to noisiest; -q/-v move along this ladder.
VERBOSITY_LADDER = (LOG_OFF, logging.ERROR, logging.WARNING, logging.INFO, logging.DEBUG)


def _default_level_name() -> str:
    return os.getenv("ROVCHECK_LOG_LEVEL", "INFO").upper()


def level_from_name(name: str | None) -> int:
    raw = (name or "").strip().upper()
    if raw in {"OFF", "NONE"}:
        return LOG_OFF
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else logging.INFO


def level_from_verbosity(verbose: int = 0, quiet: int = 0, base: int | None = None) -> int:
    """Step from ``base`` (INFO unless overridden) along the verbosity ladder."""
    start = base if base is not None else level_from_name(_default_level_name())
    try:
        index = VERBOSITY_LADDER.index(start)
    except ValueError:
        index = VERBOSITY_LADDER.index(logging.INFO)
    index = min(max(index + verbose - quiet, 0), len(VERBOSITY_LADDER) - 1)
    return VERBOSITY_LADDER[index]


def setup_logging(level: int | str | None = None) -> None:
    """Configure standard logging for CLI/library use."""
    if isinstance(level, int):
        effective_level = level
    else:
        effective_level = level_from_name(level or _default_level_name())
    logging.basicConfig(level=effective_level, format=LOG_FORMAT)
    # Keep the verdict the only INFO line; transport chatter only shows at DEBUG.
    noisy_level = effective_level if effective_level <= logging.DEBUG else max(effective_level, logging.WARNING)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)


__all__ = ["LOG_OFF", "level_from_name", "level_from_verbosity", "setup_logging"]
