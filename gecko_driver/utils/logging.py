from __future__ import annotations

import logging
import os

# Third-party loggers that drown out driver progress at INFO.
_NOISY_LOGGERS = ("aiohttp.access", "aiohttp.client", "aiohttp.internal")


def setup_logging(level: str | int | None = None) -> int:
    """
    Configure root logging for the CLI and return the effective level.
    The level comes from the argument, then GECKO_LOG_LEVEL, then INFO.
    aiohttp chatter is held at WARNING unless DEBUG is requested.
    """
    if level is None:
        level = os.getenv("GECKO_LOG_LEVEL", "INFO")

    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        level = resolved if isinstance(resolved, int) else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if level <= logging.DEBUG else logging.WARNING)
    return level
