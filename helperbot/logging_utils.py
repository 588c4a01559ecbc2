"""Process-wide logging setup for the bot CLI and webhook server."""

from __future__ import annotations

import logging

_NOISY_LOGGERS = ("uvicorn.access", "httpx")


def configure_logging(level: str = "INFO") -> None:
    resolved = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=resolved,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    # Per-request access lines drown out reference lookups unless debugging.
    if resolved > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
