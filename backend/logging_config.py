"""Logging setup for the lab API process."""

from __future__ import annotations

import logging
import os
from typing import Iterable

LOG_LEVEL_ENV = "VISUAL_DNA_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Loggers that follow the lab level alongside ``visual_dna``
_ALIGNED_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def configure_logging(
    *, level: str | None = None, extra_loggers: Iterable[str] = ()
) -> logging.Logger:
    """Configure root logging and return the ``visual_dna.backend`` logger.

    ``level`` wins over ``VISUAL_DNA_LOG_LEVEL``; INFO when neither is set.
    """
    resolved_level = (level or os.getenv(LOG_LEVEL_ENV) or "INFO").upper()
    logging.basicConfig(level=resolved_level, format=LOG_FORMAT)

    for name in ("visual_dna", *_ALIGNED_LOGGERS, *extra_loggers):
        logging.getLogger(name).setLevel(resolved_level)

    app_logger = logging.getLogger("visual_dna.backend")
    app_logger.debug("Logging configured at %s", resolved_level)
    return app_logger
