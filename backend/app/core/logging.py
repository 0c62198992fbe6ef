"""
Logging setup for the API process: one stdout handler on the root logger,
library loggers pinned to quieter levels.
"""

import logging
import sys

from app.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party loggers and the level they are held at
LIBRARY_LEVELS = {
    "uvicorn": logging.INFO,
    "asyncpg": logging.WARNING,
    "aiohttp.client": logging.WARNING,
}


def setup_logging() -> None:
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    for name, library_level in LIBRARY_LEVELS.items():
        logging.getLogger(name).setLevel(library_level)
    # Statement logging follows DB_ECHO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if settings.DB_ECHO else logging.WARNING)

    logging.getLogger(__name__).info(
        "Logging configured",
        extra={"environment": settings.OTEL_ENVIRONMENT, "base_currency": settings.BASE_CURRENCY},
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module."""
    return logging.getLogger(name)
