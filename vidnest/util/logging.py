"""Logging configuration for command-line scripts."""

import logging
import sys

from vidnest.config import Settings


def setup_logging(settings: Settings) -> None:
    """Configure stdlib logging for scripts.

    Logfire carries the application's own records; this only sets the level
    and format for third-party loggers (alembic, asyncpg, sqlalchemy).

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,  # Override any existing configuration
    )

    # Engine echo is controlled by settings.debug, keep the pool quiet
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)
    logging.getLogger("asyncpg").setLevel(logging.WARNING)

    logging.getLogger("vidnest").setLevel(level)
