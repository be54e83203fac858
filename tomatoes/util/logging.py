"""Logging configuration for the application."""

import logging
import sys

from tomatoes.config import Settings


def setup_logging(settings: Settings) -> None:
    """Configure application logging.

    Sets up log levels based on environment. Structured events go through
    Logfire, see ``tomatoes.util.observability``.

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

    # SQL echo is controlled by the engine, keep the driver quiet
    logging.getLogger("asyncpg").setLevel(logging.WARNING)
    logging.getLogger("tomatoes").setLevel(level)

    logger = logging.getLogger(__name__)
    logger.info(
        "Logging configured: environment=%s, level=%s",
        settings.environment,
        logging.getLevelName(level),
    )
