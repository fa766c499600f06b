# File: app/core/logging_config.py

import logging

from app.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: Settings) -> None:
    """
    Configure root logging once per process.

    Calling this again (e.g. a second app built in tests) only adjusts the level.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    root.setLevel(level)

    logger = logging.getLogger("app")
    logger.info("Environment: %s", settings.environment)
    logger.info("Database: %s", settings.database_url.split("://", 1)[0])
    if settings.uses_default_secret:
        logger.warning("Using default JWT secret. Set JWT_SECRET environment variable!")
