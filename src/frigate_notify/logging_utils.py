"""Logging setup."""

import logging

from frigate_notify.constants import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)

# Third-party loggers that flood DEBUG output with connection pool chatter.
NOISY_LOGGERS = ("urllib3", "requests")


def setup_logging(log_level: str):
    """Configure logging with the specified level."""
    level = getattr(logging, log_level.upper(), logging.INFO)

    # Reconfigure the root logger
    logging.getLogger().setLevel(level)
    logger.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.info(f"Log level set to {log_level.upper()}")
