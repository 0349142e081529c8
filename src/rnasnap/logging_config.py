"""
Logging setup shared by all rnasnap modules

The level is read from the RNASNAP_LOG_LEVEL environment variable
(DEBUG, INFO, WARNING, ERROR, CRITICAL), default WARNING.

Examples:
    >>> from rnasnap.logging_config import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("canvas %dx%d", 120, 80)
"""

import logging
import os


def get_logger(name: str) -> logging.Logger:
    """
    Get or create a logger with the specified name

    Args:
        name: Logger name (typically __name__ from the calling module)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Only configure once, repeated calls must not stack handlers
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.propagate = False

        level_name = os.getenv("RNASNAP_LOG_LEVEL", "WARNING").upper()
        try:
            logger.setLevel(getattr(logging, level_name))
        except AttributeError:
            logger.setLevel(logging.WARNING)
            logger.warning(
                f"Invalid RNASNAP_LOG_LEVEL '{level_name}'. Using WARNING instead. "
                f"Valid levels: DEBUG, INFO, WARNING, ERROR, CRITICAL"
            )

    return logger


def set_log_level(level: str) -> None:
    """Change the level of every rnasnap logger created so far."""
    numeric = getattr(logging, level.upper(), logging.WARNING)
    for name in list(logging.Logger.manager.loggerDict):
        if name == "rnasnap" or name.startswith("rnasnap."):
            logging.getLogger(name).setLevel(numeric)
