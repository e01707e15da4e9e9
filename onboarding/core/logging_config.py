"""
Logging configuration for the onboarding service.

Modules log through ``logging.getLogger(__name__)``; this only sets up the
root handler once at application creation.
"""

import logging

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Third-party loggers that are too chatty at INFO
_NOISY_LOGGERS = ("pymongo", "motor", "multipart", "python_multipart")


def configure_logging(level: str = "INFO") -> None:
    """
    Configure root logging.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ...); unknown names fall back to INFO
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
    logging.getLogger().setLevel(numeric_level)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))
