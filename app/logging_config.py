"""
Logging setup for the Cash Card API.

All application loggers live under the "cashcard" namespace so their level
can be controlled independently of uvicorn's and SQLAlchemy's loggers.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Attach a stream handler to the "cashcard" logger tree (idempotent)."""
    logger = logging.getLogger("cashcard")
    logger.setLevel(level.upper())

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    # Don't double-log through the root logger when uvicorn configures it
    logger.propagate = False
