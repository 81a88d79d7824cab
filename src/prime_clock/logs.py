import logging
from typing import Optional

import structlog

LOGGER_NAME = "prime_clock"
LOG_FORMAT = "%(asctime)s  %(levelname)s  %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"


def configure_logging(verbose: bool = False, handler: Optional[logging.Handler] = None) -> logging.Logger:
    """Route structlog events through the stdlib `prime_clock` logger.

    The handler defaults to stderr; the live display passes its own buffering
    handler so log lines end up in a panel instead of tearing the screen.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    if handler is None:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    for old in list(logger.handlers):
        logger.removeHandler(old)
    logger.addHandler(handler)
    logger.propagate = False
    return logger
