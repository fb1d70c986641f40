import logging
import sys
from typing import Optional, TextIO

LOG_FORMAT = '%(asctime)s | %(name)s | %(levelname)s | %(message)s'


def setup_logging(name: str, verbose: bool, stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Returns the `name` logger, at DEBUG level when verbose and WARNING otherwise.

    A handler writing to `stream` (stderr by default) is attached only once per logger name.
    """
    logger = logging.getLogger(name)

    if verbose:
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.WARNING)

    if not logger.handlers:
        handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
