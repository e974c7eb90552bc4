import logging
import os
import sys
from typing import Optional

LOG_LEVEL_ENV = "CRYPTOCNF_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

def _resolve_level(level: Optional[str]) -> int:
    level_str = (level or os.getenv(LOG_LEVEL_ENV, "INFO")).upper()
    return getattr(logging, level_str, logging.INFO)

def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Returns the logger of a cryptocnf module, writing to stderr.
    The level comes from the argument, else from CRYPTOCNF_LOG_LEVEL.
    Calling it again for the same name never stacks handlers.
    """
    logger = logging.getLogger(name)
    logger.setLevel(_resolve_level(level))

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%SZ"))
        logger.addHandler(handler)

    # Library records stay out of the application's root handlers
    logger.propagate = False
    return logger

logger = get_logger("cryptocnf")
