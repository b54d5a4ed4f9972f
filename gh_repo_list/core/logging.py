import sys

from loguru import logger


def setup_logging(level: str = "WARNING"):
    logger.remove()
    logger.add(sys.stderr, level=level.upper())
    return logger
