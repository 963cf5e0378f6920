import logging
from logging import Logger
from typing import Union

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"
PACKAGE_LOGGER = "openinghours"


def resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level '{level}'")
    return value


def setup_logging(level: Union[int, str] = logging.INFO) -> Logger:
    numeric_level = resolve_level(level)
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(numeric_level)
    logger.debug("Logging initialized at %s.", logging.getLevelName(numeric_level))
    return logger
