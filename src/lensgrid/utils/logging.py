import logging
import sys
from typing import Dict, Union

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%H:%M:%S"

_configured_loggers: Dict[str, logging.Logger] = {}


def setup_logger(
    logger_name: str = "lensgrid",
    level: Union[str, int] = "INFO",
    log_format: str = DEFAULT_LOG_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> logging.Logger:
    """Attach a single stderr handler to the package logger.

    Calling again with the same name returns the already configured logger.
    """
    if logger_name in _configured_loggers:
        return _configured_loggers[logger_name]
    logger = logging.getLogger(logger_name)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(log_format, datefmt=date_format))
    logger.addHandler(handler)
    logger.propagate = False
    _configured_loggers[logger_name] = logger
    return logger
