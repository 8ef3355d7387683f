"""
Logging for the 'protoverses' logger namespace.

INFO reports injected protoplanets, collisions and planets lost to the
primary. DEBUG adds discarded trials, every change to the dust bands and
surface temperatures that did not settle.
"""
import logging
import sys

from protoverses.util.errors import ConfigError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def resolve_level(level):
    """
    Turn a level name such as DEFAULT_PARAMS["log_level"] ("WARNING",
    "debug", ...) or a logging constant into a logging level number
    """
    if isinstance(level, str):
        number = logging.getLevelName(level.upper())
        if not isinstance(number, int):
            raise ConfigError(f"Unknown log level: {level}")
        return number
    return int(level)


def setup_logging(level=logging.INFO, log_file=None):
    """
    Attach a stdout handler, and optionally a file handler, to the
    'protoverses' logger. Calling it again replaces the previous handlers.

    Args:
        level (str or int):
            Level name or logging constant
        log_file (str or None):
            Path of a log file, overwritten on every call
    """
    level = resolve_level(level)
    logger = logging.getLogger("protoverses")
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S")
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug(f"Logging initialized at {logging.getLevelName(level)}.")
