"""
Logging setup for MathSolver.

Every module logs below the "mathsolver" logger (mathsolver.Parser,
mathsolver.Evaluator, ...). setup_logging() attaches the handlers there;
the level usually comes from the "log_level" entry of config.json.
"""
import logging
import sys

LOGGER_NAME = "mathsolver"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'


def to_level(level):
    """logging.DEBUG or a config value such as "debug". Unknown names give INFO."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    if isinstance(value, int):
        return value
    return logging.INFO


def _prepared(handler, level, formatter):
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(level=logging.INFO, log_file=None):
    """Configure the mathsolver logger. Calling it again replaces the earlier handlers."""
    level = to_level(level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.addHandler(_prepared(logging.StreamHandler(sys.stdout), level, formatter))

    if log_file:
        logger.addHandler(_prepared(logging.FileHandler(log_file, mode='a', encoding='utf-8'), level, formatter))

    logger.debug("Logging at %s%s", logging.getLevelName(level), f", also to {log_file}" if log_file else "")
    return logger
