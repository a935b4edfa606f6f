import logging
from ..errors import ConfigurationError

LOG_FORMAT = "%(levelname)s %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_logger(name: str = "csim"):
    logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT)
    return logging.getLogger(name)


def set_log_level(level):
    """Sets the level of every csim logger at once."""
    if isinstance(level, str):
        if level.upper() not in LOG_LEVELS:
            raise ConfigurationError(f"Unknown log level '{level}' (expected one of: {', '.join(LOG_LEVELS)})")
        level = getattr(logging, level.upper())
    elif not isinstance(level, int) or isinstance(level, bool):
        raise ConfigurationError(f"Log level must be a name or an integer, got {level!r}")
    logging.getLogger("csim").setLevel(level)
