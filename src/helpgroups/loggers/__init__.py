import os

import structlog

from helpgroups.loggers.logging_config import DEFAULT_LOG_LEVEL, LoggingManager

# Set the default log level from the environment variable or use the default
DEFAULT_OR_ENV = os.environ.get("HELPGROUPS_LOG_LEVEL", DEFAULT_LOG_LEVEL)


def get_logger(name: str, level: str = "INFO") -> structlog.stdlib.BoundLogger:
    """
    Retrieve a logger with the specified log level.

    Parameters
    ----------
    name : str
        Name of Logger Instance
    level : str
        Desired logging level.

    Returns
    -------
    structlog.stdlib.BoundLogger
        Configured logger instance.
    """
    logging_manager = LoggingManager(name)
    env_level = logging_manager.env_level

    if env_level not in (level.upper(), DEFAULT_LOG_LEVEL):
        logging_manager.get_logger().warning(
            f"Environment variable {name.upper()}_LOG_LEVEL is {env_level} "
            f"but you are setting it to {level}"
        )
    return logging_manager.configure_logging(level=level)


logger = get_logger("helpgroups", DEFAULT_OR_ENV)

__all__ = ["get_logger", "logger"]
