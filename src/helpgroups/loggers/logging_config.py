import json as jsonlib
import logging
import logging.config
import os
from datetime import datetime
from pathlib import Path
from typing import Dict, List

import structlog
from structlog.processors import CallsiteParameter, CallsiteParameterAdder
from structlog.typing import Processor

from helpgroups.loggers.processors import (
    CallPrettifier,
    PathPrettifier,
    TimeStamper,
)

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
DEFAULT_LOG_LEVEL = "WARNING"

LOG_DIR_NAME = Path(".helpgroups/logs")


class LoggingManager:
    """
    Configure a structlog logger on top of a stdlib logger of the same name.

    Every setting is read from ``<NAME>_*`` environment variables:

    - ``<NAME>_LOG_LEVEL``: level of the logger (default ``WARNING``).
    - ``<NAME>_ENABLE_JSON_LOGGING``: ``1`` adds a rotating JSON-lines file
      under ``<base_dir>/.helpgroups/logs``.
    - ``<NAME>_LOG_TZ``: timezone of the timestamps (default ``UTC``).

    Parameters
    ----------
    name : str
        Logger name, also the prefix of the environment variables.
    base_dir : Path, optional
        Directory paths in log events are made relative to, and the parent
        of the log directory. Defaults to the working directory.

    Examples
    --------
    >>> manager = LoggingManager(name="helpgroups")
    >>> logger = manager.get_logger()
    >>> logger.info("Staging uncategorized flags", group="Misc")
    """

    def __init__(
        self,
        name: str,
        base_dir: Path | None = None,
    ) -> None:
        self.name = name
        self.base_dir = base_dir or Path.cwd()
        self.level = self.env_level
        self.enable_json_logging = self._env("ENABLE_JSON_LOGGING", "0") == "1"
        self.tz = self._env("LOG_TZ", "UTC")
        self._initialize_logger()

    def _env(self, key: str, default: str) -> str:
        return os.environ.get(f"{self.name}_{key}".upper(), default)

    @property
    def env_level(self) -> str:
        return self._env("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

    @property
    def log_dir(self) -> Path:
        return self.base_dir / LOG_DIR_NAME

    @property
    def pre_chain(self) -> List[Processor]:
        return [
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.PositionalArgumentsFormatter(),
            CallsiteParameterAdder(
                [
                    CallsiteParameter.MODULE,
                    CallsiteParameter.FUNC_NAME,
                    CallsiteParameter.LINENO,
                ]
            ),
            PathPrettifier(base_dir=self.base_dir),
            structlog.stdlib.ExtraAdder(),
            structlog.processors.StackInfoRenderer(),
        ]

    def console_formatter(self) -> Dict:
        return {
            "()": structlog.stdlib.ProcessorFormatter,
            "processors": [
                TimeStamper(fmt="%H:%M:%S", tz=self.tz),
                CallPrettifier(concise=True),
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.dev.ConsoleRenderer(
                    colors=True,
                    sort_keys=False,
                    exception_formatter=structlog.dev.RichTracebackFormatter(
                        width=-1,
                        show_locals=False,
                    ),
                ),
            ],
            "foreign_pre_chain": self.pre_chain,
        }

    def json_formatter(self) -> Dict:
        # one record per line so the files can be streamed
        return {
            "()": structlog.stdlib.ProcessorFormatter,
            "processors": [
                TimeStamper(tz=self.tz),
                CallPrettifier(concise=False),
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.dict_tracebacks,
                structlog.processors.JSONRenderer(serializer=jsonlib.dumps),
            ],
            "foreign_pre_chain": self.pre_chain,
        }

    def json_handler(self) -> Dict:
        """Rotating file handler config; creates the log directory."""
        self.log_dir.mkdir(parents=True, exist_ok=True)
        logfile = self.log_dir / f"{self.name}_{datetime.now():%Y-%m-%d_%H-%M-%S}.log"
        return {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "json",
            "filename": str(logfile),
            "maxBytes": 10485760,
            "backupCount": 5,
        }

    @property
    def logging_config(self) -> Dict:
        """The ``logging.config.dictConfig`` mapping for this logger."""
        handlers = {
            "console": {"class": "logging.StreamHandler", "formatter": "console"}
        }
        formatters = {"console": self.console_formatter()}
        if self.enable_json_logging:
            handlers["json"] = self.json_handler()
            formatters["json"] = self.json_formatter()

        return {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": formatters,
            "handlers": handlers,
            "loggers": {
                self.name: {
                    "handlers": list(handlers),
                    "level": self.level,
                    "propagate": False,
                },
            },
        }

    def _initialize_logger(self) -> None:
        logging.config.dictConfig(self.logging_config)
        structlog.configure(
            processors=[
                *self.pre_chain,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

    def get_logger(self) -> structlog.stdlib.BoundLogger:
        return structlog.get_logger(self.name)

    def configure_logging(
        self, level: str = DEFAULT_LOG_LEVEL
    ) -> structlog.stdlib.BoundLogger:
        """
        Reconfigure the logger with a new level.

        Parameters
        ----------
        level : str, optional
            Set the log level.

        Returns
        -------
        structlog.stdlib.BoundLogger
            Updated logger instance.

        Raises
        ------
        ValueError
            If an invalid log level is specified.
        """
        level_upper = level.upper()
        if level_upper not in VALID_LOG_LEVELS:
            msg = f"Invalid logging level: {level}"
            raise ValueError(msg)

        self.level = level_upper
        self._initialize_logger()
        return self.get_logger()
