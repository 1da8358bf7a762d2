from __future__ import annotations

import logging
import socket

from ole_ils.service.logging.configuration import LoggingConfiguration, LogLevel
from ole_ils.util.datetime_helpers import from_timestamp
from ole_ils.util.json import json_serializer

PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Loggers that report every connection or query. They get the verbose level.
VERBOSE_LOGGERS = ("sqlalchemy.engine", "urllib3.connectionpool")


class JSONFormatter(logging.Formatter):
    """One JSON object per log record."""

    def __init__(self) -> None:
        super().__init__()
        self.hostname = socket.getfqdn()

    def format(self, record: logging.LogRecord) -> str:
        data = dict(
            host=self.hostname,
            name=record.name,
            level=record.levelname,
            filename=record.filename,
            message=record.getMessage(),
            timestamp=from_timestamp(record.created).isoformat(),
            process=record.process,
        )
        if record.exc_info:
            data["traceback"] = self.formatException(record.exc_info)
        return json_serializer(data)


def setup_logging(
    level: LogLevel, verbose_level: LogLevel, handler: logging.Handler
) -> None:
    logging.basicConfig(force=True, level=level.value, handlers=[handler])
    for name in VERBOSE_LOGGERS:
        logging.getLogger(name).setLevel(verbose_level.value)


def setup_logging_from_environment(
    config: LoggingConfiguration | None = None,
) -> LoggingConfiguration:
    """Configure the root logger from OLE_LOG_* environment variables."""
    config = config or LoggingConfiguration()
    handler = logging.StreamHandler()
    handler.setFormatter(
        JSONFormatter() if config.json_output else logging.Formatter(PLAIN_FORMAT)
    )
    setup_logging(config.level, config.verbose_level, handler)
    return config
