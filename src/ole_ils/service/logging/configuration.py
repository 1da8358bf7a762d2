from __future__ import annotations

import logging
from enum import StrEnum, auto

from pydantic import field_validator
from pydantic_settings import SettingsConfigDict

from ole_ils.service.configuration.service_configuration import (
    ServiceConfiguration,
)


class LogLevel(StrEnum):
    """Log levels, spelled the way the logging module expects them."""

    @staticmethod
    def _generate_next_value_(
        name: str, start: int, count: int, last_values: list[str]
    ) -> str:
        return name.upper()

    debug = auto()
    info = auto()
    warning = auto()
    error = auto()

    @classmethod
    def from_level(cls, level: int | str) -> LogLevel:
        """The member for a level number or a level name in any case."""
        if isinstance(level, int):
            name = logging.getLevelName(level)
        else:
            name = str(level).upper()

        try:
            return cls(name)
        except ValueError:
            raise ValueError(f"'{level}' is not a valid LogLevel") from None


class LoggingConfiguration(ServiceConfiguration):
    model_config = SettingsConfigDict(env_prefix="OLE_LOG_")

    # Level of the driver's own loggers.
    level: LogLevel = LogLevel.info

    # Level of chatty third-party loggers (urllib3, sqlalchemy).
    verbose_level: LogLevel = LogLevel.warning

    # Emit JSON log lines instead of plain text.
    json_output: bool = True

    @field_validator("level", "verbose_level", mode="before")
    @classmethod
    def _parse_level(cls, value: int | str) -> LogLevel:
        return LogLevel.from_level(value)
