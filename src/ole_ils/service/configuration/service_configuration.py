from __future__ import annotations

from typing import Any

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from ole_ils.core.config import CannotLoadConfiguration


class ServiceConfiguration(BaseSettings):
    """
    Base class for settings loaded from the environment. Each subclass defines
    its settings as pydantic fields, read from environment variables carrying
    the prefix set in its model_config.
    """

    model_config = SettingsConfigDict(
        env_prefix="OLE_",
        str_strip_whitespace=True,
        # Settings are loaded once, from the environment.
        frozen=True,
        # This loads the .env file from the working directory
        env_file=".env",
        # Nested sections are read from variables like OLE_CATALOG__HOST.
        env_nested_delimiter="__",
        extra="ignore",
    )

    def __init__(self, *args: Any, **kwargs: Any):
        try:
            super().__init__(*args, **kwargs)
        except ValidationError as error_exception:
            # Report each failure under the environment variable that caused it.
            errors = error_exception.errors()
            error_log_message = "Error loading settings from environment:"
            for error in errors:
                delimiter = self.model_config.get("env_nested_delimiter") or "__"
                pydantic_location = error["loc"]
                if pydantic_location:
                    first_error_location = str(pydantic_location[0])
                    env_var = (
                        f"{self.model_config.get('env_prefix')}{first_error_location.upper()}"
                        if first_error_location in type(self).model_fields
                        else first_error_location.upper()
                    )
                    location = delimiter.join(
                        str(e).upper() for e in (env_var, *pydantic_location[1:])
                    )
                    error_log_message += f"\n  {location}:  {error['msg']}"
                else:
                    error_log_message += f"\n  {error['msg']}"
            raise CannotLoadConfiguration(error_log_message) from error_exception
