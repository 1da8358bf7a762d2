import argparse
import logging
import sys
from collections.abc import Sequence
from typing import Any, TextIO

from ole_ils.api.ole.driver import OLEDriver
from ole_ils.service.logging.log import setup_logging_from_environment


class Script:
    """A command-line entry point that works against a configured driver."""

    def __init__(
        self,
        driver: OLEDriver | None = None,
        output: TextIO | None = None,
        setup_logging: bool = True,
    ):
        """Basic constructor.

        :param driver: A driver to use instead of one configured from
            the environment. Useful in tests.
        :param output: Where to print results, stdout by default.
        :param setup_logging: Configure the root logger from OLE_LOG_*
            environment variables.
        """
        if setup_logging:
            setup_logging_from_environment()
        self._driver = driver
        self.output = output or sys.stdout

    @property
    def driver(self) -> OLEDriver:
        if self._driver is None:
            self._driver = OLEDriver.from_environment()
        return self._driver

    @property
    def script_name(self) -> str:
        """Find or guess the name of the script.

        This is either the .name of the Script object or the name of
        the class.
        """
        return getattr(self, "name", self.__class__.__name__)

    @property
    def log(self) -> logging.Logger:
        if not hasattr(self, "_log"):
            self._log = logging.getLogger(self.script_name)
        return self._log

    @classmethod
    def arg_parser(cls) -> argparse.ArgumentParser:
        return argparse.ArgumentParser()

    @classmethod
    def parse_command_line(
        cls, cmd_args: Sequence[str] | None = None
    ) -> argparse.Namespace:
        parser = cls.arg_parser()
        return parser.parse_known_args(cmd_args)[0]

    def run(self, cmd_args: Sequence[str] | None = None) -> Any:
        try:
            return self.do_run(self.parse_command_line(cmd_args))
        except Exception as e:
            logging.error("Fatal exception while running script: %s", e, exc_info=e)
            raise

    def do_run(self, args: argparse.Namespace) -> Any:
        raise NotImplementedError()

    def write(self, line: str) -> None:
        self.output.write(line + "\n")
