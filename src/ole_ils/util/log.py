import functools
import logging
import time
from collections.abc import Callable
from typing import TypeVar

from typing_extensions import ParamSpec

from ole_ils.service.logging.configuration import LogLevel

P = ParamSpec("P")
T = TypeVar("T")


class LoggerMixin:
    """Gives a class a logger named after its module and class."""

    @classmethod
    @functools.cache
    def logger(cls) -> logging.Logger:
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @property
    def log(self) -> logging.Logger:
        return self.logger()


def log_elapsed_time(
    *, log_level: LogLevel, message_prefix: str
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """Log how long each call of a LoggerMixin method takes, and whether
    it raised.
    """

    def outer(fn: Callable[P, T]) -> Callable[P, T]:
        @functools.wraps(fn)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            owner = args[0] if args else None
            if not isinstance(owner, LoggerMixin) and not (
                isinstance(owner, type) and issubclass(owner, LoggerMixin)
            ):
                raise RuntimeError(
                    "log_elapsed_time must decorate a method of a LoggerMixin."
                )
            log = getattr(owner.logger(), log_level.name)

            outcome = "Completed"
            tic = time.perf_counter()
            try:
                return fn(*args, **kwargs)
            except Exception as e:
                outcome = f"Failed (raised {e.__class__.__name__})"
                raise
            finally:
                log(
                    f"{message_prefix}: {outcome}. "
                    f"(elapsed time: {time.perf_counter() - tic:0.4f} seconds)"
                )

        return wrapper

    return outer


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    if plural is None:
        plural = singular + "s"
    return f"{count} {singular if count == 1 else plural}"
