"""Self-tests run against a live OLE installation to check its setup."""

from __future__ import annotations

import traceback
from abc import ABC, abstractmethod
from collections.abc import Callable, Generator
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ParamSpec, Self, TypeVar

from ole_ils.core.exceptions import IntegrationException
from ole_ils.util.datetime_helpers import utc_now

T = TypeVar("T")
P = ParamSpec("P")


@dataclass
class SelfTestResult:
    """The outcome of one named self-test."""

    name: str
    success: bool = False
    # The return value of the test, when it ran to completion.
    result: Any = None
    exception: Exception | None = None
    start: datetime = field(default_factory=utc_now)
    end: datetime | None = None

    @property
    def duration(self) -> float:
        if self.end is None:
            return 0
        return (self.end - self.start).total_seconds()

    @property
    def debug_message(self) -> str | None:
        if self.exception is None:
            return None
        return getattr(self.exception, "debug_message", None)

    def to_dict(self) -> dict[str, Any]:
        exception = None
        if self.exception is not None:
            exception = {
                "class": self.exception.__class__.__name__,
                "message": str(self.exception),
                "debug_message": self.debug_message,
            }
        value: dict[str, Any] = dict(
            name=self.name,
            success=self.success,
            duration=self.duration,
            exception=exception,
            start=self.start.isoformat(),
            # Only strings and lists of strings have a display form.
            result=self.result if isinstance(self.result, (str, list)) else None,
        )
        if self.end is not None:
            value["end"] = self.end.isoformat()
        return value

    @classmethod
    def failed(
        cls, name: str, message: str, debug_message: str | None = None
    ) -> SelfTestResult:
        """A result for a test that could not even be run."""
        result = cls(name)
        result.end = result.start
        result.exception = IntegrationException(message, debug_message)
        return result


@dataclass
class SelfTestReport:
    start: datetime
    end: datetime
    results: list[SelfTestResult]

    @property
    def duration(self) -> float:
        return (self.end - self.start).total_seconds()

    @property
    def success(self) -> bool:
        return all(result.success for result in self.results)

    def to_dict(self) -> dict[str, Any]:
        return dict(
            start=self.start.isoformat(),
            end=self.end.isoformat(),
            duration=self.duration,
            results=[result.to_dict() for result in self.results],
        )


class HasSelfTests(ABC):
    """Something that can check its own setup by running named tests."""

    @classmethod
    def run_self_tests(
        cls, constructor: Callable[[], Self] | None = None
    ) -> SelfTestReport:
        """Build an instance and run its self-tests.

        Building the instance counts as the first test, "Initial setup.".
        When it fails no other test runs.
        """
        start = utc_now()
        setup = cls.run_test("Initial setup.", constructor or cls)
        instance = setup.result
        results = [setup]
        if setup.success:
            setup.result = repr(instance)
            try:
                for result in instance._run_self_tests():
                    results.append(result)
            except Exception:
                results.append(
                    SelfTestResult.failed(
                        "Uncaught exception in the self-test method itself.",
                        "The self-tests stopped early.",
                        traceback.format_exc(),
                    )
                )
        return SelfTestReport(start=start, end=utc_now(), results=results)

    @staticmethod
    def run_test(
        name: str, method: Callable[P, T], *args: P.args, **kwargs: P.kwargs
    ) -> SelfTestResult:
        """Call `method`, recording its return value or exception and
        how long it took.
        """
        result = SelfTestResult(name)
        try:
            result.result = method(*args, **kwargs)
            result.success = True
        except Exception as e:
            result.exception = e
        finally:
            result.end = utc_now()
        return result

    @abstractmethod
    def _run_self_tests(self) -> Generator[SelfTestResult, None, None]: ...
