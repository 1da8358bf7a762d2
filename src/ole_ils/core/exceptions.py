from typing import Any


class BaseILSException(Exception):
    """Base class for all Exceptions raised by the OLE driver."""

    def __init__(self, message: str | None = None):
        """Initializes a new instance of BaseILSException class

        :param message: String containing description of the exception that occurred
        """
        super().__init__(message)
        self.message = message

    def __getstate__(self) -> dict[str, Any]:
        return {"dict": self.__dict__, "args": self.args}

    def __setstate__(self, state: dict[str, Any] | None) -> None:
        # state is always a dict from __getstate__, but the signature must
        # accept None to match BaseException.__setstate__
        assert state is not None
        self.__dict__.update(state["dict"])
        self.args = state["args"]

    def __reduce__(self) -> tuple[Any, ...]:
        state = self.__getstate__()
        return self.__class__.__new__, (self.__class__,), state


class ILSValueError(BaseILSException, ValueError): ...


class IntegrationException(BaseILSException):
    """An exception that happens when the driver's connection to a
    backing system is broken.

    This may be because communication failed
    (RemoteIntegrationException), or because local configuration is
    missing or obviously wrong (CannotLoadConfiguration).
    """

    def __init__(self, message: str | None, debug_message: str | None = None) -> None:
        """Constructor.

        :param message: The normal message passed to any Exception
        constructor.

        :param debug_message: An extra human-readable explanation of the
        problem, shown to administrators but not to patrons. This may
        include the raw response of the remote service, or the
        configuration value that was rejected.
        """
        super().__init__(message)
        self.debug_message = debug_message
