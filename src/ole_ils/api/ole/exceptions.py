from ole_ils.core.exceptions import IntegrationException


class ILSException(IntegrationException):
    """Something went wrong talking to OLE.

    This is the one exception type the driver raises to its callers.
    The message is the message of the underlying failure, which is
    chained as the cause.
    """

    @classmethod
    def from_exception(cls, exception: Exception) -> "ILSException":
        return cls(
            getattr(exception, "message", None) or str(exception),
            debug_message=getattr(exception, "debug_message", None),
        )
