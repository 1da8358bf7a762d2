from ole_ils.util.http.exception import (
    BadResponseException,
    RemoteIntegrationException,
    RequestNetworkException,
    RequestTimedOut,
)
from ole_ils.util.http.http import HTTP

__all__ = [
    "BadResponseException",
    "HTTP",
    "RemoteIntegrationException",
    "RequestNetworkException",
    "RequestTimedOut",
]
