from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Self
from urllib.parse import urlparse

import requests

from ole_ils.core.exceptions import IntegrationException


class RemoteIntegrationException(IntegrationException):
    """A request to one of the OLE services failed."""

    internal_message = "Error accessing %s: %s"

    def __init__(
        self, url: str, message: str, debug_message: str | None = None
    ) -> None:
        self.url = url
        # The host names the service in messages shown to administrators.
        self.service = urlparse(url).netloc or url
        super().__init__(message, debug_message)

    def __str__(self) -> str:
        message = super().__str__()
        if self.debug_message:
            message += "\n\n" + self.debug_message
        return self.internal_message % (self.url, message)


@dataclass(frozen=True)
class HttpResponse:
    """What is kept of a bad response, so the exception carrying it can
    be pickled without the connection."""

    status_code: int
    url: str
    headers: Mapping[str, str]
    text: str

    @classmethod
    def from_response(cls, response: requests.Response) -> Self:
        return cls(
            status_code=response.status_code,
            url=str(response.url),
            headers=dict(response.headers),
            text=response.text,
        )


class BadResponseException(RemoteIntegrationException):
    """The service answered, but with a server error."""

    internal_message = "Bad response from %s: %s"

    BAD_STATUS_CODE_MESSAGE = "Got status code %s from external server, cannot continue."

    def __init__(
        self,
        url: str,
        message: str,
        response: requests.Response | HttpResponse,
        debug_message: str | None = None,
    ):
        if debug_message is None:
            debug_message = f"Response content: {response.text}"
        super().__init__(url, message, debug_message)
        self.response = (
            response
            if isinstance(response, HttpResponse)
            else HttpResponse.from_response(response)
        )

    @classmethod
    def bad_status_code(cls, url: str, response: requests.Response) -> Self:
        return cls(url, cls.BAD_STATUS_CODE_MESSAGE % response.status_code, response)


class RequestNetworkException(RemoteIntegrationException):
    """The service could not be reached."""

    internal_message = "Network error contacting %s: %s"


class RequestTimedOut(RequestNetworkException):
    """The service did not answer in time."""

    internal_message = "Timeout accessing %s: %s"
