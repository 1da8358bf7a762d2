from __future__ import annotations

import time
from collections.abc import Callable, Mapping

import requests

from ole_ils.util.http.base import get_user_agent, raise_for_bad_response
from ole_ils.util.http.exception import RequestNetworkException, RequestTimedOut
from ole_ils.util.log import LoggerMixin

Params = Mapping[str, str]
MakeRequest = Callable[..., requests.Response]


class HTTP(LoggerMixin):
    """Sends the GET and POST requests the OLE services answer. Every
    request is sent once, in a fresh session.
    """

    DEFAULT_REQUEST_TIMEOUT = 20

    @classmethod
    def session(cls) -> requests.Session:
        session = requests.Session()
        session.headers["User-Agent"] = get_user_agent()
        return session

    @classmethod
    def request_with_timeout(
        cls,
        http_method: str,
        url: str,
        *,
        params: Params | None = None,
        timeout: float | None = None,
    ) -> requests.Response:
        with cls.session() as session:
            return cls.send(
                session.request, http_method, url, params=params, timeout=timeout
            )

    @classmethod
    def send(
        cls,
        make_request: MakeRequest,
        http_method: str,
        url: str,
        *,
        params: Params | None = None,
        timeout: float | None = None,
    ) -> requests.Response:
        """Make a request, turning `requests` failures and server errors
        into RemoteIntegrationExceptions.
        """
        start = time.perf_counter()
        try:
            response = make_request(
                http_method,
                url,
                params=params,
                timeout=timeout or cls.DEFAULT_REQUEST_TIMEOUT,
            )
        except requests.exceptions.Timeout as e:
            raise RequestTimedOut(url, str(e)) from e
        except requests.exceptions.RequestException as e:
            raise RequestNetworkException(url, str(e)) from e
        cls.logger().info(
            f"{http_method} {url} answered {response.status_code} "
            f"in {time.perf_counter() - start:.2f} seconds"
        )
        return raise_for_bad_response(url, response)
