import pickle

from ole_ils.util.http.exception import (
    BadResponseException,
    HttpResponse,
    RemoteIntegrationException,
    RequestTimedOut,
)
from tests.mocks.mock import MockRequestsResponse

URL = "http://ole.example.org/olefs/circulation"


class TestRemoteIntegrationException:
    def test_message(self) -> None:
        exc = RemoteIntegrationException(URL, "Unexpected response")
        assert exc.url == URL
        assert exc.service == "ole.example.org"
        assert str(exc) == f"Error accessing {URL}: Unexpected response"

    def test_debug_message(self) -> None:
        exc = RequestTimedOut(URL, "Read timed out", "debug")
        assert exc.message == "Read timed out"
        assert str(exc) == f"Timeout accessing {URL}: Read timed out\n\ndebug"


class TestBadResponseException:
    def test_bad_status_code(self) -> None:
        response = MockRequestsResponse(502, "Bad gateway", url=URL)
        exc = BadResponseException.bad_status_code(URL, response)
        assert exc.message == "Got status code 502 from external server, cannot continue."
        assert exc.debug_message == "Response content: Bad gateway"
        assert exc.response == HttpResponse(
            status_code=502, url=URL, headers={}, text="Bad gateway"
        )

    def test_pickle(self) -> None:
        exc = BadResponseException(URL, "Bad", MockRequestsResponse(500, "oops"))
        unpickled = pickle.loads(pickle.dumps(exc))
        assert isinstance(unpickled, BadResponseException)
        assert unpickled.message == "Bad"
        assert unpickled.response.text == "oops"
        assert str(unpickled) == str(exc)
