import datetime

import pytest

from ole_ils.api.ole.circulation import OLECirculationAPI
from ole_ils.util.http.exception import BadResponseException
from tests.fixtures.files import OLEFilesFixture
from tests.fixtures.http import MockHttpClientFixture
from tests.fixtures.ole import CIRCULATION_URL


class CirculationFixture:
    def __init__(self, http_client: MockHttpClientFixture, files: OLEFilesFixture):
        self.http_client = http_client
        self.files = files
        self.api = OLECirculationAPI(CIRCULATION_URL, timeout=15)

    def queue_file(self, filename: str) -> None:
        self.http_client.queue_response(200, self.files.sample_data(filename))

    def last_request(self) -> tuple[str, str, dict]:
        return (
            self.http_client.requests_methods[-1],
            self.http_client.requests[-1],
            dict(self.http_client.requests_args[-1]),
        )


@pytest.fixture
def circulation(
    http_client: MockHttpClientFixture, ole_files_fixture: OLEFilesFixture
) -> CirculationFixture:
    return CirculationFixture(http_client, ole_files_fixture)


class TestOLECirculationAPI:
    def test_lookup_user(self, circulation: CirculationFixture) -> None:
        circulation.queue_file("lookup_user.xml")
        values = circulation.api.lookup_user("1001")
        assert values["firstname"] == "Janet"
        assert values["zip"] == "60637"

        method, url, kwargs = circulation.last_request()
        assert method == "GET"
        assert url == CIRCULATION_URL
        assert kwargs["params"] == {
            "service": "lookupUser",
            "patronId": "1001",
            "operatorId": "dev2",
        }
        assert kwargs["timeout"] == 15

    def test_lookup_user_no_record(self, circulation: CirculationFixture) -> None:
        circulation.http_client.queue_response(200, content="<lookupUser/>")
        assert circulation.api.lookup_user("1001") == {}

    def test_checked_out_items(self, circulation: CirculationFixture) -> None:
        circulation.queue_file("checked_out_items.xml")
        items = circulation.api.checked_out_items("1001")
        assert [item.item_id for item in items] == [
            "39000001234567",
            "39000007654321",
        ]

        _, _, kwargs = circulation.last_request()
        assert kwargs["params"]["service"] == "getCheckedOutItems"
        assert kwargs["params"]["operatorId"] == "dev2"

    def test_fines(self, circulation: CirculationFixture) -> None:
        circulation.queue_file("fines.xml")
        fines = circulation.api.fines("1001")
        assert [fine.amount for fine in fines] == ["10.00", "2.00"]

        _, _, kwargs = circulation.last_request()
        assert kwargs["params"] == {
            "service": "fine",
            "patronId": "1001",
            "operatorId": "API",
        }

    def test_holds(self, circulation: CirculationFixture) -> None:
        circulation.queue_file("holds.xml")
        holds = circulation.api.holds("1001", datetime.date(2013, 10, 15))
        assert [hold.available for hold in holds] == [True, False]

        _, _, kwargs = circulation.last_request()
        assert kwargs["params"]["service"] == "holds"
        assert kwargs["params"]["operatorId"] == "API"

    def test_place_request(self, circulation: CirculationFixture) -> None:
        circulation.queue_file("place_request_success.xml")
        message = circulation.api.place_request("1001", "39000001234568", timeout=30)
        assert message == "Request raised successfully"

        method, _, kwargs = circulation.last_request()
        assert method == "POST"
        assert kwargs["params"] == {
            "service": "placeRequest",
            "patronId": "1001",
            "operatorId": "API",
            "itemBarcode": "39000001234568",
            "requestType": "Page/Hold Request",
        }
        assert kwargs["timeout"] == 30

    def test_place_request_no_message(self, circulation: CirculationFixture) -> None:
        circulation.http_client.queue_response(200, content="")
        assert circulation.api.place_request("1001", "390") == ""

        # Without an explicit timeout, the client's own is used.
        _, _, kwargs = circulation.last_request()
        assert kwargs["timeout"] == 15

    def test_renew_item(self, circulation: CirculationFixture) -> None:
        circulation.queue_file("renew_item.xml")
        assert circulation.api.renew_item("1001", "390") == "Successfully renewed"

        method, _, kwargs = circulation.last_request()
        assert method == "POST"
        assert kwargs["params"] == {
            "service": "renewItem",
            "patronId": "1001",
            "operatorId": "API",
            "itemBarcode": "390",
        }

    def test_renew_item_raw_body(self, circulation: CirculationFixture) -> None:
        circulation.http_client.queue_response(200, content="Patron not found")
        assert circulation.api.renew_item("1001", "390") == "Patron not found"

    def test_server_error(self, circulation: CirculationFixture) -> None:
        circulation.http_client.queue_response(500, content="Internal error")
        with pytest.raises(BadResponseException):
            circulation.api.fines("1001")
