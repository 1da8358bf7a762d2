from __future__ import annotations

import datetime

from requests import Response

from ole_ils.api.ole.constants import (
    HOLD_REQUEST_TYPE,
    SERVICE_OPERATORS,
    CirculationServiceName,
)
from ole_ils.api.ole.data import Fine, Hold, Transaction
from ole_ils.api.ole.parser import (
    CheckedOutItemParser,
    FineParser,
    HoldParser,
    MessageParser,
    PatronProfileParser,
)
from ole_ils.util.http.http import HTTP
from ole_ils.util.log import LoggerMixin, pluralize


class OLECirculationAPI(LoggerMixin):
    """Client for the OLE circulation service (olefs/circulation).

    Every call is a single request to the service URL, with the call
    named by the `service` query parameter.
    """

    def __init__(self, url: str, timeout: int = HTTP.DEFAULT_REQUEST_TIMEOUT):
        self.url = url
        self.timeout = timeout

    def _request(
        self,
        method: str,
        service: CirculationServiceName,
        patron_id: str,
        timeout: int | None = None,
        **params: str,
    ) -> Response:
        query = {
            "service": str(service),
            "patronId": patron_id,
            "operatorId": str(SERVICE_OPERATORS[service]),
            **params,
        }
        self.log.info(f"{method} {service} for patron {patron_id}")
        return HTTP.request_with_timeout(
            method,
            self.url,
            params=query,
            timeout=timeout or self.timeout,
        )

    def lookup_user(self, patron_id: str) -> dict[str, str]:
        """Profile fields the service has a value for."""
        response = self._request(
            "GET", CirculationServiceName.lookup_user, patron_id
        )
        return PatronProfileParser().process_first(response.content) or {}

    def checked_out_items(self, patron_id: str) -> list[Transaction]:
        response = self._request(
            "GET", CirculationServiceName.checked_out_items, patron_id
        )
        items = list(CheckedOutItemParser().process_all(response.content))
        self.log.info(f"Patron {patron_id} has {pluralize(len(items), 'checkout')}")
        return items

    def fines(self, patron_id: str) -> list[Fine]:
        response = self._request("GET", CirculationServiceName.fines, patron_id)
        return list(FineParser().process_all(response.content))

    def holds(self, patron_id: str, today: datetime.date) -> list[Hold]:
        response = self._request("GET", CirculationServiceName.holds, patron_id)
        return list(HoldParser(today).process_all(response.content))

    def place_request(
        self,
        patron_id: str,
        item_barcode: str,
        timeout: int | None = None,
        request_type: str = HOLD_REQUEST_TYPE,
    ) -> str:
        """Place a hold on an item and return the service's message,
        which is empty if the response carried none.
        """
        response = self._request(
            "POST",
            CirculationServiceName.place_request,
            patron_id,
            timeout=timeout,
            itemBarcode=item_barcode,
            requestType=request_type,
        )
        return MessageParser().message(response.content) or ""

    def renew_item(self, patron_id: str, item_barcode: str) -> str:
        """Renew an item and return the service's message, or the whole
        response body when it holds no message.
        """
        response = self._request(
            "POST",
            CirculationServiceName.renew_item,
            patron_id,
            itemBarcode=item_barcode,
        )
        message = MessageParser().message(response.content)
        return message if message is not None else response.text
