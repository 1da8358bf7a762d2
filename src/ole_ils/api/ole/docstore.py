from __future__ import annotations

from ole_ils.api.ole.constants import INSTANCE_DETAILS_ACTION
from ole_ils.api.ole.parser import DocstoreRecord
from ole_ils.util.http.http import HTTP
from ole_ils.util.log import LoggerMixin


class OLEDocstoreAPI(LoggerMixin):
    """Client for the OLE document store (oledocstore/document)."""

    def __init__(self, url: str, timeout: int = HTTP.DEFAULT_REQUEST_TIMEOUT):
        self.url = url
        self.timeout = timeout

    def instance_details(self, bib_id: str) -> DocstoreRecord:
        """The instance, holdings and items of a bibliographic record."""
        self.log.info(f"Fetching docstore record {bib_id}")
        response = HTTP.request_with_timeout(
            "GET",
            self.url,
            params={
                "docAction": INSTANCE_DETAILS_ACTION,
                "format": "xml",
                "bibIds": bib_id,
            },
            timeout=self.timeout,
        )
        return DocstoreRecord(bib_id, response.content)
