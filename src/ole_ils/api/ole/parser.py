from __future__ import annotations

import datetime
from abc import ABC
from functools import cached_property
from typing import TYPE_CHECKING, TypeVar

from ole_ils.api.ole.constants import (
    DOCSTORE_NAMESPACES,
    LOANED_STATUS,
    OVERDUE,
    SUCCESS_MARKER,
    UNKNOWN_TITLE,
)
from ole_ils.api.ole.data import (
    Fine,
    Hold,
    Holding,
    ItemStatus,
    RecordStatus,
    Transaction,
)
from ole_ils.core.exceptions import ILSValueError
from ole_ils.util.log import LoggerMixin
from ole_ils.util.xmlparser import XMLParser, XMLProcessor

if TYPE_CHECKING:
    from lxml.etree import _Element

T = TypeVar("T")


class CirculationParser(XMLProcessor[T], ABC):
    """Base class for documents returned by the OLE circulation service.

    These documents use no namespaces.
    """

    @staticmethod
    def bib_id(catalogue_id: str) -> str:
        """catalogueId looks like "wbm-1458569"; the bib ID is the part
        after the first hyphen. An ID with no hyphen is used as is.
        """
        _, hyphen, bib_id = catalogue_id.partition("-")
        return bib_id if hyphen else catalogue_id

    def title(self, tag: _Element) -> str:
        return self.text_of_subtag(tag, "title") or UNKNOWN_TITLE


class PatronProfileParser(CirculationParser[dict[str, str]]):
    """Read the response to lookupUser into the PatronProfile fields it
    has values for."""

    FIELDS = {
        "firstname": "patronName/firstName",
        "lastname": "patronName/lastName",
        "email": "patronEmail/emailAddress",
        "address1": "patronAddress/line1",
        "address2": "patronAddress/line2",
        "zip": "patronAddress/postalCode",
        "phone": "patronPhone/phoneNumber",
    }

    XPATH = "/*"

    def process_one(self, tag: _Element) -> dict[str, str]:
        values = {}
        for field, path in self.FIELDS.items():
            if value := self.text_of_subtag(tag, path):
                values[field] = value
        return values


class CheckedOutItemParser(CirculationParser[Transaction]):
    XPATH = "//checkOutItem"

    def process_one(self, tag: _Element) -> Transaction:
        # dueDate looks like "2013-10-22 23:59:00.0"
        due_date = self.text_of_subtag(tag, "dueDate")
        overdue = self.text_of_subtag(tag, "overDue") == "true"
        return Transaction(
            id=self.bib_id(self.text_of_subtag(tag, "catalogueId")),
            item_id=self.text_of_subtag(tag, "itemId"),
            duedate=due_date[:10],
            due_time=due_date[11:],
            due_status=OVERDUE if overdue else "",
            title=self.title(tag),
        )


class FineParser(CirculationParser[Fine]):
    XPATH = "//fineItem"

    def process_one(self, tag: _Element) -> Fine:
        return Fine(
            amount=self.text_of_subtag(tag, "amount"),
            balance=self.text_of_subtag(tag, "balance"),
            id=self.text_of_subtag(tag, "catalogueId"),
        )


class HoldParser(CirculationParser[Hold]):
    XPATH = "//hold"

    def __init__(self, today: datetime.date) -> None:
        self.today = today.isoformat()

    def process_one(self, tag: _Element) -> Hold:
        # Dates are YYYY-MM-DD, so they sort as strings. A hold with no
        # availableDate sorts first and counts as available.
        available_date = self.text_of_subtag(tag, "availableDate")
        return Hold(
            id=self.bib_id(self.text_of_subtag(tag, "catalogueId")),
            item_id=self.text_of_subtag(tag, "itemId"),
            type=self.text_of_subtag(tag, "requestType"),
            expire=self.text_of_subtag(tag, "expiryDate"),
            create=self.text_of_subtag(tag, "createDate"),
            position=self.text_of_subtag(tag, "priority"),
            available=available_date <= self.today,
            reqnum=self.text_of_subtag(tag, "requestId"),
            title=self.title(tag),
        )


class MessageParser(CirculationParser[str], LoggerMixin):
    """Read the message out of the response to a placeRequest or
    renewItem call."""

    XPATH = "//message"

    def process_one(self, tag: _Element) -> str:
        return tag.text or ""

    @staticmethod
    def trim_to_markup(content: bytes) -> bytes:
        """The circulation service pads its XML with stray characters.
        Keep only what lies between the first '<' and the last '>'.
        """
        start = content.find(b"<")
        end = content.rfind(b">")
        if start == -1 or end < start:
            return b""
        return content[start : end + 1]

    def message(self, content: bytes) -> str | None:
        """The first message in the response, or None if it has none."""
        markup = self.trim_to_markup(content)
        if not markup:
            return None
        try:
            return self.process_first(markup)
        except ILSValueError as e:
            self.log.warning(f"Could not parse circulation response: {e}")
            return None

    @staticmethod
    def is_success(message: str) -> bool:
        return SUCCESS_MARKER in message.lower()


class DocstoreItemParser(XMLParser):
    """Read the circulation status of an ole:item element."""

    NAMESPACES = DOCSTORE_NAMESPACES

    def item_status(self, item: _Element) -> ItemStatus:
        status = self.text_of_subtag(
            item, "circ:itemStatus/*[local-name()='fullValue']"
        )
        return ItemStatus(status=status, availability=status != LOANED_STATUS)


class DocstoreRecord(DocstoreItemParser):
    """An instanceDetails document from the OLE docstore: one bibliographic
    record with its holdings and items.
    """

    def __init__(self, bib_id: str, xml: str | bytes) -> None:
        self.bib_id = bib_id
        self.root = self.parse(xml)

    @cached_property
    def call_number(self) -> str:
        """The call number of the first holdings of the record."""
        return self.text_of_subtag(
            self.root, "(//ole:oleHoldings)[1]/ole:callNumber/ole:number"
        )

    @cached_property
    def location(self) -> str:
        """Every location level of the record, each followed by a slash."""
        return "".join(
            f"{self.text_of_subtag(level, 'ole:name')}/"
            for level in self.xpath(self.root, "//circ:locationLevel")
        )

    def items(self) -> list[_Element]:
        return self.xpath(self.root, "//ole:item")

    def record_status(self, item: _Element) -> RecordStatus:
        status = self.item_status(item)
        return RecordStatus(
            status=status.status,
            location=self.location,
            availability=status.availability,
            callnumber=self.call_number,
            id=self.bib_id,
        )

    def holding(self, item: _Element, has_patron: bool) -> Holding:
        status = self.item_status(item)
        holdable = has_patron and status.availability
        return Holding(
            status=status.status,
            location=self.location,
            availability=status.availability,
            callnumber=self.call_number,
            id=self.bib_id,
            duedate=self.text_of_subtag(item, "*[local-name()='dueDateTime']"),
            barcode=self.text_of_subtag(item, "ole:accessInformation/ole:barcode"),
            item_id=self.text_of_subtag(item, "ole:itemIdentifier"),
            is_holdable=holdable,
            add_link=holdable,
        )
