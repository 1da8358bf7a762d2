from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from lxml import etree

from ole_ils.core.exceptions import ILSValueError

if TYPE_CHECKING:
    from lxml.etree import _Element

T = TypeVar("T")


class XMLParser:
    """Reads values out of the XML documents the OLE services send.

    XPath expressions are evaluated with the prefixes in NAMESPACES.
    """

    NAMESPACES: ClassVar[Mapping[str, str]] = {}

    @staticmethod
    def parse(xml: str | bytes) -> _Element:
        """The root element of a document.

        The parser recovers from most malformed markup, but gives up at
        a null byte, so those are dropped first.
        """
        data = xml.encode("utf8") if isinstance(xml, str) else xml
        try:
            root = etree.fromstring(
                data.replace(b"\x00", b""), etree.XMLParser(recover=True)
            )
        except etree.XMLSyntaxError as e:
            raise ILSValueError(f"Could not parse XML document: {e}") from e
        if root is None:
            raise ILSValueError("XML document has no root element.")
        return root

    @classmethod
    def xpath(cls, tag: _Element, expression: str) -> list[Any]:
        return tag.xpath(expression, namespaces=dict(cls.NAMESPACES))  # type: ignore[no-any-return]

    @classmethod
    def xpath1(cls, tag: _Element, expression: str) -> _Element | None:
        found = cls.xpath(tag, expression)
        return found[0] if found else None

    @classmethod
    def text_of_subtag(cls, tag: _Element, expression: str) -> str:
        """The text of a subtag, or "" if it is missing or empty. OLE
        leaves out elements it has no value for."""
        found = cls.xpath1(tag, expression)
        if found is None or found.text is None:
            return ""
        return str(found.text)


class XMLProcessor(XMLParser, Generic[T], ABC):
    """Turns each element XPATH finds in a document into a value."""

    XPATH: ClassVar[str]

    def process_all(self, xml: str | bytes) -> Iterator[T]:
        """The values of every matching element, skipping those
        process_one returns None for."""
        for tag in self.xpath(self.parse(xml), self.XPATH):
            value = self.process_one(tag)
            if value is not None:
                yield value

    def process_first(self, xml: str | bytes) -> T | None:
        return next(self.process_all(xml), None)

    @abstractmethod
    def process_one(self, tag: _Element) -> T | None: ...
