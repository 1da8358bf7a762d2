from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from ole_ils.core.exceptions import ILSValueError
from ole_ils.util.xmlparser import XMLParser, XMLProcessor

if TYPE_CHECKING:
    from lxml.etree import _Element


class BarcodeProcessor(XMLProcessor[str]):
    """The barcode of every item that has one."""

    XPATH = "//item"

    def process_one(self, tag: _Element) -> str | None:
        return self.text_of_subtag(tag, "barcode") or None


class TestXMLProcessor:
    def test_process_all(self) -> None:
        data = (
            "<items><item><barcode>111</barcode></item><other/>"
            "<item/><item><barcode>222</barcode></item></items>"
        )
        assert list(BarcodeProcessor().process_all(data)) == ["111", "222"]

    def test_process_all_bytes(self) -> None:
        data = b"<items><item><barcode>111</barcode></item></items>"
        assert list(BarcodeProcessor().process_all(data)) == ["111"]

    def test_null_bytes_are_dropped(self) -> None:
        data = "<items><item><barcode>1\x0011</barcode></item></items>"
        assert list(BarcodeProcessor().process_all(data)) == ["111"]

    def test_process_first(self) -> None:
        processor = BarcodeProcessor()
        data = "<items><item/><item><barcode>1</barcode></item><item><barcode>2</barcode></item></items>"
        assert processor.process_first(data) == "1"
        assert processor.process_first("<items><other/></items>") is None

    def test_not_xml(self) -> None:
        with pytest.raises(ILSValueError):
            BarcodeProcessor().process_first("just some text")


class TestXMLParser:
    def test_text_of_subtag(self) -> None:
        root = XMLParser.parse(
            "<patron><name>Ann</name><empty/><address><city>Chicago</city></address></patron>"
        )
        assert XMLParser.text_of_subtag(root, "name") == "Ann"
        assert XMLParser.text_of_subtag(root, "address/city") == "Chicago"
        assert XMLParser.text_of_subtag(root, "empty") == ""
        assert XMLParser.text_of_subtag(root, "missing") == ""

    def test_xpath1(self) -> None:
        root = XMLParser.parse("<a><b>1</b><b>2</b></a>")
        found = XMLParser.xpath1(root, "b")
        assert found is not None and found.text == "1"
        assert XMLParser.xpath1(root, "c") is None

    def test_namespaces(self) -> None:
        class InstanceParser(XMLParser):
            NAMESPACES = {"ole": "http://ole.kuali.org/standards/ole-instance"}

        root = InstanceParser.parse(
            '<instance xmlns="http://ole.kuali.org/standards/ole-instance">'
            "<item>1</item></instance>"
        )
        assert InstanceParser.text_of_subtag(root, "ole:item") == "1"
        # Without the prefix, the default namespace does not match.
        assert InstanceParser.text_of_subtag(root, "item") == ""
