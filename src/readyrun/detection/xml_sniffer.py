#
# src/readyrun/detection/xml_sniffer.py
#
"""
Reads an XML stream only as far as the first occurrence of one element.

Project files can be many megabytes while the only thing of interest is an
attribute of the root element, so the document is fed to an incremental SAX
parser chunk by chunk and feeding stops as soon as the element was seen.
"""

from enum import Enum, auto
from typing import IO
from xml.sax import SAXParseException, make_parser
from xml.sax.handler import ContentHandler, feature_external_ges, feature_namespaces
from xml.sax.xmlreader import AttributesImpl

import structlog

log = structlog.get_logger("detection.xml_sniffer")

DEFAULT_CHUNK_SIZE = 8192


class SniffResult(Enum):
    """Outcome of looking for an element attribute."""

    FOUND_WITH_VALUE = auto()  # Element seen, attribute present and non-empty.
    FOUND_WITHOUT_VALUE = auto()  # Element seen, attribute absent or empty.
    NOT_FOUND = auto()  # Document ended without the element.


class _FirstElementHandler(ContentHandler):
    """Remembers the attribute of the first element with a matching qualified name."""

    def __init__(self, element_name: str, attribute_name: str):
        super().__init__()
        self.element_name = element_name
        self.attribute_name = attribute_name
        self.found = False
        self.value: str | None = None

    def startElement(self, name: str, attrs: AttributesImpl) -> None:
        if self.found or name != self.element_name:
            return
        self.found = True
        self.value = attrs.get(self.attribute_name)


def sniff_element_attribute(
    source: IO[bytes],
    element_name: str,
    attribute_name: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> SniffResult:
    """
    Looks for the first `element_name` element and inspects `attribute_name` on it.

    `element_name` is matched against the qualified name as written in the
    document (e.g. ``con:soapui-project``), without namespace resolution.

    Raises:
        SAXParseException: the XML is malformed before the element is reached.
    """
    handler = _FirstElementHandler(element_name, attribute_name)
    parser = make_parser()
    parser.setFeature(feature_namespaces, False)
    parser.setFeature(feature_external_ges, False)
    parser.setContentHandler(handler)

    bytes_read = 0
    while not handler.found:
        chunk = source.read(chunk_size)
        if not chunk:
            # Validates the end of the document; raises if it was truncated.
            parser.close()
            break
        bytes_read += len(chunk)
        try:
            parser.feed(chunk)
        except SAXParseException:
            # Junk after the element in the same chunk is never looked at.
            if not handler.found:
                raise

    if not handler.found:
        log.debug("Element not found in document", element=element_name, bytes_read=bytes_read)
        return SniffResult.NOT_FOUND

    log.debug(
        "Element found, parsing stopped",
        element=element_name,
        attribute=attribute_name,
        has_value=bool(handler.value),
        bytes_read=bytes_read,
    )
    if handler.value:
        return SniffResult.FOUND_WITH_VALUE
    return SniffResult.FOUND_WITHOUT_VALUE

# 🔼⚙️
