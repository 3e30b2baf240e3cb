"""
Parser module for rack diagram generation.

Turns RackML markup into a RackSet tree. Only well-formedness is checked
here. Unknown device kinds and odd attribute values are passed through
untouched for the layout engine to default.
"""

import logging
import xml.etree.ElementTree as ET
from typing import Optional, Union

from .models import Device, Gap, Rack, RackSet, Slot

logger = logging.getLogger(__name__)

GAP_TAG = "gap"


class MarkupError(Exception):
    """Raised when input markup is not well-formed."""

    pass


def _local_name(tag: str) -> str:
    """Strip an ElementTree ``{namespace}`` prefix from a tag."""
    if tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag


def _text_content(element: ET.Element) -> str:
    return "".join(element.itertext()).strip()


def _attribute(element: ET.Element, name: str) -> Optional[str]:
    """Look up an attribute, accepting an ``xlink:`` qualified spelling."""
    value = element.get(name)
    if value is None:
        value = element.get("{http://www.w3.org/1999/xlink}" + name)
    return value


class Parser:
    """Parses RackML text into a RackSet."""

    def parse(self, input_text: Union[str, bytes]) -> RackSet:
        """
        Parse markup text and return the root RackSet.

        The root element's tag is not checked: every child element of the
        root is a rack, and every child element of a rack is a slot.

        Args:
            input_text: RackML markup. Bytes are decoded according to
                their XML declaration, UTF-8 when there is none.

        Returns:
            RackSet with racks in declaration order.

        Raises:
            MarkupError: If the text is not well-formed XML.
        """
        try:
            root = ET.fromstring(input_text)
        except ET.ParseError as exc:
            logger.debug("RackML parse failed: %s", exc)
            raise MarkupError("Failed to parse input") from exc

        racks = tuple(self._parse_rack(child) for child in root)
        logger.debug("Parsed %d rack(s)", len(racks))
        return RackSet(racks=racks)

    def _parse_rack(self, element: ET.Element) -> Rack:
        slots = tuple(self._parse_slot(child) for child in element)
        return Rack(
            name=element.get("name"),
            height=element.get("height"),
            slots=slots,
        )

    def _parse_slot(self, element: ET.Element) -> Slot:
        kind = _local_name(element.tag)
        if kind == GAP_TAG:
            return Gap(at=element.get("at"), height=element.get("height"))

        return Device(
            kind=kind,
            at=element.get("at"),
            height=element.get("height"),
            color=element.get("color"),
            href=_attribute(element, "href"),
            label=_text_content(element),
        )


def parse_rackml(input_text: Union[str, bytes]) -> RackSet:
    """
    Convenience function to parse RackML input.

    Args:
        input_text: RackML markup.

    Returns:
        The parsed RackSet.
    """
    parser = Parser()
    return parser.parse(input_text)
