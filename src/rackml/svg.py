"""
Drawable primitives and SVG serialization.

The assembler builds a small tree of these primitives without depending on
any rendering host. ``to_element`` turns the tree into an ElementTree element
and ``serialize`` turns that into SVG text.
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"

HOVER_STYLE = "a:hover { filter: saturate(4); }"

FONT_FAMILY = "sans-serif"


def format_number(value: float) -> str:
    """Format a coordinate, dropping the decimal point for whole numbers."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class Rect:
    """A filled, outlined rectangle."""

    x: float
    y: float
    width: float
    height: float
    fill: str
    stroke: str = "black"

    def attributes(self) -> Dict[str, str]:
        return {
            "x": format_number(self.x),
            "y": format_number(self.y),
            "width": format_number(self.width),
            "height": format_number(self.height),
            "fill": self.fill,
            "stroke": self.stroke,
        }


@dataclass(frozen=True)
class Text:
    """A text label centred on (x, y)."""

    x: float
    y: float
    content: str
    font_family: str = FONT_FAMILY

    def attributes(self) -> Dict[str, str]:
        return {
            "x": format_number(self.x),
            "y": format_number(self.y),
            "text-anchor": "middle",
            "dominant-baseline": "central",
            "font-family": self.font_family,
        }


@dataclass(frozen=True)
class Style:
    """An embedded stylesheet."""

    css: str = HOVER_STYLE


@dataclass(frozen=True)
class Link:
    """A hyperlink wrapping other primitives."""

    href: str
    children: Tuple["Primitive", ...] = ()


@dataclass(frozen=True)
class Group:
    """A group of primitives, optionally translated."""

    children: Tuple["Primitive", ...] = ()
    translate: Optional[Tuple[float, float]] = None

    @property
    def transform(self) -> Optional[str]:
        if self.translate is None:
            return None
        x, y = self.translate
        return f"translate({format_number(x)}, {format_number(y)})"


Primitive = Union[Rect, Text, Style, Link, Group]


@dataclass(frozen=True)
class Document:
    """
    Root of a drawable tree.

    Attributes:
        width: Canvas width.
        height: Canvas height.
        children: Top-level primitives in drawing order.
    """

    width: float
    height: float
    children: Tuple[Primitive, ...] = field(default_factory=tuple)

    def iter_primitives(self):
        """Yield every primitive in the tree, depth first."""
        stack: List[Primitive] = list(reversed(self.children))
        while stack:
            node = stack.pop()
            yield node
            if isinstance(node, (Group, Link)):
                stack.extend(reversed(node.children))

    def to_element(self) -> ET.Element:
        """Build the ElementTree representation of this document."""
        root = ET.Element(
            "svg",
            {
                "baseProfile": "full",
                "height": format_number(self.height),
                "version": "1.1",
                "width": format_number(self.width),
                "xmlns": SVG_NS,
                "xmlns:xlink": XLINK_NS,
            },
        )
        for child in self.children:
            _append(root, child)
        return root

    def to_svg(self) -> str:
        """Serialize this document to SVG text."""
        return serialize(self)


def _append(parent: ET.Element, node: Primitive) -> None:
    if isinstance(node, Rect):
        ET.SubElement(parent, "rect", node.attributes())
    elif isinstance(node, Text):
        element = ET.SubElement(parent, "text", node.attributes())
        element.text = node.content
    elif isinstance(node, Style):
        element = ET.SubElement(parent, "style")
        element.text = node.css
    elif isinstance(node, Link):
        element = ET.SubElement(parent, "a", {"href": node.href})
        for child in node.children:
            _append(element, child)
    elif isinstance(node, Group):
        attributes = {}
        if node.transform is not None:
            attributes["transform"] = node.transform
        element = ET.SubElement(parent, "g", attributes)
        for child in node.children:
            _append(element, child)
    else:
        raise TypeError(f"Unsupported primitive: {node!r}")


def serialize(document: Document, xml_declaration: bool = False) -> str:
    """
    Convert a Document to SVG text.

    Args:
        document: The drawable tree.
        xml_declaration: Whether to prefix an ``<?xml ...?>`` declaration.

    Returns:
        SVG markup as a string.
    """
    body = ET.tostring(document.to_element(), encoding="unicode")
    if xml_declaration:
        return '<?xml version="1.0" encoding="UTF-8"?>\n' + body
    return body
