"""
Document assembly for rack diagrams.

Converts a LayoutResult into a drawable tree: one translated group per rack
holding its name, body and devices. Devices with an ``href`` are wrapped in
a link together with their label.
"""

import logging
from typing import List

from .config import OUTLINE_COLOR, RACK_BODY_FILL
from .models import DeviceLayout, LayoutResult, RackLayout
from .svg import Document, Group, Link, Primitive, Rect, Style, Text

logger = logging.getLogger(__name__)


class DocumentAssembler:
    """Builds a Document from computed rack geometry."""

    def __init__(self, hover_style: bool = True):
        """
        Initialize the assembler.

        Args:
            hover_style: Whether to embed the stylesheet that highlights
                linked devices on hover.
        """
        self.hover_style = hover_style

    def assemble(self, layout: LayoutResult) -> Document:
        """Document for a layout: the hover stylesheet, then one group per rack."""
        children: List[Primitive] = []
        if self.hover_style:
            children.append(Style())
        children.extend(self.rack_group(rack) for rack in layout.racks)

        logger.debug("Assembled document with %d rack group(s)", len(layout.racks))
        return Document(
            width=layout.width, height=layout.height, children=tuple(children)
        )

    def rack_group(self, rack: RackLayout) -> Group:
        """Group holding a rack's label, body and devices at its x offset."""
        children: List[Primitive] = []
        if rack.name:
            children.append(Text(x=rack.label_x, y=rack.label_y, content=rack.name))

        children.append(
            Rect(
                x=rack.body_x,
                y=rack.body_y,
                width=rack.body_width,
                height=rack.body_height,
                fill=RACK_BODY_FILL,
                stroke=OUTLINE_COLOR,
            )
        )

        for device in rack.devices:
            children.extend(self.device_primitives(device))

        return Group(children=tuple(children), translate=(rack.x_offset, 0))

    def device_primitives(self, device: DeviceLayout) -> List[Primitive]:
        """Rectangle and label for a device, linked when it has an href."""
        rect = Rect(
            x=device.x,
            y=device.y,
            width=device.width,
            height=device.height,
            fill=device.fill,
            stroke=OUTLINE_COLOR,
        )
        label = Text(x=device.label_x, y=device.label_y, content=device.label)

        if device.href:
            return [Link(href=device.href, children=(rect, label))]
        return [rect, label]


def assemble_document(layout: LayoutResult) -> Document:
    """Convenience function to assemble a Document from a layout."""
    return DocumentAssembler().assemble(layout)
