"""
Layout module for rack diagrams.

Computes absolute geometry from a parsed RackSet:
- Canvas size, driven by the rack count and the tallest rack
- Horizontal offset of each rack
- Rectangle, colour and label position of each device

Units are counted from the bottom of the rack (unit 1 is the lowest). Slots
are declared top to bottom, so placement walks them in reverse with a cursor
holding the next free unit.
"""

import logging
import re
from typing import List, Optional, Tuple

from .config import DEFAULT_CONFIG, LayoutConfig
from .models import (
    Device,
    DeviceLayout,
    Gap,
    LayoutResult,
    Rack,
    RackLayout,
    RackSet,
    Slot,
)

logger = logging.getLogger(__name__)

# Leading integer, read the way a browser's parseInt reads "2U" or " 3"
INTEGER_PATTERN = re.compile(r"^\s*([+-]?\d+)")

DEFAULT_SLOT_HEIGHT = 1


def parse_positive_int(value: Optional[str]) -> Optional[int]:
    """
    Read a positive integer from a raw attribute value.

    Returns None when the value is missing, has no leading digits, or is
    not positive. Callers substitute their own default.
    """
    if value is None:
        return None
    match = INTEGER_PATTERN.match(value)
    if not match:
        return None
    number = int(match.group(1))
    if number <= 0:
        return None
    return number


def rack_units(rack: Rack, config: LayoutConfig = DEFAULT_CONFIG) -> int:
    """Height of a rack in units, falling back to the configured default."""
    units = parse_positive_int(rack.height)
    if units is None:
        if rack.height is not None:
            logger.debug(
                "Rack %r has unusable height %r, using %d",
                rack.name,
                rack.height,
                config.default_rack_height,
            )
        return config.default_rack_height
    return units


def resolve_slot(slot: Slot, cursor: int) -> Tuple[int, int]:
    """
    Resolve a slot's 0-based unit offset and span.

    Args:
        slot: Device or Gap being placed.
        cursor: Next free unit from the bottom.

    Returns:
        (offset, span) tuple.
    """
    at = parse_positive_int(slot.at)
    span = parse_positive_int(slot.height)

    if at is None and slot.at is not None:
        logger.debug("Ignoring unusable at=%r, auto-placing at %d", slot.at, cursor)
    if span is None and slot.height is not None:
        logger.debug("Ignoring unusable height=%r, using 1", slot.height)

    offset = at - 1 if at is not None else cursor
    return offset, span if span is not None else DEFAULT_SLOT_HEIGHT


def place_slots(slots: Tuple[Slot, ...]) -> List[Tuple[Slot, int, int]]:
    """
    Assign unit offsets to a rack's slots.

    Slots are folded in reverse markup order carrying a single cursor. A slot
    without ``at`` starts at the cursor; a slot with ``at`` ignores it. Either
    way the cursor continues from the top of the slot just placed.

    Overlaps caused by explicit positions are not detected.

    Args:
        slots: Slots in markup (top-to-bottom) order.

    Returns:
        List of (slot, offset, span) in processing order, gaps included.
    """
    placements: List[Tuple[Slot, int, int]] = []
    cursor = 0
    for slot in reversed(slots):
        offset, span = resolve_slot(slot, cursor)
        placements.append((slot, offset, span))
        cursor = offset + span
    return placements


class RackLayoutEngine:
    """
    Computes canvas and device geometry for a RackSet.

    The engine never raises on parser output: malformed numeric attributes
    fall back to defaults and overlapping devices are drawn as given.
    """

    def __init__(self, config: Optional[LayoutConfig] = None):
        self.config = config if config is not None else DEFAULT_CONFIG

    def layout(self, rack_set: RackSet) -> LayoutResult:
        """
        Compute layout for the given rack set.

        Args:
            rack_set: Parsed RackML document.

        Returns:
            LayoutResult with canvas size and per-rack geometry.
        """
        config = self.config
        heights = [rack_units(rack, config) for rack in rack_set.racks]
        width, height = self.canvas_size(len(heights), max(heights, default=0))

        racks: List[RackLayout] = []
        x_offset = config.margin
        for rack, units in zip(rack_set.racks, heights):
            racks.append(self._layout_rack(rack, units, x_offset))
            x_offset += config.rack_width + config.rack_spacing

        logger.debug(
            "Laid out %d rack(s) on a %sx%s canvas", len(racks), width, height
        )
        return LayoutResult(
            width=width, height=height, racks=tuple(racks), config=config
        )

    def canvas_size(self, rack_count: int, max_units: int) -> Tuple[float, float]:
        """Canvas (width, height) for the given rack count and tallest rack."""
        config = self.config
        width = (
            2 * config.margin
            + rack_count * config.rack_width
            + max(rack_count - 1, 0) * config.rack_spacing
        )
        height = 2 * config.margin + config.unit_height * max_units
        return width, height

    def _layout_rack(self, rack: Rack, units: int, x_offset: float) -> RackLayout:
        config = self.config
        body_height = units * config.unit_height
        bottom_y = config.margin + body_height

        devices = tuple(
            self._layout_device(slot, offset, span, bottom_y)
            for slot, offset, span in place_slots(rack.slots)
            if not isinstance(slot, Gap)
        )

        return RackLayout(
            name=rack.name or None,
            x_offset=x_offset,
            units=units,
            body_x=0,
            body_y=config.margin,
            body_width=config.rack_width,
            body_height=body_height,
            label_x=config.rack_width / 2,
            label_y=config.margin / 2,
            devices=devices,
        )

    def _layout_device(
        self, device: Device, offset: int, span: int, bottom_y: float
    ) -> DeviceLayout:
        config = self.config
        top = bottom_y - (offset + span) * config.unit_height
        height = span * config.unit_height

        return DeviceLayout(
            kind=device.kind,
            unit=offset,
            units=span,
            x=0,
            y=top,
            width=config.rack_width,
            height=height,
            fill=config.color_for(device.kind, device.color),
            href=device.href or None,
            label=device.label,
            label_x=config.rack_width / 2,
            label_y=top + height / 2,
        )


def compute_layout(
    rack_set: RackSet, config: Optional[LayoutConfig] = None
) -> LayoutResult:
    """
    Convenience function to lay out a parsed rack set.

    Args:
        rack_set: Parsed RackML document.
        config: Optional geometry settings; defaults apply when omitted.

    Returns:
        LayoutResult for the rack set.
    """
    engine = RackLayoutEngine(config)
    return engine.layout(rack_set)
