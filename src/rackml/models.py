"""
Data models for rack diagram generation.

This module contains the dataclasses passed between the pipeline stages.
The parser produces the input tree, the layout engine turns it into
geometry, and the assembler reads that geometry. Every model is frozen and
holds tuples, so no stage can modify what an earlier stage produced.

Classes:
    Device: A piece of equipment mounted in a rack.
    Gap: Empty rack space that advances the placement cursor.
    Rack: A single rack and its slots in markup order.
    RackSet: The root of a parsed document.
    DeviceLayout: Computed rectangle, colour and label of one device.
    RackLayout: Computed position and body of one rack.
    LayoutResult: Canvas size plus the layout of every rack.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Tuple, Union

if TYPE_CHECKING:
    from .config import LayoutConfig


@dataclass(frozen=True)
class Device:
    """
    A device element from the markup.

    Numeric attributes are kept exactly as written. Interpreting them (and
    falling back to defaults) is the layout engine's job.

    Attributes:
        kind: Tag name of the element, e.g. "server" or "switch".
        at: Raw 1-based unit position from the rack bottom, if given.
        height: Raw unit span, if given.
        color: Explicit fill override, if given.
        href: Hyperlink target, if given.
        label: Text content of the element.
    """

    kind: str
    at: Optional[str] = None
    height: Optional[str] = None
    color: Optional[str] = None
    href: Optional[str] = None
    label: str = ""


@dataclass(frozen=True)
class Gap:
    """Unused rack space. Takes room but draws nothing."""

    at: Optional[str] = None
    height: Optional[str] = None


Slot = Union[Device, Gap]


@dataclass(frozen=True)
class Rack:
    """
    A rack element from the markup.

    Attributes:
        name: Optional label drawn above the rack.
        height: Raw height attribute in rack units, if given.
        slots: Devices and gaps in markup (top-to-bottom) order.
    """

    name: Optional[str] = None
    height: Optional[str] = None
    slots: Tuple[Slot, ...] = ()


@dataclass(frozen=True)
class RackSet:
    """Root of a parsed RackML document. Racks are in left-to-right order."""

    racks: Tuple[Rack, ...] = ()


@dataclass(frozen=True)
class DeviceLayout:
    """
    Computed geometry for one device, in rack-local coordinates.

    Attributes:
        kind: Device kind copied from the markup.
        unit: 0-based unit offset of the device bottom from the rack bottom.
        units: Number of units the device spans.
        x: Left edge (always 0 in rack-local space).
        y: Top edge.
        width: Rectangle width (the rack width).
        height: Rectangle height.
        fill: Resolved fill colour.
        href: Link target, or None.
        label: Centred label text.
        label_x: X coordinate of the label centre.
        label_y: Y coordinate of the label centre.
    """

    kind: str
    unit: int
    units: int
    x: float
    y: float
    width: float
    height: float
    fill: str
    href: Optional[str] = None
    label: str = ""
    label_x: float = 0
    label_y: float = 0


@dataclass(frozen=True)
class RackLayout:
    """
    Computed geometry for one rack.

    The rack is drawn at the origin and shifted right by ``x_offset``.
    ``devices`` is in processing order, i.e. reverse markup order with gaps
    removed, which is also the drawing order.
    """

    name: Optional[str]
    x_offset: float
    units: int
    body_x: float
    body_y: float
    body_width: float
    body_height: float
    label_x: float
    label_y: float
    devices: Tuple[DeviceLayout, ...] = ()

    @property
    def bottom_y(self) -> float:
        """Y coordinate of the bottom edge of the rack body."""
        return self.body_y + self.body_height


@dataclass(frozen=True)
class LayoutResult:
    """Result of the layout algorithm."""

    width: float
    height: float
    racks: Tuple[RackLayout, ...] = ()
    config: Optional["LayoutConfig"] = field(default=None, compare=False)

    @property
    def max_rack_units(self) -> int:
        """Height in units of the tallest rack, 0 when there are no racks."""
        return max((rack.units for rack in self.racks), default=0)
