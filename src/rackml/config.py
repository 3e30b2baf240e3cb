"""
Layout configuration for rack diagrams.

Holds the default geometry constants and the kind-to-colour table. Both are
read-only: a LayoutConfig is a frozen dataclass and the colour table is a
mapping proxy, so the layout engine can close over them without sharing
mutable state between calls.
"""

import dataclasses
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

# Number of units in a rack when the markup does not say
DEFAULT_RACK_HEIGHT_UNITS = 42

# Space between racks
DEFAULT_RACK_SPACING = 25

# Height of a single rack unit
DEFAULT_UNIT_HEIGHT = 25

# Width of a rack
DEFAULT_RACK_WIDTH = 300

# Distance between the canvas border and the racks
DEFAULT_MARGIN = 25

# Fill for devices whose kind has no entry in the colour table
FALLBACK_COLOR = "white"

# Fill and outline of the rack body drawn behind the devices
RACK_BODY_FILL = "#4A5568"
OUTLINE_COLOR = "black"

DEFAULT_COLORS: Mapping[str, str] = MappingProxyType(
    {
        "ups": "#38A169",
        "pdu": "#38A169",
        "firewall": "#F56565",
        "switch": "#FC8181",
        "blank": "#E2E8F0",
        "patch": "#FAF089",
        "cables": "#F6AD55",
        "server": "#63B3ED",
        "san": "#4FD1C5",
    }
)


@dataclass(frozen=True)
class LayoutConfig:
    """
    Geometry settings consumed by the layout engine.

    Attributes:
        unit_height: Height of one rack unit in output units.
        rack_width: Width of every rack.
        rack_spacing: Horizontal space between neighbouring racks.
        margin: Space between the canvas border and the racks.
        default_rack_height: Rack height in units used when a rack has no
            usable ``height`` attribute.
        colors: Kind-to-fill lookup table.
    """

    unit_height: float = DEFAULT_UNIT_HEIGHT
    rack_width: float = DEFAULT_RACK_WIDTH
    rack_spacing: float = DEFAULT_RACK_SPACING
    margin: float = DEFAULT_MARGIN
    default_rack_height: int = DEFAULT_RACK_HEIGHT_UNITS
    colors: Mapping[str, str] = field(
        default_factory=lambda: DEFAULT_COLORS, hash=False
    )

    def __post_init__(self):
        for name in ("unit_height", "rack_width", "rack_spacing", "margin"):
            if not math.isfinite(getattr(self, name)):
                raise ValueError(f"{name} must be a finite number")
        if self.unit_height <= 0:
            raise ValueError("unit_height must be positive")
        if self.rack_width <= 0:
            raise ValueError("rack_width must be positive")
        if self.default_rack_height <= 0:
            raise ValueError("default_rack_height must be positive")
        if self.rack_spacing < 0:
            raise ValueError("rack_spacing must not be negative")
        if self.margin < 0:
            raise ValueError("margin must not be negative")
        if not isinstance(self.colors, MappingProxyType):
            object.__setattr__(self, "colors", MappingProxyType(dict(self.colors)))

    def replace(self, **changes) -> "LayoutConfig":
        """Return a copy of this config with the given fields changed."""
        return dataclasses.replace(self, **changes)

    def color_for(self, kind: str, explicit: Optional[str] = None) -> str:
        """
        Resolve the fill colour for a device.

        Precedence is the explicit ``color`` attribute, then the kind table,
        then white. An empty explicit value counts as absent.
        """
        if explicit:
            return explicit
        return self.colors.get(kind, FALLBACK_COLOR)


DEFAULT_CONFIG = LayoutConfig()
