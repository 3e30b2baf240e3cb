"""
Main rack diagram generator module.

Combines parsing, layout, and assembly to turn RackML markup into an SVG
document, and hands the result to the exporter for files.
"""

from pathlib import Path
from typing import Mapping, Optional, Union

from .assembler import DocumentAssembler
from .config import (
    DEFAULT_COLORS,
    DEFAULT_MARGIN,
    DEFAULT_RACK_HEIGHT_UNITS,
    DEFAULT_RACK_SPACING,
    DEFAULT_RACK_WIDTH,
    DEFAULT_UNIT_HEIGHT,
    LayoutConfig,
)
from .export import PNG_FILENAME, SVG_FILENAME, RackExporter
from .layout import RackLayoutEngine
from .models import LayoutResult
from .parser import Parser
from .svg import Document, serialize
from .tracer import RenderTrace


class RackDiagramGenerator:
    """
    Generate rack diagrams from RackML markup.

    Example:
        >>> generator = RackDiagramGenerator()
        >>> svg = generator.to_svg('''
        ...     <racks>
        ...       <rack name="Core" height="4">
        ...         <switch>sw-01</switch>
        ...         <server height="2">db-01</server>
        ...       </rack>
        ...     </racks>
        ... ''')
    """

    def __init__(
        self,
        unit_height: float = DEFAULT_UNIT_HEIGHT,
        rack_width: float = DEFAULT_RACK_WIDTH,
        rack_spacing: float = DEFAULT_RACK_SPACING,
        margin: float = DEFAULT_MARGIN,
        default_rack_height: int = DEFAULT_RACK_HEIGHT_UNITS,
        colors: Optional[Mapping[str, str]] = None,
        font: Optional[str] = None,
    ):
        """
        Initialize the rack diagram generator.

        Args:
            unit_height: Height of one rack unit
            rack_width: Width of a rack
            rack_spacing: Space between racks
            margin: Space between the canvas border and the racks
            default_rack_height: Units used for racks without a height
            colors: Kind-to-colour entries merged over the defaults
            font: Font file for PNG output
        """
        merged_colors = dict(DEFAULT_COLORS)
        if colors:
            merged_colors.update(colors)

        self.config = LayoutConfig(
            unit_height=unit_height,
            rack_width=rack_width,
            rack_spacing=rack_spacing,
            margin=margin,
            default_rack_height=default_rack_height,
            colors=merged_colors,
        )
        self.font = font

        self.parser = Parser()
        self.layout_engine = RackLayoutEngine(self.config)
        self.assembler = DocumentAssembler()
        self.exporter = RackExporter(default_font=font)
        self._trace: Optional[RenderTrace] = None

    def layout(self, input_text: Union[str, bytes]) -> LayoutResult:
        """
        Parse markup and compute its geometry.

        Raises:
            MarkupError: If the markup is not well-formed
        """
        rack_set = self.parser.parse(input_text)
        return self.layout_engine.layout(rack_set)

    def generate(
        self, input_text: Union[str, bytes], debug: bool = False
    ) -> Document:
        """
        Generate a rack diagram document from markup.

        Args:
            input_text: RackML markup
            debug: Record a RenderTrace, available from get_trace()

        Returns:
            The assembled Document

        Raises:
            MarkupError: If the markup is not well-formed
        """
        trace = RenderTrace(input_text=input_text) if debug else None
        self._trace = trace

        rack_set = self.parser.parse(input_text)
        if trace is not None:
            trace.add_stage(
                "parse",
                {
                    "rack_count": len(rack_set.racks),
                    "slot_counts": [len(rack.slots) for rack in rack_set.racks],
                },
            )

        layout = self.layout_engine.layout(rack_set)
        if trace is not None:
            trace.add_stage(
                "layout",
                {
                    "canvas": (layout.width, layout.height),
                    "rack_units": [rack.units for rack in layout.racks],
                    "devices": [
                        (device.kind, device.unit, device.units, device.y)
                        for rack in layout.racks
                        for device in rack.devices
                    ],
                },
            )

        document = self.assembler.assemble(layout)
        if trace is not None:
            trace.add_stage(
                "assemble",
                {"primitive_count": sum(1 for _ in document.iter_primitives())},
                svg=serialize(document),
            )

        return document

    def get_trace(self) -> Optional[RenderTrace]:
        """Return the trace of the last generate() call made with debug=True."""
        return self._trace

    def to_svg(self, input_text: Union[str, bytes]) -> str:
        """Generate a rack diagram and return it as SVG text."""
        return serialize(self.generate(input_text))

    def save_svg(
        self, input_text: Union[str, bytes], filename: str = SVG_FILENAME
    ) -> Path:
        """
        Generate a rack diagram and save it to an SVG file.

        Args:
            input_text: RackML markup
            filename: Output filename (should end in .svg)
        """
        return self.exporter.save_svg(self.generate(input_text), filename)

    def save_png(
        self,
        input_text: Union[str, bytes],
        filename: str = PNG_FILENAME,
        scale: int = 1,
        font_size: int = 14,
    ) -> Path:
        """
        Generate a rack diagram and save it as a PNG image.

        Args:
            input_text: RackML markup
            filename: Output filename (should end in .png)
            scale: Resolution multiplier (2 for retina output)
            font_size: Label font size before scaling

        Example:
            >>> generator = RackDiagramGenerator()
            >>> generator.save_png(markup, "rack.png", scale=2)
        """
        return self.exporter.save_png(
            self.layout(input_text),
            filename,
            scale=scale,
            font_size=font_size,
        )


def compile_rackml(
    input_text: Union[str, bytes], config: Optional[LayoutConfig] = None
) -> Document:
    """
    Compile markup to a Document in one call.

    Args:
        input_text: RackML markup
        config: Optional geometry settings

    Raises:
        MarkupError: If the markup is not well-formed
    """
    rack_set = Parser().parse(input_text)
    layout = RackLayoutEngine(config).layout(rack_set)
    return DocumentAssembler().assemble(layout)


def to_svg(
    input_text: Union[str, bytes], config: Optional[LayoutConfig] = None
) -> str:
    """Compile markup straight to SVG text."""
    return serialize(compile_rackml(input_text, config))
