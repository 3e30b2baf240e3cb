"""
RackML - Rack Diagrams from Markup

A Python library for drawing equipment racks from a small XML vocabulary.

Example:
    >>> from rackml import RackDiagramGenerator
    >>> generator = RackDiagramGenerator()
    >>> svg = generator.to_svg('''
    ...     <racks>
    ...       <rack name="Edge" height="6">
    ...         <firewall>fw-01</firewall>
    ...         <gap height="2"/>
    ...         <server height="2" href="https://wiki/db-01">db-01</server>
    ...       </rack>
    ...     </racks>
    ... ''')

Debug Mode Example:
    >>> generator = RackDiagramGenerator()
    >>> document = generator.generate(markup, debug=True)
    >>> print(generator.get_trace().summary())
"""

from .assembler import DocumentAssembler, assemble_document
from .config import DEFAULT_COLORS, DEFAULT_CONFIG, LayoutConfig
from .export import RackExporter
from .generator import RackDiagramGenerator, compile_rackml, to_svg
from .layout import RackLayoutEngine, compute_layout, place_slots
from .models import (
    Device,
    DeviceLayout,
    Gap,
    LayoutResult,
    Rack,
    RackLayout,
    RackSet,
)
from .parser import MarkupError, Parser, parse_rackml
from .png_renderer import PNGRenderer, render_to_png
from .svg import Document, Group, Link, Rect, Style, Text, serialize
from .tracer import PipelineStage, RenderTrace

__version__ = "0.1.0"

__all__ = [
    # Main API
    "RackDiagramGenerator",
    "compile_rackml",
    "to_svg",
    # Configuration
    "LayoutConfig",
    "DEFAULT_CONFIG",
    "DEFAULT_COLORS",
    # Parser
    "Parser",
    "MarkupError",
    "parse_rackml",
    # Models
    "RackSet",
    "Rack",
    "Device",
    "Gap",
    # Layout
    "RackLayoutEngine",
    "compute_layout",
    "place_slots",
    "LayoutResult",
    "RackLayout",
    "DeviceLayout",
    # Assembly
    "DocumentAssembler",
    "assemble_document",
    "Document",
    "Group",
    "Link",
    "Rect",
    "Style",
    "Text",
    "serialize",
    # Export
    "RackExporter",
    "PNGRenderer",
    "render_to_png",
    # Debug/Tracing
    "RenderTrace",
    "PipelineStage",
]
