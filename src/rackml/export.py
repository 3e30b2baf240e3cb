"""
File export functionality for rack diagrams.

This module writes rendered rack diagrams to files:
- SVG documents (.svg) - The serialized vector drawing
- PNG images (.png) - Rasterized with Pillow from the computed layout

Each export kind has a fixed default filename, matching what the browser
tool used for its downloads.
"""

import logging
from pathlib import Path
from typing import Optional

from .models import LayoutResult
from .png_renderer import PNGRenderer
from .svg import Document, serialize

logger = logging.getLogger(__name__)

SVG_FILENAME = "rack.svg"
PNG_FILENAME = "rack.png"


class RackExporter:
    """
    Exports rack diagrams to SVG and PNG files.

    Attributes:
        default_font: Font file used for PNG labels when none is given.
    """

    def __init__(self, default_font: Optional[str] = None):
        """
        Initialize the rack exporter.

        Args:
            default_font: Path to a TrueType font for PNG labels.
        """
        self.default_font = default_font

    def save_svg(self, document: Document, filename: str = SVG_FILENAME) -> Path:
        """
        Save a document as an SVG file.

        Args:
            document: The assembled drawable tree.
            filename: Output filename (should end in .svg).

        Returns:
            Path of the written file.
        """
        output_path = Path(filename)
        output_path.write_text(
            serialize(document, xml_declaration=True), encoding="utf-8"
        )
        logger.debug("Wrote SVG to %s", output_path)
        return output_path

    def save_png(
        self,
        layout: LayoutResult,
        filename: str = PNG_FILENAME,
        scale: int = 1,
        font_size: int = 14,
        font: Optional[str] = None,
        bg_color: str = "#FFFFFF",
    ) -> Path:
        """
        Save a layout as a PNG image.

        Args:
            layout: Computed rack geometry.
            filename: Output filename (should end in .png).
            scale: Resolution multiplier (2 for retina output).
            font_size: Label font size before scaling.
            font: Font path (overrides default_font if provided).
            bg_color: Background colour as a CSS colour string.

        Returns:
            Path of the written file.

        Example:
            >>> exporter = RackExporter()
            >>> exporter.save_png(layout, "rack.png", scale=2)
        """
        renderer = PNGRenderer(
            scale=scale,
            font_size=font_size,
            font_path=font or self.default_font,
            bg_color=bg_color,
        )
        output_path = Path(filename)
        renderer.render(layout, str(output_path))
        return output_path
