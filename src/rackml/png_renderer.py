"""
PNG Renderer module for rack diagrams.

Rasterizes a LayoutResult with Pillow, drawing the same racks, devices and
labels as the SVG document.
"""

import logging
import os
from typing import Optional, Tuple

from PIL import Image, ImageColor, ImageDraw, ImageFont

from .config import FALLBACK_COLOR, OUTLINE_COLOR, RACK_BODY_FILL
from .models import DeviceLayout, LayoutResult, RackLayout

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]


class PNGRenderer:
    """Renders rack layouts as PNG images."""

    def __init__(
        self,
        scale: int = 1,
        font_size: int = 14,
        font_path: Optional[str] = None,
        bg_color: str = "#FFFFFF",
        text_color: str = "#000000",
    ):
        if scale < 1:
            raise ValueError("scale must be at least 1")
        self.scale = scale
        self.font_size = font_size
        self.font_path = font_path
        self.bg_color = self._color(bg_color)
        self.text_color = self._color(text_color)
        self.outline_color = self._color(OUTLINE_COLOR)
        self.body_color = self._color(RACK_BODY_FILL)
        self.font = None

    def _color(self, value: str) -> RGB:
        """Convert a CSS colour to RGB, falling back to white."""
        try:
            return ImageColor.getrgb(value)[:3]
        except ValueError:
            logger.warning("Unrecognized colour %r, drawing it as %s", value, FALLBACK_COLOR)
            return ImageColor.getrgb(FALLBACK_COLOR)[:3]

    def _get_font(self) -> ImageFont.ImageFont:
        """Get a font for rendering labels."""
        if self.font is not None:
            return self.font

        font_size = self.font_size * self.scale

        font_options = []
        if self.font_path:
            font_options.append(self.font_path)
        font_options.extend(
            [
                "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
                "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
                "/usr/share/fonts/truetype/freefont/FreeSans.ttf",
                "/Library/Fonts/Arial.ttf",
                "C:/Windows/Fonts/arial.ttf",
            ]
        )

        for path in font_options:
            if os.path.exists(path):
                try:
                    self.font = ImageFont.truetype(path, font_size)
                    return self.font
                except OSError:
                    continue

        # Fall back to Pillow's default font
        try:
            self.font = ImageFont.load_default(size=font_size)
        except TypeError:
            # Older Pillow versions don't support size parameter
            self.font = ImageFont.load_default()
        return self.font

    def _scaled(self, value: float) -> int:
        return int(round(value * self.scale))

    def _draw_centered_text(
        self, draw: ImageDraw.ImageDraw, x: float, y: float, text: str
    ) -> None:
        if not text:
            return
        font = self._get_font()
        left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
        cx, cy = self._scaled(x), self._scaled(y)
        draw.text(
            (cx - (right - left) / 2 - left, cy - (bottom - top) / 2 - top),
            text,
            font=font,
            fill=self.text_color,
        )

    def _draw_rect(
        self,
        draw: ImageDraw.ImageDraw,
        x: float,
        y: float,
        width: float,
        height: float,
        fill: RGB,
    ) -> None:
        x0, y0 = self._scaled(x), self._scaled(y)
        x1, y1 = self._scaled(x + width), self._scaled(y + height)
        draw.rectangle(
            [x0, y0, x1, y1],
            fill=fill,
            outline=self.outline_color,
            width=max(1, self.scale),
        )

    def _draw_device(
        self, draw: ImageDraw.ImageDraw, device: DeviceLayout, x_offset: float
    ) -> None:
        self._draw_rect(
            draw,
            x_offset + device.x,
            device.y,
            device.width,
            device.height,
            self._color(device.fill),
        )
        self._draw_centered_text(
            draw, x_offset + device.label_x, device.label_y, device.label
        )

    def _draw_rack(self, draw: ImageDraw.ImageDraw, rack: RackLayout) -> None:
        x_offset = rack.x_offset
        if rack.name:
            self._draw_centered_text(
                draw, x_offset + rack.label_x, rack.label_y, rack.name
            )
        self._draw_rect(
            draw,
            x_offset + rack.body_x,
            rack.body_y,
            rack.body_width,
            rack.body_height,
            self.body_color,
        )
        for device in rack.devices:
            self._draw_device(draw, device, x_offset)

    def render_image(self, layout: LayoutResult) -> Image.Image:
        """
        Draw the layout onto a new RGB image.

        Args:
            layout: Computed rack geometry.

        Returns:
            Image of size (width * scale, height * scale).
        """
        size = (max(1, self._scaled(layout.width)), max(1, self._scaled(layout.height)))
        img = Image.new("RGB", size, self.bg_color)
        draw = ImageDraw.Draw(img)

        for rack in layout.racks:
            self._draw_rack(draw, rack)

        return img

    def render(self, layout: LayoutResult, output_path: str = "rack.png") -> str:
        """
        Render the layout and save it as a PNG file.

        Args:
            layout: Computed rack geometry.
            output_path: Path to save the PNG file.

        Returns:
            Path to the saved PNG file.
        """
        img = self.render_image(layout)
        img.save(output_path, "PNG")
        logger.debug("Wrote %dx%d PNG to %s", img.width, img.height, output_path)
        return output_path


def render_to_png(
    layout: LayoutResult, output_path: str = "rack.png", scale: int = 1
) -> str:
    """Convenience function to render a layout to a PNG file."""
    renderer = PNGRenderer(scale=scale)
    return renderer.render(layout, output_path)
