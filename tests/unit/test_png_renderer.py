"""Tests for the PNG renderer module."""

import logging
import os
import tempfile

import pytest
from PIL import Image

from rackml.layout import compute_layout
from rackml.parser import parse_rackml
from rackml.png_renderer import PNGRenderer, render_to_png

# One two-unit rack with an unlabelled server in the bottom unit.
# Canvas is 350x100; the server spans x 25..325, y 50..75 and the empty
# top unit (rack body) spans y 25..50.
BARE_SERVER = '<racks><rack height="2"><server/></rack></racks>'


def layout_of(markup):
    return compute_layout(parse_rackml(markup))


class TestPNGRenderer:
    """Tests for PNGRenderer class."""

    def test_image_size(self):
        """Test that the image matches the canvas size."""
        img = PNGRenderer().render_image(layout_of(BARE_SERVER))
        assert img.size == (350, 100)

    def test_image_size_scaled(self):
        """Test that scale multiplies both dimensions."""
        img = PNGRenderer(scale=2).render_image(layout_of(BARE_SERVER))
        assert img.size == (700, 200)

    def test_device_fill(self):
        """Test that devices are filled with their resolved colour."""
        img = PNGRenderer().render_image(layout_of(BARE_SERVER))
        assert img.getpixel((100, 62)) == (0x63, 0xB3, 0xED)

    def test_rack_body_fill(self):
        """Test that empty rack space shows the body colour."""
        img = PNGRenderer().render_image(layout_of(BARE_SERVER))
        assert img.getpixel((100, 37)) == (0x4A, 0x55, 0x68)

    def test_background(self):
        """Test that the margin shows the background colour."""
        img = PNGRenderer().render_image(layout_of(BARE_SERVER))
        assert img.getpixel((5, 5)) == (255, 255, 255)

    def test_named_color(self):
        """Test that CSS colour names are accepted."""
        img = PNGRenderer().render_image(
            layout_of('<racks><rack height="2"><server color="red"/></rack></racks>')
        )
        assert img.getpixel((100, 62)) == (255, 0, 0)

    def test_unknown_color_falls_back_to_white(self, caplog):
        """Test that unparseable colours draw white and log a warning."""
        with caplog.at_level(logging.WARNING, logger="rackml.png_renderer"):
            img = PNGRenderer().render_image(
                layout_of(
                    '<racks><rack height="2"><server color="not-a-colour"/></rack></racks>'
                )
            )
        assert img.getpixel((100, 62)) == (255, 255, 255)
        assert "not-a-colour" in caplog.text

    def test_labels_drawn(self):
        """Test that labels change pixels inside the device."""
        bare = PNGRenderer().render_image(layout_of(BARE_SERVER))
        labelled = PNGRenderer().render_image(
            layout_of('<racks><rack height="2"><server>WWWWWW</server></rack></racks>')
        )
        assert bare.tobytes() != labelled.tobytes()

    def test_invalid_scale(self):
        """Test that scale must be at least one."""
        with pytest.raises(ValueError):
            PNGRenderer(scale=0)

    def test_missing_font_path_falls_back(self):
        """Test that a missing custom font does not break rendering."""
        renderer = PNGRenderer(font_path="/nonexistent/font.ttf")
        img = renderer.render_image(
            layout_of('<racks><rack name="A" height="1"><server>x</server></rack></racks>')
        )
        assert img.size == (350, 75)

    def test_render_to_file(self):
        """Test that render writes a readable PNG."""
        with tempfile.NamedTemporaryFile(suffix=".png", delete=False) as f:
            output_path = f.name

        try:
            result = PNGRenderer().render(layout_of(BARE_SERVER), output_path)
            assert result == output_path
            with Image.open(output_path) as img:
                assert img.format == "PNG"
                assert img.size == (350, 100)
        finally:
            if os.path.exists(output_path):
                os.unlink(output_path)

    def test_empty_layout(self):
        """Test that an empty rack set renders a blank canvas."""
        img = PNGRenderer().render_image(layout_of("<racks/>"))
        assert img.size == (50, 50)


class TestRenderToPng:
    """Tests for the render_to_png convenience function."""

    def test_render_to_png(self):
        """Convenience function writes the file."""
        with tempfile.NamedTemporaryFile(suffix=".png", delete=False) as f:
            output_path = f.name

        try:
            render_to_png(layout_of(BARE_SERVER), output_path, scale=2)
            with Image.open(output_path) as img:
                assert img.size == (700, 200)
        finally:
            if os.path.exists(output_path):
                os.unlink(output_path)
