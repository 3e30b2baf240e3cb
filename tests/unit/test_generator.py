"""Unit tests for the generator module."""

import xml.etree.ElementTree as ET

import pytest
from PIL import Image

from rackml.config import LayoutConfig
from rackml.generator import RackDiagramGenerator, compile_rackml, to_svg
from rackml.parser import MarkupError
from rackml.svg import Document


class TestRackDiagramGeneratorInit:
    """Tests for RackDiagramGenerator initialization."""

    def test_default_initialization(self):
        """Test RackDiagramGenerator with default parameters."""
        gen = RackDiagramGenerator()
        assert gen.config.unit_height == 25
        assert gen.config.rack_width == 300
        assert gen.config.rack_spacing == 25
        assert gen.config.margin == 25
        assert gen.config.default_rack_height == 42

    def test_all_custom_parameters(self):
        """Test RackDiagramGenerator with all custom parameters."""
        gen = RackDiagramGenerator(
            unit_height=20,
            rack_width=200,
            rack_spacing=10,
            margin=5,
            default_rack_height=48,
        )
        assert gen.config == LayoutConfig(
            unit_height=20,
            rack_width=200,
            rack_spacing=10,
            margin=5,
            default_rack_height=48,
        )

    def test_custom_colors_merged(self):
        """Test that custom colours extend the default table."""
        gen = RackDiagramGenerator(colors={"server": "navy", "nas": "purple"})
        assert gen.config.colors["server"] == "navy"
        assert gen.config.colors["nas"] == "purple"
        assert gen.config.colors["switch"] == "#FC8181"

    def test_invalid_parameters(self):
        """Test that impossible geometry is rejected."""
        with pytest.raises(ValueError):
            RackDiagramGenerator(unit_height=0)

    def test_components_initialized(self):
        """Test that internal components are initialized."""
        gen = RackDiagramGenerator()
        assert gen.parser is not None
        assert gen.layout_engine is not None
        assert gen.assembler is not None
        assert gen.exporter is not None


class TestRackDiagramGeneratorGenerate:
    """Tests for RackDiagramGenerator.generate and friends."""

    def test_generate_returns_document(self, generator, stacked_input):
        """Test that generate builds a Document."""
        document = generator.generate(stacked_input)
        assert isinstance(document, Document)
        assert (document.width, document.height) == (350, 300)

    def test_layout(self, generator, stacked_input):
        """Test that layout exposes the geometry."""
        layout = generator.layout(stacked_input)
        assert [device.label for device in layout.racks[0].devices] == ["db-01", "sw-01"]

    def test_to_svg(self, generator, stacked_input):
        """Test that to_svg returns SVG text with the canvas size."""
        root = ET.fromstring(generator.to_svg(stacked_input))
        assert root.get("width") == "350"
        assert root.get("height") == "300"

    def test_custom_geometry_applied(self, stacked_input):
        """Test that generator settings reach the layout."""
        gen = RackDiagramGenerator(unit_height=10, margin=0)
        document = gen.generate(stacked_input)
        assert (document.width, document.height) == (300, 100)

    def test_markup_error_propagates(self, generator):
        """Test that malformed markup raises MarkupError."""
        with pytest.raises(MarkupError):
            generator.generate("<racks><rack>")

    def test_save_svg(self, generator, stacked_input, tmp_path):
        """Test that save_svg writes the file."""
        path = generator.save_svg(stacked_input, str(tmp_path / "r.svg"))
        assert path.read_text(encoding="utf-8").startswith("<?xml")

    def test_save_svg_no_file_on_error(self, generator, tmp_path):
        """Test that malformed markup writes nothing."""
        target = tmp_path / "r.svg"
        with pytest.raises(MarkupError):
            generator.save_svg("<racks", str(target))
        assert not target.exists()

    def test_save_png(self, generator, stacked_input, tmp_path):
        """Test that save_png writes an image."""
        path = generator.save_png(stacked_input, str(tmp_path / "r.png"), scale=2)
        with Image.open(path) as img:
            assert img.size == (700, 600)


class TestDebugTrace:
    """Tests for debug tracing through the generator."""

    def test_no_trace_by_default(self, generator, stacked_input):
        """Test that no trace is kept without debug."""
        generator.generate(stacked_input)
        assert generator.get_trace() is None

    def test_trace_stages(self, generator, stacked_input):
        """Test that debug mode records every stage in order."""
        generator.generate(stacked_input, debug=True)
        trace = generator.get_trace()
        assert trace.stage_names == ["parse", "layout", "assemble"]
        assert trace.input_text == stacked_input

    def test_trace_data(self, generator, stacked_input):
        """Test the data recorded at each stage."""
        generator.generate(stacked_input, debug=True)
        trace = generator.get_trace()
        assert trace.get_stage("parse").data["rack_count"] == 1
        assert trace.get_stage("parse").data["slot_counts"] == [2]
        assert trace.get_stage("layout").data["canvas"] == (350, 300)
        assert trace.get_stage("layout").data["devices"] == [
            ("server", 0, 2, 225),
            ("switch", 2, 1, 200),
        ]
        assemble = trace.get_stage("assemble")
        assert assemble.svg_snapshot.startswith("<svg")

    def test_trace_replaced_by_next_call(self, generator, stacked_input):
        """Test that a later non-debug call clears the trace."""
        generator.generate(stacked_input, debug=True)
        generator.generate(stacked_input)
        assert generator.get_trace() is None

    def test_trace_not_recorded_on_error(self, generator):
        """Test that a failed parse leaves an empty trace."""
        with pytest.raises(MarkupError):
            generator.generate("<racks", debug=True)
        assert generator.get_trace().stages == []


class TestModuleFunctions:
    """Tests for compile_rackml and to_svg."""

    def test_compile_rackml(self, stacked_input):
        """Test one-call compilation."""
        document = compile_rackml(stacked_input)
        assert (document.width, document.height) == (350, 300)

    def test_compile_rackml_with_config(self, stacked_input):
        """Test that an explicit config is honoured."""
        document = compile_rackml(stacked_input, LayoutConfig(rack_width=100))
        assert document.width == 150

    def test_to_svg(self, stacked_input):
        """Test one-call SVG text."""
        assert ET.fromstring(to_svg(stacked_input)).get("width") == "350"

    def test_compile_rackml_error(self):
        """Test that errors propagate from the one-call form."""
        with pytest.raises(MarkupError):
            compile_rackml("not markup")
