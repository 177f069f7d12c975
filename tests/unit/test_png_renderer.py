"""Tests for the PNG renderer module."""

import os
import tempfile

import pytest
from PIL import Image

from fsmlayout import PNGRenderer, StateMachine, render_to_png
from fsmlayout.png_renderer import catmull_rom


@pytest.fixture
def laid_out(generator, two_state_machine):
    return two_state_machine, generator.generate(two_state_machine)


class TestPNGRenderer:
    """Tests for PNGRenderer class."""

    def test_render(self, laid_out):
        """Render a two-state machine to PNG."""
        machine, result = laid_out
        renderer = PNGRenderer()

        with tempfile.NamedTemporaryFile(suffix=".png", delete=False) as f:
            output_path = f.name

        try:
            returned = renderer.render(machine, result, output_path)
            assert returned == output_path
            assert os.path.exists(output_path)
            assert os.path.getsize(output_path) > 0
        finally:
            if os.path.exists(output_path):
                os.unlink(output_path)

    def test_image_size_follows_scale(self, laid_out):
        """The image is the canvas size times the scale factor."""
        machine, result = laid_out
        assert PNGRenderer(scale=1).draw(machine, result).size == (800, 600)
        assert PNGRenderer(scale=3).draw(machine, result).size == (2400, 1800)

    def test_draws_something(self, laid_out):
        """The image is not left blank."""
        machine, result = laid_out
        img = PNGRenderer(scale=1).draw(machine, result)
        assert img.mode == "RGB"
        assert img.getbbox() is not None
        colors = img.getcolors(maxcolors=1 << 16)
        assert len(colors) > 1

    def test_initial_state_is_highlighted(self, laid_out):
        """The initial state is filled with its own color."""
        machine, result = laid_out
        renderer = PNGRenderer(scale=1)
        img = renderer.draw(machine, result)
        x, y = result.positions[machine.initial_state]
        assert img.getpixel((int(x), int(y + 15))) == renderer.initial_fill

    def test_random_machine(self, generator, tmp_path):
        """A larger machine renders without errors."""
        machine = StateMachine.random(12, alphabet=("a", "b", "c"), seed=4)
        result = generator.generate(machine)
        output = tmp_path / "random.png"
        PNGRenderer(scale=1).render(machine, result, str(output))
        with Image.open(output) as img:
            assert img.format == "PNG"

    def test_custom_font_path_falls_back(self, laid_out):
        """A missing font file falls back to a system or default font."""
        machine, result = laid_out
        renderer = PNGRenderer(font_path="/nonexistent/font.ttf", scale=1)
        renderer.draw(machine, result)
        assert renderer.font is not None

    def test_rejects_zero_scale(self):
        with pytest.raises(ValueError, match="scale"):
            PNGRenderer(scale=0)


class TestRenderToPng:
    """Tests for the render_to_png convenience function."""

    def test_render_to_png(self, laid_out, tmp_path):
        machine, result = laid_out
        output = tmp_path / "diagram.png"
        returned = render_to_png(machine, result, str(output), scale=1)
        assert returned == str(output)
        assert output.exists()


class TestCatmullRom:
    """Tests for spline sampling."""

    def test_short_input_unchanged(self):
        points = [(0.0, 0.0), (10.0, 0.0)]
        assert catmull_rom(points, 8) == points

    def test_sample_count(self):
        points = [(0.0, 0.0), (10.0, 5.0), (20.0, 0.0)]
        assert len(catmull_rom(points, 8)) == 17

    def test_passes_through_points(self):
        points = [(0.0, 0.0), (10.0, 5.0), (20.0, 0.0), (30.0, 8.0)]
        curve = catmull_rom(points, 4)
        for index, point in enumerate(points):
            assert curve[index * 4] == pytest.approx(point)

    def test_straight_line_stays_straight(self):
        points = [(0.0, 0.0), (5.0, 0.0), (10.0, 0.0)]
        assert all(y == pytest.approx(0.0) for _, y in catmull_rom(points, 6))
