"""Tests for text and raster rendering of projection grids."""

import numpy as np
import pytest
from PIL import Image

from stl2ascii.render import BACKGROUND, SHADES, glyph_for, render_image, render_text


class TestRenderText:
    def test_all_zero_grid_is_blank(self):
        text = render_text(np.zeros((3, 5), dtype=np.float32))
        assert text == "     \n" * 3
        assert not any(glyph in text for _, glyph, _ in SHADES)

    def test_full_depth_cell(self):
        grid = np.zeros((3, 4), dtype=np.float32)
        grid[1, 2] = 1.0
        lines = render_text(grid).split("\n")
        assert lines[1][2] == "▓"
        assert lines[1].replace("▓", "") == "   "
        assert lines[0] == lines[2] == "    "

    @pytest.mark.parametrize("value,glyph", [
        (1.0, "▓"),
        (0.76, "▓"),
        (0.75, "▒"),
        (0.5, "▒"),
        (0.375, "░"),
        (0.01, "░"),
        (0.0, " "),
        (-0.5, " "),
        (float("nan"), " "),
    ])
    def test_thresholds(self, value, glyph):
        assert glyph_for(value) == glyph

    def test_nested_lists(self):
        assert render_text([[0, 0.5], [1.0, 0.1]]) == " ▒\n▓░\n"

    def test_empty_grid(self):
        assert render_text([]) == ""


class TestRenderImage:
    def test_size_and_mode(self):
        image = render_image(np.zeros((3, 5)), cell_size=(2, 4))
        assert isinstance(image, Image.Image)
        assert image.mode == "L"
        assert image.size == (10, 12)

    def test_cell_levels(self):
        grid = np.array([[0.0, 1.0], [0.5, 0.1]], dtype=np.float32)
        image = render_image(grid, cell_size=(1, 1))
        assert image.getpixel((0, 0)) == BACKGROUND
        assert image.getpixel((1, 0)) == SHADES[0][2]
        assert image.getpixel((0, 1)) == SHADES[1][2]
        assert image.getpixel((1, 1)) == SHADES[2][2]

    def test_rejects_non_2d(self):
        with pytest.raises(ValueError):
            render_image(np.zeros(4))

    def test_rejects_bad_cell_size(self):
        with pytest.raises(ValueError):
            render_image(np.zeros((2, 2)), cell_size=(0, 1))
