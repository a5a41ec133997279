"""
Tests for ANSI and image renderings.
"""

import re

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from bonsai.canvas import create_canvas, to_text
from bonsai.colors import UnknownGlyphError
from bonsai.generator import generate
from bonsai.render import RESET, color_array, render_bonsai, save_bonsai, to_ansi

ANSI_CODE = re.compile("\u001b\\[[0-9;]*m")


class TestAnsi:
    """Tests for terminal rendering."""

    def test_strips_to_text(self) -> None:
        """Removing the escape codes gives back the plain text export."""
        grid, _ = generate(90, 35, 42)
        assert ANSI_CODE.sub("", to_ansi(grid)) == to_text(grid)

    def test_rows_end_with_reset(self) -> None:
        grid, _ = generate(40, 20, 1)
        for line in to_ansi(grid).split("\n"):
            assert line.endswith(RESET)

    def test_color_emitted_once_per_run(self) -> None:
        """A run of one glyph gets a single color code."""
        grid = create_canvas(5, 1)
        grid[0, :] = "█"
        assert to_ansi(grid) == "\u001b[38;2;130;130;130m█████" + RESET

    def test_blank_rows_uncolored(self) -> None:
        grid = create_canvas(3, 1)
        assert to_ansi(grid) == "   " + RESET

    def test_background_mode_colors_blanks(self) -> None:
        grid = create_canvas(2, 1)
        assert to_ansi(grid, background=True) == "\u001b[48;2;0;0;0m  " + RESET

    def test_unknown_glyph(self) -> None:
        grid = create_canvas(2, 1)
        grid[0, 0] = "X"
        with pytest.raises(UnknownGlyphError):
            to_ansi(grid)


class TestImage:
    """Tests for image rendering."""

    def test_color_array(self) -> None:
        """One RGB triple per cell."""
        grid = create_canvas(4, 3)
        grid[1, 2] = "█"
        image = color_array(grid)
        assert image.shape == (3, 4, 3)
        assert image.dtype == np.uint8
        assert tuple(image[1, 2]) == (130, 130, 130)
        assert tuple(image[0, 0]) == (0, 0, 0)

    def test_render_returns_figure(self) -> None:
        import matplotlib.pyplot as plt

        grid, _ = generate(40, 20, 3)
        fig, ax = render_bonsai(grid)
        assert fig is not None and ax is not None
        plt.close(fig)

    def test_save_png(self, tmp_path) -> None:
        grid, _ = generate(40, 20, 3)
        path = tmp_path / "bonsai.png"
        save_bonsai(str(path), grid, dpi=50)
        assert path.exists()
        assert path.stat().st_size > 0
