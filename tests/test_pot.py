"""
Tests for pot geometry and rasterization.
"""

import numpy as np

from bonsai import pot as pot_mod
from bonsai.canvas import create_canvas
from bonsai.config import BACKGROUND, POT_FOOT, SOIL_GLYPHS
from bonsai.pot import Pot, build_pot, rasterize_pot


class TestBuildPot:
    """Tests for pot rectangle geometry."""

    def test_default_canvas(self) -> None:
        """90x35 canvas gives a 67x4 pot on the bottom row."""
        assert build_pot(90, 35) == Pot(
            left=11, right=77, top=31, bottom=34, width=67, height=4
        )

    def test_tall_canvas_pot_height(self) -> None:
        """Pot height grows to a tenth of the canvas."""
        pot = build_pot(80, 60)
        assert pot.height == 6
        assert pot.bottom - pot.top + 1 == 6

    def test_contained_and_centered(self) -> None:
        """Pot is inside the canvas and centered within one cell."""
        for width, height in [(40, 20), (41, 20), (90, 35), (120, 50), (63, 27)]:
            pot = build_pot(width, height)
            assert 0 <= pot.left < pot.right < width
            assert 0 <= pot.top < pot.bottom < height
            assert pot.bottom == height - 1
            left_margin = pot.left
            right_margin = width - 1 - pot.right
            assert abs(left_margin - right_margin) <= 1

    def test_width_matches_edges(self) -> None:
        """Width and height agree with the inclusive edges."""
        pot = build_pot(57, 31)
        assert pot.right - pot.left + 1 == pot.width
        assert pot.bottom - pot.top + 1 == pot.height


class TestRasterizePot:
    """Tests for drawing the pot."""

    def setup_method(self) -> None:
        self.grid = create_canvas(90, 35)
        self.pot = build_pot(90, 35)
        rasterize_pot(self.grid, self.pot, np.random.default_rng(0))

    def test_corners(self) -> None:
        """All four corners use the corner glyph."""
        p = self.pot
        for x, y in [(p.left, p.top), (p.right, p.top), (p.left, p.bottom), (p.right, p.bottom)]:
            assert self.grid[y, x] == "■"

    def test_edges_and_body(self) -> None:
        """Rim, base, sides and body each use their glyph."""
        p = self.pot
        assert self.grid[p.top, p.left + 1] == "□"
        assert self.grid[p.bottom, p.left + 1] == "░"
        assert self.grid[p.top + 1, p.left] == "▒"
        assert self.grid[p.top + 1, p.right] == "▒"
        assert self.grid[p.top + 1, p.left + 1] == "█"

    def test_every_cell_matches_pot_glyph(self) -> None:
        """The whole rectangle is painted."""
        p = self.pot
        for y in range(p.top, p.bottom + 1):
            for x in range(p.left, p.right + 1):
                assert self.grid[y, x] == pot_mod.pot_glyph(p, x, y)

    def test_soil_row(self) -> None:
        """Soil spans the inside of the rim, one row above it."""
        p = self.pot
        soil = self.grid[p.top - 1, p.left + 1:p.right]
        assert all(glyph in SOIL_GLYPHS for glyph in soil.tolist())
        assert self.grid[p.top - 1, p.left] == BACKGROUND
        assert self.grid[p.top - 1, p.right] == BACKGROUND

    def test_soil_mostly_dark(self) -> None:
        """Roughly 30% of the soil is the lighter glyph."""
        p = self.pot
        soil = self.grid[p.top - 1, p.left + 1:p.right].tolist()
        light = soil.count("▫") / len(soil)
        assert 0.05 < light < 0.6

    def test_nothing_outside_pot_and_soil(self) -> None:
        """Rows above the soil are untouched."""
        assert np.all(self.grid[: self.pot.top - 1] == BACKGROUND)

    def test_no_feet_on_bottom_row_pot(self) -> None:
        """A pot on the last row has no room for feet."""
        assert POT_FOOT not in self.grid

    def test_feet_when_room(self) -> None:
        """A pot above the last row gets two three-cell feet."""
        grid = create_canvas(20, 10)
        pot = Pot(left=2, right=17, top=3, bottom=6, width=16, height=4)
        rasterize_pot(grid, pot, np.random.default_rng(0))

        feet = [x for x in range(20) if grid[7, x] == POT_FOOT]
        assert feet == [4, 5, 6, 13, 14, 15]
