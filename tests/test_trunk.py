"""
Tests for trunk waypoints and rasterization.

These tests verify the S-curve waypoint invariants: rising, tapering,
bounded, rooted on the soil row, and drawn without touching the pot.
"""

import numpy as np

from bonsai.canvas import create_canvas
from bonsai.config import DEFAULT_PARAMS, TRUNK_GLYPHS, TreeVariation, params_for
from bonsai.pot import build_pot, pot_glyph, rasterize_pot
from bonsai.trunk import (
    build_trunk_waypoints,
    rasterize_trunk,
    trunk_length,
    trunk_texture,
    trunk_thickness,
)


def make_trunk(seed: int = 0, width: int = 90, height: int = 35, params=DEFAULT_PARAMS):
    """Build a pot and a trunk on it with a seeded generator."""
    rng = np.random.default_rng(seed)
    pot = build_pot(width, height)
    length = trunk_length(height, params, rng)
    waypoints = build_trunk_waypoints(pot, width, length, params, rng)
    return pot, length, waypoints


class TestTrunkLength:
    """Tests for the trunk length draw."""

    def test_never_below_two_fifths(self) -> None:
        """Even the shortest variation reaches 2/5 of the canvas."""
        params = params_for(TreeVariation.YOUNG)
        for seed in range(30):
            length = trunk_length(35, params, np.random.default_rng(seed))
            assert 14 <= length <= 21

    def test_mature_is_taller(self) -> None:
        """Mature trunks start above 3/5 of the canvas height."""
        params = params_for(TreeVariation.MATURE)
        for seed in range(10):
            assert trunk_length(35, params, np.random.default_rng(seed)) >= 21 + 8


class TestTrunkThickness:
    """Tests for the taper."""

    def test_full_at_base(self) -> None:
        """No taper at progress 0."""
        assert trunk_thickness(10, 0.0) == 10

    def test_quarter_at_apex(self) -> None:
        """75% taper at the apex, floored at 2."""
        assert trunk_thickness(16, 1.0) == 4
        assert trunk_thickness(6, 1.0) == 2

    def test_non_increasing(self) -> None:
        """Thickness never grows with progress."""
        values = [trunk_thickness(13, p / 20) for p in range(21)]
        assert values == sorted(values, reverse=True)


class TestWaypoints:
    """Tests for waypoint generation."""

    def test_count_and_progress(self) -> None:
        """15 to 24 waypoints, progress evenly spaced from 0 to 1."""
        for seed in range(20):
            _, _, waypoints = make_trunk(seed)
            assert 15 <= len(waypoints) <= 24
            assert waypoints[0].progress == 0.0
            assert waypoints[-1].progress == 1.0
            last = len(waypoints) - 1
            for i, w in enumerate(waypoints):
                assert w.progress == i / last

    def test_base_on_soil_row(self) -> None:
        """The first waypoint sits one row above the pot top."""
        pot, _, waypoints = make_trunk(4)
        assert waypoints[0].y == pot.top - 1

    def test_rises_and_tapers(self) -> None:
        """y and thickness are non-increasing from base to apex."""
        for seed in range(20):
            _, _, waypoints = make_trunk(seed)
            for a, b in zip(waypoints, waypoints[1:]):
                assert b.y <= a.y
                assert b.thickness <= a.thickness
                assert b.thickness >= 2

    def test_apex_height(self) -> None:
        """The apex is the trunk length above the base, clamped at row 0."""
        for seed in range(10):
            pot, length, waypoints = make_trunk(seed)
            assert waypoints[-1].y == max(0, pot.soil_row - length)

    def test_horizontal_bounds(self) -> None:
        """Waypoints stay ten cells off both side edges."""
        for seed in range(20):
            _, _, waypoints = make_trunk(seed)
            assert all(10 <= w.x <= 80 for w in waypoints)

    def test_deterministic(self) -> None:
        """Same seed, same waypoints."""
        assert make_trunk(11)[2] == make_trunk(11)[2]


class TestTrunkTexture:
    """Tests for ring texture glyphs."""

    def test_core_and_edge(self) -> None:
        """Center is the core band, the rim is the edge glyph."""
        assert trunk_texture(0, 0, 4, 0.0) == "║"
        assert trunk_texture(4, 0, 4, 0.0) == "╧"

    def test_always_trunk_glyph(self) -> None:
        """Every offset maps into the trunk alphabet."""
        for dx in range(-5, 6):
            for dy in range(-5, 6):
                assert trunk_texture(dx, dy, 5, 0.37) in TRUNK_GLYPHS


class TestRasterizeTrunk:
    """Tests for drawing the trunk."""

    def test_pot_untouched(self) -> None:
        """The trunk never paints over the pot."""
        rng = np.random.default_rng(2)
        grid = create_canvas(90, 35)
        pot, _, waypoints = make_trunk(2)
        rasterize_pot(grid, pot, rng)
        rasterize_trunk(grid, waypoints)

        for y in range(pot.top, pot.bottom + 1):
            for x in range(pot.left, pot.right + 1):
                assert grid[y, x] == pot_glyph(pot, x, y)

    def test_waypoints_painted(self) -> None:
        """Every waypoint cell above the pot carries a trunk glyph."""
        grid = create_canvas(90, 35)
        _, _, waypoints = make_trunk(5)
        rasterize_trunk(grid, waypoints)
        for w in waypoints:
            assert grid[w.y, w.x] in TRUNK_GLYPHS
