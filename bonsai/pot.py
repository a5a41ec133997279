"""
Pot geometry and rasterization.

The pot is a horizontally centered rectangle along the bottom of the canvas,
three quarters of the canvas wide. A row of soil sits directly above its rim;
the trunk grows out of that row.
"""

from typing import NamedTuple

import numpy as np

from bonsai.canvas import put
from bonsai.config import (
    POT_BASE,
    POT_BODY,
    POT_CORNER,
    POT_FOOT,
    POT_RIM,
    POT_SIDE,
    SOIL_DARK,
    SOIL_LIGHT,
)

FOOT_WIDTH = 3


class Pot(NamedTuple):
    """Pot rectangle with inclusive grid coordinates."""

    left: int
    right: int
    top: int
    bottom: int
    width: int
    height: int

    @property
    def center_x(self) -> int:
        return (self.left + self.right) // 2

    @property
    def soil_row(self) -> int:
        return self.top - 1


def build_pot(width: int, height: int) -> Pot:
    """Compute the pot rectangle for a canvas of the given size."""
    pot_height = max(4, height // 10)
    pot_width = (width * 3) // 4

    bottom = height - 1
    left = (width - pot_width) // 2

    return Pot(
        left=left,
        right=left + pot_width - 1,
        top=bottom - pot_height + 1,
        bottom=bottom,
        width=pot_width,
        height=pot_height,
    )


def pot_glyph(pot: Pot, x: int, y: int) -> str:
    """Glyph for a cell inside the pot rectangle."""
    is_top = y == pot.top
    is_bottom = y == pot.bottom
    is_side = x in (pot.left, pot.right)

    if (is_top or is_bottom) and is_side:
        return POT_CORNER
    if is_top:
        return POT_RIM
    if is_bottom:
        return POT_BASE
    if is_side:
        return POT_SIDE
    return POT_BODY


def rasterize_pot(canvas: np.ndarray, pot: Pot, rng: np.random.Generator) -> None:
    """Draw the pot body, feet (when there is room) and the soil surface."""
    canvas_height = canvas.shape[0]

    for y in range(pot.top, pot.bottom + 1):
        for x in range(pot.left, pot.right + 1):
            put(canvas, x, y, pot_glyph(pot, x, y))

    if pot.bottom < canvas_height - 1:
        left_foot = pot.left + 2
        right_foot = pot.right - FOOT_WIDTH - 1
        for i in range(FOOT_WIDTH):
            put(canvas, left_foot + i, pot.bottom + 1, POT_FOOT)
            put(canvas, right_foot + i, pot.bottom + 1, POT_FOOT)

    # ~30% of the soil row is the lighter variant
    for x in range(pot.left + 1, pot.right):
        glyph = SOIL_LIGHT if rng.random() > 0.7 else SOIL_DARK
        put(canvas, x, pot.soil_row, glyph)
