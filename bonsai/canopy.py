"""
Mushroom-cap foliage canopies.

A canopy is an ellipse whose horizontal radius shrinks from the top row to the
bottom row, stippled with foliage glyphs. Fill probability falls off toward
the rim and toward the bottom, and the glyph palette moves from dense symbols
at the top to light ones at the bottom.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import NamedTuple

import numpy as np

from bonsai.branches import Branch
from bonsai.canvas import put_over
from bonsai.config import BACKGROUND, CANOPY_GLYPHS, CANOPY_TIERS
from bonsai.trunk import TrunkWaypoint

EMPTY = frozenset({BACKGROUND})

TAPER = 0.6  # fraction of the half-width lost from top to bottom
MIN_WIDTH_FACTOR = 0.3


class CanopyKind(Enum):
    BRANCH = "branch"
    APEX = "apex"


class LeafCanopy(NamedTuple):
    """Foliage cap centered above a branch tip or the trunk apex."""

    center_x: int
    center_y: int
    width: int
    height: int
    density: float  # in (0, 1]
    kind: CanopyKind = CanopyKind.BRANCH


def build_branch_canopy(branch: Branch, rng: np.random.Generator) -> LeafCanopy:
    """Canopy one to two times the branch length wide, sitting on its tip."""
    size_ratio = 1.0 + rng.random()
    width = max(12, int(branch.length * size_ratio))

    height_ratio = 0.6 + rng.random() * 0.6
    height = max(8, int(width * height_ratio))

    density = min(0.95, 0.70 + int(rng.integers(0, 25)) / 100)

    return LeafCanopy(
        center_x=branch.end_x,
        center_y=branch.end_y - height // 2,
        width=width,
        height=height,
        density=density,
    )


def build_apex_canopy(
    apex: TrunkWaypoint, trunk_length: int, rng: np.random.Generator
) -> LeafCanopy:
    """Canopy crowning the trunk, sized off the trunk length."""
    base_size = max(8, trunk_length // 5)
    width = base_size + int(rng.integers(-2, 6))
    height = int(width * (0.7 + rng.random() * 0.5))

    width = max(8, width)
    height = max(6, height)

    return LeafCanopy(
        center_x=apex.x,
        center_y=apex.y - height // 2,
        width=width,
        height=height,
        density=0.80,
        kind=CanopyKind.APEX,
    )


def effective_half_width(canopy: LeafCanopy, height_progress: float) -> float:
    """
    Horizontal radius of the cap at a given height.

    ``height_progress`` is 0 at the top row and 1 at the bottom row. The
    radius never shrinks below 30% of the full half-width.
    """
    factor = max(MIN_WIDTH_FACTOR, 1.0 - height_progress * TAPER)
    return (canopy.width // 2) * factor


def canopy_glyph(height_progress: float, rng: np.random.Generator) -> str:
    """Pick a foliage glyph from the tier matching the height in the cap."""
    if height_progress < 0.3:
        low, high = CANOPY_TIERS[0]
    elif height_progress < 0.7:
        low, high = CANOPY_TIERS[1]
    else:
        low, high = CANOPY_TIERS[2]
    return CANOPY_GLYPHS[int(rng.integers(low, high))]


def rasterize_canopy(canvas: np.ndarray, canopy: LeafCanopy, rng: np.random.Generator) -> None:
    """Stipple the cap onto empty cells of the canvas."""
    canvas_height, canvas_width = canvas.shape
    half_w = canopy.width // 2
    half_h = canopy.height // 2

    for dy in range(-half_h, half_h + 1):
        y = canopy.center_y + dy
        height_progress = (dy + half_h) / canopy.height
        radius_x = effective_half_width(canopy, height_progress)

        for dx in range(-half_w, half_w + 1):
            x = canopy.center_x + dx
            if not (0 <= x < canvas_width and 0 <= y < canvas_height):
                continue

            distance = math.sqrt(
                (dx * dx) / (radius_x * radius_x) + (dy * dy) / (half_h * half_h)
            )
            if distance > 1.0:
                continue

            # Denser near the center and toward the top
            probability = canopy.density * (1.2 - distance) * (1.1 - height_progress * 0.25)
            probability = max(0.0, min(1.0, probability))

            if rng.random() < probability:
                put_over(canvas, x, y, canopy_glyph(height_progress, rng), EMPTY)
