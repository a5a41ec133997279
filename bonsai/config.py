"""
Configuration and type definitions for the bonsai generator.

This module defines the glyph alphabets written by each builder, the tree
variation and style enumerations, and the parameter table that maps each
variation onto the numeric ranges used while growing the trunk.

Glyph alphabets:
    POT: corners, rim, base, sides, body and feet of the pot
    SOIL: dark and light soil surface
    TRUNK: seven concentric texture bands, core to edge
    ROOT: thick and thin surface roots
    BRANCH: thick, medium and thin branch textures
    CANOPY: twelve foliage symbols, dense to light
"""

from dataclasses import dataclass
from enum import Enum

# =============================================================================
# GLYPHS
# =============================================================================

BACKGROUND = " "

# Pot
POT_CORNER = "■"
POT_RIM = "□"
POT_BASE = "░"
POT_SIDE = "▒"
POT_BODY = "█"
POT_FOOT = "▓"
POT_GLYPHS = frozenset(
    {POT_CORNER, POT_RIM, POT_BASE, POT_SIDE, POT_BODY, POT_FOOT}
)

# Soil
SOIL_DARK = "▪"
SOIL_LIGHT = "▫"
SOIL_GLYPHS = frozenset({SOIL_DARK, SOIL_LIGHT})

# Trunk bands, core to edge, with the upper ratio bound of each band.
# Anything at or beyond the last bound gets TRUNK_EDGE.
TRUNK_BANDS = (
    ("║", 0.15),
    ("╣", 0.3),
    ("╠", 0.5),
    ("╦", 0.7),
    ("╩", 0.85),
    ("╬", 0.95),
)
TRUNK_EDGE = "╧"
TRUNK_GLYPHS = frozenset([glyph for glyph, _ in TRUNK_BANDS] + [TRUNK_EDGE])

# Roots
ROOT_THICK = "═"
ROOT_THIN = "─"
ROOT_GLYPHS = frozenset({ROOT_THICK, ROOT_THIN})

# Branches, by thickness tier
BRANCH_THICK = ("┃", "┣", "┫")  # core, inner, outer
BRANCH_MEDIUM = ("┏", "┗")  # core, outer
BRANCH_THIN = ("┓", "┻")  # core, outer
BRANCH_GLYPHS = frozenset(BRANCH_THICK + BRANCH_MEDIUM + BRANCH_THIN)

# Canopy palette: [0, 5) dense top, [5, 9) middle, [9, 12) light bottom
CANOPY_GLYPHS = ("●", "○", "◆", "◇", "◈", "◉", "◊", "⬢", "⬡", "⬟", "⬠", "⬣")
CANOPY_TIERS = ((0, 5), (5, 9), (9, 12))

# Cells that later builders may paint over
OPEN_GROUND = frozenset({BACKGROUND}) | SOIL_GLYPHS


# =============================================================================
# VARIATIONS AND STYLES
# =============================================================================


class BonsaiStyle(Enum):
    """Traditional bonsai style drawn for each tree (recorded, not geometric)."""

    FORMAL_UPRIGHT = "formal_upright"  # Chokkan
    INFORMAL_UPRIGHT = "informal_upright"  # Moyogi
    WINDSWEPT = "windswept"  # Fukinagashi
    CASCADE = "cascade"  # Kengai
    SLANTING = "slanting"  # Shakan


class TreeVariation(Enum):
    """Growth variation; selects the trunk parameter row."""

    SPARSE = "sparse"
    BALANCED = "balanced"
    DENSE = "dense"
    ASYMMETRIC = "asymmetric"
    MATURE = "mature"
    YOUNG = "young"
    WILD = "wild"
    ELEGANT = "elegant"


@dataclass(frozen=True)
class VariationParams:
    """
    Numeric ranges for one tree variation.

    Ranges are half-open ``(low, high)`` integer intervals, drawn with
    ``rng.integers(low, high)``.
    """

    trunk_offset: tuple[int, int]  # added to 3/5 of the canvas height
    thickness: tuple[int, int]  # trunk base thickness before taper

    def __post_init__(self) -> None:
        for name in ("trunk_offset", "thickness"):
            low, high = getattr(self, name)
            if high <= low:
                raise ValueError(f"{name} range must be non-empty, got {low}..{high}")
        if self.thickness[0] < 2:
            raise ValueError("Trunk thickness must be at least 2")


DEFAULT_PARAMS = VariationParams(trunk_offset=(-3, 10), thickness=(8, 10))

VARIATION_TABLE: dict[TreeVariation, VariationParams] = {
    TreeVariation.YOUNG: VariationParams(trunk_offset=(-7, 1), thickness=(6, 8)),
    TreeVariation.MATURE: VariationParams(trunk_offset=(8, 18), thickness=(12, 16)),
    TreeVariation.DENSE: VariationParams(trunk_offset=(5, 12), thickness=(10, 13)),
    TreeVariation.WILD: VariationParams(trunk_offset=(-5, 20), thickness=(9, 14)),
    TreeVariation.ELEGANT: VariationParams(trunk_offset=(0, 10), thickness=(9, 12)),
}


def params_for(variation: TreeVariation) -> VariationParams:
    """Parameter row for a variation, falling back to the default row."""
    return VARIATION_TABLE.get(variation, DEFAULT_PARAMS)


# =============================================================================
# GENERATION SETTINGS
# =============================================================================


@dataclass(frozen=True)
class GenerationConfig:
    """
    Canvas and runtime settings used by the command line and API layers.

    The generator itself only needs width and height; the timeout is applied
    by callers that run generation off their own thread.
    """

    width: int = 90
    height: int = 35
    timeout_seconds: float = 10.0

    # Smallest canvas that still fits a pot with a soil row above it
    min_width: int = 4
    min_height: int = 5

    # Trunk geometry
    trunk_margin: int = 10  # waypoints stay this far from the side edges
    trunk_taper: float = 0.75
    min_trunk_thickness: int = 2

    # Branch geometry
    min_attachment: float = 0.25
    max_attachment: float = 0.9
    branch_edge_margin: int = 5

    def __post_init__(self) -> None:
        if self.width < self.min_width or self.height < self.min_height:
            raise ValueError(
                f"Canvas must be at least {self.min_width}x{self.min_height}"
            )
        if self.timeout_seconds <= 0:
            raise ValueError("Timeout must be positive")


DEFAULT_CONFIG = GenerationConfig()
