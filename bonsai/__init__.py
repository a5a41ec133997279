"""
Bonsai Generation Module

A procedural ASCII-art bonsai generator. A seeded random generator drives a
fixed pipeline of builders that paint a character grid, and a static table
maps every glyph to a display color.

Modules:
    config: Glyph alphabets, variations, styles and parameter table
    canvas: Character grid, bounds-checked writes, line walks, text export
    pot: Pot rectangle and soil surface
    trunk: Wavy tapering trunk waypoints and ring-textured rasterization
    roots: Surface roots around the trunk base
    branches: Wavy tapering branches in the upper trunk
    canopy: Mushroom-cap foliage canopies
    colors: Glyph to RGB color table
    generator: Ordered pipeline, cancellation and timeouts
    render: ANSI and image renderings
    api: Validated request/response schemas
"""

from bonsai.branches import Branch, build_branches, rasterize_branch
from bonsai.canopy import (
    CanopyKind,
    LeafCanopy,
    build_apex_canopy,
    build_branch_canopy,
    effective_half_width,
    rasterize_canopy,
)
from bonsai.canvas import create_canvas, save_text, to_text
from bonsai.colors import COLOR_TABLE, UnknownGlyphError, color_for, color_table
from bonsai.config import (
    BonsaiStyle,
    GenerationConfig,
    TreeVariation,
    VariationParams,
    params_for,
)
from bonsai.generator import (
    BonsaiTree,
    CancelledError,
    GenerationTimeout,
    InvalidDimensionsError,
    generate,
    generate_with_timeout,
    grow_bonsai,
    make_rng,
)
from bonsai.pot import Pot, build_pot, rasterize_pot
from bonsai.render import render_bonsai, save_bonsai, to_ansi
from bonsai.roots import Root, build_roots, rasterize_roots
from bonsai.trunk import TrunkWaypoint, build_trunk_waypoints, rasterize_trunk

__all__ = [
    # Config
    "BonsaiStyle",
    "GenerationConfig",
    "TreeVariation",
    "VariationParams",
    "params_for",
    # Canvas
    "create_canvas",
    "to_text",
    "save_text",
    # Builders
    "Pot",
    "build_pot",
    "rasterize_pot",
    "TrunkWaypoint",
    "build_trunk_waypoints",
    "rasterize_trunk",
    "Root",
    "build_roots",
    "rasterize_roots",
    "Branch",
    "build_branches",
    "rasterize_branch",
    "CanopyKind",
    "LeafCanopy",
    "build_branch_canopy",
    "build_apex_canopy",
    "effective_half_width",
    "rasterize_canopy",
    # Colors
    "COLOR_TABLE",
    "UnknownGlyphError",
    "color_for",
    "color_table",
    # Generation
    "BonsaiTree",
    "CancelledError",
    "GenerationTimeout",
    "InvalidDimensionsError",
    "generate",
    "generate_with_timeout",
    "grow_bonsai",
    "make_rng",
    # Rendering
    "render_bonsai",
    "save_bonsai",
    "to_ansi",
]
