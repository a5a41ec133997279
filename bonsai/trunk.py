"""
Trunk synthesis and rasterization.

The trunk is a chain of waypoints from the soil to the apex. Horizontal
position follows a damped sine S-curve around the pot center; thickness tapers
linearly with progress. Consecutive waypoints are joined with thick lines: a
Bresenham walk that stamps a filled disk at every step, each cell textured by
its distance from the disk center.

The random draws happen in a fixed order (length offset, segment count,
amplitude, frequency, phase, base thickness) so a seeded generator always
produces the same trunk.
"""

from __future__ import annotations

import logging
import math
from typing import NamedTuple

import numpy as np

from bonsai.canvas import disk_offsets, line_points, put_over
from bonsai.config import (
    DEFAULT_CONFIG,
    OPEN_GROUND,
    TRUNK_BANDS,
    TRUNK_EDGE,
    TRUNK_GLYPHS,
    GenerationConfig,
    VariationParams,
)
from bonsai.pot import Pot

log = logging.getLogger(__name__)

# The trunk paints over open ground and over itself, never over the pot
TRUNK_PAINTABLE = OPEN_GROUND | TRUNK_GLYPHS


class TrunkWaypoint(NamedTuple):
    """A control point along the trunk."""

    x: int
    y: int
    thickness: int
    progress: float  # 0 = base, 1 = apex


def clamp(v, lo, hi):
    return max(lo, min(hi, v))


def trunk_length(canvas_height: int, params: VariationParams, rng: np.random.Generator) -> int:
    """
    Target trunk length in rows.

    Starts from 3/5 of the canvas height, shifted by the variation's offset
    range, and never drops below 2/5 of the canvas height.
    """
    minimum = (canvas_height * 2) // 5
    base = (canvas_height * 3) // 5
    offset = int(rng.integers(*params.trunk_offset))
    return max(minimum, base + offset)


def trunk_thickness(
    base_thickness: int, progress: float, config: GenerationConfig = DEFAULT_CONFIG
) -> int:
    """Tapered thickness at a given progress along the trunk."""
    tapered = int(base_thickness * (1 - progress * config.trunk_taper))
    return max(config.min_trunk_thickness, tapered)


def build_trunk_waypoints(
    pot: Pot,
    canvas_width: int,
    length: int,
    params: VariationParams,
    rng: np.random.Generator,
    config: GenerationConfig = DEFAULT_CONFIG,
) -> list[TrunkWaypoint]:
    """
    Generate the trunk waypoints from base to apex.

    Args:
        pot: Pot the trunk grows out of; the base sits on its soil row
        canvas_width: Canvas width, used to keep the trunk off the edges
        length: Trunk length in rows (see ``trunk_length``)
        params: Variation parameter row (base thickness range)
        rng: Random generator

    Returns:
        15 to 24 waypoints with progress ``i / (count - 1)``
    """
    base_x, base_y = pot.center_x, pot.soil_row

    count = 15 + int(rng.integers(0, 10))
    segments = count - 1

    amplitude = 8 + int(rng.integers(0, 6))  # how wide the S-curve swings
    frequency = 1.5 + rng.random()  # how many bends along the trunk
    phase = rng.random() * math.pi * 2

    base_thickness = int(rng.integers(*params.thickness))

    lo, hi = config.trunk_margin, canvas_width - config.trunk_margin

    waypoints = []
    for i in range(count):
        progress = i / segments

        # Swing narrows toward the apex
        sine = math.sin(progress * math.pi * frequency + phase)
        offset = int(sine * amplitude * (1 - progress * 0.3))

        waypoints.append(
            TrunkWaypoint(
                x=clamp(base_x + offset, lo, hi),
                y=max(0, base_y - int(length * progress)),
                thickness=trunk_thickness(base_thickness, progress, config),
                progress=progress,
            )
        )

    log.debug(
        "trunk: %d waypoints, length=%d, amplitude=%d, frequency=%.2f, thickness=%d",
        len(waypoints), length, amplitude, frequency, base_thickness,
    )
    return waypoints


def trunk_texture(dx: int, dy: int, radius: float, progress: float) -> str:
    """
    Ring texture glyph for an offset inside a trunk cross-section.

    The distance ratio is perturbed by a sine of the horizontal offset and the
    trunk progress so the bands are not perfect circles.
    """
    ratio = math.sqrt(dx * dx + dy * dy) / radius if radius > 0 else 0.0
    ratio += math.sin(progress * 20 + dx * 0.5) * 0.1

    for glyph, bound in TRUNK_BANDS:
        if ratio < bound:
            return glyph
    return TRUNK_EDGE


def stamp_cross_section(
    canvas: np.ndarray, cx: int, cy: int, thickness: int, progress: float
) -> None:
    radius = thickness // 2
    for dx, dy, _ in disk_offsets(radius):
        glyph = trunk_texture(dx, dy, radius, progress)
        put_over(canvas, cx + dx, cy + dy, glyph, TRUNK_PAINTABLE)


def rasterize_segment(canvas: np.ndarray, start: TrunkWaypoint, end: TrunkWaypoint) -> None:
    """Thick line between two waypoints with linearly interpolated thickness."""
    points = list(line_points(start.x, start.y, end.x, end.y))
    total = abs(end.x - start.x) + abs(end.y - start.y)

    for step, (x, y) in enumerate(points):
        t = step / total if total > 0 else 0.0
        thickness = int(start.thickness * (1 - t) + end.thickness * t)
        stamp_cross_section(canvas, x, y, thickness, start.progress)


def rasterize_trunk(canvas: np.ndarray, waypoints: list[TrunkWaypoint]) -> None:
    for start, end in zip(waypoints, waypoints[1:]):
        rasterize_segment(canvas, start, end)
