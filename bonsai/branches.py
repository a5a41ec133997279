"""
Branch synthesis and rasterization.

Branches attach to the trunk in its upper three quarters. Each attachment
height grows a left branch, a right branch or both. A branch is a wavy,
tapering line built like the trunk: a sequence of wave points joined by
thick lines, starting as thick as the trunk where it attaches and thinning to
a quarter of that at the tip. The last 40% of every branch bends upward.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

import numpy as np

from bonsai.canvas import disk_offsets, line_points, put_over
from bonsai.config import (
    BRANCH_MEDIUM,
    BRANCH_THICK,
    BRANCH_THIN,
    DEFAULT_CONFIG,
    OPEN_GROUND,
    GenerationConfig,
)
from bonsai.trunk import TrunkWaypoint, clamp

log = logging.getLogger(__name__)

MIN_BRANCH_LENGTH = 20
MIN_WAVE_SEGMENTS = 12
UPTURN_START = 0.6  # progress where the tip starts bending skyward
UPTURN_RISE = 6  # rows gained by the tip


@dataclass
class Branch:
    """A single branch grown from a trunk waypoint."""

    start_x: int
    start_y: int
    end_x: int
    end_y: int
    is_left: bool
    length: int
    start_thickness: int
    end_thickness: int
    index: int = 0  # attachment index along the trunk
    height_ratio: float = 0.0  # requested attachment height
    attachment_progress: float = 0.0  # progress of the waypoint actually used
    wave_points: list[tuple[int, int]] = field(default_factory=list)

    @property
    def direction(self) -> int:
        return -1 if self.is_left else 1


# =============================================================================
# ATTACHMENT
# =============================================================================

def attachment_waypoint(
    waypoints: list[TrunkWaypoint],
    height_ratio: float,
    config: GenerationConfig = DEFAULT_CONFIG,
) -> TrunkWaypoint:
    """
    Trunk waypoint nearest to ``height_ratio`` that lies in the allowed band.

    The nearest waypoint is nudged up or down the trunk until its progress is
    inside ``[min_attachment, max_attachment]``, so a branch never grows from
    the lowest quarter of the trunk.
    """
    last = len(waypoints) - 1
    index = clamp(round(height_ratio * last), 0, last)

    while index < last and waypoints[index].progress < config.min_attachment:
        index += 1
    while index > 0 and waypoints[index].progress > config.max_attachment:
        index -= 1
    return waypoints[index]


def choose_sides(rng: np.random.Generator) -> tuple[bool, bool]:
    """Each side grows with probability 0.7; at least one side always grows."""
    go_left = rng.random() > 0.3
    go_right = rng.random() > 0.3
    if not go_left and not go_right:
        if rng.random() > 0.5:
            go_left = True
        else:
            go_right = True
    return go_left, go_right


# =============================================================================
# GEOMETRY
# =============================================================================

def branch_length(
    trunk_length: int,
    attach_x: int,
    is_left: bool,
    canvas_width: int,
    rng: np.random.Generator,
    config: GenerationConfig = DEFAULT_CONFIG,
) -> int:
    """Two thirds to all of the trunk length, limited by room to the edge."""
    base = (trunk_length * 2) // 3
    variation = int(rng.integers(0, max(1, trunk_length // 3)))
    length = max(MIN_BRANCH_LENGTH, base + variation)

    if is_left:
        room = attach_x - config.branch_edge_margin
    else:
        room = canvas_width - attach_x - config.branch_edge_margin
    return max(1, min(length, room))


def branch_wave_points(
    start_x: int,
    start_y: int,
    direction: int,
    length: int,
    rng: np.random.Generator,
) -> list[tuple[int, int]]:
    """
    Points along a wavy branch.

    Args:
        start_x, start_y: Attachment point on the trunk
        direction: -1 for a left branch, +1 for a right branch
        length: Horizontal reach in cells
        rng: Random generator (amplitude and frequency of the wave)

    Returns:
        ``max(12, length // 4) + 1`` points from the attachment to the tip
    """
    segments = max(MIN_WAVE_SEGMENTS, length // 4)
    amplitude = 4 + rng.random() * 4
    frequency = 1.0 + rng.random() * 0.8

    points = []
    for i in range(segments + 1):
        progress = i / segments

        x = start_x + int(direction * length * progress)
        wave = int(math.sin(progress * math.pi * frequency) * amplitude)
        x += direction * wave

        y = start_y
        if progress > UPTURN_START:
            upturn = (progress - UPTURN_START) / (1 - UPTURN_START)
            y -= int(upturn * upturn * UPTURN_RISE)

        points.append((x, y))
    return points


def build_branch(
    attachment: TrunkWaypoint,
    is_left: bool,
    index: int,
    height_ratio: float,
    trunk_length: int,
    canvas_width: int,
    rng: np.random.Generator,
    config: GenerationConfig = DEFAULT_CONFIG,
) -> Branch:
    direction = -1 if is_left else 1
    length = branch_length(trunk_length, attachment.x, is_left, canvas_width, rng, config)

    start_thickness = attachment.thickness
    wave_points = branch_wave_points(attachment.x, attachment.y, direction, length, rng)
    end_x, end_y = wave_points[-1]

    return Branch(
        start_x=attachment.x,
        start_y=attachment.y,
        end_x=end_x,
        end_y=end_y,
        is_left=is_left,
        length=length,
        start_thickness=start_thickness,
        end_thickness=max(1, start_thickness // 4),
        index=index,
        height_ratio=height_ratio,
        attachment_progress=attachment.progress,
        wave_points=wave_points,
    )


def build_branches(
    waypoints: list[TrunkWaypoint],
    trunk_length: int,
    canvas_width: int,
    rng: np.random.Generator,
    config: GenerationConfig = DEFAULT_CONFIG,
) -> list[Branch]:
    """
    Grow one to four attachment heights, each with a left and/or right branch.

    Attachment heights are spread evenly over the allowed band of the trunk
    with a small jitter of -5% to +9%.
    """
    count = 1 + int(rng.integers(0, 4))
    band = config.max_attachment - config.min_attachment

    branches = []
    for i in range(count):
        jitter = int(rng.integers(-5, 10)) / 100
        ratio = config.min_attachment + i * band / count + jitter
        ratio = clamp(ratio, config.min_attachment, config.max_attachment)

        attachment = attachment_waypoint(waypoints, ratio, config)
        go_left, go_right = choose_sides(rng)

        for is_left, grows in ((True, go_left), (False, go_right)):
            if grows:
                branches.append(
                    build_branch(
                        attachment, is_left, i, ratio, trunk_length, canvas_width, rng, config
                    )
                )

    log.debug(
        "branches: %d attachment heights, %d branches", count, len(branches)
    )
    return branches


# =============================================================================
# RASTERIZATION
# =============================================================================

def branch_texture(dx: int, dy: int, radius: float, thickness: int) -> str:
    """Texture glyph by thickness tier and distance from the branch core."""
    ratio = math.sqrt(dx * dx + dy * dy) / radius if radius > 0 else 0.0

    if thickness >= 6:
        core, inner, outer = BRANCH_THICK
        if ratio < 0.3:
            return core
        return inner if ratio < 0.6 else outer
    if thickness >= 3:
        core, outer = BRANCH_MEDIUM
        return core if ratio < 0.5 else outer
    core, outer = BRANCH_THIN
    return core if ratio == 0.0 else outer


def rasterize_thick_line(
    canvas: np.ndarray, x0: int, y0: int, x1: int, y1: int, thickness: int
) -> None:
    radius = thickness // 2
    stamp = [
        (dx, dy, branch_texture(dx, dy, radius, thickness))
        for dx, dy, _ in disk_offsets(radius)
    ]
    for x, y in line_points(x0, y0, x1, y1):
        for dx, dy, glyph in stamp:
            put_over(canvas, x + dx, y + dy, glyph, OPEN_GROUND)


def rasterize_branch(canvas: np.ndarray, branch: Branch) -> None:
    """
    Draw a branch over open ground only.

    Thickness is interpolated per wave segment from the start to the end
    thickness, so the trunk and earlier branches are never painted over.
    """
    points = branch.wave_points
    last = len(points) - 1
    for i, ((x0, y0), (x1, y1)) in enumerate(zip(points, points[1:])):
        t = i / last
        thickness = int(branch.start_thickness * (1 - t) + branch.end_thickness * t)
        rasterize_thick_line(canvas, x0, y0, x1, y1, max(1, thickness))
