"""
Character canvas shared by the generation stages.

The canvas is a ``(height, width)`` numpy array of single-character strings,
indexed ``grid[y, x]`` with ``y = 0`` at the top. Every write goes through
``put`` or ``put_over``, which bounds-check the target cell, so no stage can
write outside the grid.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from pathlib import Path

import numpy as np

from bonsai.config import BACKGROUND


def create_canvas(width: int, height: int) -> np.ndarray:
    """Create a grid of background glyphs."""
    return np.full((height, width), BACKGROUND, dtype="<U1")


def in_bounds(grid: np.ndarray, x: int, y: int) -> bool:
    height, width = grid.shape
    return 0 <= x < width and 0 <= y < height


def put(grid: np.ndarray, x: int, y: int, glyph: str) -> bool:
    """Write a glyph if (x, y) is on the canvas. Returns whether it was written."""
    if not in_bounds(grid, x, y):
        return False
    grid[y, x] = glyph
    return True


def put_over(
    grid: np.ndarray, x: int, y: int, glyph: str, allowed: frozenset[str]
) -> bool:
    """Write a glyph only where the current cell holds one of ``allowed``."""
    if not in_bounds(grid, x, y) or grid[y, x] not in allowed:
        return False
    grid[y, x] = glyph
    return True


def line_points(x0: int, y0: int, x1: int, y1: int) -> Iterator[tuple[int, int]]:
    """Integer Bresenham walk from (x0, y0) to (x1, y1), both ends included."""
    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx - dy

    x, y = x0, y0
    while True:
        yield x, y
        if x == x1 and y == y1:
            return
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy


def disk_offsets(radius: int) -> list[tuple[int, int, float]]:
    """
    Offsets of a filled disk.

    Returns ``(dx, dy, distance)`` for every integer offset within ``radius``
    of the center, scanned row by row.
    """
    offsets = []
    for dy in range(-radius, radius + 1):
        for dx in range(-radius, radius + 1):
            distance = math.sqrt(dx * dx + dy * dy)
            if distance <= radius:
                offsets.append((dx, dy, distance))
    return offsets


def glyphs_used(grid: np.ndarray) -> set[str]:
    return set(np.unique(grid).tolist())


# =============================================================================
# TEXT EXPORT
# =============================================================================

def to_text(grid: np.ndarray) -> str:
    """Serialize a grid: rows top to bottom, joined by newlines."""
    return "\n".join("".join(row) for row in grid.tolist())


def save_text(filepath: str | Path, grid: np.ndarray) -> Path:
    """Write the grid as UTF-8 text."""
    path = Path(filepath)
    path.write_text(to_text(grid), encoding="utf-8")
    print(f"Saved to {path}")
    return path
