"""Surface roots spreading from the trunk base along the soil."""

from __future__ import annotations

import math
from typing import NamedTuple

import numpy as np

from bonsai.canvas import put_over
from bonsai.config import OPEN_GROUND, ROOT_THICK, ROOT_THIN


class Root(NamedTuple):
    start_x: int
    start_y: int
    end_x: int
    end_y: int
    thickness: int  # 2 = thick, 1 = thin


def build_roots(
    base: tuple[int, int], rng: np.random.Generator, trunk_radius: int = 0
) -> list[Root]:
    """
    Four to six short roots fanned over the half-circle beneath the base.

    Each root starts ``trunk_radius`` cells out from the base on the side it
    grows toward, so it begins at the edge of the trunk rather than under it.
    The first two roots are thick. Lengths are 3 to 7 cells.
    """
    base_x, base_y = base
    count = 4 + int(rng.integers(0, 3))

    roots = []
    for i in range(count):
        angle = math.pi * (i + 0.5) / count + rng.random() * 0.5 - 0.25
        length = 3 + int(rng.integers(0, 5))
        reach = math.cos(angle)
        start_x = base_x + (trunk_radius if reach >= 0 else -trunk_radius)
        roots.append(
            Root(
                start_x=start_x,
                start_y=base_y,
                end_x=start_x + int(reach * length),
                end_y=base_y + int(rng.integers(0, 2)),
                thickness=2 if i < 2 else 1,
            )
        )
    return roots


def rasterize_roots(canvas: np.ndarray, roots: list[Root], rng: np.random.Generator) -> None:
    """
    Walk each root horizontally, drifting down a row now and then.

    Only open ground (background or soil) is painted, so roots tuck under the
    trunk and stop at the pot.
    """
    last_row = canvas.shape[0] - 1
    for root in roots:
        glyph = ROOT_THICK if root.thickness > 1 else ROOT_THIN
        step = 1 if root.end_x > root.start_x else -1
        x, y = root.start_x, root.start_y

        while x != root.end_x:
            put_over(canvas, x, y, glyph, OPEN_GROUND)
            x += step
            if rng.random() > 0.7 and y < last_row:
                y += 1
