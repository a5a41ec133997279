"""
Bonsai generation pipeline.

Runs the builders in order over one canvas:

    Pot -> Trunk -> Roots -> Branches -> Canopies

Each stage paints the shared canvas and hands its geometry to the later
stages: the pot fixes the trunk base, the trunk waypoints fix the branch
attachments and the apex canopy, and the branch tips fix the branch canopies.
A single random generator is threaded through every stage, so a seed fully
determines the tree.
"""

from __future__ import annotations

import concurrent.futures
import logging
import numbers
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from types import MappingProxyType

import numpy as np

from bonsai.branches import Branch, build_branches, rasterize_branch
from bonsai.canopy import LeafCanopy, build_apex_canopy, build_branch_canopy, rasterize_canopy
from bonsai.canvas import create_canvas, glyphs_used, to_text
from bonsai.colors import color_table
from bonsai.config import (
    DEFAULT_CONFIG,
    BonsaiStyle,
    GenerationConfig,
    TreeVariation,
    params_for,
)
from bonsai.pot import Pot, build_pot, rasterize_pot
from bonsai.roots import Root, build_roots, rasterize_roots
from bonsai.trunk import TrunkWaypoint, build_trunk_waypoints, rasterize_trunk, trunk_length

log = logging.getLogger(__name__)

STYLES = list(BonsaiStyle)
VARIATIONS = list(TreeVariation)


class InvalidDimensionsError(ValueError):
    """Canvas width or height is not an integer or is below the minimum size."""


class CancelledError(Exception):
    """Generation was cancelled through its cancel check."""


class GenerationTimeout(TimeoutError):
    """Generation did not finish within the allowed time."""


@dataclass
class BonsaiTree:
    """A generated tree: the painted grid plus the geometry that produced it."""

    grid: np.ndarray
    pot: Pot
    trunk: list[TrunkWaypoint]
    trunk_length: int
    roots: list[Root] = field(default_factory=list)
    branches: list[Branch] = field(default_factory=list)
    canopies: list[LeafCanopy] = field(default_factory=list)
    variation: TreeVariation = TreeVariation.BALANCED
    style: BonsaiStyle = BonsaiStyle.INFORMAL_UPRIGHT

    @property
    def width(self) -> int:
        return self.grid.shape[1]

    @property
    def height(self) -> int:
        return self.grid.shape[0]

    @property
    def apex(self) -> TrunkWaypoint:
        return self.trunk[-1]

    def glyphs(self) -> set[str]:
        return glyphs_used(self.grid)

    def to_text(self) -> str:
        return to_text(self.grid)


def validate_dimensions(width, height, config: GenerationConfig = DEFAULT_CONFIG) -> None:
    """Reject non-integer or too-small canvas sizes before any work starts."""
    for name, value, minimum in (
        ("width", width, config.min_width),
        ("height", height, config.min_height),
    ):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise InvalidDimensionsError(f"{name} must be an integer, got {value!r}")
        if value < minimum:
            raise InvalidDimensionsError(f"{name} must be at least {minimum}, got {value}")


def make_rng(seed: int | np.random.Generator | None = None) -> np.random.Generator:
    """Return ``seed`` if it is already a generator, else seed a new one."""
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)


def grow_bonsai(
    width: int,
    height: int,
    rng: int | np.random.Generator | None = None,
    *,
    variation: TreeVariation | None = None,
    config: GenerationConfig = DEFAULT_CONFIG,
    progress_callback: Callable[[int], None] | None = None,
    cancel_check: Callable[[], bool] | None = None,
) -> BonsaiTree:
    """
    Generate a bonsai tree on a ``width`` x ``height`` canvas.

    Args:
        width: Canvas width in cells
        height: Canvas height in cells
        rng: Seed or numpy Generator. A shared generator advances across
            calls; callers running generation concurrently must not share one.
        variation: Force a growth variation instead of drawing one
        config: Geometry settings
        progress_callback: Called with a percentage after each stage
        cancel_check: Polled between stages; returning True aborts with
            ``CancelledError``

    Returns:
        BonsaiTree with the painted grid and every piece of geometry
    """
    validate_dimensions(width, height, config)
    rng = make_rng(rng)

    def checkpoint(percent: int) -> None:
        if cancel_check is not None and cancel_check():
            raise CancelledError()
        if progress_callback is not None:
            progress_callback(percent)

    style = STYLES[int(rng.integers(len(STYLES)))]
    if variation is None:
        variation = VARIATIONS[int(rng.integers(len(VARIATIONS)))]
    params = params_for(variation)
    log.debug("growing %dx%d %s/%s bonsai", width, height, style.value, variation.value)

    canvas = create_canvas(width, height)
    checkpoint(5)

    # Pot
    pot = build_pot(width, height)
    rasterize_pot(canvas, pot, rng)
    checkpoint(15)

    # Trunk
    length = trunk_length(height, params, rng)
    trunk = build_trunk_waypoints(pot, width, length, params, rng, config)
    rasterize_trunk(canvas, trunk)
    checkpoint(40)

    # Roots
    base = trunk[0]
    roots = build_roots((base.x, pot.soil_row), rng, base.thickness // 2 + 1)
    rasterize_roots(canvas, roots, rng)
    checkpoint(50)

    # Branches
    branches = build_branches(trunk, length, width, rng, config)
    for branch in branches:
        rasterize_branch(canvas, branch)
    checkpoint(70)

    # Canopies: one per branch tip, then the apex
    canopies = [build_branch_canopy(branch, rng) for branch in branches]
    canopies.append(build_apex_canopy(trunk[-1], length, rng))
    for canopy in canopies:
        rasterize_canopy(canvas, canopy, rng)
    checkpoint(100)

    log.debug(
        "grew bonsai: trunk=%d rows, %d roots, %d branches, %d canopies",
        length, len(roots), len(branches), len(canopies),
    )
    return BonsaiTree(
        grid=canvas,
        pot=pot,
        trunk=trunk,
        trunk_length=length,
        roots=roots,
        branches=branches,
        canopies=canopies,
        variation=variation,
        style=style,
    )


def generate(
    width: int,
    height: int,
    rng: int | np.random.Generator | None = None,
    **kwargs,
) -> tuple[np.ndarray, MappingProxyType]:
    """Generate a tree and return ``(grid, color_table)``."""
    tree = grow_bonsai(width, height, rng, **kwargs)
    return tree.grid, color_table()


def generate_with_timeout(
    width: int,
    height: int,
    rng: int | np.random.Generator | None = None,
    timeout: float | None = None,
    **kwargs,
) -> BonsaiTree:
    """
    Run ``grow_bonsai`` on a worker thread, giving up after ``timeout`` seconds.

    On timeout the worker is asked to stop at its next stage boundary, and
    ``GenerationTimeout`` is raised once it has stopped, so a shared
    generator is not advanced after this call returns. Any ``cancel_check``
    passed in is still honoured.
    """
    validate_dimensions(width, height, kwargs.get("config", DEFAULT_CONFIG))
    if timeout is None:
        timeout = DEFAULT_CONFIG.timeout_seconds

    timed_out = threading.Event()
    outer_check = kwargs.pop("cancel_check", None)

    def cancel_check() -> bool:
        return timed_out.is_set() or (outer_check is not None and outer_check())

    executor = concurrent.futures.ThreadPoolExecutor(max_workers=1)
    future = executor.submit(
        grow_bonsai, width, height, rng, cancel_check=cancel_check, **kwargs
    )
    try:
        return future.result(timeout=timeout)
    except concurrent.futures.TimeoutError:
        timed_out.set()
        log.warning("bonsai generation exceeded %.1fs, cancelling", timeout)
        # The worker draws from the caller's generator; it must be stopped
        # before the caller can reuse it.
        executor.shutdown(wait=True)
        raise GenerationTimeout(f"generation exceeded {timeout:.1f}s") from None
    finally:
        executor.shutdown(wait=False)
