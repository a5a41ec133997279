"""
Colored renderings of a bonsai grid.

Two outputs share the glyph color table:
- ANSI 24-bit escape sequences for terminals
- A matplotlib image with one colored cell per glyph
"""

from __future__ import annotations

from collections.abc import Mapping

import matplotlib.pyplot as plt
import numpy as np

from bonsai.colors import COLOR_TABLE, RGB, UnknownGlyphError

ESCAPE = "\u001b"
RESET = ESCAPE + "[0m"
FOREGROUND = ESCAPE + "[38;2;{r};{g};{b}m"
BACKGROUND = ESCAPE + "[48;2;{r};{g};{b}m"


def _lookup(table: Mapping[str, RGB], glyph: str) -> RGB:
    try:
        return table[glyph]
    except KeyError:
        raise UnknownGlyphError(glyph) from None


def ansi_color(rgb: RGB, background: bool = False) -> str:
    r, g, b = rgb
    template = BACKGROUND if background else FOREGROUND
    return template.format(r=r, g=g, b=b)


def to_ansi(
    grid: np.ndarray,
    table: Mapping[str, RGB] = COLOR_TABLE,
    background: bool = False,
) -> str:
    """
    Render a grid with true-color escape codes.

    A color code is only emitted when the color changes along a row, and every
    row ends with a reset so the terminal state does not leak between lines.
    Blank cells stay uncolored unless ``background`` is set, in which case the
    background glyph's color fills them.
    """
    lines = []
    for row in grid.tolist():
        parts = []
        current = None
        for glyph in row:
            if glyph == " " and not background:
                if current is not None:
                    parts.append(RESET)
                    current = None
                parts.append(glyph)
                continue
            rgb = _lookup(table, glyph)
            if rgb != current:
                parts.append(ansi_color(rgb, background=glyph == " "))
                current = rgb
            parts.append(glyph)
        parts.append(RESET)
        lines.append("".join(parts))
    return "\n".join(lines)


def color_array(grid: np.ndarray, table: Mapping[str, RGB] = COLOR_TABLE) -> np.ndarray:
    """Per-cell RGB values as a ``(height, width, 3)`` uint8 array."""
    height, width = grid.shape
    image = np.zeros((height, width, 3), dtype=np.uint8)
    for glyph in np.unique(grid).tolist():
        image[grid == glyph] = _lookup(table, glyph)
    return image


def render_bonsai(
    grid: np.ndarray,
    table: Mapping[str, RGB] = COLOR_TABLE,
    figsize: tuple = (9, 7),
) -> tuple[plt.Figure, plt.Axes]:
    """
    Render a grid as an image, one colored cell per glyph.

    Cells are drawn twice as tall as they are wide to match terminal
    character proportions.

    Returns:
        (figure, axes) tuple
    """
    fig, ax = plt.subplots(figsize=figsize)
    fig.patch.set_facecolor("black")
    ax.imshow(color_array(grid, table), aspect=2.0, interpolation="nearest")
    ax.axis("off")
    return fig, ax


def save_bonsai(
    filepath: str,
    grid: np.ndarray,
    table: Mapping[str, RGB] = COLOR_TABLE,
    dpi: int = 150,
    figsize: tuple = (9, 7),
) -> None:
    """Render and save a grid image to file."""
    fig, ax = render_bonsai(grid, table, figsize)
    fig.savefig(filepath, dpi=dpi, bbox_inches="tight", pad_inches=0.1,
                facecolor=fig.get_facecolor())
    plt.close(fig)
    print(f"Saved to {filepath}")
