# API module for bonsai generation
# Validated request/response schemas around the generation pipeline

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from bonsai.colors import color_for, to_hex
from bonsai.config import DEFAULT_CONFIG, TreeVariation
from bonsai.generator import BonsaiTree, generate_with_timeout, make_rng

#
# Schemata
#


class InputSchema(BaseModel):
    """Input schema for a bonsai generation request."""

    width: int = Field(
        default=DEFAULT_CONFIG.width, ge=DEFAULT_CONFIG.min_width, description="Canvas width in cells"
    )
    height: int = Field(
        default=DEFAULT_CONFIG.height, ge=DEFAULT_CONFIG.min_height, description="Canvas height in cells"
    )
    seed: int | None = Field(default=None, description="Random seed; None for a fresh tree")
    variation: str | None = Field(
        default=None, description="Growth variation name; None to draw one at random"
    )
    timeout: float = Field(
        default=DEFAULT_CONFIG.timeout_seconds, gt=0, description="Seconds before giving up"
    )

    @field_validator("variation")
    @classmethod
    def known_variation(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip().lower()
        names = [v.value for v in TreeVariation]
        if value not in names:
            raise ValueError(f"unknown variation {value!r}, expected one of {names}")
        return value


class OutputSchema(BaseModel):
    """Output schema for a bonsai generation request."""

    text: str = Field(description="Grid rows joined by newlines")
    width: int = Field(description="Canvas width in cells")
    height: int = Field(description="Canvas height in cells")
    variation: str = Field(description="Growth variation used")
    style: str = Field(description="Bonsai style drawn for the tree")
    branch_count: int = Field(description="Number of branches grown")
    colors: dict[str, str] = Field(description="Hex color for every glyph in the grid")


#
# Core computation
#


def grow(inputs: InputSchema) -> BonsaiTree:
    """Run generation for a validated request, bounded by its timeout."""
    variation = TreeVariation(inputs.variation) if inputs.variation else None
    return generate_with_timeout(
        inputs.width,
        inputs.height,
        make_rng(inputs.seed),
        timeout=inputs.timeout,
        variation=variation,
    )


def summarize(tree: BonsaiTree) -> OutputSchema:
    return OutputSchema(
        text=tree.to_text(),
        width=tree.width,
        height=tree.height,
        variation=tree.variation.value,
        style=tree.style.value,
        branch_count=len(tree.branches),
        colors={glyph: to_hex(color_for(glyph)) for glyph in sorted(tree.glyphs())},
    )


def apply(inputs: InputSchema) -> OutputSchema:
    """
    Generate a tree from a validated request.

    Args:
        inputs: Request with canvas size, seed and optional variation

    Returns:
        OutputSchema with the text grid and the colors it uses
    """
    return summarize(grow(inputs))
