"""
Bonsai - Procedural ASCII Bonsai Generator

Grows a bonsai tree on a character grid and prints it in color:
1. Pot with a soil surface
2. Wavy tapering trunk with surface roots
3. One to four tiers of wavy branches
4. Mushroom-cap foliage on every branch tip and on the apex

Usage:
    python main.py                          # random tree, 90x35
    python main.py --seed 42                # reproducible tree
    python main.py --variation mature       # force a variation
    python main.py --output tree.txt --png tree.png
"""

from __future__ import annotations

import argparse
import logging
import sys

from pydantic import ValidationError

from bonsai.api import InputSchema, grow, summarize
from bonsai.canvas import save_text
from bonsai.config import DEFAULT_CONFIG, TreeVariation
from bonsai.generator import BonsaiTree, GenerationTimeout
from bonsai.render import save_bonsai, to_ansi

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Grow a procedural ASCII bonsai")
    parser.add_argument("--width", type=int, default=DEFAULT_CONFIG.width, help="Canvas width")
    parser.add_argument("--height", type=int, default=DEFAULT_CONFIG.height, help="Canvas height")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--variation",
        choices=[v.value for v in TreeVariation],
        default=None,
        help="Growth variation (default: random)",
    )
    parser.add_argument(
        "--timeout", type=float, default=DEFAULT_CONFIG.timeout_seconds,
        help="Seconds before generation is abandoned",
    )
    parser.add_argument("--output", default=None, help="Save the tree as plain text")
    parser.add_argument("--png", default=None, help="Save a color image of the tree")
    parser.add_argument("--no-color", action="store_true", help="Print plain text")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser


def print_tree(tree: BonsaiTree, color: bool) -> None:
    result = summarize(tree)

    print("\n" + "=" * 60)
    print(f"  {result.style.replace('_', ' ').title()} bonsai ({result.variation})")
    print("=" * 60)
    print(to_ansi(tree.grid) if color else result.text)
    print("=" * 60)
    print(f"{result.branch_count} branches, {len(result.colors)} glyphs")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        request = InputSchema(
            width=args.width,
            height=args.height,
            seed=args.seed,
            variation=args.variation,
            timeout=args.timeout,
        )
    except ValidationError as e:
        log.error("invalid request:\n%s", e)
        return 2

    try:
        tree = grow(request)
    except GenerationTimeout as e:
        log.error("%s", e)
        return 1

    print_tree(tree, color=not args.no_color)

    if args.output:
        save_text(args.output, tree.grid)
    if args.png:
        save_bonsai(args.png, tree.grid)

    return 0


if __name__ == "__main__":
    sys.exit(main())
