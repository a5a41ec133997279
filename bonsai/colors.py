"""
Glyph to color lookup.

The table is built once at import and shared by every tree. It covers the full
alphabet of every builder; asking for any other glyph means a builder and the
table have drifted apart, and raises ``UnknownGlyphError``.
"""

from types import MappingProxyType

RGB = tuple[int, int, int]


class UnknownGlyphError(KeyError):
    """A glyph outside the known alphabet was looked up."""


_COLORS: dict[str, RGB] = {
    " ": (0, 0, 0),

    # Pot - greys only
    "█": (130, 130, 130),  # body
    "▓": (110, 110, 110),  # feet
    "▒": (150, 150, 150),  # sides
    "░": (90, 90, 90),  # base
    "■": (140, 140, 140),  # corners
    "□": (160, 160, 160),  # rim

    # Soil - dark, to stand out against the pot
    "▪": (40, 30, 20),
    "▫": (60, 45, 30),

    # Trunk rings, core to edge
    "║": (101, 67, 33),
    "╣": (83, 53, 20),
    "╠": (139, 90, 43),
    "╦": (120, 80, 40),
    "╩": (95, 65, 30),
    "╬": (110, 75, 35),
    "╧": (130, 85, 45),

    # Surface roots
    "═": (139, 90, 43),
    "─": (160, 110, 60),

    # Branches
    "┃": (120, 80, 40),
    "┣": (115, 78, 42),
    "┫": (105, 72, 38),
    "┏": (100, 70, 35),
    "┗": (110, 75, 40),
    "┓": (90, 60, 30),
    "┻": (85, 58, 28),

    # Canopy, dense top to light bottom
    "●": (34, 139, 34),
    "○": (46, 125, 46),
    "◆": (60, 140, 60),
    "◇": (80, 160, 80),
    "◈": (20, 100, 20),
    "◉": (40, 120, 40),
    "◊": (70, 150, 70),
    "⬢": (85, 165, 85),
    "⬡": (25, 95, 25),
    "⬟": (50, 130, 50),
    "⬠": (90, 170, 90),
    "⬣": (15, 80, 15),
}

COLOR_TABLE = MappingProxyType(_COLORS)


def color_table() -> MappingProxyType:
    """The glyph to RGB table. Independent of any generated tree."""
    return COLOR_TABLE


def color_for(glyph: str) -> RGB:
    try:
        return COLOR_TABLE[glyph]
    except KeyError:
        raise UnknownGlyphError(glyph) from None


def to_hex(rgb: RGB) -> str:
    r, g, b = rgb
    return f"#{r:02x}{g:02x}{b:02x}"
