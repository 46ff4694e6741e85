"""Fixed 8x6 bitmap font used by the software text rasterizer.

Each glyph is eight row masks, one per pixel row from top to bottom. Within a
row, bit ``5 - i`` lights column ``i`` (left to right), so only the low six bits
are meaningful. The table covers printable ASCII only; anything else is drawn
with ``PLACEHOLDER_GLYPH``.
"""

from __future__ import annotations

from functools import lru_cache
from types import MappingProxyType
from typing import Mapping

import numpy as np
from numpy.typing import NDArray

GLYPH_WIDTH = 6
GLYPH_HEIGHT = 8
GLYPH_SPACING = 1

GlyphBitmap = tuple[int, int, int, int, int, int, int, int]

# Small "x" shown for characters outside the table
PLACEHOLDER_GLYPH: GlyphBitmap = (0x00, 0x00, 0x0A, 0x04, 0x0A, 0x00, 0x00, 0x00)

_GLYPH_DATA: dict[str, GlyphBitmap] = {
    " ": (0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00),
    "!": (0x04, 0x04, 0x04, 0x04, 0x04, 0x00, 0x04, 0x00),
    '"': (0x0A, 0x0A, 0x0A, 0x00, 0x00, 0x00, 0x00, 0x00),
    "#": (0x0A, 0x0A, 0x1F, 0x0A, 0x1F, 0x0A, 0x0A, 0x00),
    "$": (0x04, 0x0F, 0x14, 0x0E, 0x05, 0x1E, 0x04, 0x00),
    "%": (0x18, 0x19, 0x02, 0x04, 0x08, 0x13, 0x03, 0x00),
    "&": (0x0C, 0x12, 0x14, 0x08, 0x15, 0x12, 0x0D, 0x00),
    "'": (0x0C, 0x04, 0x08, 0x00, 0x00, 0x00, 0x00, 0x00),
    "(": (0x02, 0x04, 0x08, 0x08, 0x08, 0x04, 0x02, 0x00),
    ")": (0x08, 0x04, 0x02, 0x02, 0x02, 0x04, 0x08, 0x00),
    "*": (0x00, 0x04, 0x15, 0x0E, 0x15, 0x04, 0x00, 0x00),
    "+": (0x00, 0x04, 0x04, 0x1F, 0x04, 0x04, 0x00, 0x00),
    ",": (0x00, 0x00, 0x00, 0x00, 0x0C, 0x04, 0x08, 0x00),
    "-": (0x00, 0x00, 0x00, 0x1F, 0x00, 0x00, 0x00, 0x00),
    ".": (0x00, 0x00, 0x00, 0x00, 0x00, 0x0C, 0x0C, 0x00),
    "/": (0x00, 0x01, 0x02, 0x04, 0x08, 0x10, 0x00, 0x00),
    "0": (0x0E, 0x11, 0x13, 0x15, 0x19, 0x11, 0x0E, 0x00),
    "1": (0x04, 0x0C, 0x04, 0x04, 0x04, 0x04, 0x0E, 0x00),
    "2": (0x0E, 0x11, 0x01, 0x02, 0x04, 0x08, 0x1F, 0x00),
    "3": (0x1F, 0x02, 0x04, 0x02, 0x01, 0x11, 0x0E, 0x00),
    "4": (0x02, 0x06, 0x0A, 0x12, 0x1F, 0x02, 0x02, 0x00),
    "5": (0x1F, 0x10, 0x1E, 0x01, 0x01, 0x11, 0x0E, 0x00),
    "6": (0x06, 0x08, 0x10, 0x1E, 0x11, 0x11, 0x0E, 0x00),
    "7": (0x1F, 0x01, 0x02, 0x04, 0x08, 0x08, 0x08, 0x00),
    "8": (0x0E, 0x11, 0x11, 0x0E, 0x11, 0x11, 0x0E, 0x00),
    "9": (0x0E, 0x11, 0x11, 0x0F, 0x01, 0x02, 0x0C, 0x00),
    ":": (0x00, 0x0C, 0x0C, 0x00, 0x0C, 0x0C, 0x00, 0x00),
    ";": (0x00, 0x0C, 0x0C, 0x00, 0x0C, 0x04, 0x08, 0x00),
    "<": (0x02, 0x04, 0x08, 0x10, 0x08, 0x04, 0x02, 0x00),
    "=": (0x00, 0x00, 0x1F, 0x00, 0x1F, 0x00, 0x00, 0x00),
    ">": (0x08, 0x04, 0x02, 0x01, 0x02, 0x04, 0x08, 0x00),
    "?": (0x0E, 0x11, 0x01, 0x02, 0x04, 0x00, 0x04, 0x00),
    "@": (0x0E, 0x11, 0x01, 0x0D, 0x15, 0x15, 0x0E, 0x00),
    "A": (0x0E, 0x11, 0x11, 0x11, 0x1F, 0x11, 0x11, 0x00),
    "B": (0x1E, 0x11, 0x11, 0x1E, 0x11, 0x11, 0x1E, 0x00),
    "C": (0x0E, 0x11, 0x10, 0x10, 0x10, 0x11, 0x0E, 0x00),
    "D": (0x1C, 0x12, 0x11, 0x11, 0x11, 0x12, 0x1C, 0x00),
    "E": (0x1F, 0x10, 0x10, 0x1E, 0x10, 0x10, 0x1F, 0x00),
    "F": (0x1F, 0x10, 0x10, 0x1E, 0x10, 0x10, 0x10, 0x00),
    "G": (0x0E, 0x11, 0x10, 0x17, 0x11, 0x11, 0x0F, 0x00),
    "H": (0x11, 0x11, 0x11, 0x1F, 0x11, 0x11, 0x11, 0x00),
    "I": (0x0E, 0x04, 0x04, 0x04, 0x04, 0x04, 0x0E, 0x00),
    "J": (0x07, 0x02, 0x02, 0x02, 0x02, 0x12, 0x0C, 0x00),
    "K": (0x11, 0x12, 0x14, 0x18, 0x14, 0x12, 0x11, 0x00),
    "L": (0x10, 0x10, 0x10, 0x10, 0x10, 0x10, 0x1F, 0x00),
    "M": (0x11, 0x1B, 0x15, 0x15, 0x11, 0x11, 0x11, 0x00),
    "N": (0x11, 0x11, 0x19, 0x15, 0x13, 0x11, 0x11, 0x00),
    "O": (0x0E, 0x11, 0x11, 0x11, 0x11, 0x11, 0x0E, 0x00),
    "P": (0x1E, 0x11, 0x11, 0x1E, 0x10, 0x10, 0x10, 0x00),
    "Q": (0x0E, 0x11, 0x11, 0x11, 0x15, 0x12, 0x0D, 0x00),
    "R": (0x1E, 0x11, 0x11, 0x1E, 0x14, 0x12, 0x11, 0x00),
    "S": (0x0F, 0x10, 0x10, 0x0E, 0x01, 0x01, 0x1E, 0x00),
    "T": (0x1F, 0x04, 0x04, 0x04, 0x04, 0x04, 0x04, 0x00),
    "U": (0x11, 0x11, 0x11, 0x11, 0x11, 0x11, 0x0E, 0x00),
    "V": (0x11, 0x11, 0x11, 0x11, 0x11, 0x0A, 0x04, 0x00),
    "W": (0x11, 0x11, 0x11, 0x15, 0x15, 0x15, 0x0A, 0x00),
    "X": (0x11, 0x11, 0x0A, 0x04, 0x0A, 0x11, 0x11, 0x00),
    "Y": (0x11, 0x11, 0x11, 0x0A, 0x04, 0x04, 0x04, 0x00),
    "Z": (0x1F, 0x01, 0x02, 0x04, 0x08, 0x10, 0x1F, 0x00),
    "a": (0x00, 0x00, 0x0E, 0x01, 0x0F, 0x11, 0x0F, 0x00),
    "b": (0x10, 0x10, 0x16, 0x19, 0x11, 0x11, 0x1E, 0x00),
    "c": (0x00, 0x00, 0x0E, 0x10, 0x10, 0x11, 0x0E, 0x00),
    "d": (0x01, 0x01, 0x0D, 0x13, 0x11, 0x11, 0x0F, 0x00),
    "e": (0x00, 0x00, 0x0E, 0x11, 0x1F, 0x10, 0x0E, 0x00),
    "f": (0x06, 0x09, 0x08, 0x1C, 0x08, 0x08, 0x08, 0x00),
    "g": (0x00, 0x00, 0x0F, 0x11, 0x0F, 0x01, 0x0E, 0x00),
    "h": (0x10, 0x10, 0x16, 0x19, 0x11, 0x11, 0x11, 0x00),
    "i": (0x04, 0x00, 0x0C, 0x04, 0x04, 0x04, 0x0E, 0x00),
    "j": (0x02, 0x00, 0x06, 0x02, 0x02, 0x12, 0x0C, 0x00),
    "k": (0x10, 0x10, 0x12, 0x14, 0x18, 0x14, 0x12, 0x00),
    "l": (0x0C, 0x04, 0x04, 0x04, 0x04, 0x04, 0x0E, 0x00),
    "m": (0x00, 0x00, 0x1A, 0x15, 0x15, 0x11, 0x11, 0x00),
    "n": (0x00, 0x00, 0x16, 0x19, 0x11, 0x11, 0x11, 0x00),
    "o": (0x00, 0x00, 0x0E, 0x11, 0x11, 0x11, 0x0E, 0x00),
    "p": (0x00, 0x00, 0x1E, 0x11, 0x1E, 0x10, 0x10, 0x00),
    "q": (0x00, 0x00, 0x0D, 0x13, 0x0F, 0x01, 0x01, 0x00),
    "r": (0x00, 0x00, 0x16, 0x19, 0x10, 0x10, 0x10, 0x00),
    "s": (0x00, 0x00, 0x0E, 0x10, 0x0E, 0x01, 0x1E, 0x00),
    "t": (0x08, 0x08, 0x1C, 0x08, 0x08, 0x09, 0x06, 0x00),
    "u": (0x00, 0x00, 0x11, 0x11, 0x11, 0x13, 0x0D, 0x00),
    "v": (0x00, 0x00, 0x11, 0x11, 0x11, 0x0A, 0x04, 0x00),
    "w": (0x00, 0x00, 0x11, 0x11, 0x15, 0x15, 0x0A, 0x00),
    "x": (0x00, 0x00, 0x11, 0x0A, 0x04, 0x0A, 0x11, 0x00),
    "y": (0x00, 0x00, 0x11, 0x11, 0x0F, 0x01, 0x0E, 0x00),
    "z": (0x00, 0x00, 0x1F, 0x02, 0x04, 0x08, 0x1F, 0x00),
    "_": (0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x1F, 0x00),
}

GLYPHS: Mapping[str, GlyphBitmap] = MappingProxyType(_GLYPH_DATA)


def get_glyph(char: str) -> GlyphBitmap:
    """Return the bitmap for ``char``, or the placeholder for unsupported input."""
    return GLYPHS.get(char, PLACEHOLDER_GLYPH)


@lru_cache(maxsize=512)
def glyph_mask(char: str, scale: int = 1) -> NDArray[np.bool_]:
    """Expand a glyph into a boolean pixel mask, replicated ``scale`` times per axis.

    The returned array is shaped ``(8 * scale, 6 * scale)`` and is read-only so
    cached masks can be shared safely between concurrent renders.

    Args:
        char: Character to look up
        scale: Integer pixel replication factor (>= 1)

    Returns:
        Read-only boolean mask
    """
    if scale < 1:
        raise ValueError(f"Glyph scale must be >= 1, got {scale}")

    rows = np.array(get_glyph(char), dtype=np.uint8)
    shifts = np.arange(GLYPH_WIDTH - 1, -1, -1, dtype=np.uint8)
    mask = ((rows[:, None] >> shifts[None, :]) & 1).astype(bool)

    if scale > 1:
        mask = np.repeat(np.repeat(mask, scale, axis=0), scale, axis=1)

    mask.setflags(write=False)
    return mask
