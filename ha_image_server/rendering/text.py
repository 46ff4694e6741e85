"""Bitmap text rasterizer built on the fixed glyph table."""

from __future__ import annotations

from .canvas import Canvas, Color
from .glyphs import GLYPH_HEIGHT, GLYPH_SPACING, GLYPH_WIDTH, glyph_mask

# Per-call character caps
MAX_TEXT_CHARS = 50
MAX_PANEL_TEXT_CHARS = 60

# Unscaled horizontal advance per character
CHAR_ADVANCE = GLYPH_WIDTH + GLYPH_SPACING


def text_width(text: str, scale: int = 1) -> int:
    """Horizontal space taken by ``text`` at ``scale``, including trailing spacing."""
    return len(text) * CHAR_ADVANCE * scale


def centered_x(text: str, width: int, scale: int = 1, margin: int = 20, fallback_x: int = 15) -> int:
    """X position that centers ``text`` in ``width`` pixels.

    Text that does not fit within ``width - margin`` is pinned to ``fallback_x``
    instead of being pushed off the left edge.
    """
    rendered = text_width(text, scale)
    if rendered < width - margin:
        return (width - rendered) // 2
    return fallback_x


def draw_text(
    canvas: Canvas,
    x: int,
    y: int,
    text: str,
    color: Color,
    scale: int = 1,
    max_chars: int = MAX_TEXT_CHARS,
) -> int:
    """Draw ``text`` with its top-left corner at (x, y).

    Characters advance ``(6 + 1) * scale`` pixels. Drawing stops at the first
    glyph that would not fit inside the canvas; text never wraps. Glyphs are
    scaled by pixel replication.

    Args:
        canvas: Target canvas
        x: Left edge of the first glyph
        y: Top edge of the glyphs
        text: Text to draw; characters outside the font use the placeholder glyph
        color: Ink color
        scale: Integer scale factor (>= 1)
        max_chars: Maximum number of characters drawn

    Returns:
        Number of characters actually drawn
    """
    if scale < 1:
        raise ValueError(f"Text scale must be >= 1, got {scale}")

    glyph_w = GLYPH_WIDTH * scale
    glyph_h = GLYPH_HEIGHT * scale
    advance = CHAR_ADVANCE * scale

    if y < 0 or y + glyph_h > canvas.height:
        return 0

    drawn = 0
    for index, char in enumerate(text[:max_chars]):
        char_x = x + index * advance
        if char_x < 0 or char_x + glyph_w > canvas.width:
            break
        canvas.blit_mask(char_x, y, glyph_mask(char, scale), color)
        drawn += 1

    return drawn
