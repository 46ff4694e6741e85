"""Grayscale to 1-bit quantization for e-paper output."""

import numpy as np

from .canvas import BLACK_L, WHITE_L, Canvas

DEFAULT_THRESHOLD = 128


def to_grayscale(canvas: Canvas) -> Canvas:
    """Return a grayscale copy of ``canvas`` using ITU-R 601 luma."""
    if canvas.mode == "L":
        return canvas.copy()
    rgb = canvas.pixels.astype(np.float64)
    gray = 0.299 * rgb[..., 0] + 0.587 * rgb[..., 1] + 0.114 * rgb[..., 2]
    return Canvas.from_array(gray.astype(np.uint8))


def quantize(canvas: Canvas, threshold: int = DEFAULT_THRESHOLD) -> Canvas:
    """Threshold a canvas into pure black and white.

    Pixels brighter than ``threshold`` become 255, everything else 0. The
    input is left untouched; RGB input is converted to luma first.

    Args:
        canvas: Source canvas
        threshold: Luma cut-off, exclusive

    Returns:
        New grayscale canvas containing only 0 and 255
    """
    gray = canvas.pixels if canvas.mode == "L" else to_grayscale(canvas).pixels
    binary = np.where(gray > threshold, WHITE_L, BLACK_L).astype(np.uint8)
    return Canvas.from_array(binary)
