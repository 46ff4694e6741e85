"""Owned pixel buffer and drawing primitives for the software rasterizer.

The canvas wraps a ``uint8`` numpy array shaped ``(height, width)`` for
grayscale or ``(height, width, 3)`` for RGB. Every primitive clips against the
buffer bounds, so callers can pass coordinates that run off the edges (or
rectangles smaller than their border) without checking first.
"""

from __future__ import annotations

import math
from typing import Callable, Literal, Optional, Union

import numpy as np
from numpy.typing import NDArray


RGBColor = tuple[int, int, int]
Color = Union[int, RGBColor]
CanvasMode = Literal["L", "RGB"]

# Density function: (xs, ys) coordinate grids -> boolean "paint this pixel" mask
DensityFn = Callable[[NDArray[np.int64], NDArray[np.int64]], NDArray[np.bool_]]

# Fraction bands used to pick the gauge fill pattern
GAUGE_SPARSE_BELOW = 0.25
GAUGE_MEDIUM_BELOW = 0.75

GAUGE_BORDER = 2
GAUGE_INSET = 3

BLACK_L = 0
WHITE_L = 255


def _sparse_density(xs: NDArray[np.int64], ys: NDArray[np.int64]) -> NDArray[np.bool_]:
    return (xs + ys) % 4 == 0


def _medium_density(xs: NDArray[np.int64], ys: NDArray[np.int64]) -> NDArray[np.bool_]:
    return (xs + ys) % 2 == 0


def _solid_density(xs: NDArray[np.int64], ys: NDArray[np.int64]) -> NDArray[np.bool_]:
    return np.ones(np.broadcast(xs, ys).shape, dtype=bool)


def density_for_fraction(
    fraction: float,
    sparse_below: float = GAUGE_SPARSE_BELOW,
    medium_below: float = GAUGE_MEDIUM_BELOW,
) -> DensityFn:
    """Pick the gauge fill pattern for a fill fraction.

    Low readings get a sparse checker, mid readings a dense checker and high
    readings a solid fill, so the band stays distinguishable on a 1-bit panel.

    Args:
        fraction: Fill fraction in [0, 1]
        sparse_below: Upper bound (exclusive) of the sparse band
        medium_below: Upper bound (exclusive) of the medium band

    Returns:
        Density function for ``Canvas.fill_gauge``
    """
    if fraction < sparse_below:
        return _sparse_density
    if fraction < medium_below:
        return _medium_density
    return _solid_density


def luma(color: RGBColor) -> int:
    """ITU-R 601 luma of an RGB color, truncated to an integer."""
    r, g, b = color
    return int(0.299 * r + 0.587 * g + 0.114 * b)


class Canvas:
    """Fixed-size RGB or grayscale raster owned by a single render.

    Attributes:
        width: Width in pixels
        height: Height in pixels
        mode: ``"RGB"`` or ``"L"`` (8-bit grayscale)
        pixels: Underlying numpy buffer
    """

    def __init__(self, width: int, height: int, fill: Color = (255, 255, 255)) -> None:
        """Create a canvas with every pixel set to ``fill``.

        Args:
            width: Width in pixels (> 0)
            height: Height in pixels (> 0)
            fill: Integer for a grayscale canvas, RGB tuple for a color canvas

        Raises:
            ValueError: If a dimension is not positive or the fill is malformed
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas dimensions must be positive, got {width}x{height}")

        self.width = int(width)
        self.height = int(height)

        if isinstance(fill, tuple):
            if len(fill) != 3:
                raise ValueError(f"RGB fill must have 3 channels, got {fill!r}")
            self.mode: CanvasMode = "RGB"
            self.pixels: NDArray[np.uint8] = np.empty((self.height, self.width, 3), dtype=np.uint8)
        else:
            self.mode = "L"
            self.pixels = np.empty((self.height, self.width), dtype=np.uint8)

        self.pixels[...] = self._coerce(fill)

    @classmethod
    def from_array(cls, pixels: NDArray[np.uint8]) -> Canvas:
        """Wrap a copy of an existing ``uint8`` buffer."""
        if pixels.ndim == 2:
            canvas = cls(pixels.shape[1], pixels.shape[0], 0)
        elif pixels.ndim == 3 and pixels.shape[2] == 3:
            canvas = cls(pixels.shape[1], pixels.shape[0], (0, 0, 0))
        else:
            raise ValueError(f"Unsupported pixel buffer shape: {pixels.shape}")
        canvas.pixels[...] = pixels
        return canvas

    def __repr__(self) -> str:
        return f"Canvas(width={self.width}, height={self.height}, mode={self.mode!r})"

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def copy(self) -> Canvas:
        return Canvas.from_array(self.pixels)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _coerce(self, color: Color) -> Union[int, NDArray[np.uint8]]:
        """Convert a color into the canvas' channel layout."""
        if self.mode == "RGB":
            if isinstance(color, tuple):
                return np.array(color, dtype=np.uint8)
            value = int(color)
            return np.array((value, value, value), dtype=np.uint8)
        if isinstance(color, tuple):
            return luma(color)
        return int(color)

    def _clip(self, x0: int, y0: int, x1: int, y1: int) -> Optional[tuple[int, int, int, int]]:
        """Clamp a half-open rectangle to the canvas; None when nothing remains."""
        cx0 = min(max(x0, 0), self.width)
        cy0 = min(max(y0, 0), self.height)
        cx1 = min(max(x1, 0), self.width)
        cy1 = min(max(y1, 0), self.height)
        if cx1 <= cx0 or cy1 <= cy0:
            return None
        return cx0, cy0, cx1, cy1

    def get_pixel(self, x: int, y: int) -> Optional[Color]:
        """Return the pixel at (x, y), or None outside the canvas."""
        if not self.in_bounds(x, y):
            return None
        if self.mode == "RGB":
            r, g, b = (int(c) for c in self.pixels[y, x])
            return (r, g, b)
        return int(self.pixels[y, x])

    def set_pixel(self, x: int, y: int, color: Color) -> None:
        if self.in_bounds(x, y):
            self.pixels[y, x] = self._coerce(color)

    def fill_rect(self, x0: int, y0: int, x1: int, y1: int, color: Color) -> None:
        """Fill the half-open rectangle [x0, x1) x [y0, y1)."""
        clipped = self._clip(x0, y0, x1, y1)
        if clipped is None:
            return
        cx0, cy0, cx1, cy1 = clipped
        self.pixels[cy0:cy1, cx0:cx1] = self._coerce(color)

    def fill_gradient(
        self,
        x0: int,
        y0: int,
        x1: int,
        y1: int,
        start_color: Color,
        end_color: Color,
        axis: Literal["vertical", "horizontal"] = "vertical",
    ) -> None:
        """Fill a rectangle with a linear two-color gradient.

        Each channel is ``int(start * (1 - f) + end * f)`` where ``f`` is
        ``(row - y0) / (y1 - y0)`` for a vertical gradient (columns and x for a
        horizontal one). The factor is computed from the unclipped rectangle so a
        partially visible gradient keeps the same colors.

        Args:
            x0, y0, x1, y1: Half-open rectangle
            start_color: Color at the leading edge
            end_color: Color approached at the trailing edge
            axis: ``"vertical"`` (top to bottom) or ``"horizontal"`` (left to right)
        """
        if axis not in ("vertical", "horizontal"):
            raise ValueError(f"Unknown gradient axis: {axis!r}")

        clipped = self._clip(x0, y0, x1, y1)
        if clipped is None:
            return
        cx0, cy0, cx1, cy1 = clipped

        start = np.asarray(self._coerce(start_color), dtype=np.float64)
        end = np.asarray(self._coerce(end_color), dtype=np.float64)

        if axis == "vertical":
            span = max(y1 - y0, 1)
            factors = (np.arange(cy0, cy1, dtype=np.float64) - y0) / span
        else:
            span = max(x1 - x0, 1)
            factors = (np.arange(cx0, cx1, dtype=np.float64) - x0) / span

        if self.mode == "RGB":
            factors = factors[:, None]
        steps = (start * (1.0 - factors) + end * factors).astype(np.uint8)

        region = self.pixels[cy0:cy1, cx0:cx1]
        if axis == "vertical":
            region[...] = steps[:, None]
        else:
            region[...] = steps[None, :]

    def stroke_rect(
        self, x0: int, y0: int, x1: int, y1: int, thickness: int, color: Color
    ) -> None:
        """Draw ``thickness`` concentric one-pixel borders inside [x0, x1) x [y0, y1)."""
        for inset in range(max(thickness, 0)):
            top = y0 + inset
            bottom = y1 - 1 - inset
            left = x0 + inset
            right = x1 - 1 - inset
            if bottom < top or right < left:
                break
            self.fill_rect(left, top, right + 1, top + 1, color)
            self.fill_rect(left, bottom, right + 1, bottom + 1, color)
            self.fill_rect(left, top, left + 1, bottom + 1, color)
            self.fill_rect(right, top, right + 1, bottom + 1, color)

    def fill_disc(
        self,
        center_x: int,
        center_y: int,
        outer_radius: int,
        inner_radius: int,
        fill_color: Color,
        ring_color: Color,
    ) -> None:
        """Draw a filled disc with an outer ring.

        Pixels within ``inner_radius`` of the center get ``fill_color``; pixels
        between the two radii get ``ring_color``. Distances are compared squared.
        Passing equal radii draws a plain disc.
        """
        outer_radius = max(outer_radius, 0)
        inner_radius = min(max(inner_radius, 0), outer_radius)

        clipped = self._clip(
            center_x - outer_radius,
            center_y - outer_radius,
            center_x + outer_radius + 1,
            center_y + outer_radius + 1,
        )
        if clipped is None:
            return
        cx0, cy0, cx1, cy1 = clipped

        ys, xs = np.ogrid[cy0:cy1, cx0:cx1]
        dist_sq = (xs - center_x) ** 2 + (ys - center_y) ** 2

        inner_mask = dist_sq <= inner_radius**2
        ring_mask = (dist_sq <= outer_radius**2) & ~inner_mask

        region = self.pixels[cy0:cy1, cx0:cx1]
        region[ring_mask] = self._coerce(ring_color)
        region[inner_mask] = self._coerce(fill_color)

    def fill_gauge(
        self,
        x: int,
        y: int,
        width: int,
        height: int,
        fraction: float,
        density_fn: Optional[DensityFn] = None,
        color: Color = BLACK_L,
    ) -> int:
        """Draw a bordered horizontal gauge bar.

        The bar has a ``GAUGE_BORDER``-pixel frame; the interior starts
        ``GAUGE_INSET`` pixels in and is filled to ``round((width - 6) * fraction)``
        pixels, painting only the pixels the density function selects.

        Args:
            x, y: Top-left corner
            width, height: Outer size of the bar
            fraction: Fill fraction, clamped to [0, 1]
            density_fn: Pixel selector; defaults to the band pattern for ``fraction``
            color: Border and fill color

        Returns:
            Interior fill width in pixels
        """
        fraction = 0.0 if math.isnan(fraction) else min(max(float(fraction), 0.0), 1.0)
        if density_fn is None:
            density_fn = density_for_fraction(fraction)

        self.stroke_rect(x, y, x + width, y + height, GAUGE_BORDER, color)

        interior_width = max(width - 2 * GAUGE_INSET, 0)
        fill_width = round(interior_width * fraction)
        if fill_width <= 0:
            return 0

        fx0 = x + GAUGE_INSET
        fy0 = y + GAUGE_INSET
        fx1 = fx0 + fill_width
        fy1 = y + max(height - GAUGE_INSET, GAUGE_INSET)

        clipped = self._clip(fx0, fy0, fx1, fy1)
        if clipped is not None:
            cx0, cy0, cx1, cy1 = clipped
            ys, xs = np.ogrid[cy0:cy1, cx0:cx1]
            mask = np.broadcast_to(density_fn(xs, ys), (cy1 - cy0, cx1 - cx0))
            self.pixels[cy0:cy1, cx0:cx1][mask] = self._coerce(color)

        return fill_width

    def blit_mask(self, x: int, y: int, mask: NDArray[np.bool_], color: Color) -> None:
        """Paint ``color`` wherever ``mask`` is set, with its top-left at (x, y)."""
        mask_height, mask_width = mask.shape
        clipped = self._clip(x, y, x + mask_width, y + mask_height)
        if clipped is None:
            return
        cx0, cy0, cx1, cy1 = clipped
        visible = mask[cy0 - y : cy1 - y, cx0 - x : cx1 - x]
        self.pixels[cy0:cy1, cx0:cx1][visible] = self._coerce(color)
