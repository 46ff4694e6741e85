"""PNG encoding for finished canvases."""

import io
import logging

from PIL import Image

from .canvas import Canvas

logger = logging.getLogger(__name__)

PNG_CONTENT_TYPE = "image/png"


def to_pil_image(canvas: Canvas, bilevel: bool = False) -> Image.Image:
    """Wrap a canvas' pixels in a PIL Image.

    Args:
        canvas: Canvas to convert
        bilevel: Convert to mode "1" without dithering; pixels should already
            be quantized to 0/255

    Returns:
        PIL Image in mode "RGB", "L" or "1"
    """
    image = Image.fromarray(canvas.pixels)
    if bilevel:
        image = image.convert("1", dither=Image.Dither.NONE)
    return image


def encode_png(canvas: Canvas, bilevel: bool = False) -> bytes:
    """Encode a canvas as PNG bytes.

    Args:
        canvas: Finished canvas
        bilevel: Write a 1-bit PNG

    Returns:
        PNG file contents
    """
    try:
        image = to_pil_image(canvas, bilevel=bilevel)
        buffer = io.BytesIO()
        image.save(buffer, format="PNG", optimize=True)
    except Exception:
        logger.exception("Failed to encode %r as PNG", canvas)
        raise

    data = buffer.getvalue()
    logger.debug("Encoded %dx%d %s canvas to %d PNG bytes", canvas.width, canvas.height, image.mode, len(data))
    return data
