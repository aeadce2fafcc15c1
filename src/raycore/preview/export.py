"""Image export utilities for canvases.

This module provides functions for saving canvases to image files.

Supported formats:
    - PPM (plain-text P3, written directly)
    - PNG and other raster formats (8-bit RGB via Pillow)

Example:
    >>> from raycore.preview.export import save_image
    >>> canvas = Canvas(64, 64, Color(0.2, 0.2, 0.2))
    >>> save_image(canvas, "circle.png")
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from raycore.preview.canvas import Canvas

logger = logging.getLogger(__name__)

# Plain PPM readers are only required to accept lines up to 70 characters
PPM_MAX_LINE_LENGTH = 70
PPM_MAX_COLOR_VALUE = 255

# Extensions handed to Pillow, mapped to its format names
PILLOW_FORMATS = {
    ".png": "PNG",
    ".bmp": "BMP",
    ".tif": "TIFF",
    ".tiff": "TIFF",
}


def image_to_uint8(image: npt.ArrayLike) -> npt.NDArray[np.uint8]:
    """Convert a linear float image to 8-bit channels.

    Values are clamped to [0, 1], scaled by 255 and rounded half up.

    Args:
        image: Float array of shape (H, W, 3).

    Returns:
        Array of the same shape with dtype uint8.
    """
    arr = np.asarray(image, dtype=np.float64)
    scaled = np.floor(np.clip(arr, 0.0, 1.0) * PPM_MAX_COLOR_VALUE + 0.5)
    return scaled.astype(np.uint8)


def _wrap_values(values: list[str]) -> list[str]:
    lines: list[str] = []
    current = ""
    for value in values:
        if not current:
            current = value
        elif len(current) + 1 + len(value) > PPM_MAX_LINE_LENGTH:
            lines.append(current)
            current = value
        else:
            current = f"{current} {value}"
    if current:
        lines.append(current)
    return lines


def canvas_to_ppm(canvas: Canvas) -> str:
    """Encode a canvas as plain-text PPM (P3).

    Each canvas row starts on a new line and no line exceeds 70 characters.
    The output ends with a newline.
    """
    pixels = image_to_uint8(canvas.to_numpy())
    lines = ["P3", f"{canvas.width} {canvas.height}", str(PPM_MAX_COLOR_VALUE)]
    for row in pixels:
        lines.extend(_wrap_values([str(int(v)) for v in row.reshape(-1)]))
    return "\n".join(lines) + "\n"


def save_ppm(canvas: Canvas, filepath: str | Path) -> Path:
    """Write a canvas to a plain PPM file.

    Returns:
        The path written.
    """
    path = Path(filepath)
    path.write_text(canvas_to_ppm(canvas), encoding="ascii")
    logger.info("Saved %dx%d PPM to %s", canvas.width, canvas.height, path)
    return path


def save_image(canvas: Canvas, filepath: str | Path) -> Path:
    """Save a canvas, choosing the encoder from the file extension.

    ``.ppm`` is written as plain-text PPM; the extensions in
    ``PILLOW_FORMATS`` go through Pillow as 8-bit RGB.

    Returns:
        The path written.

    Raises:
        ValueError: If the extension is not supported.
    """
    path = Path(filepath)
    suffix = path.suffix.lower()
    if suffix == ".ppm":
        return save_ppm(canvas, path)
    if suffix not in PILLOW_FORMATS:
        raise ValueError(
            f"Unsupported image extension '{path.suffix}'. "
            f"Expected one of: .ppm, {', '.join(sorted(PILLOW_FORMATS))}"
        )

    image_uint8 = image_to_uint8(canvas.to_numpy())
    pil_image = PILImage.fromarray(image_uint8)
    pil_image.save(path, format=PILLOW_FORMATS[suffix])
    logger.info("Saved %dx%d %s to %s", canvas.width, canvas.height, PILLOW_FORMATS[suffix], path)
    return path
