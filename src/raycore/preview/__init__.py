"""Preview module for pixel buffers and image output.

Components:
    canvas: Bounds-checked RGB pixel buffer backed by NumPy
    export: PPM encoding and Pillow-based raster export
"""

from .canvas import Canvas
from .export import canvas_to_ppm, image_to_uint8, save_image, save_ppm

__all__ = [
    "Canvas",
    "canvas_to_ppm",
    "image_to_uint8",
    "save_image",
    "save_ppm",
]
