#!/usr/bin/env python3
"""Render the silhouette of a sphere onto a wall.

This script casts one ray per pixel from an eye point through a unit sphere
toward a wall behind it, painting every pixel whose ray hits the sphere. The
sphere can be scaled, rotated and sheared to check that object-space
intersection handles arbitrary affine transforms.

Usage:
    python -m examples.render_circle [options]

Options:
    --size SIZE         Canvas width and height in pixels (default: 400)
    --scale X Y Z       Sphere scale factors (default: 1 1 1)
    --rotate-z RADIANS  Rotation about the z axis, applied after scaling
    --shear-xy AMOUNT   Shear x in proportion to y, applied last
    --output OUTPUT     Output file path, .png or .ppm (default: circle.png)
    --log-level LEVEL   Logging level (default: INFO)

Example:
    python -m examples.render_circle --size 200 --scale 1 0.5 1 --rotate-z 0.5
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

import taichi as ti

logger = logging.getLogger("render_circle")


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the silhouette of a transformed sphere.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--size",
        type=int,
        default=400,
        help="Canvas width and height in pixels (default: 400)",
    )
    parser.add_argument(
        "--scale",
        type=float,
        nargs=3,
        default=(1.0, 1.0, 1.0),
        metavar=("X", "Y", "Z"),
        help="Sphere scale factors (default: 1 1 1)",
    )
    parser.add_argument(
        "--rotate-z",
        type=float,
        default=0.0,
        help="Rotation about the z axis in radians (default: 0)",
    )
    parser.add_argument(
        "--shear-xy",
        type=float,
        default=0.0,
        help="Shear x in proportion to y (default: 0)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="circle.png",
        help="Output file path (default: circle.png)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    return parser.parse_args()


def render_circle(
    size: int = 400,
    scale: tuple[float, float, float] = (1.0, 1.0, 1.0),
    rotate_z: float = 0.0,
    shear_xy: float = 0.0,
    output_path: str = "circle.png",
) -> Path:
    """Render the sphere silhouette and save it.

    Args:
        size: Canvas width and height in pixels.
        scale: Sphere scale factors along x, y and z.
        rotate_z: Rotation about z in radians, applied after scaling.
        shear_xy: Shear of x in proportion to y, applied last.
        output_path: Output file path (.png or .ppm).

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from raycore.core.color import Color
    from raycore.core.integrator import WallProjection, render_silhouette
    from raycore.core.transform import AffineTransform
    from raycore.materials.material import Material
    from raycore.preview.canvas import Canvas
    from raycore.preview.export import save_image
    from raycore.scene.world import Scene

    transform = (
        AffineTransform.scaling(*scale)
        .then(AffineTransform.rotation_z(rotate_z))
        .then(AffineTransform.shearing(shear_xy, 0.0, 0.0, 0.0, 0.0, 0.0))
    )

    scene = Scene()
    scene.add_sphere(transform, Material(color=Color.red_color()))
    canvas = Canvas(size, size, Color(0.2, 0.2, 0.2))

    start_time = time.time()
    hits = render_silhouette(scene, canvas, WallProjection())
    logger.info(
        "Cast %d rays in %.2fs (%d hits)",
        len(hits),
        time.time() - start_time,
        int(hits.hit_mask.sum()),
    )

    return save_image(canvas, output_path)


def main() -> int:
    """Main entry point."""
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Use GPU if available, fall back to CPU
    try:
        ti.init(arch=ti.gpu)
        logger.info("Using GPU backend")
    except Exception:
        ti.init(arch=ti.cpu)
        logger.info("Using CPU backend")

    try:
        output = render_circle(
            size=args.size,
            scale=tuple(args.scale),
            rotate_z=args.rotate_z,
            shear_xy=args.shear_xy,
            output_path=args.output,
        )
    except (ValueError, OSError) as e:
        logger.error("Render failed: %s", e)
        return 1

    logger.info("Saved to: %s", output.absolute())
    return 0


if __name__ == "__main__":
    sys.exit(main())
