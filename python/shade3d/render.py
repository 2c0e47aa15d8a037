# python/shade3d/render.py
# Material-sphere preview built on the batched shading kernel.
# Exists to give the CLI and tests a whole-image view of a material under a light list.
# RELEVANT FILES:python/shade3d/shading.py,python/shade3d/__main__.py,tests/test_render.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple, Union

import numpy as np

from . import _validate
from .lighting import LightList
from .pbr import PbrMaterial
from .shading import shade
from .surface import SurfaceSample
from .tonemap import to_uint8

logger = logging.getLogger(__name__)


def sphere_samples(width: int, height: int) -> Tuple[np.ndarray, np.ndarray]:
    """Unit-sphere hits for an orthographic view down -Z.

    Returns ``(mask, normals)`` where ``mask`` is (H, W) bool and ``normals`` is
    (K, 3) for the K covered pixels in row-major order. On a unit sphere centred
    at the origin the hit position equals the normal.
    """
    w, h = _validate.size_wh(width, height)
    extent = min(w, h)
    xs = (np.arange(w, dtype=np.float32) + 0.5 - 0.5 * w) / (0.5 * extent)
    ys = (0.5 * h - np.arange(h, dtype=np.float32) - 0.5) / (0.5 * extent)
    x, y = np.meshgrid(xs, ys)
    rr = x * x + y * y
    mask = rr < 1.0
    z = np.sqrt(np.maximum(0.0, 1.0 - rr))
    normals = np.stack([x[mask], y[mask], z[mask]], axis=-1).astype(np.float32)
    return mask, normals


def render_material_sphere(
    material: PbrMaterial,
    lights: LightList,
    width: int = 256,
    height: int = 256,
    camera_position: Tuple[float, float, float] = (0.0, 0.0, 5.0),
) -> np.ndarray:
    """Shade a unit sphere with ``material`` and return (H, W, 4) uint8 RGBA.

    Uncovered pixels are transparent black.
    """
    mask, normals = sphere_samples(width, height)
    img = np.zeros(mask.shape + (4,), dtype=np.uint8)
    if normals.shape[0] == 0:
        return img
    surface = SurfaceSample.from_material(material, normals, normals, camera_position)
    img[mask] = to_uint8(shade(surface, lights))
    return img


def numpy_to_png(path: Union[str, Path], array: np.ndarray) -> None:
    """Write an (H, W, 3|4) uint8 array to PNG."""
    from PIL import Image

    path_str = _validate.png_path(path)
    if not isinstance(array, np.ndarray) or array.ndim != 3 or array.shape[2] not in (3, 4):
        raise ValueError("array must be numpy array with shape (H,W,3|4)")
    if array.dtype != np.uint8:
        raise ValueError("unsupported array; expected uint8 (H,W,3) or (H,W,4)")

    img = Image.fromarray(np.ascontiguousarray(array))
    img.save(path_str, format="PNG", optimize=False, compress_level=6)
    logger.info(f"Saved preview: {path_str} ({array.shape[1]}x{array.shape[0]})")


def png_to_numpy(path: Union[str, Path]) -> np.ndarray:
    """Load PNG file as (H, W, 4) uint8 RGBA."""
    from PIL import Image

    with Image.open(str(path)) as img:
        return np.array(img.convert("RGBA"), dtype=np.uint8)


__all__ = ["sphere_samples", "render_material_sphere", "numpy_to_png", "png_to_numpy"]
