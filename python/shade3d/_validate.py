# python/shade3d/_validate.py
# Shared input validation for surface samples, lights and preview targets.
# Exists so every caller rejects bad frames before the shading kernel runs.
# RELEVANT FILES:python/shade3d/surface.py,python/shade3d/lighting.py,python/shade3d/render.py
from __future__ import annotations

from pathlib import Path
from typing import Tuple

import numpy as np

_MAX_DIM = 8192  # conservative guardrail for preview targets


def _as_int(name: str, v) -> int:
    try:
        i = int(v)
    except Exception as e:
        raise ValueError(f"{name} must be an integer, got {type(v).__name__}") from e
    return i


def size_wh(width, height) -> Tuple[int, int]:
    w = _as_int("width", width)
    h = _as_int("height", height)
    if w <= 0 or h <= 0:
        raise ValueError("width and height must be > 0")
    if w > _MAX_DIM or h > _MAX_DIM:
        raise ValueError(f"width/height must be <= {_MAX_DIM}")
    return w, h


def png_path(p: str | Path) -> str:
    s = str(p)
    if not s.lower().endswith(".png"):
        raise ValueError("path must end with .png")
    parent = Path(s).resolve().parent
    if not parent.exists():
        raise ValueError(f"directory does not exist: {parent}")
    return s


def vec3_array(name: str, value) -> np.ndarray:
    """Coerce ``value`` to a float32 array with a trailing axis of 3."""
    try:
        arr = np.asarray(value, dtype=np.float32)
    except (TypeError, ValueError) as e:
        raise TypeError(f"{name} must be numeric, got {type(value).__name__}") from e
    if arr.ndim == 0 or arr.shape[-1] != 3:
        raise ValueError(f"{name} must have shape (..., 3); got {arr.shape}")
    return arr


def unit_interval(name: str, value) -> np.ndarray:
    """Coerce ``value`` to float32 and require every element to lie in [0, 1]."""
    arr = np.asarray(value, dtype=np.float32)
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"{name} must be finite")
    if np.any(arr < 0.0) or np.any(arr > 1.0):
        raise ValueError(f"{name} out of range [0,1]")
    return arr


def non_negative_color(name: str, value) -> Tuple[float, float, float]:
    arr = vec3_array(name, value)
    if arr.shape != (3,):
        raise ValueError(f"{name} must be a single RGB triple; got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"{name} must be finite")
    if np.any(arr < 0.0):
        raise ValueError(f"{name} components must be non-negative")
    return (float(arr[0]), float(arr[1]), float(arr[2]))


def light_count(name: str, value) -> int:
    """Truncate a header count stored as a float, rejecting negatives."""
    try:
        f = float(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} must be numeric, got {type(value).__name__}") from e
    if not np.isfinite(f):
        raise ValueError(f"{name} must be finite, got {f}")
    if f < 0.0:
        raise ValueError(f"{name} must be non-negative, got {f}")
    return int(f)
