"""
Reinhard tone mapping from unbounded linear radiance to display RGBA.

Inputs are numpy-friendly RGB data of shape (..., 3); outputs gain an alpha
channel fixed at 1.0. Values are not clipped: NaN input stays NaN.
"""

from __future__ import annotations

import numpy as np
from typing import Iterable


def _as_float_array(color: np.ndarray | Iterable[float]) -> np.ndarray:
    arr = np.asarray(color, dtype=np.float32)
    if arr.ndim == 0 or arr.shape[-1] != 3:
        raise ValueError(f"Expected RGB data with shape (..., 3); got {arr.shape}")
    return arr


def reinhard(color: np.ndarray | Iterable[float]) -> np.ndarray:
    """Per-channel ``L / (1 + L)`` on RGB data."""
    arr = _as_float_array(color)
    with np.errstate(invalid="ignore"):
        return arr / (1.0 + arr)


def with_alpha(rgb: np.ndarray, alpha: float = 1.0) -> np.ndarray:
    rgb = _as_float_array(rgb)
    a = np.full(rgb.shape[:-1] + (1,), alpha, dtype=np.float32)
    return np.concatenate([rgb, a], axis=-1)


def tonemap_reinhard(color: np.ndarray | Iterable[float]) -> np.ndarray:
    """Reinhard tone map to RGBA with alpha fixed at 1.0."""
    return with_alpha(reinhard(color))


def to_uint8(rgba: np.ndarray) -> np.ndarray:
    """Quantize display RGBA in [0, 1] to uint8; NaN channels become 0."""
    arr = np.nan_to_num(np.asarray(rgba, dtype=np.float32), nan=0.0)
    return (np.clip(arr, 0.0, 1.0) * 255.0 + 0.5).astype(np.uint8)


__all__ = [
    "reinhard",
    "with_alpha",
    "tonemap_reinhard",
    "to_uint8",
]
