# python/shade3d/surface.py
# Per-invocation surface record consumed by the shading kernel.
# Exists to hold the already-transformed inputs produced upstream of shading.
# RELEVANT FILES:python/shade3d/shading.py,python/shade3d/pbr.py,tests/test_surface.py
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from . import _validate
from .pbr import PbrMaterial


def _frozen(arr: np.ndarray) -> np.ndarray:
    out = np.array(arr, dtype=np.float32, copy=True)
    out.flags.writeable = False
    return out


def normalize(v: np.ndarray) -> np.ndarray:
    """Normalize along the trailing axis. Zero vectors become NaN."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return v / np.linalg.norm(v, axis=-1, keepdims=True)


@dataclass(frozen=True)
class SurfaceSample:
    """World-space shading inputs for one invocation or a batch of them.

    Vectors carry a trailing axis of 3 and may share any broadcastable leading
    shape; ``metallic`` and ``roughness`` broadcast against those leading axes.
    ``roughness`` is perceptual and is squared by the kernel before use.
    """

    position: np.ndarray
    normal: np.ndarray
    view_direction: np.ndarray
    base_color: np.ndarray
    metallic: np.ndarray
    roughness: np.ndarray

    def __post_init__(self):
        position = _validate.vec3_array("position", self.position)
        normal = _validate.vec3_array("normal", self.normal)
        view = _validate.vec3_array("view_direction", self.view_direction)
        base_color = _validate.unit_interval("base_color", _validate.vec3_array("base_color", self.base_color))
        metallic = _validate.unit_interval("metallic", self.metallic)
        roughness = _validate.unit_interval("roughness", self.roughness)
        # Stored arrays are private read-only copies.
        object.__setattr__(self, "position", _frozen(position))
        object.__setattr__(self, "normal", _frozen(normalize(normal)))
        object.__setattr__(self, "view_direction", _frozen(normalize(view)))
        object.__setattr__(self, "base_color", _frozen(base_color))
        object.__setattr__(self, "metallic", _frozen(metallic))
        object.__setattr__(self, "roughness", _frozen(roughness))

    @classmethod
    def from_camera(cls, position, normal, camera_position, base_color=(1.0, 1.0, 1.0),
                    metallic=0.0, roughness=0.5) -> "SurfaceSample":
        """Build a sample, deriving the view direction from the camera position."""
        position = _validate.vec3_array("position", position)
        camera = _validate.vec3_array("camera_position", camera_position)
        return cls(
            position=position,
            normal=normal,
            view_direction=normalize(camera - position),
            base_color=base_color,
            metallic=metallic,
            roughness=roughness,
        )

    @classmethod
    def from_material(cls, material: PbrMaterial, position, normal, camera_position) -> "SurfaceSample":
        return cls.from_camera(
            position,
            normal,
            camera_position,
            base_color=material.base_color,
            metallic=material.metallic,
            roughness=material.roughness,
        )

    @property
    def alpha(self) -> np.ndarray:
        """Squared roughness as consumed by the distribution and visibility terms."""
        return self.roughness * self.roughness
