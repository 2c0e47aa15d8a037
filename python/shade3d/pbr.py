#!/usr/bin/env python3
# python/shade3d/pbr.py
# Cook-Torrance microfacet BRDF terms and the per-light radiance evaluator.
# Exists to keep the metallic/roughness shading math in one numpy-friendly place.
# RELEVANT FILES:python/shade3d/shading.py,python/shade3d/surface.py,tests/test_pbr_terms.py
"""GGX distribution, single-term visibility, Schlick Fresnel and the diffuse/specular split.

Every function broadcasts over leading axes: vectors carry a trailing axis of 3,
scalar parameters (metallic, squared roughness) a trailing axis of 1.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

import numpy as np

_PI = 3.14159265358979323846

# Reflectance at normal incidence for dielectrics.
_DIELECTRIC_F0 = 0.03

# Floor on the visibility denominator at grazing angles.
_VISIBILITY_FLOOR = 0.01

Color3 = Tuple[float, float, float]


def _as_float_array(data) -> np.ndarray:
    return np.asarray(data, dtype=np.float32)


def _dot(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return np.sum(a * b, axis=-1, keepdims=True)


def _normalize(v: np.ndarray) -> np.ndarray:
    return v / np.linalg.norm(v, axis=-1, keepdims=True)


def _mix(a, b, t):
    return a * (1.0 - t) + b * t


def _as_scalar_channel(value) -> np.ndarray:
    """Give a per-invocation scalar a trailing axis so it broadcasts against RGB."""
    return _as_float_array(value)[..., np.newaxis]


def distribution_ggx(n, h, r) -> np.ndarray:
    """GGX / Trowbridge-Reitz normal distribution.

    ``r`` is the squared roughness. Back-facing microfacets (``dot(h, n) <= 0``)
    contribute exactly zero.
    """
    n = _as_float_array(n)
    h = _as_float_array(h)
    r = _as_float_array(r)
    n_dot_h = _dot(h, n)
    with np.errstate(divide="ignore", invalid="ignore"):
        denom = 1.0 + n_dot_h * n_dot_h * (r - 1.0)
        d = r / (_PI * denom * denom)
        return np.where(n_dot_h <= 0.0, np.float32(0.0), d).astype(np.float32)


def visibility(l, n, v, r) -> np.ndarray:
    """Approximate single-factor geometry/visibility term.

    Cosines are taken as absolute values and the denominator is floored at 0.01.
    """
    l = _as_float_array(l)
    n = _as_float_array(n)
    v = _as_float_array(v)
    r = _as_float_array(r)
    n_dot_l = np.abs(_dot(n, l))
    n_dot_v = np.abs(_dot(n, v))
    denom = _mix(2.0 * n_dot_l * n_dot_v, n_dot_l + n_dot_v, r)
    return (0.5 / np.maximum(_VISIBILITY_FLOOR, denom)).astype(np.float32)


def fresnel_schlick(cos_theta, f0) -> np.ndarray:
    """Schlick's power-5 Fresnel approximation."""
    cos_theta = _as_float_array(cos_theta)
    f0 = _as_float_array(f0)
    return f0 + (1.0 - f0) * np.power(1.0 - cos_theta, 5)


def base_reflectance(base_color, metallic) -> np.ndarray:
    """F0: the dielectric 0.03 blended toward the base color as metalness rises."""
    base_color = _as_float_array(base_color)
    m = _as_float_array(metallic)
    return _mix(np.full(3, _DIELECTRIC_F0, dtype=np.float32), base_color, m)


def evaluate_radiance(irradiance, l, n, v, base_color, metallic, r) -> np.ndarray:
    """Outgoing radiance toward ``v`` from one light arriving along ``l``.

    Args:
        irradiance: Incident irradiance E (RGB).
        l: Unit direction from the surface toward the light.
        n: Unit surface normal.
        v: Unit direction from the surface toward the camera.
        base_color: Linear RGB base color.
        metallic: Metalness, trailing axis of 1.
        r: Squared roughness, trailing axis of 1.

    Returns:
        Lambertian diffuse (scaled by the refracted, non-metallic energy) plus the
        specular lobe built from distribution, visibility and Fresnel. No clamp is
        applied to the result.
    """
    irradiance = _as_float_array(irradiance)
    l = _as_float_array(l)
    n = _as_float_array(n)
    v = _as_float_array(v)
    c = _as_float_array(base_color)
    m = _as_float_array(metallic)
    r = _as_float_array(r)

    n_dot_l = np.maximum(_dot(n, l), 0.0)
    irradiance_on_surface = irradiance * n_dot_l

    f0 = base_reflectance(c, m)
    reflected = fresnel_schlick(n_dot_l, f0) * irradiance_on_surface

    refracted = irradiance_on_surface - reflected
    refracted_diffuse = refracted * (1.0 - m)

    with np.errstate(divide="ignore", invalid="ignore"):
        h = _normalize(v + l)
    n_dot_h = np.maximum(_dot(n, h), 0.0)
    f = fresnel_schlick(n_dot_h, f0)

    with np.errstate(invalid="ignore", over="ignore"):
        specular = reflected * f * visibility(l, n, v, r) * distribution_ggx(n, h, r)
        # A light at or below the horizon adds no specular, even where h is undefined.
        specular = np.where(n_dot_l > 0.0, specular, np.float32(0.0))
        out = refracted_diffuse * c / _PI + specular
    return out.astype(np.float32)


# PBR material record

@dataclass(frozen=True)
class PbrMaterial:
    """Metallic/roughness material constants shared by every invocation."""

    base_color: Color3 = (1.0, 1.0, 1.0)
    metallic: float = 0.0
    roughness: float = 0.5

    def serialize(self) -> Dict[str, Any]:
        return {
            "base_color": list(self.base_color),
            "metallic": self.metallic,
            "roughness": self.roughness,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PbrMaterial":
        base_color = data.get("base_color", (1.0, 1.0, 1.0))
        return cls(
            base_color=tuple(float(c) for c in base_color),
            metallic=float(data.get("metallic", 0.0)),
            roughness=float(data.get("roughness", 0.5)),
        )


def validate_pbr_material(material: PbrMaterial) -> Dict[str, Any]:
    """Validate PBR material parameters and return detailed results."""
    errors = []

    if not isinstance(material, PbrMaterial):
        errors.append("Invalid material type")
        return {"valid": False, "errors": errors, "statistics": {}}

    if not (isinstance(material.base_color, (tuple, list)) and len(material.base_color) == 3):
        errors.append("base_color must be length-3 tuple/list")
    else:
        for c in material.base_color:
            if not (0.0 <= float(c) <= 1.0):
                errors.append("base_color components must be in [0,1]")
                break

    if not (0.0 <= float(material.metallic) <= 1.0):
        errors.append("metallic out of range [0,1]")
    if not (0.0 <= float(material.roughness) <= 1.0):
        errors.append("roughness out of range [0,1]")

    stats = {
        "is_metallic": float(material.metallic) > 0.5,
        "is_dielectric": float(material.metallic) < 0.5,
        "is_rough": float(material.roughness) > 0.5,
        "is_smooth": float(material.roughness) <= 0.5,
    }

    return {
        "valid": len(errors) == 0,
        "errors": errors,
        "statistics": stats,
    }


def create_test_materials() -> Dict[str, PbrMaterial]:
    """Create standard test materials."""
    return {
        "white": PbrMaterial(base_color=(1.0, 1.0, 1.0), metallic=0.0, roughness=1.0),
        "black": PbrMaterial(base_color=(0.0, 0.0, 0.0), metallic=0.0, roughness=1.0),
        "metal": PbrMaterial(base_color=(0.7, 0.7, 0.7), metallic=1.0, roughness=0.1),
        "dielectric": PbrMaterial(base_color=(0.8, 0.2, 0.2), metallic=0.0, roughness=0.3),
        "rough_plastic": PbrMaterial(base_color=(0.2, 0.8, 0.2), metallic=0.0, roughness=0.9),
        "smooth_metal": PbrMaterial(base_color=(0.9, 0.9, 0.9), metallic=1.0, roughness=0.05),
    }
