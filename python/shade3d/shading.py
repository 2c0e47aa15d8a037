# python/shade3d/shading.py
# Multi-light radiance accumulation and the end-to-end shade entry point.
# Exists to sum per-light BRDF contributions for a batch of surface samples.
# RELEVANT FILES:python/shade3d/pbr.py,python/shade3d/lighting.py,python/shade3d/tonemap.py,tests/test_shading.py

from __future__ import annotations

import numpy as np

from .lighting import LightList
from .pbr import _as_scalar_channel, evaluate_radiance
from .surface import SurfaceSample, normalize
from .tonemap import tonemap_reinhard

_PI = 3.14159265358979323846


def point_light_irradiance(luminous_flux, light_position, surface_position) -> np.ndarray:
    """Irradiance at ``surface_position`` from an isotropic point source.

    A light coincident with the surface yields inf/NaN, which is left to propagate.
    """
    flux = np.asarray(luminous_flux, dtype=np.float32)
    offset = np.asarray(surface_position, dtype=np.float32) - np.asarray(light_position, dtype=np.float32)
    d2 = np.sum(offset * offset, axis=-1, keepdims=True)
    with np.errstate(divide="ignore", invalid="ignore"):
        return flux / (4.0 * _PI * d2)


def accumulate_radiance(surface: SurfaceSample, lights: LightList) -> np.ndarray:
    """Total outgoing radiance (unbounded RGB) from every light in ``lights``.

    ``lights`` is read-only for the call; the result has the broadcast shape of
    the surface fields with a trailing axis of 3.
    """
    n = surface.normal
    v = surface.view_direction
    c = surface.base_color
    m = _as_scalar_channel(surface.metallic)
    r = _as_scalar_channel(surface.alpha)
    shape = np.broadcast_shapes(surface.position.shape, n.shape, v.shape, c.shape, m.shape, r.shape)
    total = np.zeros(shape, dtype=np.float32)

    for dl in lights.directional:
        direction = np.asarray(dl.direction, dtype=np.float32)
        total = total + evaluate_radiance(dl.irradiance, direction, n, v, c, m, r)

    for pl in lights.point:
        position = np.asarray(pl.position, dtype=np.float32)
        l = normalize(position - surface.position)
        irradiance = point_light_irradiance(pl.luminous_flux, position, surface.position)
        total = total + evaluate_radiance(irradiance, l, n, v, c, m, r)

    return total


def shade(surface: SurfaceSample, lights: LightList) -> np.ndarray:
    """Accumulate radiance and tone map it to display RGBA (alpha = 1)."""
    return tonemap_reinhard(accumulate_radiance(surface, lights))


__all__ = ["point_light_irradiance", "accumulate_radiance", "shade"]
