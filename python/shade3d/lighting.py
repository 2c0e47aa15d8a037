# python/shade3d/lighting.py
# Light model, light list factories and the packed light-buffer codec.
# Exists to turn static scene literals or a shared float buffer into an ordered light list.
# RELEVANT FILES:python/shade3d/shading.py,python/shade3d/config.py,python/shade3d/presets.py,tests/test_light_list.py
"""Directional and point lights plus the std430 light-buffer layout.

Buffer layout (float32, std430):

    [num_directional, num_point, 0, 0,
     dir_1.direction.xyz, 0, dir_1.irradiance.rgb, 0, ...,
     pt_1.position.xyz, 0, pt_1.luminous_flux.rgb, 0, ...]

Counts are stored as floats and truncated on read.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, List, Sequence, Tuple, Union

import numpy as np

from . import _validate

logger = logging.getLogger(__name__)

Vec3 = Tuple[float, float, float]

_HEADER_FLOATS = 4
_ENTRY_FLOATS = 4


class LightType(Enum):
    """Light type tag."""
    DIRECTIONAL = 0
    POINT = 1


def _unit_direction(value) -> Vec3:
    arr = _validate.vec3_array("direction", value)
    if arr.shape != (3,):
        raise ValueError(f"direction must be a single 3-vector; got shape {arr.shape}")
    length = float(np.linalg.norm(arr))
    if not np.isfinite(length) or length == 0.0:
        raise ValueError("direction must be a finite, non-zero vector")
    arr = arr / length
    return (float(arr[0]), float(arr[1]), float(arr[2]))


def _point(value) -> Vec3:
    arr = _validate.vec3_array("position", value)
    if arr.shape != (3,):
        raise ValueError(f"position must be a single 3-vector; got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise ValueError("position must be finite")
    return (float(arr[0]), float(arr[1]), float(arr[2]))


@dataclass(frozen=True)
class DirectionalLight:
    """Light at infinity; ``direction`` points from the surface toward the light."""
    direction: Vec3
    irradiance: Vec3
    type: LightType = field(default=LightType.DIRECTIONAL, init=False)

    def __post_init__(self):
        object.__setattr__(self, "direction", _unit_direction(self.direction))
        object.__setattr__(self, "irradiance", _validate.non_negative_color("irradiance", self.irradiance))


@dataclass(frozen=True)
class PointLight:
    """Isotropic emitter; irradiance at a surface follows the inverse-square law."""
    position: Vec3
    luminous_flux: Vec3
    type: LightType = field(default=LightType.POINT, init=False)

    def __post_init__(self):
        object.__setattr__(self, "position", _point(self.position))
        object.__setattr__(self, "luminous_flux", _validate.non_negative_color("luminous_flux", self.luminous_flux))


Light = Union[DirectionalLight, PointLight]


class LightList:
    """Immutable, ordered light sequence: directional entries, then point entries.

    Lights are partitioned by their type tag once, at construction, so the
    accumulator walks two homogeneous tuples instead of querying types per light.
    """

    __slots__ = ("_directional", "_point")

    def __init__(self, lights: Iterable[Light] = ()):
        directional: List[DirectionalLight] = []
        point: List[PointLight] = []
        for index, light in enumerate(lights):
            kind = getattr(light, "type", None)
            if kind is LightType.DIRECTIONAL:
                directional.append(light)
            elif kind is LightType.POINT:
                point.append(light)
            else:
                raise TypeError(f"lights[{index}] must be a DirectionalLight or PointLight, got {type(light).__name__}")
        self._directional: Tuple[DirectionalLight, ...] = tuple(directional)
        self._point: Tuple[PointLight, ...] = tuple(point)

    @classmethod
    def static(cls, *lights: Light) -> "LightList":
        """Build a fixed list from light literals (small or demo scenes)."""
        return cls(lights)

    @classmethod
    def from_buffer(cls, num_directional, num_point, entries) -> "LightList":
        """Decode ``num_directional`` directional then ``num_point`` point lights.

        Args:
            num_directional: Header count, may be stored as a float.
            num_point: Header count, may be stored as a float.
            entries: Array of shape (K, 3), or vec4-padded (K, 4), where K must
                equal ``2 * (num_directional + num_point)``.

        Raises:
            ValueError: Negative counts or a length mismatch.
        """
        n_dir = _validate.light_count("num_directional", num_directional)
        n_pt = _validate.light_count("num_point", num_point)
        arr = np.asarray(entries, dtype=np.float32)
        if arr.size == 0:
            arr = arr.reshape(0, 3)
        if arr.ndim != 2 or arr.shape[1] not in (3, 4):
            raise ValueError(f"light entries must have shape (K, 3) or (K, 4); got {arr.shape}")
        expected = 2 * (n_dir + n_pt)
        if arr.shape[0] != expected:
            raise ValueError(
                f"light buffer holds {arr.shape[0]} entries; expected {expected} "
                f"for {n_dir} directional and {n_pt} point lights"
            )
        xyz = arr[:, :3]
        lights: List[Light] = []
        for i in range(n_dir):
            lights.append(DirectionalLight(direction=xyz[2 * i], irradiance=xyz[2 * i + 1]))
        base = 2 * n_dir
        for i in range(n_pt):
            lights.append(PointLight(position=xyz[base + 2 * i], luminous_flux=xyz[base + 2 * i + 1]))
        logger.debug(f"Decoded light buffer: {n_dir} directional, {n_pt} point")
        return cls(lights)

    @classmethod
    def from_packed(cls, data) -> "LightList":
        """Decode the flat std430 float stream produced by :meth:`LightManager.pack`."""
        flat = np.asarray(data, dtype=np.float32).reshape(-1)
        if flat.size < _HEADER_FLOATS:
            raise ValueError(f"packed light buffer needs a {_HEADER_FLOATS}-float header; got {flat.size} floats")
        body = flat[_HEADER_FLOATS:]
        if body.size % _ENTRY_FLOATS != 0:
            raise ValueError(f"packed light entries must be vec4-aligned; got {body.size} floats")
        return cls.from_buffer(flat[0], flat[1], body.reshape(-1, _ENTRY_FLOATS))

    @property
    def directional(self) -> Tuple[DirectionalLight, ...]:
        return self._directional

    @property
    def point(self) -> Tuple[PointLight, ...]:
        return self._point

    @property
    def num_directional(self) -> int:
        return len(self._directional)

    @property
    def num_point(self) -> int:
        return len(self._point)

    def __iter__(self) -> Iterator[Light]:
        yield from self._directional
        yield from self._point

    def __len__(self) -> int:
        return len(self._directional) + len(self._point)

    def __getitem__(self, index: int) -> Light:
        return tuple(self)[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, LightList):
            return NotImplemented
        return self._directional == other._directional and self._point == other._point

    def __repr__(self) -> str:
        return f"LightList(directional={self.num_directional}, point={self.num_point})"

    def entries(self) -> np.ndarray:
        """Flat (2 * len(self), 3) entry array in buffer order."""
        rows: List[Sequence[float]] = []
        for dl in self._directional:
            rows.extend((dl.direction, dl.irradiance))
        for pl in self._point:
            rows.extend((pl.position, pl.luminous_flux))
        return np.asarray(rows, dtype=np.float32).reshape(-1, 3)


class LightManager:
    """Host-side light collection that fills the shared light buffer.

    The buffer must be fully packed before a frame's invocations read it.
    """

    def __init__(self):
        self.directional_lights: List[DirectionalLight] = []
        self.point_lights: List[PointLight] = []

    def add_light(self, light: Light) -> None:
        kind = getattr(light, "type", None)
        if kind is LightType.DIRECTIONAL:
            self.directional_lights.append(light)
        elif kind is LightType.POINT:
            self.point_lights.append(light)
        else:
            raise TypeError(f"expected DirectionalLight or PointLight, got {type(light).__name__}")

    def clear(self) -> None:
        self.directional_lights.clear()
        self.point_lights.clear()

    def pack(self) -> np.ndarray:
        """Pack into the std430 float32 layout described in the module docstring."""
        data: List[float] = [float(len(self.directional_lights)), float(len(self.point_lights)), 0.0, 0.0]
        for dl in self.directional_lights:
            data.extend((*dl.direction, 0.0, *dl.irradiance, 0.0))
        for pl in self.point_lights:
            data.extend((*pl.position, 0.0, *pl.luminous_flux, 0.0))
        return np.asarray(data, dtype=np.float32)

    def light_list(self) -> LightList:
        return LightList([*self.directional_lights, *self.point_lights])


__all__ = [
    "LightType",
    "DirectionalLight",
    "PointLight",
    "Light",
    "LightList",
    "LightManager",
]
