# python/shade3d/config.py
# Scene configuration parsing for lights, material and camera.
# Exists to choose between the static and buffer light-list paths from plain data.
# RELEVANT FILES: python/shade3d/presets.py, python/shade3d/lighting.py, python/shade3d/__main__.py, tests/test_config.py
from __future__ import annotations

import copy
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Sequence, Union, Optional, Tuple, Dict, List

import numpy as np

from .lighting import DirectionalLight, Light, LightList, PointLight
from .pbr import PbrMaterial, validate_pbr_material

logger = logging.getLogger(__name__)

ConfigSource = Union["SceneConfig", Mapping[str, Any], str, Path, None]

_LIGHT_TYPES: Dict[str, str] = {
    "directional": "directional",
    "dir": "directional",
    "sun": "directional",
    "point": "point",
    "pointlight": "point",
}

_LIGHT_MODES: Dict[str, str] = {
    "static": "static",
    "literal": "static",
    "fixed": "static",
    "buffer": "buffer",
    "packed": "buffer",
    "dynamic": "buffer",
}


def _normalize_key(value: Any) -> str:
    return "".join(
        c
        for c in str(value).strip().lower()
        if c not in {"-", "_", " ", "."}
    )


def _normalize_choice(value: Any, mapping: Mapping[str, str], label: str) -> str:
    key = _normalize_key(value)
    if key not in mapping:
        raise ValueError(f"Unknown {label}: {value!r}")
    return mapping[key]


def _to_float3(value: Any, label: str) -> Tuple[float, float, float]:
    if value is None:
        raise ValueError(f"{label} requires three floats")
    if isinstance(value, (list, tuple)) and len(value) == 3:
        return (float(value[0]), float(value[1]), float(value[2]))
    raise ValueError(f"{label} must be a sequence of three numeric values")


def _maybe_float3(value: Any, label: str) -> Optional[Tuple[float, float, float]]:
    if value is None:
        return None
    return _to_float3(value, label)


@dataclass
class LightConfig:
    type: str = "directional"
    direction: Optional[Tuple[float, float, float]] = None
    irradiance: Tuple[float, float, float] = (1.0, 1.0, 1.0)
    position: Optional[Tuple[float, float, float]] = None
    luminous_flux: Tuple[float, float, float] = (100.0, 100.0, 100.0)

    def to_dict(self) -> dict:
        if self.type == "directional":
            return {
                "type": self.type,
                "direction": list(self.direction) if self.direction is not None else None,
                "irradiance": list(self.irradiance),
            }
        return {
            "type": self.type,
            "position": list(self.position) if self.position is not None else None,
            "luminous_flux": list(self.luminous_flux),
        }

    def validate(self, index: int) -> None:
        label = f"lights[{index}]"
        if self.type == "directional" and self.direction is None:
            raise ValueError(f"{label}.direction required for directional lights")
        if self.type == "point" and self.position is None:
            raise ValueError(f"{label}.position required for point lights")
        color = self.irradiance if self.type == "directional" else self.luminous_flux
        if any(c < 0.0 for c in color):
            name = "irradiance" if self.type == "directional" else "luminous_flux"
            raise ValueError(f"{label}.{name} components must be non-negative")

    def to_light(self) -> Light:
        if self.type == "directional":
            return DirectionalLight(direction=self.direction, irradiance=self.irradiance)
        return PointLight(position=self.position, luminous_flux=self.luminous_flux)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], default: Optional["LightConfig"] = None) -> "LightConfig":
        base = copy.deepcopy(default) if default is not None else cls()
        if "type" in data:
            base.type = _normalize_choice(data["type"], _LIGHT_TYPES, "light type")
        if "direction" in data:
            base.direction = _maybe_float3(data["direction"], "direction")
        if "irradiance" in data:
            base.irradiance = _to_float3(data["irradiance"], "irradiance")
        if "illuminance" in data and "irradiance" not in data:
            base.irradiance = _to_float3(data["illuminance"], "illuminance")
        if "position" in data:
            base.position = _maybe_float3(data["position"], "position")
        if "luminous_flux" in data:
            base.luminous_flux = _to_float3(data["luminous_flux"], "luminous_flux")
        if "flux" in data and "luminous_flux" not in data:
            base.luminous_flux = _to_float3(data["flux"], "flux")
        return base


@dataclass
class LightBufferConfig:
    """Light buffer contents: header counts plus (K, 3|4) entries."""
    num_directional: float = 0.0
    num_point: float = 0.0
    entries: List[List[float]] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "num_directional": self.num_directional,
            "num_point": self.num_point,
            "entries": [list(e) for e in self.entries],
        }

    def decode(self) -> LightList:
        return LightList.from_buffer(self.num_directional, self.num_point, np.asarray(self.entries, dtype=np.float32))

    @classmethod
    def from_packed(cls, data: Any) -> "LightBufferConfig":
        flat = np.asarray(data, dtype=np.float32).reshape(-1)
        if flat.size < 4 or (flat.size - 4) % 4 != 0:
            raise ValueError(f"packed light buffer must be a vec4 header plus vec4 entries; got {flat.size} floats")
        return cls(
            num_directional=float(flat[0]),
            num_point=float(flat[1]),
            entries=flat[4:].reshape(-1, 4).tolist(),
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "LightBufferConfig":
        if "packed" in data:
            return cls.from_packed(data["packed"])
        if "path" in data:
            return cls.from_packed(np.load(Path(data["path"])))
        entries = data.get("entries", [])
        if not isinstance(entries, Sequence) or isinstance(entries, (str, bytes)):
            raise TypeError("lighting.buffer.entries must be a sequence of 3- or 4-component rows")
        return cls(
            num_directional=float(data.get("num_directional", 0.0)),
            num_point=float(data.get("num_point", 0.0)),
            entries=[[float(c) for c in row] for row in entries],
        )


@dataclass
class LightingParams:
    mode: str = "static"
    lights: List[LightConfig] = field(default_factory=list)
    buffer: Optional[LightBufferConfig] = None

    def to_dict(self) -> dict:
        return {
            "mode": self.mode,
            "lights": [light.to_dict() for light in self.lights],
            "buffer": self.buffer.to_dict() if self.buffer is not None else None,
        }

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], default: Optional["LightingParams"] = None) -> "LightingParams":
        base = copy.deepcopy(default) if default is not None else cls()
        if "mode" in data:
            base.mode = _normalize_choice(data["mode"], _LIGHT_MODES, "light list mode")
        if "preset" in data and data["preset"] is not None:
            from . import presets

            preset_lighting = presets.get(str(data["preset"]))["lighting"]
            base = cls.from_mapping(preset_lighting, base)
        lights_value = data.get("lights", data.get("light"))
        if lights_value is not None:
            lights_list: List[LightConfig] = []
            items = lights_value if isinstance(lights_value, Sequence) and not isinstance(lights_value, (str, bytes)) else [lights_value]
            for item in items:
                if isinstance(item, Mapping):
                    lights_list.append(LightConfig.from_mapping(item))
                else:
                    raise TypeError("lighting.lights entries must be mappings")
            base.lights = lights_list
        if "buffer" in data:
            value = data["buffer"]
            if value is None:
                base.buffer = None
            elif isinstance(value, Mapping):
                base.buffer = LightBufferConfig.from_mapping(value)
            elif isinstance(value, (str, Path)):
                base.buffer = LightBufferConfig.from_mapping({"path": value})
            else:
                base.buffer = LightBufferConfig.from_packed(value)
            if "mode" not in data:
                base.mode = "buffer"
        return base


@dataclass
class MaterialParams:
    base_color: Tuple[float, float, float] = (1.0, 1.0, 1.0)
    metallic: float = 0.0
    roughness: float = 0.5

    def to_dict(self) -> dict:
        return {
            "base_color": list(self.base_color),
            "metallic": self.metallic,
            "roughness": self.roughness,
        }

    def to_material(self) -> PbrMaterial:
        return PbrMaterial(base_color=self.base_color, metallic=self.metallic, roughness=self.roughness)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], default: Optional["MaterialParams"] = None) -> "MaterialParams":
        base = copy.deepcopy(default) if default is not None else cls()
        if "base_color" in data:
            base.base_color = _to_float3(data["base_color"], "base_color")
        if "metallic" in data:
            base.metallic = float(data["metallic"])
        if "roughness" in data:
            base.roughness = float(data["roughness"])
        return base


@dataclass
class CameraParams:
    position: Tuple[float, float, float] = (0.0, 0.0, 5.0)

    def to_dict(self) -> dict:
        return {"position": list(self.position)}

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], default: Optional["CameraParams"] = None) -> "CameraParams":
        base = copy.deepcopy(default) if default is not None else cls()
        if "position" in data:
            base.position = _to_float3(data["position"], "camera.position")
        return base


@dataclass
class SceneConfig:
    lighting: LightingParams = field(default_factory=LightingParams)
    material: MaterialParams = field(default_factory=MaterialParams)
    camera: CameraParams = field(default_factory=CameraParams)

    def copy(self) -> "SceneConfig":
        return copy.deepcopy(self)

    def to_dict(self) -> dict:
        return {
            "lighting": self.lighting.to_dict(),
            "material": self.material.to_dict(),
            "camera": self.camera.to_dict(),
        }

    def validate(self) -> None:
        if self.lighting.mode == "static":
            for idx, light in enumerate(self.lighting.lights):
                light.validate(idx)
        elif self.lighting.buffer is None:
            raise ValueError("lighting.mode=buffer requires lighting.buffer")
        report = validate_pbr_material(self.material.to_material())
        if not report["valid"]:
            raise ValueError("material: " + "; ".join(report["errors"]))

    def build_light_list(self) -> LightList:
        """Construct the light list through the configured factory path."""
        if self.lighting.mode == "buffer":
            if self.lighting.buffer is None:
                raise ValueError("lighting.mode=buffer requires lighting.buffer")
            return self.lighting.buffer.decode()
        return LightList.static(*(light.to_light() for light in self.lighting.lights))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], default: Optional["SceneConfig"] = None) -> "SceneConfig":
        base = copy.deepcopy(default) if default is not None else cls()
        if "lighting" in data:
            if isinstance(data["lighting"], Mapping):
                base.lighting = LightingParams.from_mapping(data["lighting"], base.lighting)
            else:
                raise TypeError("lighting must be a mapping")
        if "material" in data:
            if isinstance(data["material"], Mapping):
                base.material = MaterialParams.from_mapping(data["material"], base.material)
            else:
                raise TypeError("material must be a mapping")
        if "camera" in data:
            if isinstance(data["camera"], Mapping):
                base.camera = CameraParams.from_mapping(data["camera"], base.camera)
            else:
                raise TypeError("camera must be a mapping")
        return base


def _load_from_path(path: Path) -> Mapping[str, Any]:
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix in {".json", ""}:
        return json.loads(text)
    raise ValueError(f"Unsupported scene config file format: {path}")


def _build_override_mapping(overrides: Mapping[str, Any]) -> Dict[str, Dict[str, Any]]:
    out: Dict[str, Dict[str, Any]] = {}
    for key, value in overrides.items():
        if key in {"light", "lights"}:
            out.setdefault("lighting", {})["lights"] = value
        elif key in {"mode", "light_mode"}:
            out.setdefault("lighting", {})["mode"] = value
        elif key == "preset":
            out.setdefault("lighting", {})["preset"] = value
        elif key in {"buffer", "light_buffer"}:
            out.setdefault("lighting", {})["buffer"] = value
        elif key in {"base_color", "metallic", "roughness"}:
            out.setdefault("material", {})[key] = value
        elif key == "camera_position":
            out.setdefault("camera", {})["position"] = value
        else:
            raise ValueError(f"Unknown override: {key!r}")
    return out


def load_scene_config(config: ConfigSource = None, overrides: Optional[Mapping[str, Any]] = None) -> SceneConfig:
    if isinstance(config, SceneConfig):
        cfg = config.copy()
    elif isinstance(config, Mapping):
        cfg = SceneConfig.from_mapping(config)
    elif isinstance(config, (str, Path)):
        cfg = SceneConfig.from_mapping(_load_from_path(Path(config)))
        logger.info(f"Loaded scene config: {config}")
    elif config is None:
        cfg = SceneConfig()
    else:
        raise TypeError("config must be SceneConfig, mapping, path, or None")

    if overrides:
        merged = _build_override_mapping(overrides)
        if merged:
            cfg = SceneConfig.from_mapping(merged, cfg)
    cfg.validate()
    return cfg


__all__ = [
    "LightConfig",
    "LightBufferConfig",
    "LightingParams",
    "MaterialParams",
    "CameraParams",
    "SceneConfig",
    "load_scene_config",
]
