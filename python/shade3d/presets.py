"""
python/shade3d/presets.py
Static light scenes for demos and quick previews.

Each preset returns a plain dict compatible with
python/shade3d/config.py::SceneConfig.from_mapping(), covering the lighting
and material keys. Presets always use the static light-list mode.

Example
-------
>>> from shade3d import presets
>>> from shade3d.config import load_scene_config
>>> cfg = load_scene_config(presets.get("demo"))
>>> lights = cfg.build_light_list()
"""
from __future__ import annotations

from typing import Any, Callable, Dict, List


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------

def _dir_light(
    *,
    direction: tuple[float, float, float],
    irradiance: tuple[float, float, float] = (1.0, 1.0, 1.0),
) -> Dict[str, Any]:
    """Build a directional light mapping compatible with LightConfig.from_mapping()."""
    return {
        "type": "directional",
        "direction": [float(direction[0]), float(direction[1]), float(direction[2])],
        "irradiance": [float(irradiance[0]), float(irradiance[1]), float(irradiance[2])],
    }


def _point_light(
    *,
    position: tuple[float, float, float],
    luminous_flux: tuple[float, float, float] = (100.0, 100.0, 100.0),
) -> Dict[str, Any]:
    """Build a point light mapping compatible with LightConfig.from_mapping()."""
    return {
        "type": "point",
        "position": [float(position[0]), float(position[1]), float(position[2])],
        "luminous_flux": [float(luminous_flux[0]), float(luminous_flux[1]), float(luminous_flux[2])],
    }


def _normalize_name(name: str) -> str:
    return "".join(c for c in str(name).strip().lower() if c not in {"-", "_", " ", "."})


# -----------------------------------------------------------------------------
# Preset definitions (schema-aligned with python/shade3d/config.py)
# -----------------------------------------------------------------------------

def demo() -> Dict[str, Any]:
    """Demo scene: one strong directional light and three coincident point lights."""
    point = _point_light(position=(0.1, -3.0, -3.0), luminous_flux=(100.0, 100.0, 100.0))
    return {
        "lighting": {
            "mode": "static",
            "lights": [
                _dir_light(direction=(-1.0, -1.0, 0.0), irradiance=(10.1, 10.1, 10.1)),
                dict(point),
                dict(point),
                dict(point),
            ],
        },
        "material": {"base_color": [1.0, 1.0, 1.0], "metallic": 0.0, "roughness": 0.5},
        "camera": {"position": [0.0, 0.0, -5.0]},
    }


def single_sun() -> Dict[str, Any]:
    """Single head-on directional light of unit irradiance."""
    return {
        "lighting": {
            "mode": "static",
            "lights": [_dir_light(direction=(0.0, 0.0, 1.0), irradiance=(1.0, 1.0, 1.0))],
        },
        "material": {"base_color": [1.0, 1.0, 1.0], "metallic": 0.0, "roughness": 0.5},
        "camera": {"position": [0.0, 0.0, 5.0]},
    }


def studio() -> Dict[str, Any]:
    """Key/fill/rim arrangement around a polished metal."""
    return {
        "lighting": {
            "mode": "static",
            "lights": [
                _dir_light(direction=(-0.4, 0.6, 0.7), irradiance=(2.0, 1.96, 1.9)),
                _point_light(position=(3.0, 1.0, 3.0), luminous_flux=(150.0, 150.0, 160.0)),
                _point_light(position=(0.0, 2.0, -3.0), luminous_flux=(80.0, 80.0, 80.0)),
            ],
        },
        "material": {"base_color": [0.95, 0.64, 0.54], "metallic": 1.0, "roughness": 0.3},
        "camera": {"position": [0.0, 0.0, 5.0]},
    }


_PRESETS: Dict[str, Callable[[], Dict[str, Any]]] = {
    "demo": demo,
    "singlesun": single_sun,
    "sun": single_sun,
    "studio": studio,
}


def available() -> List[str]:
    """Return canonical preset names."""
    return ["demo", "single_sun", "studio"]


def get(name: str) -> Dict[str, Any]:
    """Return a fresh mapping for the named preset."""
    key = _normalize_name(name)
    if key not in _PRESETS:
        raise ValueError(f"Unknown preset: {name!r}. Available: {', '.join(available())}")
    return _PRESETS[key]()


__all__ = ["available", "get", "demo", "single_sun", "studio"]
