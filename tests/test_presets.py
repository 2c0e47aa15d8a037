# tests/test_presets.py
# Unit tests for static light presets and their config schema
# RELEVANT FILES: python/shade3d/presets.py, python/shade3d/config.py
from __future__ import annotations

import numpy as np
import pytest

from shade3d import presets, shade, SurfaceSample
from shade3d.config import SceneConfig, load_scene_config


@pytest.mark.parametrize("name", ["demo", "single_sun", "studio"])
def test_presets_available_and_schema_valid(name: str) -> None:
    assert name in presets.available()
    mapping = presets.get(name)
    assert isinstance(mapping, dict)

    cfg = SceneConfig.from_mapping(mapping)
    cfg.validate()
    assert cfg.lighting.mode == "static"
    assert len(cfg.build_light_list()) > 0


def test_demo_scene_lights() -> None:
    lights = load_scene_config(presets.get("demo")).build_light_list()
    assert (lights.num_directional, lights.num_point) == (1, 3)
    assert lights.directional[0].direction == pytest.approx((-np.sqrt(0.5), -np.sqrt(0.5), 0.0))
    assert all(p.position == pytest.approx((0.1, -3.0, -3.0)) for p in lights.point)


def test_preset_names_are_normalized() -> None:
    assert presets.get("Single-Sun") == presets.get("single_sun")


def test_unknown_preset_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown preset"):
        presets.get("moonlight")


def test_presets_return_fresh_mappings() -> None:
    first = presets.get("demo")
    first["lighting"]["lights"].clear()
    assert len(presets.get("demo")["lighting"]["lights"]) == 4


def test_studio_lights_a_facing_surface() -> None:
    cfg = load_scene_config(presets.get("studio"))
    surface = SurfaceSample.from_material(cfg.material.to_material(), (0.0, 0.0, 1.0), (0.0, 0.0, 1.0), cfg.camera.position)
    rgba = shade(surface, cfg.build_light_list())
    assert np.all(rgba[:3] > 0.0)
    assert np.all(rgba[:3] < 1.0)
