# tests/test_config.py
# Scene configuration parsing for static and buffer light-list modes.
# Exists to keep JSON/mapping configs and the light-list factories in agreement.
# RELEVANT FILES:python/shade3d/config.py,python/shade3d/presets.py

from __future__ import annotations

import json

import numpy as np
import pytest

from shade3d import LightManager, PointLight, DirectionalLight, LightType
from shade3d.config import SceneConfig, load_scene_config


def test_defaults_validate_and_build_empty_list() -> None:
    cfg = load_scene_config()
    assert cfg.lighting.mode == "static"
    assert len(cfg.build_light_list()) == 0
    assert cfg.material.roughness == pytest.approx(0.5)


def test_static_lights_from_mapping() -> None:
    cfg = load_scene_config({
        "lighting": {
            "lights": [
                {"type": "point", "position": [0.0, 2.0, 0.0], "flux": [10.0, 10.0, 10.0]},
                {"type": "Sun", "direction": [0.0, 0.0, 2.0], "irradiance": [1.0, 1.0, 1.0]},
            ],
        },
        "material": {"base_color": [0.5, 0.25, 0.125], "metallic": 1.0, "roughness": 0.3},
    })
    lights = cfg.build_light_list()
    assert [light.type for light in lights] == [LightType.DIRECTIONAL, LightType.POINT]
    assert lights[0].direction == pytest.approx((0.0, 0.0, 1.0))
    assert lights[1].luminous_flux == pytest.approx((10.0, 10.0, 10.0))
    assert cfg.material.to_material().metallic == 1.0


def test_buffer_mode_from_entries() -> None:
    cfg = load_scene_config({
        "lighting": {
            "buffer": {
                "num_directional": 1,
                "num_point": 1,
                "entries": [[0, 0, 1], [1, 1, 1], [0, 3, 0], [50, 50, 50]],
            },
        },
    })
    assert cfg.lighting.mode == "buffer"
    lights = cfg.build_light_list()
    assert (lights.num_directional, lights.num_point) == (1, 1)


def test_buffer_mode_length_mismatch_rejected() -> None:
    cfg = load_scene_config({
        "lighting": {
            "mode": "buffer",
            "buffer": {"num_directional": 2, "num_point": 1, "entries": [[0, 0, 1]] * 5},
        },
    })
    with pytest.raises(ValueError, match="expected 6"):
        cfg.build_light_list()


def test_buffer_mode_requires_buffer() -> None:
    with pytest.raises(ValueError, match="lighting.buffer"):
        load_scene_config({"lighting": {"mode": "buffer"}})


def test_packed_buffer_from_npy(tmp_path) -> None:
    manager = LightManager()
    manager.add_light(DirectionalLight(direction=(0.0, 1.0, 1.0), irradiance=(2.0, 2.0, 2.0)))
    manager.add_light(PointLight(position=(1.0, 1.0, 1.0), luminous_flux=(9.0, 9.0, 9.0)))
    path = tmp_path / "lights.npy"
    np.save(path, manager.pack())

    cfg = load_scene_config({"lighting": {"buffer": str(path)}})
    lights = cfg.build_light_list()
    np.testing.assert_allclose(lights.entries(), manager.light_list().entries(), rtol=1e-6)


def test_unknown_choices_and_types_rejected() -> None:
    with pytest.raises(ValueError, match="light type"):
        load_scene_config({"lighting": {"lights": [{"type": "spot", "position": [0, 0, 0]}]}})
    with pytest.raises(ValueError, match="light list mode"):
        load_scene_config({"lighting": {"mode": "streaming"}})
    with pytest.raises(TypeError):
        load_scene_config({"lighting": ["sun"]})
    with pytest.raises(TypeError):
        load_scene_config({"lighting": {"lights": ["sun"]}})
    with pytest.raises(TypeError):
        load_scene_config(42)


def test_missing_light_fields_rejected() -> None:
    with pytest.raises(ValueError, match="direction required"):
        load_scene_config({"lighting": {"lights": [{"type": "directional"}]}})
    with pytest.raises(ValueError, match="position required"):
        load_scene_config({"lighting": {"lights": [{"type": "point"}]}})
    with pytest.raises(ValueError, match="non-negative"):
        load_scene_config({"lighting": {"lights": [{"type": "point", "position": [0, 0, 1], "luminous_flux": [-1, 0, 0]}]}})


def test_material_range_rejected() -> None:
    with pytest.raises(ValueError, match="metallic"):
        load_scene_config({"material": {"metallic": 2.0}})


def test_json_path_and_overrides(tmp_path) -> None:
    path = tmp_path / "scene.json"
    path.write_text(json.dumps({
        "lighting": {"lights": [{"type": "directional", "direction": [0, 0, 1], "irradiance": [1, 1, 1]}]},
        "material": {"roughness": 0.8},
    }), encoding="utf-8")
    cfg = load_scene_config(path, overrides={"roughness": 0.2, "camera_position": [1.0, 2.0, 3.0]})
    assert cfg.material.roughness == pytest.approx(0.2)
    assert cfg.camera.position == (1.0, 2.0, 3.0)
    assert len(cfg.build_light_list()) == 1


def test_unsupported_file_format(tmp_path) -> None:
    path = tmp_path / "scene.yaml"
    path.write_text("lighting: {}", encoding="utf-8")
    with pytest.raises(ValueError, match="Unsupported"):
        load_scene_config(path)


def test_preset_in_lighting_block() -> None:
    cfg = load_scene_config({"lighting": {"preset": "demo"}})
    lights = cfg.build_light_list()
    assert (lights.num_directional, lights.num_point) == (1, 3)


def test_to_dict_roundtrip() -> None:
    cfg = load_scene_config({"lighting": {"preset": "studio"}, "material": {"metallic": 0.5}})
    again = SceneConfig.from_mapping(cfg.to_dict())
    again.validate()
    assert again.to_dict() == cfg.to_dict()


def test_copy_is_independent() -> None:
    cfg = load_scene_config({"lighting": {"preset": "single_sun"}})
    other = load_scene_config(cfg)
    other.material.roughness = 0.9
    assert cfg.material.roughness == pytest.approx(0.5)


def test_unknown_override_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown override"):
        load_scene_config(None, overrides={"exposure": 2.0})
