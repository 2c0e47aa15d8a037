# python/shade3d/__init__.py
# Public Python API for the microfacet shading kernel
# Exists to re-export the light model, surface record, BRDF evaluator and tone mapper
# RELEVANT FILES: python/shade3d/shading.py, python/shade3d/lighting.py, python/shade3d/pbr.py, tests/test_api.py

from .lighting import (
    LightType,
    DirectionalLight,
    PointLight,
    Light,
    LightList,
    LightManager,
)
from .pbr import (
    PbrMaterial,
    distribution_ggx,
    visibility,
    fresnel_schlick,
    base_reflectance,
    evaluate_radiance,
    validate_pbr_material,
    create_test_materials,
)
from .surface import SurfaceSample
from .shading import point_light_irradiance, accumulate_radiance, shade
from .tonemap import tonemap_reinhard
from .config import SceneConfig, load_scene_config
from .render import render_material_sphere, numpy_to_png, png_to_numpy
from . import presets

__version__ = "0.3.0"

__all__ = [
    "__version__",
    "LightType",
    "DirectionalLight",
    "PointLight",
    "Light",
    "LightList",
    "LightManager",
    "PbrMaterial",
    "distribution_ggx",
    "visibility",
    "fresnel_schlick",
    "base_reflectance",
    "evaluate_radiance",
    "validate_pbr_material",
    "create_test_materials",
    "SurfaceSample",
    "point_light_irradiance",
    "accumulate_radiance",
    "shade",
    "tonemap_reinhard",
    "SceneConfig",
    "load_scene_config",
    "render_material_sphere",
    "numpy_to_png",
    "png_to_numpy",
    "presets",
]
