# python/shade3d/__main__.py
# Command line entry point: shade a single surface sample or write a sphere preview.
# Exists to drive the shading kernel from JSON scene configs or static presets.
# RELEVANT FILES:python/shade3d/config.py,python/shade3d/render.py,tests/test_cli.py
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

import numpy as np

from . import presets
from .config import SceneConfig, load_scene_config
from .lighting import LightList
from .render import numpy_to_png, render_material_sphere
from .shading import accumulate_radiance
from .surface import SurfaceSample
from .tonemap import tonemap_reinhard

logger = logging.getLogger("shade3d")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="shade3d", description="Microfacet shading for directional and point lights.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    source = argparse.ArgumentParser(add_help=False)
    group = source.add_mutually_exclusive_group()
    group.add_argument("--config", type=str, default=None, help="Scene config JSON path")
    group.add_argument("--preset", type=str, default=None, help=f"Static preset ({', '.join(presets.available())})")
    source.add_argument("--base-color", type=float, nargs=3, default=None, metavar=("R", "G", "B"))
    source.add_argument("--metallic", type=float, default=None)
    source.add_argument("--roughness", type=float, default=None)
    source.add_argument("--camera", type=float, nargs=3, default=None, metavar=("X", "Y", "Z"), help="Camera world position")

    sub = parser.add_subparsers(dest="command", required=True)

    p_shade = sub.add_parser("shade", parents=[source], help="Shade one surface sample and print RGBA as JSON")
    p_shade.add_argument("--position", type=float, nargs=3, default=(0.0, 0.0, 0.0), metavar=("X", "Y", "Z"))
    p_shade.add_argument("--normal", type=float, nargs=3, default=(0.0, 0.0, 1.0), metavar=("X", "Y", "Z"))
    p_shade.add_argument("--radiance", action="store_true", help="Also print pre-tone-mapped radiance")

    p_preview = sub.add_parser("preview", parents=[source], help="Render a material sphere preview to PNG")
    p_preview.add_argument("--out", type=str, required=True, help="Output PNG path")
    p_preview.add_argument("--size", type=int, nargs=2, default=(256, 256), metavar=("W", "H"))
    return parser


def _load_config(args: argparse.Namespace) -> SceneConfig:
    overrides = {}
    if args.base_color is not None:
        overrides["base_color"] = list(args.base_color)
    if args.metallic is not None:
        overrides["metallic"] = args.metallic
    if args.roughness is not None:
        overrides["roughness"] = args.roughness
    if args.camera is not None:
        overrides["camera_position"] = list(args.camera)
    source = presets.get(args.preset) if args.preset is not None else args.config
    return load_scene_config(source, overrides)


def _run_shade(cfg: SceneConfig, lights: LightList, args: argparse.Namespace) -> int:
    material = cfg.material.to_material()
    surface = SurfaceSample.from_material(material, args.position, args.normal, cfg.camera.position)
    radiance = accumulate_radiance(surface, lights)
    rgba = tonemap_reinhard(radiance)
    payload = {"rgba": [float(c) for c in np.asarray(rgba).reshape(-1)]}
    if args.radiance:
        payload["radiance"] = [float(c) for c in np.asarray(radiance).reshape(-1)]
    # NaN from a coincident point light is emitted as-is.
    print(json.dumps(payload))
    return 0


def _run_preview(cfg: SceneConfig, lights: LightList, args: argparse.Namespace) -> int:
    width, height = args.size
    img = render_material_sphere(
        cfg.material.to_material(),
        lights,
        width,
        height,
        camera_position=cfg.camera.position,
    )
    numpy_to_png(args.out, img)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        cfg = _load_config(args)
        lights = cfg.build_light_list()
    except (ValueError, TypeError, OSError) as exc:
        parser.error(str(exc))
    logger.debug(f"Scene: {cfg.to_dict()}")
    if args.command == "shade":
        return _run_shade(cfg, lights, args)
    return _run_preview(cfg, lights, args)


if __name__ == "__main__":
    sys.exit(main())
