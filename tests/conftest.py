# Ensure `import shade3d` works from a fresh clone by putting repo/python on sys.path.
import sys
from pathlib import Path

import numpy as np
import pytest


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def _ensure_python_path():
    pkg_dir = _repo_root() / "python"
    if str(pkg_dir) not in sys.path:
        sys.path.insert(0, str(pkg_dir))


_ensure_python_path()


def pytest_configure(config):
    """Register shading markers."""
    config.addinivalue_line(
        "markers", "opbr: tests for PBR shading terms"
    )
    config.addinivalue_line(
        "markers", "olighting: tests for light lists and accumulation"
    )


@pytest.fixture
def rng():
    return np.random.default_rng(12345)


@pytest.fixture
def head_on_surface():
    """Surface at the origin facing +Z, viewed head-on, white dielectric, roughness 0.5."""
    from shade3d import SurfaceSample

    return SurfaceSample(
        position=(0.0, 0.0, 0.0),
        normal=(0.0, 0.0, 1.0),
        view_direction=(0.0, 0.0, 1.0),
        base_color=(1.0, 1.0, 1.0),
        metallic=0.0,
        roughness=0.5,
    )
