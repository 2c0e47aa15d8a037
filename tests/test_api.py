import numpy as np


def test_public_api_imports():
    import shade3d as s3d
    from shade3d import LightList, SurfaceSample, shade, tonemap_reinhard
    assert hasattr(s3d, "__version__")
    for name in s3d.__all__:
        assert hasattr(s3d, name), name

    surface = SurfaceSample.from_camera((0.0, 0.0, 0.0), (0.0, 0.0, 1.0), (0.0, 0.0, 2.0))
    rgba = shade(surface, LightList())
    assert rgba.shape == (4,) and rgba.dtype == np.float32
    assert tonemap_reinhard(np.zeros(3)).shape == (4,)


def test_light_manager_feeds_light_list():
    from shade3d import DirectionalLight, LightList, LightManager, PointLight

    manager = LightManager()
    manager.add_light(PointLight(position=(0.0, 0.0, 2.0), luminous_flux=(1.0, 1.0, 1.0)))
    manager.add_light(DirectionalLight(direction=(0.0, 0.0, 1.0), irradiance=(1.0, 1.0, 1.0)))
    assert len(LightList.from_packed(manager.pack())) == 2
