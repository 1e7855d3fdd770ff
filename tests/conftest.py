import pytest

from furnace.scene.camera import Camera
from furnace.scene.demo_scene import build_shapes


@pytest.fixture
def camera():
    """The demo camera: eye at (0, 0, 2) looking at the origin, 90 degree fov, planes at 1 and 10."""
    return Camera(
        framebuffer_size=(800, 600),
        position=(0.0, 0.0, 2.0),
        focus=(0.0, 0.0, 0.0),
        field_of_view=90.0,
        near_plane=1.0,
        far_plane=10.0,
    )


@pytest.fixture
def shapes():
    return build_shapes()
