"""Tests for the orbiting perspective camera."""

import math

import numpy as np
import pyrr as rr
import pytest

from furnace.core.common_types import DepthRange
from furnace.core.errors import DegenerateOrbit, InvalidCameraPlanes, InvalidFieldOfView, InvalidViewport
from furnace.scene.camera import Camera, aspect_factors, orbit_point, perspective_matrix


class TestConstruction:
    def test_view_matrix_is_finite_and_non_singular(self, camera):
        contents = camera.view_matrix.contents()
        assert np.all(np.isfinite(contents))
        assert abs(camera.view_matrix.determinant()) > 1e-6

    def test_view_is_perspective_times_camera(self, camera):
        assert camera.view_matrix.isclose(camera.perspective_matrix @ camera.camera_matrix)

    def test_attributes(self, camera):
        assert camera.position == (0.0, 0.0, 2.0)
        assert camera.focus == (0.0, 0.0, 0.0)
        assert camera.field_of_view == 90.0
        assert camera.near_plane == 1.0
        assert camera.far_plane == 10.0
        assert camera.framebuffer_size == (800, 600)
        assert camera.depth_range is DepthRange.NEGATIVE_ONE_TO_ONE

    def test_angles(self, camera):
        assert camera.orbital_angle == pytest.approx(math.pi)
        assert camera.azimuthal_angle == pytest.approx(0.0)


class TestReposition:
    def test_changes_view_keeps_perspective(self, camera):
        perspective_before = camera.perspective_matrix.contents().copy()
        view_before = camera.view_matrix
        camera.set_position((2.0, 0.0, 0.0))
        assert camera.position == (2.0, 0.0, 0.0)
        assert not camera.view_matrix.isclose(view_before)
        np.testing.assert_array_equal(camera.perspective_matrix.contents(), perspective_before)

    def test_reposition_alias(self, camera):
        camera.reposition((0.0, 1.0, 3.0))
        assert camera.position == (0.0, 1.0, 3.0)

    def test_focus_lands_on_view_axis(self):
        camera = Camera(framebuffer_size=(640, 480), position=(1.0, 2.0, 3.0), focus=(0.0, 0.0, 0.0))
        np.testing.assert_allclose(
            camera.camera_matrix.transform_point(camera.focus),
            [0.0, 0.0, math.sqrt(14.0)],
            atol=1e-5,
        )

    def test_camera_matrix_is_rigid(self):
        camera = Camera(framebuffer_size=(640, 480), position=(-1.5, 0.7, 2.2), focus=(0.3, 0.1, -0.4))
        rotation = camera.camera_matrix.contents()[:3, :3].astype(np.float64)
        np.testing.assert_allclose(rotation @ rotation.T, np.identity(3), atol=1e-5)
        assert np.linalg.det(rotation) == pytest.approx(1.0, abs=1e-5)

    def test_eye_maps_to_origin(self):
        camera = Camera(framebuffer_size=(640, 480), position=(4.0, -1.0, 2.0), focus=(0.0, 0.5, 0.0))
        np.testing.assert_allclose(camera.camera_matrix.transform_point(camera.position), [0.0, 0.0, 0.0], atol=1e-5)

    def test_set_focus(self, camera):
        camera.set_focus((1.0, 0.0, 0.0))
        assert camera.focus == (1.0, 0.0, 0.0)
        np.testing.assert_allclose(camera.camera_matrix.transform_point((1.0, 0.0, 0.0))[:2], [0.0, 0.0], atol=1e-5)


class TestDegenerateOrbit:
    def test_eye_on_focus(self):
        with pytest.raises(DegenerateOrbit):
            Camera(framebuffer_size=(800, 600), position=(1.0, 1.0, 1.0), focus=(1.0, 1.0, 1.0))

    def test_eye_directly_above_focus(self):
        with pytest.raises(DegenerateOrbit):
            Camera(framebuffer_size=(800, 600), position=(0.0, 3.0, 0.0), focus=(0.0, 0.0, 0.0))

    @pytest.mark.parametrize("position, focus", [
        ((math.nan, 0.0, 2.0), (0.0, 0.0, 0.0)),
        ((0.0, 0.0, 2.0), (0.0, math.inf, 0.0)),
    ])
    def test_non_finite_eye_or_focus(self, position, focus):
        with pytest.raises(DegenerateOrbit):
            Camera(framebuffer_size=(800, 600), position=position, focus=focus)

    def test_non_finite_reposition_keeps_state(self, camera):
        view_before = camera.view_matrix
        with pytest.raises(DegenerateOrbit):
            camera.set_position((0.0, math.nan, 2.0))
        assert camera.view_matrix is view_before

    def test_failed_reposition_keeps_state(self, camera):
        view_before = camera.view_matrix
        with pytest.raises(DegenerateOrbit):
            camera.set_position((0.0, 0.0, 0.0))
        assert camera.position == (0.0, 0.0, 2.0)
        assert camera.view_matrix is view_before


class TestInvalidParameters:
    @pytest.mark.parametrize("near, far", [(0.0, 10.0), (-1.0, 10.0), (10.0, 10.0), (5.0, 1.0), (1.0, math.inf), (math.nan, 10.0), (1.0, math.nan)])
    def test_invalid_planes(self, near, far):
        with pytest.raises(InvalidCameraPlanes):
            Camera(framebuffer_size=(800, 600), position=(0.0, 0.0, 2.0), focus=(0.0, 0.0, 0.0), near_plane=near, far_plane=far)

    @pytest.mark.parametrize("fov", [0.0, 180.0, -30.0, 200.0, math.nan])
    def test_invalid_field_of_view(self, fov):
        with pytest.raises(InvalidFieldOfView):
            Camera(framebuffer_size=(800, 600), position=(0.0, 0.0, 2.0), focus=(0.0, 0.0, 0.0), field_of_view=fov)

    def test_invalid_viewport(self):
        with pytest.raises(InvalidViewport):
            Camera(framebuffer_size=(0, 600), position=(0.0, 0.0, 2.0), focus=(0.0, 0.0, 0.0))

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            perspective_matrix((800, 600), 90.0, 2.0, 1.0)


class TestPerspective:
    def test_aspect_factors(self):
        assert aspect_factors((800, 600)) == pytest.approx((4.0 / 3.0, 1.0))
        assert aspect_factors((600, 800)) == pytest.approx((1.0, 4.0 / 3.0))
        assert aspect_factors((512, 512)) == (1.0, 1.0)

    def test_matches_pyrr_with_flipped_z(self):
        # pyrr builds a row-vector matrix looking down -z; ours is its transpose looking down +z.
        reference = np.asarray(rr.Matrix44.perspective_projection(fovy=60.0, aspect=800.0 / 600.0, near=0.5, far=20.0)).T
        reference = reference @ np.diag([1.0, 1.0, -1.0, 1.0])
        ours = perspective_matrix((800, 600), 60.0, 0.5, 20.0)
        np.testing.assert_allclose(ours.contents(), reference, rtol=1e-5, atol=1e-6)

    def test_projection_scale(self):
        ours = perspective_matrix((512, 512), 90.0, 1.0, 10.0)
        assert ours.contents()[0, 0] == pytest.approx(1.0)
        assert ours.contents()[1, 1] == pytest.approx(1.0)

    @pytest.mark.parametrize("depth_range, near_ndc, far_ndc", [
        (DepthRange.NEGATIVE_ONE_TO_ONE, -1.0, 1.0),
        (DepthRange.ZERO_TO_ONE, 0.0, 1.0),
    ])
    def test_near_and_far_planes(self, depth_range, near_ndc, far_ndc):
        camera = Camera(
            framebuffer_size=(800, 600),
            position=(0.0, 0.0, -5.0),
            focus=(0.0, 0.0, 0.0),
            near_plane=1.0,
            far_plane=10.0,
            depth_range=depth_range,
        )
        # The camera looks along +z, so the planes sit at z = -4 and z = +5 in world space.
        assert camera.view_matrix.transform_point((0.0, 0.0, -4.0))[2] == pytest.approx(near_ndc, abs=1e-5)
        assert camera.view_matrix.transform_point((0.0, 0.0, 5.0))[2] == pytest.approx(far_ndc, abs=1e-5)

    def test_focus_projects_to_screen_centre(self, camera):
        np.testing.assert_allclose(camera.view_matrix.transform_point((0.0, 0.0, 0.0))[:2], [0.0, 0.0], atol=1e-6)


class TestOrbitPoint:
    def test_start_of_orbit(self):
        assert orbit_point((0.0, 0.0, 0.0), radius=2.0, angle=0.0) == pytest.approx((2.0, 0.0, 0.0))

    def test_quarter_orbit_around_offset_focus(self):
        assert orbit_point((1.0, 1.0, 1.0), radius=2.0, angle=math.pi / 2.0, height=0.5) == pytest.approx((1.0, 1.5, 3.0))

    def test_orbit_keeps_camera_valid(self, camera):
        for step in range(8):
            camera.set_position(orbit_point(camera.focus, radius=2.0, angle=step * math.pi / 4.0))
            assert np.all(np.isfinite(camera.view_matrix.contents()))
