"""Tests for scene objects and 4D-to-3D projection.

Tests cover:
- Perspective and orthographic projection of known points
- Destination reuse and per-point callbacks
- Unprojection round trips
- Camera parameter validation
- Object view bases and mesh transforms
"""

import math

import pytest
import torch

from core.rotor import Rotor4
from core.vector import Vector4
from mesh.construction import tetrahedron
from scene.objects import Camera4, Mesh4, Object4
from scene.projection import distortion_factor, project_tensor, project_vector4, unproject_vector4


@pytest.fixture
def camera():
    """Perspective camera at w = 4 looking towards the origin, 90 degree FOV."""
    return Camera4(pos=Vector4(0, 0, 0, 4))


@pytest.fixture
def rotated_camera():
    rot = Rotor4.plane_angle([0, 0, 1, 0, 0, 0], 0.3).mult(
        Rotor4.plane_angle([0, 0, 0, 0, 1, 0], -0.2))
    return Camera4(pos=Vector4(0.5, -1, 0.25, 5), rot=rot)


POINTS = [
    Vector4(1, 2, 3, 0),
    Vector4(-0.5, 0.25, 0, 1),
    Vector4(0.1, -0.2, 0.3, -0.4),
]


def _assert_close(a, b, tol=1e-9):
    assert len(a) == len(b)
    for x, y in zip(a, b):
        assert abs(x - y) < tol, f"{list(a)} != {list(b)}"


class TestPerspective:

    def test_known_point(self, camera):
        projected = project_vector4([Vector4(1, 2, 3, 0)], camera)
        _assert_close(projected[0], [0.25, 0.5, 0.75, 4.0])

    def test_farther_points_shrink(self, camera):
        near, far = project_vector4([Vector4(1, 0, 0, 2), Vector4(1, 0, 0, -2)], camera)
        assert near.w == pytest.approx(2.0)
        assert far.w == pytest.approx(6.0)
        assert near.x > far.x > 0

    def test_distance_matches_camera(self, rotated_camera):
        projected = project_vector4(POINTS, rotated_camera)
        for point, result in zip(POINTS, projected):
            assert result.w == pytest.approx(rotated_camera.viewbox_distance_from(point))

    def test_fov_scales_image(self, camera):
        camera.fov_angle = math.pi / 3
        projected = project_vector4([Vector4(1, 0, 0, 0)], camera)[0]
        assert projected.x == pytest.approx(1 / math.tan(math.pi / 6) / 4)

    def test_zero_distance_not_finite(self, camera):
        projected = project_vector4([Vector4(1, 0, 0, 4)], camera)[0]
        assert projected.w == 0
        assert not math.isfinite(projected.x)


class TestOrthographic:

    def test_depth_is_radius(self):
        camera = Camera4(pos=Vector4(1, 2, 3, 4), using_perspective=False, radius=1)
        projected = project_vector4([Vector4(1, 2, 3, 4)], camera)[0]
        assert projected.w == 1.0
        _assert_close(projected[:3], [0, 0, 0])

    def test_depth_ignores_point(self):
        camera = Camera4(pos=Vector4(0, 0, 0, 4), using_perspective=False, radius=2)
        projected = project_vector4(POINTS, camera)
        assert all(p.w == 2.0 for p in projected)

    def test_scale(self):
        camera = Camera4(pos=Vector4(0, 0, 0, 4), using_perspective=False, radius=2)
        projected = project_vector4([Vector4(1, 2, 3, 0), Vector4(1, 2, 3, -7)], camera)
        _assert_close(projected[0], [0.25, 0.5, 0.75, 2.0])
        _assert_close(projected[1], projected[0])

    def test_distortion_factor(self):
        assert distortion_factor(Camera4(using_perspective=False, radius=4)) == 0.25
        assert distortion_factor(Camera4()) == pytest.approx(1.0)


class TestDestination:

    def test_reuses_existing_points(self, camera):
        existing = Vector4(9, 9, 9, 9)
        destination = [existing]
        result = project_vector4(POINTS[:2], camera, destination)

        assert result is destination
        assert len(destination) == 2
        assert destination[0] is existing
        _assert_close(existing, project_vector4(POINTS[:1], camera)[0])

    def test_callback(self, camera):
        seen = []
        project_vector4(POINTS, camera, callback=lambda point, i: seen.append((i, point.w)))
        assert [i for i, _ in seen] == [0, 1, 2]

    def test_empty(self, camera):
        assert project_vector4([], camera) == []


class TestUnproject:

    def test_round_trip(self, rotated_camera):
        projected = project_vector4(POINTS, rotated_camera)
        for original, restored in zip(POINTS, unproject_vector4(projected, rotated_camera)):
            _assert_close(restored, original)

    def test_round_trip_identity_camera(self, camera):
        projected = project_vector4(POINTS, camera)
        restored = unproject_vector4(projected, camera, callback=lambda p, i: None)
        for original, point in zip(POINTS, restored):
            _assert_close(point, original)

    def test_orthographic_lands_on_camera_space(self):
        camera = Camera4(pos=Vector4(0, 0, 0, 4), using_perspective=False, radius=2)
        projected = project_vector4([Vector4(1, 2, 3, 0)], camera)
        restored = unproject_vector4(projected, camera)[0]
        _assert_close(restored, [1, 2, 3, 4])

    def test_orthographic_rotated_camera(self):
        rot = Rotor4.plane_angle([0, 0, 1, 0, 0, 0], 0.3)  # xw
        camera = Camera4(pos=Vector4(0.5, -1, 0.25, 5), rot=rot, using_perspective=False, radius=2)
        forward = camera.local_forward()

        projected = project_vector4(POINTS, camera)
        for original, restored in zip(POINTS, unproject_vector4(projected, camera)):
            # Only the offset along the forward axis is dropped
            depth = original.subtract(camera.pos).dot(forward)
            _assert_close(restored, original.subtract(forward.mult_scalar(depth)))
            assert restored.subtract(camera.pos).dot(forward) == pytest.approx(0.0, abs=1e-9)

    def test_orthographic_round_trip_on_camera_space(self, rotated_camera):
        camera = rotated_camera.clone()
        camera.using_perspective = False
        forward = camera.local_forward()
        # Points already on the camera's 3-space come back unchanged
        points = [p.subtract(forward.mult_scalar(p.subtract(camera.pos).dot(forward))) for p in POINTS]
        restored = unproject_vector4(project_vector4(points, camera), camera)
        for original, point in zip(points, restored):
            _assert_close(point, original)


class TestTensorProjection:

    def test_matches_list_api(self, rotated_camera):
        points = torch.tensor([p.tolist() for p in POINTS], dtype=torch.float64)
        batched = project_tensor(points, rotated_camera)
        for row, projected in zip(batched, project_vector4(POINTS, rotated_camera)):
            _assert_close(row.tolist(), projected)

    def test_rejects_3d_points(self, camera):
        with pytest.raises(AssertionError):
            project_tensor(torch.zeros(2, 3), camera)


class TestCamera:

    def test_defaults(self):
        camera = Camera4()
        assert camera.using_perspective
        assert camera.focal_length == 1.0
        assert camera.fov_angle == pytest.approx(math.pi / 2)
        assert camera.radius == 1.0

    def test_fov_round_trip(self):
        camera = Camera4()
        camera.fov_angle = 1.2
        assert camera.fov_angle == pytest.approx(1.2)
        assert camera.focal_length == pytest.approx(math.tan(0.6))

    @pytest.mark.parametrize("attr", ["focal_length", "fov_angle", "radius"])
    def test_nan_rejected(self, attr):
        with pytest.raises(TypeError):
            setattr(Camera4(), attr, math.nan)

    @pytest.mark.parametrize("attr,value", [
        ("focal_length", 0),
        ("focal_length", -1),
        ("fov_angle", 0),
        ("fov_angle", math.pi),
        ("radius", 0),
        ("radius", -2),
    ])
    def test_out_of_range_rejected(self, attr, value):
        with pytest.raises(ValueError):
            setattr(Camera4(), attr, value)

    def test_constructor_validates(self):
        with pytest.raises(ValueError):
            Camera4(radius=0)

    def test_clone_and_eq(self, rotated_camera):
        clone = rotated_camera.clone()
        assert clone is not rotated_camera
        assert clone.eq(rotated_camera)
        clone.radius = 3
        assert not clone.eq(rotated_camera)

    def test_orthographic_viewbox_distance(self):
        camera = Camera4(using_perspective=False, radius=3)
        assert camera.viewbox_distance_from(Vector4(1, 2, 3, 4)) == 3


class TestObject4:

    def test_default_basis(self):
        obj = Object4()
        assert obj.local_forward().eq(Vector4(0, 0, 0, -1))
        assert obj.local_up().eq(Vector4(0, 1, 0, 0))
        assert obj.local_over().eq(Vector4(0, 0, 1, 0))

    def test_projection_matrix_orthonormal(self, rotated_camera):
        matrix = rotated_camera.projection_matrix()
        columns = [Vector4(*matrix.column(i)[:4]) for i in range(4)]
        for i in range(4):
            for j in range(4):
                expected = 1.0 if i == j else 0.0
                assert columns[i].dot(columns[j]) == pytest.approx(expected, abs=1e-12)
        _assert_close(columns[3], rotated_camera.local_forward())

    def test_translate_forward(self):
        obj = Object4(pos=Vector4(0, 0, 0, 4))
        obj.translate_forward(1.5)
        assert obj.pos.eq(Vector4(0, 0, 0, 2.5))

    def test_local_space_contains_position(self):
        obj = Object4(pos=Vector4(1, 2, 3, 4))
        space = obj.local_space()
        assert space.offset.eq(obj.pos)
        assert space.normal.eq(obj.local_forward())


class TestMesh4:

    def test_transformed_verts(self):
        rot = Rotor4.plane_angle([0, 1, 0, 0, 0, 0], 0.8)
        mesh = Mesh4(tetrahedron(), pos=Vector4(1, 0, -1, 2), rot=rot, scl=Vector4(2, 1, 1, 1))

        for original, transformed in zip(mesh.geometry.verts, mesh.transformed_verts()):
            expected = rot.rotate_vector(original.mult_components(mesh.scl)).add(mesh.pos)
            _assert_close(transformed, expected)

    def test_secondary_rotation_applied_after(self):
        mesh = Mesh4(tetrahedron(), rot=Rotor4.plane_angle([1, 0, 0, 0, 0, 0], 0.5))
        mesh.rot2 = Rotor4.plane_angle([0, 0, 0, 0, 0, 1], 0.9)

        for original, transformed in zip(mesh.geometry.verts, mesh.transformed_verts()):
            expected = mesh.rot2.rotate_vector(mesh.rot.rotate_vector(original))
            _assert_close(transformed, expected)

    def test_transformed_geometry(self):
        mesh = Mesh4(tetrahedron(), pos=Vector4(0, 0, 0, 3))
        moved = mesh.transformed_geometry()
        assert moved.facets == mesh.geometry.facets
        assert all(v.w == 3 for v in moved.verts)
        assert all(v.w == 0 for v in mesh.geometry.verts)
