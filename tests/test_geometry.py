import math
import os
import sys

import numpy as np
import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from geometry import (
    GeometryError,
    circle_geometry,
    cylinder_geometry,
    sphere_geometry,
    torus_geometry,
    triangle_arrays,
)


def _outward_fraction(geom, centre_fn):
    tri_verts, tri_norms = triangle_arrays(geom)
    centroids = tri_verts.reshape(-1, 3, 3).mean(axis=1)
    normals = tri_norms.reshape(-1, 3, 3)[:, 0]
    valid = np.linalg.norm(normals, axis=1) > 0
    dots = np.einsum('ij,ij->i', normals[valid], centroids[valid] - centre_fn(centroids[valid]))
    return float(np.mean(dots > 0))


def test_sphere_shape_and_counts():
    geom = sphere_geometry(2)
    assert geom.kind == "sphere"
    assert geom.vertices.dtype == np.float32
    assert geom.indices.dtype == np.uint32
    assert geom.vertex_count == 33 * 17
    # pole rows drop their degenerate triangles
    assert geom.triangle_count == 2 * 32 * 16 - 2 * 32
    assert np.allclose(np.linalg.norm(geom.vertices, axis=1), 2, atol=1e-5)
    assert np.allclose(np.linalg.norm(geom.normals, axis=1), 1, atol=1e-5)
    assert int(geom.indices.max()) < geom.vertex_count


def test_sphere_faces_point_outward():
    geom = sphere_geometry(5, 32, 32)
    assert _outward_fraction(geom, lambda c: np.zeros_like(c)) == 1.0


def test_foot_dome_is_upper_half():
    geom = sphere_geometry(2, 8, 6, 0, 2 * math.pi, 0, math.pi / 2)
    lo, hi = geom.bounds()
    assert lo[1] >= -1e-5
    assert hi[1] == pytest.approx(2, abs=1e-5)
    assert geom.vertex_count == 9 * 7
    # the open rim keeps all of its bottom row triangles
    assert geom.triangle_count == 2 * 8 * 6 - 8
    assert geom.params['theta_length'] == pytest.approx(math.pi / 2)


def test_cylinder_bounds_and_caps():
    geom = cylinder_geometry(0.9, 0.9, 10)
    lo, hi = geom.bounds()
    assert lo[1] == pytest.approx(-5)
    assert hi[1] == pytest.approx(5)
    assert hi[0] == pytest.approx(0.9, abs=1e-5)
    assert geom.vertex_count == 2 * 33 + 2 * 34
    assert geom.triangle_count == 2 * 32 + 2 * 32
    assert _outward_fraction(geom, lambda c: np.zeros_like(c)) == 1.0


def test_cylinder_taper():
    geom = cylinder_geometry(4.5, 5, 6, 32, 32)
    top = geom.vertices[np.isclose(geom.vertices[:, 1], 3)]
    bottom = geom.vertices[np.isclose(geom.vertices[:, 1], -3)]
    assert np.max(np.hypot(top[:, 0], top[:, 2])) == pytest.approx(4.5, abs=1e-5)
    assert np.max(np.hypot(bottom[:, 0], bottom[:, 2])) == pytest.approx(5, abs=1e-5)


def test_open_ended_cylinder_has_no_caps():
    geom = cylinder_geometry(1, 1, 2, 8, 1, open_ended=True)
    assert geom.vertex_count == 2 * 9
    assert geom.triangle_count == 16


def test_zero_height_cylinder_is_allowed():
    geom = cylinder_geometry(0.8, 0.8, 0)
    lo, hi = geom.bounds()
    assert lo[1] == hi[1] == 0
    assert np.all(np.isfinite(geom.normals))
    tri_verts, tri_norms = triangle_arrays(geom)
    assert np.all(np.isfinite(tri_norms))


def test_torus_arc():
    geom = torus_geometry(2.5, 0.25, 32, 32, math.pi / 3)
    xy = geom.vertices[:, :2].astype(float)
    dist = np.hypot(xy[:, 0], xy[:, 1])
    assert dist.min() >= 2.25 - 1e-5
    assert dist.max() <= 2.75 + 1e-5
    angles = np.arctan2(xy[:, 1], xy[:, 0])
    assert angles.min() >= -1e-5
    assert angles.max() <= math.pi / 3 + 1e-5
    assert np.abs(geom.vertices[:, 2]).max() <= 0.25 + 1e-6

    def tube_centre(c):
        u = np.arctan2(c[:, 1], c[:, 0])
        return np.stack([2.5 * np.cos(u), 2.5 * np.sin(u), np.zeros_like(u)], axis=1)

    assert _outward_fraction(geom, tube_centre) == 1.0


def test_circle_faces_plus_z():
    geom = circle_geometry(2)
    assert geom.vertex_count == 34
    assert geom.triangle_count == 32
    assert np.all(geom.vertices[:, 2] == 0)
    _, tri_norms = triangle_arrays(geom)
    assert np.allclose(tri_norms, [0, 0, 1], atol=1e-5)


def test_triangle_arrays_shapes():
    geom = sphere_geometry(1, 8, 4)
    tri_verts, tri_norms = triangle_arrays(geom)
    assert tri_verts.shape == (3 * geom.triangle_count, 3)
    assert tri_norms.shape == tri_verts.shape
    assert tri_verts.dtype == np.float32
    # flat shading: one normal per triangle
    per_tri = tri_norms.reshape(-1, 3, 3)
    assert np.allclose(per_tri[:, 0], per_tri[:, 1])
    assert np.allclose(per_tri[:, 0], per_tri[:, 2])


@pytest.mark.parametrize("make", [
    lambda: sphere_geometry(-1),
    lambda: sphere_geometry(float('nan')),
    lambda: sphere_geometry(1, 2, 16),
    lambda: sphere_geometry(1, 32, 1),
    lambda: sphere_geometry(1, 32.5, 16),
    lambda: sphere_geometry(1, phi_length=float('inf')),
    lambda: cylinder_geometry(1, 1, -10),
    lambda: cylinder_geometry(-0.9, 0.9, 10),
    lambda: cylinder_geometry(1, 1, 1, radial_segments=0),
    lambda: torus_geometry(2.5, -0.25),
    lambda: torus_geometry(2.5, 0.25, arc=float('nan')),
    lambda: circle_geometry(-2),
    lambda: circle_geometry(2, segments=2),
    lambda: circle_geometry("big"),
])
def test_invalid_parameters_raise(make):
    with pytest.raises(GeometryError):
        make()


def test_geometry_error_is_value_error():
    with pytest.raises(ValueError, match="radius"):
        sphere_geometry(-5)
