"""
Primitive geometry generators.

Each generator returns a `Geometry` holding indexed triangle data
(float32 vertices and normals, uint32 triangle indices). The layouts
follow the usual conventions for these shapes: spheres are swept by an
azimuth angle `phi` around +y and a polar angle `theta` measured down
from +y, cylinders are centred on the origin along y, and the torus and
circle lie in the xy plane facing +z.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

import numpy as np

TWO_PI = 2 * math.pi


class GeometryError(ValueError):
    """Raised when a primitive is given an invalid geometry parameter."""


@dataclass
class Geometry:
    kind: str
    vertices: np.ndarray
    normals: np.ndarray
    indices: np.ndarray
    params: Dict[str, Any] = field(default_factory=dict)

    @property
    def vertex_count(self) -> int:
        return int(self.vertices.shape[0])

    @property
    def triangle_count(self) -> int:
        return int(self.indices.shape[0])

    def bounds(self) -> Tuple[np.ndarray, np.ndarray]:
        return self.vertices.min(axis=0), self.vertices.max(axis=0)


def _check_length(name, value):
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise GeometryError(f"invalid geometry parameter {name}={value!r}: not a number") from None
    if not math.isfinite(value) or value < 0:
        raise GeometryError(f"invalid geometry parameter {name}={value!r}: must be finite and >= 0")
    return value


def _check_angle(name, value):
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise GeometryError(f"invalid geometry parameter {name}={value!r}: not a number") from None
    if not math.isfinite(value):
        raise GeometryError(f"invalid geometry parameter {name}={value!r}: must be finite")
    return value


def _check_segments(name, value, minimum):
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < minimum:
        raise GeometryError(f"invalid geometry parameter {name}={value!r}: must be an integer >= {minimum}")
    return int(value)


def _grid_indices(rows, cols):
    """Quad grid of (rows+1) x (cols+1) vertices split into two triangles per cell."""
    idx = np.arange((rows + 1) * (cols + 1), dtype=np.uint32).reshape(rows + 1, cols + 1)
    a = idx[:-1, 1:]
    b = idx[:-1, :-1]
    c = idx[1:, :-1]
    d = idx[1:, 1:]
    first = np.stack([a, b, d], axis=-1)
    second = np.stack([b, c, d], axis=-1)
    return first, second


def sphere_geometry(
    radius=1.0,
    width_segments=32,
    height_segments=16,
    phi_start=0.0,
    phi_length=TWO_PI,
    theta_start=0.0,
    theta_length=math.pi,
) -> Geometry:
    radius = _check_length("radius", radius)
    width_segments = _check_segments("width_segments", width_segments, 3)
    height_segments = _check_segments("height_segments", height_segments, 2)
    phi_start = _check_angle("phi_start", phi_start)
    phi_length = _check_angle("phi_length", phi_length)
    theta_start = _check_angle("theta_start", theta_start)
    theta_length = _check_angle("theta_length", theta_length)
    theta_end = min(theta_start + theta_length, math.pi)

    u = np.arange(width_segments + 1) / width_segments
    v = np.arange(height_segments + 1) / height_segments
    phi = phi_start + u[np.newaxis, :] * phi_length
    theta = theta_start + v[:, np.newaxis] * theta_length

    # Unit direction doubles as the normal.
    nx = -np.cos(phi) * np.sin(theta)
    ny = np.broadcast_to(np.cos(theta), nx.shape)
    nz = np.sin(phi) * np.sin(theta)
    normals = np.stack([nx, ny, nz], axis=-1).reshape(-1, 3)
    vertices = normals * radius

    first, second = _grid_indices(height_segments, width_segments)
    # Skip the zero-area triangles that meet at a closed pole.
    if theta_start <= 0:
        first = first[1:]
    if theta_end >= math.pi:
        second = second[:-1]
    indices = np.concatenate([first.reshape(-1, 3), second.reshape(-1, 3)])

    return Geometry(
        "sphere",
        vertices.astype(np.float32),
        normals.astype(np.float32),
        indices.astype(np.uint32),
        params=dict(radius=radius, width_segments=width_segments, height_segments=height_segments,
                    phi_start=phi_start, phi_length=phi_length,
                    theta_start=theta_start, theta_length=theta_length),
    )


def cylinder_geometry(
    radius_top=1.0,
    radius_bottom=1.0,
    height=1.0,
    radial_segments=32,
    height_segments=1,
    open_ended=False,
) -> Geometry:
    radius_top = _check_length("radius_top", radius_top)
    radius_bottom = _check_length("radius_bottom", radius_bottom)
    height = _check_length("height", height)
    radial_segments = _check_segments("radial_segments", radial_segments, 3)
    height_segments = _check_segments("height_segments", height_segments, 1)
    half_height = height / 2.0

    u = np.arange(radial_segments + 1) / radial_segments
    v = np.arange(height_segments + 1) / height_segments
    theta = u * TWO_PI
    sin_t = np.sin(theta)[np.newaxis, :]
    cos_t = np.cos(theta)[np.newaxis, :]
    ring_radius = (v * (radius_bottom - radius_top) + radius_top)[:, np.newaxis]

    x = ring_radius * sin_t
    y = np.broadcast_to((half_height - v * height)[:, np.newaxis], x.shape)
    z = ring_radius * cos_t
    vertices = [np.stack([x, y, z], axis=-1).reshape(-1, 3)]

    slope = (radius_bottom - radius_top) / height if height > 0 else 0.0
    side_normal = np.stack([np.sin(theta), np.full_like(theta, slope), np.cos(theta)], axis=-1)
    side_normal /= np.linalg.norm(side_normal, axis=-1, keepdims=True)
    normals = [np.tile(side_normal, (height_segments + 1, 1))]

    first, second = _grid_indices(height_segments, radial_segments)
    indices = [first.reshape(-1, 3), second.reshape(-1, 3)]
    offset = vertices[0].shape[0]

    if not open_ended:
        for top, cap_radius in ((True, radius_top), (False, radius_bottom)):
            if cap_radius <= 0:
                continue
            sign = 1.0 if top else -1.0
            ring = np.stack([
                cap_radius * np.sin(theta),
                np.full_like(theta, sign * half_height),
                cap_radius * np.cos(theta),
            ], axis=-1)
            center = np.array([[0.0, sign * half_height, 0.0]])
            vertices.append(np.concatenate([center, ring]))
            normals.append(np.tile([0.0, sign, 0.0], (radial_segments + 2, 1)))
            ring_idx = offset + 1 + np.arange(radial_segments)
            center_idx = np.full(radial_segments, offset)
            if top:
                faces = np.stack([ring_idx, ring_idx + 1, center_idx], axis=-1)
            else:
                faces = np.stack([ring_idx + 1, ring_idx, center_idx], axis=-1)
            indices.append(faces)
            offset += radial_segments + 2

    return Geometry(
        "cylinder",
        np.concatenate(vertices).astype(np.float32),
        np.concatenate(normals).astype(np.float32),
        np.concatenate(indices).astype(np.uint32),
        params=dict(radius_top=radius_top, radius_bottom=radius_bottom, height=height,
                    radial_segments=radial_segments, height_segments=height_segments,
                    open_ended=bool(open_ended)),
    )


def torus_geometry(radius=1.0, tube=0.4, radial_segments=12, tubular_segments=48, arc=TWO_PI) -> Geometry:
    radius = _check_length("radius", radius)
    tube = _check_length("tube", tube)
    radial_segments = _check_segments("radial_segments", radial_segments, 3)
    tubular_segments = _check_segments("tubular_segments", tubular_segments, 3)
    arc = _check_angle("arc", arc)

    # rows follow the tube cross section, columns follow the arc
    v = (np.arange(radial_segments + 1) / radial_segments * TWO_PI)[:, np.newaxis]
    u = (np.arange(tubular_segments + 1) / tubular_segments * arc)[np.newaxis, :]

    ring = radius + tube * np.cos(v)
    x = ring * np.cos(u)
    y = ring * np.sin(u)
    z = np.broadcast_to(tube * np.sin(v), x.shape)
    vertices = np.stack([x, y, z], axis=-1).reshape(-1, 3)

    nx = np.cos(v) * np.cos(u)
    ny = np.cos(v) * np.sin(u)
    nz = np.broadcast_to(np.sin(v), nx.shape)
    normals = np.stack([nx, ny, nz], axis=-1).reshape(-1, 3)

    first, second = _grid_indices(radial_segments, tubular_segments)
    # flip winding so faces point away from the tube centre
    indices = np.concatenate([first.reshape(-1, 3), second.reshape(-1, 3)])[:, [0, 2, 1]]

    return Geometry(
        "torus",
        vertices.astype(np.float32),
        normals.astype(np.float32),
        indices.astype(np.uint32),
        params=dict(radius=radius, tube=tube, radial_segments=radial_segments,
                    tubular_segments=tubular_segments, arc=arc),
    )


def circle_geometry(radius=1.0, segments=32, theta_start=0.0, theta_length=TWO_PI) -> Geometry:
    radius = _check_length("radius", radius)
    segments = _check_segments("segments", segments, 3)
    theta_start = _check_angle("theta_start", theta_start)
    theta_length = _check_angle("theta_length", theta_length)

    angle = theta_start + np.arange(segments + 1) / segments * theta_length
    rim = np.stack([radius * np.cos(angle), radius * np.sin(angle), np.zeros_like(angle)], axis=-1)
    vertices = np.concatenate([np.zeros((1, 3)), rim])
    normals = np.tile([0.0, 0.0, 1.0], (segments + 2, 1))
    rim_idx = 1 + np.arange(segments)
    indices = np.stack([rim_idx, rim_idx + 1, np.zeros(segments, dtype=int)], axis=-1)

    return Geometry(
        "circle",
        vertices.astype(np.float32),
        normals.astype(np.float32),
        indices.astype(np.uint32),
        params=dict(radius=radius, segments=segments, theta_start=theta_start, theta_length=theta_length),
    )


def triangle_arrays(geometry: Geometry) -> Tuple[np.ndarray, np.ndarray]:
    """
    Expand an indexed geometry to explicit triangles with one face normal
    per triangle, repeated on its three vertices (flat shading).

    Returns (positions, normals), each of shape (3 * triangle_count, 3).
    Zero-area triangles get a zero normal.
    """
    tri = geometry.vertices[geometry.indices]          # (M, 3, 3)
    face = np.cross(tri[:, 1] - tri[:, 0], tri[:, 2] - tri[:, 0])
    length = np.linalg.norm(face, axis=-1, keepdims=True)
    face = np.divide(face, length, out=np.zeros_like(face), where=length > 0)
    tri_norms = np.repeat(face[:, np.newaxis, :], 3, axis=1)
    return tri.reshape(-1, 3).astype('f4'), tri_norms.reshape(-1, 3).astype('f4')
