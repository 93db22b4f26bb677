"""
Minimal scene graph: transform nodes, flat colored meshes.

A node's local transform is translate * rotate * scale, with the
rotation given as Euler angles in radians applied in X, Y, Z order
(R = Rx @ Ry @ Rz). Children inherit their parent's transform.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional

import numpy as np
from pyglet.math import Mat4, Vec3

from geometry import Geometry


@dataclass
class Material:
    color: int = 0xffffff
    flat_shading: bool = True

    def rgb(self):
        """Color as an (r, g, b) tuple in 0..255."""
        return ((self.color >> 16) & 0xff, (self.color >> 8) & 0xff, self.color & 0xff)


class Node:
    def __init__(self, name=None, position=(0, 0, 0), rotation=(0, 0, 0), scale=(1, 1, 1)):
        self.name = name
        self.position = np.array(position, dtype=float)
        self.rotation = np.array(rotation, dtype=float)
        self.scale = np.array(scale, dtype=float)
        self.parent: Optional[Node] = None
        self.children: List[Node] = []

    def __repr__(self):
        return f"<{self.__class__.__name__} {self.name!r} children={len(self.children)}>"

    def add(self, *nodes):
        for node in nodes:
            if node.parent is not None:
                node.parent.remove(node)
            node.parent = self
            self.children.append(node)
        return self

    def remove(self, *nodes):
        for node in nodes:
            if node in self.children:
                self.children.remove(node)
                node.parent = None
        return self

    def traverse(self) -> Iterator[Node]:
        """Depth-first walk, this node first."""
        yield self
        for child in self.children:
            yield from child.traverse()

    def find(self, name) -> Optional[Node]:
        for node in self.traverse():
            if node.name == name:
                return node
        return None

    def local_matrix(self) -> Mat4:
        rx, ry, rz = (float(a) for a in self.rotation)
        rot_mat = Mat4.from_rotation(rx, Vec3(1, 0, 0))
        rot_mat = rot_mat @ Mat4.from_rotation(ry, Vec3(0, 1, 0))
        rot_mat = rot_mat @ Mat4.from_rotation(rz, Vec3(0, 0, 1))
        pos_mat = Mat4.from_translation(Vec3(*(float(v) for v in self.position)))
        scale_mat = Mat4.from_scale(Vec3(*(float(v) for v in self.scale)))
        return pos_mat @ rot_mat @ scale_mat

    def world_matrix(self) -> Mat4:
        matrix = self.local_matrix()
        node = self.parent
        while node is not None:
            matrix = node.local_matrix() @ matrix
            node = node.parent
        return matrix

    def world_position(self) -> np.ndarray:
        m = self.world_matrix()
        # column-major: translation lives in the last column
        return np.array([m[12], m[13], m[14]], dtype=float)


class Mesh(Node):
    def __init__(self, geometry: Geometry, material: Material, name=None, **transform):
        super().__init__(name, **transform)
        self.geometry = geometry
        self.material = material
