import os
import sys

import numpy as np

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from geometry import circle_geometry
from scene import Material, Mesh, Node


def test_add_reparents():
    a = Node('a')
    b = Node('b')
    child = Node('child')
    a.add(child)
    b.add(child)
    assert child.parent is b
    assert a.children == []
    assert b.children == [child]


def test_remove_detaches():
    root = Node('root')
    child = Node('child')
    root.add(child)
    root.remove(child)
    assert child.parent is None
    assert root.children == []
    # removing a non-child is ignored
    root.remove(Node('other'))


def test_traverse_and_find():
    root = Node('root')
    left = Node('left')
    right = Node('right')
    leaf = Node('leaf')
    left.add(leaf)
    root.add(left, right)
    assert [n.name for n in root.traverse()] == ['root', 'left', 'leaf', 'right']
    assert root.find('leaf') is leaf
    assert root.find('missing') is None


def test_defaults():
    node = Node()
    assert np.array_equal(node.position, [0, 0, 0])
    assert np.array_equal(node.rotation, [0, 0, 0])
    assert np.array_equal(node.scale, [1, 1, 1])


def test_world_position_chains_translations():
    root = Node('root', position=(1, 2, 3))
    mid = Node('mid', position=(0, 5, 0))
    leaf = Node('leaf', position=(-1, 0, 0.5))
    root.add(mid)
    mid.add(leaf)
    assert np.allclose(mid.world_position(), [1, 7, 3])
    assert np.allclose(leaf.world_position(), [0, 7, 3.5])


def test_local_matrix_identity():
    m = Node().local_matrix()
    assert np.allclose(list(m), np.eye(4).ravel())


def test_mesh_holds_geometry_and_material():
    geom = circle_geometry(2)
    mat = Material(0x19efb3)
    mesh = Mesh(geom, mat, name='sole', position=(0, -10.001, 0))
    assert mesh.geometry is geom
    assert mesh.material is mat
    assert mesh.name == 'sole'
    assert mesh.position[1] == -10.001
    assert mat.flat_shading
    assert mat.rgb() == (0x19, 0xef, 0xb3)
