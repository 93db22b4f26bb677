import numpy as np
import pyglet.gl as gl
from pyglet.math import Mat4

import logutil
from geometry import triangle_arrays
from scene import Mesh


class SceneRenderer:
    """
    Draws a scene graph of `Mesh` nodes with one vertex list per mesh.

    Call `sync(root)` whenever meshes were added or removed (the clown
    rebuilds on every parameter change); `draw(root)` only walks the
    tree and uploads each mesh's world matrix.
    """

    def __init__(self, program):
        self.program = program
        self._meshes = {}

    def sync(self, root):
        live = {}
        created = 0
        for node in root.traverse():
            if not isinstance(node, Mesh):
                continue
            entry = self._meshes.pop(id(node), None)
            if entry is None or entry[0] is not node:
                if entry is not None:
                    entry[1].delete()
                entry = (node, self._upload(node))
                created += 1
            live[id(node)] = entry
        for _, vertex_list in self._meshes.values():
            vertex_list.delete()
        dropped = len(self._meshes)
        self._meshes = live
        logutil.log("RENDER", f"sync meshes={len(live)} created={created} dropped={dropped}", level="DEBUG")

    def _upload(self, mesh):
        tri_verts, tri_norms = triangle_arrays(mesh.geometry)
        count = tri_verts.shape[0]
        r, g, b = mesh.material.rgb()
        rgba = np.array([r, g, b, 255.0], dtype='f4')
        tri_col = np.broadcast_to(rgba, (count, 4)).astype('f4')
        return self.program.vertex_list(
            count,
            gl.GL_TRIANGLES,
            position=('f', tri_verts.ravel()),
            normal=('f', tri_norms.ravel()),
            color=('f', tri_col.ravel()),
        )

    def draw(self, root, parent_matrix=None):
        self._draw_node(root, parent_matrix if parent_matrix is not None else Mat4())

    def _draw_node(self, node, parent_matrix):
        draw_matrix = parent_matrix @ node.local_matrix()
        entry = self._meshes.get(id(node))
        if entry is not None and entry[0] is node:
            self.program['u_model'] = draw_matrix
            entry[1].draw(gl.GL_TRIANGLES)
        for child in node.children:
            self._draw_node(child, draw_matrix)

    def delete(self):
        for _, vertex_list in self._meshes.values():
            vertex_list.delete()
        self._meshes = {}
