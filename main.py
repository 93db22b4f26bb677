import math
import sys

# pyglet imports
import pyglet
from pyglet.window import key, mouse
import pyglet.gl as gl
from pyglet.math import Mat4, Vec3

# local module imports
import config
import logutil
import renderer
import shaders
from clown import Clown
from controls import ControlPanel
from geometry import sphere_geometry
from scene import Material, Mesh, Node


def camera_from_bounds(bounds, fov_degrees):
    """
    Return (target, distance) so a camera looking at the centre of the
    bounding box from that distance sees the whole box.
    """
    cx = (bounds['minx'] + bounds['maxx']) / 2.0
    cy = (bounds['miny'] + bounds['maxy']) / 2.0
    cz = (bounds['minz'] + bounds['maxz']) / 2.0
    dx = bounds['maxx'] - bounds['minx']
    dy = bounds['maxy'] - bounds['miny']
    dz = bounds['maxz'] - bounds['minz']
    radius = math.sqrt(dx * dx + dy * dy + dz * dz) / 2.0
    distance = radius / math.sin(math.radians(fov_degrees) / 2.0)
    return (cx, cy, cz), distance


class Window(pyglet.window.Window):

    def __init__(self, *args, **kwargs):
        super(Window, self).__init__(*args, **kwargs)

        self.program = shaders.create_flat_shader()
        self.renderer = renderer.SceneRenderer(self.program)

        # Yellow marker at the scene origin, which is also the point
        # between the clown's feet.
        self.scene = Node('scene')
        self.scene.add(Mesh(
            sphere_geometry(config.ORIGIN_MARKER_RADIUS),
            Material(config.ORIGIN_COLOR),
            name='origin',
        ))
        self.clown = Clown()
        self.scene.add(self.clown.node)
        self.panel = ControlPanel(self.clown, on_change=self._on_figure_changed)
        self._synced_build = None

        # Orbit camera. yaw is around +y, pitch up from the ground plane.
        self.target, self.distance = camera_from_bounds(config.CAMERA_BOUNDS, config.FIELD_OF_VIEW)
        self.yaw = 0.0
        self.pitch = 0.0

        self.help_label = pyglet.text.Label(
            'UP/DOWN select  LEFT/RIGHT adjust (SHIFT fine)  R reset  drag orbit  scroll zoom',
            font_name='Arial', font_size=11,
            x=10, y=10, anchor_x='left', anchor_y='bottom',
            color=(0, 0, 0, 255))
        self.panel_label = pyglet.text.Label(
            '', font_name='Courier New', font_size=11,
            x=10, y=self.height - 10, anchor_x='left', anchor_y='top',
            multiline=True, width=320,
            color=(0, 0, 0, 255))
        self._update_panel_label()

        gl.glClearColor(*config.BACKGROUND_COLOR)

    def _on_figure_changed(self):
        self._update_panel_label()

    def _update_panel_label(self):
        self.panel_label.text = '\n'.join(self.panel.lines())

    def on_resize(self, width, height):
        self.panel_label.y = height - 10
        return super(Window, self).on_resize(width, height)

    def on_key_press(self, symbol, modifiers):
        fine = bool(modifiers & key.MOD_SHIFT)
        if symbol == key.UP:
            self.panel.select(-1)
            self._update_panel_label()
        elif symbol == key.DOWN:
            self.panel.select(1)
            self._update_panel_label()
        elif symbol == key.LEFT:
            self.panel.nudge(-1, fine=fine)
        elif symbol == key.RIGHT:
            self.panel.nudge(1, fine=fine)
        elif symbol == key.R:
            self.panel.reset()
        elif symbol == key.ESCAPE:
            self.close()

    def on_mouse_drag(self, x, y, dx, dy, buttons, modifiers):
        if buttons & mouse.LEFT:
            self.yaw -= dx * config.ORBIT_SPEED
            limit = math.pi / 2 - 0.01
            self.pitch = max(-limit, min(limit, self.pitch - dy * config.ORBIT_SPEED))

    def on_mouse_scroll(self, x, y, scroll_x, scroll_y):
        self.distance *= config.ZOOM_FACTOR ** (-scroll_y)

    def get_view_projection(self):
        width, height = self.get_framebuffer_size()
        aspect = width / float(max(1, height))
        projection = Mat4.perspective_projection(aspect, 0.1, 1000.0, config.FIELD_OF_VIEW)

        tx, ty, tz = self.target
        eye = Vec3(
            tx + self.distance * math.cos(self.pitch) * math.sin(self.yaw),
            ty + self.distance * math.sin(self.pitch),
            tz + self.distance * math.cos(self.pitch) * math.cos(self.yaw),
        )
        view = Mat4.look_at(eye, Vec3(tx, ty, tz), Vec3(0.0, 1.0, 0.0))
        return projection, view

    def on_draw(self):
        if self.clown.current is not self._synced_build:
            self.renderer.sync(self.scene)
            self._synced_build = self.clown.current

        self.clear()
        width, height = self.get_framebuffer_size()
        gl.glEnable(gl.GL_DEPTH_TEST)
        gl.glViewport(0, 0, width, height)
        projection, view = self.get_view_projection()
        self.program.use()
        self.program['u_projection'] = projection
        self.program['u_view'] = view
        self.program['u_light_dir'] = config.LIGHT_DIR
        self.renderer.draw(self.scene)
        self.program.stop()

        gl.glDisable(gl.GL_DEPTH_TEST)
        self.panel_label.draw()
        self.help_label.draw()

    def on_close(self):
        self.renderer.delete()
        super(Window, self).on_close()


def main():
    if '--debug' in sys.argv[1:]:
        config.LOG_DEBUG = True
    window = Window(width=config.WINDOW_WIDTH, height=config.WINDOW_HEIGHT,
                    caption='Clown', resizable=True)
    logutil.log("MAIN", f"viewer started params={window.clown.params}")
    pyglet.app.run()


if __name__ == '__main__':
    main()
