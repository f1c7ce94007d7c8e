"""Window and render loop that shows a textured model under a fly-through camera."""

from __future__ import annotations

import argparse

import numpy as np

from .camera import Camera, perspective, scaling, translation
from .input import MouseLook, process_input, process_scroll
from .model import Model
from .shader import Shader

SCR_WIDTH = 800
SCR_HEIGHT = 600
TITLE = "OpenGL + pyglet"
NEAR_PLANE = 0.1
FAR_PLANE = 100.0


def model_matrix() -> np.ndarray:
    """World transform of the displayed model."""
    return translation((0.0, 0.0, 0.0)) @ scaling(0.2)


def projection_matrix(camera: Camera, width, height) -> np.ndarray:
    """Perspective projection for ``camera``'s zoom and the given viewport size."""
    return perspective(camera.zoom, width / height, NEAR_PLANE, FAR_PLANE)


def _parse_args(argv):
    parser = argparse.ArgumentParser(description="Display an OBJ model with a free camera.")
    parser.add_argument("--model", default="./assets/models/nanosuit/nanosuit.obj")
    parser.add_argument("--vertex-shader", default="./assets/shaders/model.vert")
    parser.add_argument("--fragment-shader", default="./assets/shaders/model.frag")
    return parser.parse_args(argv)


class _Viewer:
    """Event handlers tying the window to the camera, shader and model."""

    def __init__(self, window, keys, shader: Shader, entity: Model, camera: Camera):
        self.window = window
        self.keys = keys
        self.shader = shader
        self.entity = entity
        self.camera = camera
        self.look = MouseLook(SCR_WIDTH / 2.0, SCR_HEIGHT / 2.0)
        self._cursor_x = self.look.last_x
        self._cursor_y = self.look.last_y

    def update(self, delta_time: float) -> None:
        process_input(self.keys, self.window, delta_time, self.camera)

    def on_mouse_motion(self, x, y, dx, dy) -> None:
        self._cursor_x += dx
        self._cursor_y -= dy
        self.look.on_cursor(self._cursor_x, self._cursor_y, self.camera)

    def on_mouse_scroll(self, x, y, scroll_x, scroll_y) -> None:
        process_scroll(self.camera, scroll_y)

    def on_draw(self) -> None:
        from pyglet import gl

        gl.glClearColor(0.2, 0.3, 0.3, 1.0)
        gl.glClear(gl.GL_COLOR_BUFFER_BIT | gl.GL_DEPTH_BUFFER_BIT)
        self.shader.use()
        self.shader.set_mat4("projection", projection_matrix(self.camera, SCR_WIDTH, SCR_HEIGHT))
        self.shader.set_mat4("view", self.camera.view_matrix())
        self.shader.set_mat4("model", model_matrix())
        self.entity.draw(self.shader)


def main(argv=None) -> int:
    """Open the window and render until it is closed."""
    args = _parse_args(argv)

    import pyglet
    from pyglet import gl
    from pyglet.window import key

    config = gl.Config(
        major_version=3, minor_version=3, forward_compatible=True,
        depth_size=24, double_buffer=True,
    )
    window = pyglet.window.Window(SCR_WIDTH, SCR_HEIGHT, TITLE, config=config, resizable=True)
    window.set_exclusive_mouse(True)
    keys = key.KeyStateHandler()
    window.push_handlers(keys)
    gl.glEnable(gl.GL_DEPTH_TEST)

    shader = Shader(args.vertex_shader, args.fragment_shader)
    entity = Model(args.model)
    camera = Camera(position=(0.0, 0.0, 3.0))

    viewer = _Viewer(window, keys, shader, entity, camera)
    window.push_handlers(viewer)
    pyglet.clock.schedule(viewer.update)
    pyglet.app.run()
    return 0