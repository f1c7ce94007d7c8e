"""Mouse and keyboard handling that steers the camera."""

from __future__ import annotations

from dataclasses import dataclass, field

from .camera import Camera, CameraMovement

# pyglet key symbols.
KEY_ESCAPE = 0xFF1B
KEY_W = ord("w")
KEY_S = ord("s")
KEY_A = ord("a")
KEY_D = ord("d")

_MOVEMENT_KEYS = (
    (KEY_W, CameraMovement.FORWARD),
    (KEY_S, CameraMovement.BACKWARD),
    (KEY_A, CameraMovement.LEFT),
    (KEY_D, CameraMovement.RIGHT),
)


@dataclass
class MouseLook:
    """Turns cursor positions (y growing downwards) into camera rotation."""

    last_x: float
    last_y: float
    first_mouse: bool = field(init=False, default=True)

    def on_cursor(self, xpos: float, ypos: float, camera: Camera) -> None:
        """Rotate ``camera`` by the movement since the previous cursor position."""
        if self.first_mouse:
            self.last_x, self.last_y = xpos, ypos
            self.first_mouse = False
        xoffset = xpos - self.last_x
        yoffset = self.last_y - ypos
        self.last_x, self.last_y = xpos, ypos
        camera.process_mouse_movement(xoffset, yoffset, True)


def process_scroll(camera: Camera, yoffset: float) -> None:
    """Zoom ``camera`` by a vertical scroll offset."""
    camera.process_mouse_scroll(float(yoffset))


def process_input(keys, window, delta_time: float, camera: Camera) -> None:
    """Close ``window`` on Escape and move ``camera`` with W, A, S and D.

    ``keys`` maps key symbols to whether they are held down.
    """
    if keys[KEY_ESCAPE]:
        window.close()
    for symbol, direction in _MOVEMENT_KEYS:
        if keys[symbol]:
            camera.process_keyboard(direction, delta_time)