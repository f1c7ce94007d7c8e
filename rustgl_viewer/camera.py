"""A first-person camera driven by Euler angles, plus the matrix helpers it needs.

All matrices are 4x4 ``numpy`` arrays in row-major mathematical layout and act
on column vectors, so a point ``p`` is transformed as ``matrix.dot(p)``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum, auto

import numpy as np

YAW = -90.0
PITCH = 0.0
SPEED = 2.5
SENSITIVITY = 0.1
ZOOM = 45.0

PITCH_LIMIT = 89.0
ZOOM_MIN = 1.0
ZOOM_MAX = 45.0


class CameraMovement(Enum):
    """Directions of keyboard-driven movement, independent of any window system."""

    FORWARD = auto()
    BACKWARD = auto()
    LEFT = auto()
    RIGHT = auto()


def _vec(values) -> np.ndarray:
    return np.array(values, dtype=float)


def _normalize(vector: np.ndarray) -> np.ndarray:
    return vector / np.linalg.norm(vector)


def look_at(eye, target, up) -> np.ndarray:
    """Right-handed view matrix looking from ``eye`` towards ``target``."""
    eye = _vec(eye)
    forward = _normalize(_vec(target) - eye)
    side = _normalize(np.cross(forward, _vec(up)))
    upward = np.cross(side, forward)
    return np.array(
        [
            [*side, -side.dot(eye)],
            [*upward, -upward.dot(eye)],
            [*(-forward), forward.dot(eye)],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def perspective(fovy_degrees, aspect, near, far) -> np.ndarray:
    """Perspective projection mapping the view frustum onto OpenGL clip space."""
    if not 0.0 < fovy_degrees < 180.0:
        raise ValueError(f"field of view must lie in (0, 180) degrees, got {fovy_degrees}")
    if aspect <= 0.0:
        raise ValueError(f"aspect ratio must be positive, got {aspect}")
    if near <= 0.0:
        raise ValueError(f"near plane must be positive, got {near}")
    if far <= 0.0:
        raise ValueError(f"far plane must be positive, got {far}")
    if far <= near:
        raise ValueError(f"far plane ({far}) must lie beyond near plane ({near})")
    focal = 1.0 / math.tan(math.radians(fovy_degrees) / 2.0)
    return np.array(
        [
            [focal / aspect, 0.0, 0.0, 0.0],
            [0.0, focal, 0.0, 0.0],
            [0.0, 0.0, (far + near) / (near - far), 2.0 * far * near / (near - far)],
            [0.0, 0.0, -1.0, 0.0],
        ]
    )


def translation(offset) -> np.ndarray:
    """Matrix that moves points by ``offset``."""
    matrix = np.identity(4)
    matrix[:3, 3] = _vec(offset)
    return matrix


def scaling(factor) -> np.ndarray:
    """Matrix that scales points uniformly by ``factor``."""
    return np.diag([float(factor)] * 3 + [1.0])


@dataclass(eq=False)
class Camera:
    """Fly-through camera; its direction vectors follow from ``yaw`` and ``pitch``."""

    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    world_up: np.ndarray = field(default_factory=lambda: _vec((0.0, 1.0, 0.0)))
    yaw: float = YAW
    pitch: float = PITCH
    movement_speed: float = SPEED
    mouse_sensitivity: float = SENSITIVITY
    zoom: float = ZOOM
    front: np.ndarray = field(init=False)
    right: np.ndarray = field(init=False)
    up: np.ndarray = field(init=False)

    def __post_init__(self) -> None:
        self.position = _vec(self.position)
        self.world_up = _vec(self.world_up)
        self._update_camera_vectors()

    def view_matrix(self) -> np.ndarray:
        """View matrix for the current position and orientation."""
        return look_at(self.position, self.position + self.front, self.up)

    def process_keyboard(self, direction: CameraMovement, delta_time: float) -> None:
        """Move the camera in ``direction`` for ``delta_time`` seconds."""
        velocity = self.movement_speed * delta_time
        steps = {
            CameraMovement.FORWARD: self.front,
            CameraMovement.BACKWARD: -self.front,
            CameraMovement.LEFT: -self.right,
            CameraMovement.RIGHT: self.right,
        }
        self.position = self.position + steps[direction] * velocity

    def process_mouse_movement(self, xoffset: float, yoffset: float, constrain_pitch: bool = True) -> None:
        """Turn the camera by a mouse offset, optionally keeping pitch within ±89°."""
        self.yaw += xoffset * self.mouse_sensitivity
        self.pitch += yoffset * self.mouse_sensitivity
        if constrain_pitch:
            self.pitch = min(max(self.pitch, -PITCH_LIMIT), PITCH_LIMIT)
        self._update_camera_vectors()

    def process_mouse_scroll(self, yoffset: float) -> None:
        """Zoom with the scroll wheel, keeping the field of view in [1, 45]."""
        if ZOOM_MIN <= self.zoom <= ZOOM_MAX:
            self.zoom -= yoffset
        if self.zoom <= ZOOM_MIN:
            self.zoom = ZOOM_MIN
        if self.zoom >= ZOOM_MAX:
            self.zoom = ZOOM_MAX

    def _update_camera_vectors(self) -> None:
        yaw = math.radians(self.yaw)
        pitch = math.radians(self.pitch)
        front = _vec(
            (
                math.cos(yaw) * math.cos(pitch),
                math.sin(pitch),
                math.sin(yaw) * math.cos(pitch),
            )
        )
        self.front = _normalize(front)
        self.right = _normalize(np.cross(self.front, self.world_up))
        self.up = _normalize(np.cross(self.right, self.front))