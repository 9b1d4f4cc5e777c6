"""Perspective camera producing view and projection matrices."""

from __future__ import annotations

import math

import numpy as np


def _vec3(value) -> np.ndarray:
    array = np.asarray(value, dtype=float)
    if array.shape != (3,):
        raise ValueError(f"expected a 3-component vector, got shape {array.shape}")
    return array.copy()


def look_at(eye, target, up) -> np.ndarray:
    """Right-handed view matrix looking from eye towards target.

    If up is parallel to the viewing direction another axis is used
    so that the matrix stays well defined.
    """
    eye, target, up = _vec3(eye), _vec3(target), _vec3(up)
    forward = target - eye
    length = np.linalg.norm(forward)
    if length == 0.0:
        raise ValueError("camera position and target coincide")
    forward /= length

    side = np.cross(forward, up)
    side_length = np.linalg.norm(side)
    if side_length < 1e-9:
        fallback = np.zeros(3)
        fallback[int(np.argmin(np.abs(forward)))] = 1.0
        side = np.cross(forward, fallback)
        side_length = np.linalg.norm(side)
    side /= side_length
    true_up = np.cross(side, forward)

    view = np.eye(4)
    view[0, :3] = side
    view[1, :3] = true_up
    view[2, :3] = -forward
    view[0, 3] = -side @ eye
    view[1, 3] = -true_up @ eye
    view[2, 3] = forward @ eye
    return view


def perspective(fov_degrees: float, aspect_ratio: float, near: float, far: float) -> np.ndarray:
    """Right-handed perspective projection with depth mapped to [-1, 1]."""
    if aspect_ratio == 0.0:
        raise ValueError("aspect ratio must be non-zero")
    tan_half = math.tan(math.radians(fov_degrees) / 2.0)
    projection = np.zeros((4, 4))
    projection[0, 0] = 1.0 / (aspect_ratio * tan_half)
    projection[1, 1] = 1.0 / tan_half
    projection[2, 2] = -(far + near) / (far - near)
    projection[3, 2] = -1.0
    projection[2, 3] = -(2.0 * far * near) / (far - near)
    return projection


class Camera:
    """A camera with a position, a target and an up direction."""

    def __init__(self, position=(0.0, 5.0, 10.0)):
        self.position = position
        self.target = (0.0, 0.0, 0.0)
        self.up = (0.0, 1.0, 0.0)
        self.fov = 60.0
        self.aspect_ratio = 16.0 / 9.0
        self.near_plane = 0.1
        self.far_plane = 200.0

    @property
    def position(self) -> np.ndarray:
        return self._position

    @position.setter
    def position(self, value) -> None:
        self._position = _vec3(value)

    @property
    def target(self) -> np.ndarray:
        return self._target

    @target.setter
    def target(self, value) -> None:
        self._target = _vec3(value)

    @property
    def up(self) -> np.ndarray:
        return self._up

    @up.setter
    def up(self, value) -> None:
        self._up = _vec3(value)

    @property
    def view_matrix(self) -> np.ndarray:
        """The view matrix for the current position, target and up."""
        return look_at(self._position, self._target, self._up)

    @property
    def projection(self) -> np.ndarray:
        """The projection matrix for the stored aspect ratio."""
        return self.projection_matrix(self.aspect_ratio)

    def set_top_down_view(self) -> None:
        """Place the camera above the origin looking straight down."""
        self.position = (0.0, 20.0, 0.0)
        self.target = (0.0, 0.0, 0.0)
        self.up = (0.0, 0.0, -1.0)

    def projection_matrix(self, aspect_ratio: float) -> np.ndarray:
        """Return the projection matrix for the given aspect ratio."""
        return perspective(self.fov, aspect_ratio, self.near_plane, self.far_plane)