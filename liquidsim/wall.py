"""Axis-aligned box walls that bound the simulation volume."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

Vec3 = tuple[float, float, float]

# Unit cube centred on the origin: 6 faces x 4 vertices, each as
# (x, y, z, nx, ny, nz).
_UNIT_BOX_VERTICES = np.array(
    [
        # back face (-Z)
        [-0.5, -0.5, -0.5, 0.0, 0.0, -1.0],
        [0.5, -0.5, -0.5, 0.0, 0.0, -1.0],
        [0.5, 0.5, -0.5, 0.0, 0.0, -1.0],
        [-0.5, 0.5, -0.5, 0.0, 0.0, -1.0],
        # front face (+Z)
        [-0.5, -0.5, 0.5, 0.0, 0.0, 1.0],
        [0.5, -0.5, 0.5, 0.0, 0.0, 1.0],
        [0.5, 0.5, 0.5, 0.0, 0.0, 1.0],
        [-0.5, 0.5, 0.5, 0.0, 0.0, 1.0],
        # left face (-X)
        [-0.5, 0.5, 0.5, -1.0, 0.0, 0.0],
        [-0.5, 0.5, -0.5, -1.0, 0.0, 0.0],
        [-0.5, -0.5, -0.5, -1.0, 0.0, 0.0],
        [-0.5, -0.5, 0.5, -1.0, 0.0, 0.0],
        # right face (+X)
        [0.5, 0.5, 0.5, 1.0, 0.0, 0.0],
        [0.5, 0.5, -0.5, 1.0, 0.0, 0.0],
        [0.5, -0.5, -0.5, 1.0, 0.0, 0.0],
        [0.5, -0.5, 0.5, 1.0, 0.0, 0.0],
        # bottom face (-Y)
        [-0.5, -0.5, -0.5, 0.0, -1.0, 0.0],
        [0.5, -0.5, -0.5, 0.0, -1.0, 0.0],
        [0.5, -0.5, 0.5, 0.0, -1.0, 0.0],
        [-0.5, -0.5, 0.5, 0.0, -1.0, 0.0],
        # top face (+Y)
        [-0.5, 0.5, -0.5, 0.0, 1.0, 0.0],
        [0.5, 0.5, -0.5, 0.0, 1.0, 0.0],
        [0.5, 0.5, 0.5, 0.0, 1.0, 0.0],
        [-0.5, 0.5, 0.5, 0.0, 1.0, 0.0],
    ],
    dtype=np.float32,
)

_UNIT_BOX_INDICES = np.array(
    [
        base + offset
        for base in range(0, 24, 4)
        for offset in (0, 1, 2, 2, 3, 0)
    ],
    dtype=np.uint32,
)


def _vec3(value) -> Vec3:
    x, y, z = (float(component) for component in value)
    return (x, y, z)


@dataclass(frozen=True)
class Wall:
    """A box wall given by its centre position and its extent on each axis."""

    position: Vec3
    size: Vec3

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", _vec3(self.position))
        object.__setattr__(self, "size", _vec3(self.size))

    def model_matrix(self) -> np.ndarray:
        """Return the 4x4 transform that translates then scales a unit box."""
        translate = np.eye(4)
        translate[:3, 3] = self.position
        scale = np.diag([*self.size, 1.0])
        return translate @ scale

    def generate_mesh(self) -> tuple[np.ndarray, np.ndarray]:
        """Return the unit-box mesh as (vertices, indices).

        Vertices have shape (24, 6): position followed by face normal.
        Indices have shape (36,): two triangles per face.
        """
        return _UNIT_BOX_VERTICES.copy(), _UNIT_BOX_INDICES.copy()