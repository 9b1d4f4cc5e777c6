"""Particle state and the per-particle physics shared by the simulation."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

# Palette of the six particle groups: blue, pink, mint, orange, purple, cyan.
GROUP_COLORS: tuple[tuple[float, float, float], ...] = (
    (0.2, 0.6, 1.0),
    (1.0, 0.3, 0.5),
    (0.3, 1.0, 0.6),
    (1.0, 0.7, 0.2),
    (0.8, 0.3, 1.0),
    (0.3, 1.0, 1.0),
)

# Interior of the shallow box the particles live in.
BOX_HALF_WIDTH = 15.0
BOX_HALF_DEPTH = 10.0
BOX_HEIGHT = 5.0

WAVE_MAX_DISTANCE = 20.0

_SIDE_RESTITUTION = 0.3
_FLOOR_RESTITUTION = 0.5
_COLLISION_RESTITUTION = 0.1


def _vec3(value) -> np.ndarray:
    array = np.array(value, dtype=float)
    if array.shape != (3,):
        raise ValueError(f"expected a 3-component vector, got shape {array.shape}")
    return array


@dataclass
class LiquidParticle:
    """One sphere of liquid with its motion, colour and wave state."""

    position: np.ndarray
    velocity: np.ndarray
    color: np.ndarray
    base_radius: float
    mass: float
    target_color: np.ndarray | None = None
    radius: float | None = None
    color_transition_speed: float = 2.0
    wave_phase: float = 0.0
    wave_amplitude: float = 0.0
    wave_decay: float = 0.9

    def __post_init__(self) -> None:
        self.position = _vec3(self.position)
        self.velocity = _vec3(self.velocity)
        self.color = _vec3(self.color)
        self.target_color = (
            self.color.copy() if self.target_color is None else _vec3(self.target_color)
        )
        if self.radius is None:
            self.radius = self.base_radius


@dataclass
class GroupCentroid:
    """The moving centre that a colour group is drawn towards."""

    position: np.ndarray
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    color: np.ndarray = field(default_factory=lambda: np.ones(3))
    phase: float = 0.0

    def __post_init__(self) -> None:
        self.position = _vec3(self.position)
        self.velocity = _vec3(self.velocity)
        self.color = _vec3(self.color)


def _line() -> list[tuple[float, float, float]]:
    count, spacing = 20, 0.8
    return [((i - count / 2.0) * spacing, 0.0, 0.0) for i in range(count)]


def _triangle() -> list[tuple[float, float, float]]:
    return [
        ((i - layer / 2.0) * 0.7, 0.0, layer * 0.6)
        for layer in range(8)
        for i in range(layer + 1)
    ]


def _ring() -> list[tuple[float, float, float]]:
    count, radius = 24, 2.5
    angles = (i / count * 2.0 * math.pi for i in range(count))
    return [(math.cos(a) * radius, 0.0, math.sin(a) * radius) for a in angles]


def _cross() -> list[tuple[float, float, float]]:
    arm = 10
    horizontal = [(i * 0.6, 0.0, 0.0) for i in range(-arm, arm + 1) if i != 0]
    vertical = [(0.0, 0.0, i * 0.6) for i in range(-arm, arm + 1)]
    return horizontal + vertical


def _cluster(rng) -> list[tuple[float, float, float]]:
    offsets = []
    for _ in range(30):
        u, v, w = rng.random(), rng.random(), rng.random()
        r = 1.2 * w**0.33
        theta = u * 2.0 * math.pi
        phi = math.acos(max(-1.0, min(1.0, 2.0 * v - 1.0)))
        offsets.append(
            (
                r * math.sin(phi) * math.cos(theta),
                r * abs(math.cos(phi)) * 0.3,
                r * math.sin(phi) * math.sin(theta),
            )
        )
    return offsets


def shape_offsets(shape_type: int, rng) -> np.ndarray:
    """Offsets from a group centre for one compound shape, shape (n, 3).

    0 is a line, 1 a triangle, 2 a ring, 3 a cross; any other value gives
    a flattened random cluster drawn from ``rng``.
    """
    builders = {0: _line, 1: _triangle, 2: _ring, 3: _cross}
    builder = builders.get(shape_type)
    offsets = builder() if builder is not None else _cluster(rng)
    return np.array(offsets, dtype=float)


def propagate_wave(particles: list[LiquidParticle], source_index: int, intensity: float) -> None:
    """Spread wave energy from one particle to similarly coloured neighbours."""
    if not 0 <= source_index < len(particles):
        return
    source = particles[source_index]
    for index, particle in enumerate(particles):
        if index == source_index:
            continue
        dist = float(np.linalg.norm(particle.position - source.position))
        if not 0.001 < dist < WAVE_MAX_DISTANCE:
            continue
        color_similarity = max(0.0, 1.0 - float(np.linalg.norm(particle.color - source.color)))
        falloff = (1.0 - dist / WAVE_MAX_DISTANCE) ** 2 * color_similarity
        particle.wave_amplitude = max(particle.wave_amplitude, intensity * falloff)
        if color_similarity > 0.8:
            particle.wave_phase = source.wave_phase - dist * 0.3


def update_waves(particles: list[LiquidParticle], delta_time: float) -> None:
    """Advance wave phase, decay amplitude and turn the wave into motion."""
    for particle in particles:
        particle.wave_phase += delta_time * 2.0
        particle.wave_amplitude *= 1.0 - delta_time * (1.0 - particle.wave_decay)
        particle.radius = particle.base_radius

        phase = particle.wave_phase
        effect = math.sin(phase) * particle.wave_amplitude
        wave_force = np.array(
            [
                math.cos(phase * 1.3) * effect * 2.0,
                math.sin(phase * 2.1) * effect,
                math.sin(phase * 0.7) * effect * 2.0,
            ]
        )
        particle.velocity = particle.velocity + wave_force * delta_time


def resolve_collisions(particles: list[LiquidParticle]) -> None:
    """Push overlapping pairs apart and exchange an impulse between them."""
    count = len(particles)
    for i in range(count):
        first = particles[i]
        for j in range(i + 1, count):
            second = particles[j]
            diff = first.position - second.position
            dist_sq = float(diff @ diff)
            min_distance = first.radius + second.radius
            if not 0.0001 < dist_sq < min_distance * min_distance:
                continue

            distance = math.sqrt(dist_sq)
            normal = diff / distance
            overlap = min_distance - distance
            first.position = first.position + normal * overlap * 0.5
            second.position = second.position - normal * overlap * 0.5

            vel_along_normal = float((first.velocity - second.velocity) @ normal)
            if vel_along_normal > 0:
                magnitude = -(1.0 + _COLLISION_RESTITUTION) * vel_along_normal
                magnitude /= 1.0 / first.mass + 1.0 / second.mass
                impulse = magnitude * normal
                first.velocity = first.velocity + impulse / first.mass
                second.velocity = second.velocity - impulse / second.mass

                collision_intensity = min(1.0, vel_along_normal * 0.1)
                propagate_wave(particles, i, collision_intensity)
                propagate_wave(particles, j, collision_intensity * 0.8)


def handle_wall_collisions(particles: list[LiquidParticle]) -> None:
    """Keep particles inside the box, bouncing them off its faces."""
    bounds = (
        (0, -BOX_HALF_WIDTH, BOX_HALF_WIDTH, _SIDE_RESTITUTION),
        (2, -BOX_HALF_DEPTH, BOX_HALF_DEPTH, _SIDE_RESTITUTION),
        (1, 0.0, BOX_HEIGHT, _FLOOR_RESTITUTION),
    )
    for particle in particles:
        position, velocity, radius = particle.position, particle.velocity, particle.radius
        for axis, low, high, restitution in bounds:
            if position[axis] - radius < low:
                position[axis] = low + radius
                velocity[axis] = -velocity[axis] * restitution
            if position[axis] + radius > high:
                position[axis] = high - radius
                velocity[axis] = -velocity[axis] * restitution