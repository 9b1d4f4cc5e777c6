"""Colour-group liquid simulation inside a shallow box."""

from __future__ import annotations

import math
import random
from numbers import Real

import numpy as np

from .particle import (
    BOX_HALF_DEPTH,
    BOX_HALF_WIDTH,
    BOX_HEIGHT,
    GROUP_COLORS,
    GroupCentroid,
    LiquidParticle,
    handle_wall_collisions,
    propagate_wave,
    resolve_collisions,
    shape_offsets,
    update_waves,
)
from .wall import Wall

SPAWN_INTERVAL = 0.05
MAX_PARTICLES = 800


class LiquidSimulation:
    """Groups of coloured particles that flock, mix and take each other over.

    ``seed`` makes a run reproducible. Periodic spawning of new particles is
    off unless ``spawn_particles`` is set.
    """

    def __init__(self, width: float, height: float, *, seed=None, spawn_particles: bool = False):
        self.width = float(width)
        self.height = float(height)
        self.gravity = -2.0
        self.pressure_constant = 2000.0
        self.viscosity_constant = 50.0
        self.rest_density = 1000.0
        self.smoothing_radius = 2.0
        self.damping = 0.99
        self.spawn_particles = spawn_particles
        self.time_since_last_spawn = 0.0
        self.global_time = 0.0

        self._rng = random.Random(seed)
        self._particles: list[LiquidParticle] = []
        self._walls: list[Wall] = []
        self._neighbors: list[int] = []

        self._initialize_walls()
        self._initialize_particles()

        group_count = len(GROUP_COLORS)
        self.group_centroids: list[GroupCentroid] = []
        for index, color in enumerate(GROUP_COLORS):
            angle = index / group_count * 2.0 * math.pi
            self.group_centroids.append(
                GroupCentroid(
                    position=(math.cos(angle) * 15.0, 2.0, math.sin(angle) * 10.0),
                    velocity=(0.0, 0.0, 0.0),
                    color=color,
                    phase=index * math.pi / 3.0,
                )
            )

    @property
    def particles(self) -> list[LiquidParticle]:
        return self._particles

    @property
    def walls(self) -> list[Wall]:
        return self._walls

    @property
    def particle_count(self) -> int:
        return len(self._particles)

    def set_gravity(self, gravity) -> None:
        """Set gravity from a number or from the y component of a vector."""
        if isinstance(gravity, Real):
            self.gravity = float(gravity)
        else:
            _, y, _ = gravity
            self.gravity = float(y)

    def set_damping(self, damping: float) -> None:
        self.damping = float(damping)

    def add_particle(self, position, velocity, color) -> LiquidParticle:
        """Add a particle with randomised radius, mass and transition rates."""
        rng = self._rng
        base_radius = 0.3 + rng.random() * 0.9
        mass = 0.2 + rng.random() * 0.8
        transition_speed = 2.0 + rng.random() * 2.0
        wave_decay = 0.85 + rng.random() * 0.1
        particle = LiquidParticle(
            position=position,
            velocity=velocity,
            color=color,
            base_radius=base_radius,
            mass=mass,
            color_transition_speed=transition_speed,
            wave_decay=wave_decay,
        )
        self._particles.append(particle)
        return particle

    def update(self, delta_time: float) -> None:
        """Advance the simulation by ``delta_time`` seconds."""
        self.global_time += delta_time

        if self.spawn_particles:
            self.time_since_last_spawn += delta_time
            if (
                self.time_since_last_spawn >= SPAWN_INTERVAL
                and len(self._particles) < MAX_PARTICLES
            ):
                self.time_since_last_spawn = 0.0
                self._spawn_new_particle()

        self._update_centroids(delta_time)
        self._apply_forces(delta_time)
        self._update_positions(delta_time)
        self._update_colors(delta_time)
        update_waves(self._particles, delta_time)
        resolve_collisions(self._particles)
        handle_wall_collisions(self._particles)

    def _initialize_walls(self) -> None:
        wall_height, half_width, half_depth = BOX_HEIGHT, BOX_HALF_WIDTH, BOX_HALF_DEPTH
        self._walls.extend(
            [
                Wall((0.0, wall_height * 0.5, -half_depth), (half_width * 2, wall_height, 1.0)),
                Wall((0.0, wall_height * 0.5, half_depth), (half_width * 2, wall_height, 1.0)),
                Wall((-half_width, wall_height * 0.5, 0.0), (1.0, wall_height, half_depth * 2)),
                Wall((half_width, wall_height * 0.5, 0.0), (1.0, wall_height, half_depth * 2)),
                Wall((0.0, 0.0, 0.0), (half_width * 2, 0.1, half_depth * 2)),
                Wall((0.0, wall_height, 0.0), (half_width * 2, 0.1, half_depth * 2)),
            ]
        )

    def _initialize_particles(self) -> None:
        group_count = len(GROUP_COLORS)
        radius = 8.0
        for group, color in enumerate(GROUP_COLORS):
            angle = group / group_count * 2.0 * math.pi
            center = np.array(
                [math.cos(angle) * radius, 1.5, math.sin(angle) * radius * 0.7]
            )
            for offset in shape_offsets(group % 4, self._rng):
                self.add_particle(center + offset, (0.0, 0.0, 0.0), color)

    def _spawn_new_particle(self) -> None:
        rng = self._rng
        last = len(GROUP_COLORS) - 1
        if rng.randint(0, 99) < 20:
            first = np.array(GROUP_COLORS[rng.randint(0, last)])
            second = np.array(GROUP_COLORS[rng.randint(0, last)])
            blend = rng.random()
            color = first * blend + second * (1.0 - blend)
        else:
            color = np.array(GROUP_COLORS[rng.randint(0, last)])

        members = [
            p.position for p in self._particles if np.linalg.norm(p.color - color) < 0.1
        ]
        if members:
            average = np.mean(members, axis=0)
            offset = np.array(
                [(rng.random() - 0.5) * 5.0, 3.5, (rng.random() - 0.5) * 5.0]
            )
            self.add_particle(average + offset, (0.0, 0.0, 0.0), color)

    def _update_centroids(self, delta_time: float) -> None:
        rng = self._rng
        centroids = self.group_centroids
        for i, centroid in enumerate(centroids):
            wave_time = self.global_time + centroid.phase
            if math.sin(wave_time * 2.0) > 0.95 and rng.randint(0, 99) < 30:
                for index, particle in enumerate(self._particles):
                    if np.linalg.norm(particle.color - centroid.color) < 0.3:
                        if np.linalg.norm(particle.position - centroid.position) < 10.0:
                            propagate_wave(self._particles, index, 0.8)
                            break

            t = self.global_time + centroid.phase
            noise1 = math.sin(t * 0.7 + i * 1.3) + math.sin(t * 1.9 + i * 0.7) * 0.5
            noise2 = math.cos(t * 0.5 + i * 1.7) + math.cos(t * 2.1 + i * 0.9) * 0.5
            noise3 = math.sin(t * 0.9 + i * 1.1) + math.sin(t * 1.3 + i * 1.5) * 0.5
            target_velocity = np.array([noise1 * 5.0, noise2 * 2.5, noise3 * 5.0])

            centroid.velocity = (
                centroid.velocity + (target_velocity - centroid.velocity) * delta_time * 2.0
            )
            centroid.position = centroid.position + centroid.velocity * delta_time

            planar = np.array([centroid.position[0], centroid.position[2]])
            planar_dist = float(np.linalg.norm(planar))
            if planar_dist > 25.0:
                to_center = -planar / planar_dist
                centroid.velocity[0] += to_center[0] * delta_time
                centroid.velocity[2] += to_center[1] * delta_time

            if centroid.position[1] < 1.0:
                centroid.velocity[1] += 2.0 * delta_time
            if centroid.position[1] > 3.0:
                centroid.velocity[1] -= 2.0 * delta_time

            average = centroid.color.copy()
            influence = 1.0
            for j, other in enumerate(centroids):
                if i == j:
                    continue
                d = float(np.linalg.norm(centroid.position - other.position))
                if d < 10.0:
                    weight = 1.0 - d / 10.0
                    average += other.color * weight
                    influence += weight
            centroid.color = average / influence

    def _centroid_arrays(self) -> tuple[np.ndarray, np.ndarray]:
        if not self.group_centroids:
            return np.zeros((0, 3)), np.zeros((0, 3))
        positions = np.array([c.position for c in self.group_centroids])
        colors = np.array([c.color for c in self.group_centroids])
        return positions, colors

    def _apply_forces(self, delta_time: float) -> None:
        particles = self._particles
        if not particles:
            return
        rng = self._rng
        positions = np.array([p.position for p in particles])
        colors = np.array([p.color for p in particles])
        masses = np.array([p.mass for p in particles])
        radii = np.array([p.radius for p in particles])
        velocities = np.array([p.velocity for p in particles])
        centroid_positions, centroid_colors = self._centroid_arrays()

        for i, particle in enumerate(particles):
            force = np.zeros(3)
            force[1] += self.gravity * masses[i]

            centroid_force = np.zeros(3)
            if len(centroid_colors):
                color_dists = np.linalg.norm(centroid_colors - colors[i], axis=1)
                nearest = int(np.argmin(color_dists))
                min_color_dist = float(color_dists[nearest])
                to_centroid = centroid_positions[nearest] - positions[i]
                dist = float(np.linalg.norm(to_centroid))
                if dist > 0.1:
                    strength = min(dist / 20.0, 1.0) * (1.0 - min_color_dist)
                    centroid_force = to_centroid / dist * strength * 3.0

            diff = positions - positions[i]
            dists = np.linalg.norm(diff, axis=1)
            mask = (dists < 5.0) & (dists > 0.001)
            mask[i] = False

            separation = np.zeros(3)
            alignment = np.zeros(3)
            cohesion = np.zeros(3)
            total_weight = 0.0
            if mask.any():
                d = dists[mask]
                near_diff = diff[mask]
                normalized = near_diff / d[:, None]
                similarity = np.maximum(
                    0.0, 1.0 - np.linalg.norm(colors[mask] - colors[i], axis=1) / 3.0
                )
                mass_influence = masses[mask] / (masses[i] + masses[mask])
                separation_dist = radii[i] + radii[mask] + 0.2
                close = d < separation_dist
                push = (separation_dist - d) * 5.0 * (2.0 - similarity)
                separation = -(normalized[close] * push[close][:, None]).sum(axis=0)
                alignment = (
                    (velocities[mask] - velocities[i])
                    * (similarity * mass_influence * 0.5)[:, None]
                ).sum(axis=0)
                cohesion = (near_diff * (similarity * 0.3)[:, None]).sum(axis=0)
                total_weight = float(similarity.sum())

            if total_weight > 0.1:
                alignment = alignment / total_weight
                cohesion = cohesion / total_weight

            force += separation * 50.0
            force += alignment * 25.0
            force += cohesion * 15.0
            force += centroid_force * 3.0
            force += np.array(
                [
                    (rng.random() - 0.5) * 0.5,
                    (rng.random() - 0.5) * 0.3,
                    (rng.random() - 0.5) * 0.5,
                ]
            )

            if total_weight > 2.0 and rng.randint(0, 99) < 5:
                propagate_wave(particles, i, 0.5)

            force += self._pressure_force(i, positions, colors, masses) * 0.3

            velocity = velocities[i] + force * delta_time / masses[i]
            velocity *= self.damping
            speed = float(np.linalg.norm(velocity))
            if speed > 15.0:
                velocity = velocity / speed * 15.0
            velocities[i] = velocity
            particle.velocity = velocity.copy()

    def _pressure_force(self, index, positions, colors, masses) -> np.ndarray:
        h = self.smoothing_radius
        diff = positions[index] - positions
        dists = np.linalg.norm(diff, axis=1)
        mask = dists < h
        mask[index] = False
        self._neighbors = [int(n) for n in np.flatnonzero(mask)]
        if not self._neighbors:
            return np.zeros(3)

        d = dists[mask]
        color_diff = np.linalg.norm(colors[mask] - colors[index], axis=1)
        density = masses[index]
        if h > 0.0:
            influence = np.maximum(0.0, 1.0 - d / h)
            similarity = np.maximum(0.1, 1.0 - color_diff * 0.3)
            density += float((masses[mask] * influence * influence * similarity).sum())
        pressure = self.pressure_constant * (density - self.rest_density)

        apart = d > 0.0001
        if not apart.any():
            return np.zeros(3)
        d = d[apart]
        influence = 1.0 - d / h
        similarity = 1.0 - color_diff[apart] * 0.3
        weights = pressure * influence * similarity / d
        return (diff[mask][apart] * weights[:, None]).sum(axis=0)

    def _viscosity_force(self, index, positions, velocities) -> np.ndarray:
        force = np.zeros(3)
        h = self.smoothing_radius
        for neighbor in self._neighbors:
            dist = float(np.linalg.norm(positions[neighbor] - positions[index]))
            if dist > 0.0001 and h > 0.0:
                influence = 1.0 - dist / h
                force += (
                    (velocities[neighbor] - velocities[index])
                    * self.viscosity_constant
                    * influence
                )
        return force

    def _update_positions(self, delta_time: float) -> None:
        for particle in self._particles:
            particle.position = particle.position + particle.velocity * delta_time

    def _update_colors(self, delta_time: float) -> None:
        particles = self._particles
        if not particles:
            return
        positions = np.array([p.position for p in particles])
        colors = np.array([p.color for p in particles])
        centroid_positions, centroid_colors = self._centroid_arrays()
        group_count = len(centroid_colors)

        for i, particle in enumerate(particles):
            dists = np.linalg.norm(positions - positions[i], axis=1)
            mask = dists < 2.0
            mask[i] = False

            counts = np.zeros(group_count, dtype=int)
            total_nearby = 0
            if group_count and mask.any():
                to_groups = np.linalg.norm(
                    colors[mask][:, None, :] - centroid_colors[None, :, :], axis=2
                )
                groups = np.argmin(to_groups, axis=1)
                closest = to_groups[np.arange(len(groups)), groups]
                valid = closest < 0.5
                counts = np.bincount(groups[valid], minlength=group_count)
                total_nearby = int(valid.sum())

            if total_nearby > 3:
                dominant = int(np.argmax(counts))
                max_count = int(counts[dominant])
                if max_count > 0 and max_count / total_nearby > 0.7:
                    if np.linalg.norm(colors[i] - centroid_colors[dominant]) > 0.5:
                        particle.target_color = centroid_colors[dominant].copy()
                        particle.color_transition_speed = 5.0
            elif group_count:
                color_dists = np.linalg.norm(centroid_colors - colors[i], axis=1)
                candidates = color_dists < 0.3
                if candidates.any():
                    position_dists = np.linalg.norm(centroid_positions - positions[i], axis=1)
                    position_dists[~candidates] = np.inf
                    own = int(np.argmin(position_dists))
                    if position_dists[own] < 999.0:
                        particle.target_color = centroid_colors[own].copy()
                        particle.color_transition_speed = 2.0

            colors[i] = colors[i] + (
                (particle.target_color - colors[i])
                * particle.color_transition_speed
                * delta_time
            )
            particle.color = colors[i].copy()