import random

import numpy as np
import pytest

from liquidsim.particle import (
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

BLUE = GROUP_COLORS[0]


def make(position, velocity=(0.0, 0.0, 0.0), color=BLUE, radius=0.5, mass=1.0):
    return LiquidParticle(
        position=position, velocity=velocity, color=color, base_radius=radius, mass=mass
    )


def test_particle_defaults_follow_color_and_radius():
    p = make((1.0, 2.0, 3.0), radius=0.7)
    assert p.radius == 0.7
    assert np.allclose(p.target_color, BLUE)
    p.color[0] = 0.0
    assert p.target_color[0] == pytest.approx(BLUE[0])


def test_particle_rejects_bad_vector():
    with pytest.raises(ValueError):
        make((1.0, 2.0))


def test_group_centroid_defaults():
    c = GroupCentroid(position=(1.0, 2.0, 3.0))
    assert np.allclose(c.velocity, 0.0)
    assert c.phase == 0.0
    assert np.allclose(c.position, (1.0, 2.0, 3.0))


@pytest.mark.parametrize("shape_type, count", [(0, 20), (2, 24), (1, 36), (3, 41)])
def test_shape_counts(shape_type, count):
    assert shape_offsets(shape_type, random.Random(1)).shape == (count, 3)


def test_line_is_flat_and_evenly_spaced():
    offsets = shape_offsets(0, random.Random(1))
    assert np.allclose(offsets[:, 1:], 0.0)
    assert np.allclose(np.diff(offsets[:, 0]), 0.8)


def test_ring_has_constant_radius():
    offsets = shape_offsets(2, random.Random(1))
    assert np.allclose(np.linalg.norm(offsets, axis=1), 2.5)
    assert np.allclose(offsets[:, 1], 0.0)


def test_cross_contains_centre_once():
    offsets = shape_offsets(3, random.Random(1))
    at_origin = np.all(np.isclose(offsets, 0.0), axis=1)
    assert at_origin.sum() == 1


def test_cluster_is_bounded_and_reproducible():
    first = shape_offsets(4, random.Random(42))
    second = shape_offsets(4, random.Random(42))
    assert first.shape == (30, 3)
    assert np.array_equal(first, second)
    assert np.all(np.linalg.norm(first, axis=1) <= 1.2 + 1e-9)
    assert np.all(first[:, 1] >= 0.0)


def test_update_waves_resets_radius_and_advances_phase():
    p = make((0.0, 1.0, 0.0), radius=0.4)
    p.radius = 2.0
    update_waves([p], 0.5)
    assert p.radius == 0.4
    assert p.wave_phase == pytest.approx(1.0)
    assert np.allclose(p.velocity, 0.0)


def test_update_waves_decays_amplitude_and_moves():
    p = make((0.0, 1.0, 0.0))
    p.wave_amplitude = 1.0
    p.wave_phase = 1.0
    update_waves([p], 0.1)
    assert 0.0 < p.wave_amplitude < 1.0
    assert np.linalg.norm(p.velocity) > 0.0


def test_propagate_wave_out_of_range_changes_nothing():
    particles = [make((0.0, 1.0, 0.0)), make((1.0, 1.0, 0.0))]
    propagate_wave(particles, 5, 1.0)
    assert all(p.wave_amplitude == 0.0 for p in particles)


def test_propagate_wave_falls_off_with_distance():
    source = make((0.0, 1.0, 0.0))
    source.wave_phase = 3.0
    near = make((1.0, 1.0, 0.0))
    far = make((5.0, 1.0, 0.0))
    outside = make((25.0, 1.0, 0.0))
    particles = [source, near, far, outside]
    propagate_wave(particles, 0, 1.0)
    assert source.wave_amplitude == 0.0
    assert 1.0 >= near.wave_amplitude > far.wave_amplitude > 0.0
    assert outside.wave_amplitude == 0.0
    assert near.wave_phase > far.wave_phase
    assert near.wave_phase < source.wave_phase


def test_propagate_wave_ignores_other_colors_and_keeps_max():
    source = make((0.0, 1.0, 0.0), color=(0.0, 0.0, 0.0))
    stranger = make((1.0, 1.0, 0.0), color=(1.0, 1.0, 1.0))
    strong = make((2.0, 1.0, 0.0), color=(0.0, 0.0, 0.0))
    strong.wave_amplitude = 5.0
    propagate_wave([source, stranger, strong], 0, 1.0)
    assert stranger.wave_amplitude == 0.0
    assert stranger.wave_phase == 0.0
    assert strong.wave_amplitude == 5.0


def test_resolve_collisions_separates_overlap():
    a = make((0.0, 1.0, 0.0), radius=0.5)
    b = make((0.4, 1.0, 0.0), radius=0.5)
    midpoint = (a.position + b.position) / 2
    resolve_collisions([a, b])
    assert np.linalg.norm(a.position - b.position) == pytest.approx(1.0)
    assert np.allclose((a.position + b.position) / 2, midpoint)


def test_resolve_collisions_conserves_momentum_and_triggers_waves():
    a = make((0.0, 1.0, 0.0), velocity=(-2.0, 0.0, 0.0), mass=1.0)
    b = make((0.4, 1.0, 0.0), velocity=(1.0, 0.0, 0.0), mass=2.0)
    before = a.mass * a.velocity + b.mass * b.velocity
    resolve_collisions([a, b])
    after = a.mass * a.velocity + b.mass * b.velocity
    assert np.allclose(before, after)
    assert not np.allclose(a.velocity, (-2.0, 0.0, 0.0))
    assert a.wave_amplitude > 0.0
    assert b.wave_amplitude > 0.0


def test_resolve_collisions_skips_distant_and_coincident():
    a = make((0.0, 1.0, 0.0))
    b = make((3.0, 1.0, 0.0))
    c = make((-3.0, 1.0, 0.0))
    d = make((-3.0, 1.0, 0.0))
    resolve_collisions([a, b, c, d])
    assert np.allclose(a.position, (0.0, 1.0, 0.0))
    assert np.allclose(b.position, (3.0, 1.0, 0.0))
    assert np.allclose(c.position, d.position)


def test_wall_collision_clamps_and_bounces_sides():
    p = make((20.0, 2.0, -12.0), velocity=(4.0, 0.0, -2.0), radius=0.5)
    handle_wall_collisions([p])
    assert p.position[0] == pytest.approx(BOX_HALF_WIDTH - 0.5)
    assert p.position[2] == pytest.approx(-BOX_HALF_DEPTH + 0.5)
    assert p.velocity[0] == pytest.approx(-4.0 * 0.3)
    assert p.velocity[2] == pytest.approx(2.0 * 0.3)


def test_wall_collision_floor_and_ceiling():
    low = make((0.0, -1.0, 0.0), velocity=(0.0, -2.0, 0.0), radius=0.5)
    high = make((0.0, 9.0, 0.0), velocity=(0.0, 2.0, 0.0), radius=0.5)
    handle_wall_collisions([low, high])
    assert low.position[1] == pytest.approx(0.5)
    assert low.velocity[1] == pytest.approx(1.0)
    assert high.position[1] == pytest.approx(BOX_HEIGHT - 0.5)
    assert high.velocity[1] == pytest.approx(-1.0)


def test_wall_collision_leaves_interior_alone():
    p = make((1.0, 2.0, 3.0), velocity=(1.0, 1.0, 1.0))
    handle_wall_collisions([p])
    assert np.allclose(p.position, (1.0, 2.0, 3.0))
    assert np.allclose(p.velocity, (1.0, 1.0, 1.0))