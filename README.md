# liquidsim

A particle simulation of coloured "liquid" blobs in a shallow box. There are
six colour groups. Each group follows its own moving centroid, and particles
flock with others of a similar colour. A particle that is surrounded by another
colour takes on that colour. Collisions and group merges send waves through
nearby particles.

The package contains the model: particles, walls, camera matrices and
configuration. The state is plain Python and numpy data, so any renderer can
draw it.

## Installation

```
pip install .
```

To run the test suite, install the test extra with `pip install .[test]` and
then run `pytest`.

## Usage

```python
from liquidsim.simulation import LiquidSimulation
from liquidsim.camera import Camera
from liquidsim.config import Config

config = Config.load("config.json")   # defaults if the file is missing
sim = LiquidSimulation(config.width, config.height, seed=42)
sim.set_gravity(config.gravity)
sim.set_damping(config.damping)

for _ in range(60):
    sim.update(0.016)

print(sim.particle_count)
for particle in sim.particles:
    print(particle.position, particle.color, particle.radius)

camera = Camera((0.0, 10.0, 0.0))
camera.set_top_down_view()
view = camera.view_matrix
projection = camera.projection_matrix(16 / 9)
```

### Simulation

`LiquidSimulation(width, height, *, seed=None, spawn_particles=False)` starts
with six groups of particles. Each group is laid out as a line, a triangle, a
ring, a cross or a random cluster. The particles sit inside a fixed box that
is 30 units wide, 20 deep and 5 high. The `width` and `height` arguments are
stored, but they do not change the size of this box.

- `seed` makes a run reproducible.
- `spawn_particles=True` adds a new particle every 0.05 s of simulated time,
  up to 800 particles in total.
- `update(delta_time)` advances the simulation by one step.
- `add_particle(position, velocity, color)` adds one particle and returns it.
  The particle gets a random radius, mass, colour transition speed and wave
  decay.
- `set_gravity(gravity)` takes either a number or a 3-vector. For a vector,
  only its y component is used.
- `set_damping(damping)` sets the damping factor.
- `particles`, `walls` and `particle_count` show the current state.

### Walls

`LiquidSimulation.walls` holds the six boxes that bound the tank: four sides, a
floor and a ceiling. Each `Wall` has a `position` and a `size`.

- `model_matrix()` returns the 4×4 matrix that translates and then scales a
  unit cube.
- `generate_mesh()` returns `(vertices, indices)`. The vertices are a
  `(24, 6)` array of position and normal. The indices are a `(36,)` array of
  triangle indices.

### Camera

`Camera(position=(0, 5, 10))` looks at the origin and has y as its up
direction. You can set `position`, `target` and `up`, and you can change
`fov`, `near_plane`, `far_plane` and `aspect_ratio`.

- `view_matrix` gives the view matrix.
- `projection_matrix(aspect_ratio)` gives the projection matrix for the given
  aspect ratio.
- `projection` gives the projection matrix for the stored `aspect_ratio`.
- `set_top_down_view()` places the camera above the origin, looking straight
  down.

The module-level `look_at` and `perspective` functions build these matrices on
their own.

### Configuration

`Config` holds these settings: `width`, `height`, `particle_count`, `gravity`,
`damping`, `camera_pos` and `camera_target`.

- `Config.save(filename="config.json")` writes the settings as JSON indented
  by two spaces. The keys are `width`, `height`, `particleCount`, `gravity`,
  `damping`, `cameraPos` and `cameraTarget`.
- `Config.load(filename="config.json")` reads the settings back. Any key that
  is missing keeps its default. If the file is missing or unreadable, you get
  the defaults, and the problem is reported through `logging` instead of being
  raised.
- `to_json()` returns the same dictionary that `save` writes.

`particle_count` is stored in the configuration, but the simulation does not
read it.

### Lower-level helpers

`liquidsim.particle` defines `LiquidParticle` and `GroupCentroid`, together
with the steps the simulation applies to every particle:

- `shape_offsets(shape_type, rng)`: offsets of the starting shapes
- `propagate_wave(particles, source_index, intensity)`: spreads a wave from one
  particle to similarly coloured neighbours
- `update_waves(particles, delta_time)`: advances the wave phase and turns
  waves into motion
- `resolve_collisions(particles)`: separates overlapping pairs and exchanges
  impulses between them
- `handle_wall_collisions(particles)`: keeps particles inside the box

You can call any of these directly on a list of `LiquidParticle` objects.

## What it does not do

The package has no window, no rendering and no command-line program. It
computes the simulation state and the camera and wall matrices. You must
supply your own loop and your own drawing code.