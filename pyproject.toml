[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "liquidsim"
version = "1.0.0"
description = "Colour-group particle liquid simulation with boid-like flocking, colour takeover and wave propagation"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["simulation", "particles", "fluid", "boids", "physics"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["liquidsim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
