"""Colour-group particle liquid simulation: particles, walls, camera and configuration."""

__version__ = "1.0.0"