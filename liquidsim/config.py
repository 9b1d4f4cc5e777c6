"""Simulation settings stored as a JSON file."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

Vec3 = tuple[float, float, float]

DEFAULT_FILENAME = "config.json"


def _number(value) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expected a number, got {value!r}")
    return value


def _vec3(value) -> Vec3:
    if not isinstance(value, list):
        raise TypeError(f"expected an array, got {value!r}")
    return (float(_number(value[0])), float(_number(value[1])), float(_number(value[2])))


@dataclass
class Config:
    """Simulation, physics and camera settings."""

    width: float = 120.0
    height: float = 80.0
    particle_count: int = 25000
    gravity: float = -12.0
    damping: float = 0.98
    camera_pos: Vec3 = (60.0, 40.0, 100.0)
    camera_target: Vec3 = (60.0, 40.0, 0.0)

    @classmethod
    def load(cls, filename=DEFAULT_FILENAME) -> Config:
        """Read settings from a JSON file.

        A missing or unreadable file yields the defaults; keys that are
        absent keep their defaults. Values read before a malformed entry
        are kept.
        """
        config = cls()
        try:
            with open(filename, encoding="utf-8") as handle:
                data = json.load(handle)
        except FileNotFoundError:
            logger.info("Config file not found, using defaults")
            return config
        except (OSError, ValueError) as exc:
            logger.warning("Config error: %s, using defaults", exc)
            return config

        if not isinstance(data, dict):
            data = {}

        try:
            if "width" in data:
                config.width = float(_number(data["width"]))
            if "height" in data:
                config.height = float(_number(data["height"]))
            if "particleCount" in data:
                config.particle_count = int(_number(data["particleCount"]))
            if "gravity" in data:
                config.gravity = float(_number(data["gravity"]))
            if "damping" in data:
                config.damping = float(_number(data["damping"]))
            if "cameraPos" in data:
                config.camera_pos = _vec3(data["cameraPos"])
            if "cameraTarget" in data:
                config.camera_target = _vec3(data["cameraTarget"])
            logger.info("Loaded config: %d particles", config.particle_count)
        except (TypeError, IndexError, ValueError) as exc:
            logger.warning("Config error: %s, using defaults", exc)
        return config

    def to_json(self) -> dict:
        """Return the settings under their file key names."""
        return {
            "width": self.width,
            "height": self.height,
            "particleCount": self.particle_count,
            "gravity": self.gravity,
            "damping": self.damping,
            "cameraPos": list(self.camera_pos),
            "cameraTarget": list(self.camera_target),
        }

    def save(self, filename=DEFAULT_FILENAME) -> None:
        """Write the settings to a JSON file indented by two spaces."""
        try:
            Path(filename).write_text(json.dumps(self.to_json(), indent=2), encoding="utf-8")
            logger.info("Config saved to %s", filename)
        except OSError as exc:
            logger.error("Failed to save config: %s", exc)