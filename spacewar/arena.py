"""
Arena geometry configuration.

Holds the world size, the central body and the craft spawn layout. The
rule constants (gravity, turn rate, thrust, launch speed, projectile mass
and hit box) live in physics.py and are not configurable.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .craft import CRAFT_HEIGHT, CRAFT_WIDTH, DEFAULT_CRAFT_MASS


DEFAULT_ARENA_PATH = Path(__file__).parent / "data" / "arena.json"

DEFAULT_WORLD_WIDTH = 500.0
DEFAULT_WORLD_HEIGHT = 500.0
DEFAULT_BODY_RADIUS = 10.0


def _default_spawn_positions() -> dict[int, tuple[float, float]]:
    return {1: (50.0, 50.0), 2: (450.0, 50.0)}


def _default_spawn_orientations() -> dict[int, float]:
    return {1: 0.0, 2: 0.0}


@dataclass
class ArenaConfig:
    """
    World geometry for a match.

    Attributes:
        width: Play area width
        height: Play area height
        body_position: Center of the central body; None means the world center
        body_radius: Display radius of the central body
        craft_mass: Mass of each craft
        craft_width: Craft hit box width
        craft_height: Craft hit box height
        spawn_positions: Player slot -> starting position
        spawn_orientations: Player slot -> starting heading (radians)
    """
    width: float = DEFAULT_WORLD_WIDTH
    height: float = DEFAULT_WORLD_HEIGHT
    body_position: Optional[tuple[float, float]] = None
    body_radius: float = DEFAULT_BODY_RADIUS
    craft_mass: float = DEFAULT_CRAFT_MASS
    craft_width: float = CRAFT_WIDTH
    craft_height: float = CRAFT_HEIGHT
    spawn_positions: dict[int, tuple[float, float]] = field(default_factory=_default_spawn_positions)
    spawn_orientations: dict[int, float] = field(default_factory=_default_spawn_orientations)

    def __post_init__(self) -> None:
        self.validate()

    @property
    def body_center(self) -> tuple[float, float]:
        if self.body_position is None:
            return (self.width / 2, self.height / 2)
        return self.body_position

    def validate(self) -> None:
        """
        Check the geometry.

        Raises:
            ValueError: On a non-positive size or mass, a missing player
                slot, or a spawn point outside the world.
        """
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"World size must be positive, got {self.width}x{self.height}")
        if self.craft_mass <= 0:
            raise ValueError(f"Craft mass must be positive, got {self.craft_mass}")
        if self.craft_width <= 0 or self.craft_height <= 0:
            raise ValueError("Craft size must be positive")
        if self.body_radius < 0:
            raise ValueError("Body radius cannot be negative")

        for slot in (1, 2):
            if slot not in self.spawn_positions:
                raise ValueError(f"Missing spawn position for player {slot}")
            x, y = self.spawn_positions[slot]
            if not (0 <= x <= self.width and 0 <= y <= self.height):
                raise ValueError(
                    f"Spawn position for player {slot} ({x}, {y}) is outside the world"
                )

    @classmethod
    def from_dict(cls, data: dict) -> ArenaConfig:
        """
        Build a config from a JSON-style dict.

        Missing keys take their defaults; unknown keys are ignored. JSON
        object keys are strings, so player slots are converted to int.
        """
        world = data.get("world", {})
        body = data.get("central_body", {})
        craft = data.get("craft", {})
        spawns = data.get("spawns", {})

        positions = _default_spawn_positions()
        orientations = _default_spawn_orientations()
        for slot_key, spawn in spawns.items():
            slot = int(slot_key)
            if "position" in spawn:
                positions[slot] = (float(spawn["position"][0]), float(spawn["position"][1]))
            if "orientation" in spawn:
                orientations[slot] = float(spawn["orientation"])

        body_position = body.get("position")
        return cls(
            width=float(world.get("width", DEFAULT_WORLD_WIDTH)),
            height=float(world.get("height", DEFAULT_WORLD_HEIGHT)),
            body_position=tuple(body_position) if body_position is not None else None,
            body_radius=float(body.get("radius", DEFAULT_BODY_RADIUS)),
            craft_mass=float(craft.get("mass", DEFAULT_CRAFT_MASS)),
            craft_width=float(craft.get("width", CRAFT_WIDTH)),
            craft_height=float(craft.get("height", CRAFT_HEIGHT)),
            spawn_positions=positions,
            spawn_orientations=orientations,
        )

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dict (inverse of from_dict)."""
        return {
            "world": {"width": self.width, "height": self.height},
            "central_body": {
                "position": list(self.body_center),
                "radius": self.body_radius,
            },
            "craft": {
                "mass": self.craft_mass,
                "width": self.craft_width,
                "height": self.craft_height,
            },
            "spawns": {
                str(slot): {
                    "position": list(self.spawn_positions[slot]),
                    "orientation": self.spawn_orientations.get(slot, 0.0),
                }
                for slot in sorted(self.spawn_positions)
            },
        }


def load_arena_config(filepath: Optional[str | Path] = None) -> ArenaConfig:
    """
    Load arena geometry from a JSON file.

    Args:
        filepath: Path to an arena JSON file (default: the bundled arena.json)

    Returns:
        Validated ArenaConfig

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If the geometry is invalid.
    """
    path = DEFAULT_ARENA_PATH if filepath is None else Path(filepath)
    with open(path, "r") as f:
        return ArenaConfig.from_dict(json.load(f))
