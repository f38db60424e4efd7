"""
Player craft state and maneuvering.

A Craft is a plain data object: the simulation owns it, mutates it once per
tick through update() and through the maneuvering methods, and projects it
into read-only snapshots for rendering.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .physics import (
    LAUNCH_SPEED,
    PROJECTILE_MASS,
    THRUST_IMPULSE,
    TURN_RATE_RAD,
    CentralBody,
    Vector2D,
    clamp_to_bounds,
    integrate_motion,
)
from .projectile import Projectile


# Rendered size of a craft (the ship glyph is a 40-unit circle in a 40x40 box)
CRAFT_WIDTH = 40.0
CRAFT_HEIGHT = 40.0

DEFAULT_CRAFT_MASS = 1.0


@dataclass
class Craft:
    """
    A player-controlled craft.

    Attributes:
        player: Player slot owning the craft (1 or 2)
        position: Anchor (top-left of the hit box) in world coordinates
        velocity: Velocity in world units per tick
        orientation: Heading in radians, 0 along +X
        mass: Mass fed to the gravity force law
        alive: False once struck by an opposing projectile
        width: Hit box width
        height: Hit box height
    """
    player: int
    position: Vector2D
    velocity: Vector2D = field(default_factory=Vector2D.zero)
    orientation: float = 0.0
    mass: float = DEFAULT_CRAFT_MASS
    alive: bool = True
    width: float = CRAFT_WIDTH
    height: float = CRAFT_HEIGHT

    def update(self, body: CentralBody, world_width: float, world_height: float) -> None:
        """
        Integrate one tick of gravity and clamp to the world.

        The clamp only moves the position. Velocity pushing against a wall
        keeps accumulating and shows up once the craft moves off the wall.
        Dead craft do not move.
        """
        if not self.alive:
            return
        position, self.velocity = integrate_motion(
            self.position, self.velocity, self.mass, body
        )
        self.position = clamp_to_bounds(position, world_width, world_height)

    def turn_left(self) -> None:
        self.orientation -= TURN_RATE_RAD

    def turn_right(self) -> None:
        self.orientation += TURN_RATE_RAD

    def accelerate(self) -> None:
        """Instantaneous velocity impulse along the current heading."""
        self.velocity = self.velocity + Vector2D.from_angle(self.orientation, THRUST_IMPULSE)

    def fire(self) -> Projectile:
        """
        Launch a projectile from the craft's position.

        The projectile inherits the craft's velocity plus the launch boost
        along the heading. Whether the craft may fire at all is decided by
        the simulation, which tracks the one live projectile per player.
        """
        return Projectile.from_launch(
            owner=self.player,
            shooter_position=self.position,
            shooter_velocity=self.velocity,
            heading=self.orientation,
            launch_speed=LAUNCH_SPEED,
            mass=PROJECTILE_MASS,
        )
