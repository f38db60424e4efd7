#!/usr/bin/env python3
"""
Projectile Module for the Spacewar Orbital Combat Simulator

Projectiles are unpowered after launch and fall under the central body's
gravity exactly like craft, with two differences:
- They use their own (small) mass in the force law
- They are never clamped to the world; leaving it removes them

Velocity inheritance:
- Final velocity = shooter_velocity + heading * launch_speed
- A craft drifting at 1 unit/tick that fires forward sends the
  projectile off at 21 units/tick
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .physics import (
    PROJECTILE_MASS,
    CentralBody,
    Vector2D,
    integrate_motion,
    is_out_of_bounds,
)


@dataclass
class Projectile:
    """
    A projectile in flight.

    Attributes:
        owner: Player slot that fired the projectile
        position: Current position in world coordinates
        velocity: Current velocity, including the shooter's velocity at launch
        mass: Mass fed to the gravity force law
        launched_from_velocity: Shooter velocity at launch, kept for reference
    """
    owner: int
    position: Vector2D
    velocity: Vector2D
    mass: float = PROJECTILE_MASS
    launched_from_velocity: Vector2D = field(default_factory=Vector2D.zero)

    @classmethod
    def from_launch(
        cls,
        owner: int,
        shooter_position: Vector2D,
        shooter_velocity: Vector2D,
        heading: float,
        launch_speed: float,
        mass: float = PROJECTILE_MASS
    ) -> Projectile:
        """
        Create a projectile from launch parameters.

        Args:
            owner: Player slot of the shooter
            shooter_position: Position of the shooter; the projectile starts here
            shooter_velocity: Velocity of the shooter
            heading: Firing direction in radians
            launch_speed: Speed added along the heading
            mass: Projectile mass

        Returns:
            Projectile with inherited velocity
        """
        launch_velocity = Vector2D.from_angle(heading, launch_speed)
        return cls(
            owner=owner,
            position=Vector2D(shooter_position.x, shooter_position.y),
            velocity=shooter_velocity + launch_velocity,
            mass=mass,
            launched_from_velocity=Vector2D(shooter_velocity.x, shooter_velocity.y),
        )

    @property
    def speed(self) -> float:
        return self.velocity.magnitude

    def update(self, body: CentralBody) -> None:
        """Integrate one tick of gravity. No clamping."""
        self.position, self.velocity = integrate_motion(
            self.position, self.velocity, self.mass, body
        )

    def is_out_of_bounds(self, world_width: float, world_height: float) -> bool:
        return is_out_of_bounds(self.position, world_width, world_height)
