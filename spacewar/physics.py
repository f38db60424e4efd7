#!/usr/bin/env python3
"""
Physics Module for the Spacewar Orbital Combat Simulator

Implements the per-tick mechanics shared by craft and projectiles:
- 2D vector operations
- Central body gravity (inverse-square, scaled by the attracted mass)
- Fixed-step integration (velocity += force, position += velocity)
- World bounds clamping and out-of-bounds tests

There is no delta-time anywhere in this module. One call to
integrate_motion() is one tick; changing the tick rate of the host changes
the simulated speed.
"""

from __future__ import annotations
import math
from dataclasses import dataclass


# =============================================================================
# RULE CONSTANTS
# =============================================================================

# Gravitational constant used by the central body
G = 1.0

# Craft maneuvering (per command)
TURN_RATE_RAD = 0.1
THRUST_IMPULSE = 0.1

# Projectile launch
LAUNCH_SPEED = 20.0
PROJECTILE_MASS = 0.1

# Projectile hit box is a square of this half-extent centered on the projectile
PROJECTILE_HALF_EXTENT = 2.0


# =============================================================================
# VECTOR2D CLASS
# =============================================================================

@dataclass
class Vector2D:
    """
    2D vector for positions, velocities and forces in the play area.

    Screen convention: +X to the right, +Y downward, angles measured in
    radians from +X toward +Y. Values are treated as immutable; every
    operation returns a new vector.
    """
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vector2D) -> Vector2D:
        """Vector addition."""
        return Vector2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2D) -> Vector2D:
        """Vector subtraction."""
        return Vector2D(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vector2D:
        """Scalar multiplication."""
        return Vector2D(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> Vector2D:
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float) -> Vector2D:
        """Scalar division."""
        if scalar == 0:
            raise ValueError("Cannot divide vector by zero")
        return Vector2D(self.x / scalar, self.y / scalar)

    def __neg__(self) -> Vector2D:
        return Vector2D(-self.x, -self.y)

    def __eq__(self, other: object) -> bool:
        """Equality check with tolerance."""
        if not isinstance(other, Vector2D):
            return False
        eps = 1e-10
        return abs(self.x - other.x) < eps and abs(self.y - other.y) < eps

    @property
    def magnitude(self) -> float:
        """Vector magnitude (length)."""
        return math.sqrt(self.x**2 + self.y**2)

    @property
    def magnitude_squared(self) -> float:
        return self.x**2 + self.y**2

    def normalized(self) -> Vector2D:
        """Return unit vector in same direction (zero stays zero)."""
        mag = self.magnitude
        if mag == 0:
            return Vector2D(0.0, 0.0)
        return self / mag

    def distance_to(self, other: Vector2D) -> float:
        return (self - other).magnitude

    def to_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    @classmethod
    def from_tuple(cls, t: tuple[float, float]) -> Vector2D:
        return cls(float(t[0]), float(t[1]))

    @classmethod
    def from_angle(cls, angle_rad: float, magnitude: float = 1.0) -> Vector2D:
        """Vector of the given length pointing along angle_rad."""
        return cls(magnitude * math.cos(angle_rad), magnitude * math.sin(angle_rad))

    @classmethod
    def zero(cls) -> Vector2D:
        return cls(0.0, 0.0)

    def __repr__(self) -> str:
        return f"Vector2D({self.x:.6g}, {self.y:.6g})"


# =============================================================================
# CENTRAL BODY (GRAVITY FIELD)
# =============================================================================

@dataclass(frozen=True)
class CentralBody:
    """
    The fixed massive body at the center of the play area.

    Attributes:
        position: Fixed center of the body in world coordinates
        radius: Display size of the body. Gravity is only suppressed at the
                exact center, not inside this radius.
    """
    position: Vector2D
    radius: float = 10.0

    def force_on(self, position: Vector2D, mass: float) -> Vector2D:
        """
        Gravitational force exerted on an object at a position.

        F = r * (-G * m / |r|^3), where r points from the body's center to
        the object. The result scales with the attracted mass, so a craft
        and a projectile at the same spot are pulled with different
        strength. At |r| == 0 the zero vector is returned.

        Args:
            position: Position of the attracted object
            mass: Mass of the attracted object

        Returns:
            Force vector, directed toward the body's center
        """
        r = position - self.position
        distance = r.magnitude
        if distance == 0:
            return Vector2D.zero()
        return r * (-G * mass / distance**3)


# =============================================================================
# INTEGRATION
# =============================================================================

def integrate_motion(
    position: Vector2D,
    velocity: Vector2D,
    mass: float,
    body: CentralBody
) -> tuple[Vector2D, Vector2D]:
    """
    Advance an object by one tick under the central body's gravity.

    The force is added straight to the velocity (no division by mass, no
    time step), then the new velocity is added to the position.

    Args:
        position: Position before the tick
        velocity: Velocity before the tick
        mass: Mass fed to the force law
        body: The attracting body

    Returns:
        Tuple of (new_position, new_velocity)
    """
    force = body.force_on(position, mass)
    new_velocity = velocity + force
    new_position = position + new_velocity
    return new_position, new_velocity


def clamp_to_bounds(position: Vector2D, width: float, height: float) -> Vector2D:
    """
    Clamp a position componentwise into [0, width] x [0, height].

    Only the position is affected; callers keep their velocity as is.
    """
    return Vector2D(
        max(0.0, min(position.x, width)),
        max(0.0, min(position.y, height))
    )


def is_out_of_bounds(position: Vector2D, width: float, height: float) -> bool:
    """True if the position lies outside [0, width] x [0, height]."""
    return (position.x < 0 or position.x > width or
            position.y < 0 or position.y > height)
