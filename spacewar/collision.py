"""
Axis-aligned bounding box collision between projectiles and craft.

Both boxes are axis-aligned regardless of craft orientation:
- Projectile: 4x4 square centered on the projectile position
- Craft: width x height box whose top-left corner is the craft position
"""

from __future__ import annotations

from dataclasses import dataclass

from .craft import Craft
from .physics import PROJECTILE_HALF_EXTENT
from .projectile import Projectile


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box given by its top-left corner and size."""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def intersects(self, other: BoundingBox) -> bool:
        """
        True if the interiors overlap.

        Boxes that only share an edge or a corner do not intersect.
        """
        return (other.x < self.right and self.x < other.right and
                other.y < self.bottom and self.y < other.bottom)


def projectile_box(projectile: Projectile) -> BoundingBox:
    half = PROJECTILE_HALF_EXTENT
    return BoundingBox(
        projectile.position.x - half,
        projectile.position.y - half,
        2 * half,
        2 * half,
    )


def craft_box(craft: Craft) -> BoundingBox:
    return BoundingBox(craft.position.x, craft.position.y, craft.width, craft.height)


def check_projectile_hit(projectile: Projectile, craft: Craft) -> bool:
    """
    Test a projectile against a craft.

    Dead craft cannot be hit again.
    """
    if not craft.alive:
        return False
    return projectile_box(projectile).intersects(craft_box(craft))
