"""Spacewar orbital combat simulation package."""

from .physics import (
    # Constants
    G,
    TURN_RATE_RAD,
    THRUST_IMPULSE,
    LAUNCH_SPEED,
    PROJECTILE_MASS,
    PROJECTILE_HALF_EXTENT,
    # Classes
    Vector2D,
    CentralBody,
    # Functions
    integrate_motion,
    clamp_to_bounds,
    is_out_of_bounds,
)

from .craft import Craft
from .projectile import Projectile
from .collision import BoundingBox, check_projectile_hit

from .command import (
    CommandType,
    Command,
    CommandQueue,
    validate_command,
)

from .controls import DEFAULT_KEY_BINDINGS, KeyMapper
from .arena import ArenaConfig, load_arena_config

from .simulation import (
    # State
    MatchState,
    evaluate_match_state,
    # Events
    MatchEvent,
    MatchEventType,
    # Snapshots
    CraftSnapshot,
    ProjectileSnapshot,
    MatchSnapshot,
    TickResult,
    # Driver
    TickClock,
    SpacewarSimulation,
)

__all__ = [
    # Physics module - Constants
    "G",
    "TURN_RATE_RAD",
    "THRUST_IMPULSE",
    "LAUNCH_SPEED",
    "PROJECTILE_MASS",
    "PROJECTILE_HALF_EXTENT",
    # Physics module - Classes and functions
    "Vector2D",
    "CentralBody",
    "integrate_motion",
    "clamp_to_bounds",
    "is_out_of_bounds",
    # Entities
    "Craft",
    "Projectile",
    # Collision
    "BoundingBox",
    "check_projectile_hit",
    # Commands and input
    "CommandType",
    "Command",
    "CommandQueue",
    "validate_command",
    "DEFAULT_KEY_BINDINGS",
    "KeyMapper",
    # Configuration
    "ArenaConfig",
    "load_arena_config",
    # Simulation
    "MatchState",
    "evaluate_match_state",
    "MatchEvent",
    "MatchEventType",
    "CraftSnapshot",
    "ProjectileSnapshot",
    "MatchSnapshot",
    "TickResult",
    "TickClock",
    "SpacewarSimulation",
]
