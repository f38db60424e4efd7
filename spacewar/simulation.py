#!/usr/bin/env python3
"""
Match Simulation Engine for the Spacewar Orbital Combat Simulator.

This module implements the fixed-step game loop that:
- Drains queued player commands and applies them to the craft
- Integrates gravity for both craft and any live projectiles
- Expires projectiles that leave the world, then checks hits
- Decides the match outcome (player 1, player 2, or draw)
- Produces a read-only snapshot per tick for the renderer

The core owns no timer. The host calls advance() once per tick, either
directly or through run() with a TickClock for real-time pacing. The
simulation keeps an event log for analysis and debugging.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, Optional

from .arena import ArenaConfig
from .collision import check_projectile_hit
from .command import PLAYER_SLOTS, Command, CommandQueue, CommandType
from .controls import KeyMapper
from .craft import Craft
from .physics import CentralBody, Vector2D
from .projectile import Projectile


# =============================================================================
# CONSTANTS
# =============================================================================

DEFAULT_TICK_RATE = 60.0  # ticks per second (reference cadence)


# =============================================================================
# MATCH STATE
# =============================================================================

class MatchState(Enum):
    """Overall state of a match."""
    RUNNING = "running"
    PLAYER1_WINS = "player1_wins"
    PLAYER2_WINS = "player2_wins"
    DRAW = "draw"

    @property
    def is_terminal(self) -> bool:
        return self is not MatchState.RUNNING


def evaluate_match_state(craft1_alive: bool, craft2_alive: bool) -> MatchState:
    """Decide the match state from the two alive flags."""
    if not craft1_alive and not craft2_alive:
        return MatchState.DRAW
    if not craft1_alive:
        return MatchState.PLAYER2_WINS
    if not craft2_alive:
        return MatchState.PLAYER1_WINS
    return MatchState.RUNNING


# =============================================================================
# EVENT TYPES
# =============================================================================

class MatchEventType(Enum):
    """Types of events that can occur during a match."""
    MATCH_STARTED = auto()
    MATCH_ENDED = auto()

    # Commands
    COMMAND_APPLIED = auto()
    COMMAND_IGNORED = auto()

    # Projectiles
    PROJECTILE_LAUNCHED = auto()
    PROJECTILE_EXPIRED = auto()
    PROJECTILE_IMPACT = auto()

    # Craft
    CRAFT_DESTROYED = auto()


@dataclass
class MatchEvent:
    """
    An event that occurs during a match.

    Attributes:
        event_type: The type of event.
        tick: Tick during which the event occurred (0 before the first tick).
        player: Player slot involved (if applicable).
        target: Player slot on the receiving end (if applicable).
        data: Additional event-specific data.
    """
    event_type: MatchEventType
    tick: int
    player: Optional[int] = None
    target: Optional[int] = None
    data: dict = field(default_factory=dict)

    def __str__(self) -> str:
        player_str = f"[P{self.player}]" if self.player else ""
        target_str = f" -> P{self.target}" if self.target else ""
        return f"T+{self.tick} {player_str} {self.event_type.name}{target_str}"


# =============================================================================
# SNAPSHOTS
# =============================================================================

@dataclass(frozen=True)
class CraftSnapshot:
    """Render-facing view of a craft."""
    player: int
    position: tuple[float, float]
    velocity: tuple[float, float]
    orientation: float
    alive: bool
    width: float
    height: float

    def to_dict(self) -> dict:
        return {
            "player": self.player,
            "position": list(self.position),
            "velocity": list(self.velocity),
            "orientation": self.orientation,
            "alive": self.alive,
            "width": self.width,
            "height": self.height,
        }


@dataclass(frozen=True)
class ProjectileSnapshot:
    """Render-facing view of a projectile in flight."""
    player: int
    position: tuple[float, float]
    velocity: tuple[float, float]

    def to_dict(self) -> dict:
        return {
            "player": self.player,
            "position": list(self.position),
            "velocity": list(self.velocity),
        }


@dataclass(frozen=True)
class MatchSnapshot:
    """
    Immutable picture of the whole match after a tick.

    craft and projectiles are ordered by player slot; a projectile entry
    is None when that player has nothing in flight.
    """
    tick: int
    state: MatchState
    body_position: tuple[float, float]
    body_radius: float
    craft: tuple[CraftSnapshot, ...]
    projectiles: tuple[Optional[ProjectileSnapshot], ...]

    def craft_for(self, player: int) -> CraftSnapshot:
        return self.craft[PLAYER_SLOTS.index(player)]

    def projectile_for(self, player: int) -> Optional[ProjectileSnapshot]:
        return self.projectiles[PLAYER_SLOTS.index(player)]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "tick": self.tick,
            "state": self.state.value,
            "central_body": {
                "position": list(self.body_position),
                "radius": self.body_radius,
            },
            "craft": [c.to_dict() for c in self.craft],
            "projectiles": [p.to_dict() if p else None for p in self.projectiles],
        }


@dataclass(frozen=True)
class TickResult:
    """
    Outcome of one advance() call.

    snapshot is None on the tick the match ends and on every call after.
    """
    tick: int
    state: MatchState
    snapshot: Optional[MatchSnapshot] = None

    @property
    def is_terminal(self) -> bool:
        return self.state.is_terminal


# =============================================================================
# TICK CLOCK
# =============================================================================

class TickClock:
    """
    Fixed-interval pacing for real-time play.

    wait() blocks until the next evenly spaced tick boundary. The clock only
    decides when a tick runs, never how much simulated time it covers.
    When the host falls more than one interval behind, the schedule is
    reset instead of replaying a burst of late ticks.
    """

    def __init__(
        self,
        tick_rate: float = DEFAULT_TICK_RATE,
        now: Callable[[], float] = time.perf_counter,
        sleep: Callable[[float], None] = time.sleep
    ) -> None:
        if tick_rate <= 0:
            raise ValueError(f"Tick rate must be positive, got {tick_rate}")
        self.tick_rate = tick_rate
        self.interval = 1.0 / tick_rate
        self._now = now
        self._sleep = sleep
        self._next_tick: Optional[float] = None

    def reset(self) -> None:
        self._next_tick = None

    def wait(self) -> None:
        current = self._now()
        if self._next_tick is None or current - self._next_tick > self.interval:
            self._next_tick = current

        delay = self._next_tick - current
        if delay > 0:
            self._sleep(delay)
        self._next_tick += self.interval


# =============================================================================
# SIMULATION
# =============================================================================

class SpacewarSimulation:
    """
    Two-player orbital combat match.

    Each advance() runs exactly one tick:
    1. Drain queued commands and apply them to their craft
    2. Update craft 1, then craft 2
    3. Update projectile 1 (integrate, expire, hit craft 2)
    4. Update projectile 2 (integrate, expire, hit craft 1)
    5. Evaluate the match state
    6. Halt and report the outcome, or return a snapshot

    Usage:
        sim = SpacewarSimulation()
        sim.enqueue(Command(1, CommandType.FIRE))
        result = sim.advance()
        while not result.is_terminal:
            result = sim.advance()

    Attributes:
        arena: World geometry.
        body: The central body.
        craft: Player slot -> Craft.
        projectiles: Player slot -> live Projectile or None.
        commands: Pending command queue.
        tick: Number of ticks processed.
        state: Current match state.
        events: Match event log.
    """

    def __init__(
        self,
        arena: Optional[ArenaConfig] = None,
        key_mapper: Optional[KeyMapper] = None
    ) -> None:
        """
        Initialize a match.

        Args:
            arena: World geometry (default: ArenaConfig()).
            key_mapper: Key binding table used by handle_key().
        """
        self.arena = arena if arena is not None else ArenaConfig()
        self.body = CentralBody(
            position=Vector2D.from_tuple(self.arena.body_center),
            radius=self.arena.body_radius
        )

        self.craft: dict[int, Craft] = {
            slot: Craft(
                player=slot,
                position=Vector2D.from_tuple(self.arena.spawn_positions[slot]),
                orientation=self.arena.spawn_orientations.get(slot, 0.0),
                mass=self.arena.craft_mass,
                width=self.arena.craft_width,
                height=self.arena.craft_height,
            )
            for slot in PLAYER_SLOTS
        }
        self.projectiles: dict[int, Optional[Projectile]] = {slot: None for slot in PLAYER_SLOTS}

        self.commands = CommandQueue()
        self.key_mapper = key_mapper if key_mapper is not None else KeyMapper()

        self.tick: int = 0
        self.state = MatchState.RUNNING
        self.events: list[MatchEvent] = []

        self._command_handlers: dict[CommandType, Callable[[Craft], bool]] = {
            CommandType.TURN_LEFT: self._handle_turn_left,
            CommandType.TURN_RIGHT: self._handle_turn_right,
            CommandType.ACCELERATE: self._handle_accelerate,
            CommandType.FIRE: self._handle_fire,
        }

        # Event callbacks (for hosts and renderers)
        self._event_callbacks: list[Callable[[MatchEvent], None]] = []

        self._running = False
        self._final_result: Optional[TickResult] = None

    # -------------------------------------------------------------------------
    # Entity Access
    # -------------------------------------------------------------------------

    def get_craft(self, player: int) -> Craft:
        return self.craft[player]

    def get_projectile(self, player: int) -> Optional[Projectile]:
        return self.projectiles[player]

    @staticmethod
    def opponent_of(player: int) -> int:
        return 2 if player == 1 else 1

    @property
    def outcome(self) -> Optional[MatchState]:
        """Terminal match state, or None while the match is running."""
        return self.state if self.state.is_terminal else None

    # -------------------------------------------------------------------------
    # Command Input
    # -------------------------------------------------------------------------

    def enqueue(self, command: Command) -> None:
        """Queue a command for the next tick. Safe to call from any thread."""
        self.commands.enqueue(command)

    def handle_key(self, key: str) -> bool:
        """
        Translate a key press and queue the resulting command.

        Returns:
            True if the key was bound to a command.
        """
        command = self.key_mapper.translate(key)
        if command is None:
            return False
        self.enqueue(command)
        return True

    def apply_command(self, command: Command) -> bool:
        """
        Apply a command to its craft immediately.

        Commands for a destroyed craft, and Fire while the player's
        projectile is still in flight, are no-ops.

        Returns:
            True if the command changed the match.
        """
        craft = self.craft[command.player]
        if not craft.alive:
            self._log_event(MatchEventType.COMMAND_IGNORED, command.player, data={
                'action': command.action.value,
                'reason': 'craft_destroyed'
            })
            return False

        applied = self._command_handlers[command.action](craft)
        if applied:
            self._log_event(MatchEventType.COMMAND_APPLIED, command.player, data={
                'action': command.action.value
            })
        return applied

    def _handle_turn_left(self, craft: Craft) -> bool:
        craft.turn_left()
        return True

    def _handle_turn_right(self, craft: Craft) -> bool:
        craft.turn_right()
        return True

    def _handle_accelerate(self, craft: Craft) -> bool:
        craft.accelerate()
        return True

    def _handle_fire(self, craft: Craft) -> bool:
        if self.projectiles[craft.player] is not None:
            self._log_event(MatchEventType.COMMAND_IGNORED, craft.player, data={
                'action': CommandType.FIRE.value,
                'reason': 'projectile_in_flight'
            })
            return False

        projectile = craft.fire()
        self.projectiles[craft.player] = projectile
        self._log_event(MatchEventType.PROJECTILE_LAUNCHED, craft.player, data={
            'position': projectile.position.to_tuple(),
            'velocity': projectile.velocity.to_tuple()
        })
        return True

    # -------------------------------------------------------------------------
    # Main Loop
    # -------------------------------------------------------------------------

    def advance(self) -> TickResult:
        """
        Execute a single tick.

        Once the match has ended this is a no-op that returns the final
        result again.

        Returns:
            TickResult with the new state and, while running, a snapshot.
        """
        if self._final_result is not None:
            return self._final_result

        if self.tick == 0:
            self._log_event(MatchEventType.MATCH_STARTED, data={
                'world': (self.arena.width, self.arena.height)
            })

        self.tick += 1

        for command in self.commands.drain():
            self.apply_command(command)

        for slot in PLAYER_SLOTS:
            self.craft[slot].update(self.body, self.arena.width, self.arena.height)

        for slot in PLAYER_SLOTS:
            self._update_projectile(slot)

        self.state = evaluate_match_state(self.craft[1].alive, self.craft[2].alive)

        if self.state.is_terminal:
            self._running = False
            self._final_result = TickResult(tick=self.tick, state=self.state)
            self._log_event(MatchEventType.MATCH_ENDED, data={
                'outcome': self.state.value,
                'ticks': self.tick
            })
            return self._final_result

        return TickResult(tick=self.tick, state=self.state, snapshot=self.snapshot())

    def _update_projectile(self, player: int) -> None:
        """Integrate a live projectile, then expire it or resolve a hit."""
        projectile = self.projectiles[player]
        if projectile is None:
            return

        projectile.update(self.body)

        # Expiry wins over a hit on the same tick
        if projectile.is_out_of_bounds(self.arena.width, self.arena.height):
            self.projectiles[player] = None
            self._log_event(MatchEventType.PROJECTILE_EXPIRED, player, data={
                'position': projectile.position.to_tuple()
            })
            return

        target_slot = self.opponent_of(player)
        target = self.craft[target_slot]
        if check_projectile_hit(projectile, target):
            self.projectiles[player] = None
            target.alive = False
            self._log_event(MatchEventType.PROJECTILE_IMPACT, player, target_slot, data={
                'position': projectile.position.to_tuple()
            })
            self._log_event(MatchEventType.CRAFT_DESTROYED, target_slot, data={
                'killer': player,
                'position': target.position.to_tuple()
            })

    def run(
        self,
        max_ticks: Optional[int] = None,
        clock: Optional[TickClock] = None
    ) -> MatchState:
        """
        Advance until the match ends, stop() is called, or max_ticks elapse.

        Args:
            max_ticks: Host-side cap on ticks for this call (None: no cap).
            clock: Optional TickClock pacing each tick in real time.

        Returns:
            The match state when the loop exits.
        """
        self._running = True
        if clock is not None:
            clock.reset()

        ticks_run = 0
        while self._running and not self.state.is_terminal:
            if max_ticks is not None and ticks_run >= max_ticks:
                break
            if clock is not None:
                clock.wait()
            self.advance()
            ticks_run += 1

        self._running = False
        return self.state

    def stop(self) -> None:
        """Stop a running loop after the current tick."""
        self._running = False

    # -------------------------------------------------------------------------
    # State Snapshot
    # -------------------------------------------------------------------------

    def snapshot(self) -> MatchSnapshot:
        """Read-only projection of the current match for rendering."""
        craft = tuple(
            CraftSnapshot(
                player=c.player,
                position=c.position.to_tuple(),
                velocity=c.velocity.to_tuple(),
                orientation=c.orientation,
                alive=c.alive,
                width=c.width,
                height=c.height,
            )
            for c in (self.craft[slot] for slot in PLAYER_SLOTS)
        )
        projectiles = tuple(
            ProjectileSnapshot(
                player=p.owner,
                position=p.position.to_tuple(),
                velocity=p.velocity.to_tuple(),
            ) if p is not None else None
            for p in (self.projectiles[slot] for slot in PLAYER_SLOTS)
        )
        return MatchSnapshot(
            tick=self.tick,
            state=self.state,
            body_position=self.body.position.to_tuple(),
            body_radius=self.body.radius,
            craft=craft,
            projectiles=projectiles,
        )

    # -------------------------------------------------------------------------
    # Event Logging
    # -------------------------------------------------------------------------

    def add_event_callback(self, callback: Callable[[MatchEvent], None]) -> None:
        """
        Register a callback to be called for each match event.

        Args:
            callback: Function that takes a MatchEvent.
        """
        self._event_callbacks.append(callback)

    def remove_event_callback(self, callback: Callable[[MatchEvent], None]) -> None:
        """Remove an event callback."""
        if callback in self._event_callbacks:
            self._event_callbacks.remove(callback)

    def _log_event(
        self,
        event_type: MatchEventType,
        player: Optional[int] = None,
        target: Optional[int] = None,
        data: Optional[dict] = None
    ) -> MatchEvent:
        """Log a match event and notify callbacks."""
        event = MatchEvent(
            event_type=event_type,
            tick=self.tick,
            player=player,
            target=target,
            data=data or {}
        )
        self.events.append(event)

        for callback in self._event_callbacks:
            try:
                callback(event)
            except Exception as e:
                print(f"[SIM] Event callback error: {e}")

        return event

    def get_events_since(self, since_tick: int) -> list[MatchEvent]:
        """Get all events at or after a tick."""
        return [e for e in self.events if e.tick >= since_tick]

    def get_events_for_player(self, player: int) -> list[MatchEvent]:
        return [e for e in self.events if e.player == player or e.target == player]

    def get_events_by_type(self, event_type: MatchEventType) -> list[MatchEvent]:
        """Get all events of a specific type."""
        return [e for e in self.events if e.event_type == event_type]
