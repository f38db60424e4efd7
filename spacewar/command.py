"""
Player commands and the thread-safe command queue.

Input handlers (producers) enqueue commands at any time from any thread.
The simulation (consumer) drains the queue once at the start of each tick.

Manages:
- The closed set of command types
- Player-addressed command values
- Per-player FIFO buffering guarded by a lock
"""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass
from enum import Enum


PLAYER_SLOTS = (1, 2)


class CommandType(Enum):
    """Actions a player can issue to their craft."""
    TURN_LEFT = "turn_left"
    TURN_RIGHT = "turn_right"
    ACCELERATE = "accelerate"
    FIRE = "fire"


@dataclass(frozen=True)
class Command:
    """A single action addressed to a player slot."""
    player: int
    action: CommandType

    def __post_init__(self) -> None:
        validate_command(self)

    def __str__(self) -> str:
        return f"P{self.player}:{self.action.value}"


def validate_command(command: Command) -> None:
    """
    Check that a command is addressed to a real slot with a known action.

    Raises:
        ValueError: If the player slot or action is invalid
    """
    if command.player not in PLAYER_SLOTS:
        raise ValueError(
            f"Invalid player slot {command.player!r}, expected one of {PLAYER_SLOTS}"
        )
    if not isinstance(command.action, CommandType):
        raise ValueError(f"Unknown command action {command.action!r}")


class CommandQueue:
    """
    Lock-protected buffer of pending commands, one FIFO per player.

    Ordering is preserved per player only. A drain returns player 1's
    commands followed by player 2's.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._pending: dict[int, deque[Command]] = {slot: deque() for slot in PLAYER_SLOTS}

    def enqueue(self, command: Command) -> None:
        with self._lock:
            self._pending[command.player].append(command)

    def drain(self) -> list[Command]:
        """Atomically remove and return every pending command."""
        with self._lock:
            drained: list[Command] = []
            for slot in PLAYER_SLOTS:
                drained.extend(self._pending[slot])
                self._pending[slot].clear()
            return drained

    def pending_count(self, player: int | None = None) -> int:
        with self._lock:
            if player is None:
                return sum(len(q) for q in self._pending.values())
            return len(self._pending[player])

    def __len__(self) -> int:
        return self.pending_count()
