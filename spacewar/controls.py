"""
Key-to-command translation.

Sits between the host's raw key events and the simulation. The host feeds
in key names; the mapper turns them into player-addressed commands. The
simulation never sees key names.

Default bindings (from the two-player keyboard layout):

    Player 1: Left / Right turn, Up thrust, Space fire
    Player 2: A / D turn, W thrust, LeftShift fire
"""

from __future__ import annotations

from typing import Mapping, Optional

from .command import Command, CommandType


DEFAULT_KEY_BINDINGS: dict[str, tuple[int, CommandType]] = {
    # Player 1
    "Left":      (1, CommandType.TURN_LEFT),
    "Right":     (1, CommandType.TURN_RIGHT),
    "Up":        (1, CommandType.ACCELERATE),
    "Space":     (1, CommandType.FIRE),
    # Player 2
    "A":         (2, CommandType.TURN_LEFT),
    "D":         (2, CommandType.TURN_RIGHT),
    "W":         (2, CommandType.ACCELERATE),
    "LeftShift": (2, CommandType.FIRE),
}


class KeyMapper:
    """Maps key names to commands using a binding table."""

    def __init__(self, bindings: Optional[Mapping[str, tuple[int, CommandType]]] = None) -> None:
        table = DEFAULT_KEY_BINDINGS if bindings is None else bindings
        # Validate every binding up front so a bad table fails at startup
        self._bindings = {key: Command(player, action) for key, (player, action) in table.items()}

    def translate(self, key: str) -> Optional[Command]:
        """Command bound to the key, or None if the key is unbound."""
        return self._bindings.get(key)

    def keys_for(self, player: int) -> list[str]:
        return [key for key, cmd in self._bindings.items() if cmd.player == player]

    @property
    def bindings(self) -> dict[str, Command]:
        return dict(self._bindings)
