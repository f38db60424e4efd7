#!/usr/bin/env python3
"""
Run a scripted, headless Spacewar match.

Each player gets a script of "action@tick" entries; the commands are queued
just before that tick runs. The match runs until one craft is destroyed or
the tick limit is reached.

Usage:
    python scripts/run_match.py --p1 "fire@1"
    python scripts/run_match.py --p1 "fire@1" --p2 "fire@3" --p2-orientation 3.14159
    python scripts/run_match.py --ticks 600 --realtime --verbose
"""

import argparse
import math
import sys
from pathlib import Path

import numpy as np

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from spacewar.arena import ArenaConfig, load_arena_config
from spacewar.command import Command, CommandType
from spacewar.simulation import MatchEventType, SpacewarSimulation, TickClock


ACTION_NAMES = {
    "left": CommandType.TURN_LEFT,
    "right": CommandType.TURN_RIGHT,
    "thrust": CommandType.ACCELERATE,
    "fire": CommandType.FIRE,
}


def parse_script(text: str, player: int) -> dict[int, list[Command]]:
    """
    Parse "fire@1,left@3,thrust@3" into tick -> commands.

    Raises:
        ValueError: On an unknown action or a malformed entry.
    """
    schedule: dict[int, list[Command]] = {}
    for entry in filter(None, (part.strip() for part in text.split(","))):
        action_name, sep, tick_text = entry.partition("@")
        if not sep:
            raise ValueError(f"Expected action@tick, got {entry!r}")
        action = ACTION_NAMES.get(action_name.lower())
        if action is None:
            raise ValueError(
                f"Unknown action {action_name!r} (choose from {', '.join(ACTION_NAMES)})"
            )
        tick = int(tick_text)
        if tick < 1:
            raise ValueError(f"Ticks start at 1, got {tick}")
        schedule.setdefault(tick, []).append(Command(player, action))
    return schedule


def orbit_summary(trace: np.ndarray, center: tuple[float, float]) -> dict[str, float]:
    """
    Distance-from-center statistics for one craft.

    Args:
        trace: (n_ticks, 2) array of positions
        center: Central body position

    Returns:
        Dict with min/max/mean radius and total path length
    """
    if len(trace) == 0:
        return {"min_radius": 0.0, "max_radius": 0.0, "mean_radius": 0.0, "path_length": 0.0}
    radii = np.linalg.norm(trace - np.asarray(center), axis=1)
    steps = np.linalg.norm(np.diff(trace, axis=0), axis=1)
    return {
        "min_radius": float(radii.min()),
        "max_radius": float(radii.max()),
        "mean_radius": float(radii.mean()),
        "path_length": float(steps.sum()),
    }


def main():
    parser = argparse.ArgumentParser(
        description="Run a scripted Spacewar match",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python scripts/run_match.py --p1 "fire@1"
    python scripts/run_match.py --p1 "fire@1" --p2 "fire@3" --p2-orientation 3.14159
        """,
    )
    parser.add_argument("--p1", default="", help="Player 1 script, e.g. 'left@2,fire@5'")
    parser.add_argument("--p2", default="", help="Player 2 script")
    parser.add_argument("--p1-orientation", type=float, default=None,
                        help="Override player 1 starting heading (radians)")
    parser.add_argument("--p2-orientation", type=float, default=None,
                        help="Override player 2 starting heading (radians)")
    parser.add_argument("--arena", type=Path, default=None,
                        help="Arena JSON file (default: bundled arena.json)")
    parser.add_argument("--ticks", type=int, default=600,
                        help="Stop after this many ticks if nobody has won (default: 600)")
    parser.add_argument("--realtime", action="store_true",
                        help="Pace ticks at 60 Hz instead of running flat out")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Print every match event")
    args = parser.parse_args()

    try:
        arena = load_arena_config(args.arena)
        if args.p1_orientation is not None or args.p2_orientation is not None:
            orientations = dict(arena.spawn_orientations)
            if args.p1_orientation is not None:
                orientations[1] = args.p1_orientation
            if args.p2_orientation is not None:
                orientations[2] = args.p2_orientation
            arena = ArenaConfig.from_dict({
                **arena.to_dict(),
                "spawns": {
                    str(slot): {"position": list(arena.spawn_positions[slot]),
                                "orientation": orientations[slot]}
                    for slot in (1, 2)
                },
            })

        schedule = parse_script(args.p1, 1)
        for tick, commands in parse_script(args.p2, 2).items():
            schedule.setdefault(tick, []).extend(commands)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    sim = SpacewarSimulation(arena=arena)
    if args.verbose:
        sim.add_event_callback(lambda event: print(f"[MATCH] {event}"))
    else:
        important = {MatchEventType.PROJECTILE_LAUNCHED, MatchEventType.PROJECTILE_EXPIRED,
                     MatchEventType.CRAFT_DESTROYED, MatchEventType.MATCH_ENDED}
        sim.add_event_callback(
            lambda event: print(f"[MATCH] {event}") if event.event_type in important else None
        )

    clock = TickClock() if args.realtime else None
    if clock is not None:
        clock.reset()

    traces: dict[int, list[tuple[float, float]]] = {1: [], 2: []}
    for _ in range(args.ticks):
        for command in schedule.get(sim.tick + 1, []):
            sim.enqueue(command)
        if clock is not None:
            clock.wait()
        result = sim.advance()
        snapshot = result.snapshot if result.snapshot is not None else sim.snapshot()
        for craft in snapshot.craft:
            traces[craft.player].append(craft.position)
        if result.is_terminal:
            break

    print(f"\nOutcome: {sim.state.value} after {sim.tick} ticks")
    for slot in (1, 2):
        craft = sim.get_craft(slot)
        stats = orbit_summary(np.array(traces[slot], dtype=float).reshape(-1, 2),
                              sim.body.position.to_tuple())
        print(
            f"  P{slot}: alive={craft.alive} pos=({craft.position.x:.2f}, {craft.position.y:.2f}) "
            f"heading={math.degrees(craft.orientation):.1f}deg "
            f"radius min/mean/max={stats['min_radius']:.1f}/{stats['mean_radius']:.1f}/"
            f"{stats['max_radius']:.1f} path={stats['path_length']:.2f}"
        )

    return 0


if __name__ == "__main__":
    sys.exit(main())
