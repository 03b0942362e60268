# Area: Shared
"""
colorpass.cli — Command-line interface
======================================

Drives every room action in-process against a SQLite database.

Usage:
    colorpass init-db
    colorpass create Alice                     # -> {"room_id": ..., "player_id": 0}
    colorpass join ABC123 Bob
    colorpass start ABC123 0
    colorpass state ABC123 --viewer 1
    colorpass play ABC123 1 3f2a9c0b1d4e
    colorpass winner ABC123
    colorpass watch ABC123 1                   # poll until the game ends
    colorpass demo --players 3 --seed 7        # one unattended game
    colorpass delete ABC123

Results are printed as JSON on stdout. Rejected actions print the
error block on stderr and exit with status 1.

Configuration comes from --config, a .env file and environment
variables (see colorpass._config).
"""

import argparse
import json
import random
import sys
from typing import Any, Dict, List, Optional

from ._config import load_config
from ._room.coordinator import GameCoordinator
from ._room.store import RoomStore
from ._shared.logging_config import log_action_error, setup_logging
from .client import GameClient
from .demo_player import DemoPlayer, run_demo, shuffled_names
from .errors import ColorPassError


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one sub-command per action."""
    parser = argparse.ArgumentParser(
        prog="colorpass",
        description="ColorPass - pass cards clockwise, collect four of a color",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  colorpass create Alice
  colorpass join ABC123 Bob
  colorpass start ABC123 0
  COLORPASS_DB_PATH=/tmp/game.db colorpass demo --players 4
        """,
    )
    parser.add_argument("--config", type=str, help="Path to JSON config file")
    parser.add_argument("--env-file", type=str, help="Path to a .env file")
    parser.add_argument("--db", type=str, help="SQLite database path (overrides config)")
    parser.add_argument("--log-level", type=str, help="Logging level (overrides config)")
    parser.add_argument("--no-log-file", action="store_true",
                        help="Log to the terminal only")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create the database tables")

    p = sub.add_parser("create", help="Create a room and take the host seat")
    p.add_argument("player_name")

    p = sub.add_parser("join", help="Join an existing room")
    p.add_argument("room_id")
    p.add_argument("player_name")

    p = sub.add_parser("start", help="Deal the cards (host only)")
    p.add_argument("room_id")
    p.add_argument("player_id", type=int)

    p = sub.add_parser("play", help="Pass a card to the next player")
    p.add_argument("room_id")
    p.add_argument("player_id", type=int)
    p.add_argument("card_id")

    p = sub.add_parser("state", help="Show the room as a player sees it")
    p.add_argument("room_id")
    p.add_argument("--viewer", type=int, default=None, help="Viewing player id")

    p = sub.add_parser("winner", help="Show the winner, if any")
    p.add_argument("room_id")

    p = sub.add_parser("delete", help="Tear down a room")
    p.add_argument("room_id")

    p = sub.add_parser("watch", help="Poll a room and print changes")
    p.add_argument("room_id")
    p.add_argument("player_id", type=int)
    p.add_argument("--max-polls", type=int, default=None)

    p = sub.add_parser("demo", help="Play one automated game")
    p.add_argument("--players", type=int, default=3, choices=[2, 3, 4])
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--max-turns", type=int, default=200)
    p.add_argument("--keep", action="store_true", help="Keep the room afterwards")

    return parser


def _emit(data: Any, stream=None) -> None:
    print(json.dumps(data, ensure_ascii=False, indent=2), file=stream or sys.stdout)


def _watch(coordinator: GameCoordinator, args: argparse.Namespace,
           config: Dict[str, Any], stream) -> Dict[str, Any]:
    def event(name: str, **data: Any) -> None:
        print(json.dumps({"event": name, **data}, ensure_ascii=False),
              file=stream, flush=True)

    client = GameClient(
        coordinator,
        room_id=args.room_id,
        player_id=args.player_id,
        poll_interval_seconds=config["poll_interval_seconds"],
        play_debounce_ms=config["play_debounce_ms"],
        on_game_started=lambda state: event("game_started"),
        on_turn_change=lambda prev, cur: event("turn", previous=prev, current=cur),
        on_winner=lambda winner: event("winner", winner=winner),
    )
    try:
        state = client.run(max_polls=args.max_polls)
    except KeyboardInterrupt:
        state = client.last_state
    return {"room": state["room"] if state else None,
            "winner": state["winner"] if state else None}


def run_command(args: argparse.Namespace, config: Dict[str, Any],
                stream=None) -> Any:
    """
    Execute one parsed sub-command.

    Returns:
        JSON-serialisable result

    Raises:
        ColorPassError: If the action is rejected
    """
    store = RoomStore(config["db_path"], timeout=config["db_timeout_seconds"])
    if args.command == "init-db":
        return {"db_path": config["db_path"], "initialized": True}

    rng = random.Random(getattr(args, "seed", None))
    coordinator = GameCoordinator(store, rng=rng,
                                  room_id_attempts=config["room_id_attempts"])

    if args.command == "create":
        return coordinator.create_room(args.player_name).to_dict()
    if args.command == "join":
        return coordinator.join_room(args.room_id, args.player_name).to_dict()
    if args.command == "start":
        return coordinator.start_game(args.room_id, args.player_id).to_dict()
    if args.command == "play":
        return coordinator.play_card(args.room_id, args.player_id, args.card_id).to_dict()
    if args.command == "state":
        return coordinator.get_state(args.room_id, args.viewer)
    if args.command == "winner":
        return {"winner": coordinator.check_winner(args.room_id)}
    if args.command == "delete":
        return coordinator.delete_room(args.room_id).to_dict()
    if args.command == "watch":
        return _watch(coordinator, args, config, stream or sys.stdout)
    if args.command == "demo":
        return run_demo(
            coordinator,
            player_names=shuffled_names(args.players, rng),
            max_turns=args.max_turns,
            player=DemoPlayer(),
            delete_after=not args.keep,
        )
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config, env_file=args.env_file)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    if args.db:
        config["db_path"] = args.db
    if args.log_level:
        config["log_level"] = args.log_level

    try:
        setup_logging(None if args.no_log_file else config["log_file"],
                      level=config["log_level"])
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        result = run_command(args, config)
    except ColorPassError as e:
        log_action_error(e)
        return 1
    _emit(result)
    return 0
