"""
CLI for inspecting and checking saved games.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from pydantic import ValidationError

from oligarchy.config import GameConfig
from oligarchy.exceptions import SaveFileError
from oligarchy.game import GameState
from oligarchy.loader import load_game
from oligarchy.serializer import save_game
from oligarchy.settings import get_settings
from oligarchy.snapshot import serialize_snapshot

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def format_summary(game: GameState) -> str:
    """Human-readable overview of a loaded game."""
    lines = [
        f"Time: {game.elapsed_time}",
        f"Go payout: {game.go_payout}",
        f"Jail: {game.jail_position if game.jail_position is not None else 'none'}",
        f"Players: {len(game.players)} ({game.active_player_count} active)",
    ]
    for player in game.players:
        flags = []
        if player.player_id == game.turn_player_id:
            flags.append("turn")
        if player.loser:
            flags.append("lost")
        if player.in_jail:
            flags.append(f"jail {player.jail_counter}")
        suffix = f" [{', '.join(flags)}]" if flags else ""
        lines.append(
            f"  #{player.player_id} {player.name}: ${player.money} at {player.position}, "
            f"{len(player.properties)} properties{suffix}"
        )
    owned = sum(1 for p in game.board.properties() if p.is_owned())
    lines.append(f"Properties: {len(game.board.properties())} ({owned} owned)")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="oligarchy-save",
        description="Inspect and check saved games",
    )
    parser.add_argument(
        "--tiles",
        type=int,
        default=None,
        help="Board size (default: OLIGARCHY_NUMBER_OF_TILES or 40)"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    show = subparsers.add_parser("show", help="Print a summary of a save file")
    show.add_argument("file", type=str, help="Path to save file")
    show.add_argument(
        "--json",
        action="store_true",
        help="Print the full snapshot as JSON"
    )

    check = subparsers.add_parser("check", help="Validate a save file")
    check.add_argument("file", type=str, help="Path to save file")

    rewrite = subparsers.add_parser("rewrite", help="Load a save file and write it back normalized")
    rewrite.add_argument("file", type=str, help="Path to save file")
    rewrite.add_argument(
        "--output",
        type=str,
        default=None,
        help="Where to write (default: overwrite the input)"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = get_settings()
    except ValidationError as e:
        logging.basicConfig(format=LOG_FORMAT)
        logger.error(f"Invalid OLIGARCHY_* settings: {e}")
        return 1
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)

    config = GameConfig.from_settings(settings)
    if args.tiles is not None:
        config = GameConfig(number_of_tiles=args.tiles, encoding=config.encoding)

    try:
        game = load_game(args.file, config)
        if args.command == "show":
            if args.json:
                print(json.dumps(serialize_snapshot(game), indent=2))
            else:
                print(format_summary(game))
        elif args.command == "check":
            print(f"{args.file}: OK ({len(game.players)} players)")
        elif args.command == "rewrite":
            save_game(args.output or args.file, game, config.encoding)
    except SaveFileError as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
