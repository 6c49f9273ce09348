"""
Footchess CLI - Command-line interface for the engine.

Usage:
    footchess selfplay --home hard --away easy --games 20 --seed 7
    footchess board                              Print the kick-off layout
"""

import argparse
import random
import sys

from loguru import logger


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Footchess - Football board game engine",
        prog="footchess",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Show engine debug logs")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Self-play command
    selfplay_parser = subparsers.add_parser("selfplay", help="Play bot-vs-bot matches")
    selfplay_parser.add_argument("--home", default="hard", help="Home difficulty")
    selfplay_parser.add_argument("--away", default="easy", help="Away difficulty")
    selfplay_parser.add_argument("--home-style", default=None, help="Home playing style")
    selfplay_parser.add_argument("--away-style", default=None, help="Away playing style")
    selfplay_parser.add_argument("--games", type=int, default=10, help="Number of matches")
    selfplay_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    selfplay_parser.add_argument("--max-moves", type=int, default=None, help="Move limit per match")

    # Board command
    subparsers.add_parser("board", help="Print the kick-off layout")

    args = parser.parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else "WARNING")

    if args.command == "selfplay":
        return cmd_selfplay(args)
    elif args.command == "board":
        return cmd_board(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_selfplay(args):
    """Run bot-vs-bot matches and print the tally."""
    from . import config
    from .bots import FootballBot, Difficulty, get_style
    from .engine_core import Side
    from .session import GameLoop

    if args.games < 1:
        print("Error: --games must be at least 1")
        sys.exit(1)
    if args.max_moves is not None and args.max_moves < 1:
        print("Error: --max-moves must be at least 1")
        sys.exit(1)
    max_moves = config.MAX_MATCH_MOVES if args.max_moves is None else args.max_moves

    try:
        home = Difficulty.parse(args.home)
        away = Difficulty.parse(args.away)
        home_style = get_style(args.home_style)
        away_style = get_style(args.away_style)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    rng = random.Random(args.seed)
    tally = {"home": 0, "away": 0, "draw": 0}
    goals = {"home": 0, "away": 0}

    print(f"Home {home.value} ({home_style.name}) vs Away {away.value} ({away_style.name})")
    for game in range(1, args.games + 1):
        loop = GameLoop(
            FootballBot(side=Side.HOME, difficulty=home, personality=home_style, rng=rng),
            FootballBot(side=Side.AWAY, difficulty=away, personality=away_style, rng=rng),
            max_moves=max_moves,
        )
        result = loop.run()
        score = result.final_state.score
        goals["home"] += score[Side.HOME]
        goals["away"] += score[Side.AWAY]
        outcome = result.winner.value if result.winner else "draw"
        tally[outcome] += 1
        print(
            f"  Game {game}: {score[Side.HOME]}-{score[Side.AWAY]} "
            f"({outcome}, {result.moves_played} moves, {result.passes} passes)"
        )

    print(f"\nHome wins: {tally['home']}")
    print(f"Away wins: {tally['away']}")
    print(f"Draws: {tally['draw']}")
    print(f"Goals: {goals['home']}-{goals['away']}")
    return tally


def cmd_board(args):
    """Print the kick-off layout, row 0 at the top."""
    from .engine_core import PieceType, Side, create_initial_state

    letters = {
        PieceType.FLANKER: "f",
        PieceType.DEFENDER: "d",
        PieceType.MIDFIELDER: "m",
        PieceType.FORWARD: "w",
    }
    board = create_initial_state().board
    for row_index, row in enumerate(board.cells):
        cells = []
        for piece in row:
            if piece is None:
                cells.append(".")
            else:
                letter = letters[piece.piece_type]
                cells.append(letter.upper() if piece.side == Side.HOME else letter)
        print(f"{row_index:2d} {' '.join(cells)}")
    print("   " + " ".join(str(c) for c in range(len(board.cells[0]))))


if __name__ == "__main__":
    main()
