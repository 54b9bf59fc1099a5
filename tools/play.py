#!/usr/bin/env python3
"""
Command-line front end for the Aegis move-decision engine.

Usage:
    python tools/play.py decide --fen "<FEN>" --effort 12

    python tools/play.py lesson hoplite

    python tools/play.py play --side white --effort 8 --engine /usr/bin/stockfish

Moves are typed in coordinate form (e2e4, e7e8q).
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import chess

from aegis.config import EngineConfig
from aegis.errors import AegisError, IllegalMoveError
from aegis.guided import LESSONS, ProgressStatus
from aegis.play import GameSession, MoveArbiter
from aegis.uci import open_adapter
from aegis.utils import setup_logger, setup_logging


def build_config(args) -> EngineConfig:
    """Engine configuration from command-line arguments."""
    return EngineConfig(
        engine_path=args.engine,
        use_external_engine=not args.no_engine,
        fallback_depth=args.depth,
    )


async def decide_move(args):
    """Print the arbiter's move for a position."""
    config = build_config(args)
    adapter = await open_adapter(config)
    try:
        arbiter = MoveArbiter(adapter, config)
        move = await arbiter.decide(args.fen, args.effort, args.movetime)
    finally:
        await adapter.close()

    if move is None:
        print("No legal moves (game over)")
        sys.exit(1)

    print(f"bestmove {move} (source: {arbiter.last_source})")


def run_lesson(args):
    """Play a built-in lesson, reading moves from stdin."""
    session = GameSession()
    lesson = session.load_lesson(args.lesson)

    print(f"{lesson.title}")
    print(session.board)

    while session.progression.status != ProgressStatus.COMPLETE:
        print(f"\nHint: {session.hint()}")
        try:
            text = input("your move> ").strip()
        except EOFError:
            return

        try:
            result = session.attempt_move(text)
        except IllegalMoveError as e:
            print(f"Illegal: {e}")
            continue

        if not result.accepted:
            print(f"{result.move} is not the move this step asks for, try again")
            continue

        print(session.board)

    print(f"\n{session.hint()}")


async def play_game(args):
    """Human against the bot on the terminal."""
    config = build_config(args)
    adapter = await open_adapter(config)
    human = chess.WHITE if args.side == "white" else chess.BLACK
    session = GameSession(MoveArbiter(adapter, config), orientation=human, effort_level=args.effort)

    try:
        while True:
            await session.bot_turn_if_needed()
            print(f"\n{session.board}\n{session.status}")
            if session.board.is_game_over(claim_draw=True):
                break

            try:
                text = input("your move> ").strip()
            except EOFError:
                break

            if text == "pgn":
                print(session.export_pgn())
                continue

            try:
                session.attempt_move(text)
            except AegisError as e:
                print(f"Illegal: {e}")
    finally:
        await adapter.close()

    print(session.export_pgn())


def add_engine_arguments(parser):
    parser.add_argument(
        "--engine",
        type=str,
        default=None,
        help="Path to a UCI engine binary (default: auto-detect Stockfish)",
    )
    parser.add_argument(
        "--no-engine",
        action="store_true",
        help="Never use an external engine",
    )
    parser.add_argument(
        "--effort",
        type=int,
        default=12,
        help="Bot effort level (0-20)",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=3,
        help="Fallback search depth",
    )


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Aegis move-decision engine",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging (includes engine traffic)",
    )
    parser.add_argument(
        "--log-file",
        action="store_true",
        help="Log to ~/.aegis/engine.log instead of the console",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    decide_parser = subparsers.add_parser("decide", help="Decide a move for a FEN")
    decide_parser.add_argument(
        "--fen",
        default=chess.STARTING_FEN,
        help="Position in FEN notation",
    )
    decide_parser.add_argument(
        "--movetime",
        type=int,
        default=None,
        help="Explicit engine think time in ms (default: derived from effort)",
    )
    add_engine_arguments(decide_parser)

    lesson_parser = subparsers.add_parser("lesson", help="Play a built-in lesson")
    lesson_parser.add_argument(
        "lesson",
        choices=[lesson.script_id for lesson in LESSONS],
        help="Lesson to play",
    )

    play_parser = subparsers.add_parser("play", help="Play against the bot")
    play_parser.add_argument(
        "--side",
        choices=["white", "black"],
        default="white",
        help="Side the human plays",
    )
    add_engine_arguments(play_parser)

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.log_file:
        setup_logger(debug=args.verbose)
    else:
        setup_logging(verbose=args.verbose)

    try:
        if args.command == "decide":
            asyncio.run(decide_move(args))
        elif args.command == "lesson":
            run_lesson(args)
        elif args.command == "play":
            asyncio.run(play_game(args))
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        sys.exit(1)
    except AegisError as e:
        print(f"\n\nError: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
