"""
PGN import/export for full-game records.
"""

import io
import logging
from typing import Dict, Optional

import chess
import chess.pgn

from aegis.errors import InvalidPositionError

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "Event": "Aegis game",
    "Site": "Aegis",
}


def export_pgn(board: chess.Board, headers: Optional[Dict[str, str]] = None) -> str:
    """
    Export the game played on a board as PGN.

    The record starts from the board's root position (a SetUp/FEN header is
    written for non-standard starts) and replays its move stack.

    Args:
        board: Board whose move stack is the game
        headers: Extra PGN tags (override the defaults)

    Returns:
        PGN text
    """
    game = chess.pgn.Game.from_board(board)

    for key, value in DEFAULT_HEADERS.items():
        game.headers[key] = value
    for key, value in (headers or {}).items():
        game.headers[key] = value

    exporter = chess.pgn.StringExporter(headers=True, variations=False, comments=False)
    return game.accept(exporter)


def import_pgn(text: str) -> chess.Board:
    """
    Load a PGN record and return the final mainline position.

    The returned board keeps the full move stack, so moves can be undone
    back to the record's starting position.

    Raises:
        InvalidPositionError: If no game could be read or the record contains
            illegal or unparseable moves
    """
    if not text or not text.strip():
        raise InvalidPositionError("Empty PGN")

    game = chess.pgn.read_game(io.StringIO(text))
    if game is None:
        raise InvalidPositionError("No game found in PGN")

    if game.errors:
        # python-chess collects parse errors instead of raising
        raise InvalidPositionError(f"Invalid PGN: {game.errors[0]}")

    board = game.board()
    for move in game.mainline_moves():
        board.push(move)

    logger.debug(f"Imported PGN with {len(board.move_stack)} plies")
    return board
