"""
Rules binding on top of python-chess.

python-chess does the real work (legality, termination, notation). This
module fixes the conventions the rest of the engine relies on:

    - Positions are exchanged as FEN strings and validated on load
    - Moves cross component boundaries in coordinate form:
      from-square + to-square + optional promotion letter ("e7e8q")
    - Side to move is a sign: +1 for White, -1 for Black
"""

import re
from typing import Union

import chess

from aegis.errors import IllegalMoveError, InvalidPositionError

COORDINATE_PATTERN = re.compile(r"^[a-h][1-8][a-h][1-8][qrbn]?$")

MoveLike = Union[str, chess.Move]


def load_position(fen: str) -> chess.Board:
    """
    Build a board from a FEN string.

    Args:
        fen: Position in FEN notation

    Returns:
        New chess.Board

    Raises:
        InvalidPositionError: If the FEN is malformed or describes an
            impossible position (missing kings, side not to move in check...)
    """
    if not isinstance(fen, str) or not fen.strip():
        raise InvalidPositionError(f"Empty or non-string FEN: {fen!r}")

    try:
        board = chess.Board(fen.strip())
    except ValueError as e:
        raise InvalidPositionError(f"Invalid FEN {fen!r}: {e}") from e

    if not board.is_valid():
        raise InvalidPositionError(f"Illegal position {fen!r}: {board.status()!r}")

    return board


def side_sign(board: chess.Board) -> int:
    """+1 if White is to move, -1 if Black is."""
    return 1 if board.turn == chess.WHITE else -1


def is_terminal(board: chess.Board) -> bool:
    """
    Check whether the game is over.

    Claimable draws (fifty-move rule, threefold repetition) count as over,
    alongside checkmate, stalemate and insufficient material.
    """
    return board.is_game_over(claim_draw=True)


def to_coordinate(move: chess.Move) -> str:
    """Coordinate form of a move, e.g. "e2e4" or "e7e8q"."""
    return move.uci()


def parse_coordinate(text: str) -> chess.Move:
    """
    Parse a coordinate-form move.

    Raises:
        IllegalMoveError: If text is not 4-5 characters of
            from-square, to-square and optional promotion letter
    """
    normalized = text.strip().lower() if isinstance(text, str) else ""
    if not COORDINATE_PATTERN.match(normalized):
        raise IllegalMoveError(f"Malformed move: {text!r}")
    return chess.Move.from_uci(normalized)


def apply_coordinate(board: chess.Board, move: MoveLike) -> chess.Move:
    """
    Play a move on the board if it is legal.

    Args:
        board: Board to update
        move: chess.Move or coordinate string

    Returns:
        The move that was pushed

    Raises:
        IllegalMoveError: If the move is malformed or illegal. The board is
            left untouched.
    """
    if not isinstance(move, chess.Move):
        move = parse_coordinate(move)

    if move not in board.legal_moves:
        raise IllegalMoveError(f"Illegal move {move.uci()} in {board.fen()}")

    board.push(move)
    return move


def status_text(board: chess.Board) -> str:
    """Human readable status line for the position."""
    if board.is_checkmate():
        return "Checkmate"
    if board.is_stalemate() or board.is_insufficient_material() or board.can_claim_draw():
        return "Draw"
    if board.is_check():
        return "Check"
    return "White to move" if board.turn == chess.WHITE else "Black to move"
