"""
Board Module

Thin rules layer over python-chess. A position travels between components
as its FEN string; chess.Board is the mutable working copy.

Key Components:
    - load_position: FEN → validated chess.Board
    - Coordinate move form: "e2e4", "e7e8q"
    - status_text: human readable game status
    - PGN import/export
"""

from aegis.board.rules import (
    load_position,
    side_sign,
    is_terminal,
    to_coordinate,
    parse_coordinate,
    apply_coordinate,
    status_text,
)
from aegis.board.pgn import import_pgn, export_pgn

__all__ = [
    'load_position',
    'side_sign',
    'is_terminal',
    'to_coordinate',
    'parse_coordinate',
    'apply_coordinate',
    'status_text',
    'import_pgn',
    'export_pgn',
]
