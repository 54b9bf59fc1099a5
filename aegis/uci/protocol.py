"""
UCI line protocol helpers (client side).

Only the subset the adapter needs: identification, options, readiness,
position setup, timed search and shutdown.
"""

from aegis.board.rules import COORDINATE_PATTERN
from aegis.errors import EngineProtocolError

UCI = "uci"
UCIOK = "uciok"
ISREADY = "isready"
READYOK = "readyok"
STOP = "stop"
QUIT = "quit"
BESTMOVE = "bestmove"


def setoption(name: str, value) -> str:
    """setoption command, e.g. 'setoption name Threads value 2'."""
    return f"setoption name {name} value {value}"


def position_fen(fen: str) -> str:
    """position command for a FEN."""
    return f"position fen {fen}"


def go_movetime(movetime_ms: int) -> str:
    """go command with a fixed think time."""
    return f"go movetime {int(movetime_ms)}"


def is_bestmove(line: str) -> bool:
    """True for 'bestmove ...' lines."""
    tokens = line.split()
    return bool(tokens) and tokens[0] == BESTMOVE


def parse_bestmove(line: str) -> str:
    """
    Extract the move from a bestmove line.

    Formats:
        bestmove e2e4
        bestmove e7e8q ponder d1d8

    Args:
        line: Raw engine output line

    Returns:
        Move in coordinate form (4-5 characters)

    Raises:
        EngineProtocolError: If the line is not a bestmove line or the move
            is missing or malformed ("bestmove (none)" included)
    """
    tokens = line.split()
    if not tokens or tokens[0] != BESTMOVE:
        raise EngineProtocolError(f"Not a bestmove line: {line!r}")

    if len(tokens) < 2:
        raise EngineProtocolError(f"bestmove without a move: {line!r}")

    move = tokens[1]
    if not COORDINATE_PATTERN.match(move):
        raise EngineProtocolError(f"Malformed bestmove {move!r} in {line!r}")

    return move
