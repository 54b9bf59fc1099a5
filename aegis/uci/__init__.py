"""
UCI Client

This package talks to an external UCI engine (typically Stockfish) as a
client. One EngineAdapter owns one engine process for the lifetime of a
game instance and serves one search request at a time.

Protocol Flow:
    Adapter → "uci"
    Engine  → "id name Stockfish 16" ... "uciok"
    Adapter → "setoption name Threads value 2"
    Adapter → "setoption name Hash value 32"
    Adapter → "isready"
    Engine  → "readyok"
    Adapter → "position fen <FEN>"
    Adapter → "go movetime 2200"
    Engine  → "info depth 18 score cp 25 ..."
    Engine  → "bestmove e7e5 ponder g1f3"

Reference:
    UCI Protocol: https://www.chessprogramming.org/UCI
"""

from aegis.uci.adapter import EngineAdapter, EngineRequest, EngineState, open_adapter
from aegis.uci.binding import EngineBinding, SubprocessBinding, find_engine
from aegis.uci.protocol import parse_bestmove

__all__ = [
    'EngineAdapter',
    'EngineRequest',
    'EngineState',
    'open_adapter',
    'EngineBinding',
    'SubprocessBinding',
    'find_engine',
    'parse_bestmove',
]
