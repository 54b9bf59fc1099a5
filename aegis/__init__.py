"""
Aegis Move-Decision Engine

The engine side of the Aegis chess game: it decides moves for the bot and
enforces the scripted move sequences of lessons and puzzles.

## Architecture

The package is organized into several key modules:

1. **board**: Rules binding on top of python-chess
   - FEN loading with validation, coordinate move form, game status
   - PGN import/export

2. **evaluation**: Position evaluation functions
   - Abstract Evaluator interface
   - MaterialEvaluator: plain material count

3. **search**: Fixed-depth negamax used as the local fallback

4. **uci**: Client side of the UCI protocol
   - Line protocol helpers
   - EngineAdapter: session with an external engine (e.g. Stockfish)

5. **play**: Move arbiter and per-game session state

6. **guided**: Lessons, puzzles and the progression controller

## Quick Start

```python
import asyncio
import chess
from aegis.play import MoveArbiter

arbiter = MoveArbiter()  # no external engine: local search only
move = asyncio.run(arbiter.decide(chess.STARTING_FEN, effort_level=12))
print(f"Bot plays: {move}")
```

## Version

0.1.0
"""

__version__ = "0.1.0"
__license__ = "MIT"

from aegis.errors import (
    AegisError,
    IllegalMoveError,
    InvalidPositionError,
    EngineError,
    EngineUnavailableError,
    EngineTimeoutError,
    EngineProtocolError,
)
from aegis.evaluation import Evaluator, MaterialEvaluator
from aegis.search import search, ScoredMove
from aegis.play import MoveArbiter, GameSession

__all__ = [
    'AegisError',
    'IllegalMoveError',
    'InvalidPositionError',
    'EngineError',
    'EngineUnavailableError',
    'EngineTimeoutError',
    'EngineProtocolError',
    'Evaluator',
    'MaterialEvaluator',
    'search',
    'ScoredMove',
    'MoveArbiter',
    'GameSession',
]
