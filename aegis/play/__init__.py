"""
Play Module

Everything that turns a position into a played move for one game instance.

Key Components:
    - MoveArbiter: External engine first, local negamax as fallback
    - GameSession: Board, mode, selection and lesson state of one game
"""

from aegis.play.arbiter import MoveArbiter
from aegis.play.session import GameSession, GameMode

__all__ = ['MoveArbiter', 'GameSession', 'GameMode']
