"""
Exception hierarchy for the move-decision engine.

Propagation:
    - IllegalMoveError, InvalidPositionError: surfaced to the caller so the
      user can be told what went wrong. State is never mutated.
    - EngineError family: handled inside MoveArbiter by falling back to the
      local search. Never fatal, the worst case is a weaker move.
"""


class AegisError(Exception):
    """Base class for all engine errors."""


class IllegalMoveError(AegisError, ValueError):
    """Proposed move is malformed or not legal in the current position."""


class InvalidPositionError(AegisError, ValueError):
    """Serialized position (FEN or PGN) could not be loaded."""


class EngineError(AegisError):
    """External engine request failed. Recoverable via fallback."""


class EngineUnavailableError(EngineError):
    """No external engine session is (or will become) available."""


class EngineTimeoutError(EngineError):
    """External engine did not answer within the time budget."""


class EngineProtocolError(EngineError):
    """External engine sent a malformed or unexpected message."""


class EngineBusyError(EngineError):
    """A search request is already outstanding on this session."""


class DecisionInProgressError(AegisError):
    """A move decision is already in flight for this game instance."""
