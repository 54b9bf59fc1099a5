"""
Move Arbiter

Decides one move for the side to move:

    1. If the external engine session is READY, ask it with a think time
       derived from the effort level and wait at most that long (plus a
       small grace period).
    2. On timeout, protocol error, illegal reply or missing engine, run the
       local negamax at a fixed small depth instead.

Engine failures never reach the caller. The worst outcome is a weaker
move. Only invalid input (bad FEN) and concurrent use are reported.
"""

import asyncio
import logging
from typing import Optional, Union

import chess

from aegis.board.rules import load_position
from aegis.config import EngineConfig
from aegis.errors import (
    DecisionInProgressError,
    EngineError,
    EngineProtocolError,
    EngineTimeoutError,
    EngineUnavailableError,
)
from aegis.evaluation.base import Evaluator
from aegis.evaluation.material import MaterialEvaluator
from aegis.search.negamax import search
from aegis.uci.adapter import EngineAdapter

logger = logging.getLogger(__name__)


class MoveArbiter:
    """
    Chooses between the external engine and the local search.

    Attributes:
        adapter: External engine session (None = local search only)
        config: Time budgets and fallback depth
        evaluator: Evaluation used by the local search
        last_source: "engine" or "search", whichever produced the last move
    """

    def __init__(
        self,
        adapter: Optional[EngineAdapter] = None,
        config: Optional[EngineConfig] = None,
        evaluator: Optional[Evaluator] = None,
    ):
        self.adapter = adapter
        self.config = config if config else EngineConfig()
        self.evaluator = evaluator if evaluator else MaterialEvaluator()
        self.last_source: Optional[str] = None
        self._in_flight = False

    @property
    def in_flight(self) -> bool:
        """True while a decision is being computed."""
        return self._in_flight

    async def decide(
        self,
        position: Union[str, chess.Board],
        effort_level: Optional[int] = None,
        time_budget_ms: Optional[int] = None,
    ) -> Optional[str]:
        """
        Decide a move.

        Args:
            position: FEN string or board (a board is not modified)
            effort_level: Bot strength, 0..config.max_effort
            time_budget_ms: Explicit think time; replaces the one derived
                from effort_level (still capped by the ceiling)

        Returns:
            Move in coordinate form, or None if the side to move has no
            legal moves

        Raises:
            InvalidPositionError: If the FEN cannot be loaded
            DecisionInProgressError: If another decision is in flight
        """
        if self._in_flight:
            raise DecisionInProgressError("A move decision is already in flight")

        board = load_position(position) if isinstance(position, str) else position.copy()

        if not any(board.legal_moves):
            logger.warning(f"No legal moves in {board.fen()}, nothing to decide")
            return None

        movetime = self.config.movetime_for(effort_level, time_budget_ms)

        self._in_flight = True
        try:
            try:
                move = await self._ask_engine(board, movetime)
                self.last_source = "engine"
                return move
            except EngineError as e:
                logger.info(f"Falling back to local search: {e}")

            move = self._search_fallback(board)
            self.last_source = "search"
            return move
        finally:
            self._in_flight = False

    async def _ask_engine(self, board: chess.Board, movetime_ms: int) -> str:
        """
        One request/response round trip with the external engine.

        Raises:
            EngineUnavailableError: No READY session
            EngineTimeoutError: No answer within movetime + grace
            EngineProtocolError: Malformed or illegal answer
        """
        if self.adapter is None:
            raise EngineUnavailableError("no external engine configured")

        request = self.adapter.request_move(board.fen(), movetime_ms)
        wait_s = (movetime_ms + self.config.response_grace_ms) / 1000.0

        try:
            text = await asyncio.wait_for(request.result, timeout=wait_s)
        except asyncio.TimeoutError:
            self.adapter.abandon(request.request_id)
            raise EngineTimeoutError(
                f"request #{request.request_id} unanswered after {wait_s:.2f}s"
            )

        move = chess.Move.from_uci(text)
        if move not in board.legal_moves:
            raise EngineProtocolError(f"engine proposed illegal move {text}")

        logger.debug(f"Engine move {text} (movetime={movetime_ms}ms)")
        return text

    def _search_fallback(self, board: chess.Board) -> Optional[str]:
        """Local negamax at the configured fallback depth."""
        result = search(board, self.config.fallback_depth, self.evaluator)
        if result is None:
            return None

        logger.debug(
            f"Fallback move {result.uci()} (score={result.score}, nodes={result.nodes})"
        )
        return result.uci()

