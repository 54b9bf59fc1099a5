"""
Fixed-Depth Negamax Search

Negamax is minimax written once: every node scores the position for the
side to move, and a child's score is negated on the way up.

Algorithm:
    1. depth == 0 or game over → color * evaluate(board)
    2. For each legal move (python-chess enumeration order):
        a. push the move
        b. score = -negamax(depth - 1, -color)
        c. pop the move
    3. Return the maximum score

Tie-break:
    The first move reaching the best score wins. A later move replaces it
    only with a strictly greater score, so results are deterministic and
    prefer the earliest enumerated move.

Complexity:
    O(b^d), b ≈ 35. Depth is capped at MAX_SEARCH_DEPTH to bound latency.

References:
    - Negamax: https://www.chessprogramming.org/Negamax
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Union

import chess

from aegis.board.rules import is_terminal, load_position, side_sign
from aegis.evaluation.base import Evaluator
from aegis.evaluation.material import MaterialEvaluator

logger = logging.getLogger(__name__)

MAX_SEARCH_DEPTH = 4  # Search is exhaustive; deeper is too slow to be useful


@dataclass(frozen=True)
class ScoredMove:
    """
    Result of a root search.

    Attributes:
        move: Best move found
        score: Centipawns from the perspective of the side to move at the root
        nodes: Number of positions visited
    """
    move: chess.Move
    score: int
    nodes: int = 0

    def uci(self) -> str:
        """Coordinate form of the move."""
        return self.move.uci()


def negamax(
    board: chess.Board,
    depth: int,
    color: int,
    evaluator: Evaluator,
    nodes_searched: Optional[List[int]] = None,
) -> int:
    """
    Score a position for the side to move.

    Args:
        board: Current chess position (restored before returning)
        depth: Remaining search depth
        color: +1 if White is to move, -1 if Black is
        evaluator: White-relative position evaluation
        nodes_searched: Optional mutable list [count] of positions visited

    Returns:
        int: Score in centipawns for the side to move
    """
    if nodes_searched is not None:
        nodes_searched[0] += 1

    if depth == 0 or is_terminal(board):
        return color * evaluator.evaluate(board)

    best = None
    for move in list(board.legal_moves):
        board.push(move)
        try:
            value = -negamax(board, depth - 1, -color, evaluator, nodes_searched)
        finally:
            board.pop()

        if best is None or value > best:
            best = value

    # Unreachable in practice: no legal moves means is_terminal() was True
    if best is None:
        return color * evaluator.evaluate(board)
    return best


def search(
    position: Union[str, chess.Board],
    depth: int,
    evaluator: Optional[Evaluator] = None,
) -> Optional[ScoredMove]:
    """
    Find the best move in a position.

    Args:
        position: FEN string, or a chess.Board searched in place (every pushed
            move is popped again, the board is unchanged afterwards)
        depth: Search depth in plies (0..MAX_SEARCH_DEPTH)
        evaluator: Position evaluation (default: MaterialEvaluator)

    Returns:
        ScoredMove for the side to move, or None if there are no legal moves.
        At depth 0 no move is looked at: the earliest enumerated move is
        returned with the static score.

    Raises:
        ValueError: If depth is out of range
        InvalidPositionError: If a FEN string cannot be loaded
    """
    if not 0 <= depth <= MAX_SEARCH_DEPTH:
        raise ValueError(f"depth should be between 0 and {MAX_SEARCH_DEPTH}, got {depth}")

    board = load_position(position) if isinstance(position, str) else position
    evaluator = evaluator if evaluator else MaterialEvaluator()

    legal_moves = list(board.legal_moves)
    if not legal_moves:
        return None

    color = side_sign(board)

    if depth == 0:
        return ScoredMove(legal_moves[0], color * evaluator.evaluate(board), nodes=1)

    nodes = [1]
    best_move = None
    best_score = None

    for move in legal_moves:
        board.push(move)
        try:
            score = -negamax(board, depth - 1, -color, evaluator, nodes)
        finally:
            board.pop()

        if best_score is None or score > best_score:
            best_score = score
            best_move = move

    logger.debug(
        f"Search depth={depth}: best={best_move.uci()} score={best_score} nodes={nodes[0]}"
    )
    return ScoredMove(best_move, best_score, nodes=nodes[0])
