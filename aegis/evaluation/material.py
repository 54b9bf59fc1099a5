"""
Material Evaluation

Counts material and nothing else: no piece-square tables, no mobility, no
terminal detection (the search handles game over by calling evaluate()
on the final position like any other leaf).

Evaluation Components:
    - Material: P=100, N=320, B=330, R=500, Q=900, K=0
"""

import chess
import numpy as np

from aegis.evaluation.base import Evaluator

# ============================================================================
# Material Values (centipawns)
# ============================================================================

PIECE_VALUES = {
    chess.PAWN: 100,
    chess.KNIGHT: 320,
    chess.BISHOP: 330,
    chess.ROOK: 500,
    chess.QUEEN: 900,
    chess.KING: 0,
}

# Indexed by piece type (chess.PAWN == 1 ... chess.KING == 6); slot 0 unused
VALUE_VECTOR = np.array(
    [0] + [PIECE_VALUES[piece_type] for piece_type in chess.PIECE_TYPES],
    dtype=np.int64,
)


class MaterialEvaluator(Evaluator):
    """
    Material-only evaluation.

    White pieces count positive, Black pieces negative, so a position with
    identical material on both sides scores exactly 0.
    """

    def piece_balance(self, board: chess.Board) -> np.ndarray:
        """
        White-minus-Black piece counts per piece type.

        Args:
            board: Chess board to analyze

        Returns:
            Integer array of length 7 indexed by piece type
        """
        balance = np.zeros(len(VALUE_VECTOR), dtype=np.int64)
        for piece_type in chess.PIECE_TYPES:
            white = chess.popcount(board.pieces_mask(piece_type, chess.WHITE))
            black = chess.popcount(board.pieces_mask(piece_type, chess.BLACK))
            balance[piece_type] = white - black
        return balance

    def evaluate(self, board: chess.Board) -> int:
        """
        Evaluate position by material.

        Args:
            board: Chess board to evaluate

        Returns:
            int: Evaluation in centipawns (White's perspective)
        """
        return int(self.piece_balance(board) @ VALUE_VECTOR)
