"""
Abstract Evaluator Interface

Key Principles:
    1. Evaluators are stateless
    2. evaluate() always returns centipawns from White's perspective
    3. Positive = White advantage, Negative = Black advantage
    4. Scores are plain integers

Convention:
    - Material values in centipawns (pawn = 100, queen = 900)
    - Return 0 for materially equal positions
    - The search negates for Black (see side_sign)
"""

from abc import ABC, abstractmethod

import chess


class Evaluator(ABC):
    """
    Abstract base class for position evaluation.

    All evaluator implementations must inherit from this class and implement
    the evaluate() method.
    """

    @abstractmethod
    def evaluate(self, board: chess.Board) -> int:
        """
        Evaluate a chess position from White's perspective.

        Args:
            board: python-chess Board object to evaluate

        Returns:
            int: Evaluation in centipawns
        """
        pass

    def __repr__(self) -> str:
        """String representation of evaluator."""
        return f"{self.__class__.__name__}()"
