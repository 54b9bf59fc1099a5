"""
Evaluation Module

Position evaluation for the local search. Evaluators are swappable: the
search works with anything implementing the Evaluator interface.

Key Components:
    - Evaluator (ABC): Abstract base class defining the evaluation interface
    - MaterialEvaluator: Fixed per-piece material count

Data Flow:
    chess.Board → evaluator.evaluate() → int (centipawns)
                                         Positive = White advantage
                                         Negative = Black advantage

"""

from aegis.evaluation.base import Evaluator
from aegis.evaluation.material import MaterialEvaluator, PIECE_VALUES

__all__ = ['Evaluator', 'MaterialEvaluator', 'PIECE_VALUES']
