"""
Unit Tests for Evaluation Module

Tests for material evaluation, focusing on:
    - Material counting accuracy
    - Symmetry (mirrored position = negated evaluation)
    - Integer, White-relative scores
"""

import chess
import pytest

from aegis.evaluation import Evaluator, MaterialEvaluator, PIECE_VALUES


class TestMaterialEvaluator:
    """Tests for MaterialEvaluator."""

    @pytest.fixture
    def evaluator(self):
        """Create a MaterialEvaluator instance."""
        return MaterialEvaluator()

    def test_starting_position_is_zero(self, evaluator):
        """Equal material scores exactly 0."""
        assert evaluator.evaluate(chess.Board()) == 0

    def test_returns_plain_int(self, evaluator):
        """Scores are Python ints, not numpy scalars."""
        score = evaluator.evaluate(chess.Board())
        assert type(score) is int

    def test_missing_white_rook(self, evaluator):
        """White missing the h1 rook is -500."""
        board = chess.Board("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBN1 w Qkq - 0 1")
        assert evaluator.evaluate(board) == -500

    def test_missing_black_queen(self, evaluator):
        """Black missing the queen is +900."""
        board = chess.Board("rnb1kbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1")
        assert evaluator.evaluate(board) == 900

    @pytest.mark.parametrize(
        "piece_type, value",
        [
            (chess.PAWN, 100),
            (chess.KNIGHT, 320),
            (chess.BISHOP, 330),
            (chess.ROOK, 500),
            (chess.QUEEN, 900),
        ],
    )
    def test_single_piece_values(self, evaluator, piece_type, value):
        """A lone extra piece is worth its table value."""
        board = chess.Board("4k3/8/8/8/8/8/8/4K3 w - - 0 1")
        board.set_piece_at(chess.D4, chess.Piece(piece_type, chess.WHITE))

        assert evaluator.evaluate(board) == value
        assert PIECE_VALUES[piece_type] == value

    def test_kings_only(self, evaluator):
        """Kings are worth nothing."""
        board = chess.Board("4k3/8/8/8/8/8/8/4K3 w - - 0 1")
        assert evaluator.evaluate(board) == 0

    def test_symmetry(self, evaluator):
        """Mirroring the board (swapping colors) negates the evaluation."""
        board = chess.Board("r3k2r/ppp2ppp/2n5/3b4/8/2N5/PPP2PPP/R3K2R w KQkq - 0 1")

        score = evaluator.evaluate(board)
        mirrored = evaluator.evaluate(board.mirror())

        assert score == -330
        assert mirrored == -score

    def test_side_to_move_does_not_matter(self, evaluator):
        """Evaluation is White-relative whoever is to move."""
        white = chess.Board("4k3/8/8/3q4/8/8/8/4K3 w - - 0 1")
        black = chess.Board("4k3/8/8/3q4/8/8/8/4K3 b - - 0 1")

        assert evaluator.evaluate(white) == evaluator.evaluate(black) == -900

    def test_is_an_evaluator(self, evaluator):
        assert isinstance(evaluator, Evaluator)
        assert repr(evaluator) == "MaterialEvaluator()"

    def test_abstract_evaluator_cannot_be_instantiated(self):
        with pytest.raises(TypeError):
            Evaluator()
