"""
Unit Tests for Guided Progression

Tests for scripted lessons and puzzles:
    - Forced moves accepted or taken back
    - Cursor bounds and completion
    - Controller hints and restarts
    - Built-in catalog is playable
"""

import chess
import pytest

from aegis.board import apply_coordinate
from aegis.errors import IllegalMoveError
from aegis.guided import (
    COMPLETE_MESSAGE,
    LESSONS,
    SAMPLE_PUZZLES,
    ProgressCursor,
    ProgressStatus,
    ProgressionController,
    Script,
    ScriptKind,
    Step,
    get_lesson,
    on_move_attempt,
    puzzle_script,
)

PAWN_FEN = "8/8/8/8/4P3/8/8/4k2K w - - 0 1"


@pytest.fixture
def script():
    """One forced pawn push."""
    return Script("pawn", "Pawn push", PAWN_FEN, (Step("Push the pawn", forced_move="e4e5"),))


class TestOnMoveAttempt:
    """Tests for the single-attempt function."""

    def attempt(self, script, cursor, board, move):
        return on_move_attempt(
            script,
            cursor,
            move,
            apply_fn=lambda m: apply_coordinate(board, m),
            undo_fn=board.pop,
        )

    def test_forced_move_accepted(self, script):
        board = chess.Board(PAWN_FEN)
        cursor = ProgressCursor("pawn")

        result = self.attempt(script, cursor, board, "e4e5")

        assert result.accepted
        assert result.cursor.step_index == 1
        assert result.status == ProgressStatus.COMPLETE
        assert result.move == "e4e5"
        assert board.piece_at(chess.E5) == chess.Piece(chess.PAWN, chess.WHITE)

    def test_other_legal_move_rejected(self, script):
        """The move is taken back and the board is exactly as before."""
        board = chess.Board(PAWN_FEN)
        fen_before = board.fen()
        cursor = ProgressCursor("pawn")

        result = self.attempt(script, cursor, board, "h1g1")

        assert not result.accepted
        assert result.cursor == cursor
        assert result.cursor.step_index == 0
        assert result.status == ProgressStatus.IN_PROGRESS
        assert result.move == "h1g1"
        assert board.fen() == fen_before
        assert board.move_stack == []

    def test_illegal_move_raises_without_changes(self, script):
        board = chess.Board(PAWN_FEN)
        cursor = ProgressCursor("pawn")

        with pytest.raises(IllegalMoveError):
            self.attempt(script, cursor, board, "e4e6")

        assert board.fen() == PAWN_FEN
        assert cursor.step_index == 0

    def test_free_step_accepts_any_move(self):
        script = Script("free", "Free", PAWN_FEN, (Step("Any move"), Step("Push", forced_move="e4e5")))
        board = chess.Board(PAWN_FEN)

        result = self.attempt(script, ProgressCursor("free"), board, "h1g1")

        assert result.accepted
        assert result.cursor.step_index == 1
        assert result.status == ProgressStatus.IN_PROGRESS

    def test_moves_after_completion_pin_cursor(self, script):
        board = chess.Board("8/8/8/4P3/8/8/3k4/7K w - - 0 1")
        cursor = ProgressCursor("pawn", step_index=1)

        result = self.attempt(script, cursor, board, "e5e6")

        assert result.accepted
        assert result.cursor.step_index == len(script)
        assert result.status == ProgressStatus.COMPLETE

    def test_uses_injected_apply_and_undo(self, script):
        calls = []

        def apply_fn(move):
            calls.append(("apply", move))
            return chess.Move.from_uci(move)

        def undo_fn():
            calls.append(("undo",))

        result = on_move_attempt(script, ProgressCursor("pawn"), "e4e6", apply_fn, undo_fn)

        assert not result.accepted
        assert calls == [("apply", "e4e6"), ("undo",)]

    def test_promotion_compared_in_coordinate_form(self):
        script = Script("promo", "Promote", "8/4P3/8/8/8/8/8/k6K w - - 0 1",
                        (Step("Promote to a knight", forced_move="E7E8N"),))
        board = chess.Board(script.start_fen)

        queen = self.attempt(script, ProgressCursor("promo"), board, "e7e8q")
        knight = self.attempt(script, ProgressCursor("promo"), board, "e7e8n")

        assert not queen.accepted
        assert knight.accepted

    def test_cursor_for_other_script(self, script):
        board = chess.Board(PAWN_FEN)
        with pytest.raises(ValueError):
            self.attempt(script, ProgressCursor("other"), board, "e4e5")

    def test_cursor_out_of_range(self, script):
        board = chess.Board(PAWN_FEN)
        with pytest.raises(ValueError):
            self.attempt(script, ProgressCursor("pawn", step_index=5), board, "e4e5")


class TestProgressionController:
    """Tests for the stateful controller."""

    @pytest.fixture
    def controller(self, script):
        controller = ProgressionController()
        controller.load(script)
        return controller

    def test_load_starts_at_zero(self, controller, script):
        assert controller.cursor == ProgressCursor("pawn", 0)
        assert controller.status == ProgressStatus.IN_PROGRESS
        assert controller.hint() == "Push the pawn"
        assert controller.current_step is script.steps[0]

    def test_complete_shows_message_not_hint(self, controller):
        board = chess.Board(PAWN_FEN)

        result = controller.attempt(board, "e4e5")

        assert result.accepted
        assert controller.status == ProgressStatus.COMPLETE
        assert controller.hint() == COMPLETE_MESSAGE
        assert controller.current_step is None

    def test_rejection_keeps_cursor(self, controller):
        board = chess.Board(PAWN_FEN)

        result = controller.attempt(board, "h1h2")

        assert not result.accepted
        assert controller.cursor.step_index == 0
        assert board.fen() == PAWN_FEN

    def test_restart_and_reload(self, controller, script):
        controller.attempt(chess.Board(PAWN_FEN), "e4e5")

        controller.restart()
        assert controller.cursor.step_index == 0

        controller.attempt(chess.Board(PAWN_FEN), "e4e5")
        controller.load(script)
        assert controller.cursor.step_index == 0

    def test_no_script_loaded(self):
        controller = ProgressionController()

        assert not controller.active
        assert controller.hint() is None
        with pytest.raises(RuntimeError):
            controller.attempt(chess.Board(), "e2e4")

    def test_unload(self, controller):
        controller.unload()
        assert not controller.active


class TestCatalog:
    """Tests for the built-in lessons and puzzles."""

    @pytest.mark.parametrize("lesson", LESSONS, ids=lambda lesson: lesson.script_id)
    def test_lesson_is_playable(self, lesson):
        """Every forced move and reply is legal in sequence."""
        board = lesson.start_board()
        controller = ProgressionController()
        controller.load(lesson)

        for step in lesson.steps:
            result = controller.attempt(board, step.forced_move)
            assert result.accepted
            if step.reply:
                apply_coordinate(board, step.reply)

        assert controller.status == ProgressStatus.COMPLETE

    def test_get_lesson(self):
        assert get_lesson(0) is LESSONS[0]
        assert get_lesson("pegasus").title.startswith("Flight of Pegasus")

        with pytest.raises(KeyError):
            get_lesson(len(LESSONS))
        with pytest.raises(KeyError):
            get_lesson("medusa")

    @pytest.mark.parametrize("name", list(SAMPLE_PUZZLES))
    def test_puzzle_scripts(self, name):
        script = puzzle_script(SAMPLE_PUZZLES[name], name)

        assert script.kind == ScriptKind.PUZZLE
        assert len(script) == 0
        assert script.start_board().fen() == SAMPLE_PUZZLES[name]
