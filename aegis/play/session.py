"""
Game Session

State of one game instance: board, mode, the human's side, the selected
square, the lesson cursor and the move arbiter. Nothing here is global, so
several sessions (e.g. parallel tests) never interfere.

Modes:
    - BOT: human plays `orientation`, the arbiter plays the other side
    - LEARN: a lesson script checks every human move
    - PUZZLE: free play from a puzzle position
    - FREE: moves for either side, no bot and no script
"""

import logging
from enum import Enum
from typing import Dict, Optional, Union

import chess

from aegis.board.pgn import export_pgn, import_pgn
from aegis.board.rules import (
    MoveLike,
    apply_coordinate,
    is_terminal,
    load_position,
    parse_coordinate,
    status_text,
)
from aegis.errors import IllegalMoveError
from aegis.guided.catalog import get_lesson, puzzle_script
from aegis.guided.progression import AttemptResult, ProgressionController, Script
from aegis.play.arbiter import MoveArbiter

logger = logging.getLogger(__name__)


class GameMode(Enum):
    """What the session is being used for."""
    BOT = "bot"
    LEARN = "learn"
    PUZZLE = "puzzle"
    FREE = "free"


class GameSession:
    """
    One game instance.

    Attributes:
        board: Current position with its move stack
        mode: GameMode
        orientation: Color the human plays
        effort_level: Bot strength passed to the arbiter
        selected: Square picked by the first click of a click-click move
        progression: Lesson cursor owner
        arbiter: Move decision for the bot side
    """

    def __init__(
        self,
        arbiter: Optional[MoveArbiter] = None,
        orientation: chess.Color = chess.WHITE,
        effort_level: Optional[int] = None,
    ):
        self.arbiter = arbiter if arbiter else MoveArbiter()
        self.board = chess.Board()
        self.mode = GameMode.BOT
        self.orientation = orientation
        self.effort_level = self.arbiter.config.clamp_effort(effort_level)
        self.selected: Optional[chess.Square] = None
        self.progression = ProgressionController()

    @property
    def fen(self) -> str:
        return self.board.fen()

    @property
    def status(self) -> str:
        return status_text(self.board)

    @property
    def bot_color(self) -> chess.Color:
        return not self.orientation

    def set_effort(self, effort_level: int) -> None:
        self.effort_level = self.arbiter.config.clamp_effort(effort_level)

    def reset(self) -> None:
        """Back to the standard start position; lesson restarts at step 0."""
        self.board.reset()
        self.selected = None
        self.progression.restart()

    def play_bot(self) -> None:
        """Switch to a fresh game against the bot."""
        self.mode = GameMode.BOT
        self.progression.unload()
        self.reset()

    def free_explore(self) -> None:
        """Switch to a fresh board with the bot idle and no script loaded."""
        self.mode = GameMode.FREE
        self.progression.unload()
        self.reset()

    def flip(self) -> None:
        """Swap the human's side; the bot takes the other one."""
        self.orientation = not self.orientation
        self.selected = None
        logger.debug(f"Orientation is now {chess.COLOR_NAMES[self.orientation]}")

    def load_position(self, fen: str) -> None:
        """
        Replace the board with a FEN position.

        Raises:
            InvalidPositionError: If the FEN cannot be loaded. The current
                board is kept.
        """
        board = load_position(fen)
        self.board = board
        self.selected = None
        logger.info(f"Loaded position {fen}")

    def load_lesson(self, key: Union[int, str]) -> Script:
        """Start a built-in lesson (by index or id) in LEARN mode."""
        lesson = get_lesson(key)
        self.start_script(lesson)
        self.mode = GameMode.LEARN
        return lesson

    def start_script(self, script: Script) -> None:
        board = script.start_board()
        self.board = board
        self.selected = None
        self.progression.load(script)

    def start_puzzle(self, fen: str, title: str = "Puzzle") -> Script:
        """Start free play from a puzzle FEN in PUZZLE mode."""
        script = puzzle_script(fen, title)
        self.start_script(script)
        self.mode = GameMode.PUZZLE
        return script

    def hint(self) -> Optional[str]:
        """Current lesson hint, the completion message, or None outside LEARN."""
        if self.mode != GameMode.LEARN:
            return None
        return self.progression.hint()

    def attempt_move(self, move: MoveLike) -> Optional[AttemptResult]:
        """
        Play a human move.

        In LEARN mode the move goes through the progression controller and
        may be rejected (the board is then unchanged). An accepted step with
        a scripted reply plays that reply for the opponent.

        Returns:
            AttemptResult in LEARN mode, None otherwise

        Raises:
            IllegalMoveError: If the move, or the scripted reply to it, is not
                legal (board and cursor unchanged)
        """
        self.selected = None

        if self.mode != GameMode.LEARN:
            apply_coordinate(self.board, move)
            return None

        cursor_before = self.progression.cursor
        step = self.progression.current_step
        result = self.progression.attempt(self.board, move)

        if result.accepted and step is not None and step.reply:
            try:
                apply_coordinate(self.board, step.reply)
            except IllegalMoveError as e:
                logger.error(f"Scripted reply {step.reply} is illegal: {e}")
                # Take back the learner's move so the step can be retried
                self.board.pop()
                self.progression.cursor = cursor_before
                raise

        return result

    def click_square(self, square_name: str) -> Optional[Union[chess.Move, AttemptResult]]:
        """
        Click-click move input.

        First click on one of the human's pieces (in FREE mode, any piece of
        the side to move) selects it. The second click plays selected →
        clicked if that is legal (pawns promote to a queen); otherwise it
        re-selects (own piece) or clears the selection.

        Returns:
            AttemptResult in LEARN mode, the played move otherwise, or None
            if no move was made
        """
        square = chess.parse_square(square_name)
        piece = self.board.piece_at(square)
        # In FREE mode the human moves for whichever side is to move
        side = self.board.turn if self.mode == GameMode.FREE else self.orientation
        own_piece = piece is not None and piece.color == side

        if self.selected is None:
            if own_piece:
                self.selected = square
            return None

        from_square = self.selected
        candidates = [
            move for move in self.board.legal_moves
            if move.from_square == from_square and move.to_square == square
        ]
        if not candidates:
            self.selected = square if own_piece else None
            return None

        move = candidates[0]
        if len(candidates) > 1:
            move = chess.Move(from_square, square, promotion=chess.QUEEN)

        result = self.attempt_move(move)
        return result if result is not None else move

    async def bot_turn_if_needed(self) -> Optional[str]:
        """
        Let the arbiter move if it is the bot's turn in BOT mode.

        Returns:
            The move played in coordinate form, or None if the bot did not move
        """
        if self.mode != GameMode.BOT:
            return None
        if self.board.turn != self.bot_color or is_terminal(self.board):
            return None

        move = await self.arbiter.decide(self.board, self.effort_level)
        if move is None:
            return None

        self.board.push(parse_coordinate(move))
        logger.info(f"Bot played {move} ({self.arbiter.last_source})")
        return move

    def import_pgn(self, text: str) -> None:
        """
        Replace the game with a PGN record.

        Raises:
            InvalidPositionError: If the PGN cannot be read. The current
                board is kept.
        """
        self.board = import_pgn(text)
        self.selected = None

    def export_pgn(self, headers: Optional[Dict[str, str]] = None) -> str:
        return export_pgn(self.board, headers)
