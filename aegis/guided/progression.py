"""
Guided Progression

Checks the learner's moves against a script:

    1. Apply the proposed move (illegal moves raise, nothing changes)
    2. Current step without a forced move → accept, advance the cursor
    3. Forced move matches (coordinate form) → accept, advance the cursor
    4. Otherwise → undo the move, keep the cursor, reject

The cursor never moves backwards except on an explicit restart, and never
passes len(script). step_index == len(script) means the script is complete;
moves made after that are accepted without advancing.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional, Tuple

import chess

from aegis.board.rules import MoveLike, apply_coordinate, load_position

logger = logging.getLogger(__name__)

COMPLETE_MESSAGE = "Lesson complete. Athena smiles upon you."


class ScriptKind(Enum):
    """What a script is used for."""
    LESSON = "lesson"
    PUZZLE = "puzzle"


class ProgressStatus(Enum):
    """Where the learner stands in a script."""
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"


@dataclass(frozen=True)
class Step:
    """
    One element of a script.

    Attributes:
        hint: Text shown to the learner
        forced_move: Required move in coordinate form (None = any legal move)
        reply: Opponent move in coordinate form, played for the learner's
            opponent once this step is accepted
    """
    hint: str
    forced_move: Optional[str] = None
    reply: Optional[str] = None

    def __post_init__(self):
        if self.forced_move is not None:
            object.__setattr__(self, "forced_move", self.forced_move.strip().lower())
        if self.reply is not None:
            object.__setattr__(self, "reply", self.reply.strip().lower())


@dataclass(frozen=True)
class Script:
    """
    Ordered sequence of steps for a lesson or puzzle.

    Attributes:
        script_id: Stable identifier
        title: Display title
        start_fen: Position the script starts from
        steps: The steps, in order
        kind: Lesson or puzzle
    """
    script_id: str
    title: str
    start_fen: str
    steps: Tuple[Step, ...] = ()
    kind: ScriptKind = ScriptKind.LESSON

    def __len__(self) -> int:
        return len(self.steps)

    def step_at(self, index: int) -> Optional[Step]:
        """Step at index, or None past the end."""
        if 0 <= index < len(self.steps):
            return self.steps[index]
        return None

    def start_board(self) -> chess.Board:
        """Fresh board at the script's start position."""
        return load_position(self.start_fen)


@dataclass(frozen=True)
class ProgressCursor:
    """
    Position of the learner inside a script.

    Attributes:
        script_id: Script the cursor belongs to
        step_index: Next step to play, in [0, len(script)]
    """
    script_id: str
    step_index: int = 0

    def advanced(self, script: Script) -> "ProgressCursor":
        """Cursor one step further, pinned at len(script)."""
        return replace(self, step_index=min(self.step_index + 1, len(script)))


@dataclass(frozen=True)
class AttemptResult:
    """
    Outcome of one move attempt.

    Attributes:
        accepted: False if the move broke the script and was taken back
        cursor: Cursor after the attempt
        status: COMPLETE once the last step has been played
        move: Coordinate form of the attempted move
    """
    accepted: bool
    cursor: ProgressCursor
    status: ProgressStatus
    move: str


def status_of(script: Script, cursor: ProgressCursor) -> ProgressStatus:
    """COMPLETE if every step has been played."""
    if cursor.step_index >= len(script):
        return ProgressStatus.COMPLETE
    return ProgressStatus.IN_PROGRESS


def on_move_attempt(
    script: Script,
    cursor: ProgressCursor,
    proposed_move: MoveLike,
    apply_fn: Callable[[MoveLike], chess.Move],
    undo_fn: Callable[[], object],
) -> AttemptResult:
    """
    Check one learner move against the script.

    Args:
        script: Script being played
        cursor: Current cursor (not modified)
        proposed_move: chess.Move or coordinate string
        apply_fn: Plays the move and returns the move actually played;
            raises IllegalMoveError for illegal moves
        undo_fn: Takes back the last played move

    Returns:
        AttemptResult with the new cursor

    Raises:
        IllegalMoveError: From apply_fn. Nothing has been played and the
            cursor is unchanged.
        ValueError: If the cursor belongs to another script or is out of range
    """
    if cursor.script_id != script.script_id:
        raise ValueError(
            f"Cursor for {cursor.script_id!r} used with script {script.script_id!r}"
        )
    if not 0 <= cursor.step_index <= len(script):
        raise ValueError(
            f"step_index {cursor.step_index} outside [0, {len(script)}]"
        )

    applied = apply_fn(proposed_move)
    played = applied.uci()
    step = script.step_at(cursor.step_index)

    if step is not None and step.forced_move is not None and played != step.forced_move:
        undo_fn()
        logger.info(
            f"{script.script_id} step {cursor.step_index}: "
            f"rejected {played}, expected {step.forced_move}"
        )
        return AttemptResult(False, cursor, status_of(script, cursor), played)

    new_cursor = cursor.advanced(script)
    status = status_of(script, new_cursor)
    logger.debug(f"{script.script_id}: accepted {played}, now at step {new_cursor.step_index}")
    return AttemptResult(True, new_cursor, status, played)


class ProgressionController:
    """
    Owns the progress cursor of one game instance.

    Attributes:
        script: Loaded script (None before load())
        cursor: Current cursor (None before load())
    """

    def __init__(self):
        self.script: Optional[Script] = None
        self.cursor: Optional[ProgressCursor] = None

    def load(self, script: Script) -> None:
        """Load a script; the cursor restarts at step 0."""
        self.script = script
        self.cursor = ProgressCursor(script.script_id, 0)
        logger.info(f"Loaded {script.kind.value} {script.script_id!r} ({len(script)} steps)")

    def restart(self) -> None:
        """Back to step 0 of the loaded script."""
        if self.script is not None:
            self.cursor = ProgressCursor(self.script.script_id, 0)

    def unload(self) -> None:
        self.script = None
        self.cursor = None

    @property
    def active(self) -> bool:
        return self.script is not None

    @property
    def status(self) -> ProgressStatus:
        if self.script is None:
            raise RuntimeError("No script loaded")
        return status_of(self.script, self.cursor)

    @property
    def current_step(self) -> Optional[Step]:
        if self.script is None:
            return None
        return self.script.step_at(self.cursor.step_index)

    def hint(self) -> Optional[str]:
        """Hint for the current step, or COMPLETE_MESSAGE when done."""
        if self.script is None:
            return None
        if self.status == ProgressStatus.COMPLETE:
            return COMPLETE_MESSAGE
        return self.current_step.hint

    def attempt(self, board: chess.Board, proposed_move: MoveLike) -> AttemptResult:
        """
        Play a learner move on board, enforcing the script.

        A rejected move is popped again, leaving board as it was.

        Raises:
            IllegalMoveError: If the move is not legal on board
            RuntimeError: If no script is loaded
        """
        if self.script is None:
            raise RuntimeError("No script loaded")

        result = on_move_attempt(
            self.script,
            self.cursor,
            proposed_move,
            apply_fn=lambda move: apply_coordinate(board, move),
            undo_fn=board.pop,
        )
        self.cursor = result.cursor
        return result
