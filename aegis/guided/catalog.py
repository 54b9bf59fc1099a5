"""
Built-in lessons and sample puzzles.

Lessons force every learner move. The opponent (Black) replies with the
scripted move of each step so White is to move again for the next one.
Puzzles are free play from a start position.
"""

from typing import Dict, List, Union

from aegis.guided.progression import Script, ScriptKind, Step

# fmt: off
LESSONS: List[Script] = [
    Script(
        script_id="hoplite",
        title="Hoplite's March (Pawns)",
        start_fen="8/8/8/8/4P3/8/8/4k2K w - - 0 1",
        steps=(
            Step("Advance the pawn from e4 to e5.", forced_move="e4e5", reply="e1d2"),
            Step("Advance e5 to e6.", forced_move="e5e6"),
        ),
    ),
    Script(
        script_id="pegasus",
        title="Flight of Pegasus (Knight Basics)",
        start_fen="8/8/8/3N4/8/8/8/4k2K w - - 0 1",
        steps=(
            Step("Knights move in an L. d5→f6", forced_move="d5f6", reply="e1d2"),
            Step("Jump to the back rank: f6→g8", forced_move="f6g8"),
        ),
    ),
    Script(
        script_id="athena",
        title="Blessings of Athena (Queen Power)",
        start_fen="8/8/8/8/3Q4/8/8/4k2K w - - 0 1",
        steps=(
            Step("Centralise the queen: d4→e5", forced_move="d4e5", reply="e1d2"),
            Step("Deliver check on e1: e5→e1", forced_move="e5e1"),
        ),
    ),
    Script(
        script_id="apollo",
        title="Oracles of Apollo (Tactics: Pins & Skewers)",
        start_fen="r3k2r/ppp2ppp/2n5/3b4/3B4/2N5/PPP2PPP/R3K2R w KQkq - 0 1",
        steps=(
            Step("Pin the knight: Bd4→e3 (imagine)", forced_move="d4e3"),
        ),
    ),
]

SAMPLE_PUZZLES: Dict[str, str] = {
    "Mate in 2 - Trial of Heracles": "r1bqkbnr/pppp1ppp/2n5/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 2 3",
    "Tactics - Forks": "8/8/3k4/8/2N5/8/5K2/8 w - - 0 1",
}
# fmt: on


def get_lesson(key: Union[int, str]) -> Script:
    """
    Look up a built-in lesson by index or script_id.

    Raises:
        KeyError: If there is no such lesson
    """
    if isinstance(key, int):
        if 0 <= key < len(LESSONS):
            return LESSONS[key]
        raise KeyError(f"No lesson at index {key}")

    for lesson in LESSONS:
        if lesson.script_id == key:
            return lesson
    raise KeyError(f"No lesson named {key!r}")


def puzzle_script(fen: str, title: str = "Puzzle") -> Script:
    """Free-play script for a puzzle position."""
    return Script(
        script_id=f"puzzle:{fen}",
        title=title,
        start_fen=fen,
        kind=ScriptKind.PUZZLE,
    )
