"""
Guided Module

Lessons and puzzles. A Script is an ordered list of Steps; a step may force
an exact move. The progression controller checks each move the learner
makes against the current step and takes back moves that break the script.

Key Components:
    - Step, Script, ProgressCursor: script data
    - on_move_attempt: one checked move
    - ProgressionController: cursor owner for a game instance
    - LESSONS, SAMPLE_PUZZLES: built-in catalog
"""

from aegis.guided.progression import (
    Step,
    Script,
    ScriptKind,
    ProgressCursor,
    ProgressStatus,
    AttemptResult,
    on_move_attempt,
    ProgressionController,
    COMPLETE_MESSAGE,
)
from aegis.guided.catalog import LESSONS, SAMPLE_PUZZLES, get_lesson, puzzle_script

__all__ = [
    'Step',
    'Script',
    'ScriptKind',
    'ProgressCursor',
    'ProgressStatus',
    'AttemptResult',
    'on_move_attempt',
    'ProgressionController',
    'COMPLETE_MESSAGE',
    'LESSONS',
    'SAMPLE_PUZZLES',
    'get_lesson',
    'puzzle_script',
]
