"""Run a single exercise, or reset it through git."""

from __future__ import annotations

import subprocess

from .exercise import CompileError, Exercise, Mode, RunError
from .ui import success, warn
from .verify import VerificationFailed, test


class ExerciseFailed(Exception):
    """Running or resetting an exercise failed."""

    def __init__(self, exercise: Exercise):
        super().__init__(f"exercise {exercise} failed")
        self.exercise = exercise


def run(exercise: Exercise, verbose: bool = False) -> None:
    """Build and run the exercise, or its tests; raise ExerciseFailed on failure."""
    if exercise.mode in (Mode.TEST, Mode.BUILD_SCRIPT):
        try:
            test(exercise, verbose)
        except VerificationFailed as err:
            raise ExerciseFailed(exercise) from err
    else:
        _compile_and_run(exercise)


def reset(exercise: Exercise) -> subprocess.Popen:
    """Start `git stash -- <path>` for the exercise and return the process."""
    try:
        return subprocess.Popen(["git", "stash", "--", str(exercise.path)])
    except OSError as err:
        raise ExerciseFailed(exercise) from err


def _compile_and_run(exercise: Exercise) -> None:
    try:
        compiled = exercise.compile()
    except CompileError as err:
        warn(f"Compilation of {exercise} failed!, Compiler error message:\n")
        print(err.output.stderr)
        raise ExerciseFailed(exercise) from err

    with compiled:
        try:
            output = compiled.run()
        except RunError as err:
            print(err.output.stdout)
            print(err.output.stderr)
            warn(f"Ran {exercise} with errors")
            raise ExerciseFailed(exercise) from err

    print(output.stdout)
    success(f"Successfully ran {exercise}")