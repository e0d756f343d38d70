"""Verify exercises in order, prompting the learner when one is still pending."""

from __future__ import annotations

import enum
import sys
from collections.abc import Iterable

from .exercise import (
    CompileError,
    CompiledExercise,
    Exercise,
    Mode,
    RunError,
)
from .ui import blue, bold, no_emoji, success, warn


class RunMode(enum.Enum):
    """Whether a passing exercise should prompt about the pending marker."""

    INTERACTIVE = "interactive"
    NON_INTERACTIVE = "non-interactive"


class VerificationFailed(Exception):
    """An exercise did not compile, did not pass, or is still marked pending."""

    def __init__(self, exercise: Exercise):
        super().__init__(f"verification of {exercise} failed")
        self.exercise = exercise


class _ProgressBar:
    """A one-line progress display written to standard error."""

    WIDTH = 60

    def __init__(self, total: int, position: int):
        self.total = total
        self.position = position

    def draw(self, percentage: float) -> None:
        if self.total:
            filled = min(self.position * self.WIDTH // self.total, self.WIDTH)
        else:
            filled = 0
        head = ">" if filled < self.WIDTH else ""
        rest = "-" * max(self.WIDTH - filled - len(head), 0)
        bar = "#" * filled + head + rest
        print(
            f"Progress: [{bar}] {self.position}/{self.total} ({percentage:.1f} %)",
            file=sys.stderr,
        )

    def advance(self, percentage: float) -> None:
        self.position += 1
        self.draw(percentage)


def verify(
    exercises: Iterable[Exercise],
    progress: tuple[int, int],
    verbose: bool = False,
    success_hints: bool = False,
) -> None:
    """Check each exercise in turn; raise VerificationFailed at the first failure."""
    num_done, total = progress
    percentage = num_done / total * 100.0 if total else 0.0
    bar = _ProgressBar(total, num_done)
    bar.draw(percentage)

    for exercise in exercises:
        match exercise.mode:
            case Mode.TEST | Mode.BUILD_SCRIPT:
                passed = _compile_and_test(
                    exercise, RunMode.INTERACTIVE, verbose, success_hints
                )
            case Mode.COMPILE:
                passed = _compile_and_run_interactively(exercise, success_hints)
            case Mode.CLIPPY:
                passed = _compile_only(exercise, success_hints)
        if not passed:
            raise VerificationFailed(exercise)
        if total:
            percentage += 100.0 / total
        bar.advance(percentage)


def test(exercise: Exercise, verbose: bool = False) -> None:
    """Compile and run the exercise's test harness without prompting."""
    if not _compile_and_test(exercise, RunMode.NON_INTERACTIVE, verbose, False):
        raise VerificationFailed(exercise)


def _compile(exercise: Exercise) -> CompiledExercise | None:
    try:
        return exercise.compile()
    except CompileError as err:
        warn(f"Compiling of {exercise} failed! Please try again. Here's the output:")
        print(err.output.stderr)
        return None


def _compile_only(exercise: Exercise, success_hints: bool) -> bool:
    compiled = _compile(exercise)
    if compiled is None:
        return False
    with compiled:
        return prompt_for_completion(exercise, None, success_hints)


def _compile_and_run_interactively(exercise: Exercise, success_hints: bool) -> bool:
    compiled = _compile(exercise)
    if compiled is None:
        return False
    with compiled:
        try:
            output = compiled.run()
        except RunError as err:
            warn(f"Ran {exercise} with errors")
            print(err.output.stdout)
            print(err.output.stderr)
            return False
        return prompt_for_completion(exercise, output.stdout, success_hints)


def _compile_and_test(
    exercise: Exercise, run_mode: RunMode, verbose: bool, success_hints: bool
) -> bool:
    compiled = _compile(exercise)
    if compiled is None:
        return False
    with compiled:
        try:
            output = compiled.run()
        except RunError as err:
            warn(f"Testing of {exercise} failed! Please try again. Here's the output:")
            print(err.output.stdout)
            return False
        if verbose:
            print(output.stdout)
        if run_mode is RunMode.INTERACTIVE:
            return prompt_for_completion(exercise, None, success_hints)
        return True


def _separator() -> str:
    return bold("====================")


def prompt_for_completion(
    exercise: Exercise, prompt_output: str | None = None, success_hints: bool = False
) -> bool:
    """Return True if the exercise is done; otherwise show where the marker is."""
    context = exercise.pending_context()
    if context is None:
        return True

    match exercise.mode:
        case Mode.COMPILE:
            success(f"Successfully ran {exercise}!")
        case Mode.TEST:
            success(f"Successfully tested {exercise}!")
        case Mode.CLIPPY | Mode.BUILD_SCRIPT:
            success(f"Successfully compiled {exercise}!")

    emoji_free = no_emoji()
    clippy_msg = (
        "The code is compiling, and Clippy is happy!"
        if emoji_free
        else "The code is compiling, and 📎 Clippy 📎 is happy!"
    )
    success_msg = {
        Mode.COMPILE: "The code is compiling!",
        Mode.TEST: "The code is compiling, and the tests pass!",
        Mode.CLIPPY: clippy_msg,
        Mode.BUILD_SCRIPT: "Build script works!",
    }[exercise.mode]

    print()
    if emoji_free:
        print(f"~*~ {success_msg} ~*~")
    else:
        print(f"🎉 🎉  {success_msg} 🎉 🎉")
    print()

    if prompt_output is not None:
        print("Output:")
        print(_separator())
        print(prompt_output)
        print(_separator())
        print()
    if success_hints:
        print("Hints:")
        print(_separator())
        print(exercise.hint)
        print(_separator())
        print()

    print("You can keep working on this exercise,")
    print(
        "or jump into the next one by removing the "
        f"{bold('`I AM NOT DONE`')} comment:"
    )
    print()
    for context_line in context:
        line = bold(context_line.line) if context_line.important else context_line.line
        number = f"{context_line.number:>2}"
        print(f"{blue(bold(number))} {blue('|')}  {line}")

    return False