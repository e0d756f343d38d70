"""Watch mode: re-verify exercises whenever a source file changes."""

from __future__ import annotations

import enum
import os
import queue
import subprocess
import sys
import threading
from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .exercise import Exercise
from .verify import VerificationFailed, verify

WATCH_ROOT = "./exercises"
DEBOUNCE_SECONDS = 1.0
POLL_SECONDS = 1.0


class WatchStatus(enum.Enum):
    """How watch mode ended."""

    FINISHED = "finished"
    UNFINISHED = "unfinished"


class WatchShell:
    """The small command prompt available while watching."""

    def __init__(self, hint: str | None = None, input_stream: TextIO | None = None):
        self._lock = threading.Lock()
        self._hint = hint
        self._input = input_stream if input_stream is not None else sys.stdin
        self.should_quit = threading.Event()

    @property
    def hint(self) -> str | None:
        with self._lock:
            return self._hint

    @hint.setter
    def hint(self, value: str | None) -> None:
        with self._lock:
            self._hint = value

    def handle(self, line: str) -> None:
        """Carry out one command typed by the learner."""
        command = line.strip()
        if command == "hint":
            hint = self.hint
            if hint is not None:
                print(hint)
        elif command == "clear":
            print("\x1b[2J\x1b[1;1H")
        elif command == "quit":
            self.should_quit.set()
            print("Bye!")
        elif command == "help":
            print("Commands available to you in watch mode:")
            print("  hint   - prints the current exercise's hint")
            print("  clear  - clears the screen")
            print("  quit   - quits watch mode")
            print("  !<cmd> - executes a command, like `!rustc --explain E0381`")
            print("  help   - displays this help message")
            print()
            print("Watch mode automatically re-evaluates the current exercise")
            print("when you edit a file's contents.")
        elif command.startswith("!"):
            cmd = command[1:]
            parts = cmd.split()
            if not parts:
                print("no command provided")
            else:
                try:
                    subprocess.run(parts, check=False)
                except OSError as err:
                    print(f"failed to execute command `{cmd}`: {err}")
        else:
            print(f"unknown command: {command}")

    def start(self) -> threading.Thread:
        """Read commands on a background thread until input ends."""
        print(
            "Welcome to watch mode! You can type 'help' to get an overview "
            "of the commands you can use here."
        )
        thread = threading.Thread(target=self._read_commands, daemon=True)
        thread.start()
        return thread

    def _read_commands(self) -> None:
        while True:
            try:
                line = self._input.readline()
            except (OSError, ValueError) as err:
                print(f"error reading command: {err}")
                return
            if not line:
                return
            self.handle(line)


class _ChangeHandler(FileSystemEventHandler):
    def __init__(self, changes: queue.Queue):
        super().__init__()
        self._changes = changes

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.is_directory or event.event_type not in ("created", "modified"):
            return
        self._changes.put(os.fsdecode(event.src_path))


def _clear_screen() -> None:
    print("\x1bc")


def _ends_with(full: Path, tail: Path) -> bool:
    parts = tail.parts
    return bool(parts) and full.parts[-len(parts):] == parts


def _debounced(first: str, changes: queue.Queue) -> list[str]:
    seen = [first]
    while True:
        try:
            path = changes.get(timeout=DEBOUNCE_SECONDS)
        except queue.Empty:
            return seen
        if path not in seen:
            seen.append(path)


def watch(
    exercises: Iterable[Exercise], verbose: bool = False, success_hints: bool = False
) -> WatchStatus:
    """Verify the exercises, then re-verify on every change until done or quit."""
    exercises = list(exercises)
    changes: queue.Queue = queue.Queue()
    observer = Observer()
    observer.schedule(_ChangeHandler(changes), WATCH_ROOT, recursive=True)
    observer.start()
    try:
        _clear_screen()
        try:
            verify(exercises, (0, len(exercises)), verbose, success_hints)
            return WatchStatus.FINISHED
        except VerificationFailed as err:
            shell = WatchShell(err.exercise.hint)
        shell.start()

        while True:
            try:
                first = changes.get(timeout=POLL_SECONDS)
            except queue.Empty:
                first = None
            if first is not None:
                for raw in _debounced(first, changes):
                    path = Path(raw)
                    if path.suffix != ".rs" or not path.exists():
                        continue
                    filepath = path.resolve()
                    edited = next(
                        (e for e in exercises if _ends_with(filepath, e.path)), None
                    )
                    pending = ([edited] if edited is not None else []) + [
                        e
                        for e in exercises
                        if not e.looks_done() and not _ends_with(filepath, e.path)
                    ]
                    num_done = sum(1 for e in exercises if e.looks_done())
                    _clear_screen()
                    try:
                        verify(
                            pending, (num_done, len(exercises)), verbose, success_hints
                        )
                        return WatchStatus.FINISHED
                    except VerificationFailed as err:
                        shell.hint = err.exercise.hint
            if shell.should_quit.is_set():
                return WatchStatus.UNFINISHED
    finally:
        observer.stop()
        observer.join()