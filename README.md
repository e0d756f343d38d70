# drillrunner

A terminal companion for working through a collection of small exercises.
It reads the exercise list from an `info.toml` file in the current directory,
compiles and runs each exercise with `rustc` (or `cargo` for clippy and
build-script exercises), and tells you which ones are done.

An exercise counts as pending while its file still holds an
`// I AM NOT DONE` marker. Remove the marker once you are happy with your
solution and drillrunner moves on to the next one.

## Installation

```
pip install drillrunner
```

`rustc` must be on your `PATH`; every command except `--version` checks for it
and stops with exit code 1 if `rustc --version` cannot be run. Clippy and
build-script exercises also need `cargo`, and `reset` needs `git`.

## The exercise list

`info.toml` holds an `exercises` array. Each entry has a `name`, a `path` to
the exercise file, a `mode` (`compile`, `test`, `clippy` or `buildscript`) and
a `hint`:

```toml
[[exercises]]
name = "intro1"
path = "exercises/intro/intro1.rs"
mode = "compile"
hint = "Remove the marker when you are ready."
```

## Usage

Run every command from the directory that holds `info.toml`; elsewhere the
program prints a message and exits with code 1.

```
drillrunner                 # welcome text and a short introduction
drillrunner --version       # print the version
drillrunner watch           # verify exercises, re-checking whenever a file changes
drillrunner verify          # verify all exercises in the recommended order
drillrunner run NAME        # compile and run a single exercise
drillrunner run next        # run the first exercise that is not done yet
drillrunner hint NAME       # print the hint for an exercise
drillrunner reset NAME      # stash your changes to an exercise with git
drillrunner list            # list exercises with their status
drillrunner lsp             # write rust-project.json for rust-analyzer
drillrunner cicvverify      # grade all exercises and write a JSON report
```

Pass `--nocapture` before the subcommand to see the output of test exercises,
for example `drillrunner --nocapture run NAME`.

`verify` stops at the first exercise that fails to compile, fails its tests or
still carries the marker, and exits with code 1. For a pending exercise it
shows the lines around the marker. `run` does not look at the marker; it exits
with code 1 only when the exercise fails to build or run. An unknown exercise
name, or `next` when everything is done, also gives exit code 1.

### Listing exercises

`drillrunner list` accepts:

- `-p`, `--paths`: only print exercise paths
- `-n`, `--names`: only print exercise names
- `-f`, `--filter PATTERNS`: comma-separated substrings to match names or paths
- `-u`, `--unsolved`: only show pending exercises
- `-s`, `--solved`: only show finished exercises

It finishes with a progress line such as
`Progress: You completed 3 / 10 exercises (30.0 %).`

### Watch mode

`drillrunner watch` verifies all exercises, then re-verifies whenever a `.rs`
file under `exercises/` is created or modified, starting with the edited
exercise. Pass `--success-hints` to show an exercise's hint once it compiles.
While it is running, type:

- `hint`: print the current exercise's hint
- `clear`: clear the screen
- `quit`: leave watch mode
- `!<cmd>`: run a command, such as `!rustc --explain E0381`
- `help`: show this list

### rust-analyzer support

`drillrunner lsp` adds a crate for every `.rs` file below `exercises/` and
writes `rust-project.json`. The standard library sources are taken from the
`RUST_SRC_PATH` environment variable when it is set, otherwise from the
sysroot reported by `rustc --print sysroot`.

### Grading

`drillrunner cicvverify` runs every exercise concurrently, prints a running
tally and writes the results, with totals and elapsed seconds, to
`.github/result/check_result.json`.

### Output

Set the `NO_EMOJI` environment variable to replace emoji with plain symbols.
Colours are used when standard output is a terminal; `CLICOLOR=0` turns them
off and `CLICOLOR_FORCE=1` turns them on.

## Using it from Python

The modules can also be used directly:

- `drillrunner.exercise`: `load_exercises(path)`, `Exercise` with `compile()`,
  `pending_context()` and `looks_done()`, and `CompiledExercise.run()`
- `drillrunner.verify`: `verify(exercises, progress, verbose, success_hints)`,
  raising `VerificationFailed`
- `drillrunner.run`: `run(exercise, verbose)` raising `ExerciseFailed`, and
  `reset(exercise)`
- `drillrunner.project`: `RustAnalyzerProject`
- `drillrunner.cli`: `main(argv)`, `list_exercises(...)`, `find_exercise(...)`
  and `cicv_verify(...)`