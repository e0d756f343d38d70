import subprocess

import pytest

from drillrunner.exercise import Exercise, Mode
from drillrunner.run import ExerciseFailed, reset, run

PENDING = "// I AM NOT DONE\n\n#[test]\nfn it_works() {}\n"
FINISHED = "fn main() {\n}\n"


@pytest.fixture(autouse=True)
def _workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("NO_EMOJI", "1")
    monkeypatch.delenv("CLICOLOR_FORCE", raising=False)


def _exercise(tmp_path, name, source, mode):
    path = tmp_path / f"{name}.rs"
    path.write_text(source)
    return Exercise(name=name, path=path, mode=mode, hint="Hello!")


def _fake_processes(monkeypatch, *results):
    pending = list(results)

    def fake(args, **kwargs):
        code, out, err = pending.pop(0) if pending else (0, b"", b"")
        return subprocess.CompletedProcess(args, code, out, err)

    monkeypatch.setattr(subprocess, "run", fake)


def test_compile_success(tmp_path, monkeypatch, capsys):
    ex = _exercise(tmp_path, "compSuccess", FINISHED, Mode.COMPILE)
    _fake_processes(monkeypatch, (0, b"", b""), (0, b"program says hi", b""))
    run(ex)
    out = capsys.readouterr().out
    assert "program says hi" in out
    assert f"Successfully ran {ex}" in out


def test_compile_failure(tmp_path, monkeypatch, capsys):
    ex = _exercise(tmp_path, "compFailure", FINISHED, Mode.COMPILE)
    _fake_processes(monkeypatch, (1, b"", b"expected pattern"))
    with pytest.raises(ExerciseFailed) as info:
        run(ex)
    assert info.value.exercise is ex
    out = capsys.readouterr().out
    assert f"Compilation of {ex} failed!" in out
    assert "expected pattern" in out


def test_run_failure(tmp_path, monkeypatch, capsys):
    ex = _exercise(tmp_path, "panics", FINISHED, Mode.COMPILE)
    _fake_processes(monkeypatch, (0, b"", b""), (101, b"partial", b"panicked"))
    with pytest.raises(ExerciseFailed):
        run(ex)
    out = capsys.readouterr().out
    assert f"Ran {ex} with errors" in out
    assert "panicked" in out


def test_test_failure(tmp_path, monkeypatch):
    ex = _exercise(tmp_path, "testFailure", FINISHED, Mode.TEST)
    _fake_processes(monkeypatch, (1, b"", b"error"))
    with pytest.raises(ExerciseFailed):
        run(ex)


def test_pending_test_does_not_prompt(tmp_path, monkeypatch, capsys):
    ex = _exercise(tmp_path, "pending_test_exercise", PENDING, Mode.TEST)
    _fake_processes(monkeypatch, (0, b"", b""), (0, b"ok", b""))
    run(ex)
    assert "I AM NOT DONE" not in capsys.readouterr().out


def test_verbose_shows_test_output(tmp_path, monkeypatch, capsys):
    ex = _exercise(tmp_path, "testSuccess", FINISHED, Mode.TEST)
    _fake_processes(monkeypatch, (0, b"", b""), (0, b"THIS TEST TOO SHALL PASS", b""))
    run(ex, True)
    assert "THIS TEST TOO SHALL PASS" in capsys.readouterr().out


def test_quiet_hides_test_output(tmp_path, monkeypatch, capsys):
    ex = _exercise(tmp_path, "testSuccess", FINISHED, Mode.TEST)
    _fake_processes(monkeypatch, (0, b"", b""), (0, b"THIS TEST TOO SHALL PASS", b""))
    run(ex, False)
    assert "THIS TEST TOO SHALL PASS" not in capsys.readouterr().out


def test_reset_starts_git_stash(tmp_path, monkeypatch):
    ex = _exercise(tmp_path, "intro1", FINISHED, Mode.COMPILE)
    started = []

    def fake_popen(args, **kwargs):
        started.append(list(args))
        return "handle"

    monkeypatch.setattr(subprocess, "Popen", fake_popen)
    assert reset(ex) == "handle"
    assert started == [["git", "stash", "--", str(ex.path)]]


def test_reset_failure(tmp_path, monkeypatch):
    ex = _exercise(tmp_path, "intro1", FINISHED, Mode.COMPILE)

    def fake_popen(args, **kwargs):
        raise FileNotFoundError("git")

    monkeypatch.setattr(subprocess, "Popen", fake_popen)
    with pytest.raises(ExerciseFailed):
        reset(ex)