import subprocess

import pytest

from drillrunner.exercise import Exercise, Mode
from drillrunner.verify import VerificationFailed, prompt_for_completion, test, verify

PENDING = "// fake_exercise\n\n// I AM NOT DONE\n\nfn main() {\n\n}\n"
FINISHED = "// fake_exercise\n\nfn main() {\n\n}\n"


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
    calls = []

    def fake(args, **kwargs):
        calls.append(list(args))
        code, out, err = pending.pop(0) if pending else (0, b"", b"")
        return subprocess.CompletedProcess(args, code, out, err)

    monkeypatch.setattr(subprocess, "run", fake)
    return calls


def test_done_exercise_needs_no_prompt(tmp_path, capsys):
    ex = _exercise(tmp_path, "done", FINISHED, Mode.COMPILE)
    assert prompt_for_completion(ex) is True
    assert capsys.readouterr().out == ""


def test_pending_prompt_shows_context(tmp_path, capsys):
    ex = _exercise(tmp_path, "pending", PENDING, Mode.COMPILE)
    assert prompt_for_completion(ex) is False
    out = capsys.readouterr().out
    assert f"Successfully ran {ex}!" in out
    assert "~*~ The code is compiling! ~*~" in out
    assert " 3 |  // I AM NOT DONE" in out
    assert " 1 |  // fake_exercise" in out


def test_prompt_shows_output_and_hints(tmp_path, capsys):
    ex = _exercise(tmp_path, "pending", PENDING, Mode.TEST)
    assert prompt_for_completion(ex, "program output", True) is False
    out = capsys.readouterr().out
    assert "The code is compiling, and the tests pass!" in out
    assert "Output:" in out
    assert "program output" in out
    assert "Hints:" in out
    assert "Hello!" in out


def test_verify_reports_compile_failure(tmp_path, monkeypatch, capsys):
    ex = _exercise(tmp_path, "broken", FINISHED, Mode.COMPILE)
    _fake_processes(monkeypatch, (1, b"", b"boom"))
    with pytest.raises(VerificationFailed) as info:
        verify([ex], (0, 1))
    assert info.value.exercise is ex
    out = capsys.readouterr().out
    assert "boom" in out
    assert f"Compiling of {ex} failed!" in out


def test_verify_all_done(tmp_path, monkeypatch, capsys):
    ex = _exercise(tmp_path, "done", FINISHED, Mode.COMPILE)
    calls = _fake_processes(monkeypatch, (0, b"", b""), (0, b"hi", b""))
    verify([ex], (0, 1))
    err = capsys.readouterr().err
    assert "1/1" in err
    assert "(100.0 %)" in err
    assert calls[0][0] == "rustc"


def test_verify_stops_at_first_pending(tmp_path, monkeypatch):
    first = _exercise(tmp_path, "first", PENDING, Mode.COMPILE)
    second = _exercise(tmp_path, "second", FINISHED, Mode.COMPILE)
    calls = _fake_processes(monkeypatch)
    with pytest.raises(VerificationFailed) as info:
        verify([first, second], (0, 2))
    assert info.value.exercise is first
    assert all(str(second.path) not in call for call in calls)


def test_verify_empty_list(capsys):
    verify([], (0, 0))
    assert "0/0" in capsys.readouterr().err


def test_test_mode_run_failure(tmp_path, monkeypatch, capsys):
    ex = _exercise(tmp_path, "failing", FINISHED, Mode.TEST)
    _fake_processes(monkeypatch, (0, b"", b""), (101, b"test failed", b""))
    with pytest.raises(VerificationFailed):
        test(ex, False)
    out = capsys.readouterr().out
    assert f"Testing of {ex} failed!" in out
    assert "test failed" in out


def test_test_pending_does_not_prompt(tmp_path, monkeypatch, capsys):
    ex = _exercise(tmp_path, "pending", PENDING, Mode.TEST)
    _fake_processes(monkeypatch, (0, b"", b""), (0, b"THIS TEST TOO SHALL PASS", b""))
    test(ex, True)
    out = capsys.readouterr().out
    assert "THIS TEST TOO SHALL PASS" in out
    assert "I AM NOT DONE" not in out