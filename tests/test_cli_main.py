# tests/test_cli_main.py

from __future__ import annotations

import io
from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_tracker.cli import main as cli_main
from todo_tracker.cli.main import run, stdin_confirm

from .fakes import FakeConfirm


def _run(settings: SimpleNamespace, *argv: str, confirm: FakeConfirm | None = None):
    out, err = io.StringIO(), io.StringIO()
    code = run(
        list(argv),
        settings=settings,
        confirm=confirm or FakeConfirm(),
        out=out,
        err=err,
        configure_logging=False,
    )
    return code, out.getvalue(), err.getvalue()


def test_add_list_done_flow(settings: SimpleNamespace) -> None:
    code, out, _ = _run(settings, "add", "Buy milk", "-p", "high", "-c", "home")
    assert code == 0
    assert out == "✓ Added todo #1: Buy milk\n"

    code, out, _ = _run(settings, "ls")
    assert code == 0
    assert "Pending Todos:" in out
    assert "Buy milk" in out
    assert "\033[" not in out

    assert _run(settings, "done", "1")[0] == 0
    _, out, _ = _run(settings, "list", "--done")
    assert "Buy milk" in out


def test_errors_go_to_stderr_with_exit_code(settings: SimpleNamespace) -> None:
    code, out, err = _run(settings, "done", "99")
    assert code == 1
    assert out == ""
    assert err == "Error: todo #99 not found\n"

    code, _, err = _run(settings, "add", "x", "--due", "2024/01/01")
    assert code == 1
    assert err.startswith("Error: invalid date format")


def test_no_command_prints_help(settings: SimpleNamespace) -> None:
    code, _, err = _run(settings)
    assert code == 2
    assert "usage: todo" in err


def test_bad_id_is_a_usage_error(settings: SimpleNamespace) -> None:
    with pytest.raises(SystemExit) as exc_info:
        _run(settings, "show", "abc")
    assert exc_info.value.code == 2


def test_declined_delete_is_not_an_error(settings: SimpleNamespace) -> None:
    _run(settings, "add", "Keep")
    code, out, _ = _run(settings, "rm", "1", confirm=FakeConfirm(answers=[False]))
    assert code == 0
    assert out == "Cancelled\n"

    code, out, _ = _run(settings, "delete", "1", "--force", confirm=FakeConfirm(default=False))
    assert code == 0
    assert out == "✗ Deleted todo #1\n"


def test_edit_and_clear_flags(settings: SimpleNamespace) -> None:
    _run(settings, "add", "Task", "-c", "work", "-d", "2030-01-01")
    assert _run(settings, "edit", "1", "--clear-category", "--clear-due")[1] == "Updated todo #1\n"
    _, out, _ = _run(settings, "show", "1")
    assert "Category:" not in out
    assert "Due:" not in out

    code, _, err = _run(settings, "edit", "1")
    assert code == 1
    assert "nothing to update" in err

    _run(settings, "done", "1")
    assert _run(settings, "clear", "-f")[1] == "Cleared 1 completed todos\n"
    assert _run(settings, "stats")[1] == "0 todos: 0 pending, 0 done\n"


def test_color_output_when_enabled(settings: SimpleNamespace) -> None:
    settings.color = True
    _, out, _ = _run(settings, "add", "Colorful")
    assert out.startswith("\033[32m✓\033[0m")


def test_db_option_overrides_settings(settings: SimpleNamespace, tmp_path: Path) -> None:
    other = tmp_path / "other" / "alt.db"
    _run(settings, "--db", str(other), "add", "Elsewhere")
    assert other.exists()
    assert _run(settings, "stats")[1] == "0 todos: 0 pending, 0 done\n"
    assert settings.db_path == tmp_path / "todo.db"


def test_db_under_a_regular_file_is_reported(settings: SimpleNamespace, tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("x", "utf-8")

    code, out, err = _run(settings, "--db", str(blocker / "sub" / "todo.db"), "stats")
    assert code == 1
    assert out == ""
    assert err.startswith("Error: cannot create directory")


def test_unusable_data_dir_is_reported(settings: SimpleNamespace, tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("x", "utf-8")
    settings.data_dir = blocker / "data"

    code, _, err = _run(settings, "stats")
    assert code == 1
    assert err.startswith("Error: cannot create directory")


@pytest.mark.parametrize(("reply", "expected"), [("y\n", True), ("Y\n", True), ("yes\n", False), ("\n", False)])
def test_stdin_confirm(monkeypatch, capsys, reply: str, expected: bool) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO(reply))
    assert stdin_confirm("Sure? [y/N]") is expected
    assert capsys.readouterr().out == "Sure? [y/N] "


def test_stdin_confirm_eof_means_no(monkeypatch) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    assert stdin_confirm("Sure?") is False


def test_main_exits_with_run_code(monkeypatch) -> None:
    monkeypatch.setattr(cli_main, "run", lambda: 3)
    with pytest.raises(SystemExit) as exc_info:
        cli_main.main()
    assert exc_info.value.code == 3
