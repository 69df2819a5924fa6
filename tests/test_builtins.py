import errno
import io
import os

import pytest

from pyminishell.builtins import (
    ShellExit,
    cd,
    echo,
    export,
    is_builtin,
    list_directory,
    pwd,
    run_builtin,
    unset,
)
from pyminishell.environment import Environment
from pyminishell.state import Command, ShellState


def make_state(*entries):
    return ShellState(env=Environment.from_strings(entries))


@pytest.mark.parametrize("name", ["cd", "echo", "exit", "pwd", "env", "export", "unset"])
def test_simple_builtins_are_recognised(name):
    assert is_builtin(name, Command([name])) is True


def test_unknown_name_is_not_builtin():
    assert is_builtin("grep", Command(["grep"])) is False


def test_ls_is_builtin_only_when_found_and_bare(tmp_path):
    program = tmp_path / "ls"
    program.write_text("")
    assert is_builtin("ls", Command(["ls"], path=str(program))) is True
    assert is_builtin("ls", Command(["ls", "-l"], path=str(program))) is False
    assert is_builtin("ls", Command(["ls"], path=None)) is False
    assert is_builtin("ls", Command(["ls"], path=str(tmp_path / "missing"))) is False


def test_echo_joins_words_with_newline():
    out = io.StringIO()
    echo(["echo", "a", "b"], out)
    assert out.getvalue() == "a b\n"


def test_echo_dash_n_drops_newline():
    out = io.StringIO()
    echo(["echo", "-n", "a", "b"], out)
    assert out.getvalue() == "a b"


def test_echo_option_prefix_also_counts():
    out = io.StringIO()
    echo(["echo", "-nope", "x"], out)
    assert out.getvalue() == "x"


def test_echo_alone_prints_newline():
    out = io.StringIO()
    echo(["echo"], out)
    assert out.getvalue() == "\n"


def test_pwd_writes_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    out = io.StringIO()
    pwd(out)
    assert out.getvalue() == os.getcwd() + "\n"


def test_cd_changes_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "sub").mkdir()
    err = io.StringIO()
    cd(["cd", "sub"], err)
    assert os.path.samefile(os.getcwd(), tmp_path / "sub")
    assert err.getvalue() == ""


def test_cd_missing_directory_reports(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    err = io.StringIO()
    cd(["cd", "nowhere"], err)
    assert err.getvalue() == f"cd: {os.strerror(errno.ENOENT)}\n"
    assert os.path.samefile(os.getcwd(), tmp_path)


def test_cd_without_home(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("HOME", raising=False)
    err = io.StringIO()
    cd(["cd"], err)
    assert err.getvalue() == "cd: HOME not set\n"


def test_cd_goes_home(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    err = io.StringIO()
    cd(["cd"], err)
    assert err.getvalue() == ""
    assert os.path.samefile(os.getcwd(), home)


def test_export_sets_and_declares():
    state = make_state("A=1")
    out = io.StringIO()
    export(state, ["export", "B=two"], out)
    export(state, ["export", "C"], out)
    assert state.env.get("B") == "two"
    assert "C" in state.env
    assert state.env.get("C") is None
    assert out.getvalue() == ""


def test_export_without_value_keeps_existing():
    state = make_state("A=1")
    export(state, ["export", "A"], io.StringIO())
    assert state.env.get("A") == "1"


def test_export_ignores_leading_equals():
    state = make_state("A=1")
    export(state, ["export", "=x"], io.StringIO())
    export(state, ["export", ""], io.StringIO())
    assert state.env.to_list() == ["A=1"]


def test_export_without_args_lists():
    state = make_state("A=1", "B=2")
    out = io.StringIO()
    export(state, ["export"], out)
    assert out.getvalue() == state.env.format()


def test_unset_removes_and_rebuilds_environ():
    state = make_state("A=1", "B=2")
    unset(state, ["unset", "A"], io.StringIO())
    assert "A" not in state.env
    assert state.environ == ["B=2"]


def test_unset_without_args_reports():
    state = make_state("A=1")
    err = io.StringIO()
    unset(state, ["unset"], err)
    assert err.getvalue() == "unset: not enough arguments\n"
    assert state.env.get("A") == "1"


def test_list_directory_styles_entries(tmp_path):
    (tmp_path / "sub").mkdir()
    (tmp_path / "a.txt").write_text("x")
    script = tmp_path / "run.sh"
    script.write_text("x")
    script.chmod(0o755)
    (tmp_path / "a.txt").chmod(0o644)
    (tmp_path / ".hidden").write_text("x")
    out = io.StringIO()
    list_directory(str(tmp_path), out)
    text = out.getvalue()
    assert text.endswith("\n")
    tokens = set(text[:-1].split(" "))
    assert tokens == {"\033[1;34msub\033[0m", "\033[1;32mrun.sh\033[0m", "a.txt"}


def test_list_directory_missing_prints_nothing(tmp_path):
    out = io.StringIO()
    list_directory(str(tmp_path / "missing"), out)
    assert out.getvalue() == ""


def test_run_builtin_env():
    state = make_state("A=1", "B=2")
    out = io.StringIO()
    run_builtin(state, Command(["env"]), out, io.StringIO())
    assert out.getvalue() == state.env.format()


def test_run_builtin_exit_raises():
    with pytest.raises(ShellExit) as info:
        run_builtin(make_state(), Command(["exit"]), io.StringIO(), io.StringIO())
    assert info.value.code == 0


def test_run_builtin_ls_current_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "file").write_text("x")
    (tmp_path / "file").chmod(0o644)
    out = io.StringIO()
    run_builtin(make_state(), Command(["ls"]), out, io.StringIO())
    assert out.getvalue() == "file\n"