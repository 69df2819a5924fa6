"""Commands the shell runs itself instead of starting a program."""

from __future__ import annotations

import os
import stat
from typing import TextIO

from pyminishell.state import Command, ShellState

_SIMPLE_BUILTINS = frozenset({"cd", "echo", "exit", "pwd", "env", "export", "unset"})

_DIR_STYLE = "\033[1;34m{}\033[0m"
_EXEC_STYLE = "\033[1;32m{}\033[0m"


class ShellExit(Exception):
    """Raised by the ``exit`` builtin to leave the shell."""

    def __init__(self, code: int = 0) -> None:
        super().__init__(code)
        self.code = code


def is_builtin(name: str | None, command: Command | None = None) -> bool:
    """Tell whether *name* is run by the shell itself.

    ``ls`` counts as a builtin only when it was found on disk and is given no
    arguments.
    """
    if name in _SIMPLE_BUILTINS:
        return True
    return (
        name == "ls"
        and command is not None
        and command.path is not None
        and len(command.args) == 1
        and os.path.exists(command.path)
    )


def echo(args: list[str], out: TextIO) -> None:
    """Write the words after ``echo``; a first word starting with ``-n`` drops the newline."""
    words = args[1:]
    newline = True
    if words and words[0].startswith("-n"):
        newline = False
        words = words[1:]
    out.write(" ".join(words))
    if newline:
        out.write("\n")


def pwd(out: TextIO) -> None:
    """Write the current directory, or nothing if it cannot be found."""
    try:
        cwd = os.getcwd()
    except OSError:
        return
    out.write(f"{cwd}\n")


def cd(args: list[str], err: TextIO) -> None:
    """Change directory to the argument, or to ``$HOME`` of the process without one."""
    if len(args) < 2:
        path = os.environ.get("HOME")
        if path is None:
            err.write("cd: HOME not set\n")
            return
    else:
        path = args[1]
    try:
        os.chdir(path)
    except OSError as exc:
        err.write(f"cd: {exc.strerror}\n")


def export(state: ShellState, args: list[str], out: TextIO) -> None:
    """Set a variable from ``KEY=VALUE`` or declare ``KEY``; list variables without an argument."""
    if len(args) < 2:
        out.write(state.env.format())
        return
    word = args[1]
    if not word or word.startswith("="):
        return
    key, eq, value = word.partition("=")
    state.env.export(key, value if eq else None)


def unset(state: ShellState, args: list[str], err: TextIO) -> None:
    """Remove the named variable and rebuild the exported environment."""
    if len(args) < 2:
        err.write("unset: not enough arguments\n")
        return
    state.env.unset(args[1])
    state.environ = state.env.to_list()


def _style(name: str, mode: int) -> str:
    if stat.S_ISDIR(mode):
        return _DIR_STYLE.format(name)
    if mode & stat.S_IXUSR:
        return _EXEC_STYLE.format(name)
    return name


def list_directory(path: str, out: TextIO) -> None:
    """Write the visible entries of *path* on one line, colouring directories and executables."""
    try:
        names = os.listdir(path)
    except OSError:
        return
    shown = []
    for name in names:
        if name.startswith("."):
            continue
        try:
            mode = os.stat(os.path.join(path, name)).st_mode
        except OSError:
            continue
        shown.append(_style(name, mode))
    out.write(" ".join(shown))
    out.write("\n")


def run_builtin(state: ShellState, command: Command, out: TextIO, err: TextIO) -> None:
    """Run *command* as a builtin; ``exit`` raises :class:`ShellExit`."""
    name = command.name
    args = command.args
    if name == "env":
        out.write(state.env.format())
    elif name == "exit":
        raise ShellExit(0)
    elif name == "pwd":
        pwd(out)
    elif name == "cd":
        cd(args, err)
    elif name == "unset":
        unset(state, args, err)
    elif name == "export":
        export(state, args, out)
    elif name == "echo":
        echo(args, out)
    elif name == "ls":
        list_directory(args[1] if len(args) > 1 else ".", out)