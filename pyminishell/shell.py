"""The interactive loop: prompt, read a line, run it, repeat."""

from __future__ import annotations

import os
import signal
import sys
from typing import Callable, Iterable, TextIO

from pyminishell.builtins import ShellExit
from pyminishell.environment import Environment
from pyminishell.executor import run_pipeline
from pyminishell.expand import has_visible_chars, parse
from pyminishell.state import ShellState

_GREEN = "\001\033[0;32m\002"
_RESET = "\033[0m"
_UNKNOWN_DIR = "unknown_directory"

INTERRUPTED_STATUS = 130
QUIT_STATUS = 131


def make_prompt(cwd: str | None = None) -> str:
    """Build the prompt for *cwd*: its last component in green, then ``$``.

    A directory of one character, or one ending in ``/``, is shown whole;
    an unknown directory (None) is shown as ``unknown_directory``.
    """
    if cwd is None:
        cwd = _UNKNOWN_DIR
    shown = cwd
    if len(cwd) > 1:
        slash = cwd.rfind("/")
        if slash != -1 and slash + 1 < len(cwd):
            shown = cwd[slash + 1:]
    return f"{_GREEN}{shown}{_RESET} $ "


def _current_dir() -> str | None:
    try:
        return os.getcwd()
    except OSError:
        return None


class Shell:
    """A shell session holding its variables and writing to *out* and *err*."""

    def __init__(
        self,
        environ: Iterable[str] | None = None,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        if environ is None:
            environ = [f"{key}={value}" for key, value in os.environ.items()]
        self.state = ShellState(Environment.from_strings(environ))
        self.out = out if out is not None else sys.stdout
        self.err = err if err is not None else sys.stderr

    @property
    def exit_code(self) -> int:
        return self.state.exit_code

    def run_line(self, line: str) -> int:
        """Parse and run one input line and return the resulting status.

        A blank line runs nothing and leaves the status as it was. The
        ``exit`` builtin raises :class:`ShellExit`.
        """
        if not has_visible_chars(line):
            return self.state.exit_code
        self.state.input = line
        try:
            commands = parse(line, self.state.env, self.state.exit_code)
            self.state.commands = commands
            run_pipeline(self.state, commands, self.out, self.err)
        finally:
            self.state.refresh()
        return self.state.exit_code

    def _interrupted(self) -> None:
        self.state.input = None
        self.state.prompt = None
        self.out.write("\n")
        self.state.exit_code = INTERRUPTED_STATUS

    def loop(self, read_line: Callable[[str], str | None]) -> int:
        """Read lines with *read_line* until end of input or ``exit``; return the exit status.

        *read_line* receives the prompt and returns the line, or None (or
        raises EOFError) at end of input, after which ``exit`` is written.
        An interrupt abandons the current line and sets the status to 130.
        """
        while True:
            prompt = make_prompt(_current_dir())
            self.state.prompt = prompt
            try:
                line = read_line(prompt)
            except EOFError:
                line = None
            except KeyboardInterrupt:
                self._interrupted()
                continue
            if line is None:
                self.out.write("exit\n")
                self.out.flush()
                return 0
            if not has_visible_chars(line):
                continue
            try:
                self.run_line(line)
            except ShellExit as exc:
                return exc.code
            except KeyboardInterrupt:
                self._interrupted()


def _read_with_history(prompt: str) -> str | None:
    return input(prompt)


def main(argv: list[str] | None = None) -> int:
    """Start an interactive session on the standard streams."""
    try:
        import readline  # noqa: F401  (enables line editing and history for input())
    except ImportError:
        pass
    shell = Shell(None, sys.stdout, sys.stderr)

    def _on_quit(signum: int, frame: object) -> None:
        shell.state.exit_code = QUIT_STATUS

    if hasattr(signal, "SIGQUIT"):
        signal.signal(signal.SIGQUIT, _on_quit)
    return shell.loop(_read_with_history)