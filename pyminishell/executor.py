"""Running a pipeline of commands, builtins in the shell and programs as children."""

from __future__ import annotations

import copy
import errno
import io
import os
import subprocess
import tempfile
import threading
from typing import IO, TextIO, Union

from pyminishell.builtins import ShellExit, is_builtin, run_builtin
from pyminishell.state import Command, ShellState

_Upstream = Union[None, bytes, IO[bytes]]


def resolve_command(name: str, search_path: list[str] | None) -> str | None:
    """Find the program for *name*: itself if it exists, else the first PATH match."""
    if os.path.exists(name):
        return name
    if search_path is None:
        return None
    for directory in search_path:
        candidate = directory + name
        if os.path.exists(candidate):
            return candidate
    return None


def _fileno(stream: TextIO) -> int | None:
    try:
        return stream.fileno()
    except (AttributeError, OSError, ValueError):
        return None


class _Sink:
    """A target a child process can write to, copied into *stream* when closed."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._tmp: IO[bytes] | None = None
        fd = _fileno(stream)
        if fd is None:
            self._tmp = tempfile.TemporaryFile()
            self.target: int | IO[bytes] = self._tmp
        else:
            stream.flush()
            self.target = fd

    def __enter__(self) -> _Sink:
        return self

    def __exit__(self, *exc_info: object) -> None:
        if self._tmp is None:
            return
        self._tmp.seek(0)
        data = self._tmp.read()
        self._tmp.close()
        if data:
            self._stream.write(data.decode(errors="replace"))


def _release(upstream: _Upstream) -> None:
    if upstream is not None and not isinstance(upstream, bytes):
        upstream.close()


def _feed(pipe: IO[bytes], data: bytes) -> None:
    try:
        pipe.write(data)
    except (BrokenPipeError, ValueError):
        pass
    finally:
        try:
            pipe.close()
        except BrokenPipeError:
            pass


def _child_environ(state: ShellState) -> dict[str, str]:
    return dict(entry.split("=", 1) for entry in state.environ)


def _run_detached_builtin(state: ShellState, command: Command, err: TextIO) -> bytes:
    """Run a builtin as a pipeline stage: its effects stay out of the shell."""
    buffer = io.StringIO()
    sandbox = copy.deepcopy(state)
    cwd = os.getcwd()
    try:
        run_builtin(sandbox, command, buffer, err)
    except ShellExit:
        pass
    finally:
        os.chdir(cwd)
    return buffer.getvalue().encode()


def _spawn(
    command: Command,
    state: ShellState,
    stdin: object,
    stdout: object,
    stderr: object,
    err: TextIO,
) -> subprocess.Popen[bytes] | None:
    if command.path is None:
        err.write(f"{command.name}: {os.strerror(errno.ENOENT)}\n")
        return None
    try:
        return subprocess.Popen(
            command.args,
            executable=command.path,
            stdin=stdin,
            stdout=stdout,
            stderr=stderr,
            env=_child_environ(state),
        )
    except OSError as exc:
        err.write(f"{command.name}: {exc.strerror or exc}\n")
        return None


def run_pipeline(
    state: ShellState, commands: list[Command], out: TextIO, err: TextIO
) -> int:
    """Run *commands* connected by pipes and store the resulting status in *state*.

    A builtin in the last position runs in the shell and ends the pipeline.
    The status is that of the last started program, 127 when a program cannot
    be started, 1 when one is killed by a signal and 0 when none was started.
    """
    results: list[subprocess.Popen[bytes] | int] = []
    feeders: list[threading.Thread] = []
    with _Sink(out) as out_sink, _Sink(err) as err_sink:
        upstream: _Upstream = None
        try:
            for index, command in enumerate(commands):
                last = index == len(commands) - 1
                name = command.name
                if name is None:
                    _release(upstream)
                    upstream = b""
                    continue
                command.path = resolve_command(name, state.search_path)
                if is_builtin(name, command):
                    _release(upstream)
                    upstream = None
                    if last:
                        run_builtin(state, command, out, err)
                        break
                    upstream = _run_detached_builtin(state, command, err)
                    continue
                data = upstream if isinstance(upstream, bytes) else None
                stdin = subprocess.PIPE if data is not None else upstream
                stdout = out_sink.target if last else subprocess.PIPE
                proc = _spawn(command, state, stdin, stdout, err_sink.target, err)
                _release(upstream)
                upstream = None
                if proc is None:
                    results.append(127)
                    upstream = b""
                    continue
                results.append(proc)
                if data is not None and proc.stdin is not None:
                    feeder = threading.Thread(target=_feed, args=(proc.stdin, data))
                    feeder.start()
                    feeders.append(feeder)
                if not last:
                    upstream = proc.stdout
        finally:
            _release(upstream)
            for feeder in feeders:
                feeder.join()
            for result in results:
                if isinstance(result, subprocess.Popen):
                    result.wait()
    if not results:
        status = 0
    else:
        final = results[-1]
        if isinstance(final, int):
            status = final
        else:
            status = final.returncode if final.returncode >= 0 else 1
    state.exit_code = status
    return status