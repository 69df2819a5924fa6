# pyminishell

A small interactive command shell. It reads a line, splits it into words,
expands `$VARIABLES`, runs a handful of built-in commands itself and starts
any other program it finds on `PATH`.

## Installing

    pip install .

## Running

    pyminishell

The prompt shows the last component of the current directory in green,
followed by `$`. The session ends with `exit` or at end of input (Ctrl-D),
when `exit` is printed. Ctrl-C abandons the current line and sets the
status to 130. Line editing and history come from Python's `readline`
module where it is available.

## What it understands

- Words are separated by spaces; repeated spaces are ignored. The first
  word is the command.
- `$NAME` is replaced by the value of the shell variable `NAME`, or by
  nothing when it is unset or has no value. `$?` becomes the exit status
  of the last command. A `$` not followed by a letter, digit or `_` is kept
  as it is.
- Built-in commands:
  - `echo [-n] WORDS...`: prints the words; a first word starting with
    `-n` suppresses the newline.
  - `cd [DIR]`: changes directory; without an argument it goes to the
    `HOME` of the process environment.
  - `pwd`: prints the current directory.
  - `env`: prints every variable that has a value as `KEY=VALUE`.
  - `export KEY=VALUE` or `export KEY`: sets a variable, or declares one
    without a value. Only the first argument is used. Without an argument
    it prints the same listing as `env`.
  - `unset KEY`: removes a variable (the first argument only).
  - `exit`: leaves the shell with status 0.
  - `ls` with no arguments lists the visible entries of the current
    directory on one line, directories in blue and executables in green.
    This happens only when an `ls` program is found; `ls` with arguments
    runs that program.
- Any other command is run as a separate program: the word itself if it
  names an existing file, otherwise the first match in the `PATH`
  directories. Its exit status becomes `$?`; a command that cannot be
  found or started reports an error and gives 127, and a program killed by
  a signal gives 1. Programs receive the variables that have values as
  their environment.

## What it does not do

A typed line always becomes a single command. There is no quoting or
escaping, no `|` pipelines, no `<`, `>`, `>>` or `<<` redirections, no
`;`, `&&` or `||`, and no globbing: such characters are passed on as
ordinary words. (`Redirection` and `RedirectionType` exist in
`pyminishell.state` as data types, but nothing parses or applies them.)

## Using it from Python

```python
import io
from pyminishell.shell import Shell

out = io.StringIO()
shell = Shell(["PATH=/usr/bin:/bin", "HOME=/tmp"], out=out)
shell.run_line("export GREETING=hello")
shell.run_line("echo $GREETING world")
print(out.getvalue())  # hello world
```

`Shell(environ, out, err)` takes `KEY=VALUE` strings (the process
environment when `None`) and the streams to write to. `Shell.run_line`
runs one line and returns its status; `exit` raises
`pyminishell.builtins.ShellExit`, whose `code` holds the status.
`Shell.loop(read_line)` runs the interactive loop with any function that
takes a prompt and returns a line, or `None` at end of input.

The pieces underneath are usable on their own:

- `pyminishell.environment.Environment`: ordered variables with `get`,
  `export`, `unset`, `to_list`, `format` and `search_path`;
  `Environment.from_strings` builds one from `KEY=VALUE` strings.
- `pyminishell.expand.expand_variables` and `pyminishell.expand.parse`:
  variable expansion and turning a line into a list of `Command` objects.
- `pyminishell.executor.run_pipeline(state, commands, out, err)`: runs a
  list of commands connected by pipes, with builtins in the shell when
  they come last, and stores the status in the `ShellState`;
  `resolve_command` finds a program on a search path.
- `pyminishell.shell.make_prompt(cwd)`: builds the prompt string.

## Running the tests

    pip install .[test]
    pytest