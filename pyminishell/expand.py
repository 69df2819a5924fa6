"""Turning an input line into commands, with ``$`` variable expansion."""

from __future__ import annotations

from pyminishell.environment import Environment, split_fields
from pyminishell.state import Command

_SPACE = frozenset(" \t\n\v\f\r")


def has_visible_chars(text: str | None) -> bool:
    """Return True if *text* holds anything other than whitespace."""
    return text is not None and any(ch not in _SPACE for ch in text)


def _is_name_char(ch: str) -> bool:
    return ch == "_" or (ch.isascii() and ch.isalnum())


def expand_variables(text: str, env: Environment, exit_code: int) -> str:
    """Replace ``$NAME`` with its value and ``$?`` with *exit_code*.

    Unknown or valueless names expand to nothing; a ``$`` not followed by a
    name character is kept as it is.
    """
    parts: list[str] = []
    pos = 0
    while (dollar := text.find("$", pos)) != -1:
        parts.append(text[pos:dollar])
        start = dollar + 1
        if text[start:start + 1] == "?":
            parts.append(str(exit_code))
            pos = start + 1
            continue
        end = start
        while end < len(text) and _is_name_char(text[end]):
            end += 1
        if end == start:
            parts.append("$")
            pos = start
            continue
        value = env.get(text[start:end])
        if value is not None:
            parts.append(value)
        pos = end
    parts.append(text[pos:])
    return "".join(parts)


def parse(line: str, env: Environment, exit_code: int) -> list[Command]:
    """Split *line* on spaces and expand variables, giving a one-command pipeline."""
    args = [
        expand_variables(word, env, exit_code) if "$" in word else word
        for word in split_fields(line, " ")
    ]
    return [Command(args)]