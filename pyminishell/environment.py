"""Shell variables: an ordered list of keys with optional values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator


def split_fields(text: str, sep: str) -> list[str]:
    """Split *text* on *sep*, dropping the empty fields between repeated separators."""
    return [field for field in text.split(sep) if field]


@dataclass
class _Variable:
    key: str
    value: str | None


class Environment:
    """Ordered shell variables; a variable may be declared without a value."""

    def __init__(self, entries: Iterable[tuple[str, str | None]] = ()) -> None:
        self._vars = [_Variable(key, value) for key, value in entries]

    @classmethod
    def from_strings(cls, entries: Iterable[str]) -> Environment:
        """Build from ``KEY=VALUE`` strings.

        Each entry is split on ``=`` with empty fields dropped: the first field
        is the key and the second, if any, the value. Entries with no field are
        ignored. Later entries come first in the result.
        """
        pairs: list[tuple[str, str | None]] = []
        for entry in entries:
            fields = split_fields(entry, "=")
            if not fields:
                continue
            pairs.append((fields[0], fields[1] if len(fields) > 1 else None))
        pairs.reverse()
        return cls(pairs)

    def _find(self, key: str) -> _Variable | None:
        return next((var for var in self._vars if var.key == key), None)

    def get(self, key: str) -> str | None:
        """Return the value of *key*, or None if it is unset or has no value."""
        var = self._find(key)
        return var.value if var is not None else None

    def __contains__(self, key: object) -> bool:
        return any(var.key == key for var in self._vars)

    def __iter__(self) -> Iterator[tuple[str, str | None]]:
        return ((var.key, var.value) for var in self._vars)

    def __len__(self) -> int:
        return len(self._vars)

    def export(self, key: str, value: str | None) -> None:
        """Set *key*; a None value declares a new key but leaves an existing one alone."""
        var = self._find(key)
        if var is None:
            self._vars.append(_Variable(key, value))
        elif value is not None:
            var.value = value

    def unset(self, key: str) -> None:
        """Remove the first variable named *key*, if there is one."""
        var = self._find(key)
        if var is not None:
            self._vars.remove(var)

    def to_list(self) -> list[str]:
        """Return ``KEY=VALUE`` strings for every variable that has a value."""
        return [f"{var.key}={var.value}" for var in self._vars if var.value is not None]

    def format(self) -> str:
        """Return the listing printed by ``env``: one ``KEY=VALUE`` line per valued variable."""
        return "".join(f"{entry}\n" for entry in self.to_list())

    def search_path(self) -> list[str] | None:
        """Return the PATH directories, each ending in ``/``, or None without PATH."""
        value = self.get("PATH")
        if value is None:
            return None
        return [f"{directory}/" for directory in split_fields(value, ":")]