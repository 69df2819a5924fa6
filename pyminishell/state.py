"""Data held by the shell between and during commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from pyminishell.environment import Environment


class RedirectionType(Enum):
    IN = auto()
    OUT = auto()
    APPEND = auto()
    HEREDOC = auto()


@dataclass(frozen=True)
class Redirection:
    type: RedirectionType
    target: str


@dataclass
class Command:
    """One simple command: its words, resolved program path and redirections."""

    args: list[str]
    path: str | None = None
    redirections: list[Redirection] = field(default_factory=list)

    @property
    def name(self) -> str | None:
        return self.args[0] if self.args else None


@dataclass
class ShellState:
    """Everything the shell keeps: variables, current pipeline and last status."""

    env: Environment = field(default_factory=Environment)
    commands: list[Command] = field(default_factory=list)
    exit_code: int = 0
    input: str | None = None
    prompt: str | None = None
    environ: list[str] = field(init=False)
    search_path: list[str] | None = field(init=False)

    def __post_init__(self) -> None:
        self.environ = self.env.to_list()
        self.search_path = self.env.search_path()

    def refresh(self) -> None:
        """Drop the finished line and rebuild the exported environment and PATH."""
        self.input = None
        self.prompt = None
        self.environ = self.env.to_list()
        self.commands.clear()
        self.search_path = self.env.search_path()