from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from rich import print
from rich.console import Console


class SeverityLevel(Enum):
    HIGH = "red"
    LOW = "green"

    @property
    def prefix(self) -> str:
        return f"[bold {self.value}]WARNING [{self.name}]:[/]"

    @property
    def prefix_length(self) -> int:
        return len(self.prefix.split("]", 1)[1].rsplit("[", 1)[0])


@dataclass(frozen=True)
class GitLabWarning(ABC, UserWarning):
    severity: ClassVar[SeverityLevel]

    @abstractmethod
    def get_message(self) -> str:
        raise NotImplementedError()

    def __str__(self) -> str:
        return self.get_message()

    def print_prepare(self) -> tuple[str, str]:
        prefix = self.severity.prefix
        end = "\n" + " " * ((self.severity.prefix_length + 1) // 2)
        message = self.get_message().replace("\n", end)
        return prefix, message

    def print_warning(self, console: Console | None = None) -> None:
        parts = self.print_prepare()
        if console is None:
            print(*parts)
        else:
            console.print(*parts)


@dataclass(frozen=True)
class LowSeverityWarning(GitLabWarning):
    severity: ClassVar[SeverityLevel] = SeverityLevel.LOW
    message_raw: str

    def get_message(self) -> str:
        return self.message_raw


@dataclass(frozen=True)
class HighSeverityWarning(GitLabWarning):
    severity: ClassVar[SeverityLevel] = SeverityLevel.HIGH
    message_raw: str

    def get_message(self) -> str:
        return self.message_raw
