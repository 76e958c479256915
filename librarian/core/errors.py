"""Error payloads and exit codes for librarian commands.

``CommandError`` is the single error shape surfaced to the operator. Its
``kind`` classifies the violated contract and selects the process exit
code through ``ErrorCode.for_kind``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Literal

__all__ = ["CommandError", "ErrorCode", "ErrorKind"]


ErrorKind = Literal[
    "configuration",
    "precondition",
    "io",
    "state",
    "git",
    "container",
]


@dataclass(frozen=True, slots=True)
class CommandError:
    """Canonical error for validation and command-state assembly.

    Attributes:
        kind: Which contract was violated.
        message: Human-readable description, shown verbatim in CI logs.
        hint: Optional follow-up detail (stderr, offending path).
    """

    kind: ErrorKind
    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} ({self.hint})"
        return self.message

    def __str__(self) -> str:
        return self.pretty()


class ErrorCode(IntEnum):
    """Process exit codes.

    These values are used as process exit codes and should remain stable.
    """

    OK = 0
    CONFIGURATION_ERROR = 1
    PRECONDITION_ERROR = 2
    EXTERNAL_ERROR = 3
    STATE_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK

    @classmethod
    def for_kind(cls, kind: ErrorKind) -> ErrorCode:
        match kind:
            case "configuration":
                return cls.CONFIGURATION_ERROR
            case "precondition":
                return cls.PRECONDITION_ERROR
            case "git" | "container":
                return cls.EXTERNAL_ERROR
            case "state":
                return cls.STATE_ERROR
            case "io":
                return cls.IO_ERROR
