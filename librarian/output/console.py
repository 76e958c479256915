"""Operator-facing console output.

Commands report progress through ``ConsoleProtocol`` rather than a
particular backend. Messages are a short text plus optional key/value
fields, rendered as ``info: Temporary working directory dir=/tmp/x``.
``RichConsole`` is used in production; ``MockConsole`` captures output
in tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "OutputRecord",
    "RichConsole",
    "Style",
    "format_fields",
]


class Style(Enum):
    """Message severities / styles."""

    DEFAULT = auto()
    ERROR = auto()
    INFO = auto()
    DIM = auto()

    def __str__(self) -> str:
        return self.name.lower()


def format_fields(message: str, fields: dict[str, object]) -> str:
    """Render ``message`` followed by ``key=value`` pairs in call order."""
    if not fields:
        return message
    pairs = " ".join(f"{key}={value}" for key, value in fields.items())
    return f"{message} {pairs}"


class ConsoleProtocol(Protocol):
    """Structured console output."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def error(self, message: str, **fields: object) -> None: ...

    def info(self, message: str, **fields: object) -> None: ...


class RichConsole:
    """Console implementation backed by Rich.

    Args:
        quiet: Suppress info-level messages. Errors still print.
        stderr: Write to stderr, keeping stdout free for command results.
    """

    def __init__(self, *, quiet: bool = False, stderr: bool = True) -> None:
        # Import Rich lazily to avoid import-time dependency
        from rich.console import Console

        self._console = Console(stderr=stderr, highlight=False)
        self._quiet = quiet
        self._style_map = {
            Style.DEFAULT: "",
            Style.ERROR: "red bold",
            Style.INFO: "cyan",
            Style.DIM: "dim",
        }

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        rich_style = self._style_map.get(style, "")
        if rich_style:
            self._console.print(message, style=rich_style, markup=False)
        else:
            self._console.print(message, markup=False)

    def _tagged(self, tag: str, color: str, message: str, fields: dict[str, object]) -> None:
        from rich.text import Text

        line = Text(f"{tag}:", style=color)
        line.append(" ")
        line.append(format_fields(message, fields))
        self._console.print(line)

    def error(self, message: str, **fields: object) -> None:
        self._tagged("error", "red bold", message, fields)

    def info(self, message: str, **fields: object) -> None:
        if self._quiet:
            return
        self._tagged("info", "cyan", message, fields)


@dataclass
class OutputRecord:
    """A single captured line."""

    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Console implementation that captures output for testing."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def error(self, message: str, **fields: object) -> None:
        self.outputs.append(OutputRecord(f"error: {format_fields(message, fields)}", Style.ERROR))

    def info(self, message: str, **fields: object) -> None:
        self.outputs.append(OutputRecord(f"info: {format_fields(message, fields)}", Style.INFO))

    # Test helpers

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

