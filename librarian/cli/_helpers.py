"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import NoReturn

import typer

from librarian.core.errors import CommandError, ErrorCode
from librarian.output.console import ConsoleProtocol, Style


def exit_with_error(error: CommandError, console: ConsoleProtocol) -> NoReturn:
    """Report ``error`` and exit with the code for its kind."""
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)
    raise typer.Exit(code=int(ErrorCode.for_kind(error.kind)))
