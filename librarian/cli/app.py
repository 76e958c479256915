"""librarian CLI - typer app and console entry point."""

from __future__ import annotations

import typer

from librarian import __version__
from librarian.cli.commands.prepare import prepare
from librarian.cli.commands.release_worthy import release_worthy
from librarian.cli.commands.tag import tag


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


app.command()(prepare)
app.command("release-worthy")(release_worthy)
app.command()(tag)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    del version


def main() -> None:
    app()
