#!/usr/bin/env python3
"""
Main CLI entry point for pinlayout
"""

from pathlib import Path
from typing import Optional

import typer

from pinlayout import __version__
from pinlayout.commands import config as config_commands
from pinlayout.commands import documents, layout
from pinlayout.commands._helpers import set_db_path
from pinlayout.config.constants import ENV_DB_PATH
from pinlayout.utils.logging_utils import setup_cli_logging

app = typer.Typer(
    help="pinlayout - persistent editor layouts driven by note tags",
    no_args_is_help=True,
)


@app.command()
def version():
    """Show pinlayout version"""
    typer.echo(f"pinlayout version {__version__}")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-error output"),
    db: Optional[Path] = typer.Option(
        None, "--db", envvar=ENV_DB_PATH, help="Path of the note store database"
    ),
):
    """
    pinlayout - persistent editor layouts driven by note tags

    Tag a note with [cyan]layout:editor[/cyan], [cyan]layout:split[/cyan],
    [cyan]layout:viewer[/cyan] or [cyan]layout:richtext[/cyan] and the editor
    switches to that layout whenever the note is selected.

    [bold]Examples:[/bold]

    Add a note pinned to split view:
        [cyan]pinlayout doc add "Meeting notes" --tag layout:split[/cyan]

    Select it:
        [cyan]pinlayout layout select 1[/cyan]

    Pin the current layout to the selected note:
        [cyan]pinlayout layout persist[/cyan]
    """
    if verbose and quiet:
        typer.echo("Error: --verbose and --quiet are mutually exclusive", err=True)
        raise typer.Exit(1)

    setup_cli_logging(verbose=verbose, quiet=quiet)
    set_db_path(db)


app.add_typer(documents.app, name="doc")
app.add_typer(layout.app, name="layout")
app.add_typer(config_commands.app, name="config")


def run():
    """Entry point for the CLI"""
    app()


if __name__ == "__main__":
    run()
