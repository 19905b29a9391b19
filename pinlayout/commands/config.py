"""Settings commands.

    pinlayout config show
    pinlayout config set defaultLayout previous
    pinlayout config import rules.yaml
    pinlayout config export rules.yaml
"""

from pathlib import Path
from typing import Optional

import typer
import yaml
from rich.table import Table

from pinlayout.config.constants import SETTING_DEFAULT_LAYOUT, SETTING_DEFINITIONS
from pinlayout.config.rules_file import LayoutRulesFile
from pinlayout.config.settings import LayoutSettings, validate_setting
from pinlayout.models.layouts import LayoutKind
from pinlayout.utils.output import console, print_json

from ._helpers import handle_command_error, open_host

app = typer.Typer(help="Show and change layout settings")


@app.command()
@handle_command_error("reading settings")
def show(json_output: bool = typer.Option(False, "--json", help="Output as JSON")):
    """Show all layout settings."""
    host = open_host()
    settings = LayoutSettings(host)
    settings.read()

    if json_output:
        print_json({key: settings.value(key) for key in SETTING_DEFINITIONS})
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_column("Description", style="dim")
    for key, definition in SETTING_DEFINITIONS.items():
        value = settings.value(key)
        if key == SETTING_DEFAULT_LAYOUT:
            value = settings.default_layout.name.lower()
        table.add_row(key, str(value), definition["label"])
    console.print(table)


@app.command("set")
@handle_command_error("changing setting")
def set_cmd(
    key: str = typer.Argument(..., help="Setting name, e.g. splitTags"),
    value: str = typer.Argument(..., help="New value"),
):
    """Change a layout setting."""
    is_valid, error = validate_setting(key, value)
    if not is_valid:
        console.print(f"[red]Error: {error}[/red]")
        raise typer.Exit(1)

    stored: object = value
    if key == SETTING_DEFAULT_LAYOUT:
        stored = int(LayoutKind.parse(value))
    elif isinstance(SETTING_DEFINITIONS[key]["default"], int):
        stored = int(value)

    host = open_host()
    host.set_setting(key, stored)
    console.print(f"[green]Set {key}[/green] = {value}")


@app.command("import")
@handle_command_error("importing rules")
def import_cmd(path: Path = typer.Argument(..., help="YAML rules file")):
    """Load tag rules and the default layout from a YAML file."""
    rules = LayoutRulesFile.load(path)
    host = open_host()
    values = rules.apply_to(host)
    console.print(f"[green]Imported {len(values)} settings from {path}[/green]")


@app.command("export")
@handle_command_error("exporting rules")
def export_cmd(
    path: Optional[Path] = typer.Argument(None, help="Target file (default: print YAML)"),
):
    """Write the current tag rules to a YAML file."""
    host = open_host()
    rules = LayoutRulesFile.from_host(host)
    if path is None:
        typer.echo(yaml.dump(rules.to_dict(), default_flow_style=False, sort_keys=False))
        return
    saved = rules.save(path)
    console.print(f"[green]Exported rules to {saved}[/green]")
