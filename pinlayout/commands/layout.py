"""Layout commands.

    pinlayout layout status          → show the editor layout
    pinlayout layout select ID       → select a document and apply its layout
    pinlayout layout persist [IDS]   → pin the current layout as a tag
    pinlayout layout toggle-panes    → cycle visible panes
    pinlayout layout toggle-editors  → flip markdown/rich text editor
    pinlayout layout watch           → process select/persist lines from stdin
"""

import sys
from typing import Optional

import typer

from pinlayout.config.constants import (
    CMD_TOGGLE_EDITORS,
    CMD_TOGGLE_VISIBLE_PANES,
    GLOBAL_SOURCE_VIEW,
    GLOBAL_VISIBLE_PANES,
)
from pinlayout.exceptions import PinlayoutError
from pinlayout.models.layouts import LayoutKind
from pinlayout.services.layout_service import LayoutAutomation
from pinlayout.utils.output import console, print_json

from ._helpers import handle_command_error, open_host

app = typer.Typer(help="Apply and pin editor layouts")


def _show_status(host, automation: LayoutAutomation) -> None:
    kind = automation.observed_layout()
    panes = sorted(p for p in host.get_global_setting(GLOBAL_VISIBLE_PANES) or [] if p)
    mode = "markdown" if host.get_global_setting(GLOBAL_SOURCE_VIEW) else "rich text"
    name = kind.name.lower() if kind != LayoutKind.NONE else "[dim]unrecognized[/dim]"
    console.print(f"Layout: [cyan]{name}[/cyan]  (editor: {mode}, panes: {', '.join(panes) or '-'})")


def _print_persist_results(results) -> None:
    if not results:
        console.print("[yellow]Nothing persisted: current layout is not recognized[/yellow]")
        return
    for result in results:
        if not result.changed:
            console.print(f"[dim]#{result.document_id} already pinned[/dim]")
            continue
        parts = []
        if result.added:
            parts.append(f"[green]+{', +'.join(result.added)}[/green]")
        if result.removed:
            parts.append(f"[red]-{', -'.join(result.removed)}[/red]")
        console.print(f"#{result.document_id}: {' '.join(parts)}")


@app.command()
@handle_command_error("reading layout")
def status(json_output: bool = typer.Option(False, "--json", help="Output as JSON")):
    """Show the current editor layout."""
    host = open_host()
    automation = LayoutAutomation(host)
    if json_output:
        print_json(
            {
                "layout": automation.observed_layout().name.lower(),
                "source_view": bool(host.get_global_setting(GLOBAL_SOURCE_VIEW)),
                "visible_panes": host.get_global_setting(GLOBAL_VISIBLE_PANES),
                "selected": host.get_selected_document_ids(),
            }
        )
        return
    _show_status(host, automation)


@app.command()
@handle_command_error("selecting document")
def select(doc_id: str = typer.Argument(..., help="Document ID to select")):
    """Select a document and apply the layout its tags call for."""
    host = open_host()
    automation = LayoutAutomation(host)
    automation.start()
    host.select_document(doc_id)
    _show_status(host, automation)


@app.command()
@handle_command_error("persisting layout")
def persist(
    doc_ids: Optional[list[str]] = typer.Argument(
        None, help="Documents to tag (defaults to the selection)"
    ),
):
    """Pin the current editor layout to documents as a layout tag."""
    host = open_host()
    automation = LayoutAutomation(host)
    if not doc_ids and not host.get_selected_document_ids():
        console.print("[yellow]No documents given or selected[/yellow]")
        raise typer.Exit(1)
    _print_persist_results(automation.persist_current_layout(doc_ids))


@app.command("toggle-panes")
@handle_command_error("toggling panes")
def toggle_panes():
    """Cycle the visible panes, like the editor's toggle command."""
    host = open_host()
    host.execute_command(CMD_TOGGLE_VISIBLE_PANES)
    _show_status(host, LayoutAutomation(host))


@app.command("toggle-editors")
@handle_command_error("toggling editor")
def toggle_editors():
    """Switch between the markdown and the rich text editor."""
    host = open_host()
    host.execute_command(CMD_TOGGLE_EDITORS)
    _show_status(host, LayoutAutomation(host))


@app.command()
@handle_command_error("watching")
def watch():
    """Read commands from stdin, one per line, sharing one session.

    Commands: select ID, persist [IDS...], panes, editors, status, quit.
    The layout remembered for untagged documents lives for the session.
    """
    host = open_host()
    automation = LayoutAutomation(host)
    automation.start()

    for line in sys.stdin:
        words = line.split()
        if not words:
            continue
        command, args = words[0].lower(), words[1:]
        if command in ("quit", "exit"):
            break
        try:
            if command == "select" and args:
                host.select_document(*args)
                _show_status(host, automation)
            elif command == "persist" and not args and not host.get_selected_document_ids():
                console.print("[yellow]No documents given or selected[/yellow]")
            elif command == "persist":
                _print_persist_results(automation.persist_current_layout(args or None))
            elif command == "panes":
                host.execute_command(CMD_TOGGLE_VISIBLE_PANES)
                _show_status(host, automation)
            elif command == "editors":
                host.execute_command(CMD_TOGGLE_EDITORS)
                _show_status(host, automation)
            elif command == "status":
                _show_status(host, automation)
            else:
                console.print(f"[yellow]Unknown command: {line.strip()}[/yellow]")
        except PinlayoutError as e:
            console.print(f"[red]Error: {e}[/red]")
