"""Document commands for the local note store.

    pinlayout doc add TITLE --tag layout:split
    pinlayout doc list
    pinlayout doc tags ID
"""

from typing import Optional

import typer
from rich.table import Table

from pinlayout.host.pagination import fetch_all
from pinlayout.utils.output import console, print_json

from ._helpers import handle_command_error, open_host

app = typer.Typer(help="Manage documents in the local note store")


@app.command()
@handle_command_error("adding document")
def add(
    title: str = typer.Argument(..., help="Document title"),
    content: str = typer.Option("", "--content", "-c", help="Document body"),
    tags: Optional[list[str]] = typer.Option(None, "--tag", "-t", help="Tag to attach (repeatable)"),
):
    """Add a document, optionally tagged."""
    host = open_host()
    doc_id = host.add_document(title, content, tags or [])
    console.print(f"[green]Saved document #{doc_id}:[/green] {title}")


@app.command("list")
@handle_command_error("listing documents")
def list_cmd(
    limit: int = typer.Option(50, "--limit", "-n", help="Maximum results to return"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """List documents, newest first."""
    host = open_host()
    documents = host.list_documents(limit)
    selected = set(host.get_selected_document_ids())

    if json_output:
        print_json(documents)
        return

    if not documents:
        console.print("[yellow]No documents found[/yellow]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("ID", justify="right")
    table.add_column("Title")
    table.add_column("Tags", style="dim")
    for doc in documents:
        tags = [t["title"] for t in fetch_all(host.get_tags_of, doc["id"])]
        marker = "[bold]*[/bold] " if doc["id"] in selected else ""
        table.add_row(doc["id"], f"{marker}{doc['title']}", ", ".join(tags))
    console.print(table)


@app.command()
@handle_command_error("reading tags")
def tags(doc_id: str = typer.Argument(..., help="Document ID")):
    """Show the tags of a document."""
    host = open_host()
    doc = host.get_document(doc_id)
    if not doc:
        console.print(f"[red]Error: Document '{doc_id}' not found[/red]")
        raise typer.Exit(1)

    names = [t["title"] for t in fetch_all(host.get_tags_of, doc_id)]
    if names:
        console.print(f"[bold]Tags for #{doc_id}: {doc['title']}[/bold]")
        console.print(f"[cyan]{', '.join(names)}[/cyan]")
    else:
        console.print(f"[yellow]No tags for #{doc_id}: {doc['title']}[/yellow]")
