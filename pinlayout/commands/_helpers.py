"""Shared command helpers.

This module provides:
- open_host(): The SQLite host for the configured database, schema ensured
- @handle_command_error: Consistent error handling decorator
"""

from functools import wraps
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar

import typer

from pinlayout.config.settings import get_db_path
from pinlayout.exceptions import DocumentNotFoundError
from pinlayout.host.sqlite_host import SQLiteHost
from pinlayout.utils.output import console

F = TypeVar("F", bound=Callable[..., Any])

# Set by the --db global option
_db_path: Optional[Path] = None


def set_db_path(path: Optional[Path]) -> None:
    global _db_path
    _db_path = path


def open_host() -> SQLiteHost:
    """Open the note store and make sure its schema exists."""
    host = SQLiteHost(_db_path or get_db_path())
    host.ensure_schema()
    return host


def handle_command_error(operation: str, *, exit_code: int = 1) -> Callable[[F], F]:
    """Decorator for consistent error handling in CLI commands.

    Catches exceptions and displays a formatted error message before exiting.

    Example:
        @app.command()
        @handle_command_error("persisting layout")
        def persist(doc_ids: list[str]):
            ...
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except typer.Exit:
                # Let explicit exits pass through
                raise
            except DocumentNotFoundError as e:
                document_id = e.context.get("document_id")
                console.print(f"[red]Error: Document '{document_id}' not found[/red]")
                raise typer.Exit(exit_code) from e
            except Exception as e:
                console.print(f"[red]Error {operation}: {e}[/red]")
                raise typer.Exit(exit_code) from e

        return wrapper  # type: ignore[return-value]

    return decorator
