"""Custom exception hierarchy for pinlayout.

Exception Hierarchy:
    PinlayoutError (base)
    ├── HostError - calls into the note host failed
    │   ├── HostConnectionError (retryable)
    │   ├── HostCommandError
    │   └── DatabaseError - SQLite store operations
    │       └── DatabaseQueryError
    ├── DocumentNotFoundError
    ├── ConfigurationError - Settings/configuration issues
    └── UnknownLayoutError - no descriptor for a layout kind

Usage:
    from pinlayout.exceptions import HostCommandError

    try:
        host.execute_command(name)
    except HostCommandError as e:
        logger.error(f"Command failed: {e}")
"""

from typing import Any, Optional


class PinlayoutError(Exception):
    """Base exception for all pinlayout errors.

    Attributes:
        message: Human-readable error description
        context: Additional context about the error (e.g., IDs, keys)
        retryable: Whether this error might succeed on retry
    """

    def __init__(
        self,
        message: str,
        *,
        retryable: bool = False,
        **context: Any,
    ) -> None:
        self.message = message
        self.context = context
        self.retryable = retryable
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message

    def __str__(self) -> str:
        return self._format_message()


# =============================================================================
# Host Errors
# =============================================================================


class HostError(PinlayoutError):
    """Base exception for failures reported by the note host."""

    pass


class HostConnectionError(HostError):
    """The host could not be reached - typically retryable."""

    def __init__(
        self,
        message: str = "Host connection failed",
        *,
        host: Optional[str] = None,
        **context: Any,
    ) -> None:
        if host:
            context["host"] = host
        super().__init__(message, retryable=True, **context)


class HostCommandError(HostError):
    """The host rejected or failed to run a UI command."""

    def __init__(
        self,
        message: str = "Host command failed",
        *,
        command: Optional[str] = None,
        **context: Any,
    ) -> None:
        if command:
            context["command"] = command
        super().__init__(message, **context)


# =============================================================================
# Database Errors
# =============================================================================


class DatabaseError(HostError):
    """Base exception for the local SQLite store."""

    pass


class DatabaseQueryError(DatabaseError):
    """A database query failed."""

    def __init__(
        self,
        message: str = "Database query failed",
        *,
        query: Optional[str] = None,
        **context: Any,
    ) -> None:
        if query:
            context["query"] = query[:100] + "..." if len(query) > 100 else query
        super().__init__(message, **context)


class DocumentNotFoundError(PinlayoutError):
    """A document id does not exist in the store."""

    def __init__(
        self,
        message: str = "Document not found",
        *,
        document_id: Optional[str] = None,
        **context: Any,
    ) -> None:
        if document_id is not None:
            context["document_id"] = document_id
        super().__init__(message, **context)


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(PinlayoutError):
    """Configuration or settings error."""

    def __init__(
        self,
        message: str = "Configuration error",
        *,
        setting: Optional[str] = None,
        **context: Any,
    ) -> None:
        if setting:
            context["setting"] = setting
        super().__init__(message, **context)


class UnknownLayoutError(PinlayoutError, KeyError):
    """No descriptor exists for the requested layout kind."""

    def __init__(
        self,
        message: str = "Unknown layout",
        *,
        kind: Optional[str] = None,
        **context: Any,
    ) -> None:
        if kind:
            context["kind"] = kind
        super().__init__(message, **context)
