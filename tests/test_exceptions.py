"""Tests for the pinlayout exception hierarchy."""

import pytest

from pinlayout.exceptions import (
    ConfigurationError,
    DatabaseQueryError,
    DocumentNotFoundError,
    HostCommandError,
    HostConnectionError,
    HostError,
    PinlayoutError,
    UnknownLayoutError,
)


class TestPinlayoutError:
    def test_message_with_context(self):
        error = HostCommandError("Unknown command", command="explode")
        assert str(error) == "Unknown command (command='explode')"
        assert error.context == {"command": "explode"}
        assert not error.retryable

    def test_connection_errors_are_retryable(self):
        assert HostConnectionError(host="localhost").retryable

    def test_database_errors_are_host_errors(self):
        assert isinstance(DatabaseQueryError(), HostError)

    def test_long_queries_are_truncated(self):
        error = DatabaseQueryError(query="SELECT " + "x" * 200)
        assert error.context["query"].endswith("...")
        assert len(error.context["query"]) == 103

    @pytest.mark.parametrize(
        "error",
        [ConfigurationError(setting="defaultLayout"), DocumentNotFoundError(document_id="3")],
    )
    def test_all_derive_from_base(self, error):
        assert isinstance(error, PinlayoutError)

    def test_unknown_layout_str_is_not_quoted(self):
        error = UnknownLayoutError(kind="PREVIOUS")
        assert isinstance(error, KeyError)
        assert str(error) == "Unknown layout (kind='PREVIOUS')"
