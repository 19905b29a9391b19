"""Helpers for paginated host queries."""

import logging
from typing import Any, Callable

from .protocols import Page

logger = logging.getLogger(__name__)


def fetch_all(fetch: Callable[..., Page], *args: Any, **query: Any) -> list:
    """Collect the items of every page returned by a paginated host call.

    Args:
        fetch: Host method accepting a ``page`` keyword and returning a Page
        *args: Positional arguments forwarded to every call
        **query: Keyword arguments forwarded to every call

    Returns:
        Items of all pages, in page order
    """
    page = 1
    response = fetch(*args, page=page, **query)
    items = list(response.get("items") or [])
    while response.get("has_more"):
        page += 1
        response = fetch(*args, page=page, **query)
        items.extend(response.get("items") or [])
    if page > 1:
        logger.debug(f"Fetched {len(items)} items over {page} pages")
    return items
