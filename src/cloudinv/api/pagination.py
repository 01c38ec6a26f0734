"""ARM pagination helper."""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from .exceptions import DecodeError

logger = logging.getLogger(__name__)

GetJson = Callable[[str, dict[str, str] | None], Awaitable[Any]]


async def drain_pages(
    resource: str,
    url: str,
    get_json: GetJson,
    params: dict[str, str] | None = None,
) -> list[Any]:
    """Fetch all pages from an ARM list endpoint and return the merged values.

    Args:
        resource: Resource kind, used in error messages
        url: First page URL
        get_json: Coroutine fetching a URL (with optional params) as JSON
        params: Query parameters for the first page only; ``nextLink`` URLs
            already carry theirs

    Returns:
        Items of every page, in page order

    Raises:
        DecodeError: If a page is not an ARM list envelope
    """
    items: list[Any] = []
    next_url: str | None = url
    page_params = params

    while next_url:
        data = await get_json(next_url, page_params)
        if not isinstance(data, dict) or not isinstance(data.get("value"), list):
            raise DecodeError(resource, "expected an object with a 'value' list")
        items.extend(data["value"])
        next_url = data.get("nextLink")
        page_params = None
        if next_url:
            logger.debug("Following nextLink for %s", resource)

    return items
