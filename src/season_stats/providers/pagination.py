"""
Cursor pagination for BallDontLie list endpoints.

Every list endpoint answers ``{"data": [...], "meta": {"next_cursor": N}}``;
the last page has no ``next_cursor``.
"""

import logging
from typing import Any, AsyncIterator, Awaitable, Callable

from ..core.http import InvalidResponseError

logger = logging.getLogger(__name__)

PageFetcher = Callable[[dict[str, Any]], Awaitable[dict[str, Any]]]


class CursorPager:
    """
    Lazy, restartable iteration over every record of a paginated endpoint.

    Each ``async for`` starts again from the first page, so one pager can be
    consumed more than once:

        pager = CursorPager(fetch_page, {"per_page": 100})
        async for record in pager:
            ...
        records = await pager.collect()
    """

    def __init__(
        self,
        fetch_page: PageFetcher,
        params: dict[str, Any] | None = None,
        *,
        max_pages: int | None = None,
    ):
        self._fetch_page = fetch_page
        self._params = dict(params or {})
        self._max_pages = max_pages

    def __aiter__(self) -> AsyncIterator[dict[str, Any]]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[dict[str, Any]]:
        params = dict(self._params)
        seen_cursors: set[Any] = set()
        pages = 0

        while True:
            response = await self._fetch_page(dict(params))
            pages += 1
            records = response.get("data") or []
            meta = response.get("meta") or {}
            if not isinstance(records, list) or not isinstance(meta, dict):
                raise InvalidResponseError("Page is missing a data list or meta object")
            for record in records:
                yield record

            next_cursor = meta.get("next_cursor")
            if not next_cursor:
                break
            if next_cursor in seen_cursors:
                logger.warning("Cursor %s repeated, stopping pagination", next_cursor)
                break
            if self._max_pages is not None and pages >= self._max_pages:
                logger.debug("Stopping after %d pages", pages)
                break
            seen_cursors.add(next_cursor)
            params["cursor"] = next_cursor

    async def collect(self) -> list[dict[str, Any]]:
        """Fetch every page and return all records as a list."""
        return [record async for record in self]
