"""Cursor pagination over the task listing endpoints."""

import logging
from collections.abc import AsyncIterator

from todoist_tasks.errors import ErrorKind, TaskError
from todoist_tasks.http import build_list_request
from todoist_tasks.models.contexts import PageContext
from todoist_tasks.models.datatypes import Item, Page
from todoist_tasks.models.params import ListQuery
from todoist_tasks.normalize import normalize_page
from todoist_tasks.protocols import HttpClient

logger = logging.getLogger(__name__)


class Paginator:
    """Drives repeated listing calls for one invocation.

    Requests are issued one at a time. Without an explicit limit the driver
    follows `next_cursor` until the server stops returning one; with a limit
    exactly one page is fetched.
    """

    __slots__ = ("_base_url", "_client", "_max_pages", "_query", "_token")

    def __init__(
        self,
        client: HttpClient,
        token: str,
        base_url: str,
        query: ListQuery,
        max_pages: int = 10_000,
    ) -> None:
        self._client = client
        self._token = token
        self._base_url = base_url
        self._query = query
        self._max_pages = max_pages

    async def read(self, ctx: PageContext | None = None) -> AsyncIterator[tuple[Page, PageContext]]:
        """Yield (page, context) tuples in fetch order.

        Each yielded context holds the cursor of the following page. Any
        failure aborts the whole listing; pages already yielded must be
        discarded by the caller.
        """
        ctx = ctx or PageContext()
        seen: set[str] = set()

        while True:
            if ctx.page >= self._max_pages:
                msg = f"Listing aborted after {ctx.page} pages, the server keeps returning a cursor"
                raise TaskError(msg, kind=ErrorKind.PAGINATION)

            request = build_list_request(self._token, self._base_url, self._query, ctx.cursor)
            response = await self._client.send(request)
            if response.is_error:
                raise TaskError.from_status("list tasks", response.status_code, response.body)

            page = normalize_page(response.body)
            ctx = ctx.advance(page.next_cursor)
            logger.debug("Fetched page %d with %d items", ctx.page, len(page.items))
            yield (page, ctx)

            if page.next_cursor is None or not self._query.fetch_all:
                return
            if page.next_cursor in seen:
                msg = f"Listing aborted, the server repeated cursor {page.next_cursor!r}"
                raise TaskError(msg, kind=ErrorKind.PAGINATION)
            seen.add(page.next_cursor)

    async def items(self) -> AsyncIterator[Item]:
        """Yield every item across pages, in server and page order."""
        async for page, _ in self.read():
            for item in page.items:
                yield item

    async def collect(self) -> list[Item]:
        """Accumulate every item of the listing."""
        return [item async for item in self.items()]
