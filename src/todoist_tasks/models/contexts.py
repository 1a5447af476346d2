"""Context types for listing operations.

Contexts carry state needed to resume reading from a specific position.
They only track *where* to resume, not *how much* to read (that's in Params).
"""

from pydantic import BaseModel


class PageContext(BaseModel, frozen=True):
    """Context for cursor-paginated listing endpoints."""

    cursor: str | None = None
    """Opaque server cursor for the next page (None on the first page)."""

    page: int = 0
    """Number of pages fetched so far."""

    def advance(self, next_cursor: str | None) -> "PageContext":
        """Return the context for the page after this one."""
        return PageContext(cursor=next_cursor, page=self.page + 1)
