"""Parameter types for listing operations.

Params define *what* is listed (scope, page size), while contexts carry
runtime state (cursors).
"""

from typing import Self

from pydantic import BaseModel, PositiveInt, field_validator, model_validator

from todoist_tasks.errors import ErrorKind, TaskError


class ListQuery(BaseModel, frozen=True):
    """Immutable parameters for one listing request."""

    project_id: str | None = None
    """Restrict the listing to a single project."""

    filter: str | None = None
    """Free-text filter query (e.g. 'today | overdue', 'p1 & #Work')."""

    limit: PositiveInt | None = None
    """Items per page. When set, exactly one page is fetched."""

    @field_validator("project_id", "filter", mode="before")
    @classmethod
    def _blank_to_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def _check_exclusive(self) -> Self:
        if self.project_id is not None and self.filter is not None:
            msg = "'project_id' and 'filter' are mutually exclusive, set only one of them"
            raise TaskError(msg, kind=ErrorKind.CONFIGURATION)
        return self

    @property
    def fetch_all(self) -> bool:
        """Whether to page until the server reports no more data."""
        return self.limit is None
