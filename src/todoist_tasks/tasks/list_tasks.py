"""List tasks with cursor pagination."""

from typing import Self

from pydantic import ValidationError, model_validator

from todoist_tasks.errors import ErrorKind, TaskError
from todoist_tasks.materialize import materialize
from todoist_tasks.models.datatypes import FetchMode, ListResult
from todoist_tasks.models.params import ListQuery
from todoist_tasks.pagination import Paginator
from todoist_tasks.run_context import RunContext
from todoist_tasks.tasks.base import TodoistTask


class ListTasks(TodoistTask):
    """Lists active tasks, optionally scoped to a project or a filter query.

    Without `limit` every page is fetched; with `limit` only the first page
    of that size is returned. `fetch_type` selects whether the first item,
    every item, or a storage URI of every item is returned.

    Example:
        ListTasks(
            api_token="{{ secret('TODOIST_API_TOKEN') }}",
            filter="today | overdue",
            fetch_type=FetchMode.SPILL_TO_STORAGE,
        )
    """

    project_id: str | None = None
    """Only list tasks of this project. Exclusive with `filter`."""

    filter: str | None = None
    """Filter query, e.g. 'today', 'overdue', 'p1'. Exclusive with `project_id`."""

    limit: int | str | None = None
    """Page size. When set, a single page is fetched."""

    fetch_type: FetchMode = FetchMode.ALL_IN_MEMORY

    @model_validator(mode="after")
    def _check_exclusive(self) -> Self:
        # Templated values are checked once rendered, in `_query`.
        if _literal(self.project_id) and _literal(self.filter):
            msg = "'project_id' and 'filter' are mutually exclusive, set only one of them"
            raise TaskError(msg, kind=ErrorKind.CONFIGURATION)
        return self

    def _query(self, ctx: RunContext) -> ListQuery:
        try:
            return ListQuery(
                project_id=ctx.render_as(self.project_id, str),
                filter=ctx.render_as(self.filter, str),
                limit=ctx.render_as(self.limit, int),
            )
        except ValidationError as e:
            msg = f"Invalid listing parameters: {e}"
            raise TaskError(msg, kind=ErrorKind.CONFIGURATION, source=e) from e

    async def run(self, ctx: RunContext) -> ListResult:
        token = self._token(ctx)
        query = self._query(ctx)
        if self.fetch_type is FetchMode.SPILL_TO_STORAGE and ctx.storage is None:
            msg = f"fetch_type {self.fetch_type} requires a storage backend on the run context"
            raise TaskError(msg, kind=ErrorKind.CONFIGURATION)

        async with ctx.http_client() as client:
            paginator = Paginator(
                client,
                token,
                self._base_url(ctx),
                query,
                max_pages=ctx.settings.max_pages,
            )
            result = await materialize(
                paginator.items(),
                self.fetch_type,
                storage=ctx.storage,
                spill_dir=ctx.settings.spill_dir,
            )

        ctx.logger.info("Retrieved %d tasks", result.count)
        return result


def _literal(value: str | None) -> bool:
    """Whether `value` is a non-blank property without expressions."""
    return value is not None and bool(value.strip()) and "{{" not in value
