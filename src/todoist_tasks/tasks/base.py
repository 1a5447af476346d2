"""Shared plumbing for Todoist tasks."""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic_core import from_json

from todoist_tasks.errors import ErrorKind, TaskError
from todoist_tasks.http import HttpRequest, HttpResponse, Method, build_request
from todoist_tasks.models.datatypes import JsonValue
from todoist_tasks.run_context import RunContext

type Priority = Annotated[int, Field(ge=1, le=4)]
"""Task priority, from 1 (normal) to 4 (urgent)."""


class TaskPayload(BaseModel):
    """The fields of a task response that tasks echo back."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True, frozen=True)

    id: str
    content: str
    url: str | None = None


class TodoistTask(BaseModel):
    """Base for every task: the API token and the endpoint it talks to.

    Every property may be a literal or a `{{ ... }}` expression, rendered
    against the `RunContext` when the task runs.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    api_token: str
    """Todoist API token, usually `{{ secret('TODOIST_API_TOKEN') }}`."""

    base_url: str | None = None
    """Override of the REST API base URL (defaults to `Settings.base_url`)."""

    def _token(self, ctx: RunContext) -> str:
        return ctx.render_required(self.api_token, "api_token")

    def _base_url(self, ctx: RunContext) -> str:
        return ctx.render_as(self.base_url, str) or ctx.settings.base_url

    def _request(
        self,
        ctx: RunContext,
        method: Method,
        *segments: str,
        json_body: dict[str, JsonValue] | None = None,
    ) -> HttpRequest:
        return build_request(
            self._token(ctx),
            method,
            self._base_url(ctx),
            *segments,
            json_body=json_body,
        )

    async def _send(self, ctx: RunContext, request: HttpRequest, action: str) -> HttpResponse:
        """Send one request, raising on any status >= 400."""
        async with ctx.http_client() as client:
            response = await client.send(request)
        if response.is_error:
            raise TaskError.from_status(action, response.status_code, response.body)
        return response


def parse_task(response: HttpResponse, action: str) -> tuple[TaskPayload, dict[str, Any]]:
    """Parse a single-task response into its echoed fields and the full record."""
    try:
        payload = TaskPayload.model_validate_json(response.body)
    except ValidationError as e:
        msg = f"Failed to {action}, unexpected response ({e}): {response.body}"
        raise TaskError(msg, kind=ErrorKind.PARSE, source=e, body=response.body) from e
    record: dict[str, Any] = from_json(response.body)
    return payload, record


def body_of(**fields: JsonValue) -> dict[str, JsonValue]:
    """Request body holding only the fields that were supplied."""
    return {key: value for key, value in fields.items() if value is not None}
