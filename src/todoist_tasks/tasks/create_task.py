"""Create a new task."""

from typing import Any

from pydantic import BaseModel

from todoist_tasks.run_context import RunContext
from todoist_tasks.tasks.base import Priority, TodoistTask, body_of, parse_task


class CreateTask(TodoistTask):
    """Creates a task with the given content and optional attributes.

    Example:
        CreateTask(
            api_token="{{ secret('TODOIST_API_TOKEN') }}",
            content="Deploy to production",
            description="Deploy version 2.0 after testing",
            priority=4,
        )
    """

    content: str
    """Content (title) of the task."""

    description: str | None = None
    """Longer description of the task."""

    priority: int | str | None = None
    """Priority from 1 (normal) to 4 (urgent)."""

    project_id: str | None = None
    """Project to add the task to (the inbox when unset)."""

    due_string: str | None = None
    """Human-defined due date, e.g. 'tomorrow', 'next Monday', '2025-12-31'."""

    labels: list[str] | str | None = None
    """Label names to attach."""

    class Output(BaseModel, frozen=True):
        task_id: str
        content: str
        url: str | None
        response: dict[str, Any]
        """Full task record returned by the API."""

    async def run(self, ctx: RunContext) -> Output:
        body = body_of(
            content=ctx.render_required(self.content, "content"),
            description=ctx.render_as(self.description, str),
            priority=ctx.render_as(self.priority, Priority),
            project_id=ctx.render_as(self.project_id, str),
            due_string=ctx.render_as(self.due_string, str),
            labels=ctx.render_as(self.labels, list[str]),
        )

        request = self._request(ctx, "POST", "tasks", json_body=body)
        response = await self._send(ctx, request, "create task")
        task, record = parse_task(response, "create task")

        ctx.logger.info("Task %s created successfully", task.id)
        return self.Output(task_id=task.id, content=task.content, url=task.url, response=record)
