"""Update an existing task."""

from typing import Any

from pydantic import BaseModel

from todoist_tasks.errors import ErrorKind, TaskError
from todoist_tasks.run_context import RunContext
from todoist_tasks.tasks.base import Priority, TodoistTask, body_of, parse_task


class UpdateTask(TodoistTask):
    """Updates a task. Only the properties that are set are sent."""

    task_id: str | int

    content: str | None = None
    description: str | None = None
    priority: int | str | None = None
    due_string: str | None = None
    labels: list[str] | str | None = None

    class Output(BaseModel, frozen=True):
        task_id: str
        content: str
        url: str | None
        response: dict[str, Any]
        """Full task record returned by the API."""

    async def run(self, ctx: RunContext) -> Output:
        task_id = ctx.render_required(self.task_id, "task_id")
        body = body_of(
            content=ctx.render_as(self.content, str),
            description=ctx.render_as(self.description, str),
            priority=ctx.render_as(self.priority, Priority),
            due_string=ctx.render_as(self.due_string, str),
            labels=ctx.render_as(self.labels, list[str]),
        )
        if not body:
            msg = "At least one field must be provided to update"
            raise TaskError(msg, kind=ErrorKind.CONFIGURATION)

        request = self._request(ctx, "POST", "tasks", task_id, json_body=body)
        response = await self._send(ctx, request, "update task")
        task, record = parse_task(response, "update task")

        ctx.logger.info("Task %s updated successfully", task_id)
        return self.Output(task_id=task.id, content=task.content, url=task.url, response=record)
