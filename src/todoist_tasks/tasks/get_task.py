"""Get a single task."""

from typing import Any

from pydantic import BaseModel

from todoist_tasks.run_context import RunContext
from todoist_tasks.tasks.base import TodoistTask, parse_task


class GetTask(TodoistTask):
    """Retrieves a task by ID."""

    task_id: str | int

    class Output(BaseModel, frozen=True):
        task: dict[str, Any]
        """Full task record returned by the API."""

        task_id: str
        content: str

    async def run(self, ctx: RunContext) -> Output:
        task_id = ctx.render_required(self.task_id, "task_id")

        request = self._request(ctx, "GET", "tasks", task_id)
        response = await self._send(ctx, request, "get task")
        task, record = parse_task(response, "get task")

        ctx.logger.info("Retrieved task: %s", task.content)
        return self.Output(task=record, task_id=task.id, content=task.content)
