"""Complete a task."""

from pydantic import BaseModel

from todoist_tasks.run_context import RunContext
from todoist_tasks.tasks.base import TodoistTask


class CompleteTask(TodoistTask):
    """Marks a task as completed."""

    task_id: str | int

    class Output(BaseModel, frozen=True):
        task_id: str
        success: bool

    async def run(self, ctx: RunContext) -> Output:
        task_id = ctx.render_required(self.task_id, "task_id")

        request = self._request(ctx, "POST", "tasks", task_id, "close")
        _ = await self._send(ctx, request, "complete task")

        ctx.logger.info("Task %s completed successfully", task_id)
        return self.Output(task_id=task_id, success=True)
