"""Delete a task."""

from todoist_tasks.run_context import RunContext
from todoist_tasks.tasks.base import TodoistTask


class DeleteTask(TodoistTask):
    """Permanently deletes a task."""

    task_id: str | int

    async def run(self, ctx: RunContext) -> None:
        task_id = ctx.render_required(self.task_id, "task_id")

        request = self._request(ctx, "DELETE", "tasks", task_id)
        _ = await self._send(ctx, request, "delete task")

        ctx.logger.info("Task %s deleted successfully", task_id)
