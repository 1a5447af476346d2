"""Task implementations.

Each task is a frozen model of its declared properties with an async
`run(ctx)` returning its output:
- CreateTask: `POST /tasks`
- GetTask: `GET /tasks/{id}`
- UpdateTask: `POST /tasks/{id}`
- DeleteTask: `DELETE /tasks/{id}`
- CompleteTask: `POST /tasks/{id}/close`
- ListTasks: `GET /tasks` or `GET /tasks/filter`, paginated
"""

from todoist_tasks.tasks.complete_task import CompleteTask
from todoist_tasks.tasks.create_task import CreateTask
from todoist_tasks.tasks.delete_task import DeleteTask
from todoist_tasks.tasks.get_task import GetTask
from todoist_tasks.tasks.list_tasks import ListTasks
from todoist_tasks.tasks.update_task import UpdateTask

__all__ = [
    "CompleteTask",
    "CreateTask",
    "DeleteTask",
    "GetTask",
    "ListTasks",
    "UpdateTask",
]
