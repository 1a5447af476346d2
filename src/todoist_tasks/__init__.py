"""Todoist tasks for workflow engines."""

from todoist_tasks.errors import ErrorKind, TaskError
from todoist_tasks.models import FetchMode, ListQuery
from todoist_tasks.protocols import HttpClient, Provider, Storage
from todoist_tasks.run_context import RunContext
from todoist_tasks.tasks import (
    CompleteTask,
    CreateTask,
    DeleteTask,
    GetTask,
    ListTasks,
    UpdateTask,
)

__all__ = [
    "CompleteTask",
    "CreateTask",
    "DeleteTask",
    "ErrorKind",
    "FetchMode",
    "GetTask",
    "HttpClient",
    "ListQuery",
    "ListTasks",
    "Provider",
    "RunContext",
    "Storage",
    "TaskError",
    "UpdateTask",
]
