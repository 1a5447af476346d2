"""Models shared by the listing pipeline and the tasks."""

from todoist_tasks.models.contexts import PageContext
from todoist_tasks.models.datatypes import (
    AllItems,
    FetchMode,
    FirstItem,
    Item,
    JsonValue,
    ListResult,
    Page,
    StoredItems,
)
from todoist_tasks.models.params import ListQuery

__all__ = [
    # Contexts (runtime state)
    "PageContext",
    # Params (configuration)
    "ListQuery",
    # Data types
    "AllItems",
    "FetchMode",
    "FirstItem",
    "Item",
    "JsonValue",
    "ListResult",
    "Page",
    "StoredItems",
]
