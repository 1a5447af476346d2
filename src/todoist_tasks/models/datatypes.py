"""Data types for listing results.

These types represent the data that flows from the API to the engine:
- `Item` for a single to-do item, kept as the API returned it
- `Page` for one listing response
- `FirstItem`, `AllItems`, `StoredItems` for the three output shapes
"""

from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, Field, NonNegativeInt

# JSON-compatible value type
type JsonValue = str | int | float | bool | None | list["JsonValue"] | dict[str, "JsonValue"]

# A to-do item as returned by the API. Only `id` and `content` are relied upon.
type Item = dict[str, JsonValue]


class Page(BaseModel, frozen=True):
    """One listing response, in server order."""

    items: list[Item] = Field(default_factory=list)
    """Items on this page."""

    next_cursor: str | None = None
    """Cursor for the next page. None when there are no more pages."""


class FetchMode(StrEnum):
    """How listing results are handed back to the engine."""

    FIRST_ONLY = "FIRST_ONLY"
    """Only the first item."""

    ALL_IN_MEMORY = "ALL_IN_MEMORY"
    """Every item, inline."""

    SPILL_TO_STORAGE = "SPILL_TO_STORAGE"
    """Every item, written to storage as JSON Lines."""


class FirstItem(BaseModel, frozen=True):
    """The first listed item, if any."""

    kind: Literal["first"] = "first"

    item: Item | None = None
    """First item in server order."""

    count: Literal[0, 1] = 0
    """1 when an item was found, else 0."""


class AllItems(BaseModel, frozen=True):
    """All listed items, inline."""

    kind: Literal["all"] = "all"

    items: list[Item] = Field(default_factory=list)
    """Items in server and page order."""

    count: NonNegativeInt = 0
    """Number of items."""


class StoredItems(BaseModel, frozen=True):
    """All listed items, spilled to storage."""

    kind: Literal["stored"] = "stored"

    uri: str
    """Storage URI of the JSON Lines file."""

    count: NonNegativeInt = 0
    """Number of records written."""


type ListResult = Annotated[FirstItem | AllItems | StoredItems, Field(discriminator="kind")]
