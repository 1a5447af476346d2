"""Normalization of listing responses.

The listing endpoints do not agree on a payload shape: current endpoints wrap
items in an object next to a `next_cursor`, legacy ones return a bare array.
"""

from typing import Final

from pydantic import TypeAdapter, ValidationError
from pydantic_core import from_json

from todoist_tasks.errors import ErrorKind, TaskError
from todoist_tasks.models.datatypes import Item, Page

ENVELOPE_KEYS: Final = ("results", "items", "data")
"""Keys probed for the item array, in priority order."""

_items_adapter: TypeAdapter[list[Item]] = TypeAdapter(list[Item])


def _parse_error(body: str, reason: object) -> TaskError:
    msg = f"Failed to parse listing response ({reason}): {body}"
    return TaskError(msg, kind=ErrorKind.PARSE, body=body)


def _cursor(payload: dict[str, object]) -> str | None:
    # Absent, null and "" all mean there are no more pages.
    value = payload.get("next_cursor")
    if value is None or value == "":
        return None
    return str(value)


def normalize_page(body: str) -> Page:
    """Extract the items and the continuation cursor from a listing body."""
    try:
        payload: object = from_json(body)
    except ValueError as e:
        raise _parse_error(body, e) from e

    if isinstance(payload, dict):
        next_cursor = _cursor(payload)
        for key in ENVELOPE_KEYS:
            candidate = payload.get(key)
            if isinstance(candidate, list):
                return Page(items=_validate_items(body, candidate), next_cursor=next_cursor)
        # No array under any known key: an empty page, not an error.
        return Page(items=[], next_cursor=next_cursor)

    if isinstance(payload, list):
        return Page(items=_validate_items(body, payload))

    raise _parse_error(body, f"expected a JSON object or array, got {type(payload).__name__}")


def _validate_items(body: str, raw: list[object]) -> list[Item]:
    try:
        return _items_adapter.validate_python(raw)
    except ValidationError as e:
        raise _parse_error(body, e) from e
