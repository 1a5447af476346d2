"""Conversion of listed items into the requested output shape."""

import logging
import tempfile
from collections.abc import AsyncIterable, Iterable
from pathlib import Path

from pydantic_core import to_json

from todoist_tasks.errors import ErrorKind, TaskError
from todoist_tasks.models.datatypes import (
    AllItems,
    FetchMode,
    FirstItem,
    Item,
    ListResult,
    StoredItems,
)
from todoist_tasks.protocols import Storage

logger = logging.getLogger(__name__)


async def iterate(items: Iterable[Item]) -> AsyncIterable[Item]:
    """Adapt an in-memory accumulator to the materializer's input."""
    for item in items:
        yield item


async def materialize(
    items: AsyncIterable[Item],
    mode: FetchMode,
    storage: Storage | None = None,
    spill_dir: Path | None = None,
) -> ListResult:
    """Materialize an item stream according to `mode`.

    The stream is always drained, so a failure on a later page aborts the
    result even when only the first item is kept.
    """
    match mode:
        case FetchMode.FIRST_ONLY:
            first: Item | None = None
            async for item in items:
                if first is None:
                    first = item
            if first is None:
                return FirstItem()
            return FirstItem(item=first, count=1)
        case FetchMode.ALL_IN_MEMORY:
            collected = [item async for item in items]
            return AllItems(items=collected, count=len(collected))
        case FetchMode.SPILL_TO_STORAGE:
            if storage is None:
                msg = "A storage backend is required to spill results"
                raise TaskError(msg, kind=ErrorKind.CONFIGURATION)
            return await spill(items, storage, spill_dir)


async def spill(
    items: AsyncIterable[Item],
    storage: Storage,
    spill_dir: Path | None = None,
) -> StoredItems:
    """Write items one record per line to a temporary file, then store it."""
    count = 0
    path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="wb",
            prefix="todoist-",
            suffix=".jsonl",
            dir=spill_dir,
            delete=False,
        ) as sink:
            path = Path(sink.name)
            async for item in items:
                _ = sink.write(to_json(item))
                _ = sink.write(b"\n")
                count += 1

        uri = await storage.put_file(path)
    except OSError as e:
        msg = f"Failed to write spill file: {e}"
        raise TaskError(msg, kind=ErrorKind.STORAGE, source=e) from e
    finally:
        if path is not None:
            path.unlink(missing_ok=True)

    logger.debug("Spilled %d items to %s", count, uri)
    return StoredItems(uri=uri, count=count)
