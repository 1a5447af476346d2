"""Local filesystem storage."""

import shutil
import uuid
from pathlib import Path
from typing import ClassVar
from urllib.parse import urlparse
from urllib.request import url2pathname

from todoist_tasks.errors import ErrorKind, TaskError


class LocalStorage:
    """Stores spilled files under a root directory and returns `file://` URIs."""

    __slots__: ClassVar[tuple[str]] = ("_root",)

    _root: Path

    def __init__(self, root: Path) -> None:
        self._root = root

    async def put_file(self, path: Path) -> str:
        """Copy a local file under the root directory."""
        target = self._root / f"{uuid.uuid4().hex}{path.suffix}"
        try:
            self._root.mkdir(parents=True, exist_ok=True)
            _ = shutil.copyfile(path, target)
        except OSError as e:
            msg = f"Failed to store '{path}': {e}"
            raise TaskError(msg, kind=ErrorKind.STORAGE, source=e) from e
        return target.resolve().as_uri()

    async def get(self, uri: str) -> bytes:
        """Read back a file stored by `put_file`."""
        parsed = urlparse(uri)
        if parsed.scheme != "file":
            msg = f"Unsupported URI for local storage: {uri}"
            raise TaskError(msg, kind=ErrorKind.STORAGE)
        path = Path(url2pathname(parsed.path))
        try:
            return path.read_bytes()
        except FileNotFoundError as e:
            msg = f"Object '{uri}' not found"
            raise TaskError(msg, kind=ErrorKind.NOT_FOUND, source=e) from e
        except OSError as e:
            msg = f"Failed to read '{uri}': {e}"
            raise TaskError(msg, kind=ErrorKind.STORAGE, source=e) from e
