"""Error types for task operations."""

from enum import StrEnum
from typing import final


class ErrorKind(StrEnum):
    """Classification of task errors."""

    CONFIGURATION = "configuration"
    CONNECTION = "connection"
    STATUS = "status"
    NOT_FOUND = "not_found"
    PARSE = "parse"
    PAGINATION = "pagination"
    STORAGE = "storage"


@final
class TaskError(Exception):
    """Base error for all task operations.

    Status errors carry the HTTP status code and the raw response body so the
    failure can be matched against the API documentation without re-running
    the call.
    """

    __slots__ = ("body", "kind", "message", "source", "status_code")

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.STATUS,
        source: BaseException | None = None,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.source = source
        self.status_code = status_code
        self.body = body

    @classmethod
    def from_status(cls, action: str, status_code: int, body: str) -> "TaskError":
        """Build the error raised for a response with status >= 400."""
        kind = ErrorKind.NOT_FOUND if status_code == 404 else ErrorKind.STATUS
        msg = f"Failed to {action}: {status_code} - {body}"
        return cls(msg, kind=kind, status_code=status_code, body=body)

    def __repr__(self) -> str:
        if self.status_code is not None:
            return f"TaskError({self.message!r}, kind={self.kind!r}, status_code={self.status_code})"
        return f"TaskError({self.message!r}, kind={self.kind!r})"
