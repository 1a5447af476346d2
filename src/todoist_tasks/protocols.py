"""Core protocols for the collaborators tasks depend on."""

from pathlib import Path
from typing import TYPE_CHECKING, Protocol, Self, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from todoist_tasks.http import HttpRequest, HttpResponse

Cred_contra = TypeVar("Cred_contra", contravariant=True)
Params_contra = TypeVar("Params_contra", contravariant=True)


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for sending one HTTP request.

    Responses with an error status are returned, not raised: callers must
    check `status_code` themselves.
    """

    async def send(self, request: "HttpRequest") -> "HttpResponse":
        """Send the request and return the status code and body."""
        ...


@runtime_checkable
class Storage(Protocol):
    """Protocol for durable storage of spilled results."""

    async def put_file(self, path: Path) -> str:
        """Store a local file and return a URI it can be retrieved from."""
        ...

    async def get(self, uri: str) -> bytes:
        """Return the content stored under a URI returned by `put_file`."""
        ...


@runtime_checkable
class Provider(Protocol[Cred_contra, Params_contra]):
    """Protocol for collaborator lifecycle management."""

    @classmethod
    async def connect(cls, credentials: Cred_contra, params: Params_contra) -> Self:
        """Establish connection to the external service."""
        ...

    async def disconnect(self) -> None:
        """Release resources and close connections."""
        ...
