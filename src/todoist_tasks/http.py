"""Request construction and the httpx-backed HTTP client."""

import logging
from typing import ClassVar, Literal, Self
from urllib.parse import quote, urlencode

import httpx
from pydantic import BaseModel, Field

from todoist_tasks.config import Settings
from todoist_tasks.errors import ErrorKind, TaskError
from todoist_tasks.models.datatypes import JsonValue
from todoist_tasks.models.params import ListQuery

logger = logging.getLogger(__name__)

type Method = Literal["GET", "POST", "DELETE"]


class HttpRequest(BaseModel, frozen=True):
    """A fully built outbound request."""

    method: Method
    url: str
    headers: dict[str, str] = Field(default_factory=dict)
    json_body: dict[str, JsonValue] | None = None
    """JSON body. None sends no body at all."""


class HttpResponse(BaseModel, frozen=True):
    """Status code and raw body of a response."""

    status_code: int
    body: str = ""

    @property
    def is_error(self) -> bool:
        return self.status_code >= 400


def auth_headers(token: str) -> dict[str, str]:
    """Headers carried by every request."""
    return {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
    }


def _join(base_url: str, *segments: str) -> str:
    path = "/".join(quote(s, safe="") for s in segments)
    return f"{base_url.rstrip('/')}/{path}"


def build_request(
    token: str,
    method: Method,
    base_url: str,
    *segments: str,
    json_body: dict[str, JsonValue] | None = None,
) -> HttpRequest:
    """Build a request for a fixed, non-paginated endpoint."""
    return HttpRequest(
        method=method,
        url=_join(base_url, *segments),
        headers=auth_headers(token),
        json_body=json_body,
    )


def build_list_request(
    token: str,
    base_url: str,
    query: ListQuery,
    cursor: str | None = None,
) -> HttpRequest:
    """Build the request for one page of a task listing.

    A filter targets `/tasks/filter`, anything else the plain `/tasks`
    endpoint. Values are percent-encoded, including every reserved character
    of the filter language.
    """
    params: list[tuple[str, str]] = []
    if query.filter is not None:
        url = _join(base_url, "tasks", "filter")
        params.append(("query", query.filter))
    else:
        url = _join(base_url, "tasks")
        if query.project_id is not None:
            params.append(("project_id", query.project_id))

    if query.limit is not None:
        params.append(("limit", str(query.limit)))
    if cursor:
        params.append(("cursor", cursor))

    if params:
        url = f"{url}?{urlencode(params, quote_via=quote, safe='')}"

    return HttpRequest(method="GET", url=url, headers=auth_headers(token))


class HttpxClient:
    """HTTP client over `httpx.AsyncClient`."""

    __slots__: ClassVar[tuple[str]] = ("_client",)

    _client: httpx.AsyncClient

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    @classmethod
    async def connect(cls, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> Self:
        """Create the underlying client."""
        client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.timeout_seconds),
            transport=transport,
            follow_redirects=True,
        )
        return cls(client)

    async def disconnect(self) -> None:
        """Close the underlying client."""
        await self._client.aclose()

    async def send(self, request: HttpRequest) -> HttpResponse:
        """Send the request. Error statuses are returned, not raised."""
        logger.debug("%s %s", request.method, request.url)
        try:
            response = await self._client.request(
                request.method,
                request.url,
                headers=request.headers,
                json=request.json_body,
            )
        except httpx.HTTPError as e:
            msg = f"Failed to send {request.method} {request.url}: {e}"
            raise TaskError(msg, kind=ErrorKind.CONNECTION, source=e) from e

        return HttpResponse(status_code=response.status_code, body=response.text)
