"""Shared fixtures: an in-memory Todoist API behind httpx.MockTransport."""

import json
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import httpx
import pytest

from todoist_tasks.config import Settings
from todoist_tasks.http import HttpxClient
from todoist_tasks.run_context import RunContext
from todoist_tasks.storage import LocalStorage

TOKEN = "test-token-0123456789"
BASE_URL = "https://api.todoist.test/api/v1"


def json_response(status_code: int, payload: Any) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(payload).encode())


class FakeTodoist:
    """Minimal stateful stand-in for the Todoist task endpoints."""

    def __init__(self, first_id: int = 123) -> None:
        self.tasks: dict[str, dict[str, Any]] = {}
        self.requests: list[httpx.Request] = []
        self._next_id = first_id

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.headers.get("Authorization") != f"Bearer {TOKEN}":
            return httpx.Response(401, text="Unauthorized")

        parts = request.url.path.removeprefix("/api/v1/").split("/")
        match (request.method, parts):
            case ("POST", ["tasks"]):
                return self._create(json.loads(request.content))
            case ("GET", ["tasks"]):
                return json_response(200, {"results": list(self.tasks.values()), "next_cursor": None})
            case ("GET", ["tasks", task_id]) if task_id in self.tasks:
                return json_response(200, self.tasks[task_id])
            case ("POST", ["tasks", task_id]) if task_id in self.tasks:
                self.tasks[task_id].update(json.loads(request.content))
                return json_response(200, self.tasks[task_id])
            case ("POST", ["tasks", task_id, "close"]) if task_id in self.tasks:
                self.tasks[task_id]["is_completed"] = True
                return httpx.Response(204)
            case ("DELETE", ["tasks", task_id]) if task_id in self.tasks:
                del self.tasks[task_id]
                return httpx.Response(204)
            case _:
                return httpx.Response(404, text="Task not found")

    def _create(self, body: dict[str, Any]) -> httpx.Response:
        task_id = str(self._next_id)
        self._next_id += 1
        task = {
            "id": task_id,
            "content": body["content"],
            "description": body.get("description", ""),
            "priority": body.get("priority", 1),
            "project_id": body.get("project_id", "inbox"),
            "labels": body.get("labels", []),
            "url": f"https://app.todoist.com/app/task/{task_id}",
        }
        self.tasks[task_id] = task
        return json_response(200, task)


class PagedApi:
    """Serves listing bodies keyed by the `cursor` query parameter."""

    def __init__(self, pages: Mapping[str | None, Any], status_code: int = 200) -> None:
        self.pages = pages
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        cursor = request.url.params.get("cursor")
        if cursor not in self.pages:
            return httpx.Response(404, text=f"unknown cursor {cursor}")
        body = self.pages[cursor]
        if isinstance(body, httpx.Response):
            return body
        if isinstance(body, str):
            return httpx.Response(self.status_code, text=body)
        return json_response(self.status_code, body)


def make_context(
    handler: Callable[[httpx.Request], httpx.Response],
    tmp_path: Path | None = None,
    **settings: Any,
) -> RunContext:
    client = HttpxClient(httpx.AsyncClient(transport=httpx.MockTransport(handler)))
    return RunContext(
        secrets={"TODOIST_API_TOKEN": TOKEN},
        settings=Settings(base_url=BASE_URL, **settings),
        http=client,
        storage=LocalStorage(tmp_path / "storage") if tmp_path is not None else None,
    )


@pytest.fixture
def fake_api() -> FakeTodoist:
    return FakeTodoist()


@pytest.fixture
def ctx(fake_api: FakeTodoist, tmp_path: Path) -> RunContext:
    return make_context(fake_api, tmp_path)


@pytest.fixture
def token_property() -> str:
    return "{{ secret('TODOIST_API_TOKEN') }}"
