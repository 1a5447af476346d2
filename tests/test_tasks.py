"""Tests for the single-call tasks and the create/get/update/delete flow."""

import json

import pytest

from todoist_tasks import (
    CompleteTask,
    CreateTask,
    DeleteTask,
    GetTask,
    RunContext,
    TaskError,
    UpdateTask,
)
from todoist_tasks.errors import ErrorKind

from .conftest import BASE_URL, FakeTodoist


class TestCreateTask:
    @pytest.mark.asyncio
    async def test_sends_only_supplied_fields(self, ctx: RunContext, fake_api: FakeTodoist, token_property):
        task = CreateTask(api_token=token_property, content="Buy milk", priority=2)

        output = await task.run(ctx)

        request = fake_api.requests[0]
        assert request.method == "POST"
        assert str(request.url) == f"{BASE_URL}/tasks"
        assert json.loads(request.content) == {"content": "Buy milk", "priority": 2}
        assert output.task_id == "123"
        assert output.content == "Buy milk"
        assert output.url == "https://app.todoist.com/app/task/123"
        assert output.response["priority"] == 2

    @pytest.mark.asyncio
    async def test_all_fields(self, ctx: RunContext, fake_api: FakeTodoist, token_property):
        ctx.variables = {"inputs": {"labels": ["home"]}}
        task = CreateTask(
            api_token=token_property,
            content="Deploy to production",
            description="Deploy version 2.0 after testing",
            priority="4",
            project_id="2203306141",
            due_string="tomorrow",
            labels="{{ inputs.labels }}",
        )

        _ = await task.run(ctx)

        assert json.loads(fake_api.requests[0].content) == {
            "content": "Deploy to production",
            "description": "Deploy version 2.0 after testing",
            "priority": 4,
            "project_id": "2203306141",
            "due_string": "tomorrow",
            "labels": ["home"],
        }

    @pytest.mark.asyncio
    async def test_headers(self, ctx: RunContext, fake_api: FakeTodoist, token_property):
        _ = await CreateTask(api_token=token_property, content="x").run(ctx)

        headers = fake_api.requests[0].headers
        assert headers["Authorization"] == "Bearer test-token-0123456789"
        assert headers["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("priority", [0, 5, "urgent"])
    async def test_invalid_priority_sends_nothing(self, ctx: RunContext, fake_api: FakeTodoist, token_property, priority):
        with pytest.raises(TaskError) as exc_info:
            _ = await CreateTask(api_token=token_property, content="x", priority=priority).run(ctx)

        assert exc_info.value.kind is ErrorKind.CONFIGURATION
        assert fake_api.requests == []

    @pytest.mark.asyncio
    async def test_blank_content_sends_nothing(self, ctx: RunContext, fake_api: FakeTodoist, token_property):
        with pytest.raises(TaskError) as exc_info:
            _ = await CreateTask(api_token=token_property, content=" ").run(ctx)

        assert exc_info.value.kind is ErrorKind.CONFIGURATION
        assert fake_api.requests == []

    @pytest.mark.asyncio
    async def test_bad_token_surfaces_status(self, ctx: RunContext):
        with pytest.raises(TaskError) as exc_info:
            _ = await CreateTask(api_token="wrong", content="x").run(ctx)

        assert exc_info.value.status_code == 401
        assert "Unauthorized" in str(exc_info.value)


class TestUpdateTask:
    @pytest.mark.asyncio
    async def test_requires_a_field(self, ctx: RunContext, fake_api: FakeTodoist, token_property):
        with pytest.raises(TaskError) as exc_info:
            _ = await UpdateTask(api_token=token_property, task_id="123").run(ctx)

        assert exc_info.value.kind is ErrorKind.CONFIGURATION
        assert fake_api.requests == []

    @pytest.mark.asyncio
    async def test_posts_to_task_url(self, ctx: RunContext, fake_api: FakeTodoist, token_property):
        created = await CreateTask(api_token=token_property, content="Buy milk").run(ctx)

        _ = await UpdateTask(api_token=token_property, task_id=created.task_id, due_string="today").run(ctx)

        request = fake_api.requests[-1]
        assert request.method == "POST"
        assert str(request.url) == f"{BASE_URL}/tasks/123"
        assert json.loads(request.content) == {"due_string": "today"}


class TestCompleteTask:
    @pytest.mark.asyncio
    async def test_closes_with_empty_body(self, ctx: RunContext, fake_api: FakeTodoist, token_property):
        fake_api.tasks["42"] = {"id": "42", "content": "Pay rent"}

        output = await CompleteTask(api_token=token_property, task_id=42).run(ctx)

        request = fake_api.requests[0]
        assert request.method == "POST"
        assert str(request.url) == f"{BASE_URL}/tasks/42/close"
        assert request.content == b""
        assert output == CompleteTask.Output(task_id="42", success=True)
        assert fake_api.tasks["42"]["is_completed"] is True


class TestDeleteTask:
    @pytest.mark.asyncio
    async def test_deletes(self, ctx: RunContext, fake_api: FakeTodoist, token_property):
        fake_api.tasks["42"] = {"id": "42", "content": "Pay rent"}

        output = await DeleteTask(api_token=token_property, task_id="42").run(ctx)

        assert output is None
        assert fake_api.requests[0].method == "DELETE"
        assert str(fake_api.requests[0].url) == f"{BASE_URL}/tasks/42"
        assert "42" not in fake_api.tasks


class TestGetTask:
    @pytest.mark.asyncio
    async def test_numeric_ids_are_echoed_as_strings(self, ctx: RunContext, fake_api: FakeTodoist, token_property):
        fake_api.tasks["42"] = {"id": 42, "content": "Pay rent", "priority": 3}

        output = await GetTask(api_token=token_property, task_id="42").run(ctx)

        assert output.task_id == "42"
        assert output.content == "Pay rent"
        assert output.task == {"id": 42, "content": "Pay rent", "priority": 3}

    @pytest.mark.asyncio
    async def test_unexpected_body_is_a_parse_error(self, ctx: RunContext, fake_api: FakeTodoist, token_property):
        fake_api.tasks["42"] = {"title": "no content field"}

        with pytest.raises(TaskError) as exc_info:
            _ = await GetTask(api_token=token_property, task_id="42").run(ctx)

        assert exc_info.value.kind is ErrorKind.PARSE
        assert "no content field" in str(exc_info.value)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("task_type", "extra"),
    [
        (GetTask, {}),
        (UpdateTask, {"priority": 4}),
        (DeleteTask, {}),
        (CompleteTask, {}),
    ],
)
async def test_not_found_surfaces_status_and_body(ctx: RunContext, token_property, task_type, extra):
    task = task_type(api_token=token_property, task_id="999", **extra)

    with pytest.raises(TaskError) as exc_info:
        _ = await task.run(ctx)

    error = exc_info.value
    assert error.kind is ErrorKind.NOT_FOUND
    assert error.status_code == 404
    assert error.body == "Task not found"
    assert "404" in str(error)
    assert "Task not found" in str(error)


@pytest.mark.asyncio
async def test_task_lifecycle(ctx: RunContext, token_property):
    created = await CreateTask(api_token=token_property, content="Buy milk").run(ctx)
    assert created.task_id == "123"
    assert created.url

    fetched = await GetTask(api_token=token_property, task_id=created.task_id).run(ctx)
    assert fetched.content == "Buy milk"

    updated = await UpdateTask(api_token=token_property, task_id="123", priority=4).run(ctx)
    assert updated.task_id == "123"
    assert updated.response["priority"] == 4

    _ = await DeleteTask(api_token=token_property, task_id="123").run(ctx)

    with pytest.raises(TaskError) as exc_info:
        _ = await GetTask(api_token=token_property, task_id="123").run(ctx)
    assert exc_info.value.status_code == 404
    assert "404" in str(exc_info.value)
