# tests/test_http_task_store.py

from __future__ import annotations

import json

import httpx
import pytest

from mine_board.core.errors import TaskNotFoundError, TaskStoreError
from mine_board.core.models import Category, NewTask, Player
from mine_board.storage.http_task_store import HttpTaskStore

BASE = "http://board.test/api"

TASK_JSON = {
    "id": 5,
    "title": "Find a village",
    "completed": True,
    "createdBy": "Sam",
    "categories": [{"id": 2, "name": "Exploração"}],
    "players": [{"name": "Sam"}, {"name": "Steve"}],
}


def _store(handler) -> tuple[HttpTaskStore, list[httpx.Request]]:
    seen: list[httpx.Request] = []

    def wrapped(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    return HttpTaskStore(BASE, transport=httpx.MockTransport(wrapped)), seen


@pytest.mark.asyncio
async def test_get_all_parses_tasks() -> None:
    store, seen = _store(lambda r: httpx.Response(200, json=[TASK_JSON]))

    tasks = await store.get_all()

    assert seen[0].method == "GET"
    assert seen[0].url.path == "/api/tasks"
    assert len(tasks) == 1
    task = tasks[0]
    assert task.id == 5
    assert task.completed is True
    assert task.created_by == "Sam"
    assert task.categories == (Category(id=2, name="Exploração"),)
    assert task.players == (Player(name="Sam"), Player(name="Steve"))


@pytest.mark.asyncio
async def test_create_posts_author_and_categories() -> None:
    store, seen = _store(lambda r: httpx.Response(201, json={**TASK_JSON, "id": 11, "completed": False}))

    task = await store.create(
        NewTask(title="Build wall", created_by="Steve", categories=(Category(id=1, name="Construção"),))
    )

    body = json.loads(seen[0].content)
    assert seen[0].method == "POST"
    assert body == {
        "title": "Build wall",
        "createdBy": "Steve",
        "categories": [{"id": 1, "name": "Construção"}],
    }
    assert task.id == 11


@pytest.mark.asyncio
async def test_toggles_hit_task_endpoints() -> None:
    store, seen = _store(lambda r: httpx.Response(204))

    await store.toggle_completion(5)
    await store.toggle_assignment("Steve", 5)

    assert [r.url.path for r in seen] == [
        "/api/tasks/5/toggle-completion",
        "/api/tasks/5/toggle-player",
    ]
    assert json.loads(seen[1].content) == {"nickname": "Steve"}


@pytest.mark.asyncio
async def test_404_on_toggle_is_task_not_found() -> None:
    store, _ = _store(lambda r: httpx.Response(404, json={"error": "not found"}))

    with pytest.raises(TaskNotFoundError):
        await store.toggle_completion(404)


@pytest.mark.asyncio
async def test_server_and_transport_errors_are_store_errors() -> None:
    store, _ = _store(lambda r: httpx.Response(500, text="boom"))
    with pytest.raises(TaskStoreError):
        await store.get_all()

    def offline(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("offline", request=request)

    store, _ = _store(offline)
    with pytest.raises(TaskStoreError):
        await store.get_all()


@pytest.mark.asyncio
async def test_malformed_payloads_are_store_errors() -> None:
    store, _ = _store(lambda r: httpx.Response(200, json={"tasks": []}))
    with pytest.raises(TaskStoreError):
        await store.get_all()

    store, _ = _store(lambda r: httpx.Response(200, json=[{"title": "no id"}]))
    with pytest.raises(TaskStoreError):
        await store.get_all()

    store, _ = _store(lambda r: httpx.Response(200, text="<html>"))
    with pytest.raises(TaskStoreError):
        await store.list_categories()
