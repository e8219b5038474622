# tests/test_sqlite_task_store.py

from __future__ import annotations

from pathlib import Path

import pytest

from mine_board.core.errors import TaskNotFoundError, TaskStoreError
from mine_board.core.models import Category, NewTask
from mine_board.storage.sqlite_task_store import DEFAULT_CATEGORIES, SqliteTaskStore


@pytest.fixture()
def store(tmp_path: Path) -> SqliteTaskStore:
    return SqliteTaskStore(tmp_path / "tasks.sqlite3")


@pytest.mark.asyncio
async def test_seeds_default_categories_once(tmp_path: Path) -> None:
    db = tmp_path / "tasks.sqlite3"
    first = await SqliteTaskStore(db).list_categories()
    assert [c.name for c in first] == list(DEFAULT_CATEGORIES)

    # Reopening (even with other seeds) does not add more.
    again = await SqliteTaskStore(db, seed_categories=["Nether"]).list_categories()
    assert again == first


@pytest.mark.asyncio
async def test_create_and_get_all(store: SqliteTaskStore) -> None:
    cats = await store.list_categories()

    created = await store.create(NewTask(title="  Build wall ", created_by="Steve", categories=(cats[0],)))
    second = await store.create(NewTask(title="Dig moat", created_by="Alex"))

    assert created.id > 0
    assert created.title == "Build wall"
    assert created.completed is False
    assert created.categories == (cats[0],)
    assert created.players == ()

    tasks = await store.get_all()
    assert [t.id for t in tasks] == [created.id, second.id]
    assert tasks[1].categories == ()


@pytest.mark.asyncio
async def test_create_rejects_bad_input(store: SqliteTaskStore) -> None:
    with pytest.raises(TaskStoreError):
        await store.create(NewTask(title="   ", created_by="Steve"))
    with pytest.raises(TaskStoreError):
        await store.create(NewTask(title="x", created_by="Steve", categories=(Category(id=99, name="?"),)))
    assert await store.get_all() == []


@pytest.mark.asyncio
async def test_toggle_completion_flips(store: SqliteTaskStore) -> None:
    task = await store.create(NewTask(title="x", created_by="Steve"))

    await store.toggle_completion(task.id)
    assert (await store.get_all())[0].completed is True

    await store.toggle_completion(task.id)
    assert (await store.get_all())[0].completed is False


@pytest.mark.asyncio
async def test_toggle_assignment_is_pairwise(store: SqliteTaskStore) -> None:
    task = await store.create(NewTask(title="x", created_by="Steve"))

    await store.toggle_assignment("Steve", task.id)
    await store.toggle_assignment("Alex", task.id)
    assert [p.name for p in (await store.get_all())[0].players] == ["Steve", "Alex"]

    await store.toggle_assignment("Steve", task.id)
    assert [p.name for p in (await store.get_all())[0].players] == ["Alex"]


@pytest.mark.asyncio
async def test_unknown_ids_raise(store: SqliteTaskStore) -> None:
    with pytest.raises(TaskNotFoundError):
        await store.toggle_completion(404)
    with pytest.raises(TaskNotFoundError):
        await store.toggle_assignment("Steve", 404)
