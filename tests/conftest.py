# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from mine_board.core.board import TaskBoard
from mine_board.core.models import Category, Player, Task

from .fakes import FakeIdentityStorage, FakeTaskRepo

NICK_KEY = "MINECRAFT_NICKNAME"

BUILD = Category(id=1, name="Construção")
EXPLORE = Category(id=2, name="Exploração")
AUTOMATION = Category(id=3, name="Automação")


@pytest.fixture()
def categories() -> list[Category]:
    return [BUILD, EXPLORE, AUTOMATION]


@pytest.fixture()
def seed_tasks() -> list[Task]:
    """Three tasks in store order: two pending, one completed; nothing in AUTOMATION."""
    return [
        Task(id=1, title="Build wall", completed=False, created_by="Alex", categories=(BUILD,)),
        Task(
            id=5,
            title="Find a village",
            completed=False,
            created_by="Sam",
            categories=(EXPLORE,),
            players=(Player(name="Sam"),),
        ),
        Task(id=7, title="Dig moat", completed=True, created_by="Alex", categories=(BUILD, EXPLORE)),
    ]


@pytest.fixture()
def repo(seed_tasks: list[Task], categories: list[Category]) -> FakeTaskRepo:
    return FakeTaskRepo(seed_tasks, categories)


@pytest.fixture()
def identity() -> FakeIdentityStorage:
    return FakeIdentityStorage()


@pytest.fixture()
def board(repo: FakeTaskRepo, identity: FakeIdentityStorage, categories: list[Category]) -> TaskBoard:
    return TaskBoard(store=repo, identity_storage=identity, categories=categories)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with the bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        data_dir=tmp_path,
        store_backend="sqlite",
        tasks_db_path=tmp_path / "tasks.sqlite3",
        api_base_url="http://board.test/api",
        http_timeout_seconds=5.0,
        default_categories=["Construção", "Exploração", "Automação"],
        identity_path=tmp_path / "identity.json",
        identity_key=NICK_KEY,
        block_while_loading=True,
    )
