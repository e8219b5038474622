# src/mine_board/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- picks the task store backend (SQLite file or HTTP API),
- loads the fixed category list,
- wires everything into a TaskBoard.
"""

from __future__ import annotations

import logging

from ..config import Settings, get_settings
from ..core.board import TaskBoard
from ..core.models import Category
from ..core.ports import IdentityStorage, TaskRepo
from ..storage.http_task_store import HttpTaskStore
from ..storage.identity_store import JsonIdentityStorage
from ..storage.sqlite_task_store import SqliteTaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings: Settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.identity_path.parent.mkdir(parents=True, exist_ok=True)
    if settings.store_backend == "sqlite":
        settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_task_store(settings: Settings) -> TaskRepo:
    if settings.store_backend == "http":
        logger.info("Using HTTP task store at %s", settings.api_base_url)
        return HttpTaskStore(settings.api_base_url, timeout=settings.http_timeout_seconds)

    return SqliteTaskStore(settings.tasks_db_path, seed_categories=settings.default_categories)


async def load_categories(store: TaskRepo) -> list[Category]:
    """
    Fetch the category list once.

    Without categories the board still works (no filtering, tasks created
    uncategorized), so a failure here is logged rather than fatal.
    """
    try:
        categories = await store.list_categories()
    except Exception:
        logger.exception("Failed to load categories; continuing without them.")
        return []
    logger.info("Loaded %d categories", len(categories))
    return categories


async def create_task_board(
    *,
    settings: Settings | None = None,
    store: TaskRepo | None = None,
    identity_storage: IdentityStorage | None = None,
) -> TaskBoard:
    """
    Build a TaskBoard from the provided settings.

    Store and identity storage are injectable for tests; otherwise they are
    built from settings. The board is returned unmounted.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if store is None:
        store = create_task_store(settings)
    if identity_storage is None:
        identity_storage = JsonIdentityStorage(settings.identity_path)

    categories = await load_categories(store)

    return TaskBoard(
        store=store,
        identity_storage=identity_storage,
        categories=categories,
        identity_key=settings.identity_key,
        block_while_loading=settings.block_while_loading,
    )
