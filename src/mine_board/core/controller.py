# src/mine_board/core/controller.py

from __future__ import annotations

"""
Task list controller.

Owns the in-memory task list and the loading flag. Every mutation runs as:
- set is_loading
- perform the remote call
- full refresh (the store is the only source of truth)

There is no optimistic patching: after a failed mutation the list is left
exactly as the last successful refresh reported it, and is_loading is cleared.
"""

import logging
from collections.abc import Awaitable, Callable

from .modals import ModalOrchestrator
from .models import Category, NewTaskDraft, Task
from .ports import TaskRepo
from .state import BoardState

logger = logging.getLogger(__name__)


class TaskListController:
    def __init__(
        self,
        state: BoardState,
        store: TaskRepo,
        modals: ModalOrchestrator,
        *,
        block_while_loading: bool = True,
    ) -> None:
        self._state = state
        self._store = store
        self._modals = modals
        self._block_while_loading = block_while_loading

    # ---- refresh ----

    async def refresh(self) -> bool:
        """
        Replace the task list with whatever the store reports now.

        Returns False if the fetch failed; the previous list is kept in that case.

        Not gated by is_loading. A refresh started while a mutation is still in
        flight clears is_loading when it settles, which reopens the mutation gate
        early. Callers must not start one while a mutation is pending.
        """
        self._state.is_loading = True
        try:
            self._state.tasks = list(await self._store.get_all())
        except Exception:
            logger.exception("Task refresh failed; keeping %d cached tasks", len(self._state.tasks))
            return False
        finally:
            self._state.is_loading = False

        logger.debug("Refreshed task list: %d tasks", len(self._state.tasks))
        return True

    # ---- mutations ----

    def _can_mutate(self, action: str, *, needs_identity: bool = True) -> bool:
        if needs_identity and not self._state.nickname:
            logger.debug("%s ignored: no nickname established", action)
            return False
        if self._block_while_loading and self._state.is_loading:
            logger.debug("%s ignored: board is loading", action)
            return False
        return True

    async def _mutate_then_refresh(
        self,
        action: str,
        call: Callable[[], Awaitable[object]],
    ) -> bool:
        self._state.is_loading = True
        try:
            await call()
        except Exception:
            logger.exception("%s failed", action)
            self._state.is_loading = False
            return False
        return await self.refresh()

    async def create_task(self, draft: NewTaskDraft) -> bool:
        # Captured before the first await: the task is attributed to whoever submitted it.
        nickname = self._state.nickname
        if not nickname or not self._can_mutate("create_task"):
            return False

        # The dialog never waits on the network.
        self._modals.close_create_task_dialog()
        logger.info("Creating task title=%r by=%s", draft.title, nickname)
        return await self._mutate_then_refresh(
            "create_task",
            lambda: self._store.create(draft.with_author(nickname)),
        )

    async def toggle_completion(self, task_id: int) -> bool:
        if not self._can_mutate("toggle_completion"):
            return False
        logger.info("Toggling completion task_id=%s", task_id)
        return await self._mutate_then_refresh(
            f"toggle_completion task_id={task_id}",
            lambda: self._store.toggle_completion(task_id),
        )

    async def toggle_assignment(self, task_id: int) -> bool:
        nickname = self._state.nickname
        if not nickname or not self._can_mutate("toggle_assignment"):
            return False
        logger.info("Toggling player=%s on task_id=%s", nickname, task_id)
        return await self._mutate_then_refresh(
            f"toggle_assignment task_id={task_id}",
            lambda: self._store.toggle_assignment(nickname, task_id),
        )

    # ---- filter ----

    def set_active_category(self, category: Category) -> Category | None:
        """Select a category; selecting the active one clears the filter."""
        if category not in self._state.categories:
            raise ValueError(f"unknown category: {category!r}")

        active = self._state.active_category
        if active is not None and active.id == category.id:
            self._state.active_category = None
        else:
            self._state.active_category = category
        return self._state.active_category

    # ---- derived views (recomputed on every read) ----

    @property
    def filtered_tasks(self) -> list[Task]:
        active = self._state.active_category
        if active is None:
            return list(self._state.tasks)
        return [t for t in self._state.tasks if active.id in t.category_ids()]

    @property
    def pending_tasks(self) -> list[Task]:
        return [t for t in self.filtered_tasks if not t.completed]

    @property
    def completed_tasks(self) -> list[Task]:
        return [t for t in self.filtered_tasks if t.completed]

    def is_assigned(self, task: Task) -> bool:
        return task.has_player(self._state.nickname)

    def empty_message(self) -> str | None:
        """Placeholder for an empty board, or None when there is something to show."""
        if self.filtered_tasks:
            return None
        active = self._state.active_category
        if active is None:
            return "No tasks have been created yet, go create yours!"
        return f'The category "{active.name}" has no tasks.'
