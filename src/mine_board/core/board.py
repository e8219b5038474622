# src/mine_board/core/board.py

from __future__ import annotations

import logging
from collections.abc import Iterable

from .controller import TaskListController
from .identity import DEFAULT_IDENTITY_KEY, IdentityGate
from .modals import DialogKind, ModalOrchestrator
from .models import Category, NewTaskDraft, Task
from .ports import IdentityStorage, TaskRepo
from .state import BoardState

logger = logging.getLogger(__name__)


class TaskBoard:
    """
    The surface the presentation layer talks to.

    Wires IdentityGate, TaskListController and ModalOrchestrator around one
    BoardState. Callers get derived views, flags and callbacks; nothing else
    of the state is exposed.
    """

    def __init__(
        self,
        *,
        store: TaskRepo,
        identity_storage: IdentityStorage,
        categories: Iterable[Category],
        identity_key: str = DEFAULT_IDENTITY_KEY,
        block_while_loading: bool = True,
    ) -> None:
        self._state = BoardState(categories=tuple(categories))
        self._modals = ModalOrchestrator(self._state)
        self._identity = IdentityGate(
            self._state, identity_storage, self._modals, storage_key=identity_key
        )
        self._tasks = TaskListController(
            self._state, store, self._modals, block_while_loading=block_while_loading
        )

    async def mount(self) -> None:
        """Startup: resolve the nickname (may open its dialog), then the first refresh."""
        self._identity.resolve_identity()
        await self._tasks.refresh()
        logger.info(
            "Board mounted: %d tasks, %d categories, nickname=%s",
            len(self._state.tasks),
            len(self._state.categories),
            self._state.nickname,
        )

    # ---- flags / state ----

    @property
    def categories(self) -> tuple[Category, ...]:
        return self._state.categories

    @property
    def nickname(self) -> str | None:
        return self._state.nickname

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    @property
    def is_add_identity_modal_open(self) -> bool:
        return self._state.is_add_identity_modal_open

    @property
    def is_create_task_modal_open(self) -> bool:
        return self._state.is_create_task_modal_open

    @property
    def visible_dialog(self) -> DialogKind | None:
        return self._modals.visible_dialog()

    @property
    def active_category(self) -> Category | None:
        return self._state.active_category

    # ---- derived views ----

    @property
    def tasks(self) -> list[Task]:
        return list(self._state.tasks)

    @property
    def filtered_tasks(self) -> list[Task]:
        return self._tasks.filtered_tasks

    @property
    def pending_tasks(self) -> list[Task]:
        return self._tasks.pending_tasks

    @property
    def completed_tasks(self) -> list[Task]:
        return self._tasks.completed_tasks

    def is_assigned(self, task: Task) -> bool:
        return self._tasks.is_assigned(task)

    def empty_message(self) -> str | None:
        return self._tasks.empty_message()

    def find_category(self, category_id: int) -> Category | None:
        return self._state.find_category(category_id)

    def find_task(self, task_id: int) -> Task | None:
        return self._state.find_task(task_id)

    # ---- callbacks ----

    async def refresh(self) -> bool:
        return await self._tasks.refresh()

    async def create_task(self, draft: NewTaskDraft) -> bool:
        return await self._tasks.create_task(draft)

    async def toggle_completion(self, task_id: int) -> bool:
        return await self._tasks.toggle_completion(task_id)

    async def toggle_assignment(self, task_id: int) -> bool:
        return await self._tasks.toggle_assignment(task_id)

    def set_active_category(self, category: Category) -> Category | None:
        return self._tasks.set_active_category(category)

    def submit_identity(self, nickname: str) -> bool:
        return self._identity.submit_identity(nickname)

    def open_create_task_dialog(self) -> None:
        self._modals.open_create_task_dialog()

    def cancel_create_task_dialog(self) -> None:
        self._modals.cancel_create_task_dialog()
