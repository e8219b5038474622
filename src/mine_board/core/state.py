# src/mine_board/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field

from .models import Category, Task


@dataclass
class BoardState:
    """
    Everything the client knows about the board.

    One instance per session, owned by the event loop thread. Only the
    IdentityGate, TaskListController and ModalOrchestrator write to it.
    """

    # Fixed for the whole session.
    categories: tuple[Category, ...] = ()

    # Replaced wholesale by every refresh, never patched.
    tasks: list[Task] = field(default_factory=list)

    nickname: str | None = None
    active_category: Category | None = None

    # True until the first refresh settles.
    is_loading: bool = True

    is_add_identity_modal_open: bool = False
    is_create_task_modal_open: bool = False

    def find_category(self, category_id: int) -> Category | None:
        for c in self.categories:
            if c.id == category_id:
                return c
        return None

    def find_task(self, task_id: int) -> Task | None:
        for t in self.tasks:
            if t.id == task_id:
                return t
        return None
