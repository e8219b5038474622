# tests/fakes.py

from __future__ import annotations

from dataclasses import replace

from mine_board.core.errors import IdentityStorageError, TaskNotFoundError, TaskStoreError
from mine_board.core.models import Category, NewTask, Player, Task


class FakeTaskRepo:
    """
    In-memory TaskRepo used for board unit tests.

    - Records every call (name, args) for assertions
    - Applies the same toggle semantics as the real stores
    - `fail_on` makes the named method raise TaskStoreError
    """

    def __init__(self, tasks: list[Task] | None = None, categories: list[Category] | None = None) -> None:
        self.tasks: dict[int, Task] = {t.id: t for t in tasks or []}
        self.categories = list(categories or [])
        self.calls: list[tuple] = []
        self.fail_on: set[str] = set()
        self._next_id = max(self.tasks, default=0) + 1

    def _maybe_fail(self, name: str) -> None:
        if name in self.fail_on:
            raise TaskStoreError(f"{name} failed (fake)")

    def call_names(self) -> list[str]:
        return [c[0] for c in self.calls]

    async def get_all(self) -> list[Task]:
        self.calls.append(("get_all",))
        self._maybe_fail("get_all")
        return list(self.tasks.values())

    async def list_categories(self) -> list[Category]:
        self.calls.append(("list_categories",))
        self._maybe_fail("list_categories")
        return list(self.categories)

    async def create(self, new_task: NewTask) -> Task:
        self.calls.append(("create", new_task))
        self._maybe_fail("create")
        task = Task(
            id=self._next_id,
            title=new_task.title,
            completed=False,
            created_by=new_task.created_by,
            categories=new_task.categories,
            players=(),
        )
        self.tasks[task.id] = task
        self._next_id += 1
        return task

    async def toggle_completion(self, task_id: int) -> None:
        self.calls.append(("toggle_completion", task_id))
        self._maybe_fail("toggle_completion")
        task = self.tasks.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        self.tasks[task_id] = replace(task, completed=not task.completed)

    async def toggle_assignment(self, nickname: str, task_id: int) -> None:
        self.calls.append(("toggle_assignment", nickname, task_id))
        self._maybe_fail("toggle_assignment")
        task = self.tasks.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        if task.has_player(nickname):
            players = tuple(p for p in task.players if p.name != nickname)
        else:
            players = (*task.players, Player(name=nickname))
        self.tasks[task_id] = replace(task, players=players)


class FakeIdentityStorage:
    """Dict-backed IdentityStorage with switchable read/write failures."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})
        self.fail_get = False
        self.fail_set = False
        self.set_calls: list[tuple[str, str]] = []

    def get(self, key: str) -> str | None:
        if self.fail_get:
            raise IdentityStorageError("storage unavailable (fake)")
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.set_calls.append((key, value))
        if self.fail_set:
            raise IdentityStorageError("storage unavailable (fake)")
        self.data[key] = value


class ScriptedInput:
    """Feeds pre-recorded lines to the console session; EOF when exhausted."""

    def __init__(self, lines: list[str]) -> None:
        self.lines = list(lines)
        self.prompts: list[str] = []

    async def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)
