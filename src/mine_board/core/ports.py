# src/mine_board/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps the task store and identity storage swappable (SQLite, HTTP, in-memory)
and makes testing easier.
"""

from typing import Protocol

from .models import Category, NewTask, Task


class TaskRepo(Protocol):
    """
    Remote task store.

    Every call may fail. A failure must be observable (an exception),
    never a silently returned stale/default value.
    """

    async def get_all(self) -> list[Task]: ...
    async def create(self, new_task: NewTask) -> Task: ...

    # Both toggles raise TaskNotFoundError on unknown ids.
    async def toggle_completion(self, task_id: int) -> None: ...
    async def toggle_assignment(self, nickname: str, task_id: int) -> None: ...

    # Startup only: the fixed category list.
    async def list_categories(self) -> list[Category]: ...


class IdentityStorage(Protocol):
    """Durable, device-local key/value storage holding the nickname."""

    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...
