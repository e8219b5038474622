# src/mine_board/core/errors.py

from __future__ import annotations


class MineBoardError(Exception):
    """Base class for errors raised by mine_board adapters."""


class TaskStoreError(MineBoardError):
    """Raised when the task store rejects a fetch or a mutation."""


class TaskNotFoundError(TaskStoreError):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"task {task_id} does not exist")
        self.task_id = task_id


class IdentityStorageError(MineBoardError):
    """Raised when the identity storage cannot be read or written."""
