# src/mine_board/core/models.py

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True, frozen=True)
class Category:
    id: int
    name: str


@dataclass(slots=True, frozen=True)
class Player:
    """A participant on a task. Players are identified by nickname only."""

    name: str


@dataclass(slots=True, frozen=True)
class Task:
    """
    Read-through copy of a task owned by the task store.

    Notes:
    - categories only reference categories from the startup category list
    - players holds each nickname at most once, in the order the store reports
    """

    id: int
    title: str
    completed: bool
    created_by: str
    categories: tuple[Category, ...] = ()
    players: tuple[Player, ...] = ()

    def category_ids(self) -> frozenset[int]:
        return frozenset(c.id for c in self.categories)

    def has_player(self, nickname: str | None) -> bool:
        if not nickname:
            return False
        return any(p.name == nickname for p in self.players)


@dataclass(slots=True, frozen=True)
class NewTask:
    """Payload submitted to the task store on creation."""

    title: str
    created_by: str
    categories: tuple[Category, ...] = ()


@dataclass(slots=True, frozen=True)
class NewTaskDraft:
    """What the create-task dialog hands back: everything except the author."""

    title: str
    categories: tuple[Category, ...] = field(default_factory=tuple)

    def with_author(self, nickname: str) -> NewTask:
        return NewTask(title=self.title, created_by=nickname, categories=self.categories)
