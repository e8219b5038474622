# src/mine_board/connectors/render.py

"""Plain-text rendering of the board. No decisions here, only formatting."""

from __future__ import annotations

from ..core.board import TaskBoard
from ..core.models import Task


def render_task(task: Task, *, assigned: bool) -> str:
    check = "[x]" if task.completed else "[ ]"
    lines = [f"{check} #{task.id} {task.title}"]
    lines.append(f'    * created by "{task.created_by}"')

    if task.categories:
        lines.append("    " + " ".join(f"# {c.name}" for c in task.categories))

    players = ", ".join(p.name for p in task.players) or "nobody yet"
    marker = " (you are in)" if assigned else ""
    lines.append(f"    helping: {players}{marker}")
    return "\n".join(lines)


def render_categories(board: TaskBoard) -> str:
    if not board.categories:
        return "No categories."
    active = board.active_category
    lines = ["Categories:"]
    for c in board.categories:
        mark = "*" if active is not None and active.id == c.id else " "
        lines.append(f" {mark} {c.id}. # {c.name}")
    return "\n".join(lines)


def render_board(board: TaskBoard) -> str:
    lines: list[str] = []

    active = board.active_category
    if active is not None:
        lines.append(f"Filter: # {active.name}")
        lines.append("")

    lines.append("To do")
    empty = board.empty_message()
    if empty:
        lines.append(f"  {empty}")
    for task in board.pending_tasks:
        lines.append(render_task(task, assigned=board.is_assigned(task)))

    completed = board.completed_tasks
    if completed:
        lines.append("")
        lines.append("Completed")
        for task in completed:
            lines.append(render_task(task, assigned=board.is_assigned(task)))

    return "\n".join(lines)
