# src/mine_board/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from ..connectors.render import render_board, render_categories
from ..core.board import TaskBoard

CommandEmitter = Callable[[str], None]
CommandHandler = Callable[[TaskBoard, list[str], CommandEmitter | None], Awaitable[str]]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /done, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(
        self,
        board: TaskBoard,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return await handler(board, args, emit)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_id(args: list[str]) -> int | None:
    if len(args) != 1:
        return None
    try:
        return int(args[0].lstrip("#"))
    except ValueError:
        return None


async def cmd_help(board: TaskBoard, args: list[str], emit: CommandEmitter | None = None) -> str:
    return registry.build_help()


async def cmd_tasks(board: TaskBoard, args: list[str], emit: CommandEmitter | None = None) -> str:
    return render_board(board)


async def cmd_categories(board: TaskBoard, args: list[str], emit: CommandEmitter | None = None) -> str:
    return render_categories(board)


async def cmd_cat(board: TaskBoard, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /cat        -> clear the filter
    /cat <id>   -> filter by category (again to clear)
    """
    if not args:
        active = board.active_category
        if active is None:
            return "No category filter is active."
        board.set_active_category(active)
        return "Category filter cleared."

    category_id = _parse_id(args)
    category = board.find_category(category_id) if category_id is not None else None
    if category is None:
        return f"Unknown category: {' '.join(args)}. Use /categories to list them."

    active = board.set_active_category(category)
    if active is None:
        return "Category filter cleared."
    return f"Showing # {active.name}\n\n{render_board(board)}"


async def cmd_new(board: TaskBoard, args: list[str], emit: CommandEmitter | None = None) -> str:
    board.open_create_task_dialog()
    return "New task (type /cancel to discard)."


async def cmd_cancel(board: TaskBoard, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not board.is_create_task_modal_open:
        return "Nothing to cancel."
    board.cancel_create_task_dialog()
    return "Discarded."


async def cmd_refresh(board: TaskBoard, args: list[str], emit: CommandEmitter | None = None) -> str:
    if emit:
        emit("Loading...")
    if not await board.refresh():
        return "Could not reach the task store. Showing the last known tasks.\n\n" + render_board(board)
    return render_board(board)


async def cmd_done(board: TaskBoard, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/done <task_id> -> flip the task between pending and completed."""
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /done <task_id>"
    if emit:
        emit("Loading...")
    if not await board.toggle_completion(task_id):
        return f"Task #{task_id} was not updated."
    return render_board(board)


async def cmd_join(board: TaskBoard, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/join <task_id> -> add or remove yourself as a player on the task."""
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /join <task_id>"
    if emit:
        emit("Loading...")
    if not await board.toggle_assignment(task_id):
        return f"Task #{task_id} was not updated."
    return render_board(board)


async def cmd_whoami(board: TaskBoard, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not board.nickname:
        return "No nickname set."
    return f"You are {board.nickname}."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("tasks", cmd_tasks, help_text="Show the board.", aliases=["ls"])
registry.register("categories", cmd_categories, help_text="List categories.")
registry.register("cat", cmd_cat, help_text="Filter by category: /cat <id> (again, or /cat, to clear).")
registry.register("new", cmd_new, help_text="Create a task.")
registry.register("cancel", cmd_cancel, help_text="Discard the task being created.")
registry.register("done", cmd_done, help_text="Mark a task done / not done: /done <task_id>.")
registry.register("join", cmd_join, help_text="Join or leave a task: /join <task_id>.")
registry.register("refresh", cmd_refresh, help_text="Reload tasks from the store.", aliases=["r"])
registry.register("whoami", cmd_whoami, help_text="Show your nickname.")
