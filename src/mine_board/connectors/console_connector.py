# src/mine_board/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.board import TaskBoard
from ..core.modals import DialogKind
from ..core.models import Category, NewTaskDraft
from .render import render_board

logger = logging.getLogger(__name__)

LineReader = Callable[[str], Awaitable[str]]
LineWriter = Callable[[str], None]


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


async def _read_stdin(prompt: str) -> str:
    # input() blocks; keep the event loop free while the user types.
    return await asyncio.to_thread(input, prompt)


def parse_category_ids(raw: str, board: TaskBoard) -> tuple[list[Category], list[str]]:
    """Split "1, 3" into known categories and the tokens that matched none."""
    found: list[Category] = []
    unknown: list[str] = []
    for token in raw.replace(",", " ").split():
        category = None
        try:
            category = board.find_category(int(token.lstrip("#")))
        except ValueError:
            pass
        if category is None:
            unknown.append(token)
        elif category not in found:
            found.append(category)
    return found, unknown


class ConsoleSession:
    """
    Console front-end over a TaskBoard.

    Which prompt is shown depends only on the board's dialog flags:
    identity dialog -> nickname prompt, create-task dialog -> draft prompts,
    otherwise the command prompt.
    """

    def __init__(
        self,
        board: TaskBoard,
        *,
        app_name: str = "mine-board",
        read_line: LineReader = _read_stdin,
        write: LineWriter = print,
    ) -> None:
        self._board = board
        self._app_name = app_name
        self._read = read_line
        self._write = write

    def _print_ts(self, text: str) -> None:
        self._write(f"[{_ts_local()}] {text}")

    async def _identity_prompt(self) -> bool:
        """Returns False when the user asked to leave."""
        nickname = (await self._read("Your nickname: ")).strip()
        if nickname.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received at nickname prompt.")
            return False
        if not nickname:
            self._write("A nickname is required to use the board.")
            return True
        if nickname.startswith("/"):
            self._write("Nicknames cannot start with '/'.")
            return True
        if self._board.submit_identity(nickname):
            self._print_ts(f"Welcome, {nickname}!")
        else:
            self._write("Could not save your nickname, please try again.")

    async def _create_task_prompt(self) -> None:
        title = (await self._read("Title (/cancel to discard): ")).strip()
        if title.lower() == "/cancel":
            self._board.cancel_create_task_dialog()
            self._write("Discarded.")
            return
        if not title:
            self._write("A title is required.")
            return

        categories: list[Category] = []
        if self._board.categories:
            ids = ", ".join(f"{c.id}={c.name}" for c in self._board.categories)
            raw = (await self._read(f"Categories [{ids}] (blank for none): ")).strip()
            if raw.lower() == "/cancel":
                self._board.cancel_create_task_dialog()
                self._write("Discarded.")
                return
            categories, unknown = parse_category_ids(raw, self._board)
            if unknown:
                self._write(f"Ignoring unknown categories: {', '.join(unknown)}")

        self._write("Loading...")
        ok = await self._board.create_task(NewTaskDraft(title=title, categories=tuple(categories)))
        if not ok:
            self._write("The task was not created.")
        self._write(render_board(self._board))

    async def _command_prompt(self) -> bool:
        """Returns False when the user asked to leave."""
        line = (await self._read(f"{self._board.nickname or ''}> ")).strip()
        if not line:
            return True

        if line.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            return False

        if self._board.is_loading:
            self._write("Still loading, please wait.")
            return True

        try:
            reply = await command_registry.handle(self._board, line, emit=self._write)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is None:
            reply = "Commands start with '/'. Use /help to list them."
        self._write(reply)
        return True

    async def run(self) -> None:
        logger.info("Console connector started.")
        self._print_ts(f"[{self._app_name}] Use /help for commands, /exit to quit.")
        self._write(render_board(self._board))

        while True:
            try:
                dialog = self._board.visible_dialog
                if dialog == DialogKind.IDENTITY:
                    if not await self._identity_prompt():
                        break
                elif dialog == DialogKind.CREATE_TASK:
                    await self._create_task_prompt()
                elif not await self._command_prompt():
                    break
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break
            except KeyboardInterrupt:
                logger.info("Console KeyboardInterrupt, exiting.")
                self._write("")
                break

        logger.info("Console connector finished.")


async def run_console_loop(board: TaskBoard, *, app_name: str = "mine-board") -> None:
    await ConsoleSession(board, app_name=app_name).run()
