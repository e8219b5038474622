# src/mine_board/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds the TaskBoard, mounts it (nickname + first
refresh) and runs the console REPL on a single asyncio event loop.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_task_board, create_task_store
from ..config import Settings, get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _shutdown(store) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    try:
        close = getattr(store, "close", None)
        if close is not None:
            close()
    except Exception:
        logger.debug("Task store close failed.", exc_info=True)


async def _run(settings: Settings) -> None:
    store = create_task_store(settings)
    try:
        board = await create_task_board(settings=settings, store=store)
        await board.mount()
        await run_console_loop(board, app_name=f"{settings.server_name} ({settings.server_ip})")
    finally:
        _shutdown(store)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    # The console is shared with the board itself; INFO chatter goes to the file only.
    setup_logging(log_dir=settings.data_dir, console_level=max(console_level, logging.WARNING))

    logger.info("Starting %s (store=%s)...", settings.app_name, settings.store_backend)

    try:
        asyncio.run(_run(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted.")
    logger.info("Bye.")


if __name__ == "__main__":
    main()
