# src/mine_board/core/modals.py

from __future__ import annotations

import logging
from enum import StrEnum

from .state import BoardState

logger = logging.getLogger(__name__)


class DialogKind(StrEnum):
    IDENTITY = "identity"
    CREATE_TASK = "create_task"


class ModalOrchestrator:
    """
    Tracks which of the two dialogs is open.

    The flags are mutually exclusive by convention of the calling flow,
    not enforced here. The identity dialog has no cancel path: the only
    way out is a successful IdentityGate.submit_identity().
    """

    def __init__(self, state: BoardState) -> None:
        self._state = state

    # ---- identity dialog ----

    def open_identity_dialog(self) -> None:
        self._state.is_add_identity_modal_open = True
        logger.debug("Identity dialog opened")

    def close_identity_dialog(self) -> None:
        self._state.is_add_identity_modal_open = False
        logger.debug("Identity dialog closed")

    # ---- create-task dialog ----

    def open_create_task_dialog(self) -> None:
        # No identity precondition here; create_task() checks it on submit.
        self._state.is_create_task_modal_open = True
        logger.debug("Create-task dialog opened")

    def cancel_create_task_dialog(self) -> None:
        """Discard the draft. Nothing is sent anywhere."""
        self._state.is_create_task_modal_open = False
        logger.debug("Create-task dialog cancelled")

    def close_create_task_dialog(self) -> None:
        self._state.is_create_task_modal_open = False

    def visible_dialog(self) -> DialogKind | None:
        if self._state.is_add_identity_modal_open:
            return DialogKind.IDENTITY
        if self._state.is_create_task_modal_open:
            return DialogKind.CREATE_TASK
        return None
