# src/mine_board/core/identity.py

from __future__ import annotations

import logging

from .modals import ModalOrchestrator
from .ports import IdentityStorage
from .state import BoardState

logger = logging.getLogger(__name__)

DEFAULT_IDENTITY_KEY = "MINECRAFT_NICKNAME"


class IdentityGate:
    """
    Resolves and persists the user's nickname.

    Storage failures are never fatal: a failed read counts as "no nickname"
    and a failed write leaves the identity dialog open so the user is asked again.
    """

    def __init__(
        self,
        state: BoardState,
        storage: IdentityStorage,
        modals: ModalOrchestrator,
        *,
        storage_key: str = DEFAULT_IDENTITY_KEY,
    ) -> None:
        self._state = state
        self._storage = storage
        self._modals = modals
        self._key = storage_key

    @property
    def has_identity(self) -> bool:
        return bool(self._state.nickname)

    def resolve_identity(self) -> str | None:
        try:
            nickname = self._storage.get(self._key)
        except Exception:
            logger.warning("Identity storage read failed key=%s; treating as absent", self._key, exc_info=True)
            nickname = None

        # An empty string is as good as nothing.
        nickname = nickname or None
        self._state.nickname = nickname

        if nickname is None:
            self._modals.open_identity_dialog()
            logger.info("No nickname stored; asking for one")
        else:
            self._modals.close_identity_dialog()
            logger.info("Resolved nickname=%s", nickname)
        return nickname

    def submit_identity(self, nickname: str) -> bool:
        try:
            self._storage.set(self._key, nickname)
        except Exception:
            logger.exception("Identity storage write failed key=%s", self._key)
            self._modals.open_identity_dialog()
            return False

        self._state.nickname = nickname
        self._modals.close_identity_dialog()
        logger.info("Nickname set to %s", nickname)
        return True
