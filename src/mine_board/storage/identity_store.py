# src/mine_board/storage/identity_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from pathlib import Path

from ..core.errors import IdentityStorageError

logger = logging.getLogger(__name__)


class JsonIdentityStorage:
    """
    Device-local key/value storage in a small JSON file.

    Writes are atomic (tmp file + os.replace). Any read/parse/write problem
    raises IdentityStorageError; the IdentityGate decides what that means.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, ValueError) as exc:
            raise IdentityStorageError(f"cannot read {self._path}: {exc}") from exc
        if not isinstance(data, dict):
            raise IdentityStorageError(f"{self._path} does not hold a JSON object")
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        try:
            data = self._load()
        except IdentityStorageError:
            logger.warning("Overwriting unreadable identity file %s", self._path)
            data = {}
        data[key] = value

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self._path.with_suffix(".tmp")
            tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), "utf-8")
            os.replace(tmp, self._path)
        except OSError as exc:
            raise IdentityStorageError(f"cannot write {self._path}: {exc}") from exc

        with contextlib.suppress(Exception):
            # Best-effort: keep the file private on disk.
            os.chmod(self._path, 0o600)
        logger.debug("Stored identity key=%s in %s", key, self._path)


class InMemoryIdentityStorage:
    """Identity storage that lives only as long as the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
