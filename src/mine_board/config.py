# src/mine_board/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- No secrets required at import time.
- Every value has a default, so a bare `mine-board` runs against a local SQLite file.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List

ENV_PREFIX = "MINEBOARD"

STORE_BACKENDS = ("sqlite", "http")


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except Exception:
        return
    load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_list(name: str, default: List[str]) -> List[str]:
    # Comma separated only: category names may contain spaces.
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    return [p.strip() for p in raw.split(",") if p.strip()]


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    server_name: str
    server_ip: str

    # ---- Task store ----
    store_backend: str
    tasks_db_path: Path
    api_base_url: str
    http_timeout_seconds: float
    default_categories: List[str]

    # ---- Identity ----
    identity_path: Path
    identity_key: str

    # ---- Board behaviour ----
    block_while_loading: bool

    # ---- Local data paths (ignored by git) ----
    data_dir: Path

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "mine-board") or "mine-board"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        server_name = _env(_k("SERVER_NAME"), "ServerdeMine")
        server_ip = _env(_k("SERVER_IP"), "serverdemine.online")

        store_backend = _env(_k("STORE_BACKEND"), "sqlite").strip().lower()
        if store_backend not in STORE_BACKENDS:
            store_backend = "sqlite"

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/mine_board"))
        tasks_db_path = _env_path(_k("TASKS_DB_PATH"), data_dir / "tasks.sqlite3")
        api_base_url = _env(_k("API_BASE_URL"), "http://localhost:3000/api").strip()
        http_timeout_seconds = max(0.5, _env_float(_k("HTTP_TIMEOUT_SECONDS"), 10.0))
        default_categories = _env_list(_k("CATEGORIES"), ["Construção", "Exploração", "Automação"])

        identity_path = _env_path(_k("IDENTITY_PATH"), data_dir / "identity.json")
        identity_key = _env(_k("IDENTITY_KEY"), "MINECRAFT_NICKNAME").strip() or "MINECRAFT_NICKNAME"

        block_while_loading = _env_bool(_k("BLOCK_WHILE_LOADING"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            server_name=server_name,
            server_ip=server_ip,
            store_backend=store_backend,
            tasks_db_path=tasks_db_path,
            api_base_url=api_base_url,
            http_timeout_seconds=http_timeout_seconds,
            default_categories=default_categories,
            identity_path=identity_path,
            identity_key=identity_key,
            block_while_loading=block_while_loading,
            data_dir=data_dir,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Build settings on first use (loading .env then) and cache them."""
    global _SETTINGS
    if _SETTINGS is None:
        _load_dotenv_if_available()
        _SETTINGS = Settings.from_env()
    return _SETTINGS
