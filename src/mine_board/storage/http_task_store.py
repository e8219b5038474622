# src/mine_board/storage/http_task_store.py

"""REST client for a remote task board API.

Endpoints (relative to ``base_url``):

- ``GET  /tasks``                         -> list of task objects
- ``POST /tasks``                         -> created task object
- ``POST /tasks/{id}/toggle-completion``
- ``POST /tasks/{id}/toggle-player``      body ``{"nickname": ...}``
- ``GET  /categories``                    -> list of category objects

Task objects use the web client's field names (``createdBy``, ``players``
as ``[{"name": ...}]``). Any transport, HTTP or payload problem is raised
as ``TaskStoreError`` so the controller sees a rejected outcome instead of
stale data.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

import httpx

from ..core.errors import TaskNotFoundError, TaskStoreError
from ..core.models import Category, NewTask, Player, Task

logger = logging.getLogger(__name__)


def _parse_category(raw: Any) -> Category:
    if not isinstance(raw, dict):
        raise TaskStoreError(f"unexpected category payload: {raw!r}")
    try:
        return Category(id=int(raw["id"]), name=str(raw["name"]))
    except (KeyError, TypeError, ValueError) as exc:
        raise TaskStoreError(f"unexpected category payload: {raw!r}") from exc


def _parse_task(raw: Any) -> Task:
    if not isinstance(raw, dict):
        raise TaskStoreError(f"unexpected task payload: {raw!r}")
    try:
        players: List[Player] = []
        seen: set[str] = set()
        for p in raw.get("players") or []:
            name = str(p["name"]) if isinstance(p, dict) else str(p)
            # The store owns the set semantics; keep the first occurrence if it repeats one.
            if name in seen:
                continue
            seen.add(name)
            players.append(Player(name=name))

        return Task(
            id=int(raw["id"]),
            title=str(raw.get("title") or ""),
            completed=bool(raw.get("completed", False)),
            created_by=str(raw.get("createdBy") or ""),
            categories=tuple(_parse_category(c) for c in raw.get("categories") or []),
            players=tuple(players),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise TaskStoreError(f"unexpected task payload: {raw!r}") from exc


def _new_task_payload(new_task: NewTask) -> Dict[str, Any]:
    return {
        "title": new_task.title,
        "createdBy": new_task.created_by,
        "categories": [{"id": c.id, "name": c.name} for c in new_task.categories],
    }


class HttpTaskStore:
    """Task store backed by the board's HTTP API."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        # Injected in tests (httpx.MockTransport).
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        )

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        task_id: int | None = None,
    ) -> Any:
        async with self._client() as client:
            try:
                resp = await client.request(method, path, json=json)
            except httpx.HTTPError as exc:
                logger.warning("Task API %s %s transport error: %s", method, path, exc)
                raise TaskStoreError(f"{method} {path} failed: {exc}") from exc

            try:
                resp.raise_for_status()
            except httpx.HTTPStatusError as exc:
                logger.error("Task API HTTP error %s %s: %s", method, path, exc.response.text)
                if exc.response.status_code == 404 and task_id is not None:
                    raise TaskNotFoundError(task_id) from exc
                raise TaskStoreError(f"{method} {path} failed: {exc}") from exc

        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            logger.error("Task API returned non-JSON body for %s %s: %r", method, path, resp.text)
            raise TaskStoreError(f"{method} {path} returned invalid JSON") from exc

    async def get_all(self) -> list[Task]:
        data = await self._request("GET", "/tasks")
        if not isinstance(data, list):
            raise TaskStoreError(f"GET /tasks returned {type(data).__name__}, expected a list")
        return [_parse_task(item) for item in data]

    async def list_categories(self) -> list[Category]:
        data = await self._request("GET", "/categories")
        if not isinstance(data, list):
            raise TaskStoreError(f"GET /categories returned {type(data).__name__}, expected a list")
        return [_parse_category(item) for item in data]

    async def create(self, new_task: NewTask) -> Task:
        data = await self._request("POST", "/tasks", json=_new_task_payload(new_task))
        return _parse_task(data)

    async def toggle_completion(self, task_id: int) -> None:
        await self._request("POST", f"/tasks/{int(task_id)}/toggle-completion", task_id=task_id)

    async def toggle_assignment(self, nickname: str, task_id: int) -> None:
        await self._request(
            "POST",
            f"/tasks/{int(task_id)}/toggle-player",
            json={"nickname": nickname},
            task_id=task_id,
        )
