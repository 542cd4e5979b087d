"""Thin client for the tier list's Supabase REST tables."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import time
from typing import Any

import requests
from requests import RequestException

from models import HistoryEntry, Player


class TierListAPIError(RuntimeError):
    """Raised when the tier list store does not return usable rows."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


LOGGER = logging.getLogger("tierlist.client")

PLAYERS_TABLE = "tiers"
HISTORY_TABLE = "history"


def _postgrest_error(response: requests.Response) -> str:
    """Summarize a PostgREST error body: message, details, hint, and code."""
    try:
        body = response.json()
    except ValueError:
        return response.text.strip() or "empty response body"
    if not isinstance(body, dict):
        return str(body)
    parts = [str(body["message"])] if body.get("message") else []
    for field in ("details", "hint", "code"):
        if body.get(field):
            parts.append(f"{field}={body[field]}")
    return "; ".join(parts) if parts else str(body)


@dataclass
class TierListClient:
    base_url: str
    api_key: str = ""
    timeout_seconds: int = 30

    def __post_init__(self) -> None:
        self._session = requests.Session()
        if self.api_key:
            self._session.headers.update(
                {
                    "apikey": self.api_key,
                    "Authorization": f"Bearer {self.api_key}",
                }
            )
        self._session.headers.update({"Accept": "application/json"})

    def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        url = f"{self.base_url.rstrip('/')}{path}"
        started = time.perf_counter()
        LOGGER.info("Store request: GET %s params=%s", path, params or {})
        try:
            response = self._session.get(url, params=params, timeout=self.timeout_seconds)
        except RequestException as exc:
            elapsed_ms = int((time.perf_counter() - started) * 1000)
            LOGGER.error("Store network error: GET %s in %d ms error=%s", path, elapsed_ms, exc)
            raise TierListAPIError(f"Network error for GET {path}: {exc}") from exc

        elapsed_ms = int((time.perf_counter() - started) * 1000)
        LOGGER.info("Store response: GET %s status=%d in %d ms", path, response.status_code, elapsed_ms)

        if not response.ok:
            message = f"HTTP {response.status_code} for GET {path}"
            detail = _postgrest_error(response)
            LOGGER.error("Store error: GET %s status=%d %s", path, response.status_code, detail)
            raise TierListAPIError(f"{message}: {detail}", status_code=response.status_code)

        try:
            return response.json()
        except ValueError as exc:
            raise TierListAPIError(f"Invalid JSON from GET {path}: {response.text}") from exc

    def fetch_all(self, table: str, *, order: str | None = None) -> list[dict[str, Any]]:
        params = {"select": "*"}
        if order:
            params["order"] = order
        rows = self._get(f"/rest/v1/{table}", params=params)
        if not isinstance(rows, list):
            raise TierListAPIError(f"Expected a list of rows from table '{table}', got {type(rows).__name__}.")
        return [row for row in rows if isinstance(row, dict)]

    def fetch_players(self) -> list[Player]:
        return [Player.from_row(row) for row in self.fetch_all(PLAYERS_TABLE)]

    def fetch_history(self) -> list[HistoryEntry]:
        return [HistoryEntry.from_row(row) for row in self.fetch_all(HISTORY_TABLE, order="time.desc")]
