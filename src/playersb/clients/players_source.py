"""Free player-data source (openfootball players dump or a configured URL)."""

from __future__ import annotations

from typing import Any, List, Optional

import httpx

from .base import JsonClient

DEFAULT_SOURCE_URL = "https://raw.githubusercontent.com/openfootball/players/master/players.json"
SOURCE_TIMEOUT = 15.0


def fetch_player_source(url: str, *, transport: Optional[httpx.BaseTransport] = None) -> Any:
    with JsonClient(timeout=SOURCE_TIMEOUT, transport=transport) as client:
        return client.get_json(url)


def source_rows(payload: Any) -> List[Any]:
    """Player rows from either ``{"players": [...]}`` or a bare list."""

    if isinstance(payload, dict) and isinstance(payload.get("players"), list):
        return payload["players"]
    if isinstance(payload, list):
        return payload
    return []
