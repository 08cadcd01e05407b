"""Players snapshot document written by the build and sync jobs."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class PlayerSnapshot(BaseModel):
    """``players.json``; unknown top-level keys survive a rewrite."""

    generated_at: Optional[str] = Field(default_factory=utc_timestamp)
    players: List[Any] = Field(default_factory=list)
    competitions: Any = Field(default_factory=dict)
    history: Any = Field(default_factory=list)

    model_config = ConfigDict(extra="allow")

    def to_json(self) -> dict[str, Any]:
        payload = self.model_dump()
        payload["players"] = [
            player.to_json() if hasattr(player, "to_json") else player
            for player in self.players
        ]
        return payload
