from __future__ import annotations

from pydantic import BaseModel, Field

from playersb.models import PlayerRecord


class PlayerListResponse(BaseModel):
    generated_at: str | None = None
    total_players: int
    players: list[PlayerRecord] = Field(default_factory=list)
