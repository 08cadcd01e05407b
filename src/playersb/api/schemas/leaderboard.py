from __future__ import annotations

from pydantic import BaseModel, Field

from playersb.scoring import LeaderboardEntry


class LeaderboardResponse(BaseModel):
    source: str
    total_players: int
    players: list[LeaderboardEntry] = Field(default_factory=list)
