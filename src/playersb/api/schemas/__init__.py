"""Pydantic models for API I/O."""

from .leaderboard import LeaderboardResponse
from .players import PlayerListResponse

__all__ = [
    "LeaderboardResponse",
    "PlayerListResponse",
]
