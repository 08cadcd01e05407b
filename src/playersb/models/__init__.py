"""Pydantic models for players, standings and snapshots."""

from .player import COUNTER_FIELDS, DEFAULT_POSITION, DEFAULT_TEAM, PlayerRecord
from .snapshot import PlayerSnapshot, utc_timestamp
from .standings import (
    CompetitionRef,
    CompetitionStandings,
    StandingRow,
    StandingsBlock,
    StandingTeam,
)

__all__ = [
    "COUNTER_FIELDS",
    "DEFAULT_POSITION",
    "DEFAULT_TEAM",
    "PlayerRecord",
    "PlayerSnapshot",
    "utc_timestamp",
    "CompetitionRef",
    "CompetitionStandings",
    "StandingRow",
    "StandingsBlock",
    "StandingTeam",
]
