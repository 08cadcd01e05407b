"""Configuration helpers for data locations and upstream sources."""

from .paths import (
    DATA_DIR_ENV,
    FOOTBALL_DATA_TOKEN_ENV,
    PLAYERS_SOURCE_URL_ENV,
    DataPaths,
    football_data_token,
    players_source_url,
)
from .sources import (
    CompetitionEntry,
    FootballDataConfig,
    MatchWindow,
    OpenFootballConfig,
    PlayersSeedConfig,
    SourcesConfig,
    StatsBombConfig,
)

__all__ = [
    "DATA_DIR_ENV",
    "FOOTBALL_DATA_TOKEN_ENV",
    "PLAYERS_SOURCE_URL_ENV",
    "CompetitionEntry",
    "DataPaths",
    "FootballDataConfig",
    "MatchWindow",
    "OpenFootballConfig",
    "PlayersSeedConfig",
    "SourcesConfig",
    "StatsBombConfig",
    "football_data_token",
    "players_source_url",
]
