"""HTTP clients for the upstream football feeds."""

from .archive import (
    STATSBOMB_BASE,
    StatsBombClient,
    normalize_openfootball_match,
    normalize_statsbomb_match,
    parse_openfootball_matches,
)
from .base import USER_AGENT, JsonClient
from .football_data import (
    FOOTBALL_DATA_BASE,
    FootballDataClient,
    normalize_competition,
    normalize_match,
    normalize_scorer,
    normalize_standing,
    summarize_scorer,
)
from .players_source import DEFAULT_SOURCE_URL, fetch_player_source, source_rows

__all__ = [
    "DEFAULT_SOURCE_URL",
    "FOOTBALL_DATA_BASE",
    "STATSBOMB_BASE",
    "USER_AGENT",
    "FootballDataClient",
    "JsonClient",
    "StatsBombClient",
    "fetch_player_source",
    "normalize_competition",
    "normalize_match",
    "normalize_openfootball_match",
    "normalize_scorer",
    "normalize_standing",
    "normalize_statsbomb_match",
    "parse_openfootball_matches",
    "source_rows",
    "summarize_scorer",
]
