"""Per-90 metrics, standings signals and fantasy scoring."""

from .leaderboard import LeaderboardEntry, build_leaderboard, leaderboard_source
from .metrics import (
    MULTIPLIER_CEILING,
    MULTIPLIER_FLOOR,
    PlayerScore,
    StandingsSignals,
    form_average,
    parse_form,
    per90,
    rescale,
    score,
    team_form_multiplier,
)

__all__ = [
    "MULTIPLIER_CEILING",
    "MULTIPLIER_FLOOR",
    "LeaderboardEntry",
    "PlayerScore",
    "StandingsSignals",
    "build_leaderboard",
    "form_average",
    "leaderboard_source",
    "parse_form",
    "per90",
    "rescale",
    "score",
    "team_form_multiplier",
]
