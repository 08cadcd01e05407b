"""Input adapters that normalize and reconcile raw player rows."""

from .merge import MergeReport, combine_records, merge_players, merge_players_with_report
from .rows import (
    DEFAULT_ALIASES,
    FREE_SOURCE_ALIASES,
    SCORER_ALIASES,
    SEED_ALIASES,
    PlayerRow,
    normalize_player,
    normalize_players,
    row_to_record,
    to_number,
)

__all__ = [
    "DEFAULT_ALIASES",
    "FREE_SOURCE_ALIASES",
    "SCORER_ALIASES",
    "SEED_ALIASES",
    "MergeReport",
    "PlayerRow",
    "combine_records",
    "merge_players",
    "merge_players_with_report",
    "normalize_player",
    "normalize_players",
    "row_to_record",
    "to_number",
]
