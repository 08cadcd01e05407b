"""Per-source raw row schemas and the funnel that emits canonical records."""

from __future__ import annotations

import logging
import math
import re
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, ValidationError

from playersb.identity import slugify
from playersb.models import DEFAULT_POSITION, DEFAULT_TEAM, PlayerRecord


logger = logging.getLogger(__name__)

AliasMap = Mapping[str, Sequence[str]]

_DECIMAL = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

# Seed files and the persisted snapshot use the canonical field names.
SEED_ALIASES: AliasMap = {
    "id": ("id",),
    "name": ("name",),
    "position": ("position",),
    "team": ("team",),
    "minutes": ("minutes",),
    "goals": ("goals",),
    "assists": ("assists",),
    "shots": ("shots",),
    "shots_on_target": ("shotsOnTarget",),
}

# Rows written to fantasy.json from the football-data.org scorers endpoint.
SCORER_ALIASES: AliasMap = {
    "id": ("id",),
    "name": ("name",),
    "position": ("position",),
    "team": ("team",),
    "minutes": ("minutes", "minutesEstimate"),
    "played_matches": ("playedMatches", "played_matches"),
    "goals": ("goals",),
    "assists": ("assists",),
    "shots": ("shots",),
    "shots_on_target": ("shotsOnTarget",),
}

# Free player-data dumps (openfootball and friends).
FREE_SOURCE_ALIASES: AliasMap = {
    "id": ("id", "slug", "code"),
    "name": ("name", "full_name", "fullName"),
    "position": ("position", "pos", "role"),
    "team": ("team", "club", "currentTeam", "team_name"),
    "minutes": ("minutes", "mins"),
    "goals": ("goals", "gls"),
    "assists": ("assists", "ast"),
    "shots": ("shots", "sh"),
    "shots_on_target": ("shotsOnTarget", "sot"),
}


def _union_aliases(*maps: AliasMap) -> dict[str, tuple[str, ...]]:
    merged: dict[str, tuple[str, ...]] = {}
    for alias_map in maps:
        for field, aliases in alias_map.items():
            current = merged.get(field, ())
            merged[field] = current + tuple(a for a in aliases if a not in current)
    return merged


DEFAULT_ALIASES: AliasMap = _union_aliases(SEED_ALIASES, SCORER_ALIASES, FREE_SOURCE_ALIASES)


def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Mapping):
        # football-data.org nests names: {"team": {"id": 57, "name": "Arsenal FC"}}
        return _text(value.get("name"))
    return str(value).strip()


def to_number(value: Any) -> Union[int, float]:
    """Coerce ``value`` to a non-negative number; anything unusable becomes 0.

    Text must be a plain ASCII decimal (optionally with an exponent);
    digit-group underscores and non-ASCII digits count as unusable.
    """

    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except (OverflowError, ValueError):
            return 0
    else:
        text = str(value).strip()
        if not _DECIMAL.fullmatch(text):
            return 0
        try:
            number = float(text)
        except (OverflowError, ValueError):
            return 0
    if not math.isfinite(number) or number <= 0:
        return 0
    if number.is_integer():
        return int(number)
    return number


class PlayerRow(BaseModel):
    """Raw player row after alias resolution, before any coercion."""

    raw_id: Optional[str] = None
    raw_name: str = ""
    raw_position: str = ""
    raw_team: str = ""
    raw_minutes: Any = None
    raw_played_matches: Any = None
    raw_goals: Any = None
    raw_assists: Any = None
    raw_shots: Any = None
    raw_shots_on_target: Any = None

    @classmethod
    def from_mapping(cls, row: Any, aliases: AliasMap = DEFAULT_ALIASES) -> "PlayerRow":
        if not isinstance(row, Mapping):
            return cls()

        def extract(field: str) -> Any:
            for alias in aliases.get(field, ()):
                value = row.get(alias)
                if _is_present(value):
                    return value
            return None

        raw_id = extract("id")
        return cls(
            raw_id=_text(raw_id) if raw_id is not None else None,
            raw_name=_text(extract("name")),
            raw_position=_text(extract("position")),
            raw_team=_text(extract("team")),
            raw_minutes=extract("minutes"),
            raw_played_matches=extract("played_matches"),
            raw_goals=extract("goals"),
            raw_assists=extract("assists"),
            raw_shots=extract("shots"),
            raw_shots_on_target=extract("shots_on_target"),
        )


def row_to_record(row: PlayerRow) -> Optional[PlayerRecord]:
    """Build a canonical record, or ``None`` when the row has no identity."""

    name = row.raw_name.strip()
    record_id = slugify(row.raw_id) or slugify(name)
    if not record_id or not name:
        logger.debug("Dropping player row without identity: id=%r name=%r", row.raw_id, row.raw_name)
        return None

    if row.raw_minutes is not None:
        minutes = to_number(row.raw_minutes)
    else:
        minutes = to_number(row.raw_played_matches) * 90

    try:
        return PlayerRecord(
            id=record_id,
            name=name,
            position=row.raw_position or DEFAULT_POSITION,
            team=row.raw_team or DEFAULT_TEAM,
            minutes=minutes,
            goals=to_number(row.raw_goals),
            assists=to_number(row.raw_assists),
            shots=to_number(row.raw_shots),
            shots_on_target=to_number(row.raw_shots_on_target),
        )
    except ValidationError as exc:  # pragma: no cover - inputs are coerced above
        logger.debug("Dropping player row %r: %s", record_id, exc)
        return None


def normalize_player(raw: Any, aliases: AliasMap = DEFAULT_ALIASES) -> Optional[PlayerRecord]:
    return row_to_record(PlayerRow.from_mapping(raw, aliases))


def normalize_players(rows: Iterable[Any], aliases: AliasMap = DEFAULT_ALIASES) -> List[PlayerRecord]:
    records: List[PlayerRecord] = []
    for raw in rows:
        record = normalize_player(raw, aliases)
        if record is not None:
            records.append(record)
    return records
