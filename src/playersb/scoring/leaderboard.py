"""Fantasy leaderboard rows built from the scorer feed or the snapshot."""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional

from pydantic import BaseModel

from playersb.identity import collation_key
from playersb.ingest.rows import DEFAULT_ALIASES, AliasMap, normalize_player
from playersb.models import PlayerRecord

from .metrics import StandingsSignals


class LeaderboardEntry(BaseModel):
    id: str
    name: str
    position: str
    team: str
    competition: str = ""
    g90: float
    a90: float
    s90: float
    form_score: float
    value_score: float
    league_difficulty: float = 1.0
    team_form: float = 1.0


def _competition_of(raw: Any) -> Optional[Any]:
    if isinstance(raw, Mapping):
        return raw.get("competition")
    return None


def _competition_label(competition: Any) -> str:
    if isinstance(competition, Mapping):
        return str(competition.get("name") or competition.get("code") or "").strip()
    if competition is None:
        return ""
    return str(competition).strip()


def build_leaderboard(
    rows: Iterable[Any],
    signals: StandingsSignals | None = None,
    *,
    aliases: AliasMap = DEFAULT_ALIASES,
    limit: int | None = None,
) -> List[LeaderboardEntry]:
    """Score every usable row and order by form score, best first."""

    signals = signals or StandingsSignals.empty()
    entries: List[LeaderboardEntry] = []
    for raw in rows:
        record = raw if isinstance(raw, PlayerRecord) else normalize_player(raw, aliases)
        if record is None:
            continue
        competition = _competition_of(raw)
        result = signals.score(record, competition)
        entries.append(
            LeaderboardEntry(
                id=record.id,
                name=record.name,
                position=record.position,
                team=record.team,
                competition=_competition_label(competition),
                g90=result.g90,
                a90=result.a90,
                s90=result.s90,
                form_score=result.form_score,
                value_score=result.value_score,
                league_difficulty=result.league_difficulty,
                team_form=result.team_form,
            )
        )

    entries.sort(key=lambda entry: collation_key(entry.name))
    entries.sort(key=lambda entry: entry.form_score, reverse=True)
    if limit is not None:
        return entries[: max(0, limit)]
    return entries


def leaderboard_source(feed_players: List[Any], snapshot_players: List[Any]) -> tuple[List[Any], str]:
    """Prefer the scorer feed; fall back to the seeded snapshot players."""

    if feed_players:
        return feed_players, "fantasy"
    return snapshot_players, "players"
