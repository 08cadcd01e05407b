"""StatsBomb open-data and openfootball clients for the match archive."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

import httpx

from .base import JsonClient
from .football_data import _get, _str

STATSBOMB_BASE = "https://raw.githubusercontent.com/statsbomb/open-data/master/data"


class StatsBombClient(JsonClient):
    def __init__(
        self,
        *,
        base_url: str = STATSBOMB_BASE,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        super().__init__(base_url, transport=transport)

    def competitions(self) -> List[Dict[str, Any]]:
        payload = self.get_json("/competitions.json")
        return [item for item in payload if isinstance(item, Mapping)] if isinstance(payload, list) else []

    def matches(self, competition_id: Any, season_id: Any) -> List[Dict[str, Any]]:
        payload = self.get_json(f"/matches/{competition_id}/{season_id}.json")
        if not isinstance(payload, list):
            return []
        return [normalize_statsbomb_match(item) for item in payload]


def normalize_statsbomb_match(match: Any) -> Dict[str, Any]:
    return {
        "date": _get(match, "match_date"),
        "kickOff": _get(match, "kick_off"),
        "homeTeam": _str(_get(match, "home_team", "home_team_name")),
        "awayTeam": _str(_get(match, "away_team", "away_team_name")),
        "homeScore": _get(match, "home_score"),
        "awayScore": _get(match, "away_score"),
        "stage": _str(_get(match, "competition_stage", "name")),
        "stadium": _str(_get(match, "stadium", "name")),
        "referee": _str(_get(match, "referee", "name")),
    }


def parse_openfootball_matches(payload: Any) -> List[Any]:
    """openfootball files list matches flat or grouped under ``rounds``."""

    if not isinstance(payload, Mapping):
        return []
    if isinstance(payload.get("matches"), list):
        return payload["matches"]
    if isinstance(payload.get("rounds"), list):
        return [match for round_ in payload["rounds"] for match in (_get(round_, "matches") or [])]
    return []


def _first(match: Any, *keys: str) -> str:
    for key in keys:
        value = _str(_get(match, key))
        if value:
            return value
    return ""


def normalize_openfootball_match(match: Any) -> Dict[str, Any]:
    score = _get(match, "score")
    full_time = _get(score, "ft")
    if isinstance(full_time, list) and len(full_time) >= 2:
        score_text = f"{full_time[0]}-{full_time[1]}"
    else:
        score_text = _str(full_time or _get(score, "final") or "")
    return {
        "date": _get(match, "date") or _get(match, "utcDate"),
        "homeTeam": _first(match, "team1", "home", "home_team", "homeTeam"),
        "awayTeam": _first(match, "team2", "away", "away_team", "awayTeam"),
        "score": score_text,
        "group": _first(match, "group", "round", "stage"),
    }
