"""football-data.org v4 client and payload normalizers."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

import httpx

from playersb.identity import slugify
from playersb.ingest.rows import to_number

from .base import JsonClient

FOOTBALL_DATA_BASE = "https://api.football-data.org/v4"


def _str(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _get(mapping: Any, *path: str) -> Any:
    current = mapping
    for key in path:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current


class FootballDataClient(JsonClient):
    def __init__(
        self,
        token: str,
        *,
        base_url: str = FOOTBALL_DATA_BASE,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        super().__init__(base_url, headers={"X-Auth-Token": token}, transport=transport)

    def competitions(self) -> List[Dict[str, Any]]:
        payload = self.get_json("/competitions")
        raw = payload.get("competitions") if isinstance(payload, Mapping) else None
        return [normalize_competition(item) for item in raw or []]

    def matches(
        self,
        competition_id: int | str,
        *,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        params = {key: value for key, value in (("dateFrom", date_from), ("dateTo", date_to)) if value}
        payload = self.get_json(f"/competitions/{competition_id}/matches", params=params or None)
        raw = payload.get("matches") if isinstance(payload, Mapping) else None
        return [normalize_match(item) for item in raw or []]

    def standings(self, competition_id: int | str) -> Dict[str, Any]:
        """Return ``{"season": ..., "standings": [...]}`` for one competition."""

        payload = self.get_json(f"/competitions/{competition_id}/standings")
        if not isinstance(payload, Mapping):
            return {"season": None, "standings": []}
        return {
            "season": payload.get("season"),
            "standings": [normalize_standing(item) for item in payload.get("standings") or []],
        }

    def scorers(self, competition_id: int | str) -> List[Any]:
        payload = self.get_json(f"/competitions/{competition_id}/scorers")
        raw = payload.get("scorers") if isinstance(payload, Mapping) else None
        return list(raw or [])


def normalize_competition(competition: Any) -> Dict[str, Any]:
    season = _get(competition, "currentSeason")
    name = _str(_get(competition, "name"))
    code = _str(_get(competition, "code") or _get(competition, "tla") or name)
    return {
        "id": _get(competition, "id"),
        "code": code,
        "name": name,
        "slug": slugify(name or code or _get(competition, "id")),
        "area": {
            "name": _str(_get(competition, "area", "name")),
            "code": _str(_get(competition, "area", "code")),
        },
        "plan": _str(_get(competition, "plan")),
        "currentSeason": {
            "id": season.get("id"),
            "startDate": season.get("startDate"),
            "endDate": season.get("endDate"),
            "currentMatchday": season.get("currentMatchday"),
        }
        if isinstance(season, Mapping)
        else None,
    }


def _team(side: Any) -> Dict[str, Any]:
    return {
        "id": _get(side, "id"),
        "name": _str(_get(side, "name")),
        "shortName": _str(_get(side, "shortName")),
        "tla": _str(_get(side, "tla")),
    }


def normalize_match(match: Any) -> Dict[str, Any]:
    return {
        "id": _get(match, "id"),
        "utcDate": _get(match, "utcDate"),
        "status": _str(_get(match, "status")),
        "matchday": _get(match, "matchday"),
        "stage": _str(_get(match, "stage")),
        "group": _str(_get(match, "group")),
        "homeTeam": _team(_get(match, "homeTeam")),
        "awayTeam": _team(_get(match, "awayTeam")),
        "score": {
            "winner": _str(_get(match, "score", "winner")),
            "duration": _str(_get(match, "score", "duration")),
            "fullTime": _get(match, "score", "fullTime") or None,
            "halfTime": _get(match, "score", "halfTime") or None,
        },
        "lastUpdated": _get(match, "lastUpdated"),
    }


def normalize_standing(standing: Any) -> Dict[str, Any]:
    table = _get(standing, "table")
    rows = []
    for row in table if isinstance(table, list) else []:
        rows.append(
            {
                "position": _get(row, "position"),
                "team": {
                    "id": _get(row, "team", "id"),
                    "name": _str(_get(row, "team", "name")),
                    "tla": _str(_get(row, "team", "tla")),
                    "crest": _get(row, "team", "crest"),
                },
                "playedGames": _get(row, "playedGames"),
                "won": _get(row, "won"),
                "draw": _get(row, "draw"),
                "lost": _get(row, "lost"),
                "points": _get(row, "points"),
                "goalsFor": _get(row, "goalsFor"),
                "goalsAgainst": _get(row, "goalsAgainst"),
                "goalDifference": _get(row, "goalDifference"),
                "form": _str(_get(row, "form")),
            }
        )
    return {
        "stage": _str(_get(standing, "stage")),
        "type": _str(_get(standing, "type")),
        "group": _str(_get(standing, "group")),
        "table": rows,
    }


def normalize_scorer(scorer: Any, competition: Mapping[str, Any]) -> Dict[str, Any]:
    """Shape one scorers entry as a fantasy feed row.

    The row ``id`` is the name slug so the feed joins the snapshot; the
    provider's numeric player id is kept as ``sourceId``.
    """

    name = _str(_get(scorer, "player", "name"))
    played = to_number(_get(scorer, "playedMatches") or _get(scorer, "played_matches"))
    return {
        "id": slugify(name),
        "sourceId": _get(scorer, "player", "id"),
        "name": name,
        "position": _str(_get(scorer, "player", "position")),
        "team": _str(_get(scorer, "team", "name")),
        "teamId": _get(scorer, "team", "id"),
        "competition": {
            "id": competition.get("id"),
            "code": competition.get("code") or "",
            "name": competition.get("name") or "",
            "slug": competition.get("slug") or "",
        },
        "goals": to_number(_get(scorer, "goals")),
        "assists": to_number(_get(scorer, "assists")),
        "playedMatches": played,
        "minutesEstimate": played * 90 if played > 0 else None,
    }


def summarize_scorer(scorer: Any) -> Dict[str, Any]:
    """Top-scorer line for ``current.json``; absent counts stay ``None``."""

    return {
        "player": _str(_get(scorer, "player", "name")),
        "team": _str(_get(scorer, "team", "name")),
        "goals": _get(scorer, "goals"),
        "assists": _get(scorer, "assists"),
        "penalties": _get(scorer, "penalties"),
    }
