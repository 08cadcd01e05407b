"""Per-90 rates and the league/form adjusted fantasy scores."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from statistics import fmean
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import ValidationError

from playersb.identity import slugify
from playersb.models import CompetitionStandings, PlayerRecord, StandingRow


logger = logging.getLogger(__name__)

MULTIPLIER_FLOOR = 0.85
MULTIPLIER_CEILING = 1.15
NEUTRAL_FORM = 0.5
FORM_WINDOW = 5

GOAL_WEIGHT = 4.0
ASSIST_WEIGHT = 3.0
SHOT_WEIGHT = 0.5

_FORM_POINTS = {"W": 1.0, "D": 0.5, "L": 0.0}
_FORM_SPLIT = re.compile(r"[,\s]+")


def per90(count: float, minutes: float) -> float:
    if minutes <= 0:
        return 0.0
    return count / (minutes / 90)


def rescale(value: float, low: float, high: float) -> float:
    """Map ``value`` from ``[low, high]`` into the multiplier band."""

    if high <= low:
        return 1.0
    span = MULTIPLIER_CEILING - MULTIPLIER_FLOOR
    scaled = MULTIPLIER_FLOOR + span * (value - low) / (high - low)
    return min(MULTIPLIER_CEILING, max(MULTIPLIER_FLOOR, scaled))


def parse_form(form: Optional[str]) -> List[str]:
    """Split a form string (``"W,D,L"`` or ``"WDL"``) into at most five results."""

    if not form:
        return []
    tokens = [token for token in _FORM_SPLIT.split(form.strip().upper()) if token]
    if len(tokens) == 1 and len(tokens[0]) > 1:
        tokens = list(tokens[0])
    results = [token for token in tokens if token in _FORM_POINTS]
    return results[:FORM_WINDOW]


def form_average(form: Optional[str]) -> float:
    results = parse_form(form)
    if not results:
        return NEUTRAL_FORM
    return fmean(_FORM_POINTS[result] for result in results)


def team_form_multiplier(form: Optional[str]) -> float:
    """Map a form string onto ``[MULTIPLIER_FLOOR, MULTIPLIER_CEILING]``.

    The range is the fixed form domain (0 = all losses, 1 = all wins), not
    the min/max of the teams in the current standings, so the multiplier for
    a given form never shifts between snapshots and unknown form is exactly 1.
    """

    return rescale(form_average(form), 0.0, 1.0)


@dataclass(frozen=True)
class PlayerScore:
    g90: float
    a90: float
    s90: float
    base_score: float
    form_score: float
    value_score: float
    league_difficulty: float
    team_form: float


def score(record: PlayerRecord, league_difficulty: float = 1.0, team_form: float = 1.0) -> PlayerScore:
    """Score one player.

    ``league_difficulty`` and ``team_form`` are already-normalized multipliers
    (see :class:`StandingsSignals`). Value ignores team form on purpose: it
    tracks the player's own output.
    """

    g90 = per90(record.goals, record.minutes)
    a90 = per90(record.assists, record.minutes)
    s90 = per90(record.shots, record.minutes)
    base = g90 * GOAL_WEIGHT + a90 * ASSIST_WEIGHT + s90 * SHOT_WEIGHT
    return PlayerScore(
        g90=g90,
        a90=a90,
        s90=s90,
        base_score=base,
        form_score=base * league_difficulty * team_form,
        value_score=(g90 + a90) * 90 * league_difficulty,
        league_difficulty=league_difficulty,
        team_form=team_form,
    )


def _competition_keys(competition: Any) -> List[str]:
    if competition is None:
        return []
    if isinstance(competition, Mapping):
        candidates = [
            competition.get("slug"),
            competition.get("code"),
            competition.get("name"),
            competition.get("id"),
        ]
    elif isinstance(competition, (str, int)):
        candidates = [competition]
    else:
        candidates = [getattr(competition, attr, None) for attr in ("slug", "code", "name", "id")]
    keys = []
    for candidate in candidates:
        key = slugify(candidate)
        if key and key not in keys:
            keys.append(key)
    return keys


def _league_rows(entry: CompetitionStandings) -> List[StandingRow]:
    totals = [block for block in entry.standings if block.type.upper() == "TOTAL"]
    blocks = totals or entry.standings
    return [row for block in blocks for row in block.table]


class StandingsSignals:
    """League difficulty and team form lookups derived from one standings snapshot."""

    def __init__(
        self,
        league_ppg: Mapping[str, float] | None = None,
        team_forms: Mapping[str, Mapping[str, str]] | None = None,
        competition_aliases: Mapping[str, str] | None = None,
    ) -> None:
        self._league_ppg = dict(league_ppg or {})
        self._team_forms = {key: dict(forms) for key, forms in (team_forms or {}).items()}
        self._aliases = dict(competition_aliases or {})
        values = list(self._league_ppg.values())
        self._ppg_low = min(values) if values else 0.0
        self._ppg_high = max(values) if values else 0.0

    @classmethod
    def empty(cls) -> "StandingsSignals":
        return cls()

    @classmethod
    def from_payload(cls, payload: Any) -> "StandingsSignals":
        """Build signals from ``standings.json`` (or its ``competitions`` list)."""

        if isinstance(payload, Mapping):
            entries: Iterable[Any] = payload.get("competitions") or []
        elif isinstance(payload, list):
            entries = payload
        else:
            entries = []

        league_ppg: Dict[str, float] = {}
        team_forms: Dict[str, Dict[str, str]] = {}
        aliases: Dict[str, str] = {}
        for raw in entries:
            try:
                entry = CompetitionStandings.model_validate(raw)
            except ValidationError as exc:
                logger.warning("Skipping malformed standings entry: %s", exc.errors()[:1])
                continue
            keys = _competition_keys(entry.competition)
            if not keys:
                continue
            primary = keys[0]
            for key in keys:
                aliases.setdefault(key, primary)

            rows = _league_rows(entry)
            points = sum(row.points or 0 for row in rows)
            played = sum(row.played_games or 0 for row in rows)
            if played > 0:
                league_ppg[primary] = points / played

            forms = team_forms.setdefault(primary, {})
            for row in rows:
                team_key = slugify(row.team.name)
                if team_key and row.form:
                    forms.setdefault(team_key, row.form)
        return cls(league_ppg, team_forms, aliases)

    def _resolve(self, competition: Any) -> Optional[str]:
        for key in _competition_keys(competition):
            if key in self._aliases:
                return self._aliases[key]
            if key in self._league_ppg or key in self._team_forms:
                return key
        return None

    def league_difficulty(self, competition: Any) -> float:
        key = self._resolve(competition)
        if key is None or key not in self._league_ppg:
            return 1.0
        return rescale(self._league_ppg[key], self._ppg_low, self._ppg_high)

    def team_form(self, team: str, competition: Any = None) -> float:
        team_key = slugify(team)
        if not team_key:
            return team_form_multiplier(None)
        key = self._resolve(competition)
        if key is not None and team_key in self._team_forms.get(key, {}):
            return team_form_multiplier(self._team_forms[key][team_key])
        for forms in self._team_forms.values():
            if team_key in forms:
                return team_form_multiplier(forms[team_key])
        return team_form_multiplier(None)

    def score(self, record: PlayerRecord, competition: Any = None) -> PlayerScore:
        return score(
            record,
            league_difficulty=self.league_difficulty(competition),
            team_form=self.team_form(record.team, competition),
        )
