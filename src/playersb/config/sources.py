"""``sources.json``: which upstream feeds to pull and how much of them."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from playersb.errors import DataFileError


class _Section(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class MatchWindow(_Section):
    past: int = Field(default=7, ge=0)
    future: int = Field(default=14, ge=0)


class CompetitionEntry(_Section):
    code: str
    label: Optional[str] = None


class FootballDataConfig(_Section):
    competition_scope: Union[Literal["all"], List[Union[str, int, CompetitionEntry]]] = Field(
        default="all", alias="competitionScope"
    )
    competitions: List[CompetitionEntry] = Field(default_factory=list)
    match_window: MatchWindow = Field(default_factory=MatchWindow, alias="matchWindowDays")
    limit_matches: Optional[int] = Field(default=None, alias="limitMatches")

    def scope_codes(self) -> Optional[List[str]]:
        """Codes/names/ids that select competitions; ``None`` selects all."""

        scope = self.competition_scope
        if scope == "all":
            if self.competitions:
                return [entry.code for entry in self.competitions]
            return None
        codes: List[str] = []
        for entry in scope:
            code = entry.code if isinstance(entry, CompetitionEntry) else str(entry)
            code = code.strip()
            if code:
                codes.append(code)
        return codes


class StatsBombConfig(_Section):
    enabled: bool = True
    limit_matches: Optional[int] = Field(default=None, alias="limitMatches")


class OpenFootballConfig(_Section):
    enabled: bool = True
    sources_path: Optional[str] = Field(default=None, alias="sourcesPath")


class PlayersSeedConfig(_Section):
    path: Optional[str] = None


class SourcesConfig(_Section):
    football_data: FootballDataConfig = Field(default_factory=FootballDataConfig, alias="footballData")
    statsbomb: StatsBombConfig = Field(default_factory=StatsBombConfig)
    openfootball: OpenFootballConfig = Field(default_factory=OpenFootballConfig)
    players_seed: PlayersSeedConfig = Field(default_factory=PlayersSeedConfig, alias="playersSeed")

    @classmethod
    def load(cls, path: Path) -> "SourcesConfig":
        """Load ``path``; an absent file means defaults, a broken one is fatal."""

        if not path.exists():
            return cls()
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise DataFileError(path, f"unreadable sources config ({exc})") from exc
        try:
            return cls.model_validate(data or {})
        except ValidationError as exc:
            raise DataFileError(path, f"invalid sources config ({exc.error_count()} errors)") from exc
