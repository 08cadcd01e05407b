"""Standings payload models consumed by the scoring layer."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StandingTeam(BaseModel):
    id: Optional[int] = None
    name: str = ""
    tla: str = ""
    crest: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class StandingRow(BaseModel):
    """One team's line in a league table."""

    position: Optional[int] = None
    team: StandingTeam = Field(default_factory=StandingTeam)
    played_games: Optional[int] = Field(default=None, alias="playedGames")
    won: Optional[int] = None
    draw: Optional[int] = None
    lost: Optional[int] = None
    points: Optional[int] = None
    goals_for: Optional[int] = Field(default=None, alias="goalsFor")
    goals_against: Optional[int] = Field(default=None, alias="goalsAgainst")
    goal_difference: Optional[int] = Field(default=None, alias="goalDifference")
    form: str = ""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @field_validator("team", mode="before")
    @classmethod
    def _coerce_team(cls, value):
        # current.json stores the team as a bare name
        if isinstance(value, str):
            return {"name": value}
        return value or {}

    @field_validator("form", mode="before")
    @classmethod
    def _coerce_form(cls, value):
        return "" if value is None else str(value).strip()


class StandingsBlock(BaseModel):
    stage: str = ""
    type: str = ""
    group: str = ""
    table: List[StandingRow] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")

    @field_validator("stage", "type", "group", mode="before")
    @classmethod
    def _blank_strings(cls, value):
        return "" if value is None else str(value)


class CompetitionRef(BaseModel):
    id: Optional[int] = None
    code: str = ""
    name: str = ""
    slug: str = ""

    model_config = ConfigDict(extra="ignore")

    @field_validator("code", "name", "slug", mode="before")
    @classmethod
    def _blank_strings(cls, value):
        return "" if value is None else str(value)


class CompetitionStandings(BaseModel):
    competition: CompetitionRef = Field(default_factory=CompetitionRef)
    standings: List[StandingsBlock] = Field(default_factory=list)
    error: Optional[str] = None

    model_config = ConfigDict(extra="ignore")
