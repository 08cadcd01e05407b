"""Locations of the JSON data files the jobs read and write."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from playersb.errors import ConfigError

DATA_DIR_ENV = "PLAYERSB_DATA_DIR"
FOOTBALL_DATA_TOKEN_ENV = "FOOTBALL_DATA_API_TOKEN"
PLAYERS_SOURCE_URL_ENV = "PLAYERS_SOURCE_URL"

DEFAULT_SEED_NAME = "players-soccer-v1.json"


@dataclass(frozen=True)
class DataPaths:
    root: Path

    @classmethod
    def resolve(cls, root: Optional[Union[str, Path]] = None) -> "DataPaths":
        if root is None:
            root = os.getenv(DATA_DIR_ENV) or "data"
        return cls(Path(root))

    @property
    def sources(self) -> Path:
        return self.root / "sources.json"

    @property
    def players(self) -> Path:
        return self.root / "players.json"

    @property
    def fantasy(self) -> Path:
        return self.root / "fantasy.json"

    @property
    def fixtures(self) -> Path:
        return self.root / "fixtures.json"

    @property
    def standings(self) -> Path:
        return self.root / "standings.json"

    @property
    def archive(self) -> Path:
        return self.root / "archive.json"

    @property
    def current(self) -> Path:
        return self.root / "current.json"

    @property
    def history(self) -> Path:
        return self.root / "history.json"

    @property
    def players_source(self) -> Path:
        return self.root / "players-source.json"

    @property
    def openfootball_sources(self) -> Path:
        return self.root / "openfootball-sources.json"

    def seed(self, configured: Optional[str] = None) -> Path:
        if configured:
            candidate = Path(configured)
            if candidate.is_absolute():
                return candidate
            # configs written for the repo root still say "data/..."
            if candidate.parts and candidate.parts[0] == self.root.name:
                return self.root.parent / candidate
            return self.root / candidate
        return self.root / DEFAULT_SEED_NAME

    def relative(self, configured: str) -> Path:
        candidate = Path(configured)
        if candidate.is_absolute():
            return candidate
        return self.root.parent / candidate


def football_data_token() -> str:
    token = os.getenv(FOOTBALL_DATA_TOKEN_ENV, "").strip()
    if not token:
        raise ConfigError(f"{FOOTBALL_DATA_TOKEN_ENV} is required to fetch football-data.org data")
    return token


def players_source_url() -> Optional[str]:
    url = os.getenv(PLAYERS_SOURCE_URL_ENV, "").strip()
    return url or None
