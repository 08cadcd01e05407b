import json
from pathlib import Path

import pytest

from playersb.config import DataPaths, SourcesConfig, football_data_token, players_source_url
from playersb.errors import ConfigError, DataFileError


def test_sources_config_defaults_when_file_missing(tmp_path: Path):
    config = SourcesConfig.load(tmp_path / "sources.json")

    assert config.football_data.scope_codes() is None
    assert config.football_data.match_window.past == 7
    assert config.football_data.match_window.future == 14
    assert config.statsbomb.enabled is True
    assert config.players_seed.path is None


def test_sources_config_parses_camel_case(tmp_path: Path):
    path = tmp_path / "sources.json"
    path.write_text(
        json.dumps(
            {
                "footballData": {
                    "competitionScope": ["PL", {"code": "BL1"}, 2019],
                    "matchWindowDays": {"past": 3, "future": 5},
                    "limitMatches": 40,
                },
                "statsbomb": {"enabled": False, "limitMatches": 10},
                "openfootball": {"sourcesPath": "data/of.json"},
                "playersSeed": {"path": "data/seed.json"},
            }
        ),
        encoding="utf-8",
    )

    config = SourcesConfig.load(path)

    assert config.football_data.scope_codes() == ["PL", "BL1", "2019"]
    assert config.football_data.match_window.past == 3
    assert config.football_data.limit_matches == 40
    assert config.statsbomb.enabled is False
    assert config.openfootball.sources_path == "data/of.json"
    assert config.players_seed.path == "data/seed.json"


def test_legacy_competitions_list_narrows_scope(tmp_path: Path):
    path = tmp_path / "sources.json"
    path.write_text(json.dumps({"footballData": {"competitions": [{"code": "PL", "label": "Premier League"}]}}))

    assert SourcesConfig.load(path).football_data.scope_codes() == ["PL"]


def test_malformed_sources_config_is_fatal(tmp_path: Path):
    path = tmp_path / "sources.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(DataFileError):
        SourcesConfig.load(path)


def test_data_paths_resolve_from_env(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("PLAYERSB_DATA_DIR", str(tmp_path))
    paths = DataPaths.resolve()

    assert paths.players == tmp_path / "players.json"
    assert paths.seed() == tmp_path / "players-soccer-v1.json"


def test_data_paths_seed_accepts_repo_relative_paths(tmp_path: Path):
    paths = DataPaths(tmp_path / "data")

    assert paths.seed("data/seed.json") == tmp_path / "data" / "seed.json"
    assert paths.seed("seed.json") == tmp_path / "data" / "seed.json"


def test_football_data_token_required(monkeypatch):
    monkeypatch.delenv("FOOTBALL_DATA_API_TOKEN", raising=False)
    with pytest.raises(ConfigError):
        football_data_token()
    monkeypatch.setenv("FOOTBALL_DATA_API_TOKEN", " abc ")
    assert football_data_token() == "abc"


def test_players_source_url_blank_is_none(monkeypatch):
    monkeypatch.setenv("PLAYERS_SOURCE_URL", "  ")
    assert players_source_url() is None
