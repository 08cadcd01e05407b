import httpx
import pytest

from playersb.clients import (
    FootballDataClient,
    JsonClient,
    StatsBombClient,
    fetch_player_source,
    normalize_openfootball_match,
    normalize_scorer,
    parse_openfootball_matches,
    source_rows,
)
from playersb.errors import FetchError


def _football_data_handler(request: httpx.Request) -> httpx.Response:
    assert request.headers["X-Auth-Token"] == "secret"
    path = request.url.path
    if path.endswith("/competitions"):
        return httpx.Response(
            200,
            json={
                "competitions": [
                    {
                        "id": 2021,
                        "name": "Premier League",
                        "code": "PL",
                        "area": {"name": "England", "code": "ENG"},
                        "plan": "TIER_ONE",
                        "currentSeason": {"id": 1564, "startDate": "2024-08-16", "currentMatchday": 9},
                    }
                ]
            },
        )
    if path.endswith("/matches"):
        assert request.url.params["dateFrom"] == "2024-10-01"
        assert request.url.params["dateTo"] == "2024-10-20"
        return httpx.Response(
            200,
            json={
                "matches": [
                    {
                        "id": 1,
                        "utcDate": "2024-10-05T14:00:00Z",
                        "status": "FINISHED",
                        "homeTeam": {"id": 57, "name": "Arsenal FC", "tla": "ARS"},
                        "awayTeam": {"id": 61, "name": "Chelsea FC", "tla": "CHE"},
                        "score": {"winner": "HOME_TEAM", "fullTime": {"home": 2, "away": 1}},
                    }
                ]
            },
        )
    if path.endswith("/standings"):
        return httpx.Response(
            200,
            json={
                "season": {"id": 1564},
                "standings": [
                    {
                        "stage": "REGULAR_SEASON",
                        "type": "TOTAL",
                        "table": [
                            {"position": 1, "team": {"id": 57, "name": "Arsenal FC"}, "points": 19, "form": None}
                        ],
                    }
                ],
            },
        )
    return httpx.Response(404, text="not here")


def test_football_data_client_normalizes_payloads():
    with FootballDataClient("secret", transport=httpx.MockTransport(_football_data_handler)) as client:
        competitions = client.competitions()
        matches = client.matches(2021, date_from="2024-10-01", date_to="2024-10-20")
        standings = client.standings(2021)

    assert competitions[0]["slug"] == "premier-league"
    assert competitions[0]["area"] == {"name": "England", "code": "ENG"}
    assert competitions[0]["currentSeason"]["currentMatchday"] == 9
    assert matches[0]["homeTeam"]["name"] == "Arsenal FC"
    assert matches[0]["score"]["fullTime"] == {"home": 2, "away": 1}
    assert standings["season"] == {"id": 1564}
    row = standings["standings"][0]["table"][0]
    assert row["team"]["name"] == "Arsenal FC"
    assert row["form"] == ""


def test_non_200_raises_fetch_error():
    with FootballDataClient("secret", transport=httpx.MockTransport(_football_data_handler)) as client:
        with pytest.raises(FetchError) as excinfo:
            client.scorers(2021)

    assert excinfo.value.status_code == 404
    assert "404" in str(excinfo.value)


def test_invalid_json_raises_fetch_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>"))
    with JsonClient("https://example.test", transport=transport) as client:
        with pytest.raises(FetchError):
            client.get_json("/feed.json")


def test_transport_errors_raise_fetch_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("boom", request=request)

    with JsonClient("https://example.test", transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(FetchError):
            client.get_json("/feed.json")


def test_normalize_scorer_uses_name_slug_for_id():
    competition = {"id": 2021, "code": "PL", "name": "Premier League", "slug": "premier-league"}
    entry = normalize_scorer(
        {
            "player": {"id": 8004, "name": "Erling Haaland", "position": "Centre-Forward"},
            "team": {"id": 65, "name": "Manchester City FC"},
            "goals": 10,
            "assists": None,
            "playedMatches": 8,
        },
        competition,
    )

    assert entry["id"] == "erling-haaland"
    assert entry["sourceId"] == 8004
    assert entry["team"] == "Manchester City FC"
    assert entry["assists"] == 0
    assert entry["minutesEstimate"] == 720
    assert entry["competition"]["slug"] == "premier-league"


def test_normalize_scorer_without_matches_has_no_minutes():
    entry = normalize_scorer({"player": {"name": "A B"}, "goals": "3"}, {"id": 1})
    assert entry["minutesEstimate"] is None
    assert entry["goals"] == 3
    assert entry["competition"]["code"] == ""


def test_statsbomb_client_normalizes_matches():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path.endswith("/matches/43/3.json")
        return httpx.Response(
            200,
            json=[
                {
                    "match_date": "2018-07-15",
                    "home_team": {"home_team_name": "France"},
                    "away_team": {"away_team_name": "Croatia"},
                    "home_score": 4,
                    "away_score": 2,
                    "competition_stage": {"name": "Final"},
                }
            ],
        )

    with StatsBombClient(transport=httpx.MockTransport(handler)) as client:
        matches = client.matches(43, 3)

    assert matches[0]["homeTeam"] == "France"
    assert matches[0]["awayTeam"] == "Croatia"
    assert matches[0]["stage"] == "Final"
    assert matches[0]["referee"] == ""


def test_openfootball_rounds_and_scores():
    payload = {
        "name": "English Premier League 2015/16",
        "rounds": [
            {"name": "Matchday 1", "matches": [{"date": "2015-08-08", "team1": "Bournemouth", "team2": "Aston Villa", "score": {"ft": [0, 1]}}]},
            {"name": "Matchday 2", "matches": [{"date": "2015-08-15", "team1": "Aston Villa", "team2": "Man United"}]},
        ],
    }

    matches = [normalize_openfootball_match(match) for match in parse_openfootball_matches(payload)]

    assert len(matches) == 2
    assert matches[0]["score"] == "0-1"
    assert matches[0]["homeTeam"] == "Bournemouth"
    assert matches[1]["score"] == ""
    assert parse_openfootball_matches(["not", "a", "mapping"]) == []


def test_player_source_fetch_and_rows():
    transport = httpx.MockTransport(
        lambda request: httpx.Response(200, json={"players": [{"name": "Kane"}]})
    )

    payload = fetch_player_source("https://example.test/players.json", transport=transport)

    assert source_rows(payload) == [{"name": "Kane"}]
    assert source_rows([{"name": "x"}]) == [{"name": "x"}]
    assert source_rows({"players": "nope"}) == []


def test_matches_without_window_sends_no_dates():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path.endswith("/competitions/PL/matches")
        assert not request.url.params
        return httpx.Response(200, json={"matches": [{"id": 7}]})

    with FootballDataClient("secret", transport=httpx.MockTransport(handler)) as client:
        matches = client.matches("PL")

    assert [match["id"] for match in matches] == [7]
