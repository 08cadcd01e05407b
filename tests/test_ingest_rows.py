import json
import math

import pytest

from playersb.ingest import (
    FREE_SOURCE_ALIASES,
    SCORER_ALIASES,
    PlayerRow,
    merge_players,
    normalize_player,
    normalize_players,
    to_number,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, 0),
        ("", 0),
        ("12", 12),
        ("12.5", 12.5),
        (7.0, 7),
        ("abc", 0),
        (math.nan, 0),
        (math.inf, 0),
        (-3, 0),
        (True, 1),
        ([], 0),
    ],
)
def test_to_number_coerces_anything(raw, expected):
    assert to_number(raw) == expected


@pytest.mark.parametrize("raw", ["1_000", "١٢", "0x10", "1,000", "inf", "nan"])
def test_to_number_rejects_non_decimal_text(raw):
    assert to_number(raw) == 0


def test_to_number_accepts_exponent_and_padding():
    assert to_number(" 1e3 ") == 1000
    assert to_number("+.5") == 0.5


def test_oversized_counters_become_zero():
    assert to_number(10**400) == 0

    record = normalize_player(json.loads('{"name": "Harry Kane", "goals": 1' + "0" * 400 + ', "assists": 3}'))

    assert record is not None
    assert record.goals == 0
    assert record.assists == 3


def test_merge_survives_oversized_counters():
    merged = merge_players(
        [{"id": "kane", "name": "Harry Kane", "minutes": 900}],
        [{"id": "kane", "name": "Harry Kane", "minutes": 10**400, "goals": 2}],
    )

    assert len(merged) == 1
    assert merged[0].minutes == 900
    assert merged[0].goals == 2


def test_normalize_player_defaults_sentinels():
    record = normalize_player({"name": "  Harry Kane ", "goals": "10", "minutes": None})

    assert record is not None
    assert record.id == "harry-kane"
    assert record.name == "Harry Kane"
    assert record.position == "N/A"
    assert record.team == "Unknown"
    assert record.minutes == 0
    assert record.goals == 10


def test_normalize_player_prefers_explicit_id():
    record = normalize_player({"id": "Kane", "name": "Harry Kane"})
    assert record.id == "kane"


def test_normalize_player_falls_back_to_name_when_id_has_no_slug():
    record = normalize_player({"id": "***", "name": "Son Heung-min"})
    assert record.id == "son-heung-min"


def test_free_source_aliases_are_probed_in_order():
    raw = {
        "slug": "martin-odegaard",
        "full_name": "Martin Ødegaard",
        "pos": "MF",
        "club": "Arsenal",
        "mins": "2100",
        "gls": 8,
        "ast": "10",
        "sh": 55,
        "sot": 20,
    }
    record = normalize_player(raw, FREE_SOURCE_ALIASES)

    assert record.id == "martin-odegaard"
    assert record.name == "Martin Ødegaard"
    assert record.position == "MF"
    assert record.team == "Arsenal"
    assert (record.minutes, record.goals, record.assists) == (2100, 8, 10)
    assert (record.shots, record.shots_on_target) == (55, 20)


def test_first_present_alias_wins_and_blank_values_are_skipped():
    row = PlayerRow.from_mapping({"team": "  ", "club": "Roma", "name": "Paulo Dybala"}, FREE_SOURCE_ALIASES)
    assert row.raw_team == "Roma"


def test_scorer_rows_estimate_minutes_from_matches():
    record = normalize_player(
        {"id": "erling-haaland", "name": "Erling Haaland", "playedMatches": 10, "goals": 14},
        SCORER_ALIASES,
    )
    assert record.minutes == 900


def test_scorer_rows_keep_explicit_minutes_estimate():
    record = normalize_player(
        {"name": "Erling Haaland", "minutesEstimate": 810, "playedMatches": 10},
        SCORER_ALIASES,
    )
    assert record.minutes == 810


def test_nested_team_objects_use_their_name():
    record = normalize_player({"name": "Bukayo Saka", "team": {"id": 57, "name": "Arsenal FC"}})
    assert record.team == "Arsenal FC"


@pytest.mark.parametrize(
    "raw",
    [
        {"name": "", "goals": 3},
        {"name": "   "},
        {"id": "", "name": "!!!"},
        {},
        None,
        "not a row",
        ["kane"],
    ],
)
def test_rows_without_identity_are_dropped(raw):
    assert normalize_player(raw) is None


def test_row_with_id_but_no_name_is_dropped():
    assert normalize_player({"id": "ghost"}) is None


def test_normalize_players_filters_unusable_rows():
    records = normalize_players(
        [
            {"name": "Declan Rice", "team": "Arsenal"},
            {"name": ""},
            {"name": "William Saliba", "position": "DF"},
        ]
    )
    assert [record.id for record in records] == ["declan-rice", "william-saliba"]
