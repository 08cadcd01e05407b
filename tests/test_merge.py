import random

import pytest

from playersb.ingest import merge_players, merge_players_with_report
from playersb.models import PlayerRecord


COUNTERS = ("minutes", "goals", "assists", "shots", "shots_on_target")

_FIRST = ["Harry", "Bukayo", "Erling", "Mohamed", "Son", "Kevin", "Martin", "Ollie", "Cole", "Jarrod"]
_LAST = ["Kane", "Saka", "Haaland", "Salah", "Heung-min", "De Bruyne", "Ødegaard", "Watkins", "Palmer", "Bowen"]
_TEAMS = ["Arsenal", "Chelsea", "Liverpool", "Unknown", "", None]
_POSITIONS = ["FW", "MF", "DF", "FW/MF", "N/A", "", None]


def _random_row(rng: random.Random) -> dict:
    row = {
        "name": f"{rng.choice(_FIRST)} {rng.choice(_LAST)}",
        "team": rng.choice(_TEAMS),
        "position": rng.choice(_POSITIONS),
        "minutes": rng.choice([0, rng.randint(0, 3420), "n/a", None, float(rng.randint(0, 3420))]),
        "goals": rng.randint(0, 30),
        "assists": rng.choice([rng.randint(0, 20), "7", None]),
        "shots": rng.randint(0, 120),
        "shotsOnTarget": rng.randint(0, 60),
    }
    if rng.random() < 0.1:
        row["name"] = ""
    return row


def _batch(rng: random.Random, size: int) -> list[dict]:
    return [_random_row(rng) for _ in range(size)]


def test_merge_scenario_takes_max_per_counter():
    existing = [
        {"id": "kane", "name": "Harry Kane", "minutes": 900, "goals": 10, "assists": 2, "shots": 30, "shotsOnTarget": 15}
    ]
    incoming = [
        {"id": "kane", "name": "Harry Kane", "minutes": 950, "goals": 9, "assists": 3, "shots": 28, "shotsOnTarget": 16}
    ]

    merged = merge_players(existing, incoming)

    assert len(merged) == 1
    kane = merged[0]
    assert kane.id == "kane"
    assert (kane.minutes, kane.goals, kane.assists, kane.shots, kane.shots_on_target) == (950, 10, 3, 30, 16)


def test_empty_incoming_returns_existing_unchanged():
    existing = [{"id": "kane", "name": "Harry Kane", "goals": "10"}]

    merged = merge_players(existing, [])

    assert merged is existing
    assert merged == [{"id": "kane", "name": "Harry Kane", "goals": "10"}]


def test_merge_prefers_specific_strings_and_keeps_prior_name():
    existing = [PlayerRecord(id="saka", name="Bukayo Saka", position="FW", team="Arsenal")]
    incoming = [
        {"id": "saka", "name": "B. Saka", "position": "", "team": "Unknown"},
        {"id": "saka", "name": "B. Saka", "position": "RW", "team": ""},
    ]

    merged = merge_players(existing, incoming)

    assert merged[0].name == "Bukayo Saka"
    assert merged[0].position == "RW"
    assert merged[0].team == "Arsenal"


def test_merge_adds_new_players_sorted_by_name():
    existing = [{"name": "Mohamed Salah"}, {"name": "Ángel Di María"}]
    incoming = [{"name": "Bukayo Saka"}, {"name": "Zeki Çelik"}]

    merged, report = merge_players_with_report(existing, incoming)

    assert [player.name for player in merged] == ["Ángel Di María", "Bukayo Saka", "Mohamed Salah", "Zeki Çelik"]
    assert report.new_players == 2
    assert report.matched_players == 0
    assert report.total_players == 4
    assert report.new_player_ids == ["bukayo-saka", "zeki-celik"]


def test_merge_ties_keep_existing_before_new_entries():
    existing = [{"id": "a-smith", "name": "Smith"}, {"id": "b-smith", "name": "Smith"}]
    incoming = [{"id": "c-smith", "name": "Smith"}, {"id": "b-smith", "name": "Smith", "goals": 2}]

    merged = merge_players(existing, incoming)

    assert [player.id for player in merged] == ["a-smith", "b-smith", "c-smith"]


def test_rows_without_identity_never_reach_the_merged_set():
    merged, report = merge_players_with_report(
        [{"name": "Harry Kane"}],
        [{"name": "", "goals": 40}, {"id": "", "name": "   "}, {"name": "Ollie Watkins"}],
    )

    assert [player.id for player in merged] == ["harry-kane", "ollie-watkins"]
    assert report.dropped_rows == 2
    assert all(player.id and player.name for player in merged)


def test_existing_duplicates_collapse_under_the_same_policy():
    merged = merge_players(
        [{"id": "kane", "name": "Harry Kane", "goals": 5}, {"id": "kane", "name": "H. Kane", "goals": 8}],
        [{"id": "other", "name": "Other Player"}],
    )
    kane = next(player for player in merged if player.id == "kane")
    assert kane.name == "Harry Kane"
    assert kane.goals == 8


@pytest.mark.parametrize("seed", range(25))
def test_merge_is_idempotent(seed):
    rng = random.Random(seed)
    existing = _batch(rng, rng.randint(0, 15))
    feed = _batch(rng, rng.randint(1, 15))
    # bias the feed towards identities that already exist
    feed.extend(dict(row, goals=rng.randint(0, 30)) for row in existing[: rng.randint(0, len(existing))])

    once = merge_players(existing, feed)
    twice = merge_players(once, feed)

    assert twice == once


@pytest.mark.parametrize("seed", range(25))
def test_shared_counters_equal_the_maximum(seed):
    rng = random.Random(1000 + seed)
    existing = merge_players([], _batch(rng, 12))
    feed = [
        {
            "id": player.id,
            "name": player.name,
            "minutes": rng.randint(0, 3420),
            "goals": rng.randint(0, 30),
            "assists": rng.randint(0, 20),
            "shots": rng.randint(0, 120),
            "shotsOnTarget": rng.randint(0, 60),
        }
        for player in existing
    ]

    merged = {player.id: player for player in merge_players(existing, feed)}

    for before, row in zip(existing, feed):
        after = merged[before.id]
        for counter, key in zip(COUNTERS, ("minutes", "goals", "assists", "shots", "shotsOnTarget")):
            expected = max(getattr(before, counter), row[key])
            assert getattr(after, counter) == expected
