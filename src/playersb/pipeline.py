"""Batch jobs: fetch upstream feeds, build and sync the players snapshot."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Callable, Dict, List, Optional

import httpx

from playersb.clients import (
    DEFAULT_SOURCE_URL,
    FootballDataClient,
    JsonClient,
    StatsBombClient,
    fetch_player_source,
    normalize_openfootball_match,
    normalize_scorer,
    parse_openfootball_matches,
    source_rows,
    summarize_scorer,
)
from playersb.config import DataPaths, SourcesConfig, players_source_url
from playersb.errors import FetchError
from playersb.identity import collation_key, slugify
from playersb.ingest import (
    DEFAULT_ALIASES,
    FREE_SOURCE_ALIASES,
    SCORER_ALIASES,
    MergeReport,
    merge_players_with_report,
)
from playersb.models import PlayerSnapshot, utc_timestamp
from playersb.scoring import LeaderboardEntry, StandingsSignals, build_leaderboard, leaderboard_source
from playersb.storage import list_field, load_snapshot, read_json, save_snapshot, write_json


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FootballDataSummary:
    competitions: int
    matches: int
    scorer_rows: int
    failed: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ArchiveSummary:
    entries: int
    statsbomb_status: str
    openfootball_status: str


@dataclass(frozen=True)
class SyncSummary:
    changed: bool
    incoming_rows: int
    report: MergeReport


def _select_competitions(competitions: List[Dict[str, Any]], codes: Optional[List[str]]) -> List[Dict[str, Any]]:
    selected = []
    for comp in competitions:
        if comp.get("id") is None:
            continue
        if codes is None or any(
            code in (comp.get("code"), comp.get("name"), str(comp.get("id"))) for code in codes
        ):
            selected.append(comp)
    return selected


def _source_meta(generated_at: str, count: int, **extra: Any) -> Dict[str, Any]:
    meta = {"status": "ok", "fetchedAt": generated_at, "competitionCount": count}
    meta.update(extra)
    return {"footballData": meta}


def fetch_football_data(
    paths: DataPaths,
    config: SourcesConfig,
    client: FootballDataClient,
    *,
    today: Optional[date] = None,
) -> FootballDataSummary:
    """Pull fixtures, standings and scorers one competition at a time.

    A failure for one competition is logged and recorded on that
    competition's slice; the remaining competitions still run.
    """

    fd_config = config.football_data
    competitions = _select_competitions(client.competitions(), fd_config.scope_codes())

    today = today or date.today()
    date_from = (today - timedelta(days=fd_config.match_window.past)).isoformat()
    date_to = (today + timedelta(days=fd_config.match_window.future)).isoformat()
    limit = fd_config.limit_matches

    fixtures_out: List[Dict[str, Any]] = []
    standings_out: List[Dict[str, Any]] = []
    fantasy_players: List[Dict[str, Any]] = []
    failed: List[str] = []

    for competition in competitions:
        label = competition.get("name") or competition.get("code") or str(competition["id"])

        try:
            matches = client.matches(competition["id"], date_from=date_from, date_to=date_to)
            if limit and limit > 0:
                matches = matches[:limit]
            fixtures_out.append({"competition": competition, "matchCount": len(matches), "matches": matches})
        except FetchError as exc:
            logger.warning("fixtures: failed for %s: %s", label, exc)
            failed.append(f"fixtures:{label}")
            fixtures_out.append(
                {"competition": competition, "matchCount": 0, "matches": [], "error": str(exc)}
            )

        try:
            standings = client.standings(competition["id"])
            standings_out.append(
                {
                    "competition": competition,
                    "season": standings["season"] or competition.get("currentSeason"),
                    "standings": standings["standings"],
                }
            )
        except FetchError as exc:
            logger.warning("standings: failed for %s: %s", label, exc)
            failed.append(f"standings:{label}")
            standings_out.append(
                {
                    "competition": competition,
                    "season": competition.get("currentSeason"),
                    "standings": [],
                    "error": str(exc),
                }
            )

        try:
            for scorer in client.scorers(competition["id"]):
                entry = normalize_scorer(scorer, competition)
                if entry["name"]:
                    fantasy_players.append(entry)
        except FetchError as exc:
            logger.warning("fantasy: scorers failed for %s: %s", label, exc)
            failed.append(f"scorers:{label}")

    generated_at = utc_timestamp()
    write_json(
        paths.fixtures,
        {
            "generatedAt": generated_at,
            "competitions": fixtures_out,
            "sources": _source_meta(generated_at, len(fixtures_out), dateFrom=date_from, dateTo=date_to),
        },
    )
    write_json(
        paths.standings,
        {
            "generatedAt": generated_at,
            "competitions": standings_out,
            "sources": _source_meta(generated_at, len(standings_out)),
        },
    )
    write_json(
        paths.fantasy,
        {
            "generatedAt": generated_at,
            "players": fantasy_players,
            "sources": _source_meta(generated_at, len(standings_out)),
        },
    )
    logger.info(
        "football-data: %d competitions, %d scorer rows, %d failed requests",
        len(competitions),
        len(fantasy_players),
        len(failed),
    )
    return FootballDataSummary(
        competitions=len(competitions),
        matches=sum(item["matchCount"] for item in fixtures_out),
        scorer_rows=len(fantasy_players),
        failed=failed,
    )


def _archive_entry(competition: Dict[str, str], season: Dict[str, str]) -> Dict[str, Any]:
    return {
        "competition": competition,
        "season": season,
        "sources": [],
        "matches": {"statsbomb": [], "openfootball": []},
    }


def _openfootball_labels(source: Dict[str, Any], payload: Any) -> tuple[str, str, str]:
    """Competition, season and country names for one openfootball file."""

    data = payload if isinstance(payload, dict) else {}
    payload_name = str(data.get("name") or "").strip()
    competition = data.get("competition")
    nested_name = competition.get("name") if isinstance(competition, dict) else None
    comp_name = str(source.get("competition") or nested_name or payload_name).strip()
    # "English Premier League 2015/16" -> season "2015/16"
    season_name = str(
        source.get("season") or data.get("season") or (payload_name.split(" ")[-1] if payload_name else "")
    ).strip()
    return comp_name, season_name, str(data.get("country") or "").strip()


def fetch_archive(
    paths: DataPaths,
    config: SourcesConfig,
    statsbomb: StatsBombClient,
    openfootball: JsonClient,
) -> ArchiveSummary:
    """Build ``archive.json`` from StatsBomb seasons plus openfootball files."""

    sb_config = config.statsbomb
    of_config = config.openfootball
    sources_path = (
        paths.relative(of_config.sources_path) if of_config.sources_path else paths.openfootball_sources
    )
    of_sources = list_field(read_json(sources_path, default={"sources": []}), "sources")

    entries: Dict[str, Dict[str, Any]] = {}
    meta: Dict[str, Dict[str, Any]] = {
        "statsbomb": {"status": "pending"},
        "openfootball": {"status": "pending"},
    }

    if sb_config.enabled:
        try:
            competitions = statsbomb.competitions()
        except FetchError as exc:
            logger.warning("statsbomb: competitions failed: %s", exc)
            meta["statsbomb"] = {"status": "error", "message": str(exc)}
        else:
            for competition in competitions:
                comp_name = str(competition.get("competition_name") or "").strip()
                season_name = str(competition.get("season_name") or "").strip()
                if not comp_name or not season_name:
                    continue
                comp_slug, season_slug = slugify(comp_name), slugify(season_name)
                key = f"{comp_slug}__{season_slug}"
                entry = entries.get(key) or _archive_entry(
                    {
                        "name": comp_name,
                        "slug": comp_slug,
                        "country": str(competition.get("country_name") or "").strip(),
                    },
                    {"name": season_name, "slug": season_slug},
                )
                try:
                    matches = statsbomb.matches(competition.get("competition_id"), competition.get("season_id"))
                    if sb_config.limit_matches and sb_config.limit_matches > 0:
                        matches = matches[: sb_config.limit_matches]
                    entry["matches"]["statsbomb"] = matches
                except FetchError as exc:
                    logger.warning("statsbomb: matches failed for %s %s: %s", comp_name, season_name, exc)
                    entry["error"] = str(exc)
                if "statsbomb" not in entry["sources"]:
                    entry["sources"].append("statsbomb")
                entries[key] = entry
            meta["statsbomb"] = {
                "status": "ok",
                "fetchedAt": utc_timestamp(),
                "competitionCount": len(entries),
            }

    if of_config.enabled and of_sources:
        for source in of_sources:
            url = source.get("url") if isinstance(source, dict) else None
            if not url:
                continue
            try:
                payload = openfootball.get_json(url)
            except FetchError as exc:
                logger.warning("openfootball: failed for %s: %s", url, exc)
                continue
            comp_name, season_name, country = _openfootball_labels(source, payload)
            comp_slug = slugify(comp_name or source.get("id") or "openfootball")
            season_slug = slugify(season_name or "season")
            key = f"{comp_slug}__{season_slug}"
            entry = entries.get(key) or _archive_entry(
                {"name": comp_name or "OpenFootball", "slug": comp_slug, "country": country},
                {"name": season_name or "Season", "slug": season_slug},
            )
            entry["matches"]["openfootball"] = [
                normalize_openfootball_match(match) for match in parse_openfootball_matches(payload)
            ]
            if "openfootball" not in entry["sources"]:
                entry["sources"].append("openfootball")
            entries[key] = entry
        meta["openfootball"] = {
            "status": "ok",
            "fetchedAt": utc_timestamp(),
            "sourceCount": len(of_sources),
        }

    ordered = sorted(
        entries.values(),
        key=lambda item: (collation_key(item["competition"]["name"]), collation_key(item["season"]["name"])),
    )
    write_json(paths.archive, {"generatedAt": utc_timestamp(), "entries": ordered, "sources": meta})
    logger.info("archive: %d entries", len(ordered))
    return ArchiveSummary(
        entries=len(ordered),
        statsbomb_status=meta["statsbomb"]["status"],
        openfootball_status=meta["openfootball"]["status"],
    )


DEFAULT_CURRENT_MATCH_LIMIT = 120


@dataclass(frozen=True)
class CurrentSummary:
    competitions: int
    failed: List[str] = field(default_factory=list)


def _current_targets(config: SourcesConfig) -> List[tuple[str, str]]:
    fd_config = config.football_data
    if fd_config.competitions:
        return [(entry.code, entry.label or entry.code) for entry in fd_config.competitions]
    return [(code, code) for code in fd_config.scope_codes() or []]


def _current_match(match: Dict[str, Any]) -> Dict[str, Any]:
    score = match["score"]
    return {
        "id": match["id"],
        "utcDate": match["utcDate"],
        "status": match["status"],
        "stage": match["stage"],
        "group": match["group"],
        "matchday": match["matchday"],
        "homeTeam": match["homeTeam"]["name"],
        "awayTeam": match["awayTeam"]["name"],
        "score": {
            "winner": score["winner"] or None,
            "fullTime": score["fullTime"] or {},
            "halfTime": score["halfTime"] or {},
        },
    }


def _current_standing(block: Dict[str, Any]) -> Dict[str, Any]:
    table = [dict(row, team=row["team"]["name"]) for row in block["table"]]
    return dict(block, table=table)


def _soft_fetch(kind: str, code: str, call: Callable[[str], Any], errors: List[str], failed: List[str]) -> Any:
    try:
        return call(code)
    except FetchError as exc:
        logger.warning("current: %s failed for %s: %s", kind, code, exc)
        failed.append(f"{kind}:{code}")
        errors.append(str(exc))
        return []


def build_current(paths: DataPaths, config: SourcesConfig, client: FootballDataClient) -> CurrentSummary:
    """Write ``current.json``: table, recent matches and top scorers per configured competition.

    Competitions come from ``footballData.competitions`` (or an explicit
    ``competitionScope`` list). Each request is fail-soft; a failed one
    leaves that part empty and is listed under the competition's ``errors``.
    """

    limit = config.football_data.limit_matches or DEFAULT_CURRENT_MATCH_LIMIT
    targets = _current_targets(config)
    if not targets:
        logger.warning("current: no competitions configured; writing an empty current.json")

    competitions: Dict[str, Dict[str, Any]] = {}
    failed: List[str] = []
    for code, label in targets:
        errors: List[str] = []
        standings = _soft_fetch("standings", code, client.standings, errors, failed)
        matches = _soft_fetch("matches", code, client.matches, errors, failed)
        scorers = _soft_fetch("scorers", code, client.scorers, errors, failed)
        if isinstance(standings, dict):
            standings = standings["standings"]

        entry = {
            "code": code,
            "label": label,
            "fetched_at": utc_timestamp(),
            "standings": [_current_standing(block) for block in standings],
            "matches": [_current_match(match) for match in matches[: max(0, limit)]],
            "scorers": [summarize_scorer(scorer) for scorer in scorers],
        }
        if errors:
            entry["errors"] = errors
        competitions[code] = entry

    write_json(paths.current, {"generated_at": utc_timestamp(), "competitions": competitions})
    logger.info("current: %d competitions, %d failed requests", len(competitions), len(failed))
    return CurrentSummary(competitions=len(competitions), failed=failed)


def build_snapshot(paths: DataPaths, config: SourcesConfig) -> PlayerSnapshot:
    """Rebuild ``players.json`` from the seed file plus ``current.json`` and ``history.json``."""

    seed_path = paths.seed(config.players_seed.path)
    seed_rows = list_field(read_json(seed_path), "players")
    players, report = merge_players_with_report([], seed_rows, aliases=DEFAULT_ALIASES)

    current = read_json(paths.current, default={"competitions": {}})
    history = read_json(paths.history, default={"players_history": []})
    snapshot = PlayerSnapshot(
        generated_at=utc_timestamp(),
        players=list(players),
        competitions=(current.get("competitions") if isinstance(current, dict) else None) or {},
        history=(history.get("players_history") if isinstance(history, dict) else None) or [],
    )
    save_snapshot(paths.players, snapshot)
    logger.info("snapshot: %d players from %s (%d dropped)", len(players), seed_path, report.dropped_rows)
    return snapshot


def _write_merged(paths: DataPaths, snapshot: PlayerSnapshot, players: List[Any]) -> None:
    updated = snapshot.model_copy(update={"generated_at": utc_timestamp(), "players": list(players)})
    save_snapshot(paths.players, updated)


def sync_players_from_fantasy(paths: DataPaths) -> SyncSummary:
    """Fold the scorer feed into ``players.json``; an empty feed leaves it untouched."""

    snapshot = load_snapshot(paths.players)
    feed_rows = list_field(read_json(paths.fantasy, default={}), "players")
    if not feed_rows:
        logger.info("sync: no fantasy players found; players.json unchanged")
        _, report = merge_players_with_report(snapshot.players, [])
        return SyncSummary(changed=False, incoming_rows=0, report=report)

    merged, report = merge_players_with_report(snapshot.players, feed_rows, aliases=SCORER_ALIASES)
    _write_merged(paths, snapshot, list(merged))
    logger.info(
        "sync: merged %d fantasy rows into %d players (%d new)",
        len(feed_rows),
        report.total_players,
        report.new_players,
    )
    return SyncSummary(changed=True, incoming_rows=len(feed_rows), report=report)


def fetch_players(
    paths: DataPaths,
    *,
    dry_run: bool = False,
    local_only: bool = False,
    transport: Optional[httpx.BaseTransport] = None,
) -> SyncSummary:
    """Ingest the free player source and merge it into ``players.json``.

    Source order: ``PLAYERS_SOURCE_URL``, the local ``players-source.json``,
    the default openfootball dump. ``local_only`` never touches the network
    and falls back to re-normalizing ``players.json`` itself.
    """

    env_url = players_source_url()
    if not local_only and env_url:
        payload = fetch_player_source(env_url, transport=transport)
    elif paths.players_source.exists():
        payload = read_json(paths.players_source)
    elif not local_only:
        payload = fetch_player_source(DEFAULT_SOURCE_URL, transport=transport)
    else:
        payload = read_json(paths.players)

    rows = source_rows(payload)
    snapshot = load_snapshot(paths.players)
    merged, report = merge_players_with_report(snapshot.players, rows, aliases=FREE_SOURCE_ALIASES)
    changed = bool(rows)

    if dry_run:
        logger.info("players: fetched %d rows (dry-run)", len(rows))
        return SyncSummary(changed=False, incoming_rows=len(rows), report=report)
    if changed:
        _write_merged(paths, snapshot, list(merged))
    logger.info("players: wrote %d players from %d source rows", report.total_players, len(rows))
    return SyncSummary(changed=changed, incoming_rows=len(rows), report=report)


def compute_leaderboard(paths: DataPaths, *, limit: Optional[int] = None) -> tuple[List[LeaderboardEntry], str]:
    """Score the fantasy feed (or snapshot players) against current standings."""

    snapshot = load_snapshot(paths.players)
    feed_rows = list_field(read_json(paths.fantasy, default={}), "players")
    signals = StandingsSignals.from_payload(read_json(paths.standings, default={}))
    rows, source = leaderboard_source(feed_rows, snapshot.players)
    return build_leaderboard(rows, signals, limit=limit), source
