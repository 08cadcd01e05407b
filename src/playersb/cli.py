"""Command-line interface for the playersb data jobs."""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

from playersb.clients import FootballDataClient, JsonClient, StatsBombClient
from playersb.config import DataPaths, SourcesConfig, football_data_token
from playersb.errors import PlayersbError
from playersb.pipeline import (
    build_current,
    build_snapshot,
    compute_leaderboard,
    fetch_archive,
    fetch_football_data,
    fetch_players,
    sync_players_from_fantasy,
)
from playersb.storage import write_json


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fetch, merge and score playersb data files")
    parser.add_argument("--data-dir", type=Path, default=None, help="Data directory (default: ./data)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("fetch-football-data", help="Fetch fixtures, standings and scorers")
    sub.add_parser("fetch-archive", help="Fetch StatsBomb and openfootball archive matches")

    players = sub.add_parser("fetch-players", help="Merge the free player source into players.json")
    players.add_argument("--dry-run", action="store_true", help="Report without writing")
    players.add_argument("--local", action="store_true", help="Never touch the network")

    sub.add_parser("build-current", help="Write current.json for the configured competitions")
    sub.add_parser("build-snapshot", help="Rebuild players.json from the seed file")
    sub.add_parser("sync-players", help="Merge fantasy.json scorers into players.json")

    board = sub.add_parser("leaderboard", help="Score players by per-90 form")
    board.add_argument("--limit", type=int, default=20, help="Rows to print")
    board.add_argument("--output", type=Path, default=None, help="Write the full leaderboard JSON here")

    run_all = sub.add_parser("run-all", help="Run the fetch/sync/score jobs in order, stopping on failure")
    run_all.add_argument("--offline", action="store_true", help="Skip the network fetch jobs")
    return parser.parse_args(argv)


def _cmd_fetch_football_data(paths: DataPaths, args: argparse.Namespace) -> None:
    config = SourcesConfig.load(paths.sources)
    with FootballDataClient(football_data_token()) as client:
        summary = fetch_football_data(paths, config, client)
    print(f"Fetched fixtures/standings for {summary.competitions} competitions.")
    print(f"Fetched fantasy scorers: {summary.scorer_rows} entries.")
    if summary.failed:
        print(f"Failed requests: {', '.join(summary.failed)}")


def _cmd_fetch_archive(paths: DataPaths, args: argparse.Namespace) -> None:
    config = SourcesConfig.load(paths.sources)
    with StatsBombClient() as statsbomb, JsonClient() as openfootball:
        summary = fetch_archive(paths, config, statsbomb, openfootball)
    print(
        f"Fetched archive entries: {summary.entries} "
        f"(statsbomb={summary.statsbomb_status}, openfootball={summary.openfootball_status})"
    )


def _cmd_fetch_players(paths: DataPaths, args: argparse.Namespace) -> None:
    dry_run = getattr(args, "dry_run", False)
    summary = fetch_players(paths, dry_run=dry_run, local_only=getattr(args, "local", False))
    suffix = " (dry-run)" if dry_run else ""
    print(f"Fetched {summary.incoming_rows} source rows -> {summary.report.total_players} players{suffix}.")


def _cmd_build_current(paths: DataPaths, args: argparse.Namespace) -> None:
    config = SourcesConfig.load(paths.sources)
    with FootballDataClient(football_data_token()) as client:
        summary = build_current(paths, config, client)
    print(f"Wrote {paths.current} with {summary.competitions} competitions.")
    if summary.failed:
        print(f"Failed requests: {', '.join(summary.failed)}")


def _cmd_build_snapshot(paths: DataPaths, args: argparse.Namespace) -> None:
    snapshot = build_snapshot(paths, SourcesConfig.load(paths.sources))
    print(f"Wrote {paths.players} with {len(snapshot.players)} players")


def _cmd_sync_players(paths: DataPaths, args: argparse.Namespace) -> None:
    summary = sync_players_from_fantasy(paths)
    if not summary.changed:
        print("No fantasy players found; players.json unchanged.")
        return
    print(
        f"Merged {summary.incoming_rows} fantasy rows into {summary.report.total_players} players "
        f"({summary.report.new_players} new)."
    )


def _cmd_leaderboard(paths: DataPaths, args: argparse.Namespace) -> None:
    entries, source = compute_leaderboard(paths)
    output = getattr(args, "output", None)
    if output:
        write_json(output, {"source": source, "players": [entry.model_dump() for entry in entries]})
        print(f"Wrote leaderboard with {len(entries)} players to {output}")
    limit = getattr(args, "limit", 20)
    print(f"Leaderboard ({source}, {len(entries)} players):")
    for rank, entry in enumerate(entries[: max(0, limit)], start=1):
        print(
            f"{rank:>3}. {entry.name} ({entry.team}) g90={entry.g90:.2f} a90={entry.a90:.2f} "
            f"s90={entry.s90:.2f} form={entry.form_score:.2f} value={entry.value_score:.2f}"
        )


Command = Callable[[DataPaths, argparse.Namespace], None]

COMMANDS: Dict[str, Command] = {
    "fetch-football-data": _cmd_fetch_football_data,
    "fetch-archive": _cmd_fetch_archive,
    "fetch-players": _cmd_fetch_players,
    "build-current": _cmd_build_current,
    "build-snapshot": _cmd_build_snapshot,
    "sync-players": _cmd_sync_players,
    "leaderboard": _cmd_leaderboard,
}

NETWORK_STEPS = ("fetch-football-data", "fetch-archive")


def run_all_steps(offline: bool = False) -> List[str]:
    steps = [] if offline else list(NETWORK_STEPS)
    if os.getenv("FETCH_PLAYERS") == "1":
        steps.append("fetch-players")
    steps.extend(["sync-players", "leaderboard"])
    return steps


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    paths = DataPaths.resolve(args.data_dir)

    if args.command == "run-all":
        steps = run_all_steps(args.offline)
    else:
        steps = [args.command]

    for step in steps:
        if len(steps) > 1:
            print(f"\n> {step}")
        try:
            COMMANDS[step](paths, args)
        except PlayersbError as exc:
            raise SystemExit(f"{step}: fatal: {exc}") from exc

    if args.command == "run-all":
        print("\nrun-all complete")


if __name__ == "__main__":
    main()
