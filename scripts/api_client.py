"""Lightweight REST client for the playersb data API."""

from __future__ import annotations

import argparse
import json

import httpx


def main() -> None:
    parser = argparse.ArgumentParser(description="Query the playersb REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("--player", metavar="PLAYER_ID", help="Fetch one player and exit")
    parser.add_argument("--team", help="Filter the player list by team")
    parser.add_argument("--position", help="Filter the player list by position")
    parser.add_argument("--leaderboard", action="store_true", help="Fetch the fantasy leaderboard")
    parser.add_argument("--limit", type=int, default=20, help="Leaderboard rows to request")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        if args.player:
            resp = client.get(f"/players/{args.player}")
            if resp.status_code == 404:
                raise SystemExit(f"player {args.player} not found")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return

        if args.leaderboard:
            resp = client.get("/leaderboard", params={"limit": args.limit})
            resp.raise_for_status()
            payload = resp.json()
            print(f"Leaderboard source: {payload['source']}")
            for rank, row in enumerate(payload["players"], start=1):
                print(f"{rank:>3}. {row['name']} ({row['team']}) form={row['form_score']:.2f}")
            return

        params = {key: value for key, value in (("team", args.team), ("position", args.position)) if value}
        resp = client.get("/players", params=params)
        resp.raise_for_status()
        payload = resp.json()
        print(f"{payload['total_players']} players (snapshot {payload['generated_at']})")
        for player in payload["players"]:
            print(f"- {player['name']} [{player['position']}] {player['team']}")


if __name__ == "__main__":
    main()
