"""Read-only REST API over the players snapshot."""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Query

from playersb.api.schemas import LeaderboardResponse, PlayerListResponse
from playersb.config import DataPaths
from playersb.errors import DataFileError
from playersb.identity import slugify
from playersb.ingest import normalize_players
from playersb.models import PlayerRecord, PlayerSnapshot
from playersb.pipeline import compute_leaderboard
from playersb.storage import load_snapshot


logger = logging.getLogger(__name__)


def create_app(paths: DataPaths | None = None) -> FastAPI:
    app = FastAPI(title="playersb data API")
    data_paths = paths or DataPaths.resolve()

    def _snapshot() -> PlayerSnapshot:
        try:
            return load_snapshot(data_paths.players)
        except DataFileError as exc:
            logger.warning("players snapshot unavailable: %s", exc)
            raise HTTPException(status_code=503, detail=f"players snapshot unavailable: {exc.reason}") from exc

    def _players(snapshot: PlayerSnapshot) -> list[PlayerRecord]:
        return normalize_players(snapshot.players)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/players", response_model=PlayerListResponse, response_model_by_alias=True)
    async def list_players(
        team: str | None = Query(None),
        position: str | None = Query(None),
    ):
        snapshot = _snapshot()
        players = _players(snapshot)
        if team:
            team_key = slugify(team)
            players = [player for player in players if slugify(player.team) == team_key]
        if position:
            wanted = position.strip().upper()
            players = [player for player in players if wanted in (pos.upper() for pos in player.positions)]
        return PlayerListResponse(
            generated_at=snapshot.generated_at,
            total_players=len(players),
            players=players,
        )

    @app.get("/players/{player_id}", response_model=PlayerRecord, response_model_by_alias=True)
    async def get_player(player_id: str):
        key = slugify(player_id)
        for player in _players(_snapshot()):
            if player.id == key:
                return player
        raise HTTPException(status_code=404, detail="Player not found")

    @app.get("/leaderboard", response_model=LeaderboardResponse)
    async def leaderboard(limit: int | None = Query(None, ge=1)):
        try:
            entries, source = compute_leaderboard(data_paths, limit=limit)
        except DataFileError as exc:
            logger.warning("leaderboard unavailable: %s", exc)
            raise HTTPException(status_code=503, detail=f"leaderboard unavailable: {exc.reason}") from exc
        return LeaderboardResponse(source=source, total_players=len(entries), players=entries)

    return app
