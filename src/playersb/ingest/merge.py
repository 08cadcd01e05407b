"""Reconcile canonical players with incoming feed batches by identity slug."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple

from playersb.identity import collation_key
from playersb.models import COUNTER_FIELDS, DEFAULT_POSITION, DEFAULT_TEAM, PlayerRecord

from .rows import DEFAULT_ALIASES, AliasMap, normalize_player


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MergeReport:
    total_players: int
    matched_players: int
    new_players: int
    dropped_rows: int
    new_player_ids: List[str] = field(default_factory=list)


def combine_records(prev: PlayerRecord, nxt: PlayerRecord) -> PlayerRecord:
    """Fold ``nxt`` into ``prev``.

    The prior name is kept, position/team only move off a default sentinel,
    and every counter takes the maximum of the two sides so replaying a feed
    never inflates totals.
    """

    update: dict[str, Any] = {
        "name": prev.name or nxt.name,
        "position": nxt.position if nxt.position != DEFAULT_POSITION else prev.position,
        "team": nxt.team if nxt.team != DEFAULT_TEAM else prev.team,
    }
    for counter in COUNTER_FIELDS:
        update[counter] = max(getattr(prev, counter), getattr(nxt, counter))
    return prev.model_copy(update=update)


def _index_existing(existing: Sequence[Any]) -> Tuple[Dict[str, PlayerRecord], int]:
    by_id: Dict[str, PlayerRecord] = {}
    dropped = 0
    for entry in existing:
        record = entry if isinstance(entry, PlayerRecord) else normalize_player(entry)
        if record is None:
            dropped += 1
            continue
        prev = by_id.get(record.id)
        by_id[record.id] = record if prev is None else combine_records(prev, record)
    return by_id, dropped


def merge_players_with_report(
    existing: Sequence[Any],
    incoming: Sequence[Any],
    *,
    aliases: AliasMap = DEFAULT_ALIASES,
) -> Tuple[Sequence[Any], MergeReport]:
    """Merge ``incoming`` raw rows into ``existing`` players.

    ``existing`` may hold :class:`PlayerRecord` instances or raw snapshot rows.
    An empty ``incoming`` batch returns ``existing`` itself so a failed fetch
    can never replace a good snapshot.
    """

    if not incoming:
        report = MergeReport(
            total_players=len(existing),
            matched_players=0,
            new_players=0,
            dropped_rows=0,
        )
        return existing, report

    by_id, dropped = _index_existing(existing)
    matched: set[str] = set()
    created: List[str] = []

    for raw in incoming:
        record = normalize_player(raw, aliases)
        if record is None:
            dropped += 1
            continue
        prev = by_id.get(record.id)
        if prev is None:
            by_id[record.id] = record
            created.append(record.id)
            continue
        if record.id not in created:
            matched.add(record.id)
        by_id[record.id] = combine_records(prev, record)

    merged = sorted(by_id.values(), key=lambda rec: collation_key(rec.name))
    if dropped:
        logger.debug("Dropped %d player rows without identity during merge", dropped)

    report = MergeReport(
        total_players=len(merged),
        matched_players=len(matched),
        new_players=len(created),
        dropped_rows=dropped,
        new_player_ids=created,
    )
    return merged, report


def merge_players(
    existing: Sequence[Any],
    incoming: Sequence[Any],
    *,
    aliases: AliasMap = DEFAULT_ALIASES,
) -> Sequence[Any]:
    merged, _ = merge_players_with_report(existing, incoming, aliases=aliases)
    return merged
