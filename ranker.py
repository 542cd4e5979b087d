"""Deterministic scoring and tie-aware ranking for the tier list."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from models import Player, ScoredPlayer
from tier_schemes import MODES, OVERALL, FilterMode, TierScheme, parse_filter, tier_order_index

RankKey = tuple[int, ...]


@dataclass(frozen=True)
class RankedEntry:
    player: ScoredPlayer
    rank: int
    key: RankKey


def compute_points(player: Player, scheme: TierScheme) -> int:
    return sum(scheme.points_for(player.tier(mode)) for mode in MODES)


def score_players(players: Iterable[Player], scheme: TierScheme) -> list[ScoredPlayer]:
    """Score every record and return them in the base overall order."""
    scored = [ScoredPlayer(player=player, points=compute_points(player, scheme)) for player in players]
    return sorted(scored, key=lambda entry: -entry.points)


def comparison_key(player: ScoredPlayer, filter_mode: FilterMode) -> RankKey:
    if filter_mode == OVERALL:
        return (-player.points,)
    return (tier_order_index(player.tier(filter_mode)), -player.points)


def rank_players(players: Iterable[ScoredPlayer], filter_mode: str = OVERALL) -> list[RankedEntry]:
    active = parse_filter(filter_mode)
    keyed = [(comparison_key(player, active), player) for player in players]
    # list.sort is stable: equal keys keep their input order.
    keyed.sort(key=lambda item: item[0])

    entries: list[RankedEntry] = []
    for position, (key, player) in enumerate(keyed):
        if entries and entries[-1].key == key:
            rank = entries[-1].rank
        else:
            rank = position + 1
        entries.append(RankedEntry(player=player, rank=rank, key=key))
    return entries


def _method_description(filter_mode: FilterMode, scheme: TierScheme) -> str:
    if filter_mode == OVERALL:
        return f"Sorted by total points ({scheme.label} scheme), highest first."
    return (
        f"Sorted by {filter_mode} tier (HT1 first, unranked last), "
        f"then by total points ({scheme.label} scheme)."
    )


def leaderboard_payload(
    entries: list[RankedEntry],
    *,
    filter_mode: str,
    scheme: TierScheme,
    top_n: int | None = None,
) -> dict[str, Any]:
    active = parse_filter(filter_mode)
    shown = entries if top_n is None else entries[: max(0, top_n)]
    return {
        "filter": active,
        "scheme": scheme.name,
        "method": {
            "description": _method_description(active, scheme),
            "points": dict(scheme.points),
            "unranked_points": scheme.points_for(None),
            "tie_rule": "equal sort keys share a rank; the next distinct key takes its 1-indexed position",
        },
        "count": len(entries),
        "players": [
            {
                "rank": entry.rank,
                "uuid": entry.player.uuid,
                "username": entry.player.username,
                "points": entry.player.points,
                "tiers": {mode: entry.player.tier(mode) for mode in MODES},
            }
            for entry in shown
        ],
    }
