"""Helpers for the testing-history page."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from models import HistoryEntry, Player
from tier_schemes import RANKED_TIERS

# Worst tier first.
TIER_SCALE: tuple[str, ...] = tuple(reversed(RANKED_TIERS))
HIGH_TEST_FLOOR = "HT3"
AVATAR_BASE_URL = "https://mc-heads.net/avatar"


def tier_scale_index(tier: str | None) -> int:
    if not tier:
        return -1
    label = tier.strip().upper()
    return TIER_SCALE.index(label) if label in TIER_SCALE else -1


def is_high_test(entry: HistoryEntry) -> bool:
    return tier_scale_index(entry.new_tier) >= tier_scale_index(HIGH_TEST_FLOOR)


def is_successful(entry: HistoryEntry) -> bool:
    return tier_scale_index(entry.new_tier) > tier_scale_index(entry.old_tier)


def change_keyword(old_tier: str | None, new_tier: str | None) -> str:
    if not old_tier or not old_tier.strip():
        return "Initial tier set"
    old_index = tier_scale_index(old_tier)
    new_index = tier_scale_index(new_tier)
    if new_index > old_index:
        return "Promoted"
    if new_index < old_index:
        return "Demoted"
    return "Retained"


def avatar_url(username: str, uuid: str | None = None) -> str:
    return f"{AVATAR_BASE_URL}/{uuid or username}"


def format_timestamp(value: str) -> str:
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    date_part = f"{parsed.strftime('%b')} {parsed.day}, {parsed.year}"
    return f"{date_part} · {parsed.strftime('%I:%M %p')}"


def index_players(players: Iterable[Player]) -> dict[str, Player]:
    return {player.username.lower(): player for player in players if player.username}


@dataclass(frozen=True)
class HistoryRow:
    entry: HistoryEntry
    keyword: str
    high: bool
    success: bool
    tester_uuid: str | None
    tested_uuid: str | None

    @property
    def tested_avatar(self) -> str:
        return avatar_url(self.entry.tested, self.tested_uuid)

    @property
    def tester_avatar(self) -> str:
        return avatar_url(self.entry.tester, self.tester_uuid)


def build_history_rows(entries: Iterable[HistoryEntry], players: Iterable[Player]) -> list[HistoryRow]:
    lookup = index_players(players)

    def _uuid(username: str) -> str | None:
        player = lookup.get(username.lower())
        return player.uuid if player and player.uuid else None

    return [
        HistoryRow(
            entry=entry,
            keyword=change_keyword(entry.old_tier, entry.new_tier),
            high=is_high_test(entry),
            success=is_successful(entry),
            tester_uuid=_uuid(entry.tester),
            tested_uuid=_uuid(entry.tested),
        )
        for entry in entries
    ]
