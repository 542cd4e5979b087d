"""Read-only records fetched from the tier list store."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from tier_schemes import MODES, ModeKey, normalize_tier


def _score(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


@dataclass(frozen=True)
class Player:
    uuid: str
    username: str
    tiers: Mapping[ModeKey, str | None] = field(default_factory=dict)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Player":
        return cls(
            uuid=str(row.get("uuid") or ""),
            username=str(row.get("username") or ""),
            tiers={mode: _optional_str(row.get(mode)) for mode in MODES},
        )

    def tier(self, mode: ModeKey) -> str:
        return normalize_tier(self.tiers.get(mode))

    @property
    def row_key(self) -> str:
        return self.uuid or self.username


@dataclass(frozen=True)
class ScoredPlayer:
    player: Player
    points: int

    @property
    def uuid(self) -> str:
        return self.player.uuid

    @property
    def username(self) -> str:
        return self.player.username

    @property
    def row_key(self) -> str:
        return self.player.row_key

    def tier(self, mode: ModeKey) -> str:
        return self.player.tier(mode)


@dataclass(frozen=True)
class FightResult:
    player1: str
    player2: str
    score1: int
    score2: int
    tier1: str | None = None
    tier2: str | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "FightResult":
        return cls(
            player1=str(row.get("player1") or ""),
            player2=str(row.get("player2") or ""),
            score1=_score(row.get("score1")),
            score2=_score(row.get("score2")),
            tier1=_optional_str(row.get("tier1")),
            tier2=_optional_str(row.get("tier2")),
        )


@dataclass(frozen=True)
class HistoryEntry:
    time: str
    tester: str
    tested: str
    mode: str
    old_tier: str
    new_tier: str
    fights: tuple[FightResult, ...] = ()

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "HistoryEntry":
        fights = row.get("test_array") or []
        return cls(
            time=str(row.get("time") or ""),
            tester=str(row.get("tester") or ""),
            tested=str(row.get("tested") or ""),
            mode=str(row.get("mode") or "").lower(),
            old_tier=str(row.get("old_tier") or ""),
            new_tier=str(row.get("new_tier") or ""),
            fights=tuple(FightResult.from_row(fight) for fight in fights if isinstance(fight, Mapping)),
        )
