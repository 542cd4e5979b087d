"""View controller that owns the leaderboard's filter, load state, and row snapshots."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Literal

from models import Player, ScoredPlayer
from ranker import RankedEntry, rank_players, score_players
from tier_schemes import OVERALL, FilterMode, TierScheme, parse_filter
from tierlist_client import TierListAPIError
from transitions import Delta, PositionSnapshot, RowGeometry, capture_positions, compute_deltas

LOGGER = logging.getLogger("tierlist.controller")

LoadState = Literal["loading", "ready", "error"]


class TierListController:
    """State for one mounted leaderboard view.

    The rendering side supplies row geometry and reports when a new layout has
    been committed; the controller turns those two snapshots into deltas.
    """

    def __init__(self, scheme: TierScheme, geometry: RowGeometry) -> None:
        self.scheme = scheme
        self.geometry = geometry
        self.state: LoadState = "loading"
        self.error: str | None = None
        self._mounted = False
        self._filter: FilterMode = OVERALL
        self._roster: list[ScoredPlayer] = []
        self._entries: list[RankedEntry] = []
        self._generation = 0
        self._pending: PositionSnapshot | None = None

    @property
    def mounted(self) -> bool:
        return self._mounted

    @property
    def filter(self) -> FilterMode:
        return self._filter

    @property
    def entries(self) -> list[RankedEntry]:
        return list(self._entries)

    @property
    def generation(self) -> int:
        return self._generation

    def mount(self) -> None:
        self._mounted = True
        self.state = "loading"
        self.error = None
        self._filter = OVERALL

    def unmount(self) -> None:
        self._mounted = False
        self._pending = None
        self._roster = []
        self._entries = []

    def _require_mounted(self) -> None:
        if not self._mounted:
            raise RuntimeError("TierListController is not mounted")

    def load(self, fetch_players: Callable[[], Iterable[Player]]) -> LoadState:
        """Run a single fetch; a store failure leaves the view in the error state."""
        self._require_mounted()
        self.state = "loading"
        self.error = None
        try:
            players = list(fetch_players())
        except TierListAPIError as exc:
            LOGGER.error("Failed to load players: %s", exc)
            self.state = "error"
            self.error = str(exc) or "Failed to load players"
            self._roster = []
            self._entries = []
            return self.state

        self.set_players(players)
        return self.state

    def set_players(self, players: Iterable[Player]) -> None:
        self._require_mounted()
        self._roster = score_players(players, self.scheme)
        self._filter = OVERALL
        self._pending = None
        self._entries = rank_players(self._roster, self._filter)
        self.state = "ready"
        LOGGER.info("Loaded %d players with %s scheme", len(self._roster), self.scheme.name)

    def request_filter(self, value: str) -> int:
        """Snapshot current rows, switch filter, re-rank. Returns the request generation."""
        self._require_mounted()
        new_filter = parse_filter(value)
        before = capture_positions(self.geometry, [entry.player.row_key for entry in self._entries])
        LOGGER.debug("Captured %d positions before switching to %s", len(before), new_filter)

        self._generation += 1
        self._pending = before
        self._filter = new_filter
        self._entries = rank_players(self._roster, new_filter)
        return self._generation

    def layout_committed(self, generation: int) -> dict[str, Delta]:
        """Diff the pending snapshot against the committed layout."""
        self._require_mounted()
        if generation != self._generation or self._pending is None:
            LOGGER.debug("Ignoring layout commit for stale generation %d", generation)
            return {}

        after = capture_positions(self.geometry, [entry.player.row_key for entry in self._entries])
        deltas = compute_deltas(self._pending, after)
        self._pending = None
        LOGGER.debug("Computed %d row deltas for generation %d", len(deltas), generation)
        return deltas
