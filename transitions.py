"""Row position snapshots and the deltas used to slide rows after a re-rank."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Protocol

DEFAULT_ROW_HEIGHT = 72.0
DEFAULT_ROW_GAP = 10.0


@dataclass(frozen=True)
class Rect:
    top: float
    left: float
    width: float = 0.0
    height: float = 0.0


@dataclass(frozen=True)
class Delta:
    dx: float
    dy: float


PositionSnapshot = dict[str, Rect]


class RowGeometry(Protocol):
    def get_rect(self, key: str) -> Rect | None: ...


def capture_positions(geometry: RowGeometry, keys: Iterable[str]) -> PositionSnapshot:
    snapshot: PositionSnapshot = {}
    for key in keys:
        rect = geometry.get_rect(key)
        if rect is not None:
            snapshot[key] = rect
    return snapshot


def compute_deltas(before: PositionSnapshot, after: PositionSnapshot) -> dict[str, Delta]:
    """Offset each surviving row by where it was, relative to where it is now.

    Rows missing from either snapshot and rows that did not move are left out.
    """
    deltas: dict[str, Delta] = {}
    for key, old_rect in before.items():
        new_rect = after.get(key)
        if new_rect is None:
            continue
        dx = old_rect.left - new_rect.left
        dy = old_rect.top - new_rect.top
        if dx == 0 and dy == 0:
            continue
        deltas[key] = Delta(dx=dx, dy=dy)
    return deltas


def rows_moved(delta: Delta, pitch: float) -> int:
    """Signed row count for a vertical delta; positive means the row moved up."""
    if pitch <= 0:
        raise ValueError("pitch must be positive")
    return int(round(delta.dy / pitch))


class TableLayout:
    """Geometry for list surfaces that stack rows at a fixed height."""

    def __init__(
        self,
        *,
        row_height: float = DEFAULT_ROW_HEIGHT,
        gap: float = DEFAULT_ROW_GAP,
        width: float = 0.0,
    ) -> None:
        self.row_height = row_height
        self.gap = gap
        self.width = width
        self._rects: PositionSnapshot = {}

    @property
    def pitch(self) -> float:
        return self.row_height + self.gap

    @property
    def keys(self) -> list[str]:
        return list(self._rects)

    def commit(self, keys: Iterable[str]) -> None:
        self._rects = {
            key: Rect(top=index * self.pitch, left=0.0, width=self.width, height=self.row_height)
            for index, key in enumerate(keys)
        }

    def clear(self) -> None:
        self._rects = {}

    def get_rect(self, key: str) -> Rect | None:
        return self._rects.get(key)
