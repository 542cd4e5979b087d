"""
Tests for row snapshots, deltas, and the table layout geometry.
"""

import pytest

from models import Player
from transitions import (
    Delta,
    Rect,
    TableLayout,
    capture_positions,
    compute_deltas,
    rows_moved,
)


class TestComputeDeltas:
    """Geometric diff between two snapshots"""

    def test_swapped_rows(self):
        before = {"A": Rect(top=100, left=0), "B": Rect(top=0, left=0)}
        after = {"A": Rect(top=0, left=0), "B": Rect(top=100, left=0)}

        assert compute_deltas(before, after) == {
            "A": Delta(dx=0, dy=100),
            "B": Delta(dx=0, dy=-100),
        }

    def test_unchanged_rows_are_skipped(self):
        rect = Rect(top=40, left=12, width=300, height=72)
        assert compute_deltas({"A": rect}, {"A": Rect(top=40, left=12, width=300, height=72)}) == {}

    def test_horizontal_movement(self):
        deltas = compute_deltas({"A": Rect(top=0, left=30)}, {"A": Rect(top=0, left=10)})
        assert deltas == {"A": Delta(dx=20, dy=0)}

    def test_rows_missing_from_either_snapshot_are_skipped(self):
        before = {"gone": Rect(top=0, left=0), "kept": Rect(top=82, left=0)}
        after = {"kept": Rect(top=0, left=0), "new": Rect(top=82, left=0)}
        assert compute_deltas(before, after) == {"kept": Delta(dx=0, dy=82)}

    def test_empty_snapshots(self):
        assert compute_deltas({}, {}) == {}
        assert compute_deltas({"A": Rect(top=0, left=0)}, {}) == {}


class TestCapturePositions:
    """Snapshots taken through a geometry provider"""

    def test_skips_rows_without_geometry(self):
        layout = TableLayout(row_height=50, gap=0)
        layout.commit(["a", "b"])
        snapshot = capture_positions(layout, ["a", "b", "missing"])
        assert set(snapshot) == {"a", "b"}
        assert snapshot["b"].top == 50


class TestTableLayout:
    """Fixed-height stacked rows"""

    def test_commit_lays_rows_out_top_to_bottom(self):
        layout = TableLayout(row_height=72, gap=10, width=900)
        layout.commit(["x", "y", "z"])
        assert layout.get_rect("x") == Rect(top=0, left=0, width=900, height=72)
        assert layout.get_rect("z").top == 164
        assert layout.keys == ["x", "y", "z"]
        assert layout.pitch == 82

    def test_reorder_produces_row_deltas(self):
        layout = TableLayout()
        layout.commit(["a", "b", "c"])
        before = capture_positions(layout, layout.keys)
        layout.commit(["c", "a", "b"])
        after = capture_positions(layout, layout.keys)

        deltas = compute_deltas(before, after)
        assert rows_moved(deltas["c"], layout.pitch) == 2
        assert rows_moved(deltas["a"], layout.pitch) == -1
        assert rows_moved(deltas["b"], layout.pitch) == -1

    def test_clear(self):
        layout = TableLayout()
        layout.commit(["a"])
        layout.clear()
        assert layout.get_rect("a") is None


class TestRowsMoved:
    """Row counts derived from vertical deltas"""

    def test_sign_follows_direction(self):
        assert rows_moved(Delta(dx=0, dy=164), 82) == 2
        assert rows_moved(Delta(dx=0, dy=-82), 82) == -1

    def test_rows_moved_requires_positive_pitch(self):
        with pytest.raises(ValueError):
            rows_moved(Delta(dx=0, dy=10), 0)


class TestRowKey:
    """Stable keys for rows"""

    def test_uuid_preferred_over_username(self):
        assert Player(uuid="abc", username="Steve").row_key == "abc"
        assert Player(uuid="", username="Steve").row_key == "Steve"
