"""
Tests for point scoring and tie-aware ranking.
"""

import json

import pytest

from models import Player, ScoredPlayer
from ranker import compute_points, leaderboard_payload, rank_players, score_players
from tier_schemes import MODES, RANKED_TIERS, get_scheme


def _scored(uuid, points, **tiers):
    return ScoredPlayer(player=Player(uuid=uuid, username=uuid.upper(), tiers=tiers), points=points)


def _tie_law_holds(entries):
    for index in range(len(entries) - 1):
        current, following = entries[index], entries[index + 1]
        if following.key == current.key:
            if following.rank != current.rank:
                return False
        elif following.rank != index + 2:
            return False
    return True


class TestComputePoints:
    """Scoring function"""

    def test_sums_every_mode(self):
        player = Player.from_row({"uuid": "x", "username": "X", "axe": "HT1", "sword": "lt1", "mace": "HT4"})
        assert compute_points(player, get_scheme("exponential")) == 1000 + 250 + 7

    def test_unranked_and_unknown_labels_score_zero(self):
        player = Player.from_row({"uuid": "x", "username": "X", "axe": "", "sword": "HT9", "smp": None})
        assert compute_points(player, get_scheme("exponential")) == 0

    def test_deterministic(self, sample_players):
        scheme = get_scheme("quadratic")
        for player in sample_players:
            assert compute_points(player, scheme) == compute_points(player, scheme)

    def test_monotonic_when_a_tier_improves(self):
        scheme = get_scheme("exponential")
        base = {"uuid": "x", "username": "X", "uhc": "LT5", "diapot": "HT2"}
        worse = compute_points(Player.from_row(base), scheme)
        for tier in RANKED_TIERS:
            if scheme.points_for(tier) > scheme.points_for("LT5"):
                better = compute_points(Player.from_row({**base, "uhc": tier}), scheme)
                assert better >= worse

    def test_score_players_orders_by_points(self, sample_players, two_tier_scheme):
        scored = score_players(sample_players, two_tier_scheme)
        assert [player.uuid for player in scored] == ["a", "c", "b"]
        assert [player.points for player in scored] == [1000, 1000, 100]


class TestRankPlayers:
    """Ranking function"""

    def test_axe_scenario(self, sample_players, two_tier_scheme):
        scored = [ScoredPlayer(player=p, points=compute_points(p, two_tier_scheme)) for p in sample_players]
        entries = rank_players(scored, "axe")
        assert [entry.player.uuid for entry in entries] == ["a", "c", "b"]
        assert [entry.rank for entry in entries] == [1, 1, 3]

    def test_overall_scenario(self):
        players = [_scored("a", 1000), _scored("b", 100), _scored("c", 900)]
        entries = rank_players(players, "overall")
        assert [entry.player.uuid for entry in entries] == ["a", "c", "b"]
        assert [entry.rank for entry in entries] == [1, 2, 3]

    def test_mode_filter_breaks_ties_by_points(self):
        players = [
            _scored("low", 10, sword="HT3"),
            _scored("high", 500, sword="HT3"),
            _scored("best", 1, sword="HT1"),
            _scored("none", 9000),
        ]
        entries = rank_players(players, "sword")
        assert [entry.player.uuid for entry in entries] == ["best", "high", "low", "none"]
        assert [entry.rank for entry in entries] == [1, 2, 3, 4]

    def test_unranked_sorts_last_in_mode_filter(self):
        players = [_scored("u", 5000, axe="weird"), _scored("r", 1, axe="LT6")]
        entries = rank_players(players, "axe")
        assert [entry.player.uuid for entry in entries] == ["r", "u"]

    def test_stable_for_equal_keys(self):
        players = [_scored(name, 50, mace="LT2") for name in ("d", "b", "e", "a")]
        for filter_mode in ("overall", "mace"):
            entries = rank_players(players, filter_mode)
            assert [entry.player.uuid for entry in entries] == ["d", "b", "e", "a"]
            assert {entry.rank for entry in entries} == {1}

    def test_tie_law(self):
        players = [
            _scored("p1", 300, vanilla="HT2"),
            _scored("p2", 300, vanilla="HT2"),
            _scored("p3", 200, vanilla="HT2"),
            _scored("p4", 300),
            _scored("p5", 300),
            _scored("p6", 100, vanilla="LT1"),
        ]
        for filter_mode in ("overall", "vanilla", "axe"):
            entries = rank_players(players, filter_mode)
            assert entries[0].rank == 1
            assert _tie_law_holds(entries)
            ranks = [entry.rank for entry in entries]
            assert ranks == sorted(ranks)

    def test_idempotent(self, sample_players):
        scored = score_players(sample_players, get_scheme("linear"))
        for filter_mode in ("overall", *MODES):
            first = rank_players(scored, filter_mode)
            second = rank_players(scored, filter_mode)
            assert first == second

    def test_empty_input(self):
        assert rank_players([], "overall") == []
        assert rank_players([], "smp") == []

    def test_rejects_unknown_filter(self):
        with pytest.raises(ValueError):
            rank_players([_scored("a", 1)], "bow")

    def test_filter_is_case_insensitive(self):
        players = [_scored("a", 1, nethop="LT3"), _scored("b", 2, nethop="HT3")]
        assert [e.player.uuid for e in rank_players(players, "NETHOP")] == ["b", "a"]


class TestLeaderboardPayload:
    """JSON summary used by the CLI"""

    def test_payload_shape(self, sample_players):
        scheme = get_scheme("exponential")
        entries = rank_players(score_players(sample_players, scheme), "axe")
        payload = leaderboard_payload(entries, filter_mode="axe", scheme=scheme, top_n=2)

        assert payload["filter"] == "axe"
        assert payload["scheme"] == "exponential"
        assert payload["count"] == 3
        assert len(payload["players"]) == 2
        assert payload["players"][0]["username"] == "Alpha"
        assert payload["players"][0]["tiers"]["sword"] == "LT3"
        assert payload["players"][0]["tiers"]["smp"] == "U"
        assert payload["method"]["unranked_points"] == 0
        json.dumps(payload)
