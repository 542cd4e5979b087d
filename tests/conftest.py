"""
Pytest configuration and shared fixtures for tier list tests.
"""

import pytest

from models import Player
from tier_schemes import TierScheme


@pytest.fixture
def two_tier_scheme():
    """Scheme from the axe scenario: only HT1 and HT2 score"""
    return TierScheme(
        name="two_tier",
        label="Two tier",
        description="HT1 and HT2 only",
        points={"HT1": 1000, "HT2": 100},
    )


@pytest.fixture
def sample_rows():
    """Raw rows as returned by the tiers table"""
    return [
        {"uuid": "a", "username": "Alpha", "axe": "HT1", "sword": "lt3"},
        {"uuid": "b", "username": "Bravo", "axe": "HT2", "mace": ""},
        {"uuid": "c", "username": "Charlie", "axe": "ht1", "smp": None},
    ]


@pytest.fixture
def sample_players(sample_rows):
    return [Player.from_row(row) for row in sample_rows]


@pytest.fixture
def sample_history_rows():
    """Raw rows as returned by the history table, newest first"""
    return [
        {
            "time": "2025-03-02T18:30:00+00:00",
            "tester": "Alpha",
            "tested": "Bravo",
            "mode": "axe",
            "old_tier": "LT2",
            "new_tier": "HT2",
            "test_array": [
                {"player1": "Bravo", "player2": "Alpha", "score1": 7, "score2": 5, "tier1": "LT2", "tier2": "HT1"},
                {"player1": "Bravo", "player2": "Charlie", "score1": 7, "score2": 6, "tier1": "LT2", "tier2": "HT1"},
            ],
        },
        {
            "time": "2025-03-01T09:05:00+00:00",
            "tester": "Charlie",
            "tested": "delta",
            "mode": "SWORD",
            "old_tier": "",
            "new_tier": "lt4",
            "test_array": [
                {"player1": "Charlie", "player2": "delta", "score1": 7, "score2": 2},
            ],
        },
    ]
