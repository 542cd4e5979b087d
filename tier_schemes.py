"""Tier labels, combat modes, and the point schemes used for scoring."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Literal, Mapping

ModeKey = Literal["axe", "smp", "sword", "mace", "uhc", "nethop", "vanilla", "diapot"]
FilterMode = Literal["overall", "axe", "smp", "sword", "mace", "uhc", "nethop", "vanilla", "diapot"]
SchemeName = Literal["exponential", "linear", "quadratic"]

MODES: tuple[ModeKey, ...] = ("axe", "smp", "sword", "mace", "uhc", "nethop", "vanilla", "diapot")
OVERALL: FilterMode = "overall"
FILTERS: tuple[FilterMode, ...] = (OVERALL, *MODES)

UNRANKED = "U"

# Best tier first.
TIER_ORDER: Mapping[str, int] = MappingProxyType(
    {
        "HT1": 1,
        "LT1": 2,
        "HT2": 3,
        "LT2": 4,
        "HT3": 5,
        "LT3": 6,
        "HT4": 7,
        "LT4": 8,
        "HT5": 9,
        "LT5": 10,
        "HT6": 11,
        "LT6": 12,
        UNRANKED: 13,
    }
)

TIER_LABELS: tuple[str, ...] = tuple(TIER_ORDER)
RANKED_TIERS: tuple[str, ...] = tuple(tier for tier in TIER_LABELS if tier != UNRANKED)


def normalize_tier(value: str | None) -> str:
    """Uppercase a raw tier label; absent, blank, or unknown labels become ``U``."""
    if value is None:
        return UNRANKED
    label = str(value).strip().upper()
    if label not in TIER_ORDER:
        return UNRANKED
    return label


def tier_order_index(value: str | None) -> int:
    return TIER_ORDER[normalize_tier(value)]


def parse_filter(value: str) -> FilterMode:
    normalized = str(value).strip().lower()
    if normalized not in FILTERS:
        raise ValueError(
            f"Unsupported filter '{value}'. Supported filters: {', '.join(FILTERS)}."
        )
    return normalized  # type: ignore[return-value]


@dataclass(frozen=True)
class TierScheme:
    name: str
    label: str
    description: str
    points: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for tier, value in self.points.items():
            if tier not in TIER_ORDER:
                raise ValueError(f"Scheme '{self.name}' scores unknown tier '{tier}'.")
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(
                    f"Scheme '{self.name}' has invalid points for {tier}: {value!r}."
                )
        # Walk from worst to best; a better tier may never be worth less.
        previous_tier, previous_points = None, 0
        for tier in reversed(TIER_LABELS):
            current = self.points.get(tier, 0)
            if previous_tier is not None and current < previous_points:
                raise ValueError(
                    f"Scheme '{self.name}' is not monotonic: {tier}={current} "
                    f"scores below {previous_tier}={previous_points}."
                )
            previous_tier, previous_points = tier, current
        object.__setattr__(self, "points", MappingProxyType(dict(self.points)))

    def points_for(self, tier: str | None) -> int:
        return self.points.get(normalize_tier(tier), 0)


def _linear_points() -> dict[str, int]:
    return {tier: step for step, tier in enumerate(reversed(RANKED_TIERS), start=1)}


TIER_SCHEMES: dict[SchemeName, TierScheme] = {
    "exponential": TierScheme(
        name="exponential",
        label="Exponential",
        description="Top tiers dominate: one HT1 outweighs every lower tier combined.",
        points={
            "LT6": 1,
            "HT6": 2,
            "LT5": 3,
            "HT5": 4,
            "LT4": 5,
            "HT4": 7,
            "LT3": 10,
            "HT3": 25,
            "LT2": 50,
            "HT2": 100,
            "LT1": 250,
            "HT1": 1000,
        },
    ),
    "linear": TierScheme(
        name="linear",
        label="Linear",
        description="Each tier step is worth one point, LT6=1 up to HT1=12.",
        points=_linear_points(),
    ),
    "quadratic": TierScheme(
        name="quadratic",
        label="Quadratic",
        description="Square of the linear step, LT6=1 up to HT1=144.",
        points={tier: step * step for tier, step in _linear_points().items()},
    ),
}

DEFAULT_SCHEME: SchemeName = "exponential"


def get_scheme(name: str) -> TierScheme:
    key = str(name).strip().lower()
    if key not in TIER_SCHEMES:
        raise KeyError(
            f"Unknown tier scheme '{name}'. Known schemes: {', '.join(sorted(TIER_SCHEMES))}."
        )
    return TIER_SCHEMES[key]  # type: ignore[index]


def tier_info(scheme: TierScheme) -> list[dict[str, str | int]]:
    """Rows for the tiers-info panel, best tier first."""
    return [
        {"tier": tier, "points": scheme.points_for(tier), "label": f"+{scheme.points_for(tier)}"}
        for tier in RANKED_TIERS
    ]
