"""Game state snapshot — the read-only view of the run the engine evaluates."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from types import MappingProxyType
from typing import Any, Mapping


@dataclass(frozen=True)
class GameSnapshot:
    """Raw counters owned by the game loop.

    The engine never mutates a snapshot; the loop builds a fresh one (or uses
    ``dataclasses.replace``) whenever its counters move.
    """

    # ── Assistants: id → owned count ─────────────────────
    assistants: Mapping[str, int] = field(default_factory=dict)

    # ── Economy ──────────────────────────────────────────
    lifetime_snowballs: float = 0.0
    total_clicks: int = 0
    effective_clicks: float = 0.0   # snowballs earned from clicks, multipliers included
    sps: float = 0.0                # last SPS the loop displayed

    # ── Purchases & prestige ─────────────────────────────
    boosts_purchased: int = 0
    upgrades_purchased: int = 0
    jumps_completed: int = 0
    baby_yeti_owned: int = 0
    snowflakes_found: int = 0
    snowflake_tree_purchases: int = 0

    # ── Time ─────────────────────────────────────────────
    time_played_seconds: float = 0.0

    # ── Yetis, travel, battles ───────────────────────────
    yetis_clicked: int = 0
    yetis_spotted: int = 0
    yeti_classes_clicked: int = 0
    mech_yeti_classes_defeated: int = 0
    locations_traveled: int = 0
    location_classes_visited: int = 0
    locations_unlocked: int = 0
    travel_count: int = 0
    battles_won: int = 0
    battle_streak: int = 0
    ability_belt_level: int = 0

    # ── Side loops ───────────────────────────────────────
    icicles_harvested: int = 0
    highest_streak_tier: int = 0
    crystal_snowballs_collected: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "assistants", MappingProxyType(dict(self.assistants)))

    @property
    def assistants_owned(self) -> int:
        return sum(self.assistants.values())

    def owned(self, assistant_id: str) -> int:
        return self.assistants.get(assistant_id, 0)

    def stat(self, name: str) -> float:
        """Look up a named stat. Names come from STAT_NAMES."""
        if name not in STAT_NAMES:
            raise KeyError(name)
        return getattr(self, name)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GameSnapshot:
        """Build a snapshot from loose JSON, ignoring keys it does not know.

        Integer counters must be whole numbers; ``12.7`` clicks raises
        ``ValueError`` rather than being truncated.
        """
        kwargs: dict[str, Any] = {}
        for f in fields(cls):
            if f.name != "assistants" and f.name in data:
                if isinstance(f.default, int):
                    kwargs[f.name] = _whole(f.name, data[f.name])
                else:
                    kwargs[f.name] = float(data[f.name])
        kwargs["assistants"] = {
            str(aid): _whole(f"assistants.{aid}", n)
            for aid, n in dict(data.get("assistants", {})).items()
        }
        return cls(**kwargs)


def _whole(name: str, value: Any) -> int:
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"{name} must be a whole number, got {value!r}")
    return int(value)


# Every scalar counter plus the derived assistant total
STAT_NAMES: frozenset[str] = frozenset(
    {f.name for f in fields(GameSnapshot) if f.name != "assistants"}
    | {"assistants_owned"}
)
