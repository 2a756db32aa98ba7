"""Effect applier — folds one unlocked entry's effect into the stat accumulator."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from flurry.data.balance import BALANCE, EngineBalance
from flurry.engine.catalog import COST_REDUCTION_TARGETS, Action, Effect, Target
from flurry.engine.errors import MalformedEntryError


@dataclass(frozen=True)
class Grant:
    """A one-time snowball payout the game loop must credit."""

    entry_id: str
    amount: float


@dataclass(frozen=True)
class DerivedStats:
    """Output of one recompute pass. Rebuilt from scratch every time."""

    sps: float
    click_power: float
    global_sps_multiplier: float
    assistant_multipliers: Mapping[str, float]
    assistant_cost_reduction: float
    boost_effectiveness: float
    boost_cost_reduction: float
    icicle_rate: float
    grants: tuple[Grant, ...] = ()
    unlocked: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "assistant_multipliers", MappingProxyType(dict(self.assistant_multipliers))
        )

    def to_dict(self) -> dict:
        return {
            "sps": self.sps,
            "click_power": self.click_power,
            "global_sps_multiplier": self.global_sps_multiplier,
            "assistant_multipliers": dict(self.assistant_multipliers),
            "assistant_cost_reduction": self.assistant_cost_reduction,
            "boost_effectiveness": self.boost_effectiveness,
            "boost_cost_reduction": self.boost_cost_reduction,
            "icicle_rate": self.icicle_rate,
            "grants": [{"entry_id": g.entry_id, "amount": g.amount} for g in self.grants],
            "unlocked": list(self.unlocked),
        }


@dataclass
class StatAccumulator:
    """Mutable working set for one recompute pass."""

    production: dict[str, float] = field(default_factory=dict)   # raw SPS per assistant
    click_power: float = 1.0
    global_sps_multiplier: float = 1.0
    assistant_multipliers: dict[str, float] = field(default_factory=dict)
    assistant_cost_reduction: float = 0.0
    boost_effectiveness: float = 1.0
    boost_cost_reduction: float = 0.0
    icicle_rate: float = 1.0
    grants: list[Grant] = field(default_factory=list)
    unlocked: list[str] = field(default_factory=list)

    @classmethod
    def from_baseline(cls, production: Mapping[str, float], balance: EngineBalance = BALANCE.engine) -> StatAccumulator:
        return cls(
            production=dict(production),
            click_power=balance.base_click_power,
            assistant_multipliers={aid: 1.0 for aid in production},
            boost_effectiveness=balance.base_boost_effectiveness,
            icicle_rate=balance.base_icicle_rate,
        )

    def copy(self) -> StatAccumulator:
        return StatAccumulator(
            production=dict(self.production),
            click_power=self.click_power,
            global_sps_multiplier=self.global_sps_multiplier,
            assistant_multipliers=dict(self.assistant_multipliers),
            assistant_cost_reduction=self.assistant_cost_reduction,
            boost_effectiveness=self.boost_effectiveness,
            boost_cost_reduction=self.boost_cost_reduction,
            icicle_rate=self.icicle_rate,
            grants=list(self.grants),
            unlocked=list(self.unlocked),
        )

    def finalize(self) -> DerivedStats:
        # Summed in production order so repeated passes add up identically
        total = 0.0
        for aid, raw in self.production.items():
            total += raw * self.assistant_multipliers.get(aid, 1.0)
        return DerivedStats(
            sps=self.global_sps_multiplier * total,
            click_power=self.click_power,
            global_sps_multiplier=self.global_sps_multiplier,
            assistant_multipliers=self.assistant_multipliers,
            assistant_cost_reduction=self.assistant_cost_reduction,
            boost_effectiveness=self.boost_effectiveness,
            boost_cost_reduction=self.boost_cost_reduction,
            icicle_rate=self.icicle_rate,
            grants=tuple(self.grants),
            unlocked=tuple(self.unlocked),
        )


_SCALAR_FIELDS: dict[Target, str] = {
    Target.SPS: "global_sps_multiplier",
    Target.CLICK_POWER: "click_power",
    Target.ASSISTANT_COST_REDUCTION: "assistant_cost_reduction",
    Target.BOOST_EFFECTIVENESS: "boost_effectiveness",
    Target.BOOST_COST_REDUCTION: "boost_cost_reduction",
    Target.ICICLE_RATE: "icicle_rate",
}


def _factor(effect: Effect, acc: StatAccumulator) -> float:
    if effect.action is Action.MULTIPLY_DIRECT:
        return effect.value
    if effect.boost_scaled:
        return 1.0 + effect.value * acc.boost_effectiveness
    return 1.0 + effect.value


def apply_effect(effect: Effect, acc: StatAccumulator, *, balance: EngineBalance = BALANCE.engine) -> StatAccumulator:
    """Fold ``effect`` into ``acc`` and return it. Touches nothing else."""
    if effect.target is Target.NONE:
        return acc

    if effect.action is Action.GRANT_ONCE:
        acc.grants.append(Grant(effect.entry_id, effect.value))
        return acc

    if effect.target is Target.ASSISTANT_SPS:
        if effect.action not in (Action.MULTIPLY_INCREMENT, Action.MULTIPLY_DIRECT):
            raise MalformedEntryError(effect.entry_id, f"{effect.action} on assistant production")
        factor = _factor(effect, acc)
        for aid in effect.assistant_ids:
            acc.assistant_multipliers[aid] = acc.assistant_multipliers.get(aid, 1.0) * factor
        return acc

    name = _SCALAR_FIELDS.get(effect.target)
    if name is None:
        raise MalformedEntryError(effect.entry_id, f"no stat for target {effect.target}")
    current = getattr(acc, name)

    if effect.action is Action.ADD:
        updated = current + effect.value
        if effect.target in COST_REDUCTION_TARGETS:
            lo, hi = balance.cost_reduction_clamp
            updated = min(max(updated, lo), hi)
    elif effect.action in (Action.MULTIPLY_INCREMENT, Action.MULTIPLY_DIRECT):
        updated = current * _factor(effect, acc)
    else:
        raise MalformedEntryError(effect.entry_id, f"unknown action {effect.action}")

    setattr(acc, name, updated)
    return acc
