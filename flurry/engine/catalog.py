"""Content catalog — compiles raw upgrade/achievement tables into checked entries.

The catalog is built once at startup and never changes afterwards. Every
reference a definition makes (stat name, group, assistant id, effect target)
is resolved here, so the evaluator and the applier never see an unknown name.
All problems found during one load are reported together.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Union

from flurry.data.achievements import ACHIEVEMENTS
from flurry.data.assistants import ALL_ASSISTANTS, AssistantDef, build_groups
from flurry.data.balance import BALANCE, EngineBalance
from flurry.data.upgrades import UPGRADES, EffectDef, TriggerDef
from flurry.engine.errors import CatalogValidationError
from flurry.engine.game_state import STAT_NAMES

logger = logging.getLogger(__name__)


class EntryKind(Enum):
    """Entry kinds. The value doubles as the persistence class used on jump."""

    BOOST = "boost"
    GLOBAL = "global"
    YETI_JR = "yetiJr"
    CLICK_MULTIPLIER = "clickMultiplier"
    LEGACY = "legacy"
    ACHIEVEMENT_THRESHOLD = "achievementThreshold"
    ACHIEVEMENT_EVENT = "achievementEvent"

    @property
    def is_achievement(self) -> bool:
        return self in (EntryKind.ACHIEVEMENT_THRESHOLD, EntryKind.ACHIEVEMENT_EVENT)


class Action(Enum):
    MULTIPLY_INCREMENT = auto()   # x *= 1 + value
    MULTIPLY_DIRECT = auto()      # x *= value
    ADD = auto()                  # x += value
    GRANT_ONCE = auto()           # queue a one-time snowball grant


class Target(Enum):
    SPS = auto()                        # global SPS multiplier
    CLICK_POWER = auto()
    ASSISTANT_SPS = auto()              # per-assistant multipliers
    ASSISTANT_COST_REDUCTION = auto()
    BOOST_EFFECTIVENESS = auto()
    BOOST_COST_REDUCTION = auto()
    ICICLE_RATE = auto()
    SNOWBALLS = auto()                  # grant target only
    NONE = auto()                       # pure achievement


_TARGETS: dict[str, Target] = {
    "sps": Target.SPS,
    "click_power": Target.CLICK_POWER,
    "assistants": Target.ASSISTANT_SPS,
    "assistant_cost_reduction": Target.ASSISTANT_COST_REDUCTION,
    "boost_effectiveness": Target.BOOST_EFFECTIVENESS,
    "boost_cost_reduction": Target.BOOST_COST_REDUCTION,
    "icicle_rate": Target.ICICLE_RATE,
    "snowballs": Target.SNOWBALLS,
    "none": Target.NONE,
}

MULTIPLY_TARGETS = frozenset({
    Target.SPS, Target.CLICK_POWER, Target.ASSISTANT_SPS,
    Target.BOOST_EFFECTIVENESS, Target.ICICLE_RATE,
})
ADD_TARGETS = frozenset({
    Target.CLICK_POWER, Target.ASSISTANT_COST_REDUCTION, Target.BOOST_EFFECTIVENESS,
    Target.BOOST_COST_REDUCTION, Target.ICICLE_RATE,
})
COST_REDUCTION_TARGETS = frozenset({Target.ASSISTANT_COST_REDUCTION, Target.BOOST_COST_REDUCTION})

_JOINS = frozenset({"and"})


# ── Trigger variants ─────────────────────────────────────────────


@dataclass(frozen=True)
class StatThreshold:
    stat: str
    value: float


@dataclass(frozen=True)
class GroupOwned:
    """Sum of owned counts across the group reaches ``min_count``."""

    group: str
    members: tuple[str, ...]
    min_count: int


@dataclass(frozen=True)
class AssistantOwned:
    assistant_id: str
    min_count: int


@dataclass(frozen=True)
class GroupComplete:
    """Every member of the group owns at least ``min_each``."""

    group: str
    members: tuple[str, ...]
    min_each: int


@dataclass(frozen=True)
class EventOccurred:
    """A discrete event fired since the previous pass, filtered by payload.

    ``match`` pairs compare by equality ("any" accepts every value);
    ``minimum`` pairs require a numeric payload value at least that large.
    """

    event: str
    match: tuple[tuple[str, object], ...] = ()
    minimum: tuple[tuple[str, float], ...] = ()


Trigger = Union[StatThreshold, GroupOwned, AssistantOwned, GroupComplete, EventOccurred]


# ── Effect references ────────────────────────────────────────────


@dataclass(frozen=True)
class AllAssistants:
    pass


@dataclass(frozen=True)
class SingleAssistant:
    assistant_id: str


@dataclass(frozen=True)
class Group:
    name: str


AssistantRef = Union[AllAssistants, SingleAssistant, Group]


@dataclass(frozen=True)
class Effect:
    """A compiled effect. ``assistant_ids`` is ``ref`` resolved at load."""

    action: Action | None
    target: Target
    value: float = 0.0
    ref: AssistantRef | None = None
    assistant_ids: tuple[str, ...] = ()
    entry_id: str = ""
    boost_scaled: bool = False   # increment scaled by boost effectiveness


NO_OP = Effect(action=None, target=Target.NONE)


@dataclass(frozen=True)
class CatalogEntry:
    id: str
    name: str
    description: str
    kind: EntryKind
    cost: float
    order: int
    trigger1: Trigger
    effect: Effect
    trigger2: Trigger | None = None
    category: str = ""

    @property
    def is_achievement(self) -> bool:
        return self.kind.is_achievement

    @property
    def persistence_class(self) -> str:
        return self.kind.value


@dataclass(frozen=True)
class Catalog:
    """Immutable, ordered set of entries plus the assistant table they refer to."""

    entries: tuple[CatalogEntry, ...]
    assistants: Mapping[str, AssistantDef]
    groups: Mapping[str, tuple[str, ...]]
    _by_id: Mapping[str, CatalogEntry] = field(repr=False, compare=False, default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "assistants", MappingProxyType(dict(self.assistants)))
        object.__setattr__(self, "groups", MappingProxyType(dict(self.groups)))
        object.__setattr__(self, "_by_id", MappingProxyType({e.id: e for e in self.entries}))

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._by_id

    def get(self, entry_id: str) -> CatalogEntry:
        return self._by_id[entry_id]

    def of_kind(self, *kinds: EntryKind) -> list[CatalogEntry]:
        return [e for e in self.entries if e.kind in kinds]

    def persistence_classes(self) -> dict[str, str]:
        return {e.id: e.persistence_class for e in self.entries}


# ── Loader ───────────────────────────────────────────────────────


class _Compiler:
    """Collects problems while compiling; never raises mid-way."""

    def __init__(self, assistants: Mapping[str, AssistantDef], balance: EngineBalance) -> None:
        self.assistants = assistants
        self.groups = build_groups(dict(assistants))
        self.balance = balance
        self.problems: list[str] = []

    def problem(self, where: str, message: str) -> None:
        self.problems.append(f"{where}: {message}")

    # ── assistants ───────────────────────────────────────

    def check_assistants(self) -> None:
        for key, adef in self.assistants.items():
            where = f"assistant {key!r}"
            if key != adef.id:
                self.problem(where, f"registered under a different id than {adef.id!r}")
            if not adef.group:
                self.problem(where, "belongs to no group")
            if adef.base_cost <= 0 or adef.cost_rate <= 0:
                self.problem(where, "cost and cost rate must be positive")
            if adef.base_sps < 0:
                self.problem(where, "negative base production")

    # ── triggers ─────────────────────────────────────────

    def _members(self, where: str, group: str) -> tuple[str, ...] | None:
        members = self.groups.get(group)
        if not members:
            self.problem(where, f"unknown group {group!r}")
            return None
        return members

    def trigger(self, where: str, raw: TriggerDef) -> Trigger | None:
        if raw.value < 0:
            self.problem(where, f"negative trigger value {raw.value}")
            return None

        if raw.type == "stat":
            if raw.stat not in STAT_NAMES:
                self.problem(where, f"unknown stat {raw.stat!r}")
                return None
            return StatThreshold(raw.stat, float(raw.value))

        if raw.type == "assistant_group_owned":
            members = self._members(where, raw.group)
            if members is None:
                return None
            return GroupOwned(raw.group, members, int(raw.value))

        if raw.type == "assistant_group_complete":
            members = self._members(where, raw.group)
            if members is None:
                return None
            return GroupComplete(raw.group, members, int(raw.value))

        if raw.type == "assistant_id_owned":
            if raw.assistant_id not in self.assistants:
                self.problem(where, f"unknown assistant {raw.assistant_id!r}")
                return None
            # A zero threshold means "owns at least one"
            return AssistantOwned(raw.assistant_id, int(raw.value) or 1)

        if raw.type == "event":
            if not raw.event:
                self.problem(where, "event trigger without an event name")
                return None
            for key, minimum in raw.minimum:
                if not isinstance(minimum, (int, float)):
                    self.problem(where, f"non-numeric minimum for {key!r}")
                    return None
            return EventOccurred(raw.event, tuple(raw.match), tuple(raw.minimum))

        self.problem(where, f"unknown trigger type {raw.type!r}")
        return None

    # ── effects ──────────────────────────────────────────

    def effect(self, where: str, entry_id: str, kind: EntryKind, raw: EffectDef) -> Effect | None:
        target = _TARGETS.get(raw.target)
        if target is None:
            self.problem(where, f"unknown effect target {raw.target!r}")
            return None

        if raw.action == "none" or target is Target.NONE:
            if raw.action != "none" or target is not Target.NONE:
                self.problem(where, "effect target and action must both be 'none'")
                return None
            return NO_OP

        if raw.target_ids and target is not Target.ASSISTANT_SPS:
            self.problem(where, f"target_ids given for non-assistant target {raw.target!r}")
            return None

        if raw.action == "grant_once":
            if target is not Target.SNOWBALLS:
                self.problem(where, "grant_once only applies to 'snowballs'")
                return None
            return Effect(Action.GRANT_ONCE, target, float(raw.value), entry_id=entry_id)
        if target is Target.SNOWBALLS:
            self.problem(where, f"'snowballs' only accepts grant_once, not {raw.action!r}")
            return None

        if raw.action == "add":
            if target not in ADD_TARGETS:
                self.problem(where, f"add is not supported on {raw.target!r}")
                return None
            action = Action.ADD
        elif raw.action == "multiply":
            if target not in MULTIPLY_TARGETS:
                self.problem(where, f"multiply is not supported on {raw.target!r}")
                return None
            mode = raw.multiply_mode or self.balance.multiply_mode_for(kind.value)
            if mode == "increment":
                action = Action.MULTIPLY_INCREMENT
            elif mode == "direct":
                action = Action.MULTIPLY_DIRECT
            else:
                self.problem(where, f"unknown multiply mode {mode!r}")
                return None
        else:
            self.problem(where, f"unknown effect action {raw.action!r}")
            return None

        ref: AssistantRef | None = None
        ids: tuple[str, ...] = ()
        if target is Target.ASSISTANT_SPS:
            if not raw.target_ids:
                ref, ids = AllAssistants(), tuple(self.assistants)
            elif raw.target_ids.startswith("group:"):
                name = raw.target_ids[len("group:"):]
                members = self._members(where, name)
                if members is None:
                    return None
                ref, ids = Group(name), members
            elif raw.target_ids in self.assistants:
                ref, ids = SingleAssistant(raw.target_ids), (raw.target_ids,)
            else:
                self.problem(where, f"unknown assistant {raw.target_ids!r} in target_ids")
                return None

        return Effect(
            action=action,
            target=target,
            value=float(raw.value),
            ref=ref,
            assistant_ids=ids,
            entry_id=entry_id,
            boost_scaled=(kind is EntryKind.BOOST and target is Target.ASSISTANT_SPS),
        )

    # ── entries ──────────────────────────────────────────

    def entry(self, raw, category: str) -> CatalogEntry | None:
        where = f"entry {raw.id!r}" if raw.id else "entry <no id>"
        ok = True
        if not raw.id:
            self.problem(where, "missing id")
            ok = False

        try:
            kind = EntryKind(raw.kind)
        except ValueError:
            self.problem(where, f"unknown kind {raw.kind!r}")
            return None

        if not raw.trigger1.exists:
            self.problem(where, "missing trigger1")
            return None
        trigger1 = self.trigger(where, raw.trigger1)

        # trigger2 only counts when it exists and a join is given
        trigger2 = None
        if raw.trigger2.exists and raw.join:
            if raw.join.lower() not in _JOINS:
                self.problem(where, f"unsupported join {raw.join!r}")
                ok = False
            else:
                trigger2 = self.trigger(where, raw.trigger2)
                ok = ok and trigger2 is not None

        if kind is EntryKind.ACHIEVEMENT_EVENT and not isinstance(trigger1, EventOccurred):
            self.problem(where, "event achievements need an event trigger")
            ok = False

        effect = self.effect(where, raw.id, kind, raw.effect)
        cost = getattr(raw, "cost", 0.0)
        if cost < 0:
            self.problem(where, f"negative cost {cost}")
            ok = False

        if not ok or trigger1 is None or effect is None:
            return None
        return CatalogEntry(
            id=raw.id,
            name=raw.name,
            description=raw.description,
            kind=kind,
            cost=float(cost),
            order=int(raw.order),
            trigger1=trigger1,
            trigger2=trigger2,
            effect=effect,
            category=category,
        )


def load_catalog(
    upgrades: Iterable | None = None,
    achievements: Iterable | None = None,
    assistants: Mapping[str, AssistantDef] | None = None,
    balance: EngineBalance = BALANCE.engine,
) -> Catalog:
    """Compile and validate the content tables.

    Raises CatalogValidationError listing every problem found. Entries come
    back sorted by ``order``; equal orders keep declaration order (upgrades
    first, then achievements).
    """
    upgrades = UPGRADES if upgrades is None else upgrades
    achievements = ACHIEVEMENTS if achievements is None else achievements
    assistants = ALL_ASSISTANTS if assistants is None else assistants

    compiler = _Compiler(assistants, balance)
    compiler.check_assistants()

    compiled: list[CatalogEntry] = []
    seen: set[str] = set()
    for raw in [*upgrades, *achievements]:
        if raw.id and raw.id in seen:
            compiler.problem(f"entry {raw.id!r}", "duplicate id")
            continue
        seen.add(raw.id)
        entry = compiler.entry(raw, getattr(raw, "category", ""))
        if entry is not None:
            compiled.append(entry)

    if compiler.problems:
        for problem in compiler.problems:
            logger.error("Catalog problem: %s", problem)
        raise CatalogValidationError(compiler.problems)

    compiled.sort(key=lambda e: e.order)
    logger.debug("Loaded catalog with %d entries", len(compiled))
    return Catalog(tuple(compiled), assistants, compiler.groups)


_DEFAULT: Catalog | None = None


def default_catalog() -> Catalog:
    """The bundled catalog, compiled on first use."""
    global _DEFAULT
    if _DEFAULT is None:
        _DEFAULT = load_catalog()
    return _DEFAULT
