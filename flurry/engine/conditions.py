"""Condition evaluator — does a trigger hold for this snapshot and event batch?

Pure functions: nothing here touches unlock state or derived stats.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from flurry.engine.catalog import (
    AssistantOwned,
    CatalogEntry,
    EventOccurred,
    GroupComplete,
    GroupOwned,
    StatThreshold,
    Trigger,
)
from flurry.engine.errors import MalformedEntryError
from flurry.engine.game_state import GameSnapshot

ANY = "any"


@dataclass(frozen=True)
class GameEvent:
    """A discrete occurrence reported by the game loop (e.g. a rare yeti spawn)."""

    name: str
    payload: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "payload", MappingProxyType(dict(self.payload)))


def _payload_matches(trigger: EventOccurred, payload: Mapping[str, Any]) -> bool:
    for key, expected in trigger.match:
        if key not in payload:
            return False
        if expected != ANY and payload[key] != expected:
            return False
    for key, minimum in trigger.minimum:
        value = payload.get(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        if value < minimum:
            return False
    return True


def evaluate(trigger: Trigger, snapshot: GameSnapshot, events: Iterable[GameEvent] = ()) -> bool:
    """True when ``trigger`` is satisfied. Thresholds are inclusive."""
    if isinstance(trigger, StatThreshold):
        try:
            return snapshot.stat(trigger.stat) >= trigger.value
        except KeyError:
            raise MalformedEntryError("", f"unknown stat {trigger.stat!r}") from None

    if isinstance(trigger, GroupOwned):
        return sum(snapshot.owned(aid) for aid in trigger.members) >= trigger.min_count

    if isinstance(trigger, AssistantOwned):
        return snapshot.owned(trigger.assistant_id) >= trigger.min_count

    if isinstance(trigger, GroupComplete):
        if not trigger.members:
            raise MalformedEntryError("", f"group {trigger.group!r} has no members")
        return all(snapshot.owned(aid) >= trigger.min_each for aid in trigger.members)

    if isinstance(trigger, EventOccurred):
        return any(
            event.name == trigger.event and _payload_matches(trigger, event.payload)
            for event in events
        )

    raise MalformedEntryError("", f"unknown trigger variant {type(trigger).__name__}")


def evaluate_entry(entry: CatalogEntry, snapshot: GameSnapshot, events: Iterable[GameEvent] = ()) -> bool:
    """Both triggers must hold when the entry has two."""
    events = tuple(events)
    try:
        if not evaluate(entry.trigger1, snapshot, events):
            return False
        if entry.trigger2 is not None:
            return evaluate(entry.trigger2, snapshot, events)
        return True
    except MalformedEntryError as exc:
        raise MalformedEntryError(entry.id, exc.reason) from exc


def progress_of(entry: CatalogEntry, snapshot: GameSnapshot) -> float | None:
    """Display progress towards a stat threshold, capped at the threshold."""
    trigger = entry.trigger1
    if not isinstance(trigger, StatThreshold):
        return None
    try:
        current = snapshot.stat(trigger.stat)
    except KeyError:
        return None
    return min(float(current), trigger.value)
