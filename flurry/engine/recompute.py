"""Derived stat recomputation — one full pass over the catalog.

Every call starts again from the production baseline and folds in the effect
of every unlocked entry, in catalog order. Calling it twice with the same
snapshot and unlock state gives identical numbers.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Iterable

from flurry.data.balance import BALANCE, EngineBalance
from flurry.engine.catalog import Action, Catalog
from flurry.engine.conditions import GameEvent, evaluate_entry, progress_of
from flurry.engine.economy import production_baseline
from flurry.engine.effects import DerivedStats, StatAccumulator, apply_effect
from flurry.engine.errors import MalformedEntryError
from flurry.engine.game_state import GameSnapshot
from flurry.engine.unlocks import UnlockTracker, UnlockTransition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UnlockNotification:
    """Raised once for each entry that unlocks; the UI layer shows it."""

    entry_id: str
    name: str
    kind: str
    unlocked_at: float

    @property
    def is_achievement(self) -> bool:
        return self.kind.startswith("achievement")


@dataclass(frozen=True)
class RecomputeResult:
    stats: DerivedStats
    notifications: tuple[UnlockNotification, ...] = ()


def recompute(
    catalog: Catalog,
    snapshot: GameSnapshot,
    tracker: UnlockTracker,
    *,
    baseline: StatAccumulator | None = None,
    events: Iterable[GameEvent] = (),
    balance: EngineBalance = BALANCE.engine,
    now: float | None = None,
    warned: set[str] | None = None,
) -> RecomputeResult:
    """Evaluate every entry, update unlock state and rebuild derived stats.

    ``baseline`` is never modified. Grants are queued only for entries that
    unlock during this pass. An entry that unlocks but whose effect cannot be
    applied raises no notification. Ids added to ``warned`` are only logged at
    WARNING the first time they are skipped.
    """
    if now is None:
        now = time.time()
    events = tuple(events)
    acc = (baseline if baseline is not None else production_baseline(catalog, snapshot, balance)).copy()
    notifications: list[UnlockNotification] = []

    for entry in catalog:
        try:
            if tracker.is_unlocked(entry.id):
                transition = UnlockTransition.ALREADY_UNLOCKED
            else:
                satisfied = evaluate_entry(entry, snapshot, events)
                transition = tracker.try_unlock(entry.id, satisfied, now, progress_of(entry, snapshot))

            if transition is UnlockTransition.NOT_YET_SATISFIED:
                continue

            if transition is UnlockTransition.NEWLY_UNLOCKED:
                apply_effect(entry.effect, acc, balance=balance)
                acc.unlocked.append(entry.id)
                notifications.append(UnlockNotification(entry.id, entry.name, entry.kind.value, now))
                logger.info("Unlocked %s %r", entry.kind.value, entry.name)
            elif entry.effect.action is not Action.GRANT_ONCE:
                apply_effect(entry.effect, acc, balance=balance)
        except MalformedEntryError as exc:
            entry_id = exc.entry_id or entry.id
            if warned is not None and entry_id in warned:
                logger.debug("Skipping misconfigured entry %s: %s", entry_id, exc.reason)
                continue
            if warned is not None:
                warned.add(entry_id)
            logger.warning("Skipping misconfigured entry %s: %s", entry_id, exc.reason)

    return RecomputeResult(acc.finalize(), tuple(notifications))
