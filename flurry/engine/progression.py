"""ProgressionEngine — the single object the game loop talks to.

Holds the catalog, the unlock tracker and the batch of events fired since
the last pass. The loop calls ``recompute`` after anything that can move a
stat, ``on_event`` for discrete occurrences and ``on_jump`` on prestige.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Mapping

from flurry.data.balance import BALANCE, EngineBalance
from flurry.engine.achievements import (
    AchievementProgress,
    AchievementStatus,
    achievement_progress,
    achievements_by_category,
)
from flurry.engine.catalog import Catalog
from flurry.engine.conditions import GameEvent
from flurry.engine.effects import DerivedStats, StatAccumulator
from flurry.engine.game_state import GameSnapshot
from flurry.engine.recompute import UnlockNotification, recompute
from flurry.engine.unlocks import UnlockTracker

logger = logging.getLogger(__name__)

Listener = Callable[[UnlockNotification], None]


class ProgressionEngine:
    """Evaluates the catalog against snapshots and keeps unlock state."""

    def __init__(
        self,
        catalog: Catalog,
        balance: EngineBalance = BALANCE.engine,
        tracker: UnlockTracker | None = None,
    ) -> None:
        self.catalog = catalog
        self.balance = balance
        if tracker is None:
            tracker = UnlockTracker()
        # A tracker restored from a save carries no classes of its own
        tracker.set_classes(catalog.persistence_classes())
        self._tracker = tracker
        self._warned: set[str] = set()
        self._pending_events: list[GameEvent] = []
        self._listeners: list[Listener] = []
        self._last_stats: DerivedStats | None = None

    @property
    def tracker(self) -> UnlockTracker:
        return self._tracker

    @property
    def last_stats(self) -> DerivedStats | None:
        return self._last_stats

    @property
    def pending_events(self) -> tuple[GameEvent, ...]:
        return tuple(self._pending_events)

    def recompute(
        self,
        snapshot: GameSnapshot,
        baseline: StatAccumulator | None = None,
        now: float | None = None,
    ) -> DerivedStats:
        """Run one pass. Pending events are consumed by this pass only.

        A listener that raises is logged and skipped; the stats are still
        returned and the remaining listeners still run.
        """
        events, self._pending_events = self._pending_events, []
        result = recompute(
            self.catalog,
            snapshot,
            self._tracker,
            baseline=baseline,
            events=events,
            balance=self.balance,
            now=now,
            warned=self._warned,
        )
        self._last_stats = result.stats
        for notification in result.notifications:
            for listener in list(self._listeners):
                try:
                    listener(notification)
                except Exception:
                    logger.exception("Unlock listener failed for %s", notification.entry_id)
        return result.stats

    def on_event(self, name: str, payload: Mapping[str, Any] | None = None) -> None:
        """Queue a discrete event for the next pass."""
        self._pending_events.append(GameEvent(name, payload or {}))
        logger.debug("Queued event %s %s", name, dict(payload or {}))

    def on_jump(self, classes: Iterable[str] | None = None) -> int:
        """Prestige: clear run-scoped unlocks. Returns how many were cleared."""
        if classes is None:
            classes = self.balance.jump_reset_classes
        classes = tuple(classes)
        cleared = self._tracker.reset(classes)
        logger.info("Jump reset %d unlock(s) in %s", cleared, ", ".join(classes))
        return cleared

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a notification listener; returns a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ── Achievement summary ──────────────────────────────────────

    def achievement_progress(self) -> AchievementProgress:
        return achievement_progress(self.catalog, self._tracker)

    def achievements_by_category(self) -> dict[str, list[AchievementStatus]]:
        return achievements_by_category(self.catalog, self._tracker)
