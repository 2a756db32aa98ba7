"""Achievement progress summary for the stats and achievements screens."""

from __future__ import annotations

from dataclasses import dataclass

from flurry.engine.catalog import Catalog, CatalogEntry, StatThreshold
from flurry.engine.unlocks import UnlockTracker


@dataclass(frozen=True)
class AchievementProgress:
    unlocked: int
    total: int


@dataclass(frozen=True)
class AchievementStatus:
    """One achievement as the UI shows it.

    ``target_value`` is None for event achievements, which have no meter.
    """

    id: str
    name: str
    description: str
    category: str
    unlocked: bool
    unlocked_at: float | None
    current_value: float | None
    target_value: float | None
    progress_percent: float

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "unlocked": self.unlocked,
            "unlocked_at": self.unlocked_at,
            "current_value": self.current_value,
            "target_value": self.target_value,
            "progress_percent": self.progress_percent,
        }


def _achievements(catalog: Catalog) -> list[CatalogEntry]:
    return [e for e in catalog if e.is_achievement]


def achievement_progress(catalog: Catalog, tracker: UnlockTracker) -> AchievementProgress:
    """Unlocked / total over every achievement in the catalog."""
    entries = _achievements(catalog)
    return AchievementProgress(sum(1 for e in entries if tracker.is_unlocked(e.id)), len(entries))


def achievement_status(entry: CatalogEntry, tracker: UnlockTracker) -> AchievementStatus:
    record = tracker.record(entry.id)
    trigger = entry.trigger1
    target = trigger.value if isinstance(trigger, StatThreshold) else None

    if record.unlocked:
        current = target
        percent = 100.0
    elif target is None:
        current = None
        percent = 0.0
    else:
        current = record.progress
        percent = min(current / target * 100.0, 100.0) if target > 0 else 100.0

    return AchievementStatus(
        id=entry.id,
        name=entry.name,
        description=entry.description,
        category=entry.category,
        unlocked=record.unlocked,
        unlocked_at=record.unlocked_at,
        current_value=current,
        target_value=target,
        progress_percent=percent,
    )


def achievements_by_category(catalog: Catalog, tracker: UnlockTracker) -> dict[str, list[AchievementStatus]]:
    """Group achievement statuses by category, in catalog order."""
    grouped: dict[str, list[AchievementStatus]] = {}
    for entry in _achievements(catalog):
        grouped.setdefault(entry.category, []).append(achievement_status(entry, tracker))
    return grouped
