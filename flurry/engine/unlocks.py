"""Unlock tracker — one record per catalog entry, flipped at most once per life."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Iterable, Mapping

from flurry.engine.errors import DoubleUnlockError

logger = logging.getLogger(__name__)


class UnlockTransition(Enum):
    ALREADY_UNLOCKED = auto()
    NEWLY_UNLOCKED = auto()
    NOT_YET_SATISFIED = auto()


@dataclass
class UnlockRecord:
    unlocked: bool = False
    unlocked_at: float | None = None
    progress: float = 0.0   # display only


class UnlockTracker:
    """Owns every UnlockRecord.

    ``classes`` maps entry id to its persistence class; ``reset`` clears by
    class. Entries without a class are never cleared.
    """

    def __init__(self, classes: Mapping[str, str] | None = None) -> None:
        self._classes: dict[str, str] = dict(classes or {})
        self._records: dict[str, UnlockRecord] = {}
        self._lock = threading.Lock()

    def set_classes(self, classes: Mapping[str, str]) -> None:
        """Replace the id to persistence-class map used by ``reset``."""
        with self._lock:
            self._classes = dict(classes)

    def _mark_unlocked(self, entry_id: str, record: UnlockRecord, timestamp: float) -> None:
        if record.unlocked:
            raise DoubleUnlockError(entry_id)
        record.unlocked = True
        record.unlocked_at = timestamp

    def try_unlock(
        self,
        entry_id: str,
        condition_result: bool,
        timestamp: float,
        progress: float | None = None,
    ) -> UnlockTransition:
        """Flip the record if the condition holds and it is still locked."""
        with self._lock:
            record = self._records.setdefault(entry_id, UnlockRecord())
            if record.unlocked:
                return UnlockTransition.ALREADY_UNLOCKED
            if condition_result:
                self._mark_unlocked(entry_id, record, timestamp)
                return UnlockTransition.NEWLY_UNLOCKED
            if progress is not None:
                record.progress = progress
            return UnlockTransition.NOT_YET_SATISFIED

    def is_unlocked(self, entry_id: str) -> bool:
        record = self._records.get(entry_id)
        return record is not None and record.unlocked

    def record(self, entry_id: str) -> UnlockRecord:
        """A copy of the entry's record (empty if never seen)."""
        record = self._records.get(entry_id, UnlockRecord())
        return UnlockRecord(record.unlocked, record.unlocked_at, record.progress)

    def unlocked_ids(self) -> list[str]:
        return [eid for eid, rec in self._records.items() if rec.unlocked]

    def reset(self, classes: Iterable[str]) -> int:
        """Clear every record whose persistence class is in ``classes``.

        Returns how many unlocked records were cleared.
        """
        wanted = set(classes)
        cleared = 0
        with self._lock:
            for entry_id in list(self._records):
                if self._classes.get(entry_id) in wanted:
                    if self._records[entry_id].unlocked:
                        cleared += 1
                    self._records[entry_id] = UnlockRecord()
        logger.debug("Reset %d unlocked record(s) in classes %s", cleared, sorted(wanted))
        return cleared

    # ── Hand-off to the save layer ───────────────────────────────

    def to_dict(self) -> dict[str, dict[str, Any]]:
        with self._lock:
            return {
                eid: {
                    "unlocked": rec.unlocked,
                    "unlocked_at": rec.unlocked_at,
                    "progress": rec.progress,
                }
                for eid, rec in self._records.items()
            }

    @classmethod
    def from_dict(cls, data: Mapping[str, Mapping[str, Any]], classes: Mapping[str, str] | None = None) -> UnlockTracker:
        tracker = cls(classes)
        for eid, raw in data.items():
            tracker._records[eid] = UnlockRecord(
                unlocked=bool(raw.get("unlocked", False)),
                unlocked_at=raw.get("unlocked_at"),
                progress=float(raw.get("progress", 0.0)),
            )
        return tracker
