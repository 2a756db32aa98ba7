"""Errors raised by the progression engine."""

from __future__ import annotations


class FlurryError(Exception):
    """Base class for every engine error."""


class CatalogValidationError(FlurryError):
    """The content catalog is corrupt and the game must not start.

    All problems found during one load are collected in ``problems``.
    """

    def __init__(self, problems: list[str]) -> None:
        self.problems = list(problems)
        summary = "; ".join(self.problems[:5])
        if len(self.problems) > 5:
            summary += f" (+{len(self.problems) - 5} more)"
        super().__init__(f"{len(self.problems)} catalog problem(s): {summary}")


class MalformedEntryError(FlurryError):
    """An entry that passed validation still could not be evaluated or applied."""

    def __init__(self, entry_id: str, reason: str) -> None:
        self.entry_id = entry_id
        self.reason = reason
        super().__init__(f"{entry_id}: {reason}")


class DoubleUnlockError(FlurryError):
    """An already-unlocked record was marked unlocked again."""

    def __init__(self, entry_id: str) -> None:
        self.entry_id = entry_id
        super().__init__(f"{entry_id} is already unlocked")
