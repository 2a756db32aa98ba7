"""Tests for the achievement progress summary."""

from __future__ import annotations

import pytest

from flurry.data.achievements import ALL_ACHIEVEMENTS
from flurry.data.upgrades import ALL_UPGRADES
from flurry.engine.catalog import load_catalog
from flurry.engine.game_state import GameSnapshot
from flurry.engine.progression import ProgressionEngine


def _engine() -> ProgressionEngine:
    catalog = load_catalog(
        upgrades=[ALL_UPGRADES["teamSpirit"]],
        achievements=[ALL_ACHIEVEMENTS[a] for a in ("assistants_10", "assistants_50", "yeti_rare_1")],
    )
    return ProgressionEngine(catalog)


def test_progress_counts_only_achievements():
    engine = _engine()
    assert engine.achievement_progress().total == 3
    assert engine.achievement_progress().unlocked == 0

    engine.recompute(GameSnapshot(assistants={"additionalArm": 20}), now=5.0)
    progress = engine.achievement_progress()
    assert (progress.unlocked, progress.total) == (1, 3)


def test_by_category_meters():
    engine = _engine()
    engine.recompute(GameSnapshot(assistants={"additionalArm": 20}), now=5.0)
    grouped = engine.achievements_by_category()

    assert set(grouped) == {"assistants", "yetis"}
    done, pending = grouped["assistants"]

    assert done.id == "assistants_10"
    assert done.unlocked and done.unlocked_at == 5.0
    assert done.current_value == done.target_value == 10
    assert done.progress_percent == 100.0

    assert pending.id == "assistants_50"
    assert not pending.unlocked and pending.unlocked_at is None
    assert pending.current_value == 20
    assert pending.target_value == 50
    assert pending.progress_percent == pytest.approx(40.0)


def test_event_achievement_has_no_meter():
    engine = _engine()
    (rare,) = engine.achievements_by_category()["yetis"]
    assert rare.target_value is None and rare.current_value is None
    assert rare.progress_percent == 0.0

    engine.on_event("rareYetiFound", {"variant": "ice"})
    engine.recompute(GameSnapshot(), now=9.0)
    (rare,) = engine.achievements_by_category()["yetis"]
    assert rare.unlocked and rare.progress_percent == 100.0
