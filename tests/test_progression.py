"""Tests for the ProgressionEngine context: jumps, events, notifications."""

from __future__ import annotations

import logging

import pytest

from flurry.data.achievements import ALL_ACHIEVEMENTS
from flurry.data.balance import EngineBalance
from flurry.data.upgrades import ALL_UPGRADES
from flurry.engine.catalog import (
    Action,
    Catalog,
    CatalogEntry,
    Effect,
    EntryKind,
    StatThreshold,
    Target,
    default_catalog,
    load_catalog,
)
from flurry.engine.effects import Grant
from flurry.engine.game_state import GameSnapshot
from flurry.engine.progression import ProgressionEngine
from flurry.engine.unlocks import UnlockTracker


def _engine(*upgrade_ids: str, achievements: tuple[str, ...] = (), **kw) -> ProgressionEngine:
    catalog = load_catalog(
        upgrades=[ALL_UPGRADES[u] for u in upgrade_ids],
        achievements=[ALL_ACHIEVEMENTS[a] for a in achievements],
    )
    return ProgressionEngine(catalog, **kw)


def _arms(n: int, **kw) -> GameSnapshot:
    return GameSnapshot(assistants={"additionalArm": n}, **kw)


# ── Jump ─────────────────────────────────────────────────────────


def test_jump_keeps_achievements_and_globals():
    engine = _engine("quickDraw", "teamSpirit", "clickMult1", achievements=("assistants_10",))
    engine.recompute(_arms(10, lifetime_snowballs=10_000))
    assert set(engine.tracker.unlocked_ids()) == {"quickDraw", "teamSpirit", "clickMult1", "assistants_10"}

    assert engine.on_jump() == 2
    assert not engine.tracker.is_unlocked("quickDraw")
    assert not engine.tracker.is_unlocked("clickMult1")
    assert engine.tracker.is_unlocked("teamSpirit")
    assert engine.tracker.is_unlocked("assistants_10")

    stats = engine.recompute(GameSnapshot())
    assert stats.global_sps_multiplier == pytest.approx(1.1)
    assert stats.click_power == 1.0
    assert stats.unlocked == ()


def test_jump_classes_override():
    engine = _engine("quickDraw", "teamSpirit")
    engine.recompute(_arms(10))
    assert engine.on_jump(["global"]) == 1
    assert engine.tracker.is_unlocked("quickDraw")
    assert not engine.tracker.is_unlocked("teamSpirit")


def test_jump_classes_from_balance():
    engine = _engine("quickDraw", "teamSpirit", balance=EngineBalance(jump_reset_classes=("global",)))
    engine.recompute(_arms(10))
    engine.on_jump()
    assert engine.tracker.is_unlocked("quickDraw")
    assert not engine.tracker.is_unlocked("teamSpirit")


def test_boost_unlocks_again_after_jump():
    engine = _engine("quickDraw")
    engine.recompute(_arms(10))
    engine.on_jump()
    assert engine.recompute(_arms(10)).unlocked == ("quickDraw",)


# ── Events ───────────────────────────────────────────────────────


def test_event_achievement_unlocks_on_event():
    engine = _engine(achievements=("yeti_rare_1",))
    assert engine.recompute(GameSnapshot()).unlocked == ()

    engine.on_event("rareYetiFound", {"variant": "golden"})
    assert engine.recompute(GameSnapshot()).unlocked == ("yeti_rare_1",)

    engine.on_event("rareYetiFound", {"variant": "shadow"})
    assert engine.recompute(GameSnapshot()).unlocked == ()


def test_events_consumed_by_one_pass():
    engine = _engine(achievements=("speed_clicker",))
    engine.on_event("speedClicker", {"cps": 8, "duration": 5})
    assert engine.pending_events
    assert engine.recompute(GameSnapshot()).unlocked == ()
    assert engine.pending_events == ()

    # The earlier event is gone; a later qualifying one still counts
    assert engine.recompute(GameSnapshot()).unlocked == ()
    engine.on_event("speedClicker", {"cps": 12, "duration": 5})
    assert engine.recompute(GameSnapshot()).unlocked == ("speed_clicker",)


def test_event_not_replayed_after_unlock_reset():
    engine = _engine(achievements=("icicle_level_1",))
    engine.on_event("icicleLevelUp", {"level": 1})
    engine.recompute(GameSnapshot())
    engine.on_jump(["achievementEvent"])
    assert engine.recompute(GameSnapshot()).unlocked == ()


# ── Notifications ────────────────────────────────────────────────


def test_subscribers_notified_once():
    engine = _engine("teamSpirit", achievements=("assistants_10",))
    seen = []
    engine.subscribe(seen.append)

    engine.recompute(_arms(10), now=42.0)
    engine.recompute(_arms(12), now=43.0)

    assert [n.entry_id for n in seen] == ["teamSpirit", "assistants_10"]
    assert all(n.unlocked_at == 42.0 for n in seen)
    assert seen[1].is_achievement and not seen[0].is_achievement


def test_unsubscribe():
    engine = _engine("teamSpirit")
    seen = []
    unsubscribe = engine.subscribe(seen.append)
    unsubscribe()
    engine.recompute(_arms(10))
    assert seen == []


def test_failing_listener_does_not_lose_the_pass(caplog):
    engine = _engine("test")
    seen = []

    def boom(notification):
        raise RuntimeError("listener failed")

    engine.subscribe(boom)
    engine.subscribe(seen.append)
    with caplog.at_level(logging.ERROR, logger="flurry"):
        stats = engine.recompute(_arms(5, lifetime_snowballs=10_000))

    assert stats.grants == (Grant("test", 1_000_000),)
    assert engine.last_stats is stats
    assert [n.entry_id for n in seen] == ["test"]
    assert "listener failed" in caplog.text


def test_last_stats_tracks_latest_pass():
    engine = ProgressionEngine(default_catalog())
    assert engine.last_stats is None
    stats = engine.recompute(_arms(3))
    assert engine.last_stats is stats


# ── Restored saves and misconfigured entries ─────────────────────


def test_jump_clears_tracker_restored_from_save():
    saved = {
        "quickDraw": {"unlocked": True, "unlocked_at": 1.0, "progress": 0.0},
        "teamSpirit": {"unlocked": True, "unlocked_at": 2.0, "progress": 0.0},
    }
    tracker = UnlockTracker.from_dict(saved)
    engine = _engine("quickDraw", "teamSpirit", tracker=tracker)

    assert engine.on_jump() == 1
    assert not engine.tracker.is_unlocked("quickDraw")
    assert engine.tracker.is_unlocked("teamSpirit")


def test_unappliable_effect_warns_once_and_never_notifies(caplog):
    good = _engine("teamSpirit").catalog
    broken = CatalogEntry(
        id="broken",
        name="Broken",
        description="",
        kind=EntryKind.GLOBAL,
        cost=0,
        order=0,
        trigger1=StatThreshold("assistants_owned", 1),
        effect=Effect(Action.ADD, Target.ASSISTANT_SPS, 1.0, assistant_ids=("additionalArm",), entry_id="broken"),
    )
    engine = ProgressionEngine(Catalog((broken, *good.entries), good.assistants, good.groups))
    seen = []
    engine.subscribe(seen.append)

    with caplog.at_level(logging.DEBUG, logger="flurry"):
        for _ in range(3):
            engine.recompute(_arms(10))

    warnings = [r for r in caplog.records if r.levelno == logging.WARNING and "broken" in r.getMessage()]
    assert len(warnings) == 1
    assert [n.entry_id for n in seen] == ["teamSpirit"]
    assert engine.last_stats.unlocked == ("teamSpirit",)
