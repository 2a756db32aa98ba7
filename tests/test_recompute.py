"""Tests for derived stat recomputation."""

from __future__ import annotations

import logging
from dataclasses import replace

import pytest

from flurry.data.achievements import ALL_ACHIEVEMENTS
from flurry.data.upgrades import ALL_UPGRADES, BOOST_EFFICIENCY
from flurry.engine.catalog import NO_OP, Catalog, CatalogEntry, EntryKind, default_catalog, load_catalog
from flurry.engine.economy import production_baseline
from flurry.engine.effects import Grant
from flurry.engine.game_state import GameSnapshot
from flurry.engine.recompute import recompute
from flurry.engine.unlocks import UnlockTracker, UnlockTransition


def _catalog(*upgrade_ids: str, achievements: tuple[str, ...] = ()) -> Catalog:
    return load_catalog(
        upgrades=[ALL_UPGRADES[u] for u in upgrade_ids],
        achievements=[ALL_ACHIEVEMENTS[a] for a in achievements],
    )


def _arms(n: int, **kw) -> GameSnapshot:
    return GameSnapshot(assistants={"additionalArm": n}, **kw)


# ── Team Spirit: threshold crossing ──────────────────────────────


def test_team_spirit_applies_once():
    catalog = _catalog("teamSpirit")
    tracker = UnlockTracker(catalog.persistence_classes())

    first = recompute(catalog, _arms(9), tracker, now=1.0)
    assert first.stats.sps == pytest.approx(9.0)
    assert first.stats.global_sps_multiplier == 1.0
    assert first.notifications == ()
    assert not tracker.is_unlocked("teamSpirit")

    second = recompute(catalog, _arms(10), tracker, now=2.0)
    assert second.stats.unlocked == ("teamSpirit",)
    assert second.stats.global_sps_multiplier == pytest.approx(1.1)
    assert second.stats.sps == pytest.approx(11.0)

    third = recompute(catalog, _arms(15), tracker, now=3.0)
    assert third.stats.unlocked == ()
    assert third.notifications == ()
    assert third.stats.global_sps_multiplier == pytest.approx(1.1)
    assert third.stats.sps == pytest.approx(16.5)
    assert tracker.try_unlock("teamSpirit", True, 4.0) is UnlockTransition.ALREADY_UNLOCKED
    assert tracker.record("teamSpirit").unlocked_at == 2.0


def test_unlock_survives_falling_stat():
    catalog = _catalog("teamSpirit")
    tracker = UnlockTracker()
    recompute(catalog, _arms(10), tracker)
    result = recompute(catalog, _arms(3), tracker)
    assert result.stats.global_sps_multiplier == pytest.approx(1.1)


# ── Two-trigger grant ────────────────────────────────────────────


def test_joined_grant_fires_exactly_once():
    catalog = _catalog("test")
    tracker = UnlockTracker()

    short = recompute(catalog, _arms(5, lifetime_snowballs=9_999), tracker)
    assert short.stats.grants == ()

    hit = recompute(catalog, _arms(5, lifetime_snowballs=10_000), tracker)
    assert hit.stats.grants == (Grant("test", 1_000_000),)


def test_grant_once_over_many_passes():
    catalog = _catalog("test")
    tracker = UnlockTracker()
    snapshot = _arms(5, lifetime_snowballs=10_000)

    grants = []
    for _ in range(10_000):
        grants.extend(recompute(catalog, snapshot, tracker, now=0.0).stats.grants)
    assert grants == [Grant("test", 1_000_000)]


def test_restored_unlock_does_not_grant_again():
    catalog = _catalog("test")
    tracker = UnlockTracker.from_dict({"test": {"unlocked": True, "unlocked_at": 1.0}})
    result = recompute(catalog, _arms(5, lifetime_snowballs=10_000), tracker)
    assert result.stats.grants == ()
    assert result.notifications == ()


# ── Ordering ─────────────────────────────────────────────────────


def test_boost_effectiveness_scales_later_boosts():
    catalog = _catalog("boostEfficiency", "quickDraw")
    snapshot = _arms(10, boosts_purchased=10)
    stats = recompute(catalog, snapshot, UnlockTracker()).stats
    assert stats.boost_effectiveness == pytest.approx(1.1)
    assert stats.assistant_multipliers["additionalArm"] == pytest.approx(1.275)


def test_boost_effectiveness_ordered_after_boost_does_not_scale_it():
    late = replace(BOOST_EFFICIENCY, order=999)
    catalog = load_catalog(upgrades=[late, ALL_UPGRADES["quickDraw"]], achievements=[])
    stats = recompute(catalog, _arms(10, boosts_purchased=10), UnlockTracker()).stats
    assert stats.boost_effectiveness == pytest.approx(1.1)
    assert stats.assistant_multipliers["additionalArm"] == pytest.approx(1.25)


def test_repeated_passes_are_identical():
    snapshot = GameSnapshot(
        assistants={aid: 40 for aid in default_catalog().assistants},
        lifetime_snowballs=1e13,
        total_clicks=6_000,
        boosts_purchased=30,
        time_played_seconds=40_000,
    )
    tracker = UnlockTracker()
    first = recompute(default_catalog(), snapshot, tracker, now=1.0).stats
    second = recompute(default_catalog(), snapshot, tracker, now=2.0).stats
    third = recompute(default_catalog(), snapshot, tracker, now=3.0).stats

    assert first.unlocked and not second.unlocked
    for field in ("sps", "click_power", "global_sps_multiplier", "boost_effectiveness",
                  "assistant_cost_reduction", "boost_cost_reduction", "icicle_rate"):
        assert getattr(first, field) == getattr(second, field) == getattr(third, field)
    assert dict(first.assistant_multipliers) == dict(second.assistant_multipliers)


def test_fresh_trackers_agree():
    snapshot = GameSnapshot(assistants={"additionalArm": 25, "neighborKids": 12}, lifetime_snowballs=5e6)
    a = recompute(default_catalog(), snapshot, UnlockTracker(), now=1.0).stats
    b = recompute(default_catalog(), snapshot, UnlockTracker(), now=1.0).stats
    assert a.to_dict() == b.to_dict()


# ── Baseline and failures ────────────────────────────────────────


def test_baseline_not_modified():
    catalog = _catalog("teamSpirit", "animalTraining")
    snapshot = _arms(10)
    baseline = production_baseline(catalog, snapshot)
    before = baseline.copy()
    recompute(catalog, snapshot, UnlockTracker(), baseline=baseline)
    assert baseline == before


def test_malformed_entry_skipped_with_warning(caplog):
    good = _catalog("teamSpirit")
    broken = CatalogEntry(
        id="broken",
        name="Broken",
        description="",
        kind=EntryKind.GLOBAL,
        cost=0,
        order=0,
        trigger1="not a trigger",
        effect=NO_OP,
    )
    catalog = Catalog((broken, *good.entries), good.assistants, good.groups)

    with caplog.at_level(logging.WARNING, logger="flurry"):
        result = recompute(catalog, _arms(10), UnlockTracker())

    assert "broken" in caplog.text
    assert result.stats.unlocked == ("teamSpirit",)
    assert result.stats.global_sps_multiplier == pytest.approx(1.1)
