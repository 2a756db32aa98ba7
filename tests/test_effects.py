"""Tests for the effect applier and stat accumulator."""

from __future__ import annotations

import pytest

from flurry.data.balance import EngineBalance
from flurry.engine.catalog import Action, Effect, Group, SingleAssistant, Target
from flurry.engine.effects import Grant, StatAccumulator, apply_effect
from flurry.engine.errors import MalformedEntryError


def _acc() -> StatAccumulator:
    return StatAccumulator.from_baseline({"additionalArm": 10.0, "ballMachine": 20.0})


def test_baseline_defaults():
    acc = _acc()
    assert acc.click_power == 1.0
    assert acc.global_sps_multiplier == 1.0
    assert acc.assistant_multipliers == {"additionalArm": 1.0, "ballMachine": 1.0}
    assert acc.finalize().sps == pytest.approx(30.0)


def test_multiply_increment():
    acc = apply_effect(Effect(Action.MULTIPLY_INCREMENT, Target.SPS, 0.1), _acc())
    assert acc.global_sps_multiplier == pytest.approx(1.1)
    assert acc.finalize().sps == pytest.approx(33.0)


def test_multiply_direct():
    acc = apply_effect(Effect(Action.MULTIPLY_DIRECT, Target.CLICK_POWER, 2.0), _acc())
    assert acc.click_power == pytest.approx(2.0)


def test_apply_returns_the_same_accumulator():
    acc = _acc()
    assert apply_effect(Effect(Action.ADD, Target.ICICLE_RATE, 0.5), acc) is acc
    assert acc.icicle_rate == pytest.approx(1.5)


def test_cost_reduction_clamped():
    acc = _acc()
    effect = Effect(Action.ADD, Target.ASSISTANT_COST_REDUCTION, 0.6)
    apply_effect(effect, acc)
    apply_effect(effect, acc)
    assert acc.assistant_cost_reduction == pytest.approx(0.95)

    apply_effect(Effect(Action.ADD, Target.BOOST_COST_REDUCTION, -0.5), acc)
    assert acc.boost_cost_reduction == 0.0


def test_clamp_comes_from_balance():
    acc = _acc()
    bal = EngineBalance(cost_reduction_clamp=(0.0, 0.5))
    apply_effect(Effect(Action.ADD, Target.ASSISTANT_COST_REDUCTION, 0.9), acc, balance=bal)
    assert acc.assistant_cost_reduction == pytest.approx(0.5)


def test_assistant_target_leaves_global_alone():
    acc = apply_effect(
        Effect(Action.MULTIPLY_INCREMENT, Target.ASSISTANT_SPS, 0.5,
               ref=Group("animals"), assistant_ids=("additionalArm",)),
        _acc(),
    )
    assert acc.assistant_multipliers["additionalArm"] == pytest.approx(1.5)
    assert acc.assistant_multipliers["ballMachine"] == 1.0
    assert acc.global_sps_multiplier == 1.0
    assert acc.finalize().sps == pytest.approx(35.0)


def test_boost_scaled_by_effectiveness():
    acc = _acc()
    acc.boost_effectiveness = 1.2
    apply_effect(
        Effect(Action.MULTIPLY_INCREMENT, Target.ASSISTANT_SPS, 0.25,
               ref=SingleAssistant("ballMachine"), assistant_ids=("ballMachine",), boost_scaled=True),
        acc,
    )
    assert acc.assistant_multipliers["ballMachine"] == pytest.approx(1.3)


def test_grant_is_queued():
    acc = apply_effect(Effect(Action.GRANT_ONCE, Target.SNOWBALLS, 1_000_000, entry_id="test"), _acc())
    assert acc.grants == [Grant("test", 1_000_000)]
    assert acc.finalize().grants == (Grant("test", 1_000_000),)


def test_none_target_is_noop():
    acc = _acc()
    before = acc.copy()
    apply_effect(Effect(None, Target.NONE), acc)
    assert acc == before


def test_add_on_assistant_production_is_malformed():
    with pytest.raises(MalformedEntryError):
        apply_effect(Effect(Action.ADD, Target.ASSISTANT_SPS, 1, assistant_ids=("ballMachine",), entry_id="x"), _acc())


def test_copy_is_independent():
    acc = _acc()
    clone = acc.copy()
    clone.assistant_multipliers["ballMachine"] = 9.0
    clone.grants.append(Grant("x", 1))
    assert acc.assistant_multipliers["ballMachine"] == 1.0
    assert acc.grants == []


def test_derived_stats_are_read_only():
    stats = _acc().finalize()
    with pytest.raises(TypeError):
        stats.assistant_multipliers["ballMachine"] = 2.0
