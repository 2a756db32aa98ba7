"""Tests for the game snapshot."""

import pytest

from flurry.engine.game_state import STAT_NAMES, GameSnapshot


def test_from_dict_ignores_unknown_keys():
    snap = GameSnapshot.from_dict({"lifetime_snowballs": "1500", "total_clicks": 7, "colour": "blue"})
    assert snap.lifetime_snowballs == 1500.0
    assert snap.total_clicks == 7
    assert not hasattr(snap, "colour")


def test_from_dict_assistants():
    snap = GameSnapshot.from_dict({"assistants": {"ballMachine": "3"}})
    assert snap.owned("ballMachine") == 3
    assert snap.owned("iceDragon") == 0
    assert snap.assistants_owned == 3


def test_stat_vocabulary():
    assert "assistants_owned" in STAT_NAMES
    assert "assistants" not in STAT_NAMES
    assert GameSnapshot(yetis_spotted=4).stat("yetis_spotted") == 4
    with pytest.raises(KeyError):
        GameSnapshot().stat("assistants")


def test_from_dict_rejects_fractional_counters():
    with pytest.raises(ValueError):
        GameSnapshot.from_dict({"total_clicks": 12.7})
    with pytest.raises(ValueError):
        GameSnapshot.from_dict({"assistants": {"additionalArm": 2.5}})


def test_from_dict_accepts_whole_floats():
    snap = GameSnapshot.from_dict({"total_clicks": 12.0, "assistants": {"additionalArm": 3.0}})
    assert snap.total_clicks == 12
    assert isinstance(snap.total_clicks, int)
    assert snap.owned("additionalArm") == 3
