import random

import pytest

from conftest import ScriptedRandom
from fatelock.models.progression import LogKind, LogOutcome
from fatelock.services.rolls import resolve_roll


def test_guaranteed_roll_grants_key_and_resets_fate(snapshot):
    snapshot.fate_points = 17
    rng = ScriptedRandom(ints=[57, 42])

    outcome = resolve_roll(snapshot, "Quest (Grandmaster)", 100, rng)

    assert outcome.success is True
    assert outcome.rare is False
    assert snapshot.keys == 4
    assert snapshot.special_keys == 0
    assert snapshot.fate_points == 0
    entry = snapshot.history[-1]
    assert entry.kind is LogKind.ROLL
    assert entry.outcome is LogOutcome.SUCCESS
    assert entry.roll_value == 57
    assert entry.threshold == 100
    assert entry.source == "Quest (Grandmaster)"
    assert entry.message == "Key Found! Rolled 57 (needed ≤ 100)"


def test_top_face_on_bonus_roll_grants_omni_key_instead(snapshot):
    rng = ScriptedRandom(ints=[10, 100])

    outcome = resolve_roll(snapshot, "Diary (Medium)", 50, rng)

    assert outcome.success and outcome.rare
    assert snapshot.keys == 3
    assert snapshot.special_keys == 1
    assert snapshot.fate_points == 0
    assert snapshot.history[-1].message == "LEGENDARY DROP! You found an Omni-Key!"


def test_roll_equal_to_threshold_succeeds(snapshot):
    outcome = resolve_roll(snapshot, "Quest (Intermediate)", 40, ScriptedRandom(ints=[40, 1]))

    assert outcome.success is True
    assert snapshot.keys == 4


def test_success_resets_pity_from_any_value(snapshot):
    snapshot.fate_points = 49

    resolve_roll(snapshot, "Slayer Task", 1, ScriptedRandom(ints=[1, 5]))

    assert snapshot.fate_points == 0


@pytest.mark.parametrize("failures", [1, 10, 49])
def test_consecutive_failures_accumulate_fate(snapshot, failures):
    rng = random.Random(failures)
    for _ in range(failures):
        outcome = resolve_roll(snapshot, "Collection Log", 0, rng)
        assert outcome.success is False

    assert snapshot.fate_points == failures
    assert snapshot.keys == 3
    assert len(snapshot.history) == failures


def test_fifty_failures_trigger_a_single_pity_key(snapshot):
    rng = random.Random(3)
    fate_sequence = []
    keys_sequence = []

    for _ in range(50):
        resolve_roll(snapshot, "Combat Achievement (Easy)", 0, rng)
        fate_sequence.append(snapshot.fate_points)
        keys_sequence.append(snapshot.keys)

    assert fate_sequence == list(range(1, 50)) + [0]
    assert keys_sequence == [3] * 49 + [4]

    fails = [
        entry for entry in snapshot.history
        if entry.kind is LogKind.ROLL and entry.outcome is LogOutcome.FAIL
    ]
    pities = [entry for entry in snapshot.history if entry.kind is LogKind.PITY]
    assert len(fails) == 50
    assert len(pities) == 1
    assert snapshot.history[-2].kind is LogKind.ROLL
    assert snapshot.history[-2].roll_value is not None
    assert snapshot.history[-2].threshold == 0
    assert snapshot.history[-1].kind is LogKind.PITY


def test_failure_details_report_fate_progress(snapshot):
    resolve_roll(snapshot, "Clue Scroll (Easy)", 30, ScriptedRandom(ints=[31]))

    entry = snapshot.history[-1]
    assert entry.message == "No Key. Rolled 31 (needed ≤ 30)"
    assert entry.details == "Fate Points: 1/50"


def test_pity_limit_can_be_lowered(snapshot):
    rng = ScriptedRandom(ints=[90, 90, 90])
    outcomes = [resolve_roll(snapshot, "Slayer Task", 10, rng, pity_limit=3) for _ in range(3)]

    assert [o.pity_triggered for o in outcomes] == [False, False, True]
    assert snapshot.keys == 4
    assert snapshot.fate_points == 0
