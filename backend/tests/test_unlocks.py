import pytest

from fatelock.models.category import Category
from fatelock.models.progression import CostKind, LogKind, LogOutcome
from fatelock.services.history import EventLog
from fatelock.services.unlocks import UnlockStateMachine


@pytest.fixture
def machine(snapshot):
    return UnlockStateMachine(snapshot, EventLog(snapshot.history))


def test_finalize_from_idle_is_a_no_op(machine, snapshot):
    before = snapshot.model_dump()

    assert machine.finalize() is None
    assert snapshot.model_dump() == before


def test_finalize_skill_raises_tier_and_charges_one_key(machine, snapshot):
    machine.begin_pending(Category.SKILLS, "Attack", CostKind.STANDARD)

    finalized = machine.finalize()

    assert finalized is not None
    assert finalized.tier == 1
    assert snapshot.unlocks.skills["Attack"] == 1
    assert snapshot.unlocks.levels["Attack"] == 1
    assert snapshot.keys == 2
    assert machine.is_idle
    entry = snapshot.history[-1]
    assert entry.kind is LogKind.UNLOCK
    assert entry.message == "Upgraded: Attack"
    assert entry.details == "Tier 1 Unlocked (Levels 1-10)"


def test_second_finalize_changes_nothing(machine, snapshot):
    machine.begin_pending(Category.EQUIPMENT, "Head", CostKind.STANDARD)
    machine.finalize()
    after_first = snapshot.model_dump()

    assert machine.finalize() is None
    assert snapshot.model_dump() == after_first
    assert snapshot.keys == 2


def test_begin_is_refused_while_pending(machine):
    first = machine.begin_pending(Category.POWER, "High Alchemy", CostKind.STANDARD)

    assert machine.begin_pending(Category.BOSSES, "Inferno", CostKind.STANDARD) is None
    assert machine.pending is first


def test_tier_is_clamped_at_table_maximum(machine, snapshot):
    snapshot.unlocks.equipment["Head"] = 9
    machine.begin_pending(Category.EQUIPMENT, "Head", CostKind.STANDARD)

    finalized = machine.finalize()

    assert finalized.tier == 9
    assert snapshot.unlocks.equipment["Head"] == 9
    assert snapshot.keys == 2
    assert snapshot.history[-1].message == "Already Maxed: Head"
    assert snapshot.history[-1].details == "Tier 9 is the highest tier"


def test_skill_at_tier_ten_reports_level_99_cap(machine, snapshot):
    snapshot.unlocks.skills["Magic"] = 9
    machine.begin_pending(Category.SKILLS, "Magic", CostKind.STANDARD)

    machine.finalize()

    assert snapshot.history[-1].details == "Tier 10 Unlocked (Levels 1-99)"


def test_set_insert_ignores_existing_entry(machine, snapshot):
    snapshot.unlocks.regions.append("Falador")
    machine.begin_pending(Category.REGIONS, "Falador", CostKind.STANDARD)

    machine.finalize()

    assert snapshot.unlocks.regions == ["Falador"]


def test_region_unlock_names_parent_region(machine, snapshot):
    machine.begin_pending(Category.REGIONS, "Catherby", CostKind.STANDARD)

    machine.finalize()

    assert snapshot.unlocks.regions == ["Catherby"]
    assert snapshot.history[-1].message == "Unlocked Area: Catherby"
    assert snapshot.history[-1].details == "(Kandarin)"


def test_rare_cost_consumes_omni_key(machine, snapshot):
    snapshot.special_keys = 2
    machine.begin_pending(Category.MINIGAMES, "Tithe Farm", CostKind.RARE)

    machine.finalize()

    assert snapshot.special_keys == 1
    assert snapshot.keys == 3
    assert snapshot.unlocks.minigames == ["Tithe Farm"]
    assert snapshot.history[-1].message == "Unlocked Minigame: Tithe Farm"


def test_abandon_still_spends_the_key(machine, snapshot):
    pending = machine.begin_pending(Category.BOSSES, "Inferno", CostKind.STANDARD)

    assert machine.abandon() is pending
    assert machine.is_idle
    assert snapshot.keys == 2
    assert snapshot.unlocks.bosses == []
    entry = snapshot.history[-1]
    assert entry.kind is LogKind.ROLL
    assert entry.outcome is LogOutcome.FAIL
    assert entry.message == "Abandoned: Inferno"
    assert entry.details == "The key crumbles to dust."


def test_abandon_rare_unlock_spends_omni_key(machine, snapshot):
    snapshot.special_keys = 1
    machine.begin_pending(Category.POWER, "High Alchemy", CostKind.RARE)

    machine.abandon()

    assert snapshot.special_keys == 0
    assert snapshot.keys == 3
    assert snapshot.history[-1].details == "The Omni-Key crumbles to dust."


def test_abandon_from_idle_is_a_no_op(machine, snapshot):
    assert machine.abandon() is None
    assert snapshot.keys == 3
    assert snapshot.history == []


def test_discard_forgets_pending_without_charge(machine, snapshot):
    pending = machine.begin_pending(Category.REGIONS, "Falador", CostKind.STANDARD)

    machine.discard()

    assert machine.is_idle
    assert snapshot.keys == 3
    assert machine.apply_display_image(pending, "https://example.test/late.png") is False


def test_display_image_only_applies_to_current_pending(machine):
    stale = machine.begin_pending(Category.REGIONS, "Falador", CostKind.STANDARD)
    machine.abandon()
    current = machine.begin_pending(Category.REGIONS, "Falador", CostKind.STANDARD)

    assert machine.apply_display_image(stale, "https://example.test/old.png") is False
    assert current.item_image is None
    assert machine.apply_display_image(current, "https://example.test/new.png") is True
    assert machine.pending.item_image == "https://example.test/new.png"
