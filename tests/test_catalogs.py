import logging

import pytest
from hypothesis import given
from hypothesis import strategies as st

from civsim.combat import damage_range
from civsim.resources import ResourceLedger, ResourceType
from civsim.terrain import (
    IMPASSABLE_COST,
    TerrainType,
    is_passable,
    movement_cost,
    terrain_yields,
)
from civsim.unit_types import initialize_unit_stats, production_cost
from civsim.units import Unit


def test_terrain_movement_costs():
    assert movement_cost(TerrainType.GRASSLAND) == 1
    assert movement_cost(TerrainType.SNOW) == 2
    assert movement_cost(TerrainType.OCEAN) == IMPASSABLE_COST
    assert movement_cost("Lava") == IMPASSABLE_COST
    assert not is_passable(TerrainType.MOUNTAIN)
    assert is_passable(TerrainType.COAST)


def test_terrain_yields():
    y = terrain_yields(TerrainType.PLAINS)
    assert (y.food, y.production, y.gold) == (1, 1, 0)
    assert terrain_yields(TerrainType.GRASSLAND).food == 2
    assert terrain_yields("Lava").food == 0


def test_production_costs():
    assert production_cost("WARRIOR") == 30
    assert production_cost("SETTLER") == 50
    assert production_cost("WORKER") == 40
    assert production_cost("CATAPULT") == 0


def test_initialize_unit_stats_copies_catalog():
    u = Unit("X1", "WARRIOR", (0, 0))
    initialize_unit_stats(u, "WARRIOR")
    assert u.strength == 6
    assert u.movement_points == u.max_movement == 2
    assert u.health == u.max_health == 100
    assert not u.can_found_city

    s = Unit("X2", "SETTLER", (0, 0))
    initialize_unit_stats(s, "SETTLER")
    assert s.can_found_city
    assert not s.can_attack()


def test_initialize_unit_stats_rejects_unknown_type():
    u = Unit("X1", "CATAPULT", (0, 0))
    with pytest.raises(ValueError):
        initialize_unit_stats(u, "CATAPULT")


def test_damage_range_for_warrior():
    assert damage_range(6) == (4, 7)


def test_ledger_spend_refuses_overdraw():
    ledger = ResourceLedger({ResourceType.GOLD: 10})
    assert not ledger.spend(ResourceType.GOLD, 11)
    assert ledger.get(ResourceType.GOLD) == 10
    assert ledger.spend(ResourceType.GOLD, 10)
    assert ledger.get(ResourceType.GOLD) == 0


def test_ledger_negative_amounts_warn_and_do_nothing(caplog):
    ledger = ResourceLedger({ResourceType.FOOD: 5})
    with caplog.at_level(logging.WARNING, logger="civsim.resources"):
        ledger.add(ResourceType.FOOD, -3)
        assert not ledger.spend(ResourceType.FOOD, -3)
    assert ledger.get(ResourceType.FOOD) == 5
    assert len(caplog.records) == 2


def test_ledger_get_all_is_a_copy():
    ledger = ResourceLedger()
    snapshot = ledger.get_all()
    snapshot[ResourceType.GOLD] = 99
    assert ledger.get(ResourceType.GOLD) == 0
    assert set(snapshot) == set(ResourceType)


@given(st.lists(st.tuples(st.booleans(), st.integers(min_value=-20, max_value=50)), max_size=40))
def test_ledger_balance_never_negative(ops):
    ledger = ResourceLedger()
    for is_add, amount in ops:
        if is_add:
            ledger.add(ResourceType.SCIENCE, amount)
        else:
            ledger.spend(ResourceType.SCIENCE, amount)
        assert ledger.get(ResourceType.SCIENCE) >= 0
