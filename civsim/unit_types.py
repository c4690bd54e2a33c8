# civsim/unit_types.py
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional


class UnitType:
    def __init__(self, key: str, name: str, movement: int,
                 strength: int = 0,
                 max_health: int = 100,
                 cost: int = 0,
                 can_found_city: bool = False):
        self.key = key
        self.name = name
        self.movement = movement
        self.strength = strength
        self.max_health = max_health
        self.cost = cost
        self.can_found_city = can_found_city

    @property
    def is_combatant(self) -> bool:
        return self.strength > 0

    def __repr__(self):
        return f"UnitType({self.key})"


WARRIOR = UnitType(
    key="WARRIOR",
    name="Warrior",
    movement=2,
    strength=6,
    max_health=100,
    cost=30,
)

SETTLER = UnitType(
    key="SETTLER",
    name="Settler",
    movement=2,
    strength=0,
    max_health=100,
    cost=50,
    can_found_city=True,
)

WORKER = UnitType(
    key="WORKER",
    name="Worker",
    movement=2,
    strength=0,
    max_health=100,
    cost=40,
)

UNIT_TYPES: Mapping[str, UnitType] = MappingProxyType({
    ut.key: ut for ut in (WARRIOR, SETTLER, WORKER)
})


def get_unit_type(key: str) -> Optional[UnitType]:
    return UNIT_TYPES.get(key)


def production_cost(key: str) -> int:
    ut = UNIT_TYPES.get(key)
    return ut.cost if ut is not None else 0


def initialize_unit_stats(unit, key: str) -> None:
    """
    Copy catalog stats onto a freshly created unit.
    This is the only place unit stats are validated: an unknown key is a
    configuration bug, not a gameplay event, so it raises.
    """
    ut = UNIT_TYPES.get(key)
    if ut is None:
        raise ValueError(f"Unknown unit type: {key!r}")

    unit.unit_type = ut.key
    unit.max_movement = ut.movement
    unit.movement_points = ut.movement
    unit.max_health = ut.max_health
    unit.health = ut.max_health
    unit.strength = ut.strength
    unit.can_found_city = ut.can_found_city
