# civsim/units.py
from __future__ import annotations

import random
from typing import Optional

from civsim.combat import AttackResult, FAILED_ATTACK, roll_damage
from civsim.hexgrid import Hex
from civsim.unit_types import get_unit_type


class Unit:
    """
    A unit on the map. Owned by exactly one Nation's roster.

    `position` is authoritative; the tile index follows it. Stats start at
    placeholder values and are filled in by unit_types.initialize_unit_stats().
    """

    def __init__(self, unit_id: str, unit_type: str, position, owner=None):
        self.unit_id = unit_id
        self.unit_type = unit_type
        self.position = position if isinstance(position, Hex) else Hex(*position)
        self.owner = owner

        self.max_movement = 2
        self.movement_points = self.max_movement
        self.max_health = 100
        self.health = self.max_health
        self.strength = 0
        self.has_acted = False
        self.can_found_city = False

    @property
    def name(self) -> str:
        ut = get_unit_type(self.unit_type)
        return ut.name if ut is not None else self.unit_type

    @property
    def is_combatant(self) -> bool:
        return self.strength > 0

    def can_move(self) -> bool:
        return self.movement_points > 0 and not self.has_acted

    def can_attack(self) -> bool:
        return not self.has_acted and self.strength > 0

    def move(self, dest: Hex, cost: int) -> bool:
        if self.movement_points < cost:
            return False
        self.position = dest
        self.movement_points -= cost
        return True

    def attack(self, target: "Unit", rng: Optional[random.Random] = None) -> AttackResult:
        if not self.can_attack():
            return FAILED_ATTACK

        damage = roll_damage(self.strength, rng or random)
        target.take_damage(damage)
        self.has_acted = True
        return AttackResult(success=True, damage=damage, target_destroyed=target.is_destroyed())

    def take_damage(self, amount: int) -> None:
        self.health = max(0, self.health - amount)

    def is_destroyed(self) -> bool:
        return self.health <= 0

    def reset_movement(self) -> None:
        self.movement_points = self.max_movement
        self.has_acted = False

    def __repr__(self):
        owner = getattr(self.owner, "name", self.owner)
        return f"{self.unit_id}({owner}) at {self.position}"
