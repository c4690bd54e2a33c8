from __future__ import annotations

import math
import random
from dataclasses import dataclass

# Damage is strength scaled by a uniform roll in this band.
DAMAGE_VARIANCE_MIN = 0.8
DAMAGE_VARIANCE_MAX = 1.2


@dataclass(frozen=True)
class AttackResult:
    success: bool
    damage: int = 0
    target_destroyed: bool = False

    def __str__(self) -> str:
        if not self.success:
            return "attack refused"
        suffix = " (destroyed)" if self.target_destroyed else ""
        return f"hit for {self.damage}{suffix}"


FAILED_ATTACK = AttackResult(success=False, damage=0)


def roll_damage(strength: int, rng: random.Random) -> int:
    variance = rng.uniform(DAMAGE_VARIANCE_MIN, DAMAGE_VARIANCE_MAX)
    return int(math.floor(strength * variance))


def damage_range(strength: int) -> tuple[int, int]:
    """Inclusive (min, max) damage a unit of this strength can deal."""
    return (int(math.floor(strength * DAMAGE_VARIANCE_MIN)),
            int(math.floor(strength * DAMAGE_VARIANCE_MAX)))
