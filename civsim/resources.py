# civsim/resources.py
from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, Mapping, Optional

logger = logging.getLogger(__name__)


class ResourceType(str, Enum):
    GOLD = "Gold"
    FOOD = "Food"
    PRODUCTION = "Production"
    SCIENCE = "Science"

    def __str__(self) -> str:
        return self.value


class ResourceLedger:
    """
    Per-nation resource stock.
    Balances never go negative: spend() refuses instead of overdrawing.
    """

    def __init__(self, initial: Optional[Mapping[ResourceType, int]] = None):
        initial = initial or {}
        self._balances: Dict[ResourceType, int] = {
            rt: int(initial.get(rt, 0)) for rt in ResourceType
        }

    def add(self, resource: ResourceType, amount: int) -> None:
        if amount < 0:
            logger.warning(f"Ignoring negative add of {amount} {resource}")
            return
        self._balances[resource] = self._balances.get(resource, 0) + amount

    def spend(self, resource: ResourceType, amount: int) -> bool:
        if amount < 0:
            logger.warning(f"Ignoring negative spend of {amount} {resource}")
            return False
        if not self.has_enough(resource, amount):
            return False
        self._balances[resource] -= amount
        return True

    def has_enough(self, resource: ResourceType, amount: int) -> bool:
        return self._balances.get(resource, 0) >= amount

    def get(self, resource: ResourceType) -> int:
        return self._balances.get(resource, 0)

    def get_all(self) -> Dict[ResourceType, int]:
        return dict(self._balances)

    def __repr__(self):
        parts = ", ".join(f"{rt.value}={amt}" for rt, amt in self._balances.items())
        return f"ResourceLedger({parts})"
