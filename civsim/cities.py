from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Deque, Iterable, List, Optional, Set

from civsim.hexgrid import Hex
from civsim.unit_types import get_unit_type, production_cost

logger = logging.getLogger(__name__)

# Called as handler(completed_type, city) when an item finishes.
ProductionCallback = Callable[[str, "City"], None]


class City:
    def __init__(self, name: str, position: Hex, owner,
                 population: int = 1,
                 on_production_complete: Optional[ProductionCallback] = None):
        self.name = name
        self.position = position
        self.owner = owner
        self.population = max(1, int(population))

        self.production_queue: Deque[str] = deque()
        self.current_production: Optional[str] = None
        self.production_progress = 0
        self.borders: List[Hex] = []
        self.buildings: Set[str] = set()

        self.on_production_complete = on_production_complete

    def grow_population(self, amount: int = 1) -> None:
        self.population += amount

    # -----------------------------
    # Production
    # -----------------------------
    def set_production(self, item_type: str) -> None:
        _require_known(item_type)
        self.current_production = item_type
        self.production_progress = 0

    def queue_production(self, item_type: str) -> None:
        _require_known(item_type)
        self.production_queue.append(item_type)

    def get_production_queue(self) -> List[str]:
        return list(self.production_queue)

    def add_production(self, amount: int) -> Optional[str]:
        """
        Accrue production toward the current item.

        With nothing in progress, the next queued item is pulled first; with an
        empty queue this is a no-op. On completion the callback fires, progress
        resets to 0 (overflow is discarded) and the next queued item becomes
        current. That item starts accruing on the following call.

        Returns the completed item type, or None.
        """
        if self.current_production is None:
            if not self.production_queue:
                return None
            self.current_production = self.production_queue.popleft()

        self.production_progress += amount
        if self.production_progress < production_cost(self.current_production):
            return None

        completed = self.current_production
        if self.on_production_complete is not None:
            self.on_production_complete(completed, self)
        else:
            logger.debug(f"{self.name} finished {completed} with no completion handler")

        self.production_progress = 0
        self.current_production = None
        if self.production_queue:
            self.current_production = self.production_queue.popleft()
        return completed

    # -----------------------------
    # Borders / buildings
    # -----------------------------
    def expand_borders(self, hexes: Iterable[Hex]) -> None:
        for h in hexes:
            if h not in self.borders:
                self.borders.append(h)

    def add_building(self, building_type: str) -> None:
        self.buildings.add(building_type)

    def has_building(self, building_type: str) -> bool:
        return building_type in self.buildings

    def __repr__(self):
        owner = getattr(self.owner, "name", self.owner)
        return f"{self.name}({owner}) at {self.position}"


def _require_known(item_type: str) -> None:
    if get_unit_type(item_type) is None:
        raise ValueError(f"Unknown unit type: {item_type!r}")
