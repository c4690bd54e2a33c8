from __future__ import annotations

import logging
from enum import Enum
from typing import List, Mapping, Optional

from civsim.resources import ResourceLedger, ResourceType
from civsim.terrain import terrain_yields

logger = logging.getLogger(__name__)


class Age(str, Enum):
    ANCIENT = "Ancient"
    MODERN = "Modern"
    INFORMATION = "Information"


class Nation:
    def __init__(self, name: str, color: str,
                 starting_resources: Optional[Mapping[ResourceType, int]] = None,
                 is_ai: bool = False):
        self.name = name
        self.color = color
        self.is_ai = is_ai
        self.resources = ResourceLedger(starting_resources)
        self.cities: List = []
        self.units: List = []
        self.current_age = Age.ANCIENT
        self.technologies: List[str] = []

    def __repr__(self):
        return self.name

    # -----------------------------
    # Rosters
    # -----------------------------
    def add_city(self, city) -> None:
        if city not in self.cities:
            self.cities.append(city)

    def add_unit(self, unit) -> None:
        if unit not in self.units:
            self.units.append(unit)

    def remove_unit(self, unit) -> None:
        if unit in self.units:
            self.units.remove(unit)

    def units_of_type(self, unit_type: str) -> list:
        return [u for u in self.units if u.unit_type == unit_type]

    # -----------------------------
    # Resources
    # -----------------------------
    def add_resource(self, resource: ResourceType, amount: int) -> None:
        self.resources.add(resource, amount)

    def spend_resource(self, resource: ResourceType, amount: int) -> bool:
        return self.resources.spend(resource, amount)

    def has_enough_resources(self, resource: ResourceType, amount: int) -> bool:
        return self.resources.has_enough(resource, amount)

    # -----------------------------
    # Turn processing
    # -----------------------------
    def process_turn(self, world_map) -> None:
        """
        End-of-turn upkeep, run once per nation per turn:
          1) each city yields food/production/gold equal to its population
          2) each border hex this nation owns adds its terrain yield
          3) the city's production advances by its population
        Then every unit gets its movement back.
        """
        for city in list(self.cities):
            pop = city.population
            self.resources.add(ResourceType.FOOD, pop)
            self.resources.add(ResourceType.PRODUCTION, pop)
            self.resources.add(ResourceType.GOLD, pop)

            for h in city.borders:
                tile = world_map.tile_at(h) if world_map is not None else None
                if tile is None or not tile.is_owned_by(self):
                    continue
                y = terrain_yields(tile.terrain)
                self.resources.add(ResourceType.FOOD, y.food)
                self.resources.add(ResourceType.PRODUCTION, y.production)
                self.resources.add(ResourceType.GOLD, y.gold)

            city.add_production(pop)

        for unit in self.units:
            unit.reset_movement()

    # -----------------------------
    # Technology / ages (bookkeeping only)
    # -----------------------------
    def research_technology(self, tech_name: str) -> None:
        if tech_name not in self.technologies:
            self.technologies.append(tech_name)

    def has_technology(self, tech_name: str) -> bool:
        return tech_name in self.technologies

    def advance_age(self) -> bool:
        # No advancement rules exist yet.
        logger.debug(f"{self.name} cannot advance past {self.current_age.value}")
        return False
