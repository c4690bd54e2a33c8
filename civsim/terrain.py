# civsim/terrain.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class TerrainType(str, Enum):
    GRASSLAND = "Grassland"
    PLAINS = "Plains"
    DESERT = "Desert"
    TUNDRA = "Tundra"
    SNOW = "Snow"
    MOUNTAIN = "Mountain"
    OCEAN = "Ocean"
    COAST = "Coast"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Yield:
    food: int = 0
    production: int = 0
    gold: int = 0


NO_YIELD = Yield()

# Land movement. Anything at or above this cost blocks land units.
IMPASSABLE_COST = 999

TERRAIN_MOVEMENT_COSTS: Mapping[TerrainType, int] = MappingProxyType({
    TerrainType.GRASSLAND: 1,
    TerrainType.PLAINS: 1,
    TerrainType.DESERT: 1,
    TerrainType.TUNDRA: 1,
    TerrainType.SNOW: 2,
    TerrainType.COAST: 1,
    TerrainType.OCEAN: IMPASSABLE_COST,
    TerrainType.MOUNTAIN: IMPASSABLE_COST,
})

TERRAIN_YIELDS: Mapping[TerrainType, Yield] = MappingProxyType({
    TerrainType.GRASSLAND: Yield(food=2),
    TerrainType.PLAINS: Yield(food=1, production=1),
    TerrainType.DESERT: Yield(production=1),
    TerrainType.TUNDRA: Yield(food=1),
    TerrainType.SNOW: NO_YIELD,
    TerrainType.COAST: Yield(food=1),
    TerrainType.OCEAN: NO_YIELD,
    TerrainType.MOUNTAIN: NO_YIELD,
})

# Terrain the AI will settle on, most fertile first.
FERTILE_TERRAIN = (TerrainType.GRASSLAND, TerrainType.PLAINS)

# Terrain a city can never be founded on.
UNSETTLEABLE_TERRAIN = (TerrainType.OCEAN, TerrainType.MOUNTAIN)


def movement_cost(terrain) -> int:
    return TERRAIN_MOVEMENT_COSTS.get(terrain, IMPASSABLE_COST)


def is_passable(terrain) -> bool:
    return movement_cost(terrain) < IMPASSABLE_COST


def terrain_yields(terrain) -> Yield:
    return TERRAIN_YIELDS.get(terrain, NO_YIELD)
