from __future__ import annotations

import logging
import math
import random
from typing import Dict, Optional

from civsim.config import GRID_HEIGHT, GRID_WIDTH
from civsim.hexgrid import Hex
from civsim.map import WorldMap
from civsim.terrain import TerrainType
from civsim.turn_engine import GameState

logger = logging.getLogger(__name__)

# (threshold, terrain), checked top-down against the noise value.
NOISE_BANDS = [
    (1.2, TerrainType.MOUNTAIN),
    (1.0, TerrainType.SNOW),
    (0.6, TerrainType.TUNDRA),
    (0.1, TerrainType.GRASSLAND),
    (-0.3, TerrainType.PLAINS),
    (-0.5, TerrainType.DESERT),
    (-0.8, TerrainType.COAST),
]

BAD_START_TERRAIN = (TerrainType.OCEAN, TerrainType.MOUNTAIN, TerrainType.SNOW)


def terrain_for(h: Hex) -> TerrainType:
    noise = math.sin(h.q * 0.4) + math.cos(h.r * 0.4 + h.q * 0.2)
    for threshold, terrain in NOISE_BANDS:
        if noise > threshold:
            return terrain
    return TerrainType.OCEAN


def generate_terrain(width: int, height: int) -> Dict[Hex, TerrainType]:
    return {Hex(q, r): terrain_for(Hex(q, r)) for r in range(height) for q in range(width)}


def _start_positions(width: int, height: int):
    a = Hex(min(5, width - 1), min(5, height - 1))
    b = Hex(max(0, width - 6), max(0, height - 6))
    return [a, b]


def _find_start(world_map: WorldMap, near: Hex) -> Hex:
    for dr in range(-2, 3):
        for dq in range(-2, 3):
            h = Hex(near.q + dq, near.r + dr)
            tile = world_map.tile_at(h)
            if tile is not None and tile.terrain not in BAD_START_TERRAIN:
                return h
    return near


def _escort_hex(world_map: WorldMap, start: Hex) -> Hex:
    for h in world_map.neighbors_in_bounds(start):
        if world_map.tile_at(h).is_passable:
            return h
    return start


def build_game(seed: Optional[int] = None,
               width: int = GRID_WIDTH,
               height: int = GRID_HEIGHT) -> GameState:
    """Red (human) vs Blue (AI), each starting with a settler and a warrior."""
    world_map = WorldMap(width, height, generate_terrain(width, height))
    game = GameState.create_default(world_map, random.Random(seed))

    for nation, near in zip(game.nations, _start_positions(width, height)):
        start = _find_start(world_map, near)
        game.spawn_unit(nation, "SETTLER", start)
        game.spawn_unit(nation, "WARRIOR", _escort_hex(world_map, start))
        logger.debug(f"{nation.name} starts at {start}")

    game.log.append(f"Turn {game.turn_number}: {game.current_nation.name} to act.")
    return game
