import random

import pytest

from civsim.hexgrid import Hex
from civsim.map import WorldMap
from civsim.nations import Nation
from civsim.terrain import TerrainType
from civsim.turn_engine import GameState

WIDTH = 12
HEIGHT = 10

MOUNTAIN_HEX = Hex(4, 4)
OCEAN_HEX = Hex(5, 2)
SNOW_HEX = Hex(7, 7)
PLAINS_HEX = Hex(2, 3)

RED_SETTLER_HEX = Hex(2, 2)
RED_WARRIOR_HEX = Hex(3, 2)
BLUE_WARRIOR_HEX = Hex(4, 2)   # east of the red warrior
BLUE_SETTLER_HEX = Hex(9, 7)


def make_map(width=WIDTH, height=HEIGHT, overrides=None):
    overrides = overrides or {}
    return WorldMap.generate(width, height, lambda h: overrides.get(h, TerrainType.GRASSLAND))


def _build_game():
    world_map = make_map(overrides={
        MOUNTAIN_HEX: TerrainType.MOUNTAIN,
        OCEAN_HEX: TerrainType.OCEAN,
        SNOW_HEX: TerrainType.SNOW,
        PLAINS_HEX: TerrainType.PLAINS,
    })

    # Keep references; look nations up by identity in tests.
    red = Nation("Red", "#c0392b")
    blue = Nation("Blue", "#2e6fd8")
    game = GameState([red, blue], world_map, random.Random(7))

    units = {
        "RED_SETTLER": game.spawn_unit(red, "SETTLER", RED_SETTLER_HEX),
        "RED_WARRIOR": game.spawn_unit(red, "WARRIOR", RED_WARRIOR_HEX),
        "BLUE_WARRIOR": game.spawn_unit(blue, "WARRIOR", BLUE_WARRIOR_HEX),
        "BLUE_SETTLER": game.spawn_unit(blue, "SETTLER", BLUE_SETTLER_HEX),
    }
    nations = {"Red": red, "Blue": blue}
    return game, units, nations


@pytest.fixture
def bundle():
    """(game, units, nations)"""
    return _build_game()


@pytest.fixture
def game(bundle):
    return bundle[0]


@pytest.fixture
def units(bundle):
    return bundle[1]


@pytest.fixture
def nations(bundle):
    return bundle[2]

