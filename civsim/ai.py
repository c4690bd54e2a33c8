# civsim/ai.py
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from civsim.hexgrid import Hex, axial_distance
from civsim.terrain import FERTILE_TERRAIN, TerrainType
from civsim.units import Unit

if TYPE_CHECKING:
    from civsim.nations import Nation
    from civsim.turn_engine import GameState

logger = logging.getLogger(__name__)

# Settler site bonuses.
GRASSLAND_BONUS = 5
PLAINS_BONUS = 3

# Warrior move scores.
UNOWNED_SCORE = 10
OWN_TERRITORY_SCORE = -5
ENEMY_TERRITORY_SCORE = 15
MOVE_JITTER = 3.0

MAX_CITIES_BEFORE_SETTLING_STOPS = 3


@dataclass(frozen=True)
class Personality:
    aggression: float = 0.5
    expansion: float = 0.7
    defense: float = 0.6


DEFAULT_PERSONALITY = Personality()


class AIController:
    """
    Greedy one-turn planner for a computer nation.

    A turn has two phases: pick production for idle cities, then walk a
    snapshot of the unit roster and let each unit act once.
    """

    def __init__(self, nation: "Nation", game: "GameState",
                 personality: Personality = DEFAULT_PERSONALITY,
                 rng: Optional[random.Random] = None):
        self.nation = nation
        self.game = game
        self.personality = personality
        self.rng = rng or game.rng

    def execute_turn(self) -> None:
        logger.debug(f"AI turn for {self.nation.name} (turn {self.game.turn_number})")
        self.manage_production()
        self.manage_units()

    # -----------------------------
    # Production
    # -----------------------------
    def manage_production(self) -> None:
        for city in self.nation.cities:
            if city.current_production is None:
                choice = self.decide_production()
                city.set_production(choice)
                logger.debug(f"{city.name} starts {choice}")

    def decide_production(self) -> str:
        n_cities = len(self.nation.cities)
        settlers = len(self.nation.units_of_type("SETTLER"))
        warriors = len(self.nation.units_of_type("WARRIOR"))

        if (n_cities < MAX_CITIES_BEFORE_SETTLING_STOPS and settlers == 0
                and self.personality.expansion > 0.5):
            return "SETTLER"
        if warriors < n_cities and self.personality.defense > 0.4:
            return "WARRIOR"
        return "WARRIOR"

    # -----------------------------
    # Units
    # -----------------------------
    def manage_units(self) -> None:
        for unit in list(self.nation.units):
            if self.game.get_unit(unit.unit_id) is not unit or not unit.can_move():
                continue
            if unit.can_found_city:
                self.handle_settler(unit)
            elif unit.is_combatant:
                self.handle_combat_unit(unit)

    def _reachable(self, unit: Unit):
        return self.game.valid_moves(unit)

    def is_good_city_site(self, h: Hex) -> bool:
        tile = self.game.world_map.tile_at(h)
        if tile is None or tile.terrain not in FERTILE_TERRAIN:
            return False
        return self.game.can_found_city_at(self.nation, h)

    def handle_settler(self, settler: Unit) -> None:
        if self.is_good_city_site(settler.position):
            self.game.found_city(settler)
            return

        best, best_score = None, float("-inf")
        for h in self._reachable(settler):
            score = self.score_city_site(h)
            if score > best_score:
                best, best_score = h, score
        if best is not None:
            self.game.move_unit(settler, best)

    def score_city_site(self, h: Hex) -> float:
        score = float(sum(axial_distance(h, c.position) for c in self.nation.cities))
        terrain = self.game.world_map.tile_at(h).terrain
        if terrain == TerrainType.GRASSLAND:
            score += GRASSLAND_BONUS
        elif terrain == TerrainType.PLAINS:
            score += PLAINS_BONUS
        return score

    def find_adjacent_enemy(self, unit: Unit) -> Optional[Unit]:
        for h in unit.position.neighbors():
            tile = self.game.world_map.tile_at(h)
            if tile is None:
                continue
            enemies = tile.enemy_units_of(self.nation)
            if enemies:
                return enemies[0]
        return None

    def handle_combat_unit(self, unit: Unit) -> None:
        enemy = self.find_adjacent_enemy(unit)
        if enemy is not None and unit.can_attack():
            self.game.attack_unit(unit, enemy)
            return

        best, best_score = None, float("-inf")
        for h in self._reachable(unit):
            score = self.score_move(h)
            if score > best_score:
                best, best_score = h, score
        if best is not None:
            self.game.move_unit(unit, best)

    def score_move(self, h: Hex) -> float:
        tile = self.game.world_map.tile_at(h)
        if tile.owner is None:
            score = UNOWNED_SCORE
        elif tile.owner is self.nation:
            score = OWN_TERRITORY_SCORE
        else:
            score = ENEMY_TERRITORY_SCORE * self.personality.aggression
        return score + self.rng.random() * MOVE_JITTER


def process_ai_turn(nation: "Nation", game: "GameState",
                    personality: Personality = DEFAULT_PERSONALITY) -> None:
    AIController(nation, game, personality).execute_turn()
